"""JSONL dataset loader: reads a dataset file and returns typed DataItem objects."""

import hashlib
import json
from typing import Any

from stepscore.config.domain.dataset import DatasetConfig
from stepscore.dataset.domain.item import DataItem
from stepscore.dataset.domain.load_result import DatasetLoadResult
from stepscore.dataset.domain.observer import DatasetObserver
from stepscore.dataset.infrastructure.errors import DatasetLoadError

_RUNTIME_CONTEXT_KEY = "runtime_context"


class JsonlDatasetLoader:
    """Loads a JSONL dataset file into DataItem value objects."""

    def __init__(self, observer: DatasetObserver) -> None:
        self._observer = observer

    def load(self, config: DatasetConfig) -> DatasetLoadResult:
        """
        Load every item from the JSONL file described by config.

        Collects ALL per-line errors before raising a single DatasetLoadError
        listing every issue found. Blank lines are skipped.

        Raises:
            DatasetLoadError: if the file is not found, any line is invalid JSON
                or not an object, or any line is missing the configured input key.
        """
        path_str = str(config.path)
        self._observer.dataset_loading_started(
            path=path_str, input_key=config.input_key
        )

        try:
            raw = config.path.read_bytes()
        except FileNotFoundError:
            reason = f"file not found: {path_str}"
            self._observer.dataset_loading_failed(path=path_str, reason=reason)
            raise DatasetLoadError(reason=reason)

        items: list[DataItem] = []
        errors: list[str] = []
        for line_number, line in enumerate(raw.decode("utf-8").splitlines(), 1):
            if not line.strip():
                continue
            result = self._parse_line(line=line, line_number=line_number, config=config)
            if isinstance(result, str):
                errors.append(result)
            else:
                items.append(result)
                self._observer.dataset_item_loaded(line_number=line_number)

        if errors:
            reason = "; ".join(errors)
            self._observer.dataset_loading_failed(path=path_str, reason=reason)
            raise DatasetLoadError(reason=reason)

        self._observer.dataset_loading_completed(path=path_str, total_items=len(items))
        return DatasetLoadResult(items=items, sha256=hashlib.sha256(raw).hexdigest())

    def _parse_line(
        self, line: str, line_number: int, config: DatasetConfig
    ) -> DataItem | str:
        """Return a DataItem on success, or an error string describing the problem."""
        try:
            data: Any = json.loads(line)
        except json.JSONDecodeError as exc:
            return f"line {line_number}: invalid JSON: {exc}"

        if not isinstance(data, dict):
            return f"line {line_number}: expected a JSON object"
        if config.input_key not in data:
            return f"line {line_number}: missing key '{config.input_key}'"

        runtime_context = data.get(_RUNTIME_CONTEXT_KEY)
        if runtime_context is not None and not isinstance(runtime_context, dict):
            return f"line {line_number}: '{_RUNTIME_CONTEXT_KEY}' must be an object"

        ground_truth = (
            data.get(config.ground_truth_key) if config.ground_truth_key else None
        )
        return DataItem(
            input=data[config.input_key],
            ground_truth=ground_truth,
            runtime_context=runtime_context,
        )
