"""Experiment report: the JSON document written after a CLI run."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel

from stepscore.config.domain.config import ExperimentConfig
from stepscore.experiment.domain.result import ExperimentResult, ItemCompletion


def to_jsonable(value: Any) -> Any:
    """Convert models and containers into plain JSON-compatible values."""
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True)
    if isinstance(value, Mapping):
        return {str(key): to_jsonable(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_jsonable(item) for item in value]
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    return str(value)


@dataclass
class ItemRecorder:
    """Collects per-item completions; pass ``record`` as the completion callback."""

    items: list[ItemCompletion] = field(default_factory=list)

    async def record(self, completion: ItemCompletion) -> None:
        self.items.append(completion)


def build_report(
    experiment_id: str,
    config: ExperimentConfig,
    dataset_sha256: str,
    result: ExperimentResult,
    items: list[ItemCompletion],
) -> dict[str, Any]:
    return {
        "schema_version": "1",
        "experiment_id": experiment_id,
        "created_at": datetime.now(UTC).isoformat(),
        "experiment": {"name": config.name, "version": config.version},
        "dataset": {"path": str(config.dataset.path), "sha256": dataset_sha256},
        "execution": config.execution.model_dump(mode="json"),
        "target": config.target,
        "scores": result.scores,
        "summary": result.summary.model_dump(mode="json"),
        "items": [
            {
                "input": to_jsonable(completion.item.input),
                "ground_truth": to_jsonable(completion.item.ground_truth),
                "output": to_jsonable(completion.target_result.scoring_data.output),
                "scorer_results": to_jsonable(completion.scorer_results),
            }
            for completion in items
        ],
    }
