"""Error types raised by dataset infrastructure."""

from stepscore.core.errors import ErrorKind, StepScoreError


class DatasetLoadError(StepScoreError):
    """Raised when a JSONL dataset cannot be loaded or is malformed."""

    kind = ErrorKind.DATASET_LOAD_FAILED

    def __init__(self, reason: str) -> None:
        super().__init__(f"Failed to load dataset: {reason}")
