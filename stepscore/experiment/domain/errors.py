"""Errors raised while validating or running an experiment."""

from stepscore.core.errors import ErrorKind, StepScoreError
from stepscore.dataset.domain.item import DataItem


class NoDataProvidedError(StepScoreError):
    kind = ErrorKind.NO_DATA_PROVIDED

    def __init__(self) -> None:
        super().__init__("Failed to run experiment: no data provided")


class NoScorersProvidedError(StepScoreError):
    kind = ErrorKind.NO_SCORERS_PROVIDED

    def __init__(self) -> None:
        super().__init__("Failed to run experiment: no scorers provided")


class InvalidDataItemError(StepScoreError):
    kind = ErrorKind.INVALID_DATA_ITEM

    def __init__(self, index: int, reason: str) -> None:
        self.index = index
        super().__init__(f"Failed to run experiment: data item {index} is invalid: {reason}")


class InvalidScorerConfigurationError(StepScoreError):
    kind = ErrorKind.INVALID_SCORER_CONFIGURATION

    def __init__(self, reason: str) -> None:
        super().__init__(f"Failed to run experiment: invalid scorer configuration: {reason}")


class TargetExecutionError(StepScoreError):
    """Raised when the target fails for a dataset item; carries the item."""

    kind = ErrorKind.TARGET_EXECUTION_FAILED

    def __init__(self, item: DataItem, reason: str) -> None:
        self.item = item
        super().__init__(
            f"Failed to execute target for item with input {item.input!r}: {reason}"
        )


class ScorerExecutionError(StepScoreError):
    """Raised when a scorer fails; ``step`` is set for step-scoped scorers."""

    kind = ErrorKind.SCORER_EXECUTION_FAILED

    def __init__(self, scorer: str, reason: str, step: str | None = None) -> None:
        self.scorer = scorer
        self.step = step
        where = f" on step '{step}'" if step is not None else ""
        super().__init__(f"Failed to run scorer '{scorer}'{where}: {reason}")
