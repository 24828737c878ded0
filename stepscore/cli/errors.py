"""Errors raised by the CLI while wiring an experiment together."""

from stepscore.core.errors import ErrorKind, StepScoreError


class ObjectResolutionError(StepScoreError):
    """Raised when a "module:attribute" reference cannot be imported."""

    kind = ErrorKind.OBJECT_RESOLUTION_FAILED

    def __init__(self, ref: str, reason: str) -> None:
        self.ref = ref
        super().__init__(f"Failed to resolve '{ref}': {reason}")
