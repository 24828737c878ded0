"""Error types raised by judge infrastructure."""

from stepscore.core.errors import ErrorKind, StepScoreError


class JudgeInvocationError(StepScoreError):
    """Raised when the judge cannot be invoked or returns an unparseable response."""

    kind = ErrorKind.JUDGE_INVOCATION_FAILED

    def __init__(self, reason: str) -> None:
        super().__init__(f"Failed to invoke judge: {reason}")
