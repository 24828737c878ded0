"""Error types raised by config infrastructure."""

from pathlib import Path

from stepscore.core.errors import ErrorKind, StepScoreError


class MissingEnvVarsError(StepScoreError):
    """Raised when the config references environment variables that are not set."""

    kind = ErrorKind.MISSING_ENV_VARS

    def __init__(self, missing_vars: list[str]) -> None:
        self.missing_vars = missing_vars
        var_list = ", ".join(sorted(missing_vars))
        super().__init__(
            f"Failed to load config: missing environment variables: {var_list}"
        )


class ConfigValidationError(StepScoreError):
    """Raised when the loaded config does not satisfy the ExperimentConfig schema."""

    kind = ErrorKind.CONFIG_VALIDATION_FAILED

    def __init__(self, reason: str) -> None:
        super().__init__(f"Failed to validate config: {reason}")


class ConfigLoadError(StepScoreError):
    """Raised when the config file cannot be opened or parsed."""

    kind = ErrorKind.CONFIG_LOAD_FAILED

    def __init__(self, path: Path, reason: str = "file not found") -> None:
        self.path = path
        super().__init__(f"Failed to load config: {reason}: {path}")
