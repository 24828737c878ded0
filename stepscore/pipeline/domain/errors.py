"""Error types raised while building or running a scoring pipeline."""

from stepscore.core.errors import ErrorKind, StepScoreError


class OrderingViolationError(StepScoreError):
    """Raised at build time when generateReason is added before generateScore."""

    kind = ErrorKind.ORDERING_VIOLATION

    def __init__(self, pipeline: str) -> None:
        self.pipeline = pipeline
        super().__init__(
            f"Failed to build pipeline '{pipeline}': "
            "generate_reason() can only be added after generate_score()"
        )


class DuplicateStageError(StepScoreError):
    """Raised at build time when a stage name is registered twice."""

    kind = ErrorKind.DUPLICATE_STAGE

    def __init__(self, pipeline: str, stage: str) -> None:
        self.pipeline = pipeline
        self.stage = stage
        super().__init__(
            f"Failed to build pipeline '{pipeline}': stage '{stage}' is already registered"
        )


class InvalidStageDefinitionError(StepScoreError):
    """Raised at build time when a stage definition is neither a callable nor a usable PromptStep."""

    kind = ErrorKind.INVALID_STAGE_DEFINITION

    def __init__(self, pipeline: str, stage: str, reason: str) -> None:
        self.pipeline = pipeline
        self.stage = stage
        super().__init__(
            f"Failed to build pipeline '{pipeline}': invalid '{stage}' stage: {reason}"
        )


class MissingScoreStageError(StepScoreError):
    kind = ErrorKind.MISSING_SCORE_STAGE

    def __init__(self, pipeline: str, stages: list[str]) -> None:
        self.pipeline = pipeline
        super().__init__(
            f"Failed to run pipeline '{pipeline}': no generateScore stage "
            f"(registered stages: [{', '.join(stages)}])"
        )


class MissingScoreForReasonError(StepScoreError):
    kind = ErrorKind.MISSING_SCORE_FOR_REASON

    def __init__(self, pipeline: str) -> None:
        self.pipeline = pipeline
        super().__init__(
            f"Failed to run pipeline '{pipeline}': generateReason requires a score "
            "from generateScore"
        )


class NoJudgeProvidedError(StepScoreError):
    """Raised when a judge-delegated stage has neither a stage nor a pipeline judge."""

    kind = ErrorKind.NO_JUDGE_PROVIDED

    def __init__(self, pipeline: str, stage: str) -> None:
        self.pipeline = pipeline
        self.stage = stage
        super().__init__(
            f"Failed to run pipeline '{pipeline}': no judge provided for stage '{stage}'"
        )


class SchemaValidationError(StepScoreError):
    """Raised when a stage result does not conform to its declared output schema."""

    kind = ErrorKind.SCHEMA_VALIDATION_FAILED

    def __init__(self, stage: str, reason: str) -> None:
        self.stage = stage
        super().__init__(f"Failed to validate '{stage}' output: {reason}")


class StageExecutionError(StepScoreError):
    """Wraps any failure raised while a stage executes; the cause is chained."""

    kind = ErrorKind.STAGE_EXECUTION_FAILED

    def __init__(self, pipeline: str, stage: str, reason: str) -> None:
        self.pipeline = pipeline
        self.stage = stage
        super().__init__(
            f"Failed to execute stage '{stage}' of pipeline '{pipeline}': {reason}"
        )
