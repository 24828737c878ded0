"""ScorerPipeline: immutable builder that registers the stages of a scorer."""

from dataclasses import dataclass
from typing import Any

from stepscore.config.domain.judge import JudgeConfig
from stepscore.pipeline.domain.errors import (
    DuplicateStageError,
    InvalidStageDefinitionError,
    OrderingViolationError,
)
from stepscore.pipeline.domain.stage import (
    EXECUTION_ORDER,
    FunctionStage,
    JudgeStage,
    PromptStep,
    StageDefinition,
    StageName,
)

# Stages whose judge output feeds later stages and therefore needs a schema.
_SCHEMA_REQUIRED: frozenset[StageName] = frozenset(
    {StageName.PREPROCESS, StageName.ANALYZE}
)


@dataclass(frozen=True)
class StageInfo:
    name: str
    type: str
    description: str


@dataclass(frozen=True)
class PipelineMetadata:
    name: str
    description: str
    steps: list[StageInfo]
    step_count: int
    has_generate_score: bool


class ScorerPipeline:
    """An ordered set of stage definitions for one scorer.

    Every stage method returns a new pipeline; the receiver is never modified,
    so a partially-built pipeline can be shared and extended in several ways.
    """

    def __init__(
        self,
        name: str,
        description: str = "",
        judge: JudgeConfig | None = None,
        stages: dict[StageName, StageDefinition] | None = None,
    ) -> None:
        self._name = name
        self._description = description
        self._judge = judge
        self._stages: dict[StageName, StageDefinition] = dict(stages or {})

    @property
    def name(self) -> str:
        return self._name

    @property
    def description(self) -> str:
        return self._description

    @property
    def judge(self) -> JudgeConfig | None:
        return self._judge

    @property
    def stages(self) -> list[StageDefinition]:
        """Registered stages in execution order."""
        return [self._stages[name] for name in EXECUTION_ORDER if name in self._stages]

    @property
    def has_generate_score(self) -> bool:
        return StageName.GENERATE_SCORE in self._stages

    def preprocess(self, definition: Any) -> "ScorerPipeline":
        return self._with_stage(StageName.PREPROCESS, definition)

    def analyze(self, definition: Any) -> "ScorerPipeline":
        return self._with_stage(StageName.ANALYZE, definition)

    def generate_score(self, definition: Any) -> "ScorerPipeline":
        return self._with_stage(StageName.GENERATE_SCORE, definition)

    def generate_reason(self, definition: Any) -> "ScorerPipeline":
        if not self.has_generate_score:
            raise OrderingViolationError(pipeline=self._name)
        return self._with_stage(StageName.GENERATE_REASON, definition)

    def describe(self) -> PipelineMetadata:
        steps = [
            StageInfo(name=stage.name.value, type=stage.kind.value, description=stage.description)
            for stage in self.stages
        ]
        return PipelineMetadata(
            name=self._name,
            description=self._description,
            steps=steps,
            step_count=len(steps),
            has_generate_score=self.has_generate_score,
        )

    def _with_stage(self, name: StageName, definition: Any) -> "ScorerPipeline":
        if name in self._stages:
            raise DuplicateStageError(pipeline=self._name, stage=name.value)
        stages = dict(self._stages)
        stages[name] = self._classify(name, definition)
        return ScorerPipeline(
            name=self._name,
            description=self._description,
            judge=self._judge,
            stages=stages,
        )

    def _classify(self, name: StageName, definition: Any) -> StageDefinition:
        if isinstance(definition, PromptStep):
            if not callable(definition.create_prompt):
                raise InvalidStageDefinitionError(
                    pipeline=self._name,
                    stage=name.value,
                    reason="create_prompt must be callable",
                )
            if name in _SCHEMA_REQUIRED and definition.output_schema is None:
                raise InvalidStageDefinitionError(
                    pipeline=self._name,
                    stage=name.value,
                    reason="prompt steps for this stage require an output_schema",
                )
            return JudgeStage(name=name, prompt=definition)
        if callable(definition):
            return FunctionStage(name=name, fn=definition)
        raise InvalidStageDefinitionError(
            pipeline=self._name,
            stage=name.value,
            reason=f"expected a callable or PromptStep, got {type(definition).__name__}",
        )


def create_scorer(
    name: str, description: str = "", judge: JudgeConfig | None = None
) -> ScorerPipeline:
    """Start a new, empty scorer pipeline."""
    return ScorerPipeline(name=name, description=description, judge=judge)
