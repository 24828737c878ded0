"""StageExecutor: runs one stage definition against a StageContext."""

import inspect
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import TypeAdapter, ValidationError

from stepscore.config.domain.judge import JudgeConfig
from stepscore.judge.domain.factory import JudgeFactory
from stepscore.pipeline.domain.errors import NoJudgeProvidedError, SchemaValidationError
from stepscore.pipeline.domain.mock import SchemaMockGenerator
from stepscore.pipeline.domain.observer import ScoringObserver
from stepscore.pipeline.domain.run import StageContext
from stepscore.pipeline.domain.stage import (
    FunctionStage,
    GeneratedScore,
    JudgeStage,
    StageDefinition,
    StageName,
)


@dataclass(frozen=True)
class StageOutcome:
    result: Any
    prompt: str | None = None


async def _resolve(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value


def _coerce_score(value: Any) -> float:
    """Extract a numeric score from a bare number, a mapping or an object."""
    if isinstance(value, Mapping):
        value = value.get("score")
    elif not isinstance(value, (int, float)) and hasattr(value, "score"):
        value = value.score
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise SchemaValidationError(
            stage=StageName.GENERATE_SCORE.value,
            reason=f"expected a numeric score, got {type(value).__name__}",
        )
    return float(value)


class StageExecutor:
    """Executes stage definitions for a single scorer.

    Function stages are called directly. Judge stages render their prompt and
    hand it to a judge from ``judge_factory``; when no factory is supplied the
    executor runs in sandbox mode and fills the output from ``mock_generator``
    instead.
    """

    def __init__(
        self,
        scorer_name: str,
        default_judge: JudgeConfig | None,
        judge_factory: JudgeFactory | None,
        observer: ScoringObserver,
        mock_generator: SchemaMockGenerator,
        run_id: str = "",
    ) -> None:
        self._scorer_name = scorer_name
        self._default_judge = default_judge
        self._judge_factory = judge_factory
        self._observer = observer
        self._mock_generator = mock_generator
        self._run_id = run_id

    async def execute(self, stage: StageDefinition, context: StageContext) -> StageOutcome:
        match stage:
            case FunctionStage(fn=fn):
                outcome = StageOutcome(result=await _resolve(fn(context)))
            case JudgeStage():
                outcome = await self._execute_judge_stage(stage=stage, context=context)
        if stage.name is StageName.GENERATE_SCORE:
            return StageOutcome(result=_coerce_score(outcome.result), prompt=outcome.prompt)
        return outcome

    async def _execute_judge_stage(
        self, stage: JudgeStage, context: StageContext
    ) -> StageOutcome:
        prompt = await _resolve(stage.prompt.create_prompt(context))
        self._observer.stage_prompt_rendered(
            scorer=self._scorer_name,
            run_id=self._run_id,
            stage=stage.name.value,
            prompt=prompt,
        )

        schema = stage.prompt.output_schema
        if schema is None and stage.name is StageName.GENERATE_SCORE:
            schema = GeneratedScore

        if self._judge_factory is None:
            self._observer.stage_mocked(
                scorer=self._scorer_name, run_id=self._run_id, stage=stage.name.value
            )
            value = self._mock_generator.generate(schema=schema, stage=stage.name.value)
            if schema is None:
                return StageOutcome(result=value, prompt=prompt)
            return StageOutcome(
                result=_validate(stage=stage.name, schema=schema, value=value),
                prompt=prompt,
            )

        config = stage.prompt.judge or self._default_judge
        if config is None:
            raise NoJudgeProvidedError(pipeline=self._scorer_name, stage=stage.name.value)

        judge = self._judge_factory.create(
            config=config, scorer=self._scorer_name, stage=stage.name.value
        )
        response = await judge.generate(prompt=prompt, output_schema=schema)
        if schema is None:
            return StageOutcome(result=response.text, prompt=prompt)
        return StageOutcome(
            result=_validate(stage=stage.name, schema=schema, value=response.object),
            prompt=prompt,
        )


def _validate(stage: StageName, schema: Any, value: Any) -> Any:
    try:
        return TypeAdapter(schema).validate_python(value)
    except ValidationError as exc:
        raise SchemaValidationError(stage=stage.value, reason=str(exc)) from exc
