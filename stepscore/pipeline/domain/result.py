"""ScoringResult: the final record of one pipeline run."""

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from stepscore.pipeline.domain.run import ScoringRun


class ScoringResult(BaseModel):
    """Immutable record built fresh by every ScoringRunner.run() call.

    Field aliases are camelCase (``generateScoreStepResult``, ``analyzePrompt``)
    so ``model_dump(by_alias=True)`` matches the accumulated-results keys.
    """

    model_config = ConfigDict(
        frozen=True,
        arbitrary_types_allowed=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    run: ScoringRun
    run_id: str
    score: float
    reason: Any = None

    preprocess_step_result: Any = None
    preprocess_prompt: str | None = None
    analyze_step_result: Any = None
    analyze_prompt: str | None = None
    generate_score_step_result: float | None = None
    generate_score_prompt: str | None = None
    generate_reason_step_result: Any = None
    generate_reason_prompt: str | None = None
