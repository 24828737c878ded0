"""ScoringRun and StageContext: the input to a pipeline and what each stage sees."""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict


class ScoringRun(BaseModel):
    """The unit of work handed to a scoring pipeline. Never mutated by stages."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    run_id: str | None = None
    input: Any = None
    output: Any
    ground_truth: Any = None
    runtime_context: dict[str, Any] | None = None
    tracing_context: Any = None


@dataclass(frozen=True)
class StageContext:
    """Read-only view passed to a stage function or prompt renderer.

    ``results`` holds only what earlier stages produced, keyed by
    ``<stage>StepResult`` and ``<stage>Prompt``. ``score`` is set for
    generateReason only.
    """

    run: ScoringRun
    results: Mapping[str, Any]
    score: float | None = None
