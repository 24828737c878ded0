"""Scorer port and scorer configuration shapes accepted by an experiment."""

from typing import Any, Protocol

from pydantic import BaseModel, ConfigDict, Field

from stepscore.pipeline.domain.run import ScoringRun


class Scorer(Protocol):
    """Anything with a name that scores a ScoringRun.

    The result must expose ``score`` either as a mapping key or an attribute.
    """

    @property
    def name(self) -> str: ...

    async def run(self, run: ScoringRun) -> Any: ...


class WorkflowScorerConfig(BaseModel, frozen=True):
    """Scorers for a workflow target: ``workflow`` scorers see the whole
    output, ``steps`` scorers see one step's payload and output."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    workflow: list[Any] = Field(default_factory=list)
    steps: dict[str, list[Any]] = Field(default_factory=dict)
