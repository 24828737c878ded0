"""ScoringHookInput and ScorerEntry: what a live scoring hook receives."""

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from stepscore.sampling.domain.sampling import SamplingConfig
from stepscore.storage.domain.score_row import EntityType, ScoringSource


class ScorerEntry(BaseModel, frozen=True):
    """A scorer attached to an agent or workflow, with its sampling policy."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    scorer: Any
    sampling: SamplingConfig | None = None


class ScoringHookInput(BaseModel, frozen=True):
    """One finished generation to score. ``entity`` must carry an ``id``, checked on construction."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    run_id: str
    input: Any = None
    output: Any = None
    source: ScoringSource = ScoringSource.LIVE
    entity: dict[str, Any]
    entity_type: EntityType
    runtime_context: dict[str, Any] | None = None
    tracing_context: Any = None
    trace_id: str | None = None
    resource_id: str | None = None
    thread_id: str | None = None
    metadata: dict[str, Any] | None = None

    @field_validator("entity")
    @classmethod
    def entity_has_id(cls, entity: dict[str, Any]) -> dict[str, Any]:
        if entity.get("id") is None:
            raise ValueError("entity must carry an 'id'")
        return entity
