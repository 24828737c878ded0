"""ScoreRow: one persisted scorer outcome."""

from datetime import datetime
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict


class ScoringSource(StrEnum):
    LIVE = "LIVE"
    TEST = "TEST"


class EntityType(StrEnum):
    AGENT = "AGENT"
    WORKFLOW = "WORKFLOW"


class ScoreRow(BaseModel, frozen=True):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    id: str
    run_id: str
    scorer_id: str
    entity_id: str
    entity_type: EntityType
    source: ScoringSource
    score: float
    reason: Any = None
    input: Any = None
    output: Any = None

    preprocess_step_result: Any = None
    preprocess_prompt: str | None = None
    analyze_step_result: Any = None
    analyze_prompt: str | None = None
    generate_score_step_result: float | None = None
    generate_score_prompt: str | None = None
    generate_reason_step_result: Any = None
    generate_reason_prompt: str | None = None

    runtime_context: dict[str, Any] | None = None
    metadata: dict[str, Any] | None = None
    trace_id: str | None = None
    resource_id: str | None = None
    thread_id: str | None = None
    created_at: datetime
    updated_at: datetime
