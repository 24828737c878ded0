"""ScoreStorage Protocol: where live scoring results are persisted."""

from typing import Protocol

from stepscore.storage.domain.pagination import PaginatedScores, StoragePagination
from stepscore.storage.domain.score_row import EntityType, ScoreRow, ScoringSource


class ScoreStorage(Protocol):
    """Structural interface for score persistence backends.

    Lookups return newest rows first.
    """

    async def save_score(self, row: ScoreRow) -> ScoreRow: ...

    async def get_score_by_id(self, id: str) -> ScoreRow | None: ...

    async def get_scores_by_run_id(
        self, run_id: str, pagination: StoragePagination | None = None
    ) -> PaginatedScores: ...

    async def get_scores_by_scorer_id(
        self,
        scorer_id: str,
        pagination: StoragePagination | None = None,
        entity_id: str | None = None,
        entity_type: EntityType | None = None,
        source: ScoringSource | None = None,
    ) -> PaginatedScores: ...

    async def get_scores_by_entity_id(
        self,
        entity_id: str,
        entity_type: EntityType,
        pagination: StoragePagination | None = None,
    ) -> PaginatedScores: ...
