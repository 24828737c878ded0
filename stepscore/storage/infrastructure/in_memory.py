"""InMemoryScoreStorage: process-local ScoreStorage for tests and single-process use."""

from collections.abc import Callable

from stepscore.storage.domain.pagination import (
    PaginatedScores,
    PaginationInfo,
    StoragePagination,
)
from stepscore.storage.domain.score_row import EntityType, ScoreRow, ScoringSource


def _paginate(rows: list[ScoreRow], pagination: StoragePagination | None) -> PaginatedScores:
    pagination = pagination or StoragePagination()
    ordered = sorted(rows, key=lambda row: row.created_at, reverse=True)
    start = pagination.page * pagination.per_page
    return PaginatedScores(
        pagination=PaginationInfo(
            total=len(ordered),
            page=pagination.page,
            per_page=pagination.per_page,
            has_more=len(ordered) > (pagination.page + 1) * pagination.per_page,
        ),
        scores=ordered[start : start + pagination.per_page],
    )


class InMemoryScoreStorage:
    """Keeps score rows in a dict keyed by id. Saving an existing id replaces it.

    Does NOT inherit from ScoreStorage (structural typing via Protocol).
    """

    def __init__(self) -> None:
        self._rows: dict[str, ScoreRow] = {}

    async def save_score(self, row: ScoreRow) -> ScoreRow:
        self._rows[row.id] = row
        return row

    async def get_score_by_id(self, id: str) -> ScoreRow | None:
        return self._rows.get(id)

    async def get_scores_by_run_id(
        self, run_id: str, pagination: StoragePagination | None = None
    ) -> PaginatedScores:
        return _paginate(self._select(lambda row: row.run_id == run_id), pagination)

    async def get_scores_by_scorer_id(
        self,
        scorer_id: str,
        pagination: StoragePagination | None = None,
        entity_id: str | None = None,
        entity_type: EntityType | None = None,
        source: ScoringSource | None = None,
    ) -> PaginatedScores:
        def matches(row: ScoreRow) -> bool:
            return (
                row.scorer_id == scorer_id
                and (entity_id is None or row.entity_id == entity_id)
                and (entity_type is None or row.entity_type == entity_type)
                and (source is None or row.source == source)
            )

        return _paginate(self._select(matches), pagination)

    async def get_scores_by_entity_id(
        self,
        entity_id: str,
        entity_type: EntityType,
        pagination: StoragePagination | None = None,
    ) -> PaginatedScores:
        return _paginate(
            self._select(
                lambda row: row.entity_id == entity_id and row.entity_type == entity_type
            ),
            pagination,
        )

    def _select(self, predicate: Callable[[ScoreRow], bool]) -> list[ScoreRow]:
        return [row for row in self._rows.values() if predicate(row)]
