"""Pagination request and response shapes for score lookups."""

from pydantic import BaseModel, Field

from stepscore.storage.domain.score_row import ScoreRow


class StoragePagination(BaseModel, frozen=True):
    page: int = Field(default=0, ge=0)
    per_page: int = Field(default=100, ge=1)


class PaginationInfo(BaseModel, frozen=True):
    total: int
    page: int
    per_page: int
    has_more: bool


class PaginatedScores(BaseModel, frozen=True):
    pagination: PaginationInfo
    scores: list[ScoreRow]
