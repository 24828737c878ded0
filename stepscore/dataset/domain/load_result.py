"""DatasetLoadResult: the loaded items plus an integrity hash of the source file."""

from pydantic import BaseModel, Field

from stepscore.dataset.domain.item import DataItem


class DatasetLoadResult(BaseModel, frozen=True):
    """Immutable value object returned by a DatasetLoader.

    ``sha256`` is the hex digest of the raw file bytes, so an experiment
    result can be traced back to the exact dataset version it ran on.
    """

    items: list[DataItem]
    sha256: str = Field(min_length=1)
