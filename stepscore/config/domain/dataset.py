"""Dataset configuration model."""

from pathlib import Path

from pydantic import BaseModel, Field


class DatasetConfig(BaseModel, frozen=True):
    path: Path
    input_key: str = Field(default="input", min_length=1)
    ground_truth_key: str | None = "ground_truth"
