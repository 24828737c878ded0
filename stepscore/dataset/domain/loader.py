"""DatasetLoader Protocol: structural interface for loading dataset items."""

from typing import Protocol

from stepscore.config.domain.dataset import DatasetConfig
from stepscore.dataset.domain.load_result import DatasetLoadResult


class DatasetLoader(Protocol):
    def load(self, config: DatasetConfig) -> DatasetLoadResult: ...
