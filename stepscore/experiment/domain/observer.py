"""ExperimentObserver port: events emitted while an experiment runs."""

from typing import Protocol


class ExperimentObserver(Protocol):
    def experiment_started(
        self, experiment_id: str, total_items: int, scorer_names: list[str], concurrency: int
    ) -> None: ...

    def experiment_completed(
        self, experiment_id: str, total_items: int, elapsed_seconds: float
    ) -> None: ...

    def experiment_progress(self, experiment_id: str, completed: int, total: int) -> None: ...

    def item_started(self, experiment_id: str, item_index: int) -> None: ...

    def item_completed(self, experiment_id: str, item_index: int) -> None: ...

    def item_failed(self, experiment_id: str, item_index: int, reason: str) -> None: ...
