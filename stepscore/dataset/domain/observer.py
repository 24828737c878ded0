"""Observer port for the dataset domain: defines events in domain language."""

from typing import Protocol


class DatasetObserver(Protocol):
    def dataset_loading_started(self, path: str, input_key: str) -> None: ...

    def dataset_item_loaded(self, line_number: int) -> None: ...

    def dataset_loading_completed(self, path: str, total_items: int) -> None: ...

    def dataset_loading_failed(self, path: str, reason: str) -> None: ...
