"""Structlog implementation of the DatasetObserver port."""

import structlog


class StructlogDatasetObserver:
    """Delegates dataset domain events to structlog.

    Satisfies the DatasetObserver protocol structurally.
    """

    def __init__(self) -> None:
        self._log = structlog.get_logger()

    def dataset_loading_started(self, path: str, input_key: str) -> None:
        self._log.info("dataset.loading_started", path=path, input_key=input_key)

    def dataset_item_loaded(self, line_number: int) -> None:
        self._log.debug("dataset.item_loaded", line_number=line_number)

    def dataset_loading_completed(self, path: str, total_items: int) -> None:
        self._log.info(
            "dataset.loading_completed", path=path, total_items=total_items
        )

    def dataset_loading_failed(self, path: str, reason: str) -> None:
        self._log.error("dataset.loading_failed", path=path, reason=reason)
