"""StructlogExperimentObserver: production observer that delegates to structlog."""

import structlog


class StructlogExperimentObserver:
    """Logs experiment events to structlog.

    Does NOT inherit from ExperimentObserver (structural typing via Protocol).
    """

    def __init__(self) -> None:
        self._log = structlog.get_logger()

    def experiment_started(
        self,
        experiment_id: str,
        total_items: int,
        scorer_names: list[str],
        concurrency: int,
    ) -> None:
        self._log.info(
            "experiment.started",
            experiment_id=experiment_id,
            total_items=total_items,
            scorer_names=scorer_names,
            concurrency=concurrency,
        )

    def experiment_completed(
        self, experiment_id: str, total_items: int, elapsed_seconds: float
    ) -> None:
        self._log.info(
            "experiment.completed",
            experiment_id=experiment_id,
            total_items=total_items,
            elapsed_seconds=round(elapsed_seconds, 2),
        )

    def experiment_progress(self, experiment_id: str, completed: int, total: int) -> None:
        self._log.info(
            "experiment.progress",
            experiment_id=experiment_id,
            completed=completed,
            total=total,
            percent=round(100.0 * completed / total, 1) if total else 0.0,
        )

    def item_started(self, experiment_id: str, item_index: int) -> None:
        self._log.info(
            "experiment.item.started", experiment_id=experiment_id, item_index=item_index
        )

    def item_completed(self, experiment_id: str, item_index: int) -> None:
        self._log.info(
            "experiment.item.completed", experiment_id=experiment_id, item_index=item_index
        )

    def item_failed(self, experiment_id: str, item_index: int, reason: str) -> None:
        self._log.error(
            "experiment.item.failed",
            experiment_id=experiment_id,
            item_index=item_index,
            reason=reason,
        )
