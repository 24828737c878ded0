"""CompositeExperimentObserver: fans out all events to a list of observers."""

from stepscore.experiment.domain.observer import ExperimentObserver


class CompositeExperimentObserver:
    """Delegates every observer event to each observer in order.

    Does NOT inherit from ExperimentObserver (structural typing via Protocol).
    """

    def __init__(self, observers: list[ExperimentObserver]) -> None:
        self._observers = observers

    def experiment_started(
        self,
        experiment_id: str,
        total_items: int,
        scorer_names: list[str],
        concurrency: int,
    ) -> None:
        for obs in self._observers:
            obs.experiment_started(
                experiment_id=experiment_id,
                total_items=total_items,
                scorer_names=scorer_names,
                concurrency=concurrency,
            )

    def experiment_completed(
        self, experiment_id: str, total_items: int, elapsed_seconds: float
    ) -> None:
        for obs in self._observers:
            obs.experiment_completed(
                experiment_id=experiment_id,
                total_items=total_items,
                elapsed_seconds=elapsed_seconds,
            )

    def experiment_progress(self, experiment_id: str, completed: int, total: int) -> None:
        for obs in self._observers:
            obs.experiment_progress(
                experiment_id=experiment_id, completed=completed, total=total
            )

    def item_started(self, experiment_id: str, item_index: int) -> None:
        for obs in self._observers:
            obs.item_started(experiment_id=experiment_id, item_index=item_index)

    def item_completed(self, experiment_id: str, item_index: int) -> None:
        for obs in self._observers:
            obs.item_completed(experiment_id=experiment_id, item_index=item_index)

    def item_failed(self, experiment_id: str, item_index: int, reason: str) -> None:
        for obs in self._observers:
            obs.item_failed(
                experiment_id=experiment_id, item_index=item_index, reason=reason
            )
