"""ProgressExperimentObserver: renders a Rich progress bar for an experiment on stderr."""

from rich.console import Console
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    TaskID,
    TextColumn,
    TimeElapsedColumn,
    TimeRemainingColumn,
)


class ProgressExperimentObserver:
    """Shows one bar that tracks finished items, plus the in-flight count.

    Only experiment_started, item_started, experiment_progress, item_failed and
    experiment_completed touch the display.

    Pass ``disabled=True`` to suppress all terminal output (useful in tests).

    Does NOT inherit from ExperimentObserver (structural typing via Protocol).
    """

    def __init__(self, disabled: bool = False) -> None:
        self._disabled = disabled
        self._done = 0
        self._inflight = 0
        self._total = 0
        self._progress: Progress | None = None
        self._task_id: TaskID | None = None

    @property
    def done(self) -> int:
        return self._done

    @property
    def inflight(self) -> int:
        return self._inflight

    def _update(self) -> None:
        if self._progress is None or self._task_id is None:
            return
        self._progress.update(
            self._task_id, completed=self._done, inflight=self._inflight
        )

    def experiment_started(
        self,
        experiment_id: str,
        total_items: int,
        scorer_names: list[str],
        concurrency: int,
    ) -> None:
        self._done = 0
        self._inflight = 0
        self._total = total_items
        self._progress = None
        self._task_id = None

        if self._disabled:
            return

        self._progress = Progress(
            TextColumn("[bold]{task.description}[/bold]"),
            BarColumn(bar_width=40),
            MofNCompleteColumn(),
            TextColumn("[grey50]+{task.fields[inflight]} in-flight[/grey50]"),
            TimeElapsedColumn(),
            TimeRemainingColumn(),
            console=Console(stderr=True),
            refresh_per_second=10,
        )
        self._task_id = self._progress.add_task(
            description="Scoring", total=float(total_items), inflight=0
        )
        self._progress.start()

    def experiment_completed(
        self, experiment_id: str, total_items: int, elapsed_seconds: float
    ) -> None:
        if self._progress is not None:
            self._progress.stop()
        self._progress = None
        self._task_id = None

    def experiment_progress(self, experiment_id: str, completed: int, total: int) -> None:
        self._done = completed
        self._inflight = max(0, self._inflight - 1)
        self._update()

    def item_started(self, experiment_id: str, item_index: int) -> None:
        self._inflight += 1
        self._update()

    def item_completed(self, experiment_id: str, item_index: int) -> None:
        pass

    def item_failed(self, experiment_id: str, item_index: int, reason: str) -> None:
        # The experiment aborts on the first failure.
        self._inflight = max(0, self._inflight - 1)
        if self._progress is not None:
            self._progress.stop()
        self._progress = None
        self._task_id = None
