"""HookObserver port: events emitted while dispatching live scorers."""

from typing import Protocol


class HookObserver(Protocol):
    def scorer_skipped(self, scorer: str, run_id: str) -> None: ...

    def score_saved(self, scorer: str, run_id: str, score_id: str, score: float) -> None: ...

    def scoring_failed(self, scorer: str, run_id: str, reason: str) -> None: ...
