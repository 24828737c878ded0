"""ScoringObserver port: events emitted while a scoring pipeline runs."""

from typing import Protocol


class ScoringObserver(Protocol):
    def scoring_started(self, scorer: str, run_id: str, stages: list[str]) -> None: ...

    def scoring_completed(self, scorer: str, run_id: str, score: float) -> None: ...

    def stage_started(self, scorer: str, run_id: str, stage: str, kind: str) -> None: ...

    def stage_prompt_rendered(
        self, scorer: str, run_id: str, stage: str, prompt: str
    ) -> None: ...

    def stage_mocked(self, scorer: str, run_id: str, stage: str) -> None: ...

    def stage_completed(
        self, scorer: str, run_id: str, stage: str, duration_ms: int
    ) -> None: ...

    def stage_failed(self, scorer: str, run_id: str, stage: str, reason: str) -> None: ...
