"""JudgeObserver port: domain events emitted during judge invocations."""

from typing import Protocol


class JudgeObserver(Protocol):
    """Observer port for judge domain events.

    Implementations may log to structlog, record for tests, or emit metrics.
    """

    def judge_generation_started(self, scorer: str, stage: str, model: str) -> None: ...

    def judge_generation_completed(
        self, scorer: str, stage: str, duration_ms: int
    ) -> None: ...

    def judge_generation_failed(self, scorer: str, stage: str, reason: str) -> None: ...

    def judge_high_temperature_warned(
        self, scorer: str, stage: str, temperature: float
    ) -> None: ...
