"""Structlog implementation of the JudgeObserver port."""

import structlog


class StructlogJudgeObserver:
    """Delegates judge domain events to structlog.

    Satisfies the JudgeObserver protocol structurally.
    """

    def __init__(self) -> None:
        self._log = structlog.get_logger()

    def judge_generation_started(self, scorer: str, stage: str, model: str) -> None:
        self._log.info(
            "judge.generation_started", scorer=scorer, stage=stage, model=model
        )

    def judge_generation_completed(
        self, scorer: str, stage: str, duration_ms: int
    ) -> None:
        self._log.info(
            "judge.generation_completed",
            scorer=scorer,
            stage=stage,
            duration_ms=duration_ms,
        )

    def judge_generation_failed(self, scorer: str, stage: str, reason: str) -> None:
        self._log.error(
            "judge.generation_failed", scorer=scorer, stage=stage, reason=reason
        )

    def judge_high_temperature_warned(
        self, scorer: str, stage: str, temperature: float
    ) -> None:
        self._log.warning(
            "judge.high_temperature_warned",
            scorer=scorer,
            stage=stage,
            temperature=temperature,
        )
