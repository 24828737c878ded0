"""StructlogScoringObserver: production observer that delegates to structlog."""

import structlog


class StructlogScoringObserver:
    """Logs scoring pipeline events to structlog.

    Does NOT inherit from ScoringObserver (structural typing via Protocol).
    """

    def __init__(self) -> None:
        self._log = structlog.get_logger()

    def scoring_started(self, scorer: str, run_id: str, stages: list[str]) -> None:
        self._log.info("scoring.started", scorer=scorer, run_id=run_id, stages=stages)

    def scoring_completed(self, scorer: str, run_id: str, score: float) -> None:
        self._log.info("scoring.completed", scorer=scorer, run_id=run_id, score=score)

    def stage_started(self, scorer: str, run_id: str, stage: str, kind: str) -> None:
        self._log.info(
            "scoring.stage.started", scorer=scorer, run_id=run_id, stage=stage, kind=kind
        )

    def stage_prompt_rendered(
        self, scorer: str, run_id: str, stage: str, prompt: str
    ) -> None:
        self._log.debug(
            "scoring.stage.prompt_rendered",
            scorer=scorer,
            run_id=run_id,
            stage=stage,
            prompt_length=len(prompt),
        )

    def stage_mocked(self, scorer: str, run_id: str, stage: str) -> None:
        self._log.warning(
            "scoring.stage.mocked", scorer=scorer, run_id=run_id, stage=stage
        )

    def stage_completed(
        self, scorer: str, run_id: str, stage: str, duration_ms: int
    ) -> None:
        self._log.info(
            "scoring.stage.completed",
            scorer=scorer,
            run_id=run_id,
            stage=stage,
            duration_ms=duration_ms,
        )

    def stage_failed(self, scorer: str, run_id: str, stage: str, reason: str) -> None:
        self._log.error(
            "scoring.stage.failed", scorer=scorer, run_id=run_id, stage=stage, reason=reason
        )
