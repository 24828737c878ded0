"""StructlogHookObserver: production observer that delegates to structlog."""

import structlog


class StructlogHookObserver:
    """Logs live scoring hook events to structlog.

    Does NOT inherit from HookObserver (structural typing via Protocol).
    """

    def __init__(self) -> None:
        self._log = structlog.get_logger()

    def scorer_skipped(self, scorer: str, run_id: str) -> None:
        self._log.debug("hook.scorer_skipped", scorer=scorer, run_id=run_id)

    def score_saved(self, scorer: str, run_id: str, score_id: str, score: float) -> None:
        self._log.info(
            "hook.score_saved", scorer=scorer, run_id=run_id, score_id=score_id, score=score
        )

    def scoring_failed(self, scorer: str, run_id: str, reason: str) -> None:
        self._log.error("hook.scoring_failed", scorer=scorer, run_id=run_id, reason=reason)
