"""Fake HookObserver for use in tests: records events without mocking."""


class FakeHookObserver:
    def __init__(self) -> None:
        self.skipped: list[str] = []
        self.saved: list[dict[str, object]] = []
        self.failed: list[dict[str, str]] = []

    def scorer_skipped(self, scorer: str, run_id: str) -> None:
        self.skipped.append(scorer)

    def score_saved(self, scorer: str, run_id: str, score_id: str, score: float) -> None:
        self.saved.append({"scorer": scorer, "score_id": score_id, "score": score})

    def scoring_failed(self, scorer: str, run_id: str, reason: str) -> None:
        self.failed.append({"scorer": scorer, "reason": reason})
