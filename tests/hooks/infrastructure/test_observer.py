"""Tests for StructlogHookObserver."""

from structlog.testing import capture_logs

from stepscore.hooks.infrastructure.observer import StructlogHookObserver


class TestStructlogHookObserver:
    def test_skip_is_debug(self) -> None:
        with capture_logs() as logs:
            StructlogHookObserver().scorer_skipped(scorer="tone", run_id="r1")

        assert logs == [
            {
                "event": "hook.scorer_skipped",
                "log_level": "debug",
                "scorer": "tone",
                "run_id": "r1",
            }
        ]

    def test_failure_is_an_error(self) -> None:
        with capture_logs() as logs:
            StructlogHookObserver().scoring_failed(
                scorer="tone", run_id="r1", reason="boom"
            )

        assert logs[0]["event"] == "hook.scoring_failed"
        assert logs[0]["log_level"] == "error"
        assert logs[0]["reason"] == "boom"
