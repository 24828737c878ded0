"""Tests for ScoringHookDispatcher."""

import pytest
from pydantic import ValidationError

from stepscore.hooks.application.dispatcher import ScoringHookDispatcher
from stepscore.hooks.domain.hook_input import ScorerEntry, ScoringHookInput
from stepscore.pipeline.application.runner import ScoringRunner
from stepscore.pipeline.application.scorer import PipelineScorer
from stepscore.pipeline.domain.pipeline import create_scorer
from stepscore.pipeline.domain.stage import PromptStep
from stepscore.sampling.domain.sampling import NoSampling, RatioSampling
from stepscore.storage.domain.score_row import EntityType, ScoringSource
from stepscore.storage.infrastructure.in_memory import InMemoryScoreStorage
from tests.experiment.fake_scorer import FakeScorer
from tests.hooks.fake_observer import FakeHookObserver
from tests.pipeline.fake_observer import FakeScoringObserver


def _hook_input(**overrides: object) -> ScoringHookInput:
    fields: dict[str, object] = {
        "run_id": "run-1",
        "input": "What is 2+2?",
        "output": "4",
        "entity": {"id": "math-agent", "name": "Math Agent"},
        "entity_type": EntityType.AGENT,
        "trace_id": "trace-9",
    }
    fields.update(overrides)
    return ScoringHookInput.model_validate(fields)


def _dispatcher(
    storage: InMemoryScoreStorage | None = None,
    observer: FakeHookObserver | None = None,
    draw: float = 0.5,
) -> ScoringHookDispatcher:
    return ScoringHookDispatcher(
        storage=storage or InMemoryScoreStorage(),
        observer=observer or FakeHookObserver(),
        draw=lambda: draw,
    )


class TestDispatch:
    """Sampled scorers run and their results are stored."""

    async def test_saves_one_row_per_scorer(self) -> None:
        storage = InMemoryScoreStorage()
        scorers = {
            "exact": ScorerEntry(scorer=FakeScorer("exact", score=1.0)),
            "tone": ScorerEntry(scorer=FakeScorer("tone", score=0.4), sampling=NoSampling()),
        }

        rows = await _dispatcher(storage=storage).dispatch(scorers, _hook_input())

        assert [row.scorer_id for row in rows] == ["exact", "tone"]
        stored = await storage.get_scores_by_run_id("run-1")
        assert stored.pagination.total == 2

    async def test_row_carries_hook_fields(self) -> None:
        scorers = {"exact": ScorerEntry(scorer=FakeScorer("exact", score=1.0))}

        rows = await _dispatcher().dispatch(
            scorers, _hook_input(source=ScoringSource.TEST, metadata={"env": "ci"})
        )

        row = rows[0]
        assert row.run_id == "run-1"
        assert row.entity_id == "math-agent"
        assert row.entity_type == EntityType.AGENT
        assert row.source == ScoringSource.TEST
        assert row.score == 1.0
        assert row.reason == "exact scored 1.0"
        assert row.input == "What is 2+2?"
        assert row.output == "4"
        assert row.trace_id == "trace-9"
        assert row.metadata == {"env": "ci"}
        assert row.created_at == row.updated_at

    async def test_scorer_receives_run(self) -> None:
        scorer = FakeScorer("exact")

        await _dispatcher().dispatch({"exact": ScorerEntry(scorer=scorer)}, _hook_input())

        assert scorer.runs[0].run_id == "run-1"
        assert scorer.runs[0].output == "4"

    async def test_pipeline_results_fill_stage_columns(self) -> None:
        pipeline = (
            create_scorer("tone")
            .analyze(lambda ctx: {"polite": True})
            .generate_score(lambda ctx: 0.7)
            .generate_reason(PromptStep(create_prompt=lambda ctx: "Why?"))
        )
        scorer = PipelineScorer(
            pipeline=pipeline,
            runner=ScoringRunner(judge_factory=None, observer=FakeScoringObserver()),
        )

        rows = await _dispatcher().dispatch({"tone": ScorerEntry(scorer=scorer)}, _hook_input())

        row = rows[0]
        assert row.score == 0.7
        assert row.analyze_step_result == {"polite": True}
        assert row.generate_reason_prompt == "Why?"
        assert row.reason == "Mock response for generateReason"


class TestSampling:
    """The sampling gate decides which scorers run."""

    async def test_gated_out_scorer_is_skipped(self) -> None:
        observer = FakeHookObserver()
        scorer = FakeScorer("tone")
        scorers = {"tone": ScorerEntry(scorer=scorer, sampling=RatioSampling(rate=0.1))}

        rows = await _dispatcher(observer=observer, draw=0.5).dispatch(scorers, _hook_input())

        assert rows == []
        assert scorer.runs == []
        assert observer.skipped == ["tone"]

    async def test_sampled_in_scorer_runs(self) -> None:
        scorers = {"tone": ScorerEntry(scorer=FakeScorer("tone"), sampling=RatioSampling(rate=0.9))}

        rows = await _dispatcher(draw=0.5).dispatch(scorers, _hook_input())

        assert len(rows) == 1

    async def test_sampling_parses_from_dict(self) -> None:
        entry = ScorerEntry.model_validate(
            {"scorer": FakeScorer("tone"), "sampling": {"type": "ratio", "rate": 0}}
        )

        rows = await _dispatcher().dispatch({"tone": entry}, _hook_input())

        assert rows == []


class TestFailures:
    """Failures are reported and never raised."""

    async def test_failing_scorer_is_swallowed(self) -> None:
        observer = FakeHookObserver()
        scorers = {
            "broken": ScorerEntry(scorer=FakeScorer("broken", error=RuntimeError("boom"))),
            "ok": ScorerEntry(scorer=FakeScorer("ok")),
        }

        rows = await _dispatcher(observer=observer).dispatch(scorers, _hook_input())

        assert [row.scorer_id for row in rows] == ["ok"]
        assert observer.failed == [{"scorer": "broken", "reason": "boom"}]
        assert [event["scorer"] for event in observer.saved] == ["ok"]

    def test_entity_without_id_is_rejected_before_scoring(self) -> None:
        with pytest.raises(ValidationError, match="id"):
            _hook_input(entity={"name": "anonymous"})
