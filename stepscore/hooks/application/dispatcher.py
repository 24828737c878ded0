"""ScoringHookDispatcher: runs sampled live scorers and stores their results."""

import random
import uuid
from collections.abc import Callable, Mapping
from datetime import UTC, datetime
from typing import Any

from stepscore.experiment.domain.accumulator import extract_score
from stepscore.hooks.domain.hook_input import ScorerEntry, ScoringHookInput
from stepscore.hooks.domain.observer import HookObserver
from stepscore.pipeline.domain.run import ScoringRun
from stepscore.sampling.domain.sampling import should_sample
from stepscore.storage.domain.score_row import ScoreRow
from stepscore.storage.domain.storage import ScoreStorage

_STAGE_FIELDS = (
    "preprocess_step_result",
    "preprocess_prompt",
    "analyze_step_result",
    "analyze_prompt",
    "generate_score_step_result",
    "generate_score_prompt",
    "generate_reason_step_result",
    "generate_reason_prompt",
)


def _read(result: Any, name: str) -> Any:
    if isinstance(result, Mapping):
        return result.get(name)
    return getattr(result, name, None)


class ScoringHookDispatcher:
    """Scores a finished live generation with every attached scorer.

    This runs after the generation has already been returned, so a failing
    scorer or storage write is reported to the observer and never raised.
    """

    def __init__(
        self,
        storage: ScoreStorage,
        observer: HookObserver,
        draw: Callable[[], float] = random.random,
    ) -> None:
        self._storage = storage
        self._observer = observer
        self._draw = draw

    async def dispatch(
        self, scorers: Mapping[str, ScorerEntry], hook_input: ScoringHookInput
    ) -> list[ScoreRow]:
        """Return the rows saved for the scorers that ran successfully."""
        run = ScoringRun(
            run_id=hook_input.run_id,
            input=hook_input.input,
            output=hook_input.output,
            runtime_context=hook_input.runtime_context,
            tracing_context=hook_input.tracing_context,
        )
        saved: list[ScoreRow] = []
        for scorer_id, entry in scorers.items():
            if not should_sample(entry.sampling, draw=self._draw):
                self._observer.scorer_skipped(scorer=scorer_id, run_id=hook_input.run_id)
                continue
            try:
                result = await entry.scorer.run(run)
                row = await self._storage.save_score(
                    self._build_row(scorer_id=scorer_id, result=result, hook_input=hook_input)
                )
            except Exception as exc:
                self._observer.scoring_failed(
                    scorer=scorer_id, run_id=hook_input.run_id, reason=str(exc)
                )
                continue
            self._observer.score_saved(
                scorer=scorer_id, run_id=hook_input.run_id, score_id=row.id, score=row.score
            )
            saved.append(row)
        return saved

    def _build_row(
        self, scorer_id: str, result: Any, hook_input: ScoringHookInput
    ) -> ScoreRow:
        now = datetime.now(UTC)
        return ScoreRow(
            id=str(uuid.uuid4()),
            run_id=hook_input.run_id,
            scorer_id=scorer_id,
            entity_id=str(hook_input.entity["id"]),
            entity_type=hook_input.entity_type,
            source=hook_input.source,
            score=extract_score(result),
            reason=_read(result, "reason"),
            input=hook_input.input,
            output=hook_input.output,
            runtime_context=hook_input.runtime_context,
            metadata=hook_input.metadata,
            trace_id=hook_input.trace_id,
            resource_id=hook_input.resource_id,
            thread_id=hook_input.thread_id,
            created_at=now,
            updated_at=now,
            **{name: _read(result, name) for name in _STAGE_FIELDS},
        )
