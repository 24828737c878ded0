"""ScoringRunner: executes a ScorerPipeline's stages in order for one run."""

import time
import uuid
from types import MappingProxyType
from typing import Any

from stepscore.judge.domain.factory import JudgeFactory
from stepscore.pipeline.application.executor import StageExecutor
from stepscore.pipeline.domain.errors import (
    MissingScoreForReasonError,
    MissingScoreStageError,
    StageExecutionError,
)
from stepscore.pipeline.domain.mock import SchemaMockGenerator
from stepscore.pipeline.domain.observer import ScoringObserver
from stepscore.pipeline.domain.pipeline import ScorerPipeline
from stepscore.pipeline.domain.result import ScoringResult
from stepscore.pipeline.domain.run import ScoringRun, StageContext
from stepscore.pipeline.domain.stage import JudgeStage, StageName


class ScoringRunner:
    """Runs scorer pipelines against scoring runs.

    Construct without a ``judge_factory`` to run judge-delegated stages in
    sandbox mode, where outputs come from the mock generator.
    """

    def __init__(
        self,
        judge_factory: JudgeFactory | None,
        observer: ScoringObserver,
        mock_generator: SchemaMockGenerator | None = None,
    ) -> None:
        self._judge_factory = judge_factory
        self._observer = observer
        self._mock_generator = mock_generator or SchemaMockGenerator()

    async def run(self, pipeline: ScorerPipeline, run: ScoringRun) -> ScoringResult:
        """Execute every registered stage and return a fresh ScoringResult.

        Stages run in the fixed order preprocess, analyze, generateScore,
        generateReason; each sees only what earlier stages produced.

        Raises:
            MissingScoreStageError: if the pipeline has no generateScore stage.
            StageExecutionError: if any stage fails; the original error is chained.
        """
        stages = pipeline.stages
        if not pipeline.has_generate_score:
            raise MissingScoreStageError(
                pipeline=pipeline.name, stages=[stage.name.value for stage in stages]
            )

        if run.run_id is None:
            run = run.model_copy(update={"run_id": str(uuid.uuid4())})
        run_id: str = run.run_id  # type: ignore[assignment]

        self._observer.scoring_started(
            scorer=pipeline.name,
            run_id=run_id,
            stages=[stage.name.value for stage in stages],
        )

        executor = StageExecutor(
            scorer_name=pipeline.name,
            default_judge=pipeline.judge,
            judge_factory=self._judge_factory,
            observer=self._observer,
            mock_generator=self._mock_generator,
            run_id=run_id,
        )
        results: dict[str, Any] = {}

        for stage in stages:
            self._observer.stage_started(
                scorer=pipeline.name,
                run_id=run_id,
                stage=stage.name.value,
                kind=stage.kind.value,
            )
            start = time.monotonic()
            try:
                context = self._context_for(
                    pipeline=pipeline, stage=stage.name, run=run, results=results
                )
                outcome = await executor.execute(stage=stage, context=context)
            except Exception as exc:
                self._observer.stage_failed(
                    scorer=pipeline.name,
                    run_id=run_id,
                    stage=stage.name.value,
                    reason=str(exc),
                )
                raise StageExecutionError(
                    pipeline=pipeline.name, stage=stage.name.value, reason=str(exc)
                ) from exc

            results[stage.name.result_key] = outcome.result
            if isinstance(stage, JudgeStage):
                results[stage.name.prompt_key] = outcome.prompt
            self._observer.stage_completed(
                scorer=pipeline.name,
                run_id=run_id,
                stage=stage.name.value,
                duration_ms=int((time.monotonic() - start) * 1000),
            )

        score: float = results[StageName.GENERATE_SCORE.result_key]
        result = ScoringResult.model_validate(
            {
                **results,
                "run": run,
                "runId": run_id,
                "score": score,
                "reason": results.get(StageName.GENERATE_REASON.result_key),
            }
        )
        self._observer.scoring_completed(scorer=pipeline.name, run_id=run_id, score=score)
        return result

    def _context_for(
        self,
        pipeline: ScorerPipeline,
        stage: StageName,
        run: ScoringRun,
        results: dict[str, Any],
    ) -> StageContext:
        snapshot = MappingProxyType(dict(results))
        if stage is not StageName.GENERATE_REASON:
            return StageContext(run=run, results=snapshot)
        score = results.get(StageName.GENERATE_SCORE.result_key)
        if score is None:
            raise MissingScoreForReasonError(pipeline=pipeline.name)
        return StageContext(run=run, results=snapshot, score=score)
