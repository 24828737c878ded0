"""PipelineScorer: adapts a ScorerPipeline to the experiment Scorer protocol."""

from stepscore.pipeline.application.runner import ScoringRunner
from stepscore.pipeline.domain.pipeline import ScorerPipeline
from stepscore.pipeline.domain.result import ScoringResult
from stepscore.pipeline.domain.run import ScoringRun


class PipelineScorer:
    """Binds a pipeline to the runner that executes it."""

    def __init__(self, pipeline: ScorerPipeline, runner: ScoringRunner) -> None:
        self._pipeline = pipeline
        self._runner = runner

    @property
    def name(self) -> str:
        return self._pipeline.name

    @property
    def description(self) -> str:
        return self._pipeline.description

    async def run(self, run: ScoringRun) -> ScoringResult:
        return await self._runner.run(pipeline=self._pipeline, run=run)
