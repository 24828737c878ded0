"""ExperimentRunner: drives a dataset through a target and its scorers."""

import asyncio
import inspect
import time
import uuid
from collections.abc import Awaitable, Callable, Mapping, Sequence
from typing import Any

from pydantic import ValidationError

from stepscore.dataset.domain.item import DataItem
from stepscore.experiment.domain.accumulator import ScoreAccumulator
from stepscore.experiment.domain.errors import (
    InvalidDataItemError,
    InvalidScorerConfigurationError,
    NoDataProvidedError,
    NoScorersProvidedError,
    ScorerExecutionError,
    TargetExecutionError,
)
from stepscore.experiment.domain.observer import ExperimentObserver
from stepscore.experiment.domain.result import (
    ExperimentResult,
    ExperimentSummary,
    ItemCompletion,
)
from stepscore.experiment.domain.scorer import Scorer, WorkflowScorerConfig
from stepscore.experiment.domain.target import (
    SUCCESS_STATUS,
    AgentTarget,
    ScoringData,
    TargetResult,
    WorkflowTarget,
)
from stepscore.pipeline.domain.run import ScoringRun

type CompletionCallback = Callable[[ItemCompletion], Awaitable[None] | None]

_WORKFLOW_CONFIG_KEYS = frozenset({"workflow", "steps"})


class ExperimentRunner:
    """Runs every dataset item through the target, scores it and averages the scores.

    Items run concurrently up to ``concurrency``; scorers for one item run
    sequentially. The first failing item aborts the whole experiment and no
    partial averages are returned.
    """

    def __init__(self, observer: ExperimentObserver) -> None:
        self._observer = observer

    async def run(
        self,
        data: Sequence[DataItem | Mapping[str, Any]],
        scorers: list[Scorer] | WorkflowScorerConfig | Mapping[str, Any],
        target: AgentTarget | WorkflowTarget,
        on_item_complete: CompletionCallback | None = None,
        concurrency: int = 1,
        experiment_id: str | None = None,
    ) -> ExperimentResult:
        """Validate the inputs, then score every item.

        ``on_item_complete`` may be a plain function or a coroutine function.
        ``experiment_id`` tags every observer event and the result; a UUID is
        generated when it is omitted.

        Raises:
            NoDataProvidedError, InvalidDataItemError, NoScorersProvidedError,
            InvalidScorerConfigurationError: before any item runs.
            ValueError: if ``concurrency`` is less than 1.
            TargetExecutionError, ScorerExecutionError: from the first failing item.
        """
        items = _validate_data(data)
        config = _validate_scorers(scorers=scorers, target=target)
        if concurrency < 1:
            raise ValueError(f"concurrency must be >= 1, got {concurrency}")

        experiment_id = experiment_id or str(uuid.uuid4())
        self._observer.experiment_started(
            experiment_id=experiment_id,
            total_items=len(items),
            scorer_names=_scorer_names(config),
            concurrency=concurrency,
        )
        started_at = time.monotonic()

        accumulator = ScoreAccumulator()
        sem = asyncio.Semaphore(concurrency)
        completed_count: list[int] = [0]
        progress_lock = asyncio.Lock()

        try:
            async with asyncio.TaskGroup() as tg:
                for index, item in enumerate(items):
                    tg.create_task(
                        self._run_item(
                            sem=sem,
                            experiment_id=experiment_id,
                            index=index,
                            item=item,
                            config=config,
                            target=target,
                            accumulator=accumulator,
                            on_item_complete=on_item_complete,
                            total=len(items),
                            completed_count=completed_count,
                            progress_lock=progress_lock,
                        )
                    )
        except* Exception as eg:
            # item_failed was already emitted inside _run_item.
            raise eg.exceptions[0]

        self._observer.experiment_completed(
            experiment_id=experiment_id,
            total_items=len(items),
            elapsed_seconds=time.monotonic() - started_at,
        )
        return ExperimentResult(
            experiment_id=experiment_id,
            scores=accumulator.get_average_scores(),
            summary=ExperimentSummary(total_items=len(items)),
        )

    async def _run_item(
        self,
        sem: asyncio.Semaphore,
        experiment_id: str,
        index: int,
        item: DataItem,
        config: list[Scorer] | WorkflowScorerConfig,
        target: AgentTarget | WorkflowTarget,
        accumulator: ScoreAccumulator,
        on_item_complete: CompletionCallback | None,
        total: int,
        completed_count: list[int],
        progress_lock: asyncio.Lock,
    ) -> None:
        async with sem:
            self._observer.item_started(experiment_id=experiment_id, item_index=index)
            try:
                target_result = await _execute_target(target=target, item=item)
                if isinstance(config, WorkflowScorerConfig):
                    scorer_results = await _run_workflow_scorers(
                        config=config, item=item, target_result=target_result
                    )
                else:
                    scorer_results = await _run_scorers(
                        scorers=config,
                        item=item,
                        input=target_result.scoring_data.input,
                        output=target_result.scoring_data.output,
                    )
                accumulator.add_scores(
                    scorer_results, nested=isinstance(config, WorkflowScorerConfig)
                )
                if on_item_complete is not None:
                    callback_result = on_item_complete(
                        ItemCompletion(
                            item=item,
                            target_result=target_result,
                            scorer_results=scorer_results,
                        )
                    )
                    if inspect.isawaitable(callback_result):
                        await callback_result
            except Exception as exc:
                self._observer.item_failed(
                    experiment_id=experiment_id, item_index=index, reason=str(exc)
                )
                raise

            self._observer.item_completed(experiment_id=experiment_id, item_index=index)
            async with progress_lock:
                completed_count[0] += 1
                self._observer.experiment_progress(
                    experiment_id=experiment_id,
                    completed=completed_count[0],
                    total=total,
                )


def _validate_data(data: Sequence[DataItem | Mapping[str, Any]]) -> list[DataItem]:
    if not data:
        raise NoDataProvidedError()
    items: list[DataItem] = []
    for index, raw in enumerate(data):
        if isinstance(raw, DataItem):
            items.append(raw)
            continue
        if not isinstance(raw, Mapping):
            raise InvalidDataItemError(
                index=index, reason=f"expected a mapping, got {type(raw).__name__}"
            )
        if "input" not in raw:
            raise InvalidDataItemError(index=index, reason="missing 'input'")
        try:
            items.append(DataItem.model_validate(dict(raw)))
        except ValidationError as exc:
            raise InvalidDataItemError(index=index, reason=str(exc)) from exc
    return items


def _validate_scorers(
    scorers: list[Scorer] | WorkflowScorerConfig | Mapping[str, Any],
    target: AgentTarget | WorkflowTarget,
) -> list[Scorer] | WorkflowScorerConfig:
    if isinstance(scorers, list):
        if not scorers:
            raise NoScorersProvidedError()
        return scorers

    if isinstance(scorers, Mapping):
        unknown = set(scorers) - _WORKFLOW_CONFIG_KEYS
        if unknown:
            raise InvalidScorerConfigurationError(
                reason=f"unknown keys: {', '.join(sorted(unknown))}"
            )
        try:
            scorers = WorkflowScorerConfig.model_validate(dict(scorers))
        except ValidationError as exc:
            raise InvalidScorerConfigurationError(reason=str(exc)) from exc
    elif not isinstance(scorers, WorkflowScorerConfig):
        raise InvalidScorerConfigurationError(
            reason=f"expected a list or workflow config, got {type(scorers).__name__}"
        )

    if not isinstance(target, WorkflowTarget):
        raise InvalidScorerConfigurationError(
            reason="workflow and step scorers require a workflow target"
        )
    if not scorers.workflow and not any(scorers.steps.values()):
        raise NoScorersProvidedError()
    return scorers


def _scorer_names(config: list[Scorer] | WorkflowScorerConfig) -> list[str]:
    if isinstance(config, WorkflowScorerConfig):
        names = [scorer.name for scorer in config.workflow]
        for step_id, step_scorers in config.steps.items():
            names.extend(f"{step_id}.{scorer.name}" for scorer in step_scorers)
        return names
    return [scorer.name for scorer in config]


async def _execute_target(
    target: AgentTarget | WorkflowTarget, item: DataItem
) -> TargetResult:
    try:
        if isinstance(target, WorkflowTarget):
            workflow_run = target.create_run(disable_scorers=True)
            result = await workflow_run.start(
                input_data=item.input, runtime_context=item.runtime_context
            )
            # Only a successful run has a final output to score.
            output = result.result if result.status == SUCCESS_STATUS else None
            return TargetResult(
                scoring_data=ScoringData(
                    input=item.input, output=output, step_results=result.steps
                ),
                raw=result,
            )
        return await target.invoke(input=item.input, runtime_context=item.runtime_context)
    except Exception as exc:
        raise TargetExecutionError(item=item, reason=str(exc)) from exc


async def _run_scorers(
    scorers: list[Scorer],
    item: DataItem,
    input: Any,
    output: Any,
    step: str | None = None,
) -> dict[str, Any]:
    run = ScoringRun(
        input=input,
        output=output,
        ground_truth=item.ground_truth,
        runtime_context=item.runtime_context,
        tracing_context=item.tracing_context,
    )
    results: dict[str, Any] = {}
    for scorer in scorers:
        try:
            results[scorer.name] = await scorer.run(run)
        except Exception as exc:
            raise ScorerExecutionError(
                scorer=scorer.name, reason=str(exc), step=step
            ) from exc
    return results


async def _run_workflow_scorers(
    config: WorkflowScorerConfig, item: DataItem, target_result: TargetResult
) -> dict[str, Any]:
    data = target_result.scoring_data
    results: dict[str, Any] = {}
    if config.workflow:
        results["workflow"] = await _run_scorers(
            scorers=config.workflow, item=item, input=data.input, output=data.output
        )
    steps: dict[str, Any] = {}
    for step_id, step_scorers in config.steps.items():
        step_result = (data.step_results or {}).get(step_id)
        if step_result is None or not step_result.is_scorable:
            continue
        steps[step_id] = await _run_scorers(
            scorers=step_scorers,
            item=item,
            input=step_result.payload,
            output=step_result.output,
            step=step_id,
        )
    results["steps"] = steps
    return results
