"""Resolves "package.module:attribute" references from config into live objects."""

import importlib
from typing import Any

from stepscore.cli.errors import ObjectResolutionError
from stepscore.config.domain.config import ObjectRef, WorkflowScorerRefs
from stepscore.experiment.domain.scorer import WorkflowScorerConfig
from stepscore.pipeline.application.runner import ScoringRunner
from stepscore.pipeline.application.scorer import PipelineScorer
from stepscore.pipeline.domain.pipeline import ScorerPipeline


def resolve_object(ref: ObjectRef) -> Any:
    """Import ``module`` and return ``attribute`` (dotted attributes are followed)."""
    module_name, sep, attr_path = ref.partition(":")
    if not sep or not module_name or not attr_path:
        raise ObjectResolutionError(ref=ref, reason="expected 'module:attribute'")
    try:
        obj: Any = importlib.import_module(module_name)
    except ImportError as exc:
        raise ObjectResolutionError(ref=ref, reason=str(exc)) from exc
    for part in attr_path.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError as exc:
            raise ObjectResolutionError(
                ref=ref, reason=f"module has no attribute '{attr_path}'"
            ) from exc
    return obj


def resolve_scorer(ref: ObjectRef, runner: ScoringRunner) -> Any:
    """Resolve a scorer; bare pipelines are bound to ``runner``."""
    obj = resolve_object(ref)
    if isinstance(obj, ScorerPipeline):
        return PipelineScorer(pipeline=obj, runner=runner)
    if not hasattr(obj, "name") or not callable(getattr(obj, "run", None)):
        raise ObjectResolutionError(
            ref=ref, reason="object is neither a ScorerPipeline nor a scorer"
        )
    return obj


def resolve_scorers(
    refs: list[ObjectRef] | WorkflowScorerRefs, runner: ScoringRunner
) -> list[Any] | WorkflowScorerConfig:
    if isinstance(refs, WorkflowScorerRefs):
        return WorkflowScorerConfig(
            workflow=[resolve_scorer(ref=ref, runner=runner) for ref in refs.workflow],
            steps={
                step_id: [resolve_scorer(ref=ref, runner=runner) for ref in step_refs]
                for step_id, step_refs in refs.steps.items()
            },
        )
    return [resolve_scorer(ref=ref, runner=runner) for ref in refs]
