"""Experiment result models."""

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel

from stepscore.dataset.domain.item import DataItem
from stepscore.experiment.domain.target import TargetResult


class ExperimentSummary(BaseModel, frozen=True):
    total_items: int


class ExperimentResult(BaseModel, frozen=True):
    """Averaged scores for one experiment.

    ``scores`` is flat (scorer -> mean) for plain scorer lists, with optional
    ``workflow`` and ``steps`` sub-dicts for workflow-scoped configurations.
    """

    experiment_id: str
    scores: dict[str, Any]
    summary: ExperimentSummary


@dataclass(frozen=True)
class ItemCompletion:
    item: DataItem
    target_result: TargetResult
    scorer_results: dict[str, Any]
