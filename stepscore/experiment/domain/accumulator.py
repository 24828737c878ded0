"""ScoreAccumulator: folds per-item scorer results into running averages."""

from collections.abc import Mapping
from typing import Any

_WORKFLOW_KEY = "workflow"
_STEPS_KEY = "steps"


def extract_score(result: Any) -> float:
    """Read ``score`` from a result mapping or object."""
    if isinstance(result, Mapping):
        return float(result["score"])
    return float(result.score)


def _mean(values: list[float]) -> float:
    return sum(values) / len(values) if values else 0.0


class ScoreAccumulator:
    """Collects raw scores per scorer, optionally nested by workflow and step.

    Lists are only ever appended to, so interleaved add_scores() calls from
    concurrently running items cannot lose values. One accumulator belongs to
    one experiment run.
    """

    def __init__(self) -> None:
        self._flat: dict[str, list[float]] = {}
        self._workflow: dict[str, list[float]] = {}
        self._steps: dict[str, dict[str, list[float]]] = {}

    def add_scores(self, results: Mapping[str, Any], nested: bool | None = None) -> None:
        """Record one item's scorer results.

        ``nested`` says whether ``results`` is a ``{workflow, steps}`` mapping.
        When omitted it is inferred from the presence of a ``steps`` key, so
        callers that know the shape should pass it.
        """
        if nested is None:
            nested = _STEPS_KEY in results
        if nested:
            for scorer, result in (results.get(_WORKFLOW_KEY) or {}).items():
                self._workflow.setdefault(scorer, []).append(extract_score(result))
            for step_id, step_results in (results.get(_STEPS_KEY) or {}).items():
                bucket = self._steps.setdefault(step_id, {})
                for scorer, result in step_results.items():
                    bucket.setdefault(scorer, []).append(extract_score(result))
            return
        for scorer, result in results.items():
            self._flat.setdefault(scorer, []).append(extract_score(result))

    def get_average_scores(self) -> dict[str, Any]:
        averages: dict[str, Any] = {
            scorer: _mean(values) for scorer, values in self._flat.items()
        }
        if self._workflow:
            averages[_WORKFLOW_KEY] = {
                scorer: _mean(values) for scorer, values in self._workflow.items()
            }
        if self._steps:
            averages[_STEPS_KEY] = {
                step_id: {scorer: _mean(values) for scorer, values in scorers.items()}
                for step_id, scorers in self._steps.items()
            }
        return averages
