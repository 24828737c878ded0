"""DataItem domain value object: one input (and optional ground truth) from a dataset."""

from typing import Any

from pydantic import BaseModel, ConfigDict


class DataItem(BaseModel, frozen=True):
    """Immutable value object representing a single experiment input.

    ``input`` is required but may hold any value the target accepts.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    input: Any
    ground_truth: Any = None
    runtime_context: dict[str, Any] | None = None
    tracing_context: Any = None
