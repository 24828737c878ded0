"""Top-level ExperimentConfig aggregate: the root configuration object."""

from pydantic import BaseModel, Field

from stepscore.config.domain.dataset import DatasetConfig
from stepscore.config.domain.execution import ExecutionConfig

type ObjectRef = str  # "package.module:attribute"
type StepId = str


class WorkflowScorerRefs(BaseModel, frozen=True):
    """Scorer references split between the whole workflow and individual steps."""

    workflow: list[ObjectRef] = Field(default_factory=list)
    steps: dict[StepId, list[ObjectRef]] = Field(default_factory=dict)


class ExperimentConfig(BaseModel, frozen=True):
    """Root configuration aggregate for a stepscore experiment."""

    name: str = Field(min_length=1)
    version: str = Field(min_length=1)
    dataset: DatasetConfig
    execution: ExecutionConfig = ExecutionConfig()
    target: ObjectRef = Field(min_length=1)
    scorers: list[ObjectRef] | WorkflowScorerRefs
