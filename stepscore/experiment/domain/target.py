"""Target ports: the single-shot agents and multi-step workflows an experiment drives."""

from typing import Any, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field

SUCCESS_STATUS = "success"


class StepRunResult(BaseModel, frozen=True):
    """Outcome of one workflow step as reported by the workflow run."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    status: str
    payload: Any = None
    output: Any = None

    @property
    def is_scorable(self) -> bool:
        return (
            self.status == SUCCESS_STATUS
            and self.payload is not None
            and self.output is not None
        )


class ScoringData(BaseModel, frozen=True):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    input: Any = None
    output: Any = None
    step_results: dict[str, StepRunResult] | None = None


class TargetResult(BaseModel, frozen=True):
    """What running a target for one dataset item produced.

    ``raw`` keeps the target's own result (e.g. the WorkflowResult) for
    completion callbacks.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    scoring_data: ScoringData
    raw: Any = None


class WorkflowResult(BaseModel, frozen=True):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    status: str
    result: Any = None
    steps: dict[str, StepRunResult] = Field(default_factory=dict)


class AgentTarget(Protocol):
    async def invoke(
        self, input: Any, runtime_context: dict[str, Any] | None = None
    ) -> TargetResult: ...


class WorkflowRun(Protocol):
    async def start(
        self, input_data: Any, runtime_context: dict[str, Any] | None = None
    ) -> WorkflowResult: ...


@runtime_checkable
class WorkflowTarget(Protocol):
    """A multi-step target. Runs are created with embedded scorers disabled
    so an experiment never scores the same output twice."""

    def create_run(self, disable_scorers: bool) -> WorkflowRun: ...
