"""Stage definitions: the explicit function/judge variants a pipeline is built from."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel

from stepscore.config.domain.judge import JudgeConfig

if TYPE_CHECKING:
    from stepscore.pipeline.domain.run import StageContext


class StageName(StrEnum):
    PREPROCESS = "preprocess"
    ANALYZE = "analyze"
    GENERATE_SCORE = "generateScore"
    GENERATE_REASON = "generateReason"

    @property
    def result_key(self) -> str:
        return f"{self.value}StepResult"

    @property
    def prompt_key(self) -> str:
        return f"{self.value}Prompt"


EXECUTION_ORDER: tuple[StageName, ...] = (
    StageName.PREPROCESS,
    StageName.ANALYZE,
    StageName.GENERATE_SCORE,
    StageName.GENERATE_REASON,
)

type StageFn = Callable[["StageContext"], Any | Awaitable[Any]]
type PromptRenderer = Callable[["StageContext"], str | Awaitable[str]]


class StageKind(StrEnum):
    FUNCTION = "function"
    PROMPT = "prompt"


class GeneratedScore(BaseModel, frozen=True):
    """Default output schema for a judge-delegated generateScore stage."""

    score: float


@dataclass(frozen=True)
class PromptStep:
    """A stage computed by rendering a prompt and delegating it to a judge.

    ``judge`` overrides the pipeline-level judge for this stage only.
    """

    create_prompt: PromptRenderer
    output_schema: Any = None
    description: str = ""
    judge: JudgeConfig | None = None


@dataclass(frozen=True)
class FunctionStage:
    name: StageName
    fn: StageFn
    kind: StageKind = StageKind.FUNCTION

    @property
    def description(self) -> str:
        return getattr(self.fn, "__doc__", None) or ""


@dataclass(frozen=True)
class JudgeStage:
    name: StageName
    prompt: PromptStep
    kind: StageKind = StageKind.PROMPT

    @property
    def description(self) -> str:
        return self.prompt.description


type StageDefinition = FunctionStage | JudgeStage
