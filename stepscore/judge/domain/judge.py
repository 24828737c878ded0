"""Judge Protocol: structural interface for all judge implementations."""

from typing import Any, Protocol

from pydantic import BaseModel, ConfigDict


class JudgeResponse(BaseModel, frozen=True):
    """What a judge hands back: a structured ``object`` when an output schema
    was requested, free ``text`` otherwise."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    object: Any = None
    text: str | None = None


class Judge(Protocol):
    """Structural interface satisfied by any judge implementation.

    Each instance is constructed once per (scorer, stage) invocation.
    """

    async def generate(
        self, prompt: str, output_schema: Any | None = None
    ) -> JudgeResponse: ...
