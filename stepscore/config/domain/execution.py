"""Execution configuration model."""

from pydantic import BaseModel, Field


class ExecutionConfig(BaseModel, frozen=True):
    concurrency: int = Field(default=1, ge=1)
    sandbox: bool = False
