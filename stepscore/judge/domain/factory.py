"""JudgeFactory Protocol: creates Judge instances for a given judge configuration."""

from typing import Protocol

from stepscore.config.domain.judge import JudgeConfig
from stepscore.judge.domain.judge import Judge


class JudgeFactory(Protocol):
    def create(self, config: JudgeConfig, scorer: str, stage: str) -> Judge: ...
