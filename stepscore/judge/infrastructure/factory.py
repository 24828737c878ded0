"""LiteLLMJudgeFactory: constructs LiteLLMJudge instances."""

import litellm

from stepscore.config.domain.judge import JudgeConfig
from stepscore.judge.domain.judge import Judge
from stepscore.judge.domain.observer import JudgeObserver
from stepscore.judge.infrastructure.litellm import LiteLLMJudge


class LiteLLMJudgeFactory:
    """Creates LiteLLMJudge instances for a given judge config, scorer and stage."""

    def __init__(self, observer: JudgeObserver) -> None:
        litellm.suppress_debug_info = True
        self._observer = observer

    def create(self, config: JudgeConfig, scorer: str, stage: str) -> Judge:
        return LiteLLMJudge(
            config=config,
            scorer=scorer,
            stage=stage,
            observer=self._observer,
        )
