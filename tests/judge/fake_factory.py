"""FakeJudgeFactory: hands out pre-built FakeJudges keyed by stage."""

from stepscore.config.domain.judge import JudgeConfig
from tests.judge.fake_judge import FakeJudge


class FakeJudgeFactory:
    """Satisfies the JudgeFactory protocol.

    ``judges`` maps a stage name to the judge returned for it; stages not in
    the map get ``default``. Every create() call is recorded.
    """

    def __init__(
        self,
        judges: dict[str, FakeJudge] | None = None,
        default: FakeJudge | None = None,
    ) -> None:
        self._judges = judges or {}
        self._default = default or FakeJudge()
        self.created: list[dict[str, object]] = []

    def create(self, config: JudgeConfig, scorer: str, stage: str) -> FakeJudge:
        self.created.append({"config": config, "scorer": scorer, "stage": stage})
        return self._judges.get(stage, self._default)
