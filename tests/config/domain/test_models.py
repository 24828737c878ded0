"""Tests for config domain models."""

import pytest
from pydantic import ValidationError

from stepscore.config.domain.config import ExperimentConfig
from stepscore.config.domain.execution import ExecutionConfig
from stepscore.config.domain.judge import JudgeConfig


def _config_dict(**overrides: object) -> dict[str, object]:
    data: dict[str, object] = {
        "name": "exp",
        "version": "1",
        "dataset": {"path": "data.jsonl"},
        "target": "app:target",
        "scorers": ["app:scorer"],
    }
    data.update(overrides)
    return data


class TestJudgeConfig:
    """JudgeConfig validates its fields."""

    def test_defaults_to_zero_temperature(self) -> None:
        assert JudgeConfig(model="gpt-4o", instructions="Grade.").temperature == 0.0

    def test_negative_temperature_is_rejected(self) -> None:
        with pytest.raises(ValidationError):
            JudgeConfig(model="gpt-4o", instructions="Grade.", temperature=-0.1)

    def test_empty_instructions_are_rejected(self) -> None:
        with pytest.raises(ValidationError):
            JudgeConfig(model="gpt-4o", instructions="")

    def test_is_frozen(self) -> None:
        config = JudgeConfig(model="gpt-4o", instructions="Grade.")

        with pytest.raises(ValidationError):
            config.model = "other"  # type: ignore[misc]


class TestExperimentConfig:
    """ExperimentConfig assembles the nested models."""

    def test_execution_defaults(self) -> None:
        config = ExperimentConfig.model_validate(_config_dict())

        assert config.execution == ExecutionConfig()
        assert config.execution.concurrency == 1

    def test_empty_target_is_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ExperimentConfig.model_validate(_config_dict(target=""))

    def test_scorers_must_be_list_or_workflow_refs(self) -> None:
        with pytest.raises(ValidationError):
            ExperimentConfig.model_validate(_config_dict(scorers="app:scorer"))
