"""Tests for LiteLLMJudge infrastructure implementation."""

import json
from typing import Literal
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from pydantic import BaseModel

from stepscore.config.domain.judge import JudgeConfig
from stepscore.judge.infrastructure.errors import JudgeInvocationError
from stepscore.judge.infrastructure.factory import LiteLLMJudgeFactory
from stepscore.judge.infrastructure.litellm import LiteLLMJudge, _response_format
from tests.judge.fake_observer import FakeJudgeObserver

_ACOMPLETION = "stepscore.judge.infrastructure.litellm.litellm.acompletion"


class Keywords(BaseModel):
    keywords: list[str]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _make_config(model: str = "gpt-4o", temperature: float = 0.0) -> JudgeConfig:
    return JudgeConfig(
        model=model, instructions="You are a strict grader.", temperature=temperature
    )


def _make_judge(
    config: JudgeConfig | None = None,
    scorer: str = "relevance",
    stage: str = "analyze",
) -> tuple[LiteLLMJudge, FakeJudgeObserver]:
    observer = FakeJudgeObserver()
    judge = LiteLLMJudge(
        config=config or _make_config(),
        scorer=scorer,
        stage=stage,
        observer=observer,
    )
    return judge, observer


def _make_acompletion_response(content: str) -> MagicMock:
    """Build a mock litellm response object with the given message content."""
    message = MagicMock()
    message.content = content
    choice = MagicMock()
    choice.message = message
    response = MagicMock()
    response.choices = [choice]
    return response


# ---------------------------------------------------------------------------
# Construction: temperature warning
# ---------------------------------------------------------------------------


class TestConstruction:
    """LiteLLMJudge emits a temperature warning when temperature > 0.0."""

    def test_zero_temperature_emits_no_warning(self) -> None:
        _, observer = _make_judge(config=_make_config(temperature=0.0))

        assert observer.temperature_warnings == []

    def test_positive_temperature_emits_warning_with_context(self) -> None:
        _, observer = _make_judge(
            config=_make_config(temperature=0.7), scorer="tone", stage="generateScore"
        )

        warning = observer.temperature_warnings[0]
        assert warning.temperature == pytest.approx(0.7)
        assert warning.scorer == "tone"
        assert warning.stage == "generateScore"


# ---------------------------------------------------------------------------
# generate(): request shape
# ---------------------------------------------------------------------------


class TestRequest:
    """generate() sends instructions and prompt at the configured temperature."""

    async def test_messages_and_temperature(self) -> None:
        judge, _ = _make_judge(config=_make_config(temperature=0.2))
        mock = AsyncMock(return_value=_make_acompletion_response("fine"))

        with patch(_ACOMPLETION, new=mock):
            await judge.generate(prompt="Rate this answer.")

        kwargs = mock.call_args.kwargs
        assert kwargs["model"] == "gpt-4o"
        assert kwargs["temperature"] == 0.2
        assert kwargs["messages"] == [
            {"role": "system", "content": "You are a strict grader."},
            {"role": "user", "content": "Rate this answer."},
        ]
        assert "response_format" not in kwargs

    async def test_model_schema_is_sent_as_response_format(self) -> None:
        judge, _ = _make_judge()
        mock = AsyncMock(return_value=_make_acompletion_response('{"keywords": []}'))

        with patch(_ACOMPLETION, new=mock):
            await judge.generate(prompt="Extract.", output_schema=Keywords)

        assert mock.call_args.kwargs["response_format"] is Keywords


class TestResponseFormat:
    """Non-model schemas are wrapped in a one-field model."""

    def test_model_is_not_wrapped(self) -> None:
        model, wrapped = _response_format(Keywords)

        assert model is Keywords
        assert not wrapped

    def test_primitive_is_wrapped(self) -> None:
        model, wrapped = _response_format(float)

        assert wrapped
        assert model.model_validate({"value": 0.5}).value == 0.5  # type: ignore[attr-defined]


# ---------------------------------------------------------------------------
# generate(): success path
# ---------------------------------------------------------------------------


class TestGenerateSuccess:
    """generate() returns text or a decoded object and emits the right events."""

    async def test_without_schema_returns_text(self) -> None:
        judge, _ = _make_judge()

        with patch(_ACOMPLETION, new=AsyncMock(return_value=_make_acompletion_response("Clear."))):
            response = await judge.generate(prompt="Explain.")

        assert response.text == "Clear."
        assert response.object is None

    async def test_with_schema_returns_decoded_object(self) -> None:
        judge, _ = _make_judge()
        content = json.dumps({"keywords": ["paris", "france"]})

        with patch(_ACOMPLETION, new=AsyncMock(return_value=_make_acompletion_response(content))):
            response = await judge.generate(prompt="Extract.", output_schema=Keywords)

        assert response.object == {"keywords": ["paris", "france"]}

    async def test_wrapped_schema_is_unwrapped(self) -> None:
        judge, _ = _make_judge()
        content = json.dumps({"value": "good"})

        with patch(_ACOMPLETION, new=AsyncMock(return_value=_make_acompletion_response(content))):
            response = await judge.generate(
                prompt="Label.", output_schema=Literal["good", "bad"]
            )

        assert response.object == "good"

    async def test_emits_started_and_completed_events(self) -> None:
        judge, observer = _make_judge(scorer="tone", stage="generateReason")

        with patch(_ACOMPLETION, new=AsyncMock(return_value=_make_acompletion_response("ok"))):
            await judge.generate(prompt="Explain.")

        assert observer.started[0].scorer == "tone"
        assert observer.started[0].stage == "generateReason"
        assert observer.started[0].model == "gpt-4o"
        assert observer.completed[0].duration_ms >= 0
        assert observer.failed == []


# ---------------------------------------------------------------------------
# generate(): failure paths
# ---------------------------------------------------------------------------


class TestGenerateFailure:
    """Transport and decode failures raise JudgeInvocationError."""

    async def test_transport_error_is_wrapped(self) -> None:
        judge, observer = _make_judge()

        with patch(_ACOMPLETION, new=AsyncMock(side_effect=ConnectionError("reset"))):
            with pytest.raises(JudgeInvocationError) as exc_info:
                await judge.generate(prompt="Rate.")

        assert str(exc_info.value).startswith("Failed to ")
        assert isinstance(exc_info.value.__cause__, ConnectionError)
        assert len(observer.failed) == 1
        assert observer.completed == []

    async def test_invalid_json_is_wrapped(self) -> None:
        judge, observer = _make_judge()

        with patch(
            _ACOMPLETION, new=AsyncMock(return_value=_make_acompletion_response("garbage"))
        ):
            with pytest.raises(JudgeInvocationError):
                await judge.generate(prompt="Extract.", output_schema=Keywords)

        assert len(observer.failed) == 1
        assert observer.completed == []

    async def test_wrapped_response_without_value_is_rejected(self) -> None:
        judge, _ = _make_judge()

        with patch(
            _ACOMPLETION, new=AsyncMock(return_value=_make_acompletion_response('{"other": 1}'))
        ):
            with pytest.raises(JudgeInvocationError):
                await judge.generate(prompt="Score.", output_schema=float)


class TestFactory:
    """LiteLLMJudgeFactory builds one judge per scorer stage."""

    def test_creates_litellm_judge(self) -> None:
        factory = LiteLLMJudgeFactory(observer=FakeJudgeObserver())

        judge = factory.create(config=_make_config(), scorer="tone", stage="analyze")

        assert isinstance(judge, LiteLLMJudge)
