"""LiteLLMJudge: judge implementation using LiteLLM for structured or free-text output."""

import json
import time
from typing import Any

import litellm
from pydantic import BaseModel, create_model

from stepscore.config.domain.judge import JudgeConfig
from stepscore.judge.domain.judge import JudgeResponse
from stepscore.judge.domain.observer import JudgeObserver
from stepscore.judge.infrastructure.errors import JudgeInvocationError

_WRAPPED_FIELD = "value"


def _response_format(output_schema: Any) -> tuple[type[BaseModel], bool]:
    """Return the model to request from the LLM and whether it wraps the schema.

    Pydantic models are requested as-is; any other type (``float``,
    ``list[str]``, ``Literal[...]``) is wrapped in a one-field model because
    structured-output providers require a JSON object at the top level.
    """
    if isinstance(output_schema, type) and issubclass(output_schema, BaseModel):
        return output_schema, False
    wrapper = create_model("JudgeOutput", **{_WRAPPED_FIELD: (output_schema, ...)})
    return wrapper, True


class LiteLLMJudge:
    """Judge implementation that delegates to an LLM via LiteLLM.

    One instance is constructed per (scorer, stage) invocation. The scorer and
    stage names are injected at construction time so that observer events
    carry full context without polluting the generate() signature.
    """

    def __init__(
        self,
        config: JudgeConfig,
        scorer: str,
        stage: str,
        observer: JudgeObserver,
    ) -> None:
        self._config = config
        self._scorer = scorer
        self._stage = stage
        self._observer = observer

        if config.temperature > 0.0:
            self._observer.judge_high_temperature_warned(
                scorer=scorer,
                stage=stage,
                temperature=config.temperature,
            )

    async def generate(
        self, prompt: str, output_schema: Any | None = None
    ) -> JudgeResponse:
        """Invoke the LLM and return its structured object or free text.

        The returned object is the decoded JSON payload; validating it against
        ``output_schema`` is left to the caller.

        Raises:
            JudgeInvocationError: if the LLM call fails or a structured response
                is not valid JSON.
        """
        self._observer.judge_generation_started(
            scorer=self._scorer, stage=self._stage, model=self._config.model
        )

        messages = [
            {"role": "system", "content": self._config.instructions},
            {"role": "user", "content": prompt},
        ]
        kwargs: dict[str, Any] = {}
        wrapped = False
        if output_schema is not None:
            response_format, wrapped = _response_format(output_schema)
            kwargs["response_format"] = response_format

        start = time.monotonic()
        try:
            response = await litellm.acompletion(
                model=self._config.model,
                temperature=self._config.temperature,
                messages=messages,
                **kwargs,
            )
        except Exception as exc:
            self._fail(reason=str(exc))
            raise JudgeInvocationError(reason=str(exc)) from exc

        duration_ms = int((time.monotonic() - start) * 1000)
        content: str = response.choices[0].message.content or ""

        if output_schema is None:
            result = JudgeResponse(text=content)
        else:
            try:
                decoded = json.loads(content)
            except json.JSONDecodeError as exc:
                reason = f"Failed to parse judge response: {exc}"
                self._fail(reason=reason)
                raise JudgeInvocationError(reason=reason) from exc
            if wrapped:
                if not isinstance(decoded, dict) or _WRAPPED_FIELD not in decoded:
                    reason = f"judge response is missing '{_WRAPPED_FIELD}'"
                    self._fail(reason=reason)
                    raise JudgeInvocationError(reason=reason)
                decoded = decoded[_WRAPPED_FIELD]
            result = JudgeResponse(object=decoded)

        self._observer.judge_generation_completed(
            scorer=self._scorer, stage=self._stage, duration_ms=duration_ms
        )
        return result

    def _fail(self, reason: str) -> None:
        self._observer.judge_generation_failed(
            scorer=self._scorer, stage=self._stage, reason=reason
        )
