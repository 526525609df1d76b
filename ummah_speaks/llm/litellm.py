from __future__ import annotations

import logging
from typing import Any

import litellm

from ummah_speaks.exceptions import ConfigurationError
from ummah_speaks.llm.base import BaseLLMClient
from ummah_speaks.llm.models import DEFAULT_MODEL

logger = logging.getLogger(__name__)


def _build_messages(prompt: str, system: str | None) -> list[dict[str, Any]]:
    messages: list[dict[str, Any]] = []
    if system:
        messages.append({"role": "system", "content": system})
    messages.append({"role": "user", "content": prompt})
    return messages


class LiteLLMClient(BaseLLMClient):
    """Async chat completions through litellm (Groq by default)."""

    def __init__(
        self,
        api_key: str = "",
        model: str = DEFAULT_MODEL,
    ) -> None:
        self._api_key = api_key
        self._model = str(model)

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> LiteLLMClient:
        return cls(
            api_key=config.get("api_key") or "",
            model=config.get("model") or DEFAULT_MODEL,
        )

    @property
    def model(self) -> str:
        return self._model

    async def completion(
        self,
        prompt: str,
        *,
        system: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> str:
        if not self._api_key:
            raise ConfigurationError("LLM API key is not configured.")

        kwargs: dict[str, Any] = {}
        if temperature is not None:
            kwargs["temperature"] = temperature
        if max_tokens is not None:
            kwargs["max_tokens"] = max_tokens

        response = await litellm.acompletion(
            model=self._model,
            messages=_build_messages(prompt, system),
            api_key=self._api_key,
            **kwargs,
        )
        text: str | None = response.choices[0].message.content  # type: ignore[union-attr]
        logger.debug("Completion from %s: %.80r", self._model, text)
        return (text or "").strip()
