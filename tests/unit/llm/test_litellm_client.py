from __future__ import annotations

from types import SimpleNamespace
from typing import Any

import litellm
import pytest

from ummah_speaks.exceptions import ConfigurationError
from ummah_speaks.llm.litellm import LiteLLMClient
from ummah_speaks.llm.models import DEFAULT_MODEL


def _response(content: str | None) -> SimpleNamespace:
    return SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content=content))]
    )


@pytest.fixture()
def captured(monkeypatch: pytest.MonkeyPatch) -> list[dict[str, Any]]:
    calls: list[dict[str, Any]] = []

    async def fake_acompletion(**kwargs: Any) -> SimpleNamespace:
        calls.append(kwargs)
        return _response("  Hope \n")

    monkeypatch.setattr(litellm, "acompletion", fake_acompletion)
    return calls


async def test_completion_sends_system_and_user_messages(captured) -> None:
    client = LiteLLMClient(api_key="gsk_test")

    text = await client.completion(
        "I feel lost", system="Pick one", temperature=0.3, max_tokens=10
    )

    assert text == "Hope"
    (call,) = captured
    assert call["model"] == str(DEFAULT_MODEL)
    assert call["api_key"] == "gsk_test"
    assert call["temperature"] == 0.3
    assert call["max_tokens"] == 10
    assert call["messages"] == [
        {"role": "system", "content": "Pick one"},
        {"role": "user", "content": "I feel lost"},
    ]


async def test_optional_parameters_are_omitted(captured) -> None:
    await LiteLLMClient(api_key="k", model="openai/gpt-4o-mini").completion("hi")

    (call,) = captured
    assert call["model"] == "openai/gpt-4o-mini"
    assert "temperature" not in call
    assert "max_tokens" not in call
    assert call["messages"] == [{"role": "user", "content": "hi"}]


async def test_missing_key_raises_configuration_error(captured) -> None:
    with pytest.raises(ConfigurationError):
        await LiteLLMClient(api_key="").completion("hi")
    assert captured == []


async def test_null_content_becomes_empty_string(monkeypatch) -> None:
    async def fake_acompletion(**kwargs: Any) -> SimpleNamespace:
        return _response(None)

    monkeypatch.setattr(litellm, "acompletion", fake_acompletion)
    assert await LiteLLMClient(api_key="k").completion("hi") == ""


def test_from_config() -> None:
    client = LiteLLMClient.from_config(
        {"provider": "groq", "api_key": "k", "model": "groq/llama-3.1-8b-instant"}
    )
    assert client.model == "groq/llama-3.1-8b-instant"

    assert LiteLLMClient.from_config({}).model == str(DEFAULT_MODEL)
