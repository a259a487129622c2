from __future__ import annotations

import os

import pytest

from common.llm.factory import (
    OLLAMA_DEFAULT_BASE_URL,
    OPENROUTER_DEFAULT_BASE_URL,
    ChatModelConfig,
    LlmProvider,
    create_chat_model,
)


def test_provider_from_str_normalizes_and_rejects_unknown() -> None:
    assert LlmProvider.from_str(" OpenRouter ") is LlmProvider.OPENROUTER
    with pytest.raises(ValueError, match="unsupported LLM provider"):
        LlmProvider.from_str("anthropic-direct")


def test_openrouter_uses_default_base_url_and_exports_key(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    env = {
        key: value
        for key, value in os.environ.items()
        if key not in {"OPENAI_API_KEY", "OPENROUTER_API_KEY"}
    }
    monkeypatch.setattr(os, "environ", env)

    model = create_chat_model(
        ChatModelConfig(
            provider=LlmProvider.OPENROUTER,
            model="openai/gpt-4o-mini",
            api_key="sk-or-test",
            timeout_seconds=5.0,
        )
    )

    assert model.openai_api_base == OPENROUTER_DEFAULT_BASE_URL
    assert model.request_timeout == 5.0
    assert model.max_retries == 0
    assert os.environ["OPENAI_API_KEY"] == "sk-or-test"
    assert os.environ["OPENROUTER_API_KEY"] == "sk-or-test"


def test_ollama_defaults_to_local_server() -> None:
    model = create_chat_model(ChatModelConfig(provider=LlmProvider.OLLAMA, model="llama3"))

    assert model.base_url == OLLAMA_DEFAULT_BASE_URL
