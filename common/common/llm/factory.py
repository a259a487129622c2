"""AI 작성 기능(콘텐츠 생성, 문법 검사, SEO 분석)이 공유하는 채팅 모델 생성기.

모델은 프로세스 시작 시 한 번 만들어 컨테이너에 보관한다. 기능 호출 실패는 크레딧
차감 전에 ProviderError 로 바뀌므로, 여기서는 재시도를 기본 0회로 두고 타임아웃만 전달한다.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Self

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_google_genai import ChatGoogleGenerativeAI
from langchain_ollama import ChatOllama
from langchain_openai import ChatOpenAI


OLLAMA_DEFAULT_BASE_URL = "http://localhost:11434"
OPENROUTER_DEFAULT_BASE_URL = "https://openrouter.ai/api/v1"


class LlmProvider(str, Enum):
    GOOGLE = "google"
    OPENAI = "openai"
    OLLAMA = "ollama"
    OPENROUTER = "openrouter"

    @classmethod
    def from_str(cls, value: str) -> Self:
        try:
            return cls(value.strip().lower())
        except ValueError as exc:
            raise ValueError(f"unsupported LLM provider: {value}") from exc


# 각 langchain 통합이 키를 읽는 환경 변수. ollama 는 키가 없다.
_API_KEY_ENV_NAMES: dict[LlmProvider, tuple[str, ...]] = {
    LlmProvider.GOOGLE: ("GOOGLE_API_KEY",),
    LlmProvider.OPENAI: ("OPENAI_API_KEY",),
    LlmProvider.OPENROUTER: ("OPENAI_API_KEY", "OPENROUTER_API_KEY"),
}


@dataclass(slots=True)
class ChatModelConfig:
    """LEDGER_LLM_* 환경 변수에서 읽은 채팅 모델 설정."""

    provider: LlmProvider
    model: str
    temperature: float = 0.7
    api_key: str | None = None
    base_url: str | None = None
    max_retries: int = 0
    timeout_seconds: float | None = None


def _export_api_key(config: ChatModelConfig) -> None:
    if not config.api_key:
        return
    for env_name in _API_KEY_ENV_NAMES.get(config.provider, ()):
        os.environ.setdefault(env_name, config.api_key)


def _google(config: ChatModelConfig) -> BaseChatModel:
    return ChatGoogleGenerativeAI(
        model=config.model,
        temperature=config.temperature,
        max_retries=config.max_retries,
        timeout=config.timeout_seconds,
    )


def _openai_compatible(default_base_url: str | None) -> Callable[[ChatModelConfig], BaseChatModel]:
    def _build(config: ChatModelConfig) -> BaseChatModel:
        return ChatOpenAI(
            model=config.model,
            temperature=config.temperature,
            base_url=config.base_url or default_base_url,
            max_retries=config.max_retries,
            timeout=config.timeout_seconds,
        )

    return _build


def _ollama(config: ChatModelConfig) -> BaseChatModel:
    return ChatOllama(
        model=config.model,
        temperature=config.temperature,
        base_url=config.base_url or OLLAMA_DEFAULT_BASE_URL,
    )


_BUILDERS: dict[LlmProvider, Callable[[ChatModelConfig], BaseChatModel]] = {
    LlmProvider.GOOGLE: _google,
    LlmProvider.OPENAI: _openai_compatible(None),
    LlmProvider.OPENROUTER: _openai_compatible(OPENROUTER_DEFAULT_BASE_URL),
    LlmProvider.OLLAMA: _ollama,
}


def create_chat_model(config: ChatModelConfig) -> BaseChatModel:
    builder = _BUILDERS.get(config.provider)
    if builder is None:
        raise ValueError(f"unsupported chat provider: {config.provider}")
    _export_api_key(config)
    return builder(config)
