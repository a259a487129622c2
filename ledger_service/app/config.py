from __future__ import annotations

import os
from dataclasses import dataclass

from common.eventbus.config import get_brokers
from common.llm.factory import ChatModelConfig, LlmProvider
from common.mongo.config import MongoConfig, load_mongo_config


RAZORPAY_WEBHOOK_SECRET = "RAZORPAY_WEBHOOK_SECRET"
RAZORPAY_KEY_ID = "RAZORPAY_KEY_ID"
RAZORPAY_KEY_SECRET = "RAZORPAY_KEY_SECRET"
RAZORPAY_API_BASE_URL = "RAZORPAY_API_BASE_URL"
FRONTEND_URL = "FRONTEND_URL"
WEBHOOK_TIMEOUT_SECONDS = "WEBHOOK_TIMEOUT_SECONDS"
LEDGER_LLM_PROVIDER = "LEDGER_LLM_PROVIDER"
LEDGER_LLM_MODEL_NAME = "LEDGER_LLM_MODEL_NAME"
LEDGER_LLM_API_KEY = "LEDGER_LLM_API_KEY"
LEDGER_LLM_BASE_URL = "LEDGER_LLM_BASE_URL"
LEDGER_LLM_TEMPERATURE = "LEDGER_LLM_TEMPERATURE"
LEDGER_LLM_MAX_RETRIES = "LEDGER_LLM_MAX_RETRIES"

DEFAULT_RAZORPAY_API_BASE_URL = "https://api.razorpay.com/v1"
DEFAULT_WEBHOOK_TIMEOUT_SECONDS = 10.0


@dataclass(slots=True)
class RazorpayConfig:
    """결제사 설정.

    - webhook_secret: 웹훅 HMAC 검증용 공유 비밀 (필수)
    - key_id/key_secret: 체크아웃 키 및 결제 조회 API 인증. 없으면 클라이언트 확인 경로에서 결제사 검증을 생략한다.
    """

    webhook_secret: str
    key_id: str | None = None
    key_secret: str | None = None
    api_base_url: str = DEFAULT_RAZORPAY_API_BASE_URL

    @property
    def has_api_credentials(self) -> bool:
        return bool(self.key_id and self.key_secret)


@dataclass(slots=True)
class AppConfig:
    """ledger-service 전체 설정."""

    mongo: MongoConfig
    razorpay: RazorpayConfig
    llm: ChatModelConfig | None
    kafka_brokers: str | None
    frontend_url: str | None
    webhook_timeout_seconds: float = DEFAULT_WEBHOOK_TIMEOUT_SECONDS


def load_razorpay_config() -> RazorpayConfig:
    secret = os.getenv(RAZORPAY_WEBHOOK_SECRET)
    if not secret:
        raise RuntimeError(
            f"{RAZORPAY_WEBHOOK_SECRET} environment variable is required for ledger-service",
        )

    key_id = os.getenv(RAZORPAY_KEY_ID) or None
    key_secret = os.getenv(RAZORPAY_KEY_SECRET) or None
    if bool(key_id) != bool(key_secret):
        raise RuntimeError(
            f"{RAZORPAY_KEY_ID} and {RAZORPAY_KEY_SECRET} must be set together",
        )

    return RazorpayConfig(
        webhook_secret=secret,
        key_id=key_id,
        key_secret=key_secret,
        api_base_url=os.getenv(RAZORPAY_API_BASE_URL) or DEFAULT_RAZORPAY_API_BASE_URL,
    )


def load_chat_model_config() -> ChatModelConfig | None:
    """AI 기능용 채팅 모델 설정을 로드한다. 모델 이름이 없으면 None (기능 비활성)."""

    model = os.getenv(LEDGER_LLM_MODEL_NAME)
    if not model:
        return None

    provider_raw = os.getenv(LEDGER_LLM_PROVIDER) or "openai"
    try:
        provider = LlmProvider.from_str(provider_raw)
    except ValueError as exc:
        raise RuntimeError(f"{LEDGER_LLM_PROVIDER}: {exc}") from exc

    temperature_raw = os.getenv(LEDGER_LLM_TEMPERATURE)
    if temperature_raw is None:
        temperature = 0.7
    else:
        try:
            temperature = float(temperature_raw)
        except ValueError as exc:
            raise RuntimeError(
                f"{LEDGER_LLM_TEMPERATURE} must be a float if set, got: {temperature_raw!r}"
            ) from exc

    max_retries_raw = os.getenv(LEDGER_LLM_MAX_RETRIES)
    if not max_retries_raw:
        max_retries = 0
    else:
        try:
            max_retries = int(max_retries_raw)
        except ValueError as exc:
            raise RuntimeError(
                f"{LEDGER_LLM_MAX_RETRIES} must be an integer if set, got: {max_retries_raw!r}"
            ) from exc
        if max_retries < 0:
            raise RuntimeError(f"{LEDGER_LLM_MAX_RETRIES} must be >= 0, got: {max_retries}")

    return ChatModelConfig(
        provider=provider,
        model=model,
        temperature=temperature,
        api_key=os.getenv(LEDGER_LLM_API_KEY) or None,
        base_url=os.getenv(LEDGER_LLM_BASE_URL) or None,
        max_retries=max_retries,
    )


def load_webhook_timeout_seconds() -> float:
    raw_value = os.getenv(WEBHOOK_TIMEOUT_SECONDS, "").strip()
    if not raw_value:
        return DEFAULT_WEBHOOK_TIMEOUT_SECONDS

    try:
        value = float(raw_value)
    except ValueError as exc:
        raise RuntimeError(
            f"{WEBHOOK_TIMEOUT_SECONDS} must be a number, got: {raw_value!r}"
        ) from exc
    if value <= 0:
        raise RuntimeError(f"{WEBHOOK_TIMEOUT_SECONDS} must be > 0, got: {value}")
    return value


def get_frontend_url() -> str | None:
    value = os.getenv(FRONTEND_URL, "").strip()
    return value or None


def load_config() -> AppConfig:
    return AppConfig(
        mongo=load_mongo_config(),
        razorpay=load_razorpay_config(),
        llm=load_chat_model_config(),
        kafka_brokers=get_brokers(),
        frontend_url=get_frontend_url(),
        webhook_timeout_seconds=load_webhook_timeout_seconds(),
    )
