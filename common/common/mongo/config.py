from __future__ import annotations

import os
from dataclasses import dataclass


MONGO_URI_ENV = "MONGO_URI"
MONGO_DB_NAME_ENV = "MONGO_DB_NAME"
MONGO_TIMEOUT_MS_ENV = "MONGO_TIMEOUT_MS"

DEFAULT_MONGO_TIMEOUT_MS = 5000


@dataclass(slots=True)
class MongoConfig:
    """MongoDB 연결 설정.

    - uri: 접속 URI (필수)
    - db_name: 사용할 DB 이름. None 이면 URI 의 기본 DB 를 사용한다.
    - timeout_ms: 서버 선택/소켓 타임아웃. 원장 요청이 무기한 대기하지 않도록 항상 설정한다.
    """

    uri: str
    db_name: str | None = None
    timeout_ms: int = DEFAULT_MONGO_TIMEOUT_MS


def get_mongo_uri() -> str:
    """MongoDB 연결에 사용할 URI를 반환한다.

    환경 변수에서만 읽고, 설정되지 않은 경우에는 애플리케이션이 즉시 실패하도록
    RuntimeError를 발생시킨다.
    """

    value = os.getenv(MONGO_URI_ENV)
    if not value:
        raise RuntimeError(
            f"{MONGO_URI_ENV} environment variable is required for MongoDB",
        )
    return value


def get_mongo_db_name() -> str | None:
    """MongoDB에서 사용할 기본 데이터베이스 이름을 반환한다.

    - MONGO_DB_NAME 이 설정되어 있으면 해당 값을 사용한다.
    - 설정되어 있지 않으면 None 을 반환하고, 클라이언트는 URI의 기본 DB를 사용한다.
    """

    value = os.getenv(MONGO_DB_NAME_ENV, "").strip()
    return value or None


def get_mongo_timeout_ms() -> int:
    raw_value = os.getenv(MONGO_TIMEOUT_MS_ENV, "").strip()
    if not raw_value:
        return DEFAULT_MONGO_TIMEOUT_MS

    try:
        value = int(raw_value)
    except ValueError as exc:
        raise RuntimeError(
            f"{MONGO_TIMEOUT_MS_ENV} must be an integer, got: {raw_value!r}"
        ) from exc

    if value <= 0:
        raise RuntimeError(f"{MONGO_TIMEOUT_MS_ENV} must be > 0, got: {value}")
    return value


def load_mongo_config() -> MongoConfig:
    return MongoConfig(
        uri=get_mongo_uri(),
        db_name=get_mongo_db_name(),
        timeout_ms=get_mongo_timeout_ms(),
    )
