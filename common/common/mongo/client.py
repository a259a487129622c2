from __future__ import annotations

import logging
from dataclasses import dataclass

from pymongo import MongoClient
from pymongo.database import Database

from .config import MongoConfig


logger = logging.getLogger(__name__)


@dataclass(slots=True)
class MongoHandle:
    """프로세스 수명 동안 유지되는 MongoClient 와 기본 Database 묶음.

    전역 싱글톤 대신 애플리케이션 시작 시 한 번 만들어 필요한 컴포넌트에 주입한다.
    """

    client: MongoClient
    database: Database

    def close(self) -> None:
        self.client.close()


def connect(config: MongoConfig) -> MongoHandle:
    """설정으로부터 MongoClient 를 만들고 연결을 검증한다.

    - ping 으로 연결을 확인하고, 실패하면 RuntimeError 로 즉시 중단한다.
    - DB 이름은 MONGO_DB_NAME 우선, 없으면 URI 의 기본 DB 를 사용한다.
    """

    client: MongoClient = MongoClient(
        config.uri,
        serverSelectionTimeoutMS=config.timeout_ms,
        socketTimeoutMS=config.timeout_ms,
        connectTimeoutMS=config.timeout_ms,
        tz_aware=True,
    )

    try:
        client.admin.command("ping")
    except Exception as exc:  # noqa: BLE001
        client.close()
        raise RuntimeError(f"failed to connect to MongoDB: {exc}") from exc

    try:
        if config.db_name:
            database = client[config.db_name]
        else:
            database = client.get_default_database()
    except Exception as exc:  # noqa: BLE001
        client.close()
        raise RuntimeError(
            "MongoDB database name must be specified via MONGO_DB_NAME or in MONGO_URI (mongodb://.../db_name)",
        ) from exc

    logger.info("MongoDB connected (db=%s)", database.name)
    return MongoHandle(client=client, database=database)
