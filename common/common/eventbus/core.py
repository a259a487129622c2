from __future__ import annotations

from dataclasses import dataclass
from typing import Any


# 소비 측이 기대하는 재시도 단계 수와 동일하게 유지한다.
RetryDelays: list[float] = [
    60.0,
    300.0,
    600.0,
    1800.0,
    3600.0,
]


@dataclass(slots=True)
class Event:
    """Kafka 메시지의 메타데이터와 페이로드를 표현하는 이벤트 envelope.

    payload는 직렬화 직전 형태(dict)를 저장하고, 실제 JSON 인코딩은
    Kafka I/O 레이어에서 담당한다.
    """

    id: str
    payload: Any
    retry: int = 0
    max_retry: int = 0
    last_error: str | None = None

    def __post_init__(self) -> None:
        if self.max_retry <= 0 or self.max_retry > len(RetryDelays):
            self.max_retry = len(RetryDelays)


@dataclass(frozen=True, slots=True)
class Topic:
    base: str
