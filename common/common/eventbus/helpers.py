from __future__ import annotations

import uuid
from typing import Any, Mapping

from .core import Event, RetryDelays


def new_json_event(
    payload: Mapping[str, Any],
    *,
    max_retry: int | None = None,
    event_id: str | None = None,
) -> Event:
    """도메인 이벤트 dict 를 Kafka 로 보낼 Event envelope 로 감싼다.

    envelope id 는 payload 의 id 와 같게 두어 소비 측이 중복 수신을 걸러낼 수 있게 한다.
    id 가 없으면 uuid4 를 사용한다.
    """
    if max_retry is None or max_retry <= 0 or max_retry > len(RetryDelays):
        max_retry = len(RetryDelays)

    return Event(
        id=event_id or str(uuid.uuid4()),
        payload=dict(payload),
        retry=0,
        max_retry=max_retry,
    )
