"""원장 이벤트 발행.

Kafka 가 설정된 경우에만 사용한다. 발행 실패는 로그만 남기고 원장 상태에는 영향을 주지 않는다.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import asdict
from datetime import datetime, timezone
from typing import Any, Protocol

from confluent_kafka import KafkaException

from common.eventbus.helpers import new_json_event
from common.eventbus.kafka import KafkaEventBus
from common.eventbus.topics import TOPIC_LEDGER
from common.events.ledger import (
    CreditConsumedEvent,
    LedgerEventType,
    OrderCompletedEvent,
)

from ..models.order import Order


logger = logging.getLogger(__name__)


class LedgerEventPublisherInterface(Protocol):
    def credit_consumed(
        self, account_id: str, remaining: int, reason: str
    ) -> None:  # pragma: no cover - Protocol
        ...

    def order_completed(self, order: Order) -> None:  # pragma: no cover - Protocol
        ...


class KafkaLedgerEventPublisher(LedgerEventPublisherInterface):
    def __init__(self, event_bus: KafkaEventBus, source: str = "ledger-service") -> None:
        self._event_bus = event_bus
        self._source = source

    def credit_consumed(self, account_id: str, remaining: int, reason: str) -> None:
        event_id = str(uuid.uuid4())
        evt = CreditConsumedEvent(
            id=event_id,
            type=LedgerEventType.CREDIT_CONSUMED,
            timestamp=datetime.now(timezone.utc).isoformat(),
            source=self._source,
            version="1.0",
            account_id=account_id,
            amount=1,
            remaining=remaining,
            reason=reason,
        )
        self._publish(event_id, asdict(evt))

    def order_completed(self, order: Order) -> None:
        if order.id is None:
            logger.error("cannot publish OrderCompleted event: order.id is None")
            return

        event_id = str(uuid.uuid4())
        evt = OrderCompletedEvent(
            id=event_id,
            type=LedgerEventType.ORDER_COMPLETED,
            timestamp=datetime.now(timezone.utc).isoformat(),
            source=self._source,
            version="1.0",
            order_id=order.id,
            account_id=order.account_id,
            plan_id=order.plan_id,
            credits=order.credits,
            payment_id=order.payment_id,
            completed_via=order.completed_via.value if order.completed_via else "",
        )
        self._publish(event_id, asdict(evt))

    def _publish(self, event_id: str, payload: dict[str, Any]) -> None:
        wrapped = new_json_event(payload=payload, event_id=event_id)
        try:
            self._event_bus.publish(TOPIC_LEDGER.base, wrapped)
        except (KafkaException, BufferError):
            logger.exception(
                "failed to publish ledger event id=%s type=%s",
                event_id,
                payload.get("type"),
            )
            return

        logger.info("published ledger event id=%s type=%s", event_id, payload.get("type"))
