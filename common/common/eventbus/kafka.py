from __future__ import annotations

import json
import logging
from dataclasses import asdict

from confluent_kafka import Producer

from .config import get_message_max_bytes
from .core import Event

logger = logging.getLogger(__name__)


FLUSH_TIMEOUT_SECONDS = 5.0


class KafkaEventBus:
    """Kafka 기반 EventBus 구현 (발행 전용).

    원장 서비스는 이벤트를 소비하지 않으므로 producer 만 유지한다.
    """

    def __init__(self, brokers: str) -> None:
        producer_config: dict[str, object] = {"bootstrap.servers": brokers}
        max_bytes = get_message_max_bytes()
        if max_bytes is not None:
            producer_config["message.max.bytes"] = max_bytes

        self._producer = Producer(producer_config)
        self._brokers = brokers

    def close(self) -> None:
        remaining = self._producer.flush(FLUSH_TIMEOUT_SECONDS)
        if remaining:
            logger.warning("kafka producer closed with %d undelivered messages", remaining)

    def publish(self, topic: str, event: Event) -> None:
        payload = json.dumps(asdict(event), ensure_ascii=False).encode("utf-8")

        def _delivery_callback(err, msg) -> None:  # type: ignore[no-untyped-def]
            if err is not None:
                logger.error("failed to deliver message to %s: %s", msg.topic(), err)

        self._producer.produce(
            topic=topic,
            value=payload,
            key=event.id.encode("utf-8"),
            callback=_delivery_callback,
        )
        self._producer.poll(0)
