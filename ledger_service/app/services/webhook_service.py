"""결제사 웹훅 처리 (결제 확인 경로 A).

1. 원문 바디 바이트에 대한 HMAC-SHA256 서명을 상수 시간 비교로 검증한다.
2. 이벤트 종류에 따라 주문 완료/실패를 처리하고 나머지는 상태 변경 없이 응답한다.
3. 모든 저장소 작업은 pymongo.timeout 안에서 실행되어 무기한 대기하지 않는다.
"""

from __future__ import annotations

import hashlib
import hmac
import json
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

import pymongo

from ..exceptions import InvalidSignature, InvalidWebhookPayload, OrderAlreadyCompleted
from ..models.order import CompletionSource
from .order_service import OrderService
from .reconciliation_service import ReconciliationService


logger = logging.getLogger(__name__)


SIGNATURE_HEADER = "x-razorpay-signature"

# event 필드가 없는 페이로드도 결제 완료로 취급한다.
COMPLETION_EVENTS = frozenset({"payment.captured", "order.paid", None})
FAILURE_EVENT = "payment.failed"


class WebhookOutcome(str, Enum):
    COMPLETED = "completed"
    DUPLICATE = "duplicate"
    FAILED = "failed"
    IGNORED = "ignored"


@dataclass(slots=True)
class WebhookPayment:
    event: str | None
    order_id: str
    payment_id: str | None
    error_description: str | None = None


def compute_signature(secret: str, raw_body: bytes) -> str:
    return hmac.new(secret.encode("utf-8"), raw_body, hashlib.sha256).hexdigest()


def parse_webhook_payment(raw_body: bytes) -> WebhookPayment:
    """payload.payment.entity 에서 주문/결제 참조를 꺼낸다."""
    try:
        body: Any = json.loads(raw_body)
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise InvalidWebhookPayload(f"body is not valid JSON: {exc}") from exc
    if not isinstance(body, dict):
        raise InvalidWebhookPayload("body must be a JSON object")

    entity = ((body.get("payload") or {}).get("payment") or {}).get("entity")
    if not isinstance(entity, dict):
        raise InvalidWebhookPayload("payload.payment.entity is missing")

    notes = entity.get("notes") or {}
    order_id = notes.get("orderId") if isinstance(notes, dict) else None
    if not order_id or not isinstance(order_id, str):
        raise InvalidWebhookPayload("payload.payment.entity.notes.orderId is missing")

    return WebhookPayment(
        event=body.get("event"),
        order_id=order_id,
        payment_id=entity.get("id"),
        error_description=entity.get("error_description"),
    )


class WebhookProcessor:
    def __init__(
        self,
        secret: str,
        reconciliation: ReconciliationService,
        orders: OrderService,
        timeout_seconds: float = 10.0,
    ) -> None:
        self._secret = secret
        self._reconciliation = reconciliation
        self._orders = orders
        self._timeout_seconds = timeout_seconds

    def verify_signature(self, raw_body: bytes, signature: str | None) -> None:
        expected = compute_signature(self._secret, raw_body)
        if not signature or not hmac.compare_digest(
            expected.encode("utf-8"), signature.encode("utf-8")
        ):
            logger.warning(
                "rejected webhook with invalid signature",
                extra={"event": "webhook.invalid_signature"},
            )
            raise InvalidSignature()

    def handle(self, raw_body: bytes, signature: str | None) -> WebhookOutcome:
        self.verify_signature(raw_body, signature)
        payment = parse_webhook_payment(raw_body)

        if payment.event not in COMPLETION_EVENTS and payment.event != FAILURE_EVENT:
            logger.info(
                "ignored webhook event %s",
                payment.event,
                extra={"order_id": payment.order_id},
            )
            return WebhookOutcome.IGNORED

        with pymongo.timeout(self._timeout_seconds):
            if payment.event == FAILURE_EVENT:
                return self._handle_failure(payment)

            result = self._reconciliation.complete_order(
                payment.order_id, payment.payment_id, CompletionSource.WEBHOOK
            )

        if result.already_completed:
            return WebhookOutcome.DUPLICATE
        return WebhookOutcome.COMPLETED

    def _handle_failure(self, payment: WebhookPayment) -> WebhookOutcome:
        try:
            self._orders.fail_order(payment.order_id, payment.error_description)
        except OrderAlreadyCompleted:
            logger.warning(
                "payment.failed received for completed order",
                extra={"order_id": payment.order_id, "payment_id": payment.payment_id},
            )
            return WebhookOutcome.IGNORED
        return WebhookOutcome.FAILED
