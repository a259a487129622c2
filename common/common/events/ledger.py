"""원장(크레딧/주문) 관련 이벤트 정의."""

from __future__ import annotations

from dataclasses import dataclass


class LedgerEventType:
    """원장 이벤트 타입 상수."""

    CREDIT_CONSUMED = "credit.consumed"
    ORDER_COMPLETED = "order.completed"


@dataclass(slots=True)
class CreditConsumedEvent:
    """크레딧 소비 이벤트.

    AI 기능 호출이 성공해 크레딧 1개가 차감되면 발행된다.
    """

    id: str
    type: str
    timestamp: str
    source: str
    version: str
    account_id: str
    amount: int
    remaining: int
    reason: str


@dataclass(slots=True)
class OrderCompletedEvent:
    """주문 완료 이벤트.

    결제 확인(웹훅 또는 클라이언트 콜백)으로 주문이 completed 로 전이되고
    크레딧이 지급된 직후 한 번만 발행된다.
    """

    id: str
    type: str
    timestamp: str
    source: str
    version: str
    order_id: str
    account_id: str
    plan_id: str
    credits: int
    payment_id: str | None
    completed_via: str
