from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel


class OrderStatus(str, Enum):
    CREATED = "created"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    FAILED = "failed"


class CompletionSource(str, Enum):
    """주문을 completed 로 전이시킨 경로."""

    WEBHOOK = "webhook"
    CLIENT = "client"


class Order(BaseModel):
    """구매 주문 도메인 모델.

    amount 는 최소 통화 단위(paise), credits 는 생성 시점의 요금제에서 복사한 값이다.
    completed 는 종료 상태이며 이후 어떤 전이도 허용하지 않는다.
    """

    id: str | None = None
    account_id: str
    plan_id: str
    amount: int
    currency: str
    credits: int
    status: OrderStatus = OrderStatus.CREATED
    payment_id: str | None = None
    error: str | None = None
    completed_via: CompletionSource | None = None
    credits_applied: bool = False
    completed_at: datetime | None = None
    created_at: datetime
    updated_at: datetime

    @property
    def is_completed(self) -> bool:
        return self.status is OrderStatus.COMPLETED
