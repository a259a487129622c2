from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class CreditTransactionType(str, Enum):
    INITIAL_GRANT = "initial_grant"
    CONSUME = "consume"
    PURCHASE = "purchase"
    GRANT = "grant"


class CreditTransaction(BaseModel):
    """크레딧 변동 감사 로그. 잔액 계산에는 사용하지 않는다."""

    id: str | None = None
    account_id: str
    type: CreditTransactionType
    amount: int  # 지급은 양수, 소비는 음수
    balance_after: int
    reason: str
    reference_id: str | None = None  # 주문 id 등
    metadata: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime
    updated_at: datetime
