from __future__ import annotations

from pydantic import BaseModel, Field

from common.types.datetime import OptionalUtcDateTime, UtcDateTime


class BalanceResponse(BaseModel):
    account_id: str
    credits: int
    plan_id: str | None = None
    last_purchase_at: OptionalUtcDateTime = None
    last_used_at: OptionalUtcDateTime = None


class DeductRequest(BaseModel):
    reason: str = "feature"


class DeductResponse(BaseModel):
    remaining: int


class GrantRequest(BaseModel):
    """운영자 크레딧 지급 요청."""

    amount: int = Field(gt=0)
    reason: str = "grant"
    reference_id: str | None = None


class GrantResponse(BaseModel):
    account_id: str
    granted: int
    balance: int


class CreditTransactionResponse(BaseModel):
    id: str | None
    type: str
    amount: int
    balance_after: int
    reason: str
    reference_id: str | None
    created_at: UtcDateTime
