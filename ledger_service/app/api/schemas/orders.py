from __future__ import annotations

from pydantic import BaseModel, Field

from common.types.datetime import OptionalUtcDateTime, UtcDateTime


class CreateOrderRequest(BaseModel):
    account_id: str = Field(min_length=1)
    plan_id: str


class CheckoutNotes(BaseModel):
    orderId: str


class CheckoutOptions(BaseModel):
    """호스티드 체크아웃에 그대로 넘기는 옵션."""

    key: str | None
    amount: int
    currency: str
    name: str
    description: str
    notes: CheckoutNotes


class OrderResponse(BaseModel):
    id: str
    account_id: str
    plan_id: str
    amount: int
    currency: str
    credits: int
    status: str
    payment_id: str | None
    error: str | None
    completed_via: str | None
    created_at: UtcDateTime
    updated_at: UtcDateTime
    completed_at: OptionalUtcDateTime = None


class CreateOrderResponse(BaseModel):
    order: OrderResponse
    checkout: CheckoutOptions


class ConfirmOrderRequest(BaseModel):
    payment_id: str = Field(min_length=1)


class ConfirmOrderResponse(BaseModel):
    order: OrderResponse
    credited: bool
    already_completed: bool
    balance: int | None


class FailOrderRequest(BaseModel):
    error: str | None = None


class PlanResponse(BaseModel):
    id: str
    name: str
    price: int
    credits: int
    currency: str
    features: list[str]
