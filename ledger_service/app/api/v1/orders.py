"""구매 주문 API 라우터.

주문 생성은 호스티드 체크아웃 옵션을 함께 돌려주고,
confirm 은 결제 확인 경로 B(클라이언트 성공 콜백)이다.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, status

from ..deps import get_checkout_key_id, get_order_service, get_reconciliation_service
from ..schemas.orders import (
    CheckoutNotes,
    CheckoutOptions,
    ConfirmOrderRequest,
    ConfirmOrderResponse,
    CreateOrderRequest,
    CreateOrderResponse,
    FailOrderRequest,
    OrderResponse,
)
from ...models.order import Order
from ...models.plan import CHECKOUT_NAME, get_plan
from ...services.order_service import OrderService
from ...services.reconciliation_service import ReconciliationService


router = APIRouter()


def _to_order_response(order: Order) -> OrderResponse:
    return OrderResponse(
        id=order.id or "",
        account_id=order.account_id,
        plan_id=order.plan_id,
        amount=order.amount,
        currency=order.currency,
        credits=order.credits,
        status=order.status.value,
        payment_id=order.payment_id,
        error=order.error,
        completed_via=order.completed_via.value if order.completed_via else None,
        created_at=order.created_at,
        updated_at=order.updated_at,
        completed_at=order.completed_at,
    )


@router.post("", status_code=status.HTTP_201_CREATED)
def create_order(
    req: CreateOrderRequest,
    orders: Annotated[OrderService, Depends(get_order_service)],
    key_id: Annotated[str | None, Depends(get_checkout_key_id)],
) -> CreateOrderResponse:
    order = orders.create_order(req.account_id, req.plan_id)
    plan = get_plan(order.plan_id)
    plan_name = plan.name if plan is not None else order.plan_id
    return CreateOrderResponse(
        order=_to_order_response(order),
        checkout=CheckoutOptions(
            key=key_id,
            amount=order.amount,
            currency=order.currency,
            name=CHECKOUT_NAME,
            description=f"{plan_name} Plan - {order.credits} Credits",
            notes=CheckoutNotes(orderId=order.id or ""),
        ),
    )


@router.get("/{order_id}")
def get_order(
    order_id: str,
    orders: Annotated[OrderService, Depends(get_order_service)],
) -> OrderResponse:
    return _to_order_response(orders.get_order(order_id))


@router.post("/{order_id}/confirm")
def confirm_order(
    order_id: str,
    req: ConfirmOrderRequest,
    reconciliation: Annotated[ReconciliationService, Depends(get_reconciliation_service)],
) -> ConfirmOrderResponse:
    """클라이언트 결제 성공 콜백. 웹훅과 동시에 와도 크레딧은 한 번만 지급된다."""
    result = reconciliation.confirm_client_payment(order_id, req.payment_id)
    return ConfirmOrderResponse(
        order=_to_order_response(result.order),
        credited=result.credited,
        already_completed=result.already_completed,
        balance=result.balance,
    )


@router.post("/{order_id}/cancel")
def cancel_order(
    order_id: str,
    orders: Annotated[OrderService, Depends(get_order_service)],
) -> OrderResponse:
    """결제창 닫힘. 이미 완료된 주문이면 409."""
    return _to_order_response(orders.cancel_order(order_id))


@router.post("/{order_id}/fail")
def fail_order(
    order_id: str,
    orders: Annotated[OrderService, Depends(get_order_service)],
    req: FailOrderRequest | None = None,
) -> OrderResponse:
    error = req.error if req is not None else None
    return _to_order_response(orders.fail_order(order_id, error))
