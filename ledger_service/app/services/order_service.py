from __future__ import annotations

import logging

from common.mongo.types import utc_now

from ..exceptions import InvalidPlan, OrderAlreadyCompleted, OrderNotFound
from ..models.order import Order, OrderStatus
from ..models.plan import CURRENCY, get_plan
from ..repositories.interfaces import OrderRepositoryInterface
from .ledger_service import LedgerService


logger = logging.getLogger(__name__)


class OrderService:
    """구매 주문 생성/조회와 취소/실패 전이."""

    def __init__(self, order_repo: OrderRepositoryInterface, ledger: LedgerService) -> None:
        self._order_repo = order_repo
        self._ledger = ledger

    def create_order(self, account_id: str, plan_id: str) -> Order:
        plan = get_plan(plan_id)
        if plan is None:
            raise InvalidPlan(plan_id)

        self._ledger.initialize_account(account_id)

        now = utc_now()
        order = self._order_repo.insert(
            Order(
                account_id=account_id,
                plan_id=plan.id,
                amount=plan.amount,
                currency=CURRENCY,
                credits=plan.credits,
                status=OrderStatus.CREATED,
                created_at=now,
                updated_at=now,
            )
        )
        logger.info(
            "order created plan=%s amount=%d",
            plan.id,
            plan.amount,
            extra={"event": "order.created", "account_id": account_id, "order_id": order.id},
        )
        return order

    def get_order(self, order_id: str) -> Order:
        order = self._order_repo.find_by_id(order_id)
        if order is None:
            raise OrderNotFound(order_id)
        return order

    def cancel_order(self, order_id: str) -> Order:
        """결제창을 닫은 경우. created 가 아닌 주문은 그대로 둔다."""
        return self._close(order_id, OrderStatus.CANCELLED)

    def fail_order(self, order_id: str, error: str | None = None) -> Order:
        return self._close(order_id, OrderStatus.FAILED, error)

    def _close(self, order_id: str, status: OrderStatus, error: str | None = None) -> Order:
        order = self._order_repo.mark_closed(order_id, status, error)
        if order is not None:
            logger.info(
                "order %s",
                status.value,
                extra={"event": f"order.{status.value}", "order_id": order_id},
            )
            return order

        current = self._order_repo.find_by_id(order_id)
        if current is None:
            raise OrderNotFound(order_id)
        if current.is_completed:
            raise OrderAlreadyCompleted(order_id)
        # 이미 cancelled/failed 인 주문: 반복 요청은 no-op
        return current
