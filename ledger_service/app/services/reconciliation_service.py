"""주문 완료 처리 (결제 확인 경로 A/B 공통).

웹훅과 클라이언트 성공 콜백이 같은 주문을 동시에 완료하려 해도
주문 상태 CAS 와 주문 id 로 키를 건 지급 덕분에 크레딧은 한 번만 지급된다.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..exceptions import AccountNotFound, OrderNotFound
from ..models.order import CompletionSource, Order
from ..repositories.interfaces import OrderRepositoryInterface
from .ledger_events import LedgerEventPublisherInterface
from .ledger_service import LedgerService
from .payment_verifier import PaymentVerifierInterface


logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CompletionResult:
    order: Order
    # 이번 호출이 크레딧을 지급했는지
    credited: bool
    # 이미 다른 경로가 완료한 주문이었는지
    already_completed: bool
    balance: int | None = None


class ReconciliationService:
    def __init__(
        self,
        order_repo: OrderRepositoryInterface,
        ledger: LedgerService,
        payment_verifier: PaymentVerifierInterface | None = None,
        event_publisher: LedgerEventPublisherInterface | None = None,
    ) -> None:
        self._order_repo = order_repo
        self._ledger = ledger
        self._payment_verifier = payment_verifier
        self._event_publisher = event_publisher

    def complete_order(
        self,
        order_id: str,
        payment_id: str | None,
        source: CompletionSource,
    ) -> CompletionResult:
        order = self._order_repo.find_by_id(order_id)
        if order is None:
            raise OrderNotFound(order_id)
        if self._ledger.find_account(order.account_id) is None:
            raise AccountNotFound(order.account_id)

        won = self._order_repo.mark_completed(order_id, payment_id, source)
        if won is None:
            current = self._order_repo.find_by_id(order_id)
            if current is None:
                raise OrderNotFound(order_id)
            if current.credits_applied:
                logger.info(
                    "order already completed",
                    extra={
                        "event": "order.duplicate_completion",
                        "order_id": order_id,
                        "payment_id": payment_id,
                    },
                )
                return CompletionResult(order=current, credited=False, already_completed=True)

            # 완료 후 지급 전에 중단된 주문: 주문 id 키로 지급을 다시 시도한다.
            logger.warning(
                "completed order without applied credits, retrying grant",
                extra={"event": "order.grant_repair", "order_id": order_id},
            )
            balance = self._apply_grant(current)
            return CompletionResult(
                order=current,
                credited=balance is not None,
                already_completed=True,
                balance=balance,
            )

        logger.info(
            "order completed via %s",
            source.value,
            extra={
                "event": "order.completed",
                "order_id": order_id,
                "account_id": won.account_id,
                "payment_id": payment_id,
            },
        )
        balance = self._apply_grant(won)
        return CompletionResult(
            order=won.model_copy(update={"credits_applied": True}),
            credited=balance is not None,
            already_completed=False,
            balance=balance,
        )

    def confirm_client_payment(self, order_id: str, payment_id: str) -> CompletionResult:
        """클라이언트 성공 콜백 경로. 결제사 API 키가 있으면 결제를 먼저 검증한다."""
        order = self._order_repo.find_by_id(order_id)
        if order is None:
            raise OrderNotFound(order_id)
        if not order.is_completed:
            if self._payment_verifier is not None:
                self._payment_verifier.verify(order, payment_id)
            else:
                logger.warning(
                    "client payment confirmed without provider verification",
                    extra={
                        "event": "order.unverified_client_confirm",
                        "order_id": order_id,
                        "payment_id": payment_id,
                    },
                )
        return self.complete_order(order_id, payment_id, CompletionSource.CLIENT)

    def _apply_grant(self, order: Order) -> int | None:
        balance = self._ledger.apply_order_grant(order)
        if order.id is not None:
            self._order_repo.mark_credits_applied(order.id)
        if balance is not None and self._event_publisher is not None:
            self._event_publisher.order_completed(order)
        return balance
