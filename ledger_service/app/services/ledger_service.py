"""크레딧 원장 서비스.

계정 초기화, 잔액 조회, 1 크레딧 차감, 지급, 주문 지급, 트랜잭션 로깅을 처리한다.
잔액의 정합성은 레포지토리의 원자 연산이 보장하고, 트랜잭션 로그는 감사용이다.
"""

from __future__ import annotations

import logging

from common.mongo.types import utc_now

from ..exceptions import AccountNotFound, InsufficientCredits
from ..models.account import INITIAL_GRANT, Account
from ..models.credit import CreditTransaction, CreditTransactionType
from ..models.order import Order
from ..repositories.interfaces import (
    AccountRepositoryInterface,
    CreditTransactionRepositoryInterface,
)
from .ledger_events import LedgerEventPublisherInterface


logger = logging.getLogger(__name__)


class LedgerService:
    """계정 잔액 관련 비즈니스 로직."""

    def __init__(
        self,
        account_repo: AccountRepositoryInterface,
        transaction_repo: CreditTransactionRepositoryInterface,
        event_publisher: LedgerEventPublisherInterface | None = None,
    ) -> None:
        self._account_repo = account_repo
        self._transaction_repo = transaction_repo
        self._event_publisher = event_publisher

    def initialize_account(self, account_id: str) -> Account:
        """계정이 없으면 INITIAL_GRANT 로 생성하고, 있으면 그대로 반환한다."""
        account, created = self._account_repo.get_or_create(account_id, INITIAL_GRANT)
        if created:
            logger.info(
                "account initialized",
                extra={"event": "account.initialized", "account_id": account_id},
            )
            self._log_transaction(
                account_id,
                CreditTransactionType.INITIAL_GRANT,
                amount=INITIAL_GRANT,
                balance_after=account.credits,
                reason="가입 무료 크레딧",
            )
        return account

    def find_account(self, account_id: str) -> Account | None:
        return self._account_repo.find(account_id)

    def get_balance(self, account_id: str) -> int:
        return self.initialize_account(account_id).credits

    def deduct_one(self, account_id: str, reason: str = "feature") -> int:
        """1 크레딧 차감 후 남은 잔액을 반환한다. 잔액이 없으면 InsufficientCredits."""
        account = self._account_repo.adjust_credits(account_id, -1)
        if account is None:
            # 필터 불일치: 계정이 없거나 잔액이 0 이다.
            current = self.initialize_account(account_id)
            if current.credits <= 0:
                raise InsufficientCredits(account_id, current.credits)
            account = self._account_repo.adjust_credits(account_id, -1)
            if account is None:
                raise InsufficientCredits(account_id, 0)

        self._log_transaction(
            account_id,
            CreditTransactionType.CONSUME,
            amount=-1,
            balance_after=account.credits,
            reason=reason,
        )
        if self._event_publisher is not None:
            self._event_publisher.credit_consumed(account_id, account.credits, reason)
        return account.credits

    def grant_credits(
        self,
        account_id: str,
        amount: int,
        reason: str = "grant",
        reference_id: str | None = None,
    ) -> int:
        """크레딧 지급 후 잔액을 반환한다. 계정이 없으면 AccountNotFound."""
        if amount <= 0:
            raise ValueError(f"grant amount must be > 0, got: {amount}")

        account = self._account_repo.adjust_credits(account_id, amount)
        if account is None:
            raise AccountNotFound(account_id)

        self._log_transaction(
            account_id,
            CreditTransactionType.GRANT,
            amount=amount,
            balance_after=account.credits,
            reason=reason,
            reference_id=reference_id,
        )
        return account.credits

    def apply_order_grant(self, order: Order) -> int | None:
        """주문 크레딧을 주문 id 기준으로 한 번만 지급한다.

        이번 호출로 지급되었으면 새 잔액, 이미 지급된 주문이면 None 을 반환한다.
        """
        if order.id is None:
            raise ValueError("order id is required to apply a grant")

        account = self._account_repo.apply_order_grant(
            order.account_id, order.id, order.credits, order.plan_id
        )
        if account is None:
            if self._account_repo.find(order.account_id) is None:
                raise AccountNotFound(order.account_id)
            return None

        logger.info(
            "order credits granted",
            extra={
                "event": "order.credits_granted",
                "account_id": order.account_id,
                "order_id": order.id,
            },
        )
        self._log_transaction(
            order.account_id,
            CreditTransactionType.PURCHASE,
            amount=order.credits,
            balance_after=account.credits,
            reason=f"{order.plan_id} 요금제 구매",
            reference_id=order.id,
        )
        return account.credits

    def get_history(
        self, account_id: str, page: int = 1, page_size: int = 20
    ) -> tuple[list[CreditTransaction], int]:
        return self._transaction_repo.list_by_account(account_id, page, page_size)

    def _log_transaction(
        self,
        account_id: str,
        tx_type: CreditTransactionType,
        amount: int,
        balance_after: int,
        reason: str,
        reference_id: str | None = None,
    ) -> None:
        now = utc_now()
        self._transaction_repo.create(
            CreditTransaction(
                account_id=account_id,
                type=tx_type,
                amount=amount,
                balance_after=balance_after,
                reason=reason,
                reference_id=reference_id,
                created_at=now,
                updated_at=now,
            )
        )
