from __future__ import annotations

from typing import Protocol

from ..models.account import Account
from ..models.credit import CreditTransaction
from ..models.order import CompletionSource, Order, OrderStatus
from ..models.project import Project
from ..models.scheduled_content import ScheduledContent


class AccountRepositoryInterface(Protocol):
    """AccountRepository가 따라야 할 최소한의 계약.

    잔액 변경은 모두 단일 도큐먼트 원자 연산이어야 한다.
    조건이 맞지 않아 아무것도 바뀌지 않았으면 None 을 반환한다.
    """

    def get_or_create(
        self, account_id: str, initial_credits: int
    ) -> tuple[Account, bool]:  # pragma: no cover - Protocol
        """(계정, 이번 호출로 생성되었는지) 를 반환한다."""
        ...

    def find(self, account_id: str) -> Account | None:  # pragma: no cover - Protocol
        ...

    def adjust_credits(
        self, account_id: str, delta: int
    ) -> Account | None:  # pragma: no cover - Protocol
        """잔액에 delta 를 더한다. 음수 delta 는 credits >= -delta 인 경우에만 적용된다."""
        ...

    def apply_order_grant(
        self, account_id: str, order_id: str, amount: int, plan_id: str
    ) -> Account | None:  # pragma: no cover - Protocol
        """order_id 가 아직 반영되지 않은 경우에만 지급한다."""
        ...


class OrderRepositoryInterface(Protocol):
    def insert(self, order: Order) -> Order:  # pragma: no cover - Protocol
        ...

    def find_by_id(self, order_id: str) -> Order | None:  # pragma: no cover - Protocol
        ...

    def mark_completed(
        self, order_id: str, payment_id: str | None, source: CompletionSource
    ) -> Order | None:  # pragma: no cover - Protocol
        """completed 가 아닌 주문만 completed 로 전이한다. 전이에 성공한 호출만 주문을 받는다."""
        ...

    def mark_credits_applied(self, order_id: str) -> None:  # pragma: no cover - Protocol
        ...

    def mark_closed(
        self, order_id: str, status: OrderStatus, error: str | None = None
    ) -> Order | None:  # pragma: no cover - Protocol
        """created 상태의 주문만 cancelled/failed 로 전이한다."""
        ...


class CreditTransactionRepositoryInterface(Protocol):
    def create(
        self, tx: CreditTransaction
    ) -> CreditTransaction:  # pragma: no cover - Protocol
        ...

    def list_by_account(
        self, account_id: str, page: int, page_size: int
    ) -> tuple[list[CreditTransaction], int]:  # pragma: no cover - Protocol
        ...


class ProjectRepositoryInterface(Protocol):
    def insert(self, project: Project) -> Project:  # pragma: no cover - Protocol
        ...

    def find(
        self, account_id: str, project_id: str
    ) -> Project | None:  # pragma: no cover - Protocol
        ...

    def list_by_account(
        self, account_id: str, page: int, page_size: int
    ) -> tuple[list[Project], int]:  # pragma: no cover - Protocol
        ...


class ScheduledContentRepositoryInterface(Protocol):
    def insert(
        self, item: ScheduledContent
    ) -> ScheduledContent:  # pragma: no cover - Protocol
        ...

    def list_by_account(
        self, account_id: str
    ) -> list[ScheduledContent]:  # pragma: no cover - Protocol
        """publish_at 오름차순."""
        ...
