"""ledger-service 테스트 공용 인메모리 레포지토리와 픽스처.

Fake 레포지토리는 MongoDB 단일 도큐먼트 원자성을 threading.Lock 으로 흉내 낸다.
조건 검사와 변경을 같은 락 안에서 수행하므로 동시성 테스트에서도 실제 저장소와 같은 결과를 낸다.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Callable

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient
from langchain_core.language_models.chat_models import BaseChatModel

from common.mongo.types import utc_now
from ledger_service.app.container import ServiceContainer, assemble_container
from ledger_service.app.main import create_app
from ledger_service.app.models.account import Account
from ledger_service.app.models.credit import CreditTransaction
from ledger_service.app.models.order import CompletionSource, Order, OrderStatus
from ledger_service.app.models.project import Project
from ledger_service.app.models.scheduled_content import ScheduledContent
from ledger_service.app.services.payment_verifier import PaymentVerifierInterface


WEBHOOK_SECRET = "whsec_test"


class FakeAccountRepository:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self.accounts: dict[str, Account] = {}
        self.create_calls = 0

    def get_or_create(self, account_id: str, initial_credits: int) -> tuple[Account, bool]:
        with self._lock:
            existing = self.accounts.get(account_id)
            if existing is not None:
                return existing.model_copy(deep=True), False
            self.create_calls += 1
            now = utc_now()
            account = Account(
                id=account_id,
                credits=initial_credits,
                created_at=now,
                updated_at=now,
            )
            self.accounts[account_id] = account
            return account.model_copy(deep=True), True

    def find(self, account_id: str) -> Account | None:
        with self._lock:
            account = self.accounts.get(account_id)
            return account.model_copy(deep=True) if account else None

    def adjust_credits(self, account_id: str, delta: int) -> Account | None:
        with self._lock:
            account = self.accounts.get(account_id)
            if account is None:
                return None
            if delta < 0 and account.credits < -delta:
                return None
            account.credits += delta
            account.updated_at = utc_now()
            if delta < 0:
                account.last_used_at = account.updated_at
            return account.model_copy(deep=True)

    def apply_order_grant(
        self, account_id: str, order_id: str, amount: int, plan_id: str
    ) -> Account | None:
        with self._lock:
            account = self.accounts.get(account_id)
            if account is None or order_id in account.applied_order_ids:
                return None
            account.credits += amount
            account.applied_order_ids.append(order_id)
            account.plan_id = plan_id
            account.last_purchase_at = utc_now()
            return account.model_copy(deep=True)


class FakeOrderRepository:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self.orders: dict[str, Order] = {}

    def insert(self, order: Order) -> Order:
        with self._lock:
            stored = order.model_copy(update={"id": str(ObjectId())})
            self.orders[stored.id] = stored
            return stored.model_copy()

    def find_by_id(self, order_id: str) -> Order | None:
        with self._lock:
            order = self.orders.get(order_id)
            return order.model_copy() if order else None

    def mark_completed(
        self, order_id: str, payment_id: str | None, source: CompletionSource
    ) -> Order | None:
        with self._lock:
            order = self.orders.get(order_id)
            if order is None or order.status is OrderStatus.COMPLETED:
                return None
            update: dict[str, object] = {
                "status": OrderStatus.COMPLETED,
                "completed_via": source,
                "completed_at": utc_now(),
                "updated_at": utc_now(),
            }
            if payment_id:
                update["payment_id"] = payment_id
            self.orders[order_id] = order.model_copy(update=update)
            return self.orders[order_id].model_copy()

    def mark_credits_applied(self, order_id: str) -> None:
        with self._lock:
            order = self.orders.get(order_id)
            if order is not None:
                self.orders[order_id] = order.model_copy(update={"credits_applied": True})

    def mark_closed(
        self, order_id: str, status: OrderStatus, error: str | None = None
    ) -> Order | None:
        with self._lock:
            order = self.orders.get(order_id)
            if order is None or order.status is not OrderStatus.CREATED:
                return None
            update: dict[str, object] = {"status": status, "updated_at": utc_now()}
            if error:
                update["error"] = error
            self.orders[order_id] = order.model_copy(update=update)
            return self.orders[order_id].model_copy()


class FakeCreditTransactionRepository:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self.created: list[CreditTransaction] = []

    def create(self, tx: CreditTransaction) -> CreditTransaction:
        with self._lock:
            stored = tx.model_copy(update={"id": str(ObjectId())})
            self.created.append(stored)
            return stored

    def list_by_account(
        self, account_id: str, page: int, page_size: int
    ) -> tuple[list[CreditTransaction], int]:
        items = [tx for tx in reversed(self.created) if tx.account_id == account_id]
        start = (page - 1) * page_size
        return items[start : start + page_size], len(items)


class FakeProjectRepository:
    def __init__(self) -> None:
        self.projects: list[Project] = []

    def insert(self, project: Project) -> Project:
        stored = project.model_copy(update={"id": str(ObjectId())})
        self.projects.append(stored)
        return stored

    def find(self, account_id: str, project_id: str) -> Project | None:
        for project in self.projects:
            if project.id == project_id and project.account_id == account_id:
                return project
        return None

    def list_by_account(
        self, account_id: str, page: int, page_size: int
    ) -> tuple[list[Project], int]:
        items = [p for p in reversed(self.projects) if p.account_id == account_id]
        start = (page - 1) * page_size
        return items[start : start + page_size], len(items)


class FakeScheduledContentRepository:
    def __init__(self) -> None:
        self.items: list[ScheduledContent] = []

    def insert(self, item: ScheduledContent) -> ScheduledContent:
        stored = item.model_copy(update={"id": str(ObjectId())})
        self.items.append(stored)
        return stored

    def list_by_account(self, account_id: str) -> list[ScheduledContent]:
        return sorted(
            (item for item in self.items if item.account_id == account_id),
            key=lambda item: item.publish_at,
        )


class RecordingEventPublisher:
    def __init__(self) -> None:
        self.consumed: list[tuple[str, int, str]] = []
        self.completed: list[str] = []

    def credit_consumed(self, account_id: str, remaining: int, reason: str) -> None:
        self.consumed.append((account_id, remaining, reason))

    def order_completed(self, order: Order) -> None:
        self.completed.append(order.id or "")


@dataclass
class LedgerFixture:
    container: ServiceContainer
    accounts: FakeAccountRepository
    orders: FakeOrderRepository
    transactions: FakeCreditTransactionRepository
    projects: FakeProjectRepository
    schedules: FakeScheduledContentRepository
    events: RecordingEventPublisher


BuildFixture = Callable[..., LedgerFixture]


@pytest.fixture
def build_fixture() -> BuildFixture:
    def _build(
        chat_model: BaseChatModel | None = None,
        payment_verifier: PaymentVerifierInterface | None = None,
    ) -> LedgerFixture:
        accounts = FakeAccountRepository()
        orders = FakeOrderRepository()
        transactions = FakeCreditTransactionRepository()
        projects = FakeProjectRepository()
        schedules = FakeScheduledContentRepository()
        events = RecordingEventPublisher()
        container = assemble_container(
            account_repo=accounts,
            order_repo=orders,
            transaction_repo=transactions,
            project_repo=projects,
            schedule_repo=schedules,
            webhook_secret=WEBHOOK_SECRET,
            chat_model=chat_model,
            payment_verifier=payment_verifier,
            event_publisher=events,
            checkout_key_id="rzp_test_key",
        )
        return LedgerFixture(
            container=container,
            accounts=accounts,
            orders=orders,
            transactions=transactions,
            projects=projects,
            schedules=schedules,
            events=events,
        )

    return _build


@pytest.fixture
def fixture(build_fixture: BuildFixture) -> LedgerFixture:
    return build_fixture()


@pytest.fixture
def client(fixture: LedgerFixture) -> TestClient:
    return TestClient(create_app(fixture.container))
