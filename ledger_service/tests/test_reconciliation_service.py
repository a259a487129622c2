from __future__ import annotations

import logging

import pytest

from ledger_service.app.exceptions import (
    AccountNotFound,
    InvalidPlan,
    OrderAlreadyCompleted,
    OrderNotFound,
    PaymentVerificationError,
)
from ledger_service.app.models.account import INITIAL_GRANT
from ledger_service.app.models.order import CompletionSource, Order, OrderStatus


class RejectingVerifier:
    def __init__(self) -> None:
        self.calls: list[tuple[str | None, str]] = []

    def verify(self, order: Order, payment_id: str) -> None:
        self.calls.append((order.id, payment_id))
        raise PaymentVerificationError("payment is not captured: status=created")


class AcceptingVerifier:
    def __init__(self) -> None:
        self.calls: list[tuple[str | None, str]] = []

    def verify(self, order: Order, payment_id: str) -> None:
        self.calls.append((order.id, payment_id))


def test_create_order_copies_plan_credits_and_amount(fixture) -> None:
    order = fixture.container.orders.create_order("user-001", "professional")

    assert order.status is OrderStatus.CREATED
    assert order.amount == 49900
    assert order.currency == "INR"
    assert order.credits == 30
    assert "user-001" in fixture.accounts.accounts


def test_create_order_rejects_unknown_plan(fixture) -> None:
    with pytest.raises(InvalidPlan):
        fixture.container.orders.create_order("user-001", "platinum")
    assert fixture.orders.orders == {}


def test_webhook_and_client_confirmation_credit_once(fixture) -> None:
    container = fixture.container
    order = container.orders.create_order("user-001", "professional")

    first = container.reconciliation.complete_order(order.id, "pay_1", CompletionSource.WEBHOOK)
    second = container.reconciliation.confirm_client_payment(order.id, "pay_1")

    assert first.credited and not first.already_completed
    assert first.balance == INITIAL_GRANT + 30
    assert not second.credited and second.already_completed
    assert container.ledger.get_balance("user-001") == INITIAL_GRANT + 30

    stored = fixture.orders.orders[order.id]
    assert stored.completed_via is CompletionSource.WEBHOOK
    assert stored.credits_applied is True
    assert stored.payment_id == "pay_1"


def test_completion_uses_stored_order_credits(fixture) -> None:
    container = fixture.container
    order = container.orders.create_order("user-001", "starter")
    # 주문 생성 이후 카탈로그가 바뀌어도 주문에 복사된 값으로 지급한다.
    fixture.orders.orders[order.id] = fixture.orders.orders[order.id].model_copy(update={"credits": 7})

    container.reconciliation.complete_order(order.id, "pay_1", CompletionSource.WEBHOOK)

    assert container.ledger.get_balance("user-001") == INITIAL_GRANT + 7


def test_cancel_after_completion_is_rejected(fixture) -> None:
    container = fixture.container
    order = container.orders.create_order("user-001", "starter")
    container.reconciliation.complete_order(order.id, "pay_1", CompletionSource.WEBHOOK)

    with pytest.raises(OrderAlreadyCompleted):
        container.orders.cancel_order(order.id)
    with pytest.raises(OrderAlreadyCompleted):
        container.orders.fail_order(order.id, "card declined")

    assert fixture.orders.orders[order.id].status is OrderStatus.COMPLETED
    assert container.ledger.get_balance("user-001") == INITIAL_GRANT + 10


def test_repeated_cancel_is_noop(fixture) -> None:
    container = fixture.container
    order = container.orders.create_order("user-001", "starter")

    first = container.orders.cancel_order(order.id)
    second = container.orders.cancel_order(order.id)
    failed = container.orders.fail_order(order.id, "late failure")

    assert first.status is OrderStatus.CANCELLED
    assert second.status is OrderStatus.CANCELLED
    assert failed.status is OrderStatus.CANCELLED


def test_completion_after_cancel_still_credits(fixture) -> None:
    container = fixture.container
    order = container.orders.create_order("user-001", "starter")
    container.orders.cancel_order(order.id)

    result = container.reconciliation.complete_order(order.id, "pay_1", CompletionSource.WEBHOOK)

    assert result.credited
    assert fixture.orders.orders[order.id].status is OrderStatus.COMPLETED


def test_unknown_order_raises_without_state_change(fixture) -> None:
    with pytest.raises(OrderNotFound):
        fixture.container.reconciliation.complete_order(
            "000000000000000000000000", "pay_1", CompletionSource.WEBHOOK
        )
    assert fixture.accounts.accounts == {}


def test_missing_account_blocks_completion(fixture) -> None:
    container = fixture.container
    order = container.orders.create_order("user-001", "starter")
    del fixture.accounts.accounts["user-001"]

    with pytest.raises(AccountNotFound):
        container.reconciliation.complete_order(order.id, "pay_1", CompletionSource.WEBHOOK)
    assert fixture.orders.orders[order.id].status is OrderStatus.CREATED


def test_redelivery_repairs_grant_missing_after_completion(fixture) -> None:
    container = fixture.container
    order = container.orders.create_order("user-001", "starter")
    # 상태 전이 직후 지급 전에 프로세스가 중단된 상황
    fixture.orders.mark_completed(order.id, "pay_1", CompletionSource.WEBHOOK)

    repaired = container.reconciliation.complete_order(order.id, "pay_1", CompletionSource.WEBHOOK)
    again = container.reconciliation.complete_order(order.id, "pay_1", CompletionSource.WEBHOOK)

    assert repaired.credited and repaired.already_completed
    assert not again.credited
    assert fixture.orders.orders[order.id].credits_applied is True
    assert container.ledger.get_balance("user-001") == INITIAL_GRANT + 10


def test_client_confirmation_is_verified_with_provider(build_fixture) -> None:
    verifier = RejectingVerifier()
    fx = build_fixture(payment_verifier=verifier)
    order = fx.container.orders.create_order("user-001", "starter")

    with pytest.raises(PaymentVerificationError):
        fx.container.reconciliation.confirm_client_payment(order.id, "pay_1")

    assert verifier.calls == [(order.id, "pay_1")]
    assert fx.orders.orders[order.id].status is OrderStatus.CREATED
    assert fx.container.ledger.get_balance("user-001") == INITIAL_GRANT


def test_client_confirmation_skips_provider_for_completed_order(build_fixture) -> None:
    verifier = AcceptingVerifier()
    fx = build_fixture(payment_verifier=verifier)
    order = fx.container.orders.create_order("user-001", "starter")
    fx.container.reconciliation.complete_order(order.id, "pay_1", CompletionSource.WEBHOOK)

    result = fx.container.reconciliation.confirm_client_payment(order.id, "pay_1")

    assert result.already_completed
    assert verifier.calls == []


def test_unverified_client_confirmation_logs_warning(fixture, caplog) -> None:
    order = fixture.container.orders.create_order("user-001", "starter")

    with caplog.at_level(
        logging.WARNING, logger="ledger_service.app.services.reconciliation_service"
    ):
        result = fixture.container.reconciliation.confirm_client_payment(order.id, "pay_1")

    assert result.credited
    warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert [r.event for r in warnings] == ["order.unverified_client_confirm"]
    assert warnings[0].order_id == order.id
