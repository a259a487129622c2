from __future__ import annotations

import json

from pymongo.errors import ExecutionTimeout

from ledger_service.app.models.account import INITIAL_GRANT
from ledger_service.app.models.order import OrderStatus
from ledger_service.app.services.webhook_service import compute_signature


WEBHOOK_SECRET = "whsec_test"


def _payload(order_id: str | None, event: str | None = "payment.captured", **entity) -> bytes:
    notes = {"orderId": order_id} if order_id is not None else {}
    body: dict = {
        "payload": {"payment": {"entity": {"id": "pay_123", "notes": notes, **entity}}},
    }
    if event is not None:
        body["event"] = event
    return json.dumps(body).encode("utf-8")


def _post(client, raw: bytes, signature: str | None = None):
    headers = {"content-type": "application/json"}
    sig = compute_signature(WEBHOOK_SECRET, raw) if signature is None else signature
    if sig:
        headers["x-razorpay-signature"] = sig
    return client.post("/webhook", content=raw, headers=headers)


def test_captured_payment_completes_order_and_grants_credits(client, fixture) -> None:
    order = fixture.container.orders.create_order("user-001", "professional")

    resp = _post(client, _payload(order.id))

    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}
    stored = fixture.orders.orders[order.id]
    assert stored.status is OrderStatus.COMPLETED
    assert stored.payment_id == "pay_123"
    assert fixture.accounts.accounts["user-001"].credits == INITIAL_GRANT + 30


def test_redelivered_webhook_grants_once(client, fixture) -> None:
    order = fixture.container.orders.create_order("user-001", "starter")
    raw = _payload(order.id)

    assert _post(client, raw).status_code == 200
    assert _post(client, raw).status_code == 200

    assert fixture.accounts.accounts["user-001"].credits == INITIAL_GRANT + 10


def test_missing_event_field_is_treated_as_capture(client, fixture) -> None:
    order = fixture.container.orders.create_order("user-001", "starter")

    resp = _post(client, _payload(order.id, event=None))

    assert resp.status_code == 200
    assert fixture.orders.orders[order.id].status is OrderStatus.COMPLETED


def test_tampered_body_is_rejected_without_state_change(client, fixture) -> None:
    order = fixture.container.orders.create_order("user-001", "enterprise")
    raw = _payload(order.id)
    signature = compute_signature(WEBHOOK_SECRET, raw)
    tampered = raw.replace(b"pay_123", b"pay_999")

    resp = _post(client, tampered, signature=signature)

    assert resp.status_code == 400
    assert resp.json() == {"error": "Invalid signature"}
    assert fixture.orders.orders[order.id].status is OrderStatus.CREATED
    assert fixture.accounts.accounts["user-001"].credits == INITIAL_GRANT


def test_missing_signature_is_rejected(client, fixture) -> None:
    order = fixture.container.orders.create_order("user-001", "starter")

    resp = _post(client, _payload(order.id), signature="")

    assert resp.status_code == 400
    assert resp.json() == {"error": "Invalid signature"}


def test_signed_payload_without_order_reference_is_invalid(client) -> None:
    resp = _post(client, _payload(None))

    assert resp.status_code == 400
    body = resp.json()
    assert body["error"] == "Invalid payload"
    assert "orderId" in body["message"]


def test_unknown_order_returns_500_for_provider_retry(client) -> None:
    resp = _post(client, _payload("000000000000000000000000"))

    assert resp.status_code == 500
    body = resp.json()
    assert body["error"] == "Internal server error"
    assert "Order not found" in body["message"]


def test_payment_failed_marks_order_failed(client, fixture) -> None:
    order = fixture.container.orders.create_order("user-001", "starter")

    resp = _post(
        client,
        _payload(order.id, event="payment.failed", error_description="card declined"),
    )

    assert resp.status_code == 200
    stored = fixture.orders.orders[order.id]
    assert stored.status is OrderStatus.FAILED
    assert stored.error == "card declined"


def test_payment_failed_after_completion_keeps_order_completed(client, fixture) -> None:
    order = fixture.container.orders.create_order("user-001", "starter")
    _post(client, _payload(order.id))

    resp = _post(client, _payload(order.id, event="payment.failed"))

    assert resp.status_code == 200
    assert fixture.orders.orders[order.id].status is OrderStatus.COMPLETED
    assert fixture.accounts.accounts["user-001"].credits == INITIAL_GRANT + 10


def test_unrelated_event_is_acknowledged_without_change(client, fixture) -> None:
    order = fixture.container.orders.create_order("user-001", "starter")

    resp = _post(client, _payload(order.id, event="refund.created"))

    assert resp.status_code == 200
    assert fixture.orders.orders[order.id].status is OrderStatus.CREATED


def test_store_timeout_returns_500_without_state_change(client, fixture, monkeypatch) -> None:
    order = fixture.container.orders.create_order("user-001", "professional")

    def _timeout(*args, **kwargs):
        raise ExecutionTimeout("operation exceeded time limit")

    monkeypatch.setattr(fixture.orders, "mark_completed", _timeout)

    resp = _post(client, _payload(order.id))

    assert resp.status_code == 500
    assert resp.json() == {
        "error": "Internal server error",
        "message": "operation exceeded time limit",
    }
    assert fixture.orders.orders[order.id].status is OrderStatus.CREATED
    assert fixture.accounts.accounts["user-001"].credits == INITIAL_GRANT
    assert fixture.events.completed == []
