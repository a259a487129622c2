"""결제사(Razorpay) API 로 클라이언트가 보고한 결제를 검증한다."""

from __future__ import annotations

import logging
from typing import Protocol

import httpx

from ..exceptions import PaymentVerificationError, ProviderError
from ..models.order import Order


logger = logging.getLogger(__name__)


ACCEPTED_PAYMENT_STATUSES = frozenset({"captured", "authorized"})


class PaymentVerifierInterface(Protocol):
    def verify(self, order: Order, payment_id: str) -> None:  # pragma: no cover - Protocol
        """검증 실패 시 PaymentVerificationError."""
        ...


class RazorpayPaymentVerifier(PaymentVerifierInterface):
    def __init__(
        self,
        key_id: str,
        key_secret: str,
        base_url: str = "https://api.razorpay.com/v1",
        timeout_seconds: float = 10.0,
        http_client: httpx.Client | None = None,
    ) -> None:
        self._client = http_client or httpx.Client(
            base_url=base_url,
            auth=(key_id, key_secret),
            timeout=timeout_seconds,
        )

    def close(self) -> None:
        self._client.close()

    def verify(self, order: Order, payment_id: str) -> None:
        try:
            resp = self._client.get(f"/payments/{payment_id}")
        except httpx.HTTPError as exc:
            raise ProviderError("razorpay", str(exc)) from exc

        if resp.status_code in (400, 404):
            raise PaymentVerificationError(f"payment not found: {payment_id}")
        if resp.status_code >= 400:
            raise ProviderError("razorpay", f"unexpected status {resp.status_code}")

        payment = resp.json()
        notes = payment.get("notes") or {}
        if notes.get("orderId") != order.id:
            raise PaymentVerificationError("payment does not reference this order")
        if payment.get("status") not in ACCEPTED_PAYMENT_STATUSES:
            raise PaymentVerificationError(
                f"payment is not captured: status={payment.get('status')}"
            )
        if payment.get("amount") != order.amount or payment.get("currency") != order.currency:
            raise PaymentVerificationError("payment amount does not match the order")

        logger.info(
            "payment verified with provider",
            extra={"order_id": order.id, "payment_id": payment_id},
        )
