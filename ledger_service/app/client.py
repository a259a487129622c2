"""UI 레이어용 원장 클라이언트와 잔액 캐시.

클라이언트는 잔액을 직접 계산하지 않는다. 캐시는 표시용이며 다음 시점에만 갱신된다.
- 차감 응답의 remaining (post-deduction)
- 구매 후 주문이 종료 상태가 될 때까지 폴링한 뒤 (post-purchase poll)
- 캐시가 max_age_seconds 보다 오래되었을 때 (periodic refresh)
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable

import httpx


logger = logging.getLogger(__name__)


TERMINAL_ORDER_STATUSES = frozenset({"completed", "cancelled", "failed"})


class InsufficientCreditsError(Exception):
    """서버가 402 를 반환함. 구매 흐름으로 안내해야 한다."""


@dataclass(slots=True)
class BalanceCache:
    max_age_seconds: float = 60.0
    balance: int | None = None
    refreshed_at: float | None = None

    def update(self, balance: int, now: float | None = None) -> None:
        self.balance = balance
        self.refreshed_at = time.monotonic() if now is None else now

    def is_stale(self, now: float | None = None) -> bool:
        if self.refreshed_at is None:
            return True
        current = time.monotonic() if now is None else now
        return current - self.refreshed_at >= self.max_age_seconds


class LedgerClient:
    def __init__(
        self,
        account_id: str,
        base_url: str = "http://localhost:8003",
        *,
        http_client: httpx.Client | None = None,
        cache: BalanceCache | None = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._account_id = account_id
        self._client = http_client or httpx.Client(base_url=base_url, timeout=10.0)
        self.cache = cache or BalanceCache()
        self._clock = clock
        self._sleep = sleep

    def close(self) -> None:
        self._client.close()

    def refresh_balance(self) -> int:
        resp = self._client.get(f"/api/v1/credits/{self._account_id}")
        resp.raise_for_status()
        balance = int(resp.json()["credits"])
        self.cache.update(balance, now=self._clock())
        return balance

    def balance(self) -> int:
        """캐시된 잔액. 오래되었으면 서버에서 다시 읽는다."""
        if self.cache.balance is None or self.cache.is_stale(now=self._clock()):
            return self.refresh_balance()
        return self.cache.balance

    def run_feature(self, feature: str, payload: dict[str, Any]) -> dict[str, Any]:
        """AI 기능 호출. 응답의 remaining 으로 캐시를 갱신한다."""
        resp = self._client.post(
            f"/api/v1/features/{self._account_id}/{feature}", json=payload
        )
        if resp.status_code == 402:
            self.cache.update(0, now=self._clock())
            raise InsufficientCreditsError(resp.json()["detail"]["message"])
        resp.raise_for_status()
        body = resp.json()
        self.cache.update(int(body["remaining"]), now=self._clock())
        return body

    def deduct_one(self, reason: str = "feature") -> int:
        resp = self._client.post(
            f"/api/v1/credits/{self._account_id}/deduct", json={"reason": reason}
        )
        if resp.status_code == 402:
            self.cache.update(0, now=self._clock())
            raise InsufficientCreditsError(resp.json()["detail"]["message"])
        resp.raise_for_status()
        remaining = int(resp.json()["remaining"])
        self.cache.update(remaining, now=self._clock())
        return remaining

    def wait_for_order(
        self,
        order_id: str,
        timeout_seconds: float = 60.0,
        interval_seconds: float = 2.0,
    ) -> str:
        """주문이 종료 상태가 될 때까지 폴링하고 잔액을 갱신한다. 마지막 상태를 반환한다."""
        deadline = self._clock() + timeout_seconds
        status = "created"
        while True:
            resp = self._client.get(f"/api/v1/orders/{order_id}")
            resp.raise_for_status()
            status = resp.json()["status"]
            if status in TERMINAL_ORDER_STATUSES or self._clock() >= deadline:
                break
            self._sleep(interval_seconds)

        if status not in TERMINAL_ORDER_STATUSES:
            logger.warning("order %s still %s after %.0fs", order_id, status, timeout_seconds)
        self.refresh_balance()
        return status
