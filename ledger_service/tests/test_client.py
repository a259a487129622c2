from __future__ import annotations

import httpx
import pytest

from ledger_service.app.client import BalanceCache, InsufficientCreditsError, LedgerClient


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.now += seconds


def _client(handler, clock: FakeClock, max_age: float = 60.0) -> LedgerClient:
    http = httpx.Client(base_url="http://ledger.test", transport=httpx.MockTransport(handler))
    return LedgerClient(
        "user-001",
        http_client=http,
        cache=BalanceCache(max_age_seconds=max_age),
        clock=clock,
        sleep=clock.sleep,
    )


def test_balance_cache_staleness() -> None:
    cache = BalanceCache(max_age_seconds=30)
    assert cache.is_stale(now=0)

    cache.update(5, now=100)

    assert cache.balance == 5
    assert not cache.is_stale(now=129)
    assert cache.is_stale(now=130)


def test_balance_is_refreshed_only_when_stale() -> None:
    clock = FakeClock()
    calls: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request.url.path)
        return httpx.Response(200, json={"credits": 7})

    client = _client(handler, clock, max_age=60)

    assert client.balance() == 7
    clock.now = 30
    assert client.balance() == 7
    clock.now = 61
    assert client.balance() == 7

    assert calls == ["/api/v1/credits/user-001", "/api/v1/credits/user-001"]


def test_feature_result_updates_cache_from_remaining() -> None:
    clock = FakeClock()
    client = _client(lambda request: httpx.Response(200, json={"remaining": 4}), clock)

    client.run_feature("grammar", {"text": "hello"})

    assert client.cache.balance == 4


def test_insufficient_credits_zeroes_cache() -> None:
    clock = FakeClock()
    body = {"detail": {"code": "insufficient_credits", "message": "no credits"}}
    client = _client(lambda request: httpx.Response(402, json=body), clock)
    client.cache.update(3, now=0)

    with pytest.raises(InsufficientCreditsError):
        client.deduct_one()

    assert client.cache.balance == 0


def test_wait_for_order_polls_until_terminal_then_refreshes() -> None:
    clock = FakeClock()
    statuses = iter(["created", "created", "completed"])

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.startswith("/api/v1/orders/"):
            return httpx.Response(200, json={"status": next(statuses)})
        return httpx.Response(200, json={"credits": 40})

    client = _client(handler, clock)

    status = client.wait_for_order("order-1", timeout_seconds=30, interval_seconds=2)

    assert status == "completed"
    assert clock.now == 4
    assert client.cache.balance == 40


def test_wait_for_order_gives_up_after_timeout() -> None:
    clock = FakeClock()

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.startswith("/api/v1/orders/"):
            return httpx.Response(200, json={"status": "created"})
        return httpx.Response(200, json={"credits": 10})

    client = _client(handler, clock)

    assert client.wait_for_order("order-1", timeout_seconds=5, interval_seconds=2) == "created"
    assert client.cache.balance == 10
