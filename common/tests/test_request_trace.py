from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.testclient import TestClient

from common.middleware.request_trace import REQUEST_ID_HEADER, RequestTraceMiddleware


class ListHandler(logging.Handler):
    def __init__(self) -> None:
        super().__init__()
        self.records: list[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)


def _app(logger: logging.Logger) -> FastAPI:
    app = FastAPI()
    app.add_middleware(RequestTraceMiddleware, logger=logger)

    @app.post("/webhook")
    async def webhook(request: Request) -> dict[str, int]:
        return {"size": len(await request.body())}

    @app.post("/api/v1/orders")
    async def orders(request: Request) -> dict[str, int]:
        return {"size": len(await request.body())}

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    return app


def _logger() -> tuple[logging.Logger, ListHandler]:
    logger = logging.getLogger("request_trace_test")
    logger.handlers.clear()
    handler = ListHandler()
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)
    logger.propagate = False
    return logger, handler


def test_request_id_is_propagated_to_response() -> None:
    logger, _ = _logger()
    client = TestClient(_app(logger))

    resp = client.get("/health", headers={REQUEST_ID_HEADER: "req-1"})

    assert resp.headers[REQUEST_ID_HEADER] == "req-1"


def test_webhook_body_is_never_logged() -> None:
    logger, handler = _logger()
    client = TestClient(_app(logger))

    resp = client.post("/webhook", content=b'{"email":"someone@example.com"}')

    assert resp.json() == {"size": 31}
    assert len(handler.records) == 1
    assert not hasattr(handler.records[0], "body")


def test_api_body_snippet_is_logged_and_health_is_skipped() -> None:
    logger, handler = _logger()
    client = TestClient(_app(logger))

    client.get("/health")
    client.post("/api/v1/orders", content=b'{"plan_id":"starter"}')

    assert len(handler.records) == 1
    assert handler.records[0].body == '{"plan_id":"starter"}'
    assert handler.records[0].status == 200
