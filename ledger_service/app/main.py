from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from common.logger import setup_logger
from common.middleware.request_trace import RequestTraceMiddleware

from .api.errors import register_exception_handlers
from .api.health import router as health_router
from .api.v1 import api_router
from .api.webhook import router as webhook_router
from .config import get_frontend_url, load_config
from .container import ServiceContainer, build_container


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):  # pragma: no cover - framework hook
    owned: ServiceContainer | None = None
    if getattr(app.state, "container", None) is None:
        owned = build_container(load_config())
        app.state.container = owned
        logger.info("ledger-service started")
    try:
        yield
    finally:
        if owned is not None:
            owned.close()
            app.state.container = None


def create_app(container: ServiceContainer | None = None) -> FastAPI:
    """FastAPI 앱 생성.

    container 를 넘기면 lifespan 에서 새로 조립하지 않고 그대로 사용한다. (테스트용)
    """
    setup_logger()
    app = FastAPI(
        title="ContentAI Ledger Service",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.container = container

    # 공통 Request/Span ID 로그 미들웨어
    app.add_middleware(RequestTraceMiddleware)

    frontend_url = get_frontend_url()
    if frontend_url:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=[frontend_url],
            allow_methods=["*"],
            allow_headers=["*"],
        )

    register_exception_handlers(app)

    app.include_router(health_router, tags=["health"])
    app.include_router(webhook_router, tags=["webhook"])
    app.include_router(api_router, prefix="/api/v1")

    return app


load_dotenv()
app = create_app()


def main() -> None:
    import uvicorn

    port = int(os.getenv("LEDGER_SERVICE_PORT", "8003"))
    uvicorn.run(
        "ledger_service.app.main:app",
        host="0.0.0.0",
        port=port,
        reload=False,
        access_log=False,
    )


if __name__ == "__main__":  # pragma: no cover - CLI entrypoint
    main()
