from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ..exceptions import LedgerServiceError


logger = logging.getLogger(__name__)


async def ledger_error_handler(request: Request, exc: LedgerServiceError) -> JSONResponse:
    """도메인 예외를 {"detail": {"code", "message"}} 형태로 변환한다."""
    if exc.status_code >= 500:
        logger.error("%s: %s", exc.code, exc.message, extra={"path": request.url.path})
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": {"code": exc.code, "message": exc.message}},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(LedgerServiceError, ledger_error_handler)  # type: ignore[arg-type]
