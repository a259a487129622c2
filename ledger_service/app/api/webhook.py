"""결제사 웹훅 엔드포인트.

서명 검증에 원문 바이트가 필요하므로 바디를 파싱하지 않고 그대로 읽는다.
결제사는 2xx 가 아닌 응답을 재시도하므로, 처리하지 못한 경우 반드시 5xx 를 반환한다.
"""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from ..exceptions import InvalidSignature, InvalidWebhookPayload
from ..services.webhook_service import SIGNATURE_HEADER, WebhookProcessor
from .deps import get_webhook_processor


logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/webhook", summary="결제사 웹훅")
async def payment_webhook(
    request: Request,
    processor: Annotated[WebhookProcessor, Depends(get_webhook_processor)],
) -> JSONResponse:
    """서명 불일치와 함께, 서명은 맞지만 notes.orderId 가 없는 페이로드도 400 으로 응답한다.

    재시도해도 처리할 수 없는 요청이므로 5xx 대신 400 을 돌려 결제사 재시도를 멈춘다.
    """
    raw_body = await request.body()
    signature = request.headers.get(SIGNATURE_HEADER)

    try:
        outcome = await run_in_threadpool(processor.handle, raw_body, signature)
    except InvalidSignature:
        return JSONResponse(status_code=400, content={"error": "Invalid signature"})
    except InvalidWebhookPayload as exc:
        logger.warning("invalid webhook payload: %s", exc.message)
        return JSONResponse(
            status_code=400,
            content={"error": "Invalid payload", "message": exc.message},
        )
    except Exception as exc:  # noqa: BLE001
        logger.exception("webhook processing failed")
        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error", "message": str(exc)},
        )

    logger.info("webhook processed: %s", outcome.value)
    return JSONResponse(status_code=200, content={"status": "ok"})
