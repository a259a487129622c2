"""FastAPI 의존성. 모든 서비스는 lifespan 에서 만든 ServiceContainer 에서 꺼낸다."""

from __future__ import annotations

from fastapi import Request

from ..container import ServiceContainer
from ..exceptions import FeatureUnavailable
from ..services.ledger_service import LedgerService
from ..services.order_service import OrderService
from ..services.project_service import ProjectService
from ..services.reconciliation_service import ReconciliationService
from ..services.schedule_service import ScheduleService
from ..services.webhook_service import WebhookProcessor
from ..services.writing_service import WritingService


def get_container(request: Request) -> ServiceContainer:
    return request.app.state.container


def get_ledger_service(request: Request) -> LedgerService:
    return get_container(request).ledger


def get_order_service(request: Request) -> OrderService:
    return get_container(request).orders


def get_reconciliation_service(request: Request) -> ReconciliationService:
    return get_container(request).reconciliation


def get_webhook_processor(request: Request) -> WebhookProcessor:
    return get_container(request).webhooks


def get_project_service(request: Request) -> ProjectService:
    return get_container(request).projects


def get_schedule_service(request: Request) -> ScheduleService:
    return get_container(request).schedules


def get_writing_service(request: Request) -> WritingService:
    writing = get_container(request).writing
    if writing is None:
        raise FeatureUnavailable("AI features are not configured")
    return writing


def get_checkout_key_id(request: Request) -> str | None:
    return get_container(request).checkout_key_id
