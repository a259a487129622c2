"""서비스 조립.

설정을 한 번 읽어 Mongo 연결, 레포지토리, 서비스를 만들고 app.state 에 보관한다.
테스트는 assemble_container 에 인메모리 레포지토리를 넘겨 같은 조립 경로를 사용한다.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable

from langchain_core.language_models.chat_models import BaseChatModel

from common.eventbus.kafka import KafkaEventBus
from common.llm.factory import create_chat_model
from common.mongo.client import connect

from .config import AppConfig
from .features.content import ContentWriter
from .features.grammar import GrammarChecker
from .features.seo import SeoAnalyzer
from .repositories.account_repository import AccountRepository
from .repositories.credit_transaction_repository import CreditTransactionRepository
from .repositories.interfaces import (
    AccountRepositoryInterface,
    CreditTransactionRepositoryInterface,
    OrderRepositoryInterface,
    ProjectRepositoryInterface,
    ScheduledContentRepositoryInterface,
)
from .repositories.order_repository import OrderRepository
from .repositories.project_repository import ProjectRepository
from .repositories.scheduled_content_repository import ScheduledContentRepository
from .services.feature_gate import FeatureGate
from .services.ledger_events import KafkaLedgerEventPublisher, LedgerEventPublisherInterface
from .services.ledger_service import LedgerService
from .services.order_service import OrderService
from .services.payment_verifier import PaymentVerifierInterface, RazorpayPaymentVerifier
from .services.project_service import ProjectService
from .services.reconciliation_service import ReconciliationService
from .services.schedule_service import ScheduleService
from .services.webhook_service import WebhookProcessor
from .services.writing_service import WritingService


logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ServiceContainer:
    ledger: LedgerService
    orders: OrderService
    reconciliation: ReconciliationService
    webhooks: WebhookProcessor
    projects: ProjectService
    schedules: ScheduleService
    # AI 모델이 설정되지 않았으면 None
    writing: WritingService | None = None
    checkout_key_id: str | None = None
    closers: list[Callable[[], None]] = field(default_factory=list)

    def close(self) -> None:
        for closer in reversed(self.closers):
            closer()
        self.closers.clear()


def assemble_container(
    *,
    account_repo: AccountRepositoryInterface,
    order_repo: OrderRepositoryInterface,
    transaction_repo: CreditTransactionRepositoryInterface,
    project_repo: ProjectRepositoryInterface,
    schedule_repo: ScheduledContentRepositoryInterface,
    webhook_secret: str,
    webhook_timeout_seconds: float = 10.0,
    chat_model: BaseChatModel | None = None,
    payment_verifier: PaymentVerifierInterface | None = None,
    event_publisher: LedgerEventPublisherInterface | None = None,
    checkout_key_id: str | None = None,
) -> ServiceContainer:
    ledger = LedgerService(account_repo, transaction_repo, event_publisher)
    orders = OrderService(order_repo, ledger)
    reconciliation = ReconciliationService(
        order_repo,
        ledger,
        payment_verifier=payment_verifier,
        event_publisher=event_publisher,
    )
    webhooks = WebhookProcessor(
        webhook_secret,
        reconciliation,
        orders,
        timeout_seconds=webhook_timeout_seconds,
    )

    writing: WritingService | None = None
    if chat_model is not None:
        writing = WritingService(
            FeatureGate(ledger),
            ContentWriter(chat_model),
            GrammarChecker(chat_model),
            SeoAnalyzer(chat_model),
            project_repo,
        )

    return ServiceContainer(
        ledger=ledger,
        orders=orders,
        reconciliation=reconciliation,
        webhooks=webhooks,
        projects=ProjectService(project_repo),
        schedules=ScheduleService(schedule_repo),
        writing=writing,
        checkout_key_id=checkout_key_id,
    )


def build_container(config: AppConfig) -> ServiceContainer:
    handle = connect(config.mongo)
    database = handle.database
    closers: list[Callable[[], None]] = [handle.close]

    event_publisher: LedgerEventPublisherInterface | None = None
    if config.kafka_brokers:
        event_bus = KafkaEventBus(config.kafka_brokers)
        closers.append(event_bus.close)
        event_publisher = KafkaLedgerEventPublisher(event_bus)
    else:
        logger.info("KAFKA_BOOTSTRAP_SERVERS not set; ledger events disabled")

    payment_verifier: RazorpayPaymentVerifier | None = None
    razorpay = config.razorpay
    if razorpay.key_id and razorpay.key_secret:
        payment_verifier = RazorpayPaymentVerifier(
            razorpay.key_id,
            razorpay.key_secret,
            base_url=razorpay.api_base_url,
        )
        closers.append(payment_verifier.close)
    else:
        logger.warning("Razorpay API keys not set; client confirmations are not verified")

    chat_model: BaseChatModel | None = None
    if config.llm is not None:
        chat_model = create_chat_model(config.llm)
    else:
        logger.warning("LEDGER_LLM_MODEL_NAME not set; AI features disabled")

    container = assemble_container(
        account_repo=AccountRepository(database),
        order_repo=OrderRepository(database),
        transaction_repo=CreditTransactionRepository(database),
        project_repo=ProjectRepository(database),
        schedule_repo=ScheduledContentRepository(database),
        webhook_secret=razorpay.webhook_secret,
        webhook_timeout_seconds=config.webhook_timeout_seconds,
        chat_model=chat_model,
        payment_verifier=payment_verifier,
        event_publisher=event_publisher,
        checkout_key_id=razorpay.key_id,
    )
    container.closers.extend(closers)
    return container
