from __future__ import annotations


class LedgerServiceError(Exception):
    """ledger-service 도메인 예외의 베이스.

    - code: API 응답/로그에서 사용하는 안정적인 식별자
    - status_code: 클라이언트 API 에서 매핑할 HTTP 상태 코드
    """

    code = "ledger_error"
    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InsufficientCredits(LedgerServiceError):
    """잔액이 0 이하라 크레딧 소비 기능을 실행할 수 없음. 구매로 복구 가능."""

    code = "insufficient_credits"
    status_code = 402

    def __init__(self, account_id: str, balance: int = 0) -> None:
        super().__init__("크레딧이 부족합니다. 요금제를 구매한 뒤 다시 시도해 주세요.")
        self.account_id = account_id
        self.balance = balance


class InvalidSignature(LedgerServiceError):
    """웹훅 HMAC 서명 불일치."""

    code = "invalid_signature"
    status_code = 400

    def __init__(self) -> None:
        super().__init__("Invalid signature")


class InvalidWebhookPayload(LedgerServiceError):
    """서명은 유효하지만 주문 참조 등 필수 필드가 없는 웹훅 페이로드."""

    code = "invalid_payload"
    status_code = 400


class OrderNotFound(LedgerServiceError):
    code = "order_not_found"
    status_code = 404

    def __init__(self, order_id: str) -> None:
        super().__init__(f"Order not found: {order_id}")
        self.order_id = order_id


class AccountNotFound(LedgerServiceError):
    code = "account_not_found"
    status_code = 404

    def __init__(self, account_id: str) -> None:
        super().__init__(f"User not found: {account_id}")
        self.account_id = account_id


class InvalidPlan(LedgerServiceError):
    code = "invalid_plan"
    status_code = 422

    def __init__(self, plan_id: str) -> None:
        super().__init__(f"Invalid plan selected: {plan_id}")
        self.plan_id = plan_id


class OrderAlreadyCompleted(LedgerServiceError):
    """이미 completed 된 주문에 대한 취소/실패 전이 시도."""

    code = "order_already_completed"
    status_code = 409

    def __init__(self, order_id: str) -> None:
        super().__init__(f"Order already completed: {order_id}")
        self.order_id = order_id


class PaymentVerificationError(LedgerServiceError):
    """클라이언트가 보고한 결제가 결제사 기록과 일치하지 않음."""

    code = "payment_verification_failed"
    status_code = 400


class ProviderError(LedgerServiceError):
    """외부 제공자(LLM, 결제사 API) 호출 실패. 크레딧은 차감되지 않는다."""

    code = "provider_error"
    status_code = 502

    def __init__(self, provider: str, message: str) -> None:
        super().__init__(f"{provider} call failed: {message}")
        self.provider = provider


class FeatureUnavailable(LedgerServiceError):
    code = "feature_unavailable"
    status_code = 503


class ProjectNotFound(LedgerServiceError):
    code = "project_not_found"
    status_code = 404

    def __init__(self, project_id: str) -> None:
        super().__init__(f"Project not found: {project_id}")
        self.project_id = project_id
