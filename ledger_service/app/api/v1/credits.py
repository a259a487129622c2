"""크레딧 원장 API 라우터."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from ..deps import get_ledger_service
from ..schemas.common import PaginatedResponse
from ..schemas.credits import (
    BalanceResponse,
    CreditTransactionResponse,
    DeductRequest,
    DeductResponse,
    GrantRequest,
    GrantResponse,
)
from ...models.account import Account
from ...services.ledger_service import LedgerService


router = APIRouter()


def _to_balance_response(account: Account) -> BalanceResponse:
    return BalanceResponse(
        account_id=account.id,
        credits=account.credits,
        plan_id=account.plan_id,
        last_purchase_at=account.last_purchase_at,
        last_used_at=account.last_used_at,
    )


@router.get("/{account_id}")
def get_balance(
    account_id: str,
    ledger: Annotated[LedgerService, Depends(get_ledger_service)],
) -> BalanceResponse:
    """잔액 조회. 계정이 없으면 무료 크레딧으로 생성된다."""
    return _to_balance_response(ledger.initialize_account(account_id))


@router.post("/{account_id}/initialize")
def initialize_account(
    account_id: str,
    ledger: Annotated[LedgerService, Depends(get_ledger_service)],
) -> BalanceResponse:
    return _to_balance_response(ledger.initialize_account(account_id))


@router.post("/{account_id}/deduct")
def deduct_credit(
    account_id: str,
    ledger: Annotated[LedgerService, Depends(get_ledger_service)],
    req: DeductRequest | None = None,
) -> DeductResponse:
    """1 크레딧 차감. 잔액 부족 시 402."""
    reason = req.reason if req is not None else "feature"
    return DeductResponse(remaining=ledger.deduct_one(account_id, reason=reason))


@router.post("/{account_id}/grant")
def grant_credits(
    account_id: str,
    req: GrantRequest,
    ledger: Annotated[LedgerService, Depends(get_ledger_service)],
) -> GrantResponse:
    balance = ledger.grant_credits(
        account_id,
        req.amount,
        reason=req.reason,
        reference_id=req.reference_id,
    )
    return GrantResponse(account_id=account_id, granted=req.amount, balance=balance)


@router.get("/{account_id}/history")
def get_credit_history(
    account_id: str,
    ledger: Annotated[LedgerService, Depends(get_ledger_service)],
    page: int = 1,
    page_size: int = 20,
) -> PaginatedResponse[CreditTransactionResponse]:
    """크레딧 변동 이력 조회 (최신순)."""
    items, total = ledger.get_history(account_id, page, page_size)
    return PaginatedResponse(
        items=[
            CreditTransactionResponse(
                id=tx.id,
                type=tx.type.value,
                amount=tx.amount,
                balance_after=tx.balance_after,
                reason=tx.reason,
                reference_id=tx.reference_id,
                created_at=tx.created_at,
            )
            for tx in items
        ],
        total=total,
        page=page,
        page_size=page_size,
    )
