"""크레딧 소비 기능 게이트.

잔액 확인 -> 외부 기능 호출 -> 성공 시에만 원자적 1 차감 순서로 실행한다.
기능 호출이 실패하면 아무것도 차감하지 않고, 차감 경쟁에서 지면 결과를 버린다.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Generic, TypeVar

from ..exceptions import InsufficientCredits
from .ledger_service import LedgerService


logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(slots=True)
class GatedResult(Generic[T]):
    value: T
    remaining: int


class FeatureGate:
    def __init__(self, ledger: LedgerService) -> None:
        self._ledger = ledger

    def run(self, account_id: str, feature: str, action: Callable[[], T]) -> GatedResult[T]:
        balance = self._ledger.get_balance(account_id)
        if balance <= 0:
            raise InsufficientCredits(account_id, balance)

        value = action()

        try:
            remaining = self._ledger.deduct_one(account_id, reason=feature)
        except InsufficientCredits:
            logger.warning(
                "%s result discarded: balance exhausted by a concurrent request",
                feature,
                extra={"account_id": account_id},
            )
            raise
        return GatedResult(value=value, remaining=remaining)
