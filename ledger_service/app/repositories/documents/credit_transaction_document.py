from __future__ import annotations

from common.mongo.types import (
    BaseDocument,
    build_document_data_from_domain,
    from_object_id,
)

from ...models.credit import CreditTransaction


class CreditTransactionDocument(BaseDocument):
    """MongoDB credit_transactions 컬렉션 도큐먼트 모델."""

    account_id: str
    type: str
    amount: int
    balance_after: int
    reason: str
    reference_id: str | None = None
    metadata: dict | None = None

    @classmethod
    def from_domain(cls, tx: CreditTransaction) -> "CreditTransactionDocument":
        data = build_document_data_from_domain(tx)
        return cls.model_validate(data)

    def to_domain(self) -> CreditTransaction:
        return CreditTransaction(
            id=from_object_id(self.id),
            account_id=self.account_id,
            type=self.type,
            amount=self.amount,
            balance_after=self.balance_after,
            reason=self.reason,
            reference_id=self.reference_id,
            metadata=self.metadata or {},
            created_at=self.created_at,
            updated_at=self.updated_at,
        )
