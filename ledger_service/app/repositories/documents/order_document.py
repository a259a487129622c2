from __future__ import annotations

from common.mongo.types import (
    BaseDocument,
    OptionalMongoDateTime,
    build_document_data_from_domain,
    from_object_id,
)

from ...models.order import Order


class OrderDocument(BaseDocument):
    """MongoDB orders 컬렉션 도큐먼트 모델."""

    account_id: str
    plan_id: str
    amount: int
    currency: str
    credits: int
    status: str
    payment_id: str | None = None
    error: str | None = None
    completed_via: str | None = None
    credits_applied: bool = False
    completed_at: OptionalMongoDateTime = None

    @classmethod
    def from_domain(cls, order: Order) -> "OrderDocument":
        data = build_document_data_from_domain(order)
        return cls.model_validate(data)

    def to_domain(self) -> Order:
        return Order(
            id=from_object_id(self.id),
            account_id=self.account_id,
            plan_id=self.plan_id,
            amount=self.amount,
            currency=self.currency,
            credits=self.credits,
            status=self.status,
            payment_id=self.payment_id,
            error=self.error,
            completed_via=self.completed_via,
            credits_applied=self.credits_applied,
            completed_at=self.completed_at,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )
