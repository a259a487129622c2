from __future__ import annotations

from pydantic import Field

from common.mongo.types import BaseDocument, OptionalMongoDateTime

from ...models.account import Account


class AccountDocument(BaseDocument):
    """MongoDB accounts 컬렉션 도큐먼트 모델.

    _id 는 ObjectId 가 아니라 외부 사용자 식별자 문자열이다.
    """

    id: str = Field(alias="_id")
    credits: int
    plan_id: str | None = None
    last_purchase_at: OptionalMongoDateTime = None
    last_used_at: OptionalMongoDateTime = None
    applied_order_ids: list[str] = Field(default_factory=list)

    def to_domain(self) -> Account:
        return Account(
            id=self.id,
            credits=self.credits,
            plan_id=self.plan_id,
            last_purchase_at=self.last_purchase_at,
            last_used_at=self.last_used_at,
            applied_order_ids=list(self.applied_order_ids),
            created_at=self.created_at,
            updated_at=self.updated_at,
        )
