"""계정 잔액 레포지토리.

모든 잔액 변경은 조건을 필터에 건 find_one_and_update 한 번으로 끝나는 원자 연산이다.
"""

from __future__ import annotations

from pymongo import ASCENDING, IndexModel, ReturnDocument
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError

from common.mongo.types import utc_now

from .documents.account_document import AccountDocument
from .interfaces import AccountRepositoryInterface
from ..models.account import Account


class AccountRepository(AccountRepositoryInterface):
    """accounts 컬렉션에 대한 MongoDB 접근 레이어."""

    def __init__(self, database: Database) -> None:
        self._db = database
        self._col = database["accounts"]
        self._col.create_indexes(
            [IndexModel([("applied_order_ids", ASCENDING)], name="idx_applied_order_ids")]
        )

    def get_or_create(self, account_id: str, initial_credits: int) -> tuple[Account, bool]:
        now = utc_now()
        insert_fields = {
            "credits": initial_credits,
            "plan_id": None,
            "last_purchase_at": None,
            "last_used_at": None,
            "applied_order_ids": [],
            "created_at": now,
            "updated_at": now,
        }
        try:
            # BEFORE 로 요청하면 이번 호출이 insert 했을 때 None 이 돌아온다.
            before = self._col.find_one_and_update(
                {"_id": account_id},
                {"$setOnInsert": insert_fields},
                upsert=True,
                return_document=ReturnDocument.BEFORE,
            )
        except DuplicateKeyError:
            # 동시에 upsert 한 다른 요청이 먼저 insert 했다.
            before = self._col.find_one({"_id": account_id})
            if before is None:
                raise

        if before is None:
            doc = AccountDocument.model_validate({"_id": account_id, **insert_fields})
            return doc.to_domain(), True
        return AccountDocument.model_validate(before).to_domain(), False

    def find(self, account_id: str) -> Account | None:
        doc = self._col.find_one({"_id": account_id})
        if doc is None:
            return None
        return AccountDocument.model_validate(doc).to_domain()

    def adjust_credits(self, account_id: str, delta: int) -> Account | None:
        now = utc_now()
        filter_: dict[str, object] = {"_id": account_id}
        fields: dict[str, object] = {"updated_at": now}
        if delta < 0:
            # 같은 필터 안에서 잔액을 검사해야 음수가 되지 않는다.
            filter_["credits"] = {"$gte": -delta}
            fields["last_used_at"] = now

        doc = self._col.find_one_and_update(
            filter_,
            {"$inc": {"credits": delta}, "$set": fields},
            return_document=ReturnDocument.AFTER,
        )
        if doc is None:
            return None
        return AccountDocument.model_validate(doc).to_domain()

    def apply_order_grant(
        self, account_id: str, order_id: str, amount: int, plan_id: str
    ) -> Account | None:
        now = utc_now()
        doc = self._col.find_one_and_update(
            {"_id": account_id, "applied_order_ids": {"$ne": order_id}},
            {
                "$inc": {"credits": amount},
                "$addToSet": {"applied_order_ids": order_id},
                "$set": {
                    "plan_id": plan_id,
                    "last_purchase_at": now,
                    "updated_at": now,
                },
            },
            return_document=ReturnDocument.AFTER,
        )
        if doc is None:
            return None
        return AccountDocument.model_validate(doc).to_domain()
