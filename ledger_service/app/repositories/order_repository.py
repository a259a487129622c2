from __future__ import annotations

from pymongo import ASCENDING, DESCENDING, IndexModel, ReturnDocument
from pymongo.database import Database

from common.mongo.types import parse_object_id, utc_now

from .documents.order_document import OrderDocument
from .interfaces import OrderRepositoryInterface
from ..models.order import CompletionSource, Order, OrderStatus


class OrderRepository(OrderRepositoryInterface):
    """orders 컬렉션에 대한 MongoDB 접근 레이어.

    상태 전이는 현재 상태를 조건으로 건 find_one_and_update(CAS)로만 수행한다.
    """

    def __init__(self, database: Database) -> None:
        self._db = database
        self._col = database["orders"]
        self._col.create_indexes(
            [
                IndexModel(
                    [("account_id", ASCENDING), ("created_at", DESCENDING)],
                    name="idx_account_created",
                )
            ]
        )

    def insert(self, order: Order) -> Order:
        doc = OrderDocument.from_domain(order)
        result = self._col.insert_one(doc.to_mongo_record())
        return order.model_copy(update={"id": str(result.inserted_id)})

    def find_by_id(self, order_id: str) -> Order | None:
        oid = parse_object_id(order_id)
        if oid is None:
            return None
        doc = self._col.find_one({"_id": oid})
        if doc is None:
            return None
        return OrderDocument.model_validate(doc).to_domain()

    def mark_completed(
        self, order_id: str, payment_id: str | None, source: CompletionSource
    ) -> Order | None:
        oid = parse_object_id(order_id)
        if oid is None:
            return None

        now = utc_now()
        fields: dict[str, object] = {
            "status": OrderStatus.COMPLETED.value,
            "completed_via": source.value,
            "completed_at": now,
            "updated_at": now,
        }
        if payment_id:
            fields["payment_id"] = payment_id

        doc = self._col.find_one_and_update(
            {"_id": oid, "status": {"$ne": OrderStatus.COMPLETED.value}},
            {"$set": fields},
            return_document=ReturnDocument.AFTER,
        )
        if doc is None:
            return None
        return OrderDocument.model_validate(doc).to_domain()

    def mark_credits_applied(self, order_id: str) -> None:
        oid = parse_object_id(order_id)
        if oid is None:
            return
        self._col.update_one(
            {"_id": oid},
            {"$set": {"credits_applied": True, "updated_at": utc_now()}},
        )

    def mark_closed(
        self, order_id: str, status: OrderStatus, error: str | None = None
    ) -> Order | None:
        oid = parse_object_id(order_id)
        if oid is None:
            return None

        fields: dict[str, object] = {"status": status.value, "updated_at": utc_now()}
        if error:
            fields["error"] = error

        doc = self._col.find_one_and_update(
            {"_id": oid, "status": OrderStatus.CREATED.value},
            {"$set": fields},
            return_document=ReturnDocument.AFTER,
        )
        if doc is None:
            return None
        return OrderDocument.model_validate(doc).to_domain()
