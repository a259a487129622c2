from __future__ import annotations

from pymongo import ASCENDING, IndexModel
from pymongo.database import Database

from .documents.scheduled_content_document import ScheduledContentDocument
from .interfaces import ScheduledContentRepositoryInterface
from ..models.scheduled_content import ScheduledContent


class ScheduledContentRepository(ScheduledContentRepositoryInterface):
    """scheduled_contents 컬렉션에 대한 MongoDB 접근 레이어."""

    def __init__(self, database: Database) -> None:
        self._db = database
        self._col = database["scheduled_contents"]
        self._col.create_indexes(
            [
                IndexModel(
                    [("account_id", ASCENDING), ("publish_at", ASCENDING)],
                    name="idx_account_publish_at",
                )
            ]
        )

    def insert(self, item: ScheduledContent) -> ScheduledContent:
        doc = ScheduledContentDocument.from_domain(item)
        result = self._col.insert_one(doc.to_mongo_record())
        return item.model_copy(update={"id": str(result.inserted_id)})

    def list_by_account(self, account_id: str) -> list[ScheduledContent]:
        cursor = self._col.find(
            {"account_id": account_id},
            sort=[("publish_at", ASCENDING), ("_id", ASCENDING)],
        )
        return [ScheduledContentDocument.model_validate(raw).to_domain() for raw in cursor]
