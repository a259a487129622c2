from __future__ import annotations

from pymongo import ASCENDING, DESCENDING, IndexModel
from pymongo.database import Database

from .documents.credit_transaction_document import CreditTransactionDocument
from .interfaces import CreditTransactionRepositoryInterface
from ..models.credit import CreditTransaction


class CreditTransactionRepository(CreditTransactionRepositoryInterface):
    """credit_transactions 컬렉션에 대한 MongoDB 접근 레이어."""

    def __init__(self, database: Database) -> None:
        self._db = database
        self._col = database["credit_transactions"]
        self._col.create_indexes(
            [
                IndexModel(
                    [("account_id", ASCENDING), ("created_at", DESCENDING)],
                    name="idx_account_created",
                )
            ]
        )

    def create(self, tx: CreditTransaction) -> CreditTransaction:
        """트랜잭션 로그 생성."""
        doc = CreditTransactionDocument.from_domain(tx)
        result = self._col.insert_one(doc.to_mongo_record())
        return tx.model_copy(update={"id": str(result.inserted_id)})

    def list_by_account(
        self, account_id: str, page: int, page_size: int
    ) -> tuple[list[CreditTransaction], int]:
        """계정의 크레딧 트랜잭션 이력 조회 (최신순)."""
        if page <= 0:
            page = 1
        if page_size <= 0 or page_size > 100:
            page_size = 20

        skip = (page - 1) * page_size

        total = self._col.count_documents({"account_id": account_id})
        cursor = self._col.find(
            {"account_id": account_id},
            sort=[("created_at", -1), ("_id", -1)],
            skip=skip,
            limit=page_size,
        )

        items: list[CreditTransaction] = []
        for raw in cursor:
            items.append(CreditTransactionDocument.model_validate(raw).to_domain())

        return items, total
