from __future__ import annotations

from pymongo import ASCENDING, DESCENDING, IndexModel
from pymongo.database import Database

from common.mongo.types import parse_object_id

from .documents.project_document import ProjectDocument
from .interfaces import ProjectRepositoryInterface
from ..models.project import Project


class ProjectRepository(ProjectRepositoryInterface):
    """projects 컬렉션에 대한 MongoDB 접근 레이어."""

    def __init__(self, database: Database) -> None:
        self._db = database
        self._col = database["projects"]
        self._col.create_indexes(
            [
                IndexModel(
                    [("account_id", ASCENDING), ("created_at", DESCENDING)],
                    name="idx_account_created",
                )
            ]
        )

    def insert(self, project: Project) -> Project:
        doc = ProjectDocument.from_domain(project)
        result = self._col.insert_one(doc.to_mongo_record())
        return project.model_copy(update={"id": str(result.inserted_id)})

    def find(self, account_id: str, project_id: str) -> Project | None:
        oid = parse_object_id(project_id)
        if oid is None:
            return None
        # 다른 계정의 프로젝트는 조회되지 않도록 account_id 를 함께 건다.
        doc = self._col.find_one({"_id": oid, "account_id": account_id})
        if doc is None:
            return None
        return ProjectDocument.model_validate(doc).to_domain()

    def list_by_account(
        self, account_id: str, page: int, page_size: int
    ) -> tuple[list[Project], int]:
        if page <= 0:
            page = 1
        if page_size <= 0 or page_size > 100:
            page_size = 20

        total = self._col.count_documents({"account_id": account_id})
        cursor = self._col.find(
            {"account_id": account_id},
            sort=[("created_at", -1), ("_id", -1)],
            skip=(page - 1) * page_size,
            limit=page_size,
        )
        return [ProjectDocument.model_validate(raw).to_domain() for raw in cursor], total
