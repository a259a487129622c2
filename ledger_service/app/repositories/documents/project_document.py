from __future__ import annotations

from common.mongo.types import (
    BaseDocument,
    build_document_data_from_domain,
    from_object_id,
)

from ...models.project import Project


class ProjectDocument(BaseDocument):
    """MongoDB projects 컬렉션 도큐먼트 모델."""

    account_id: str
    type: str
    topic: str
    tone: str
    keywords: list[str]
    length: str
    content: str

    @classmethod
    def from_domain(cls, project: Project) -> "ProjectDocument":
        data = build_document_data_from_domain(project)
        return cls.model_validate(data)

    def to_domain(self) -> Project:
        return Project(
            id=from_object_id(self.id),
            account_id=self.account_id,
            type=self.type,
            topic=self.topic,
            tone=self.tone,
            keywords=list(self.keywords),
            length=self.length,
            content=self.content,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )
