from __future__ import annotations

from common.mongo.types import (
    BaseDocument,
    MongoDateTime,
    build_document_data_from_domain,
    from_object_id,
)

from ...models.scheduled_content import ScheduledContent


class ScheduledContentDocument(BaseDocument):
    """MongoDB scheduled_contents 컬렉션 도큐먼트 모델."""

    account_id: str
    title: str
    content: str
    platform: str
    publish_at: MongoDateTime
    status: str

    @classmethod
    def from_domain(cls, item: ScheduledContent) -> "ScheduledContentDocument":
        data = build_document_data_from_domain(item)
        return cls.model_validate(data)

    def to_domain(self) -> ScheduledContent:
        return ScheduledContent(
            id=from_object_id(self.id),
            account_id=self.account_id,
            title=self.title,
            content=self.content,
            platform=self.platform,
            publish_at=self.publish_at,
            status=self.status,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )
