from __future__ import annotations

from pydantic import BaseModel

from common.types.datetime import UtcDateTime

from ...models.project import Project


class ProjectResponse(BaseModel):
    id: str | None
    type: str
    topic: str
    tone: str
    keywords: list[str]
    length: str
    content: str
    created_at: UtcDateTime

    @classmethod
    def from_domain(cls, project: Project) -> "ProjectResponse":
        return cls(
            id=project.id,
            type=project.type.value,
            topic=project.topic,
            tone=project.tone,
            keywords=project.keywords,
            length=project.length.value,
            content=project.content,
            created_at=project.created_at,
        )
