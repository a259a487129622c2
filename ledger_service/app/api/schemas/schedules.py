from __future__ import annotations

from pydantic import BaseModel, Field

from common.types.datetime import UtcDateTime


class ScheduleRequest(BaseModel):
    title: str = Field(min_length=1)
    content: str = Field(min_length=1)
    platform: str = Field(min_length=1)
    publish_at: UtcDateTime


class ScheduledContentResponse(BaseModel):
    id: str | None
    title: str
    content: str
    platform: str
    publish_at: UtcDateTime
    status: str
    created_at: UtcDateTime
