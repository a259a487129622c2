from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel


class ScheduleStatus(str, Enum):
    SCHEDULED = "scheduled"
    PUBLISHED = "published"
    FAILED = "failed"


class ScheduledContent(BaseModel):
    """예약 발행 대기 중인 콘텐츠."""

    id: str | None = None
    account_id: str
    title: str
    content: str
    platform: str
    publish_at: datetime
    status: ScheduleStatus = ScheduleStatus.SCHEDULED
    created_at: datetime
    updated_at: datetime
