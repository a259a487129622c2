from __future__ import annotations

import logging
from datetime import datetime

from common.mongo.types import ensure_utc_datetime, utc_now

from ..models.scheduled_content import ScheduledContent, ScheduleStatus
from ..repositories.interfaces import ScheduledContentRepositoryInterface


logger = logging.getLogger(__name__)


class ScheduleService:
    """콘텐츠 예약. 실제 발행은 이 서비스의 범위가 아니다."""

    def __init__(self, repo: ScheduledContentRepositoryInterface) -> None:
        self._repo = repo

    def schedule(
        self,
        account_id: str,
        title: str,
        content: str,
        platform: str,
        publish_at: datetime,
    ) -> ScheduledContent:
        now = utc_now()
        item = self._repo.insert(
            ScheduledContent(
                account_id=account_id,
                title=title,
                content=content,
                platform=platform,
                publish_at=ensure_utc_datetime(publish_at),
                status=ScheduleStatus.SCHEDULED,
                created_at=now,
                updated_at=now,
            )
        )
        logger.info(
            "content scheduled platform=%s publish_at=%s",
            platform,
            item.publish_at.isoformat(),
            extra={"account_id": account_id},
        )
        return item

    def list_scheduled(self, account_id: str) -> list[ScheduledContent]:
        return self._repo.list_by_account(account_id)
