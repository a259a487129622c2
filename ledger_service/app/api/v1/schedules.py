from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, status

from ..deps import get_schedule_service
from ..schemas.schedules import ScheduledContentResponse, ScheduleRequest
from ...models.scheduled_content import ScheduledContent
from ...services.schedule_service import ScheduleService


router = APIRouter()


def _to_response(item: ScheduledContent) -> ScheduledContentResponse:
    return ScheduledContentResponse(
        id=item.id,
        title=item.title,
        content=item.content,
        platform=item.platform,
        publish_at=item.publish_at,
        status=item.status.value,
        created_at=item.created_at,
    )


@router.post("/{account_id}", status_code=status.HTTP_201_CREATED)
def schedule_content(
    account_id: str,
    req: ScheduleRequest,
    schedules: Annotated[ScheduleService, Depends(get_schedule_service)],
) -> ScheduledContentResponse:
    item = schedules.schedule(
        account_id,
        title=req.title,
        content=req.content,
        platform=req.platform,
        publish_at=req.publish_at,
    )
    return _to_response(item)


@router.get("/{account_id}")
def list_scheduled_content(
    account_id: str,
    schedules: Annotated[ScheduleService, Depends(get_schedule_service)],
) -> list[ScheduledContentResponse]:
    """예약된 콘텐츠 목록 (발행 시각 오름차순)."""
    return [_to_response(item) for item in schedules.list_scheduled(account_id)]
