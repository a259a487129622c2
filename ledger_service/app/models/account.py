"""크레딧 계정 도메인 모델.

외부 인증 시스템의 사용자 식별자를 그대로 계정 id 로 사용하며,
계정당 하나의 정수 잔액(credits)을 가진다.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


# 계정이 처음 생성될 때 지급하는 무료 크레딧
INITIAL_GRANT = 10


class Account(BaseModel):
    id: str
    credits: int
    plan_id: str | None = None
    last_purchase_at: datetime | None = None
    last_used_at: datetime | None = None
    # 크레딧 지급이 반영된 주문 id 목록. 같은 주문이 두 번 지급되지 않도록 하는 키.
    applied_order_ids: list[str] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime
