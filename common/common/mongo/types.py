from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, Field
from pydantic.functional_validators import BeforeValidator
from typing_extensions import Annotated


def ensure_utc_datetime(value: datetime) -> datetime:
    """datetime 값을 UTC 기준으로 정규화한다.

    - tzinfo 가 없으면 UTC 로 간주해 tzinfo=UTC 를 부여
    - tzinfo 가 있으면 UTC 로 변환
    """

    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def to_object_id(value: Any) -> ObjectId:
    """여러 타입(str, ObjectId 등)을 MongoDB ObjectId 로 변환한다."""

    if isinstance(value, ObjectId):
        return value
    if value is None:
        raise TypeError("ObjectId cannot be None")
    return ObjectId(str(value))


def from_object_id(value: Optional[ObjectId]) -> Optional[str]:
    if value is None:
        return None
    return str(value)


def parse_object_id(value: str) -> ObjectId | None:
    """외부 입력 문자열을 ObjectId 로 변환한다. 형식이 잘못되면 None."""

    if not ObjectId.is_valid(value):
        return None
    return ObjectId(value)


PyObjectId = Annotated[ObjectId, BeforeValidator(to_object_id)]
MongoDateTime = Annotated[datetime, BeforeValidator(ensure_utc_datetime)]
OptionalMongoDateTime = Annotated[
    Optional[datetime],
    BeforeValidator(lambda v: ensure_utc_datetime(v) if isinstance(v, datetime) else v),
]


class BaseDocument(BaseModel):
    """MongoDB 도큐먼트용 공통 베이스 모델.

    - ObjectId 같은 임의 타입을 허용
    - alias 기반 직렬화(by_alias)를 사용할 수 있도록 한다.
    - 도큐먼트에 알 수 없는 필드가 있어도 무시한다.
    """

    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        populate_by_name=True,
        extra="ignore",
    )

    id: Optional[PyObjectId] = Field(default=None, alias="_id")
    created_at: MongoDateTime
    updated_at: MongoDateTime

    def to_mongo_record(self) -> dict[str, Any]:
        """MongoDB 저장에 사용할 표준 레코드(dict) 직렬화.

        - by_alias=True 로 id -> _id 등의 Mongo 필드 이름과 일치시킨다.
        - exclude_none=True 로 _id=None 같은 필드를 제거해 Mongo가 ObjectId 를 생성하도록 한다.
        """

        return self.model_dump(by_alias=True, exclude_none=True)


def build_document_data_from_domain(model: BaseModel) -> dict[str, Any]:
    """도메인 모델을 도큐먼트 검증용 dict 로 변환한다.

    - 도메인의 문자열 id 는 `_id` 키로 옮긴다. (None 이면 제거해 Mongo 가 생성하도록 둔다)
    - Enum 값은 원시 값으로 풀어서 저장한다.
    """

    data = model.model_dump(mode="python")
    identifier = data.pop("id", None)
    if identifier is not None:
        data["_id"] = identifier
    return {
        key: value.value if isinstance(value, Enum) else value
        for key, value in data.items()
    }
