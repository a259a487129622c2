from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class ContentType(str, Enum):
    BLOG = "blog"
    SOCIAL = "social"
    EMAIL = "email"
    AD = "ad"


class ContentLength(str, Enum):
    SHORT = "short"
    MEDIUM = "medium"
    LONG = "long"

    @property
    def approx_words(self) -> int:
        return _LENGTH_WORDS[self]


_LENGTH_WORDS: dict[ContentLength, int] = {
    ContentLength.SHORT: 300,
    ContentLength.MEDIUM: 600,
    ContentLength.LONG: 1000,
}


class Project(BaseModel):
    """생성된 콘텐츠 한 건. 콘텐츠 생성 기능이 성공할 때마다 저장된다."""

    id: str | None = None
    account_id: str
    type: ContentType
    topic: str
    tone: str
    keywords: list[str] = Field(default_factory=list)
    length: ContentLength
    content: str
    created_at: datetime
    updated_at: datetime
