from __future__ import annotations

from pydantic import BaseModel, Field

from ...features.grammar import GrammarReport
from ...features.seo import SeoReport
from .projects import ProjectResponse


class GrammarRequest(BaseModel):
    text: str = Field(min_length=1)


class SeoRequest(BaseModel):
    content: str = Field(min_length=1)


class ContentResponse(BaseModel):
    project: ProjectResponse
    remaining: int


class GrammarResponse(BaseModel):
    report: GrammarReport
    remaining: int


class SeoResponse(BaseModel):
    report: SeoReport
    remaining: int
