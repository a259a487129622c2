"""크레딧을 소비하는 AI 기능 API. 요청 1건당 성공 시 1 크레딧."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from ..deps import get_writing_service
from ..schemas.features import (
    ContentResponse,
    GrammarRequest,
    GrammarResponse,
    SeoRequest,
    SeoResponse,
)
from ..schemas.projects import ProjectResponse
from ...features.content import ContentRequest
from ...services.writing_service import WritingService


router = APIRouter()


@router.post("/{account_id}/content")
def generate_content(
    account_id: str,
    req: ContentRequest,
    writing: Annotated[WritingService, Depends(get_writing_service)],
) -> ContentResponse:
    result = writing.generate_content(account_id, req)
    return ContentResponse(
        project=ProjectResponse.from_domain(result.value),
        remaining=result.remaining,
    )


@router.post("/{account_id}/grammar")
def check_grammar(
    account_id: str,
    req: GrammarRequest,
    writing: Annotated[WritingService, Depends(get_writing_service)],
) -> GrammarResponse:
    result = writing.check_grammar(account_id, req.text)
    return GrammarResponse(report=result.value, remaining=result.remaining)


@router.post("/{account_id}/seo")
def analyze_seo(
    account_id: str,
    req: SeoRequest,
    writing: Annotated[WritingService, Depends(get_writing_service)],
) -> SeoResponse:
    result = writing.analyze_seo(account_id, req.content)
    return SeoResponse(report=result.value, remaining=result.remaining)
