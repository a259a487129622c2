from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from ..deps import get_project_service
from ..schemas.common import PaginatedResponse
from ..schemas.projects import ProjectResponse
from ...services.project_service import ProjectService


router = APIRouter()


@router.get("/{account_id}")
def list_projects(
    account_id: str,
    projects: Annotated[ProjectService, Depends(get_project_service)],
    page: int = 1,
    page_size: int = 20,
) -> PaginatedResponse[ProjectResponse]:
    items, total = projects.list_projects(account_id, page, page_size)
    return PaginatedResponse(
        items=[ProjectResponse.from_domain(p) for p in items],
        total=total,
        page=page,
        page_size=page_size,
    )


@router.get("/{account_id}/{project_id}")
def get_project(
    account_id: str,
    project_id: str,
    projects: Annotated[ProjectService, Depends(get_project_service)],
) -> ProjectResponse:
    return ProjectResponse.from_domain(projects.get_project(account_id, project_id))
