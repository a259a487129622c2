from __future__ import annotations

from ..exceptions import ProjectNotFound
from ..models.project import Project
from ..repositories.interfaces import ProjectRepositoryInterface


class ProjectService:
    def __init__(self, repo: ProjectRepositoryInterface) -> None:
        self._repo = repo

    def get_project(self, account_id: str, project_id: str) -> Project:
        project = self._repo.find(account_id, project_id)
        if project is None:
            raise ProjectNotFound(project_id)
        return project

    def list_projects(
        self, account_id: str, page: int = 1, page_size: int = 20
    ) -> tuple[list[Project], int]:
        return self._repo.list_by_account(account_id, page, page_size)
