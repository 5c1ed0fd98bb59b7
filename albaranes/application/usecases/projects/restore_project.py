"""USE CASE: Restore Project.

Solo proyectos archivados cuyo cliente siga activo (NOT_FOUND CLIENT_NOT_FOUND);
re-chequea la unicidad del código antes de reactivar.
"""

from __future__ import annotations

from uuid import UUID

from ....crosscutting.exceptions import DuplicateKeyError
from ....domain.ownership_policy import Actor
from ....domain.repositories import ClientRepository, ProjectRepository
from ....domain.soft_delete import Visibility
from ..results import not_found
from .project_results import (
    ARCHIVED_PROJECT_NOT_FOUND,
    CLIENT_NOT_FOUND,
    ProjectResult,
    duplicate_code_error,
)


class RestoreProjectUseCase:
    def __init__(
        self,
        project_repository: ProjectRepository,
        client_repository: ClientRepository,
    ) -> None:
        self._projects = project_repository
        self._clients = client_repository

    def execute(self, actor: Actor, project_id: UUID) -> ProjectResult:
        archived = self._projects.get_project(
            project_id, owner_user_id=actor.user_id, visibility=Visibility.ARCHIVED
        )
        if archived is None:
            return self._not_found()

        if self._clients.get_client(archived.client_id, owner_user_id=actor.user_id) is None:
            return ProjectResult(error=not_found("Client", CLIENT_NOT_FOUND))

        if archived.project_code is not None:
            clash = self._projects.find_project_by_code(
                owner_user_id=actor.user_id,
                client_id=archived.client_id,
                project_code=archived.project_code,
                exclude_id=project_id,
            )
            if clash is not None:
                return ProjectResult(error=duplicate_code_error())

        try:
            restored = self._projects.restore_project(
                project_id, owner_user_id=actor.user_id
            )
        except DuplicateKeyError:
            return ProjectResult(error=duplicate_code_error())
        if not restored:
            return self._not_found()

        return ProjectResult(
            project=self._projects.get_project(project_id, owner_user_id=actor.user_id)
        )

    @staticmethod
    def _not_found() -> ProjectResult:
        return ProjectResult(error=not_found("Project", ARCHIVED_PROJECT_NOT_FOUND))
