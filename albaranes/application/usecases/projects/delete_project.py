"""
===============================================================================
USE CASE: Delete Project (archive | hard delete)
===============================================================================

FLOW:
    soft (default): archive_project -> False => NOT_FOUND.
    hard: buscar incluyendo archivados; con albaranes => CONFLICT
          PROJECT_HAS_DEPENDENT_RECORDS; ReferencedRecordError => mismo CONFLICT.
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from ....crosscutting.exceptions import ReferencedRecordError
from ....domain.ownership_policy import Actor
from ....domain.repositories import DeliveryNoteRepository, ProjectRepository
from ....domain.soft_delete import Visibility
from ..results import DeletionResult, conflict, not_found
from .project_results import PROJECT_HAS_DEPENDENT_RECORDS, PROJECT_NOT_FOUND


class DeleteProjectUseCase:
    def __init__(
        self,
        project_repository: ProjectRepository,
        delivery_note_repository: DeliveryNoteRepository,
    ) -> None:
        self._projects = project_repository
        self._notes = delivery_note_repository

    def execute(self, actor: Actor, project_id: UUID, *, hard: bool = False) -> DeletionResult:
        if not hard:
            if not self._projects.archive_project(project_id, owner_user_id=actor.user_id):
                return self._not_found()
            return DeletionResult(deleted=True)

        project = self._projects.get_project(
            project_id, owner_user_id=actor.user_id, visibility=Visibility.ALL
        )
        if project is None:
            return self._not_found()

        if self._notes.count_delivery_notes(
            owner_user_id=actor.user_id, project_id=project_id
        ):
            return self._has_dependents()

        try:
            deleted = self._projects.delete_project(project_id, owner_user_id=actor.user_id)
        except ReferencedRecordError:
            return self._has_dependents()

        if not deleted:
            return self._not_found()
        return DeletionResult(deleted=True, hard=True)

    @staticmethod
    def _not_found() -> DeletionResult:
        return DeletionResult(deleted=False, error=not_found("Project", PROJECT_NOT_FOUND))

    @staticmethod
    def _has_dependents() -> DeletionResult:
        return DeletionResult(
            deleted=False,
            error=conflict(
                PROJECT_HAS_DEPENDENT_RECORDS,
                "The project still has delivery notes; delete them first.",
            ),
        )
