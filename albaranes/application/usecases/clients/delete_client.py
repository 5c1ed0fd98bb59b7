"""
===============================================================================
USE CASE: Delete Client (archive | hard delete)
===============================================================================

Business Goal:
    Retirar un cliente propio, por defecto archivándolo (soft delete).

-------------------------------------------------------------------------------
FLOW
-------------------------------------------------------------------------------
soft (default):
    1) archive_client(id, owner) -> False => NOT_FOUND (inexistente, ajeno o
       ya archivado).
hard:
    1) Buscar el cliente incluyendo archivados (puede borrarse desde la
       papelera).
    2) Si tiene proyectos (activos o archivados) => CONFLICT
       CLIENT_HAS_DEPENDENT_RECORDS.
    3) delete_client; ReferencedRecordError (FK RESTRICT) => mismo CONFLICT.
===============================================================================
"""

from __future__ import annotations

import logging
from uuid import UUID

from ....crosscutting.exceptions import ReferencedRecordError
from ....domain.ownership_policy import Actor
from ....domain.repositories import ClientRepository, ProjectRepository
from ....domain.soft_delete import Visibility
from ..results import DeletionResult, conflict, not_found
from .client_results import CLIENT_HAS_DEPENDENT_RECORDS, CLIENT_NOT_FOUND

logger = logging.getLogger(__name__)


class DeleteClientUseCase:
    def __init__(
        self,
        client_repository: ClientRepository,
        project_repository: ProjectRepository,
    ) -> None:
        self._clients = client_repository
        self._projects = project_repository

    def execute(self, actor: Actor, client_id: UUID, *, hard: bool = False) -> DeletionResult:
        if not hard:
            if not self._clients.archive_client(client_id, owner_user_id=actor.user_id):
                return self._not_found()
            return DeletionResult(deleted=True)

        client = self._clients.get_client(
            client_id, owner_user_id=actor.user_id, visibility=Visibility.ALL
        )
        if client is None:
            return self._not_found()

        if self._projects.count_projects(owner_user_id=actor.user_id, client_id=client_id):
            return self._has_dependents()

        try:
            deleted = self._clients.delete_client(client_id, owner_user_id=actor.user_id)
        except ReferencedRecordError:
            logger.info("Client hard delete blocked by references. client_id=%s", client_id)
            return self._has_dependents()

        if not deleted:
            return self._not_found()
        return DeletionResult(deleted=True, hard=True)

    @staticmethod
    def _not_found() -> DeletionResult:
        return DeletionResult(deleted=False, error=not_found("Client", CLIENT_NOT_FOUND))

    @staticmethod
    def _has_dependents() -> DeletionResult:
        return DeletionResult(
            deleted=False,
            error=conflict(
                CLIENT_HAS_DEPENDENT_RECORDS,
                "The client still has projects; delete them first.",
            ),
        )
