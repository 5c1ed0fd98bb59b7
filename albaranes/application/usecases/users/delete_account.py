"""
===============================================================================
USE CASE: Delete Account (archive | hard delete)
===============================================================================

Business Rules:
    R1) Por defecto archiva la cuenta (soft); el email queda libre para un
        nuevo registro.
    R2) El borrado físico se rechaza con CONFLICT USER_HAS_DEPENDENT_RECORDS
        mientras la cuenta tenga clientes (activos o archivados).
===============================================================================
"""

from __future__ import annotations

import logging

from ....crosscutting.exceptions import ReferencedRecordError
from ....domain.entities import User
from ....domain.repositories import ClientRepository, UserRepository
from ..results import DeletionResult, conflict, not_found
from .user_results import USER_HAS_DEPENDENT_RECORDS, USER_NOT_FOUND

logger = logging.getLogger(__name__)


class DeleteAccountUseCase:
    def __init__(
        self, user_repository: UserRepository, client_repository: ClientRepository
    ) -> None:
        self._users = user_repository
        self._clients = client_repository

    def execute(self, user: User, *, soft: bool = True) -> DeletionResult:
        if soft:
            if not self._users.archive_user(user.id):
                return self._not_found()
            logger.info("User archived. user_id=%s", user.id)
            return DeletionResult(deleted=True)

        if self._clients.count_clients(owner_user_id=user.id):
            return self._has_dependents()

        try:
            deleted = self._users.delete_user(user.id)
        except ReferencedRecordError:
            return self._has_dependents()
        if not deleted:
            return self._not_found()
        logger.info("User hard deleted. user_id=%s", user.id)
        return DeletionResult(deleted=True, hard=True)

    @staticmethod
    def _not_found() -> DeletionResult:
        return DeletionResult(deleted=False, error=not_found("User", USER_NOT_FOUND))

    @staticmethod
    def _has_dependents() -> DeletionResult:
        return DeletionResult(
            deleted=False,
            error=conflict(
                USER_HAS_DEPENDENT_RECORDS,
                "The account still owns clients; delete them first.",
            ),
        )
