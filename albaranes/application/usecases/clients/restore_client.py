"""
===============================================================================
USE CASE: Restore Client
===============================================================================

Responsibilities:
    - Des-archivar un cliente propio (solo matchea archivados).
    - Re-chequear unicidad: si entretanto se creó otro cliente activo con el
      mismo CIF, el restore es CONFLICT.
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from ....crosscutting.exceptions import DuplicateKeyError
from ....domain.ownership_policy import Actor
from ....domain.repositories import ClientRepository
from ....domain.soft_delete import Visibility
from ..results import conflict, not_found
from .client_results import (
    ARCHIVED_CLIENT_NOT_FOUND,
    CLIENT_CIF_ALREADY_EXISTS_FOR_USER,
    ClientResult,
)


class RestoreClientUseCase:
    def __init__(self, client_repository: ClientRepository) -> None:
        self._clients = client_repository

    def execute(self, actor: Actor, client_id: UUID) -> ClientResult:
        archived = self._clients.get_client(
            client_id, owner_user_id=actor.user_id, visibility=Visibility.ARCHIVED
        )
        if archived is None:
            return self._not_found()

        clash = self._clients.find_client_by_cif(
            owner_user_id=actor.user_id, cif=archived.cif, exclude_id=client_id
        )
        if clash is not None:
            return self._duplicate()

        try:
            restored = self._clients.restore_client(client_id, owner_user_id=actor.user_id)
        except DuplicateKeyError:
            return self._duplicate()
        if not restored:
            return self._not_found()

        return ClientResult(
            client=self._clients.get_client(client_id, owner_user_id=actor.user_id)
        )

    @staticmethod
    def _not_found() -> ClientResult:
        return ClientResult(error=not_found("Client", ARCHIVED_CLIENT_NOT_FOUND))

    @staticmethod
    def _duplicate() -> ClientResult:
        return ClientResult(
            error=conflict(
                CLIENT_CIF_ALREADY_EXISTS_FOR_USER,
                "An active client with this CIF already exists for this user.",
            )
        )
