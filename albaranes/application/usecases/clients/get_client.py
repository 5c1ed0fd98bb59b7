"""
===============================================================================
USE CASES: Get Client / List Clients
===============================================================================

Responsibilities:
    - Leer un cliente activo propio (NOT_FOUND si no existe o es ajeno).
    - Listar clientes propios: activos (default) o solo archivados.
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from ....domain.ownership_policy import Actor
from ....domain.repositories import ClientRepository
from ....domain.soft_delete import Visibility
from ..results import not_found
from .client_results import CLIENT_NOT_FOUND, ClientListResult, ClientResult


class GetClientUseCase:
    def __init__(self, client_repository: ClientRepository) -> None:
        self._clients = client_repository

    def execute(self, actor: Actor, client_id: UUID) -> ClientResult:
        client = self._clients.get_client(client_id, owner_user_id=actor.user_id)
        if client is None:
            return ClientResult(error=not_found("Client", CLIENT_NOT_FOUND))
        return ClientResult(client=client)


class ListClientsUseCase:
    def __init__(self, client_repository: ClientRepository) -> None:
        self._clients = client_repository

    def execute(self, actor: Actor, *, archived: bool = False) -> ClientListResult:
        visibility = Visibility.ARCHIVED if archived else Visibility.ACTIVE
        return ClientListResult(
            clients=self._clients.list_clients(
                owner_user_id=actor.user_id, visibility=visibility
            )
        )
