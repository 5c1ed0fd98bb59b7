"""
===============================================================================
USE CASE: Update Client
===============================================================================

Responsibilities:
    - Actualizar nombre / CIF / dirección de un cliente activo propio.
    - Si cambia el CIF, re-chequear unicidad excluyendo al propio cliente.

Error Mapping:
    - NOT_FOUND (CLIENT_NOT_FOUND): inexistente, archivado o ajeno.
    - CONFLICT (CLIENT_CIF_ALREADY_EXISTS_FOR_USER).
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from uuid import UUID

from ....crosscutting.exceptions import DuplicateKeyError
from ....domain.entities import Address
from ....domain.ownership_policy import Actor
from ....domain.repositories import ClientRepository
from ....domain.rules import normalize_cif
from ..results import conflict, not_found, validation
from .client_results import (
    CLIENT_CIF_ALREADY_EXISTS_FOR_USER,
    CLIENT_NOT_FOUND,
    ClientResult,
)


@dataclass(frozen=True)
class UpdateClientInput:
    name: str | None = None
    cif: str | None = None
    address: Address | None = None


class UpdateClientUseCase:
    def __init__(self, client_repository: ClientRepository) -> None:
        self._clients = client_repository

    def execute(
        self, actor: Actor, client_id: UUID, input_data: UpdateClientInput
    ) -> ClientResult:
        current = self._clients.get_client(client_id, owner_user_id=actor.user_id)
        if current is None:
            return self._not_found()

        changes: dict = {}
        if input_data.name is not None:
            name = input_data.name.strip()
            if not name:
                return ClientResult(error=validation("NAME_REQUIRED"))
            changes["name"] = name
        if input_data.cif is not None:
            cif = normalize_cif(input_data.cif)
            if not cif:
                return ClientResult(error=validation("CIF_REQUIRED"))
            changes["cif"] = cif
        if input_data.address is not None:
            changes["address"] = input_data.address

        if "cif" in changes and changes["cif"] != current.cif:
            clash = self._clients.find_client_by_cif(
                owner_user_id=actor.user_id, cif=changes["cif"], exclude_id=client_id
            )
            if clash is not None:
                return self._duplicate()

        try:
            updated = self._clients.update_client(replace(current, **changes))
        except DuplicateKeyError:
            return self._duplicate()

        if updated is None:
            # Archivado o borrado entre la lectura y la escritura.
            return self._not_found()
        return ClientResult(client=updated)

    @staticmethod
    def _not_found() -> ClientResult:
        return ClientResult(error=not_found("Client", CLIENT_NOT_FOUND))

    @staticmethod
    def _duplicate() -> ClientResult:
        return ClientResult(
            error=conflict(
                CLIENT_CIF_ALREADY_EXISTS_FOR_USER,
                "A client with this CIF already exists for this user.",
            )
        )
