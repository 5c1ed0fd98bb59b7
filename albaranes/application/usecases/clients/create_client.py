"""
===============================================================================
USE CASE: Create Client
===============================================================================

Business Goal:
    Dar de alta un cliente del usuario autenticado, garantizando que el par
    (usuario, CIF) sea único entre sus clientes activos.

-------------------------------------------------------------------------------
CRC CARD
-------------------------------------------------------------------------------
Class:
    CreateClientUseCase

Responsibilities:
    - Normalizar el CIF (trim + upper).
    - Pre-chequear duplicado entre clientes activos del mismo dueño.
    - Persistir el cliente.
    - Re-etiquetar DuplicateKeyError (carrera con otro alta) como el mismo
      CONFLICT del pre-chequeo.

Collaborators:
    - ClientRepository: find_client_by_cif, create_client
    - domain.rules.normalize_cif

-------------------------------------------------------------------------------
BUSINESS RULES
-------------------------------------------------------------------------------
R1) (owner_user_id, cif) único entre clientes NO archivados.
R2) Distintos dueños pueden compartir CIF.
R3) Un cliente archivado no bloquea el alta de otro con el mismo CIF.
===============================================================================
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from uuid import uuid4

from ....crosscutting.exceptions import DuplicateKeyError
from ....domain.entities import Address, Client
from ....domain.ownership_policy import Actor
from ....domain.repositories import ClientRepository
from ....domain.rules import normalize_cif
from ..results import conflict, validation
from .client_results import CLIENT_CIF_ALREADY_EXISTS_FOR_USER, ClientResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CreateClientInput:
    name: str
    cif: str
    address: Address | None = None


class CreateClientUseCase:
    def __init__(self, client_repository: ClientRepository) -> None:
        self._clients = client_repository

    def execute(self, actor: Actor, input_data: CreateClientInput) -> ClientResult:
        # ---------------------------------------------------------------------
        # 1) Normalización + validación mínima.
        # ---------------------------------------------------------------------
        name = (input_data.name or "").strip()
        cif = normalize_cif(input_data.cif)
        if not name:
            return ClientResult(error=validation("NAME_REQUIRED"))
        if not cif:
            return ClientResult(error=validation("CIF_REQUIRED"))

        # ---------------------------------------------------------------------
        # 2) Pre-chequeo de unicidad (solo activos del mismo dueño).
        # ---------------------------------------------------------------------
        existing = self._clients.find_client_by_cif(
            owner_user_id=actor.user_id, cif=cif
        )
        if existing is not None:
            return self._duplicate()

        # ---------------------------------------------------------------------
        # 3) Persistir (el índice parcial es el respaldo ante carreras).
        # ---------------------------------------------------------------------
        client = Client(
            id=uuid4(),
            owner_user_id=actor.user_id,
            name=name,
            cif=cif,
            address=input_data.address,
        )
        try:
            created = self._clients.create_client(client)
        except DuplicateKeyError:
            logger.info("Client create lost a uniqueness race. cif=%s", cif)
            return self._duplicate()

        return ClientResult(client=created)

    @staticmethod
    def _duplicate() -> ClientResult:
        return ClientResult(
            error=conflict(
                CLIENT_CIF_ALREADY_EXISTS_FOR_USER,
                "A client with this CIF already exists for this user.",
            )
        )
