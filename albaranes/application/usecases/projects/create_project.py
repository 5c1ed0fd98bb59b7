"""
===============================================================================
USE CASE: Create Project
===============================================================================

Business Goal:
    Crear un proyecto colgando de un cliente propio y activo.

-------------------------------------------------------------------------------
CRC CARD
-------------------------------------------------------------------------------
Class:
    CreateProjectUseCase

Responsibilities:
    - Verificar el padre: el cliente existe, está activo y es del actor.
    - Validar importes: amount >= 0 y price >= 0 en cada precio unitario.
    - Unicidad dispersa: (owner, client, project_code) solo si hay código.
    - Re-etiquetar DuplicateKeyError como CONFLICT.

Collaborators:
    - ClientRepository.get_client
    - ProjectRepository.find_project_by_code / create_project

-------------------------------------------------------------------------------
BUSINESS RULES
-------------------------------------------------------------------------------
R1) Cliente ajeno o inexistente => NOT_FOUND (CLIENT_NOT_FOUND), sin distinguir.
R2) Código vacío equivale a "sin código" y nunca colisiona.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional
from uuid import UUID, uuid4

from ....crosscutting.exceptions import DuplicateKeyError
from ....domain.entities import Address, Project, UnitPrice
from ....domain.ownership_policy import Actor
from ....domain.repositories import ClientRepository, ProjectRepository
from ....domain.rules import normalize_project_code
from ..results import UseCaseError, not_found, validation
from .project_results import CLIENT_NOT_FOUND, ProjectResult, duplicate_code_error


@dataclass(frozen=True)
class CreateProjectInput:
    client_id: UUID
    name: str
    project_code: Optional[str] = None
    code: Optional[str] = None
    address: Optional[Address] = None
    begin: Optional[str] = None
    end: Optional[str] = None
    notes: Optional[str] = None
    unit_prices: List[UnitPrice] = field(default_factory=list)
    amount: Optional[float] = None


def money_error(
    amount: Optional[float], unit_prices: Optional[List[UnitPrice]]
) -> Optional[UseCaseError]:
    """Importes no negativos (compartido por create/update)."""
    if amount is not None and amount < 0:
        return validation("AMOUNT_MUST_BE_NON_NEGATIVE")
    for price in unit_prices or []:
        if price.price < 0:
            return validation("PRICE_MUST_BE_NON_NEGATIVE")
    return None


class CreateProjectUseCase:
    def __init__(
        self,
        project_repository: ProjectRepository,
        client_repository: ClientRepository,
    ) -> None:
        self._projects = project_repository
        self._clients = client_repository

    def execute(self, actor: Actor, input_data: CreateProjectInput) -> ProjectResult:
        # ---------------------------------------------------------------------
        # 1) Validaciones de input.
        # ---------------------------------------------------------------------
        name = (input_data.name or "").strip()
        if not name:
            return ProjectResult(error=validation("NAME_REQUIRED"))
        error = money_error(input_data.amount, input_data.unit_prices)
        if error is not None:
            return ProjectResult(error=error)

        # ---------------------------------------------------------------------
        # 2) Padre: cliente propio y activo.
        # ---------------------------------------------------------------------
        client = self._clients.get_client(
            input_data.client_id, owner_user_id=actor.user_id
        )
        if client is None:
            return ProjectResult(error=not_found("Client", CLIENT_NOT_FOUND))

        # ---------------------------------------------------------------------
        # 3) Unicidad del código (solo si viene informado).
        # ---------------------------------------------------------------------
        project_code = normalize_project_code(input_data.project_code)
        if project_code is not None:
            clash = self._projects.find_project_by_code(
                owner_user_id=actor.user_id,
                client_id=client.id,
                project_code=project_code,
            )
            if clash is not None:
                return ProjectResult(error=duplicate_code_error())

        project = Project(
            id=uuid4(),
            owner_user_id=actor.user_id,
            client_id=client.id,
            name=name,
            project_code=project_code,
            code=input_data.code,
            address=input_data.address,
            begin=input_data.begin,
            end=input_data.end,
            notes=input_data.notes,
            unit_prices=list(input_data.unit_prices),
            amount=input_data.amount,
        )
        # ---------------------------------------------------------------------
        # 4) Persistir (índice parcial como respaldo).
        # ---------------------------------------------------------------------
        try:
            created = self._projects.create_project(project)
        except DuplicateKeyError:
            return ProjectResult(error=duplicate_code_error())

        return ProjectResult(project=created)
