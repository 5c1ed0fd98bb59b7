"""
===============================================================================
USE CASE: Update Project
===============================================================================

Business Goal:
    Modificar un proyecto activo propio. Cubre el PUT completo y los PATCH
    puntuales (activar/desactivar, precios unitarios, importe): todos son
    actualizaciones parciales sobre el mismo registro.

-------------------------------------------------------------------------------
FLOW
-------------------------------------------------------------------------------
1) Cargar proyecto activo propio (NOT_FOUND PROJECT_NOT_FOUND).
2) Si cambia client_id: el nuevo cliente debe ser propio y activo
   (NOT_FOUND CLIENT_NOT_FOUND) y el proyecto no puede tener albaranes, que
   guardan el client_id original (CONFLICT PROJECT_HAS_DEPENDENT_RECORDS).
3) Si el código final existe y cambió el código o el cliente: re-chequear
   unicidad excluyendo al propio proyecto.
4) Persistir; DuplicateKeyError => CONFLICT; None => NOT_FOUND (carrera).
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import List, Optional
from uuid import UUID

from ....crosscutting.exceptions import DuplicateKeyError
from ....domain.entities import Address, UnitPrice
from ....domain.ownership_policy import Actor
from ....domain.repositories import (
    ClientRepository,
    DeliveryNoteRepository,
    ProjectRepository,
)
from ....domain.rules import normalize_project_code
from ..results import conflict, not_found, validation
from .create_project import money_error
from .project_results import (
    CLIENT_NOT_FOUND,
    PROJECT_HAS_DEPENDENT_RECORDS,
    PROJECT_NOT_FOUND,
    ProjectResult,
    duplicate_code_error,
)


@dataclass(frozen=True)
class UpdateProjectInput:
    """
    Campos a modificar; None = sin cambios.

    project_code admite "" para quitar el código.
    """

    client_id: Optional[UUID] = None
    name: Optional[str] = None
    project_code: Optional[str] = None
    code: Optional[str] = None
    address: Optional[Address] = None
    begin: Optional[str] = None
    end: Optional[str] = None
    notes: Optional[str] = None
    is_active: Optional[bool] = None
    unit_prices: Optional[List[UnitPrice]] = None
    amount: Optional[float] = None


class UpdateProjectUseCase:
    def __init__(
        self,
        project_repository: ProjectRepository,
        client_repository: ClientRepository,
        delivery_note_repository: DeliveryNoteRepository,
    ) -> None:
        self._projects = project_repository
        self._clients = client_repository
        self._notes = delivery_note_repository

    def execute(
        self, actor: Actor, project_id: UUID, input_data: UpdateProjectInput
    ) -> ProjectResult:
        current = self._projects.get_project(project_id, owner_user_id=actor.user_id)
        if current is None:
            return self._not_found()

        error = money_error(input_data.amount, input_data.unit_prices)
        if error is not None:
            return ProjectResult(error=error)

        changes: dict = {}
        if input_data.name is not None:
            name = input_data.name.strip()
            if not name:
                return ProjectResult(error=validation("NAME_REQUIRED"))
            changes["name"] = name
        if input_data.project_code is not None:
            changes["project_code"] = normalize_project_code(input_data.project_code)
        if input_data.unit_prices is not None:
            changes["unit_prices"] = list(input_data.unit_prices)
        for attr in ("code", "address", "begin", "end", "notes", "is_active", "amount"):
            value = getattr(input_data, attr)
            if value is not None:
                changes[attr] = value

        if input_data.client_id is not None and input_data.client_id != current.client_id:
            client = self._clients.get_client(
                input_data.client_id, owner_user_id=actor.user_id
            )
            if client is None:
                return ProjectResult(error=not_found("Client", CLIENT_NOT_FOUND))
            if self._notes.count_delivery_notes(
                owner_user_id=actor.user_id, project_id=project_id
            ):
                return ProjectResult(
                    error=conflict(
                        PROJECT_HAS_DEPENDENT_RECORDS,
                        "A project with delivery notes cannot move to another client.",
                    )
                )
            changes["client_id"] = client.id

        updated = replace(current, **changes)
        key_changed = (
            updated.project_code != current.project_code
            or updated.client_id != current.client_id
        )
        if updated.project_code is not None and key_changed:
            clash = self._projects.find_project_by_code(
                owner_user_id=actor.user_id,
                client_id=updated.client_id,
                project_code=updated.project_code,
                exclude_id=project_id,
            )
            if clash is not None:
                return ProjectResult(error=duplicate_code_error())

        try:
            saved = self._projects.update_project(updated)
        except DuplicateKeyError:
            return ProjectResult(error=duplicate_code_error())

        if saved is None:
            return self._not_found()
        return ProjectResult(project=saved)

    @staticmethod
    def _not_found() -> ProjectResult:
        return ProjectResult(error=not_found("Project", PROJECT_NOT_FOUND))
