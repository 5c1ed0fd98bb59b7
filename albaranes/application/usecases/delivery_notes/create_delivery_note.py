"""
===============================================================================
USE CASE: Create Delivery Note
===============================================================================

Business Goal:
    Registrar un albarán (parte de horas o de material) sobre un proyecto
    propio, manteniendo la cadena albarán -> proyecto -> cliente -> usuario.

-------------------------------------------------------------------------------
CRC CARD
-------------------------------------------------------------------------------
Class:
    CreateDeliveryNoteUseCase

Responsibilities:
    - Regla de formato: hours exige hours >= 0.1; material exige quantity >= 0.
    - Verificar cliente propio activo (NOT_FOUND CLIENT_NOT_FOUND).
    - Verificar proyecto propio activo del MISMO cliente
      (NOT_FOUND PROJECT_NOT_FOUND_FOR_CLIENT).
    - Persistir el albarán sin firmar.

Collaborators:
    - ClientRepository / ProjectRepository / DeliveryNoteRepository
    - domain.rules.work_quantity_error
    - ownership_policy.project_chain_ok
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional
from uuid import UUID, uuid4

from ....domain.entities import DeliveryNote, WorkFormat
from ....domain.ownership_policy import Actor, project_chain_ok
from ....domain.repositories import (
    ClientRepository,
    DeliveryNoteRepository,
    ProjectRepository,
)
from ....domain.rules import work_quantity_error
from ..results import not_found, validation
from .delivery_note_results import (
    CLIENT_NOT_FOUND,
    PROJECT_NOT_FOUND_FOR_CLIENT,
    DeliveryNoteResult,
)


@dataclass(frozen=True)
class CreateDeliveryNoteInput:
    client_id: UUID
    project_id: UUID
    format: WorkFormat
    workdate: date
    description: str
    hours: Optional[float] = None
    quantity: Optional[float] = None
    observer_name: Optional[str] = None
    observer_nif: Optional[str] = None
    observations: Optional[str] = None


class CreateDeliveryNoteUseCase:
    def __init__(
        self,
        delivery_note_repository: DeliveryNoteRepository,
        project_repository: ProjectRepository,
        client_repository: ClientRepository,
    ) -> None:
        self._notes = delivery_note_repository
        self._projects = project_repository
        self._clients = client_repository

    def execute(
        self, actor: Actor, input_data: CreateDeliveryNoteInput
    ) -> DeliveryNoteResult:
        # ---------------------------------------------------------------------
        # 1) Reglas de input (antes de tocar el store).
        # ---------------------------------------------------------------------
        reason = work_quantity_error(
            input_data.format, input_data.hours, input_data.quantity
        )
        if reason is not None:
            return DeliveryNoteResult(error=validation(reason))

        description = (input_data.description or "").strip()
        if not description:
            return DeliveryNoteResult(error=validation("DESCRIPTION_REQUIRED"))

        # ---------------------------------------------------------------------
        # 2) Cadena de ownership: cliente y proyecto del mismo dueño.
        # ---------------------------------------------------------------------
        client = self._clients.get_client(
            input_data.client_id, owner_user_id=actor.user_id
        )
        if client is None:
            return DeliveryNoteResult(error=not_found("Client", CLIENT_NOT_FOUND))

        project = self._projects.get_project(
            input_data.project_id,
            owner_user_id=actor.user_id,
            client_id=client.id,
        )
        if not project_chain_ok(actor, project, client):
            return DeliveryNoteResult(
                error=not_found("Project", PROJECT_NOT_FOUND_FOR_CLIENT)
            )

        # ---------------------------------------------------------------------
        # 3) Persistir (sin firmar).
        # ---------------------------------------------------------------------
        note = DeliveryNote(
            id=uuid4(),
            owner_user_id=actor.user_id,
            client_id=client.id,
            project_id=project.id,
            format=input_data.format,
            workdate=input_data.workdate,
            description=description,
            hours=input_data.hours,
            quantity=input_data.quantity,
            observer_name=input_data.observer_name,
            observer_nif=input_data.observer_nif,
            observations=input_data.observations,
        )
        return DeliveryNoteResult(note=self._notes.create_delivery_note(note))
