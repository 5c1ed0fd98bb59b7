"""
===============================================================================
USE CASES: List Delivery Notes / Get Delivery Note (populated)
===============================================================================

Responsibilities:
    - Listar albaranes propios.
    - Leer un albarán propio con su cadena poblada (usuario, cliente,
      proyecto). Cliente y proyecto se buscan incluyendo archivados: un
      albarán histórico sigue mostrando a quién se le hizo el trabajo.
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from ....domain.ownership_policy import Actor, owns
from ....domain.repositories import (
    ClientRepository,
    DeliveryNoteRepository,
    ProjectRepository,
    UserRepository,
)
from ....domain.services import DeliveryNoteDocument
from ....domain.soft_delete import Visibility
from ..results import not_found
from .delivery_note_results import (
    DELIVERY_NOTE_NOT_FOUND,
    DeliveryNoteDocumentResult,
    DeliveryNoteListResult,
)


class ListDeliveryNotesUseCase:
    def __init__(self, delivery_note_repository: DeliveryNoteRepository) -> None:
        self._notes = delivery_note_repository

    def execute(self, actor: Actor) -> DeliveryNoteListResult:
        return DeliveryNoteListResult(
            notes=self._notes.list_delivery_notes(owner_user_id=actor.user_id)
        )


class GetDeliveryNoteUseCase:
    def __init__(
        self,
        delivery_note_repository: DeliveryNoteRepository,
        user_repository: UserRepository,
        client_repository: ClientRepository,
        project_repository: ProjectRepository,
    ) -> None:
        self._notes = delivery_note_repository
        self._users = user_repository
        self._clients = client_repository
        self._projects = project_repository

    def execute(self, actor: Actor, note_id: UUID) -> DeliveryNoteDocumentResult:
        note = self._notes.get_delivery_note(note_id, owner_user_id=actor.user_id)
        if note is None or not owns(actor, note):
            return DeliveryNoteDocumentResult(
                error=not_found("DeliveryNote", DELIVERY_NOTE_NOT_FOUND)
            )

        document = DeliveryNoteDocument(
            note=note,
            user=self._users.get_user(actor.user_id),
            client=self._clients.get_client(
                note.client_id, owner_user_id=actor.user_id, visibility=Visibility.ALL
            ),
            project=self._projects.get_project(
                note.project_id, owner_user_id=actor.user_id, visibility=Visibility.ALL
            ),
        )
        return DeliveryNoteDocumentResult(document=document)
