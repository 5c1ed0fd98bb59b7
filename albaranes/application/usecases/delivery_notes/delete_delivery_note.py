"""
===============================================================================
USE CASE: Delete Delivery Note (hard only, unsigned only)
===============================================================================

Business Rules:
    R1) Los albaranes no se archivan: soft delete => BAD_REQUEST
        SOFT_DELETE_NOT_SUPPORTED_USE_HARD_DELETE.
    R2) Un albarán firmado no se borra nunca => CONFLICT
        DELIVERY_NOTE_SIGNED_CANNOT_BE_DELETED.
    R3) El repositorio borra con guard `is_signed = false`; si el DELETE no
        afecta filas se relee para distinguir "se firmó entretanto" de
        "no existe".
===============================================================================
"""

from __future__ import annotations

import logging
from uuid import UUID

from ....domain.ownership_policy import Actor
from ....domain.repositories import DeliveryNoteRepository
from ..results import DeletionResult, bad_request, conflict, not_found
from .delivery_note_results import (
    DELIVERY_NOTE_NOT_FOUND,
    DELIVERY_NOTE_SIGNED_CANNOT_BE_DELETED,
    SOFT_DELETE_NOT_SUPPORTED,
)

logger = logging.getLogger(__name__)


class DeleteDeliveryNoteUseCase:
    def __init__(self, delivery_note_repository: DeliveryNoteRepository) -> None:
        self._notes = delivery_note_repository

    def execute(self, actor: Actor, note_id: UUID, *, hard: bool = False) -> DeletionResult:
        if not hard:
            return DeletionResult(
                deleted=False,
                error=bad_request(
                    SOFT_DELETE_NOT_SUPPORTED,
                    "Delivery notes cannot be archived; use hard=true.",
                ),
            )

        note = self._notes.get_delivery_note(note_id, owner_user_id=actor.user_id)
        if note is None:
            return self._not_found()
        if note.is_signed:
            return self._signed()

        if self._notes.delete_unsigned_delivery_note(note_id, owner_user_id=actor.user_id):
            logger.info("Delivery note deleted. note_id=%s", note_id)
            return DeletionResult(deleted=True, hard=True)

        # Carrera: se firmó o desapareció entre la lectura y el DELETE.
        again = self._notes.get_delivery_note(note_id, owner_user_id=actor.user_id)
        if again is not None and again.is_signed:
            return self._signed()
        return self._not_found()

    @staticmethod
    def _not_found() -> DeletionResult:
        return DeletionResult(
            deleted=False, error=not_found("DeliveryNote", DELIVERY_NOTE_NOT_FOUND)
        )

    @staticmethod
    def _signed() -> DeletionResult:
        return DeletionResult(
            deleted=False,
            error=conflict(
                DELIVERY_NOTE_SIGNED_CANNOT_BE_DELETED,
                "Signed delivery notes cannot be deleted.",
            ),
        )
