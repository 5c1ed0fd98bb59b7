"""
===============================================================================
USE CASE: Sign Delivery Note
===============================================================================

Business Goal:
    Transición unsigned -> signed (terminal) de un albarán propio.

-------------------------------------------------------------------------------
FLOW
-------------------------------------------------------------------------------
1) Sin archivo (o vacío) => BAD_REQUEST SIGNATURE_IMAGE_FILE_REQUIRED.
2) Albarán inexistente, ajeno o ya firmado =>
   NOT_FOUND DELIVERY_NOTE_NOT_FOUND_OR_ALREADY_SIGNED.
3) Subir la imagen al object storage (falla => UPSTREAM_FAILURE, logueada).
4) mark_signed: sign_url + is_signed=true en un único UPDATE con guard
   `is_signed = false`. Sin filas => mismo NOT_FOUND (firmado entretanto).
===============================================================================
"""

from __future__ import annotations

import logging
from uuid import UUID

from ....crosscutting.exceptions import UpstreamError
from ....domain.ownership_policy import Actor
from ....domain.repositories import DeliveryNoteRepository
from ....domain.services import ObjectStoragePort
from ..results import UploadedFile, bad_request, not_found, upstream_failure
from .delivery_note_results import (
    DELIVERY_NOTE_NOT_FOUND_OR_ALREADY_SIGNED,
    SIGNATURE_IMAGE_FILE_REQUIRED,
    STORAGE_UPLOAD_FAILED,
    DeliveryNoteResult,
)

logger = logging.getLogger(__name__)


class SignDeliveryNoteUseCase:
    def __init__(
        self,
        delivery_note_repository: DeliveryNoteRepository,
        storage: ObjectStoragePort,
    ) -> None:
        self._notes = delivery_note_repository
        self._storage = storage

    def execute(
        self, actor: Actor, note_id: UUID, signature: UploadedFile | None
    ) -> DeliveryNoteResult:
        if signature is None or not signature.content:
            return DeliveryNoteResult(
                error=bad_request(
                    SIGNATURE_IMAGE_FILE_REQUIRED, "A signature image file is required."
                )
            )

        note = self._notes.get_delivery_note(note_id, owner_user_id=actor.user_id)
        if note is None or note.is_signed:
            return self._not_found()

        try:
            sign_url = self._storage.upload(
                signature.content,
                filename=signature.filename,
                content_type=signature.content_type,
            )
        except UpstreamError as exc:
            logger.error(
                "Signature upload failed. note_id=%s error_id=%s",
                note_id,
                exc.error_id,
            )
            return DeliveryNoteResult(
                error=upstream_failure(
                    STORAGE_UPLOAD_FAILED, "The signature could not be stored."
                )
            )

        signed = self._notes.mark_signed(
            note_id, owner_user_id=actor.user_id, sign_url=sign_url
        )
        if signed is None:
            return self._not_found()

        logger.info("Delivery note signed. note_id=%s", note_id)
        return DeliveryNoteResult(note=signed)

    @staticmethod
    def _not_found() -> DeliveryNoteResult:
        return DeliveryNoteResult(
            error=not_found("DeliveryNote", DELIVERY_NOTE_NOT_FOUND_OR_ALREADY_SIGNED)
        )
