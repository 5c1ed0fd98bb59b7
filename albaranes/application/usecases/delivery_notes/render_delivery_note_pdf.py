"""
===============================================================================
USE CASE: Render Delivery Note PDF
===============================================================================

Business Goal:
    Generar el PDF de un albarán propio, subirlo al object storage y guardar
    su URL en pdf_url.

Collaborators:
    - GetDeliveryNoteUseCase (carga la cadena poblada)
    - DeliveryNoteRendererPort (ReportLab)
    - ObjectStoragePort
    - DeliveryNoteRepository.set_pdf_url

Error Mapping:
    - NOT_FOUND: albarán inexistente o ajeno.
    - UPSTREAM_FAILURE: renderer o storage fallaron (causa logueada).
===============================================================================
"""

from __future__ import annotations

import logging
from uuid import UUID

from ....crosscutting.exceptions import UpstreamError
from ....domain.ownership_policy import Actor
from ....domain.repositories import DeliveryNoteRepository
from ....domain.services import DeliveryNoteRendererPort, ObjectStoragePort
from ..results import not_found, upstream_failure
from .delivery_note_results import (
    DELIVERY_NOTE_NOT_FOUND,
    PDF_GENERATION_FAILED,
    STORAGE_UPLOAD_FAILED,
    DeliveryNotePdfResult,
)
from .get_delivery_note import GetDeliveryNoteUseCase

logger = logging.getLogger(__name__)

PDF_CONTENT_TYPE = "application/pdf"


class RenderDeliveryNotePdfUseCase:
    def __init__(
        self,
        get_delivery_note: GetDeliveryNoteUseCase,
        delivery_note_repository: DeliveryNoteRepository,
        renderer: DeliveryNoteRendererPort,
        storage: ObjectStoragePort,
    ) -> None:
        self._get_note = get_delivery_note
        self._notes = delivery_note_repository
        self._renderer = renderer
        self._storage = storage

    def execute(self, actor: Actor, note_id: UUID) -> DeliveryNotePdfResult:
        loaded = self._get_note.execute(actor, note_id)
        if loaded.error is not None:
            return DeliveryNotePdfResult(error=loaded.error)

        try:
            content = self._renderer.render(loaded.document)
        except Exception:
            logger.exception("PDF rendering failed. note_id=%s", note_id)
            return DeliveryNotePdfResult(
                error=upstream_failure(
                    PDF_GENERATION_FAILED, "The PDF could not be generated."
                )
            )

        try:
            pdf_url = self._storage.upload(
                content,
                filename=f"delivery-note-{note_id}.pdf",
                content_type=PDF_CONTENT_TYPE,
            )
        except UpstreamError as exc:
            logger.error(
                "PDF upload failed. note_id=%s error_id=%s", note_id, exc.error_id
            )
            return DeliveryNotePdfResult(
                error=upstream_failure(STORAGE_UPLOAD_FAILED, "The PDF could not be stored.")
            )

        note = self._notes.set_pdf_url(
            note_id, owner_user_id=actor.user_id, pdf_url=pdf_url
        )
        if note is None:
            return DeliveryNotePdfResult(
                error=not_found("DeliveryNote", DELIVERY_NOTE_NOT_FOUND)
            )
        return DeliveryNotePdfResult(pdf_url=pdf_url, note=note)
