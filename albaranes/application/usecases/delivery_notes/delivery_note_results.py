"""Modelos de resultado de los casos de uso de albaranes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from ....domain.entities import DeliveryNote
from ....domain.services import DeliveryNoteDocument
from ..results import UseCaseError

DELIVERY_NOTE_NOT_FOUND = "DELIVERY_NOTE_NOT_FOUND"
DELIVERY_NOTE_NOT_FOUND_OR_ALREADY_SIGNED = "DELIVERY_NOTE_NOT_FOUND_OR_ALREADY_SIGNED"
DELIVERY_NOTE_SIGNED_CANNOT_BE_DELETED = "DELIVERY_NOTE_SIGNED_CANNOT_BE_DELETED"
SOFT_DELETE_NOT_SUPPORTED = "SOFT_DELETE_NOT_SUPPORTED_USE_HARD_DELETE"
SIGNATURE_IMAGE_FILE_REQUIRED = "SIGNATURE_IMAGE_FILE_REQUIRED"
CLIENT_NOT_FOUND = "CLIENT_NOT_FOUND"
PROJECT_NOT_FOUND_FOR_CLIENT = "PROJECT_NOT_FOUND_FOR_CLIENT"
STORAGE_UPLOAD_FAILED = "STORAGE_UPLOAD_FAILED"
PDF_GENERATION_FAILED = "PDF_GENERATION_FAILED"


@dataclass
class DeliveryNoteResult:
    note: DeliveryNote | None = None
    error: UseCaseError | None = None


@dataclass
class DeliveryNoteListResult:
    notes: List[DeliveryNote] = field(default_factory=list)
    error: UseCaseError | None = None


@dataclass
class DeliveryNoteDocumentResult:
    """Albarán con su cadena (usuario, cliente, proyecto) poblada."""

    document: DeliveryNoteDocument | None = None
    error: UseCaseError | None = None


@dataclass
class DeliveryNotePdfResult:
    pdf_url: str | None = None
    note: DeliveryNote | None = None
    error: UseCaseError | None = None
