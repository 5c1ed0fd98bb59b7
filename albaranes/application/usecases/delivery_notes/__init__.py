from .create_delivery_note import CreateDeliveryNoteInput, CreateDeliveryNoteUseCase
from .delete_delivery_note import DeleteDeliveryNoteUseCase
from .delivery_note_results import (
    DeliveryNoteDocumentResult,
    DeliveryNoteListResult,
    DeliveryNotePdfResult,
    DeliveryNoteResult,
)
from .get_delivery_note import GetDeliveryNoteUseCase, ListDeliveryNotesUseCase
from .render_delivery_note_pdf import RenderDeliveryNotePdfUseCase
from .sign_delivery_note import SignDeliveryNoteUseCase

__all__ = [
    "CreateDeliveryNoteInput",
    "CreateDeliveryNoteUseCase",
    "DeleteDeliveryNoteUseCase",
    "DeliveryNoteDocumentResult",
    "DeliveryNoteListResult",
    "DeliveryNotePdfResult",
    "DeliveryNoteResult",
    "GetDeliveryNoteUseCase",
    "ListDeliveryNotesUseCase",
    "RenderDeliveryNotePdfUseCase",
    "SignDeliveryNoteUseCase",
]
