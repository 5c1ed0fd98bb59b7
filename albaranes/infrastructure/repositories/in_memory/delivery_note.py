"""
============================================================
TARJETA CRC — infrastructure/repositories/in_memory/delivery_note.py
============================================================
Class: InMemoryDeliveryNoteRepository

Responsibilities:
  - Implementar DeliveryNoteRepository en memoria, owner-scoped.
  - Firma de una sola vía: mark_signed solo matchea albaranes sin firmar.
  - Borrado físico solo de albaranes sin firmar (mismo guard que el trigger SQL).

Collaborators:
  - SoftDeleteStore (composición)
============================================================
"""

from __future__ import annotations

from typing import Callable, List, Optional
from uuid import UUID

from ....domain.entities import DeliveryNote
from ....domain.soft_delete import Visibility
from .soft_delete_store import SoftDeleteStore


class InMemoryDeliveryNoteRepository:
    def __init__(self) -> None:
        self._store: SoftDeleteStore[DeliveryNote] = SoftDeleteStore()

    @staticmethod
    def _owned_by(owner_user_id: UUID) -> Callable[[DeliveryNote], bool]:
        return lambda n: n.owner_user_id == owner_user_id

    def create_delivery_note(self, note: DeliveryNote) -> DeliveryNote:
        return self._store.insert(note)

    def list_delivery_notes(self, *, owner_user_id: UUID) -> List[DeliveryNote]:
        return self._store.select(where=self._owned_by(owner_user_id))

    def get_delivery_note(
        self,
        note_id: UUID,
        *,
        owner_user_id: UUID,
        visibility: Visibility = Visibility.ACTIVE,
    ) -> Optional[DeliveryNote]:
        return self._store.get(
            note_id, visibility=visibility, where=self._owned_by(owner_user_id)
        )

    def count_delivery_notes(self, *, owner_user_id: UUID, project_id: UUID) -> int:
        return self._store.count(
            where=lambda n: n.owner_user_id == owner_user_id
            and n.project_id == project_id
        )

    def mark_signed(
        self, note_id: UUID, *, owner_user_id: UUID, sign_url: str
    ) -> Optional[DeliveryNote]:
        return self._store.update(
            note_id,
            {"sign_url": sign_url, "is_signed": True},
            where=lambda n: n.owner_user_id == owner_user_id and not n.is_signed,
        )

    def set_pdf_url(
        self, note_id: UUID, *, owner_user_id: UUID, pdf_url: str
    ) -> Optional[DeliveryNote]:
        return self._store.update(
            note_id, {"pdf_url": pdf_url}, where=self._owned_by(owner_user_id)
        )

    def delete_unsigned_delivery_note(
        self, note_id: UUID, *, owner_user_id: UUID
    ) -> bool:
        return self._store.hard_delete(
            note_id,
            where=lambda n: n.owner_user_id == owner_user_id and not n.is_signed,
        )
