"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/delivery_note.py
============================================================
Class: PostgresDeliveryNoteRepository

Responsibilities:
- Implementar DeliveryNoteRepository en PostgreSQL (SQL crudo, owner-scoped).
- Firma atómica: UPDATE ... SET sign_url, is_signed = true WHERE is_signed = false.
- Borrado físico solo de albaranes sin firmar (guard en WHERE; el trigger
  delivery_notes_signed_guard es el respaldo en la base).

Collaborators:
- SoftDeleteTable
- Tabla: delivery_notes (CHECK formato/cantidad, FKs a users/clients/projects)
============================================================
"""

from __future__ import annotations

from typing import List, Optional
from uuid import UUID

from psycopg_pool import ConnectionPool

from ....domain.entities import DeliveryNote, WorkFormat
from ....domain.soft_delete import Visibility
from .soft_delete_table import SoftDeleteTable


class PostgresDeliveryNoteRepository:
    """R: Implementación PostgreSQL del repositorio de albaranes."""

    _SELECT_COLUMNS = """
        id, owner_user_id, client_id, project_id, format, workdate, description,
        hours, quantity, sign_url, is_signed, pdf_url,
        observer_name, observer_nif, observations,
        created_at, updated_at, deleted, deleted_at
    """

    _ORDER_BY = "ORDER BY created_at DESC, id ASC"

    def __init__(self, pool: Optional[ConnectionPool] = None):
        self._table = SoftDeleteTable(table="delivery_notes", pool=pool)

    # =========================================================
    # Mapping
    # =========================================================
    @staticmethod
    def _row_to_note(row: tuple) -> DeliveryNote:
        (
            note_id,
            owner_user_id,
            client_id,
            project_id,
            format,
            workdate,
            description,
            hours,
            quantity,
            sign_url,
            is_signed,
            pdf_url,
            observer_name,
            observer_nif,
            observations,
            created_at,
            updated_at,
            deleted,
            deleted_at,
        ) = row

        return DeliveryNote(
            id=note_id,
            owner_user_id=owner_user_id,
            client_id=client_id,
            project_id=project_id,
            format=WorkFormat(format),
            workdate=workdate,
            description=description,
            hours=float(hours) if hours is not None else None,
            quantity=float(quantity) if quantity is not None else None,
            sign_url=sign_url,
            is_signed=bool(is_signed),
            pdf_url=pdf_url,
            observer_name=observer_name,
            observer_nif=observer_nif,
            observations=observations,
            created_at=created_at,
            updated_at=updated_at,
            deleted=bool(deleted),
            deleted_at=deleted_at,
        )

    def _update_returning(
        self, *, set_sql: str, conditions: list[str], params: list[object], context_msg: str
    ) -> Optional[DeliveryNote]:
        query = f"""
            UPDATE delivery_notes
            SET {set_sql}, updated_at = now()
            {self._table.where(conditions)}
            RETURNING {self._SELECT_COLUMNS}
        """
        row = self._table.fetchone(query=query, params=params, context_msg=context_msg)
        return self._row_to_note(row) if row else None

    # =========================================================
    # Public API
    # =========================================================
    def create_delivery_note(self, note: DeliveryNote) -> DeliveryNote:
        query = f"""
            INSERT INTO delivery_notes (
                id, owner_user_id, client_id, project_id, format, workdate,
                description, hours, quantity, observer_name, observer_nif,
                observations
            )
            VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s)
            RETURNING {self._SELECT_COLUMNS}
        """
        row = self._table.fetchone(
            query=query,
            params=[
                note.id,
                note.owner_user_id,
                note.client_id,
                note.project_id,
                note.format.value,
                note.workdate,
                note.description,
                note.hours,
                note.quantity,
                note.observer_name,
                note.observer_nif,
                note.observations,
            ],
            context_msg="PostgresDeliveryNoteRepository: Failed to create delivery note",
            extra={"note_id": str(note.id)},
        )
        return self._row_to_note(row)

    def list_delivery_notes(self, *, owner_user_id: UUID) -> List[DeliveryNote]:
        query = f"""
            SELECT {self._SELECT_COLUMNS}
            FROM delivery_notes
            WHERE owner_user_id = %s AND deleted = false
            {self._ORDER_BY}
        """
        rows = self._table.fetchall(
            query=query,
            params=[owner_user_id],
            context_msg="PostgresDeliveryNoteRepository: Failed to list delivery notes",
        )
        return [self._row_to_note(r) for r in rows]

    def get_delivery_note(
        self,
        note_id: UUID,
        *,
        owner_user_id: UUID,
        visibility: Visibility = Visibility.ACTIVE,
    ) -> Optional[DeliveryNote]:
        conditions = [
            "id = %s",
            "owner_user_id = %s",
            self._table.visibility_condition(visibility),
        ]
        query = f"""
            SELECT {self._SELECT_COLUMNS}
            FROM delivery_notes
            {self._table.where(conditions)}
        """
        row = self._table.fetchone(
            query=query,
            params=[note_id, owner_user_id],
            context_msg="PostgresDeliveryNoteRepository: Failed to get delivery note",
        )
        return self._row_to_note(row) if row else None

    def count_delivery_notes(self, *, owner_user_id: UUID, project_id: UUID) -> int:
        return self._table.count(
            conditions=["owner_user_id = %s", "project_id = %s"],
            params=[owner_user_id, project_id],
            context_msg="PostgresDeliveryNoteRepository: Failed to count delivery notes",
        )

    def mark_signed(
        self, note_id: UUID, *, owner_user_id: UUID, sign_url: str
    ) -> Optional[DeliveryNote]:
        return self._update_returning(
            set_sql="sign_url = %s, is_signed = true",
            conditions=[
                "id = %s",
                "owner_user_id = %s",
                "deleted = false",
                "is_signed = false",
            ],
            params=[sign_url, note_id, owner_user_id],
            context_msg="PostgresDeliveryNoteRepository: Failed to sign delivery note",
        )

    def set_pdf_url(
        self, note_id: UUID, *, owner_user_id: UUID, pdf_url: str
    ) -> Optional[DeliveryNote]:
        return self._update_returning(
            set_sql="pdf_url = %s",
            conditions=["id = %s", "owner_user_id = %s", "deleted = false"],
            params=[pdf_url, note_id, owner_user_id],
            context_msg="PostgresDeliveryNoteRepository: Failed to set pdf url",
        )

    def delete_unsigned_delivery_note(
        self, note_id: UUID, *, owner_user_id: UUID
    ) -> bool:
        return self._table.hard_delete(
            note_id,
            owner_user_id=owner_user_id,
            extra_conditions=["is_signed = false"],
        )
