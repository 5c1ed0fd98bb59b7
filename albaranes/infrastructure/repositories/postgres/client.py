"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/client.py
============================================================
Class: PostgresClientRepository

Responsibilities:
- Implementar ClientRepository en PostgreSQL (SQL crudo, owner-scoped).
- Respetar visibilidad (ACTIVE / ARCHIVED / ALL) en todos los finders.
- Delegar archive / restore / hard delete en SoftDeleteTable.

Collaborators:
- SoftDeleteTable (ejecución + errores)
- Tabla: clients (índice único parcial clients_owner_cif_active_uidx)

Constraints / Notes:
- Sin lógica de negocio: la unicidad se pre-chequea arriba; el índice es el
  respaldo ante carreras (DuplicateKeyError).
============================================================
"""

from __future__ import annotations

from typing import List, Optional
from uuid import UUID

from psycopg_pool import ConnectionPool

from ....domain.entities import Client
from ....domain.rules import normalize_cif
from ....domain.soft_delete import Visibility
from .json_columns import address_from_db, address_to_db
from .soft_delete_table import SoftDeleteTable


class PostgresClientRepository:
    """R: Implementación PostgreSQL del repositorio de clientes."""

    _SELECT_COLUMNS = """
        id, owner_user_id, name, cif, address,
        created_at, updated_at, deleted, deleted_at
    """

    _ORDER_BY = "ORDER BY created_at DESC, id ASC"

    def __init__(self, pool: Optional[ConnectionPool] = None):
        self._table = SoftDeleteTable(table="clients", pool=pool)

    # =========================================================
    # Mapping
    # =========================================================
    @staticmethod
    def _row_to_client(row: tuple) -> Client:
        (
            client_id,
            owner_user_id,
            name,
            cif,
            address,
            created_at,
            updated_at,
            deleted,
            deleted_at,
        ) = row

        return Client(
            id=client_id,
            owner_user_id=owner_user_id,
            name=name,
            cif=cif,
            address=address_from_db(address),
            created_at=created_at,
            updated_at=updated_at,
            deleted=bool(deleted),
            deleted_at=deleted_at,
        )

    def _select(
        self, *, conditions: list[str | None], params: list[object], context_msg: str
    ) -> list[Client]:
        query = f"""
            SELECT {self._SELECT_COLUMNS}
            FROM clients
            {self._table.where(conditions)}
            {self._ORDER_BY}
        """
        rows = self._table.fetchall(query=query, params=params, context_msg=context_msg)
        return [self._row_to_client(r) for r in rows]

    # =========================================================
    # Public API
    # =========================================================
    def create_client(self, client: Client) -> Client:
        query = f"""
            INSERT INTO clients (id, owner_user_id, name, cif, address)
            VALUES (%s, %s, %s, %s, %s)
            RETURNING {self._SELECT_COLUMNS}
        """
        row = self._table.fetchone(
            query=query,
            params=[
                client.id,
                client.owner_user_id,
                client.name,
                client.cif,
                address_to_db(client.address),
            ],
            context_msg="PostgresClientRepository: Failed to create client",
            extra={"client_id": str(client.id)},
        )
        return self._row_to_client(row)

    def list_clients(
        self,
        *,
        owner_user_id: UUID,
        visibility: Visibility = Visibility.ACTIVE,
    ) -> List[Client]:
        return self._select(
            conditions=["owner_user_id = %s", self._table.visibility_condition(visibility)],
            params=[owner_user_id],
            context_msg="PostgresClientRepository: Failed to list clients",
        )

    def get_client(
        self,
        client_id: UUID,
        *,
        owner_user_id: UUID,
        visibility: Visibility = Visibility.ACTIVE,
    ) -> Optional[Client]:
        rows = self._select(
            conditions=[
                "id = %s",
                "owner_user_id = %s",
                self._table.visibility_condition(visibility),
            ],
            params=[client_id, owner_user_id],
            context_msg="PostgresClientRepository: Failed to get client",
        )
        return rows[0] if rows else None

    def find_client_by_cif(
        self,
        *,
        owner_user_id: UUID,
        cif: str,
        exclude_id: UUID | None = None,
    ) -> Optional[Client]:
        conditions = ["owner_user_id = %s", "upper(btrim(cif)) = %s", "deleted = false"]
        params: list[object] = [owner_user_id, normalize_cif(cif)]
        if exclude_id is not None:
            conditions.append("id <> %s")
            params.append(exclude_id)
        rows = self._select(
            conditions=conditions,
            params=params,
            context_msg="PostgresClientRepository: Failed to find client by cif",
        )
        return rows[0] if rows else None

    def count_clients(self, *, owner_user_id: UUID) -> int:
        return self._table.count(
            conditions=["owner_user_id = %s"],
            params=[owner_user_id],
            context_msg="PostgresClientRepository: Failed to count clients",
        )

    def update_client(self, client: Client) -> Optional[Client]:
        query = f"""
            UPDATE clients
            SET name = %s, cif = %s, address = %s, updated_at = now()
            WHERE id = %s AND owner_user_id = %s AND deleted = false
            RETURNING {self._SELECT_COLUMNS}
        """
        row = self._table.fetchone(
            query=query,
            params=[
                client.name,
                client.cif,
                address_to_db(client.address),
                client.id,
                client.owner_user_id,
            ],
            context_msg="PostgresClientRepository: Failed to update client",
            extra={"client_id": str(client.id)},
        )
        return self._row_to_client(row) if row else None

    def archive_client(self, client_id: UUID, *, owner_user_id: UUID) -> bool:
        return self._table.archive(client_id, owner_user_id=owner_user_id)

    def restore_client(self, client_id: UUID, *, owner_user_id: UUID) -> bool:
        return self._table.restore(client_id, owner_user_id=owner_user_id)

    def delete_client(self, client_id: UUID, *, owner_user_id: UUID) -> bool:
        return self._table.hard_delete(client_id, owner_user_id=owner_user_id)
