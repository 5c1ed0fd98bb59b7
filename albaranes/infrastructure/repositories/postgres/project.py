"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/project.py
============================================================
Class: PostgresProjectRepository

Responsibilities:
- Implementar ProjectRepository en PostgreSQL (SQL crudo, owner-scoped).
- Listados ordenados por created_at (asc | desc) y filtrables por cliente.
- Delegar archive / restore / hard delete en SoftDeleteTable.

Collaborators:
- SoftDeleteTable
- Tabla: projects (índice único parcial projects_owner_client_code_active_uidx,
  FK client_id -> clients ON DELETE RESTRICT)
============================================================
"""

from __future__ import annotations

from typing import List, Optional
from uuid import UUID

from psycopg_pool import ConnectionPool

from ....domain.entities import Project
from ....domain.soft_delete import Visibility
from .json_columns import (
    address_from_db,
    address_to_db,
    unit_prices_from_db,
    unit_prices_to_db,
)
from .soft_delete_table import SoftDeleteTable


class PostgresProjectRepository:
    """R: Implementación PostgreSQL del repositorio de proyectos."""

    _SELECT_COLUMNS = """
        id, owner_user_id, client_id, name, project_code, code, address,
        begin_date, end_date, notes, is_active, unit_prices, amount,
        created_at, updated_at, deleted, deleted_at
    """

    def __init__(self, pool: Optional[ConnectionPool] = None):
        self._table = SoftDeleteTable(table="projects", pool=pool)

    # =========================================================
    # Mapping
    # =========================================================
    @staticmethod
    def _row_to_project(row: tuple) -> Project:
        (
            project_id,
            owner_user_id,
            client_id,
            name,
            project_code,
            code,
            address,
            begin,
            end,
            notes,
            is_active,
            unit_prices,
            amount,
            created_at,
            updated_at,
            deleted,
            deleted_at,
        ) = row

        return Project(
            id=project_id,
            owner_user_id=owner_user_id,
            client_id=client_id,
            name=name,
            project_code=project_code,
            code=code,
            address=address_from_db(address),
            begin=begin,
            end=end,
            notes=notes,
            is_active=bool(is_active),
            unit_prices=unit_prices_from_db(unit_prices),
            amount=float(amount) if amount is not None else None,
            created_at=created_at,
            updated_at=updated_at,
            deleted=bool(deleted),
            deleted_at=deleted_at,
        )

    def _select(
        self,
        *,
        conditions: list[str | None],
        params: list[object],
        context_msg: str,
        ascending: bool = False,
    ) -> list[Project]:
        direction = "ASC" if ascending else "DESC"
        query = f"""
            SELECT {self._SELECT_COLUMNS}
            FROM projects
            {self._table.where(conditions)}
            ORDER BY created_at {direction}, id ASC
        """
        rows = self._table.fetchall(query=query, params=params, context_msg=context_msg)
        return [self._row_to_project(r) for r in rows]

    # =========================================================
    # Public API
    # =========================================================
    def create_project(self, project: Project) -> Project:
        query = f"""
            INSERT INTO projects (
                id, owner_user_id, client_id, name, project_code, code, address,
                begin_date, end_date, notes, is_active, unit_prices, amount
            )
            VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s)
            RETURNING {self._SELECT_COLUMNS}
        """
        row = self._table.fetchone(
            query=query,
            params=[
                project.id,
                project.owner_user_id,
                project.client_id,
                project.name,
                project.project_code,
                project.code,
                address_to_db(project.address),
                project.begin,
                project.end,
                project.notes,
                project.is_active,
                unit_prices_to_db(project.unit_prices),
                project.amount,
            ],
            context_msg="PostgresProjectRepository: Failed to create project",
            extra={"project_id": str(project.id)},
        )
        return self._row_to_project(row)

    def list_projects(
        self,
        *,
        owner_user_id: UUID,
        client_id: UUID | None = None,
        visibility: Visibility = Visibility.ACTIVE,
        ascending: bool = False,
    ) -> List[Project]:
        conditions: list[str | None] = [
            "owner_user_id = %s",
            self._table.visibility_condition(visibility),
        ]
        params: list[object] = [owner_user_id]
        if client_id is not None:
            conditions.append("client_id = %s")
            params.append(client_id)
        return self._select(
            conditions=conditions,
            params=params,
            context_msg="PostgresProjectRepository: Failed to list projects",
            ascending=ascending,
        )

    def get_project(
        self,
        project_id: UUID,
        *,
        owner_user_id: UUID,
        client_id: UUID | None = None,
        visibility: Visibility = Visibility.ACTIVE,
    ) -> Optional[Project]:
        conditions: list[str | None] = [
            "id = %s",
            "owner_user_id = %s",
            self._table.visibility_condition(visibility),
        ]
        params: list[object] = [project_id, owner_user_id]
        if client_id is not None:
            conditions.append("client_id = %s")
            params.append(client_id)
        rows = self._select(
            conditions=conditions,
            params=params,
            context_msg="PostgresProjectRepository: Failed to get project",
        )
        return rows[0] if rows else None

    def find_project_by_code(
        self,
        *,
        owner_user_id: UUID,
        client_id: UUID,
        project_code: str,
        exclude_id: UUID | None = None,
    ) -> Optional[Project]:
        conditions = [
            "owner_user_id = %s",
            "client_id = %s",
            "project_code = %s",
            "deleted = false",
        ]
        params: list[object] = [owner_user_id, client_id, project_code]
        if exclude_id is not None:
            conditions.append("id <> %s")
            params.append(exclude_id)
        rows = self._select(
            conditions=conditions,
            params=params,
            context_msg="PostgresProjectRepository: Failed to find project by code",
        )
        return rows[0] if rows else None

    def count_projects(self, *, owner_user_id: UUID, client_id: UUID) -> int:
        return self._table.count(
            conditions=["owner_user_id = %s", "client_id = %s"],
            params=[owner_user_id, client_id],
            context_msg="PostgresProjectRepository: Failed to count projects",
        )

    def update_project(self, project: Project) -> Optional[Project]:
        query = f"""
            UPDATE projects
            SET client_id = %s, name = %s, project_code = %s, code = %s,
                address = %s, begin_date = %s, end_date = %s, notes = %s,
                is_active = %s, unit_prices = %s, amount = %s, updated_at = now()
            WHERE id = %s AND owner_user_id = %s AND deleted = false
            RETURNING {self._SELECT_COLUMNS}
        """
        row = self._table.fetchone(
            query=query,
            params=[
                project.client_id,
                project.name,
                project.project_code,
                project.code,
                address_to_db(project.address),
                project.begin,
                project.end,
                project.notes,
                project.is_active,
                unit_prices_to_db(project.unit_prices),
                project.amount,
                project.id,
                project.owner_user_id,
            ],
            context_msg="PostgresProjectRepository: Failed to update project",
            extra={"project_id": str(project.id)},
        )
        return self._row_to_project(row) if row else None

    def archive_project(self, project_id: UUID, *, owner_user_id: UUID) -> bool:
        return self._table.archive(project_id, owner_user_id=owner_user_id)

    def restore_project(self, project_id: UUID, *, owner_user_id: UUID) -> bool:
        return self._table.restore(project_id, owner_user_id=owner_user_id)

    def delete_project(self, project_id: UUID, *, owner_user_id: UUID) -> bool:
        return self._table.hard_delete(project_id, owner_user_id=owner_user_id)
