"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/soft_delete_table.py
============================================================
Class: SoftDeleteTable

Responsibilities:
- Concentrar la semántica de soft delete para una tabla con columnas
  deleted / deleted_at:
    - predicado de visibilidad (ACTIVE / ARCHIVED / ALL)
    - archive(): solo filas activas
    - restore(): solo filas archivadas
    - hard_delete(): borrado físico con condiciones extra opcionales
- Ejecutar SQL con manejo de errores consistente:
    - UniqueViolation     -> DuplicateKeyError (key = nombre del índice)
    - ForeignKeyViolation / RestrictViolation -> ReferencedRecordError
    - resto               -> DatabaseError (con log de la causa)

Collaborators:
- psycopg / psycopg_pool.ConnectionPool
- crosscutting.exceptions
- postgres/{user,client,project,delivery_note}.py (composición, no herencia)

Constraints / Notes:
- Queries siempre parametrizadas; nombres de tabla/columna solo vienen del código.
- Cada llamada toma una conexión del pool y hace commit al salir del bloque.
============================================================
"""

from __future__ import annotations

from typing import Iterable, Optional, Sequence
from uuid import UUID

from psycopg import errors as pg_errors
from psycopg_pool import ConnectionPool

from ....crosscutting.exceptions import (
    DatabaseError,
    DuplicateKeyError,
    ReferencedRecordError,
)
from ....crosscutting.logger import logger
from ....domain.soft_delete import Visibility

_VISIBILITY_SQL = {
    Visibility.ACTIVE: "deleted = false",
    Visibility.ARCHIVED: "deleted = true",
    Visibility.ALL: None,
}


class SoftDeleteTable:
    """R: Helper compartido (por composición) de los repositorios Postgres."""

    def __init__(
        self,
        *,
        table: str,
        owner_column: str | None = "owner_user_id",
        pool: Optional[ConnectionPool] = None,
    ):
        self.table = table
        self._owner_column = owner_column
        # R: Pool inyectable para tests; en producción se obtiene por factory global.
        self._pool = pool

    def _get_pool(self) -> ConnectionPool:
        if self._pool is not None:
            return self._pool

        from ...db.pool import get_pool

        return get_pool()

    # =========================================================
    # Builders
    # =========================================================
    @staticmethod
    def visibility_condition(visibility: Visibility) -> str | None:
        return _VISIBILITY_SQL[visibility]

    @staticmethod
    def where(conditions: Sequence[str | None]) -> str:
        """R: Une condiciones no vacías en un WHERE ("" si no hay)."""
        parts = [c for c in conditions if c]
        return f"WHERE {' AND '.join(parts)}" if parts else ""

    def _key_conditions(
        self, record_id: UUID, owner_user_id: UUID | None
    ) -> tuple[list[str], list[object]]:
        conditions = ["id = %s"]
        params: list[object] = [record_id]
        if self._owner_column and owner_user_id is not None:
            conditions.append(f"{self._owner_column} = %s")
            params.append(owner_user_id)
        return conditions, params

    # =========================================================
    # Ejecución (errores consistentes)
    # =========================================================
    def _run(
        self,
        *,
        query: str,
        params: Iterable[object],
        context_msg: str,
        extra: dict | None,
        fetch: str,
    ):
        extra = {"table": self.table, **(extra or {})}
        try:
            pool = self._get_pool()
            with pool.connection() as conn:
                cur = conn.execute(query, tuple(params))
                if fetch == "one":
                    return cur.fetchone()
                if fetch == "all":
                    return cur.fetchall()
                return cur.rowcount
        except pg_errors.UniqueViolation as exc:
            constraint = getattr(exc.diag, "constraint_name", None) or ""
            logger.warning(
                "Violación de clave única",
                extra={**extra, "constraint": constraint},
            )
            raise DuplicateKeyError(
                f"{context_msg}: duplicate key", key=constraint, original_error=exc
            ) from exc
        except (pg_errors.ForeignKeyViolation, pg_errors.RestrictViolation) as exc:
            logger.warning("Registro referenciado", extra=extra)
            raise ReferencedRecordError(
                f"{context_msg}: record is still referenced", original_error=exc
            ) from exc
        except Exception as exc:
            logger.exception(context_msg, extra={**extra, "error": str(exc)})
            raise DatabaseError(f"{context_msg}: {exc}", original_error=exc) from exc

    def fetchone(
        self,
        *,
        query: str,
        params: Iterable[object],
        context_msg: str,
        extra: dict | None = None,
    ) -> tuple | None:
        return self._run(
            query=query, params=params, context_msg=context_msg, extra=extra, fetch="one"
        )

    def fetchall(
        self,
        *,
        query: str,
        params: Iterable[object],
        context_msg: str,
        extra: dict | None = None,
    ) -> list[tuple]:
        return self._run(
            query=query, params=params, context_msg=context_msg, extra=extra, fetch="all"
        )

    def execute(
        self,
        *,
        query: str,
        params: Iterable[object],
        context_msg: str,
        extra: dict | None = None,
    ) -> int:
        """R: Ejecuta un comando y devuelve rowcount."""
        return self._run(
            query=query,
            params=params,
            context_msg=context_msg,
            extra=extra,
            fetch="rowcount",
        )

    # =========================================================
    # Soft delete
    # =========================================================
    def archive(self, record_id: UUID, *, owner_user_id: UUID | None = None) -> bool:
        conditions, params = self._key_conditions(record_id, owner_user_id)
        conditions.append("deleted = false")
        query = f"""
            UPDATE {self.table}
            SET deleted = true, deleted_at = now(), updated_at = now()
            {self.where(conditions)}
            RETURNING id
        """
        row = self.fetchone(
            query=query,
            params=params,
            context_msg=f"SoftDeleteTable({self.table}): Failed to archive",
            extra={"record_id": str(record_id)},
        )
        return row is not None

    def restore(self, record_id: UUID, *, owner_user_id: UUID | None = None) -> bool:
        conditions, params = self._key_conditions(record_id, owner_user_id)
        conditions.append("deleted = true")
        query = f"""
            UPDATE {self.table}
            SET deleted = false, deleted_at = NULL, updated_at = now()
            {self.where(conditions)}
            RETURNING id
        """
        row = self.fetchone(
            query=query,
            params=params,
            context_msg=f"SoftDeleteTable({self.table}): Failed to restore",
            extra={"record_id": str(record_id)},
        )
        return row is not None

    def hard_delete(
        self,
        record_id: UUID,
        *,
        owner_user_id: UUID | None = None,
        extra_conditions: Sequence[str] = (),
    ) -> bool:
        conditions, params = self._key_conditions(record_id, owner_user_id)
        conditions.extend(extra_conditions)
        query = f"""
            DELETE FROM {self.table}
            {self.where(conditions)}
            RETURNING id
        """
        row = self.fetchone(
            query=query,
            params=params,
            context_msg=f"SoftDeleteTable({self.table}): Failed to hard delete",
            extra={"record_id": str(record_id)},
        )
        return row is not None

    def count(
        self, *, conditions: Sequence[str], params: Sequence[object], context_msg: str
    ) -> int:
        row = self.fetchone(
            query=f"SELECT count(*) FROM {self.table} {self.where(conditions)}",
            params=params,
            context_msg=context_msg,
        )
        return int(row[0]) if row else 0
