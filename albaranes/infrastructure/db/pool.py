"""
===============================================================================
CRC CARD — infrastructure/db/pool.py
===============================================================================

Componente:
  Pool de conexiones psycopg (uno por proceso)

Responsabilidades:
  - Abrirlo en el lifespan de la API y cerrarlo al apagar.
  - Configurar cada conexión nueva:
      * statement_timeout (DB_STATEMENT_TIMEOUT_MS; 0 = sin límite)
      * zona horaria UTC (deleted_at, vencimientos de tokens)
      * application_name para identificar la API en pg_stat_activity

Colaboradores:
  - api/main.py (init_pool / close_pool)
  - repositories/postgres/soft_delete_table.py (get_pool)
===============================================================================
"""

from __future__ import annotations

import threading
from typing import Optional

from psycopg_pool import ConnectionPool

from ...crosscutting.logger import logger
from .errors import PoolAlreadyInitializedError, PoolNotInitializedError

APPLICATION_NAME = "albaranes-api"

_pool: Optional[ConnectionPool] = None
_pool_lock = threading.Lock()


def _configure_connection(conn) -> None:
    from ...crosscutting.config import get_settings

    timeout_ms = max(int(get_settings().db_statement_timeout_ms), 0)
    conn.execute(f"SET statement_timeout = {timeout_ms}")
    conn.execute("SET TIME ZONE 'UTC'")
    conn.execute(f"SET application_name = '{APPLICATION_NAME}'")
    conn.commit()


def init_pool(database_url: str, min_size: int, max_size: int) -> ConnectionPool:
    global _pool

    with _pool_lock:
        if _pool is not None:
            raise PoolAlreadyInitializedError("init_pool() ya fue llamado en este proceso.")

        _pool = ConnectionPool(
            conninfo=database_url,
            min_size=min_size,
            max_size=max_size,
            configure=_configure_connection,
            open=True,
        )
        logger.info("Pool DB abierto", extra={"min_size": min_size, "max_size": max_size})
        return _pool


def get_pool() -> ConnectionPool:
    if _pool is None:
        raise PoolNotInitializedError("Pool DB sin abrir: falta init_pool() en el lifespan.")
    return _pool


def close_pool() -> None:
    """Cierra el pool si está abierto (se puede llamar más de una vez)."""
    global _pool

    with _pool_lock:
        pool, _pool = _pool, None
    if pool is not None:
        pool.close()
        logger.info("Pool DB cerrado")
