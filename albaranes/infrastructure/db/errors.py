"""
===============================================================================
CRC CARD — infrastructure/db/errors.py
===============================================================================

Componente:
  Errores de ciclo de vida del pool

Responsabilidades:
  - Distinguir "pool sin abrir" de "pool abierto dos veces".
  - Heredar de DatabaseError: un request que llega sin pool responde 503
    por el mismo handler que cualquier otra falla de base de datos.
===============================================================================
"""

from ...crosscutting.exceptions import DatabaseError


class DatabasePoolError(DatabaseError):
    error_code: str = "DATABASE_POOL_ERROR"


class PoolAlreadyInitializedError(DatabasePoolError):
    """init_pool() llamado dos veces en el mismo proceso."""


class PoolNotInitializedError(DatabasePoolError):
    """get_pool() antes del lifespan (o fuera de la API)."""
