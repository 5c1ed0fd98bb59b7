"""
PostgreSQL Repository Implementations.

Raw parameterised SQL over psycopg 3 + psycopg_pool. Soft-delete semantics
live in SoftDeleteTable, composed by every repository.
"""

from .client import PostgresClientRepository
from .delivery_note import PostgresDeliveryNoteRepository
from .project import PostgresProjectRepository
from .soft_delete_table import SoftDeleteTable
from .user import PostgresUserRepository

__all__ = [
    "PostgresClientRepository",
    "PostgresDeliveryNoteRepository",
    "PostgresProjectRepository",
    "PostgresUserRepository",
    "SoftDeleteTable",
]
