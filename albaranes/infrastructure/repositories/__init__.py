"""
============================================================
TARJETA CRC
============================================================
Class: albaranes.infrastructure.repositories (Package exports)

Responsibilities:
- Exponer implementaciones concretas de repositorios (Postgres e InMemory)
  en un único punto de importación.

Collaborators:
- Repositorios Postgres (SQL crudo + SoftDeleteTable)
- Repositorios InMemory (SoftDeleteStore; tests y entornos volátiles)
============================================================
"""

# ---------------------------
# In-memory implementations
# No persisten datos tras reiniciar la app.
# ---------------------------
from .in_memory import (
    InMemoryClientRepository,
    InMemoryDeliveryNoteRepository,
    InMemoryProjectRepository,
    InMemoryUserRepository,
)

# ---------------------------
# Postgres implementations
# ---------------------------
from .postgres import (
    PostgresClientRepository,
    PostgresDeliveryNoteRepository,
    PostgresProjectRepository,
    PostgresUserRepository,
)

__all__ = [
    "InMemoryClientRepository",
    "InMemoryDeliveryNoteRepository",
    "InMemoryProjectRepository",
    "InMemoryUserRepository",
    "PostgresClientRepository",
    "PostgresDeliveryNoteRepository",
    "PostgresProjectRepository",
    "PostgresUserRepository",
]
