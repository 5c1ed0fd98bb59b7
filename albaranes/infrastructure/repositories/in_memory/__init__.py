"""
In-Memory Repository Implementations.

For testing and local development (APP_ENV=test). NOT FOR PRODUCTION.
Data is lost on process restart.
"""

from .client import InMemoryClientRepository
from .delivery_note import InMemoryDeliveryNoteRepository
from .project import InMemoryProjectRepository
from .soft_delete_store import SoftDeleteStore, UniqueKey
from .user import InMemoryUserRepository

__all__ = [
    "InMemoryClientRepository",
    "InMemoryDeliveryNoteRepository",
    "InMemoryProjectRepository",
    "InMemoryUserRepository",
    "SoftDeleteStore",
    "UniqueKey",
]
