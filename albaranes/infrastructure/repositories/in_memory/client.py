"""
============================================================
TARJETA CRC — infrastructure/repositories/in_memory/client.py
============================================================
Class: InMemoryClientRepository

Responsibilities:
  - Implementar ClientRepository en memoria, owner-scoped.
  - Emular el índice parcial (owner_user_id, cif) WHERE deleted = false.

Collaborators:
  - SoftDeleteStore (composición)
============================================================
"""

from __future__ import annotations

from typing import Callable, List, Optional
from uuid import UUID

from ....domain.entities import Client
from ....domain.rules import normalize_cif
from ....domain.soft_delete import Visibility
from .soft_delete_store import SoftDeleteStore, UniqueKey

OWNER_CIF_KEY = "clients_owner_cif_active_uidx"


def _owner_cif_key(client: Client) -> tuple:
    return (client.owner_user_id, normalize_cif(client.cif))


class InMemoryClientRepository:
    def __init__(self) -> None:
        self._store: SoftDeleteStore[Client] = SoftDeleteStore(
            unique_keys=(UniqueKey(OWNER_CIF_KEY, _owner_cif_key),)
        )

    @staticmethod
    def _owned_by(owner_user_id: UUID) -> Callable[[Client], bool]:
        return lambda c: c.owner_user_id == owner_user_id

    def create_client(self, client: Client) -> Client:
        return self._store.insert(client)

    def list_clients(
        self,
        *,
        owner_user_id: UUID,
        visibility: Visibility = Visibility.ACTIVE,
    ) -> List[Client]:
        return self._store.select(
            visibility=visibility, where=self._owned_by(owner_user_id)
        )

    def get_client(
        self,
        client_id: UUID,
        *,
        owner_user_id: UUID,
        visibility: Visibility = Visibility.ACTIVE,
    ) -> Optional[Client]:
        return self._store.get(
            client_id, visibility=visibility, where=self._owned_by(owner_user_id)
        )

    def find_client_by_cif(
        self,
        *,
        owner_user_id: UUID,
        cif: str,
        exclude_id: UUID | None = None,
    ) -> Optional[Client]:
        wanted = (owner_user_id, normalize_cif(cif))
        return self._store.find_one(
            where=lambda c: c.id != exclude_id and _owner_cif_key(c) == wanted
        )

    def count_clients(self, *, owner_user_id: UUID) -> int:
        return self._store.count(where=self._owned_by(owner_user_id))

    def update_client(self, client: Client) -> Optional[Client]:
        return self._store.update(
            client.id,
            {"name": client.name, "cif": client.cif, "address": client.address},
            where=self._owned_by(client.owner_user_id),
        )

    def archive_client(self, client_id: UUID, *, owner_user_id: UUID) -> bool:
        return self._store.archive(client_id, where=self._owned_by(owner_user_id))

    def restore_client(self, client_id: UUID, *, owner_user_id: UUID) -> bool:
        return self._store.restore(client_id, where=self._owned_by(owner_user_id))

    def delete_client(self, client_id: UUID, *, owner_user_id: UUID) -> bool:
        return self._store.hard_delete(client_id, where=self._owned_by(owner_user_id))
