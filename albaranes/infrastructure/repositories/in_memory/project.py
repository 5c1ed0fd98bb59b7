"""
============================================================
TARJETA CRC — infrastructure/repositories/in_memory/project.py
============================================================
Class: InMemoryProjectRepository

Responsibilities:
  - Implementar ProjectRepository en memoria, owner-scoped.
  - Emular el índice parcial (owner_user_id, client_id, project_code)
    WHERE project_code IS NOT NULL AND deleted = false.

Collaborators:
  - SoftDeleteStore (composición)
============================================================
"""

from __future__ import annotations

from typing import Callable, List, Optional
from uuid import UUID

from ....domain.entities import Project
from ....domain.soft_delete import Visibility
from .soft_delete_store import SoftDeleteStore, UniqueKey

PROJECT_CODE_KEY = "projects_owner_client_code_active_uidx"

_UPDATABLE_FIELDS = (
    "client_id",
    "name",
    "project_code",
    "code",
    "address",
    "begin",
    "end",
    "notes",
    "is_active",
    "unit_prices",
    "amount",
)


def _project_code_key(project: Project) -> Optional[tuple]:
    if project.project_code is None:
        return None
    return (project.owner_user_id, project.client_id, project.project_code)


class InMemoryProjectRepository:
    def __init__(self) -> None:
        self._store: SoftDeleteStore[Project] = SoftDeleteStore(
            unique_keys=(UniqueKey(PROJECT_CODE_KEY, _project_code_key),)
        )

    @staticmethod
    def _scoped(
        owner_user_id: UUID, client_id: UUID | None = None
    ) -> Callable[[Project], bool]:
        def predicate(p: Project) -> bool:
            if p.owner_user_id != owner_user_id:
                return False
            return client_id is None or p.client_id == client_id

        return predicate

    def create_project(self, project: Project) -> Project:
        return self._store.insert(project)

    def list_projects(
        self,
        *,
        owner_user_id: UUID,
        client_id: UUID | None = None,
        visibility: Visibility = Visibility.ACTIVE,
        ascending: bool = False,
    ) -> List[Project]:
        return self._store.select(
            visibility=visibility,
            where=self._scoped(owner_user_id, client_id),
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
        return self._store.get(
            project_id,
            visibility=visibility,
            where=self._scoped(owner_user_id, client_id),
        )

    def find_project_by_code(
        self,
        *,
        owner_user_id: UUID,
        client_id: UUID,
        project_code: str,
        exclude_id: UUID | None = None,
    ) -> Optional[Project]:
        wanted = (owner_user_id, client_id, project_code)
        return self._store.find_one(
            where=lambda p: p.id != exclude_id and _project_code_key(p) == wanted
        )

    def count_projects(self, *, owner_user_id: UUID, client_id: UUID) -> int:
        return self._store.count(where=self._scoped(owner_user_id, client_id))

    def update_project(self, project: Project) -> Optional[Project]:
        changes = {name: getattr(project, name) for name in _UPDATABLE_FIELDS}
        changes["unit_prices"] = list(project.unit_prices)
        return self._store.update(
            project.id, changes, where=self._scoped(project.owner_user_id)
        )

    def archive_project(self, project_id: UUID, *, owner_user_id: UUID) -> bool:
        return self._store.archive(project_id, where=self._scoped(owner_user_id))

    def restore_project(self, project_id: UUID, *, owner_user_id: UUID) -> bool:
        return self._store.restore(project_id, where=self._scoped(owner_user_id))

    def delete_project(self, project_id: UUID, *, owner_user_id: UUID) -> bool:
        return self._store.hard_delete(project_id, where=self._scoped(owner_user_id))
