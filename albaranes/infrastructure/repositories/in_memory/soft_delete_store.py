"""
============================================================
TARJETA CRC — infrastructure/repositories/in_memory/soft_delete_store.py
============================================================
Class: SoftDeleteStore[T]

Responsibilities:
  - "Tabla" en memoria genérica para entidades con archivado
    (deleted / deleted_at / created_at / updated_at).
  - Resolver los tres modos de visibilidad (ACTIVE / ARCHIVED / ALL).
  - archive / restore / hard_delete con filtro adicional (owner, is_signed...).
  - Emular los índices únicos parciales de Postgres: cada UniqueKey se evalúa
    solo entre registros activos y una clave None no participa (sparse).

Collaborators:
  - domain.soft_delete.Visibility
  - crosscutting.exceptions.DuplicateKeyError
  - in_memory/{user,client,project,delivery_note}.py (composición, no herencia)

Constraints / Notes:
  - Thread-safe: acceso protegido por Lock.
  - Copias defensivas: se guarda y se devuelve una copia (dataclasses.replace).
  - Ordering determinístico: created_at + secuencia de inserción.
============================================================
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime, timezone
from itertools import count
from threading import Lock
from typing import Any, Callable, Dict, Generic, List, Optional, Sequence, TypeVar
from uuid import UUID

from ....crosscutting.exceptions import DuplicateKeyError
from ....domain.soft_delete import Visibility

T = TypeVar("T")

Predicate = Callable[[Any], bool]


@dataclass(frozen=True)
class UniqueKey:
    """Clave única parcial: name identifica la restricción (igual que en SQL)."""

    name: str
    extract: Callable[[Any], Optional[tuple]]


def _always(_record: Any) -> bool:
    return True


class SoftDeleteStore(Generic[T]):
    """
    Store in-memory thread-safe con semántica de soft delete.

    Modelo mental:
    - _rows es la "tabla" (UUID -> registro).
    - _seq registra el orden de inserción para desempatar created_at.
    """

    def __init__(self, *, unique_keys: Sequence[UniqueKey] = ()) -> None:
        self._lock = Lock()
        self._rows: Dict[UUID, T] = {}
        self._seq: Dict[UUID, int] = {}
        self._counter = count()
        self._unique_keys = tuple(unique_keys)

    # =========================================================
    # Helpers internos
    # =========================================================
    @staticmethod
    def _now() -> datetime:
        """R: Fuente única de tiempo (UTC) para consistencia en tests."""
        return datetime.now(timezone.utc)

    def _check_unique(self, record: T) -> None:
        """R: Debe llamarse con el lock tomado."""
        if record.deleted:
            return
        for key in self._unique_keys:
            value = key.extract(record)
            if value is None:
                continue
            for other_id, other in self._rows.items():
                if other_id == record.id or other.deleted:
                    continue
                if key.extract(other) == value:
                    raise DuplicateKeyError(
                        f"duplicate key value violates unique constraint {key.name}",
                        key=key.name,
                    )

    def _sort_key(self, record: T) -> tuple:
        created = record.created_at or datetime.min.replace(tzinfo=timezone.utc)
        return (created.timestamp(), self._seq.get(record.id, 0))

    # =========================================================
    # Lecturas
    # =========================================================
    def get(
        self,
        record_id: UUID,
        *,
        visibility: Visibility = Visibility.ACTIVE,
        where: Predicate = _always,
    ) -> Optional[T]:
        with self._lock:
            record = self._rows.get(record_id)
        if record is None:
            return None
        if not visibility.includes(record.deleted) or not where(record):
            return None
        return replace(record)

    def find_one(
        self, *, visibility: Visibility = Visibility.ACTIVE, where: Predicate = _always
    ) -> Optional[T]:
        matches = self.select(visibility=visibility, where=where)
        return matches[0] if matches else None

    def select(
        self,
        *,
        visibility: Visibility = Visibility.ACTIVE,
        where: Predicate = _always,
        ascending: bool = False,
    ) -> List[T]:
        with self._lock:
            values = list(self._rows.values())
        matches = [
            r for r in values if visibility.includes(r.deleted) and where(r)
        ]
        matches.sort(key=self._sort_key, reverse=not ascending)
        return [replace(r) for r in matches]

    def count(self, *, where: Predicate = _always) -> int:
        with self._lock:
            return sum(1 for r in self._rows.values() if where(r))

    # =========================================================
    # Escrituras
    # =========================================================
    def insert(self, record: T) -> T:
        now = self._now()
        stored = replace(
            record,
            created_at=record.created_at or now,
            updated_at=record.updated_at or now,
        )
        with self._lock:
            self._check_unique(stored)
            self._rows[stored.id] = stored
            self._seq[stored.id] = next(self._counter)
        return replace(stored)

    def update(
        self,
        record_id: UUID,
        changes: Dict[str, Any],
        *,
        where: Predicate = _always,
    ) -> Optional[T]:
        """R: UPDATE sobre un registro activo que cumpla `where`."""
        with self._lock:
            current = self._rows.get(record_id)
            if current is None or current.deleted or not where(current):
                return None
            updated = replace(current, **changes, updated_at=self._now())
            self._check_unique(updated)
            self._rows[record_id] = updated
        return replace(updated)

    def archive(self, record_id: UUID, *, where: Predicate = _always) -> bool:
        """R: deleted=True solo si hoy está activo."""
        with self._lock:
            current = self._rows.get(record_id)
            if current is None or current.deleted or not where(current):
                return False
            now = self._now()
            self._rows[record_id] = replace(
                current, deleted=True, deleted_at=now, updated_at=now
            )
        return True

    def restore(self, record_id: UUID, *, where: Predicate = _always) -> bool:
        """R: deleted=False solo si hoy está archivado (re-chequea unicidad)."""
        with self._lock:
            current = self._rows.get(record_id)
            if current is None or not current.deleted or not where(current):
                return False
            restored = replace(
                current, deleted=False, deleted_at=None, updated_at=self._now()
            )
            self._check_unique(restored)
            self._rows[record_id] = restored
        return True

    def hard_delete(self, record_id: UUID, *, where: Predicate = _always) -> bool:
        """R: Borrado físico, cualquiera sea el estado de archivado."""
        with self._lock:
            current = self._rows.get(record_id)
            if current is None or not where(current):
                return False
            del self._rows[record_id]
            self._seq.pop(record_id, None)
        return True
