"""
===============================================================================
CRC CARD — infrastructure/storage/in_memory_object_storage.py
===============================================================================

Clase:
  InMemoryObjectStorage

Responsabilidades:
  - ObjectStoragePort para tests / APP_ENV=test (sin red).
  - Guardar blobs por clave sha256 y devolver memory://objects/<clave>.
  - Permitir inspección desde tests (get / keys).
===============================================================================
"""

from __future__ import annotations

from threading import Lock
from typing import Dict, Optional, Tuple

from .naming import content_key

URL_PREFIX = "memory://objects/"


class InMemoryObjectStorage:
    def __init__(self) -> None:
        self._lock = Lock()
        self._objects: Dict[str, Tuple[bytes, str]] = {}

    def upload(self, content: bytes, *, filename: str, content_type: str) -> str:
        key = content_key(content, filename)
        with self._lock:
            self._objects[key] = (bytes(content), content_type)
        return f"{URL_PREFIX}{key}"

    def get(self, url: str) -> Optional[bytes]:
        key = url[len(URL_PREFIX):] if url.startswith(URL_PREFIX) else url
        with self._lock:
            item = self._objects.get(key)
        return item[0] if item else None

    def keys(self) -> list[str]:
        with self._lock:
            return sorted(self._objects)
