"""Nombres de objeto direccionados por contenido (sha256 + extensión)."""

from __future__ import annotations

import hashlib
import os


def content_key(content: bytes, filename: str, *, prefix: str = "") -> str:
    """Clave estable: el mismo binario siempre produce la misma clave."""
    digest = hashlib.sha256(content).hexdigest()
    _, ext = os.path.splitext(os.path.basename(filename or ""))
    key = f"{digest}{ext.lower()}"
    return f"{prefix.strip('/')}/{key}" if prefix.strip("/") else key
