"""
===============================================================================
TARJETA CRC — dependencies.py (Dependencias y helpers comunes)
===============================================================================

Responsabilidades:
  - Centralizar helpers que se repiten en routers:
      * lectura de UploadFile con límite (anti OOM)
      * sanitización de filename
      * UploadFile -> UploadedFile (firma / logo)
      * parseo de filtros (sort, prices)

Colaboradores:
  - crosscutting.config.get_settings
  - crosscutting.error_responses (RFC7807 factories)
  - application.usecases.results.UploadedFile
===============================================================================
"""

from __future__ import annotations

import os

from fastapi import UploadFile

from albaranes.application.usecases.results import UploadedFile
from albaranes.crosscutting.config import get_settings
from albaranes.crosscutting.error_responses import payload_too_large, validation_error
from albaranes.domain.entities import WorkFormat

DEFAULT_CONTENT_TYPE = "application/octet-stream"

ALLOWED_SORTS: dict[str, bool] = {"asc": True, "desc": False}


def sanitize_filename(filename: str | None) -> str:
    """
    Sanitiza filename para evitar paths raros.
    Nos quedamos con basename.
    """
    if not filename:
        return "upload"
    return os.path.basename(filename)


async def read_upload_bytes(file: UploadFile, *, max_bytes: int | None = None) -> bytes:
    """
    Lee un UploadFile en memoria respetando un límite duro.

    Nota:
      - Lectura por chunks de 1MB; excedido el límite => 413.
    """
    limit = max_bytes if max_bytes is not None else get_settings().max_upload_bytes
    if limit <= 0:
        return await file.read()

    chunk_size = 1024 * 1024  # 1MB
    data = bytearray()
    total = 0

    while True:
        piece = await file.read(chunk_size)
        if not piece:
            break
        data.extend(piece)
        total += len(piece)
        if total > limit:
            raise payload_too_large(f"{limit} bytes")

    return bytes(data)


async def read_optional_upload(file: UploadFile | None) -> UploadedFile | None:
    """UploadFile opcional -> UploadedFile (None si no vino archivo)."""
    if file is None:
        return None
    content = await read_upload_bytes(file)
    return UploadedFile(
        content=content,
        filename=sanitize_filename(file.filename),
        content_type=(file.content_type or DEFAULT_CONTENT_TYPE).lower(),
    )


def parse_sort(sort: str | None) -> bool:
    """`asc` | `desc` (default) -> ascending."""
    value = (sort or "desc").strip().lower()
    if value not in ALLOWED_SORTS:
        raise validation_error("sort debe ser asc o desc.", reason="INVALID_SORT")
    return ALLOWED_SORTS[value]


def parse_prices_filter(prices: str | None) -> WorkFormat | None:
    """`material` | `hours` | `all` (default) -> filtro de precios unitarios."""
    value = (prices or "all").strip().lower()
    if value == "all":
        return None
    try:
        return WorkFormat(value)
    except ValueError:
        raise validation_error(
            "prices debe ser material, hours o all.", reason="INVALID_PRICES_FILTER"
        )
