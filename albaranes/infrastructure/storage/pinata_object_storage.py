"""
===============================================================================
CRC CARD — infrastructure/storage/pinata_object_storage.py
===============================================================================

Clase:
  PinataObjectStorage (Adapter)

Responsabilidades:
  - Implementar ObjectStoragePort fijando (pinning) el binario en IPFS vía
    Pinata (POST multipart a /pinning/pinFileToIPFS).
  - Devolver la URL del gateway: <gateway>/<IpfsHash>.
  - Reintentar fallas transitorias (429 / 5xx / red) con tenacity.
  - Traducir fallas definitivas a StorageError (sin filtrar httpx).

Colaboradores:
  - httpx (cliente HTTP, inyectable para tests)
  - infrastructure.services.retry.create_retry_decorator
  - infrastructure.storage.errors

Constraints:
  - El JWT de Pinata nunca se loguea.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass

import httpx

from ...crosscutting.logger import logger
from ..services.retry import create_retry_decorator
from .errors import (
    StorageConfigurationError,
    StorageError,
    StoragePermissionError,
    StorageUnavailableError,
)

DEFAULT_API_URL = "https://api.pinata.cloud/pinning/pinFileToIPFS"
DEFAULT_GATEWAY_URL = "https://gateway.pinata.cloud/ipfs"


@dataclass(frozen=True)
class PinataConfig:
    jwt: str
    api_url: str = DEFAULT_API_URL
    gateway_url: str = DEFAULT_GATEWAY_URL
    timeout_seconds: float = 30.0


class PinataObjectStorage:
    """Adapter Pinata: upload(content) -> URL del gateway IPFS."""

    def __init__(self, config: PinataConfig, *, client: httpx.Client | None = None):
        if not (config.jwt or "").strip():
            raise StorageConfigurationError("PINATA_JWT es requerido.")
        self._config = config
        self._client = client or httpx.Client(timeout=config.timeout_seconds)
        self._post_with_retry = create_retry_decorator()(self._post)

    # =========================================================================
    # API pública (Port)
    # =========================================================================
    def upload(self, content: bytes, *, filename: str, content_type: str) -> str:
        try:
            payload = self._post_with_retry(content, filename, content_type)
        except httpx.HTTPStatusError as exc:
            raise self._map_status_error(exc) from exc
        except httpx.TransportError as exc:
            logger.warning(
                "Pinata unavailable", extra={"error_type": type(exc).__name__}
            )
            raise StorageUnavailableError("Pinata no disponible.") from exc

        ipfs_hash = payload.get("IpfsHash") if isinstance(payload, dict) else None
        if not ipfs_hash:
            raise StorageError("Respuesta de Pinata sin IpfsHash.")

        url = f"{self._config.gateway_url.rstrip('/')}/{ipfs_hash}"
        logger.info(
            "Archivo fijado en IPFS",
            extra={"ipfs_hash": ipfs_hash, "size": len(content)},
        )
        return url

    # =========================================================================
    # Helpers privados
    # =========================================================================
    def _post(self, content: bytes, filename: str, content_type: str) -> dict:
        response = self._client.post(
            self._config.api_url,
            headers={"Authorization": f"Bearer {self._config.jwt}"},
            files={"file": (filename or "upload", content, content_type)},
        )
        response.raise_for_status()
        return response.json()

    @staticmethod
    def _map_status_error(exc: httpx.HTTPStatusError) -> StorageError:
        status = exc.response.status_code
        if status in (401, 403):
            return StoragePermissionError("Credenciales de Pinata inválidas.")
        if status == 429 or status >= 500:
            return StorageUnavailableError(f"Pinata no disponible (status={status}).")
        logger.error("Pinata rechazó el upload", extra={"status_code": status})
        return StorageError(f"Pinata rechazó el upload (status={status}).")
