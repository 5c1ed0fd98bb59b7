"""
===============================================================================
CRC CARD — infrastructure/storage/s3_object_storage.py
===============================================================================

Clase:
  S3ObjectStorage (Adapter)

Responsabilidades:
  - ObjectStoragePort sobre un bucket S3-compatible (AWS S3 / MinIO):
    logos de usuario e imágenes de firma de albaranes.
  - Claves direccionadas por contenido (naming.content_key) y URL pública
    estable, que es lo que se persiste en users.logo / delivery_notes.sign.
  - Traducir ClientError/timeouts de botocore a StorageError.

Colaboradores:
  - boto3 / botocore (retries "standard" del propio SDK)
  - infrastructure.storage.errors, infrastructure.storage.naming
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ...crosscutting.logger import logger
from .errors import (
    StorageConfigurationError,
    StorageError,
    StoragePermissionError,
    StorageUnavailableError,
)
from .naming import content_key

_PERMISSION_CODES = frozenset({"AccessDenied", "InvalidAccessKeyId", "SignatureDoesNotMatch"})
_UNAVAILABLE_CODES = frozenset({"SlowDown", "RequestTimeout", "ServiceUnavailable"})
_SDK_MAX_ATTEMPTS = 3


@dataclass(frozen=True)
class S3Config:
    """
    endpoint_url: MinIO u otro S3 compatible (path-style).
    public_base_url: prefijo de las URLs devueltas (CDN); opcional.
    """

    bucket: str
    access_key: str
    secret_key: str
    region: Optional[str] = None
    endpoint_url: Optional[str] = None
    public_base_url: Optional[str] = None
    prefix: str = "albaranes"


class S3ObjectStorage:
    def __init__(self, config: S3Config, *, client=None) -> None:
        if not (config.bucket or "").strip():
            raise StorageConfigurationError("S3 bucket es requerido.")
        if not (config.access_key or "").strip() or not (config.secret_key or "").strip():
            raise StorageConfigurationError("Credenciales S3 requeridas (access_key/secret_key).")

        self._config = config
        self._bucket = config.bucket.strip()
        self._client = client if client is not None else self._build_client(config)

    @staticmethod
    def _build_client(config: S3Config):
        import boto3
        from botocore.config import Config

        return boto3.client(
            "s3",
            aws_access_key_id=config.access_key,
            aws_secret_access_key=config.secret_key,
            region_name=config.region or None,
            endpoint_url=config.endpoint_url or None,
            config=Config(retries={"max_attempts": _SDK_MAX_ATTEMPTS, "mode": "standard"}),
        )

    def upload(self, content: bytes, *, filename: str, content_type: str) -> str:
        key = content_key(content, filename, prefix=self._config.prefix)
        try:
            self._client.put_object(
                Bucket=self._bucket,
                Key=key,
                Body=content,
                ContentType=(content_type or "application/octet-stream").strip(),
            )
        except Exception as exc:
            raise self._translate(exc, key) from exc

        logger.info(
            "Objeto subido a S3",
            extra={"bucket": self._bucket, "key": key, "size": len(content)},
        )
        return self.public_url(key)

    def public_url(self, key: str) -> str:
        """CDN si hay public_base_url; si no, path-style (MinIO) o host virtual de AWS."""
        base = (self._config.public_base_url or "").rstrip("/")
        if base:
            return f"{base}/{key}"
        endpoint = (self._config.endpoint_url or "").rstrip("/")
        if endpoint:
            return f"{endpoint}/{self._bucket}/{key}"
        region = self._config.region or "us-east-1"
        return f"https://{self._bucket}.s3.{region}.amazonaws.com/{key}"

    def _translate(self, exc: Exception, key: str) -> StorageError:
        from botocore.exceptions import ClientError, ReadTimeoutError
        from botocore.exceptions import ConnectionError as BotoConnectionError

        if isinstance(exc, (BotoConnectionError, ReadTimeoutError)):
            logger.warning("S3 no disponible", extra={"bucket": self._bucket, "key": key})
            return StorageUnavailableError("Storage no disponible (timeout/conexión).")

        code = ""
        if isinstance(exc, ClientError):
            code = str((exc.response.get("Error") or {}).get("Code") or "")
            if code in _PERMISSION_CODES:
                return StoragePermissionError("Permiso/credenciales inválidas en storage.")
            if code in _UNAVAILABLE_CODES:
                return StorageUnavailableError("Storage temporalmente no disponible.")

        logger.exception("S3 upload fallido", extra={"bucket": self._bucket, "key": key, "code": code})
        return StorageError(f"Fallo de storage S3 (code={code or type(exc).__name__}).")
