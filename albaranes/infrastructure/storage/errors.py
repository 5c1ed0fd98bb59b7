"""
===============================================================================
CRC CARD — infrastructure/storage/errors.py
===============================================================================

Componente:
  Errores tipados de Storage (Pinata / S3 / memoria)

Responsabilidades:
  - Definir un lenguaje común de fallas del subsistema de almacenamiento.
  - Evitar que excepciones de httpx/boto3 se filtren a capas superiores.
  - Heredar de UpstreamError: la API responde 500 genérico y loguea la causa.

Colaboradores:
  - infrastructure/storage/*_object_storage.py
  - crosscutting.exceptions.UpstreamError
===============================================================================
"""

from ...crosscutting.exceptions import UpstreamError


class StorageError(UpstreamError):
    """Base de errores del subsistema de Storage."""

    error_code: str = "STORAGE_ERROR"


class StorageConfigurationError(StorageError):
    """Configuración inválida o incompleta del adaptador de storage."""


class StoragePermissionError(StorageError):
    """Credenciales inválidas o falta de permisos."""

    def __init__(self, message: str = "Permiso denegado en storage."):
        super().__init__(message)


class StorageUnavailableError(StorageError):
    """Storage caído o temporalmente no disponible (timeouts, 5xx)."""

    def __init__(self, message: str = "Storage no disponible."):
        super().__init__(message)
