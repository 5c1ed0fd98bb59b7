"""Adapters de object storage (Pinata / S3 / memoria)."""

from .errors import (
    StorageConfigurationError,
    StorageError,
    StoragePermissionError,
    StorageUnavailableError,
)
from .in_memory_object_storage import InMemoryObjectStorage
from .pinata_object_storage import PinataConfig, PinataObjectStorage
from .s3_object_storage import S3Config, S3ObjectStorage

__all__ = [
    "InMemoryObjectStorage",
    "PinataConfig",
    "PinataObjectStorage",
    "S3Config",
    "S3ObjectStorage",
    "StorageConfigurationError",
    "StorageError",
    "StoragePermissionError",
    "StorageUnavailableError",
]
