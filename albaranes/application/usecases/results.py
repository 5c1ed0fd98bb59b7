"""
===============================================================================
USE CASE RESULTS (Shared Error Model)
===============================================================================

Business Goal:
    Proveer un contrato de error común para todos los casos de uso
    (clientes, proyectos, albaranes, usuarios, correo):
      - code: categoría estable (mapea a un status HTTP)
      - reason: motivo de negocio en MAYÚSCULAS (ej: CLIENT_NOT_FOUND)
      - resource: entidad afectada (para mensajes NOT_FOUND)

Why:
    - Los use cases devuelven resultados tipados en lugar de lanzar
      excepciones hacia afuera: integración simple con HTTP y tests directos.
    - "No existe" y "no es tuyo" comparten el mismo NOT_FOUND (sin fuga de
      existencia).

-------------------------------------------------------------------------------
CRC CARD
-------------------------------------------------------------------------------
Component:
    results (module)

Responsibilities:
    - UseCaseErrorCode / UseCaseError
    - Constructores cortos (not_found, conflict, ...) para evitar duplicación.
    - Resultados genéricos: AcknowledgedResult, DeletionResult.

Collaborators:
    - interfaces/api/http/error_mapping.py (traduce a RFC 7807)
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class UseCaseErrorCode(str, Enum):
    """
    Códigos:
      - VALIDATION_ERROR: inputs inválidos (422)
      - BAD_REQUEST: operación no soportada / token inválido (400)
      - UNAUTHORIZED: credenciales (401)
      - FORBIDDEN: operación bloqueada para el actor (403)
      - NOT_FOUND: inexistente o ajeno (404)
      - CONFLICT: clave duplicada, firmado, dependientes (409)
      - UPSTREAM_FAILURE: storage / renderer / correo (500 genérico)
    """

    VALIDATION_ERROR = "VALIDATION_ERROR"
    BAD_REQUEST = "BAD_REQUEST"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    UPSTREAM_FAILURE = "UPSTREAM_FAILURE"


@dataclass(frozen=True)
class UseCaseError:
    code: UseCaseErrorCode
    message: str
    reason: str | None = None
    resource: str | None = None


def not_found(resource: str, reason: str) -> UseCaseError:
    return UseCaseError(
        code=UseCaseErrorCode.NOT_FOUND,
        message=f"{resource} not found.",
        reason=reason,
        resource=resource,
    )


def conflict(reason: str, message: str) -> UseCaseError:
    return UseCaseError(code=UseCaseErrorCode.CONFLICT, message=message, reason=reason)


def validation(reason: str, message: str | None = None) -> UseCaseError:
    return UseCaseError(
        code=UseCaseErrorCode.VALIDATION_ERROR,
        message=message or reason,
        reason=reason,
    )


def bad_request(reason: str, message: str | None = None) -> UseCaseError:
    return UseCaseError(
        code=UseCaseErrorCode.BAD_REQUEST, message=message or reason, reason=reason
    )


def unauthorized(reason: str, message: str) -> UseCaseError:
    return UseCaseError(
        code=UseCaseErrorCode.UNAUTHORIZED, message=message, reason=reason
    )


def forbidden(reason: str, message: str) -> UseCaseError:
    return UseCaseError(code=UseCaseErrorCode.FORBIDDEN, message=message, reason=reason)


def upstream_failure(reason: str, message: str) -> UseCaseError:
    return UseCaseError(
        code=UseCaseErrorCode.UPSTREAM_FAILURE, message=message, reason=reason
    )


@dataclass
class AcknowledgedResult:
    """Resultado de comandos sin entidad de retorno (ej: forgot-password)."""

    acknowledged: bool
    message: str | None = None
    error: UseCaseError | None = None


@dataclass
class DeletionResult:
    """
    Resultado de borrados.

    Campos:
      - deleted: True si el registro quedó archivado o eliminado
      - hard: True si fue borrado físico
    """

    deleted: bool
    hard: bool = False
    error: UseCaseError | None = None


@dataclass(frozen=True)
class UploadedFile:
    """Binario recibido por HTTP (firma, logo), ya leído con límite de tamaño."""

    content: bytes
    filename: str
    content_type: str
