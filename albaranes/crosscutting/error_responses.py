# albaranes/crosscutting/error_responses.py
"""
===============================================================================
MÓDULO: Respuestas de error (RFC 7807 / Problem Details)
===============================================================================

Todas las respuestas de error de la API comparten un cuerpo
application/problem+json con:
  - code: categoría estable (ErrorCode), que fija el status HTTP;
  - reason: motivo de negocio (ej: CLIENT_CIF_ALREADY_EXISTS_FOR_USER,
    DELIVERY_NOTE_NOT_FOUND_OR_ALREADY_SIGNED), el que usa el frontend;
  - errors[]: detalle por campo y request_id / error_id para soporte.

Colaboradores:
  - api/exception_handlers.py (errores internos -> AppHTTPException)
  - interfaces/api/http/error_mapping.py (UseCaseError -> AppHTTPException)
  - identity/* (401/403 de autenticación)
===============================================================================
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

PROBLEM_JSON_MEDIA_TYPE = "application/problem+json"


class ErrorCode(str, Enum):
    BAD_REQUEST = "BAD_REQUEST"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    PAYLOAD_TOO_LARGE = "PAYLOAD_TOO_LARGE"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    DATABASE_ERROR = "DATABASE_ERROR"

    @property
    def status(self) -> int:
        return _STATUS_BY_CODE[self]

    @property
    def problem_title(self) -> str:
        return self.value.replace("_", " ").title()


_STATUS_BY_CODE: dict[ErrorCode, int] = {
    ErrorCode.BAD_REQUEST: 400,
    ErrorCode.UNAUTHORIZED: 401,
    ErrorCode.FORBIDDEN: 403,
    ErrorCode.NOT_FOUND: 404,
    ErrorCode.CONFLICT: 409,
    ErrorCode.PAYLOAD_TOO_LARGE: 413,
    ErrorCode.VALIDATION_ERROR: 422,
    ErrorCode.INTERNAL_ERROR: 500,
    ErrorCode.DATABASE_ERROR: 503,
}


class ErrorDetail(BaseModel):
    """Cuerpo RFC 7807 + code / reason / errors."""

    type: str = "about:blank"
    title: str
    status: int
    detail: str
    code: ErrorCode
    reason: str | None = None
    instance: str | None = None
    errors: list[dict[str, Any]] | None = None


OPENAPI_ERROR_RESPONSES: dict[str, dict[str, Any]] = {
    key: {
        "description": f"{description} (RFC7807)",
        "model": ErrorDetail,
        "content": {
            PROBLEM_JSON_MEDIA_TYPE: {"schema": {"$ref": "#/components/schemas/ErrorDetail"}}
        },
    }
    for key, description in (
        ("400", "Bad Request"),
        ("401", "Unauthorized"),
        ("403", "Forbidden"),
        ("404", "Not Found"),
        ("409", "Conflict"),
        ("413", "Payload Too Large"),
        ("422", "Validation Error"),
        ("default", "Error"),
    )
}


class AppHTTPException(HTTPException):
    """HTTPException con ErrorCode, reason de negocio y errors[] opcionales."""

    def __init__(
        self,
        code: ErrorCode,
        detail: str,
        *,
        reason: str | None = None,
        errors: list[dict[str, Any]] | None = None,
    ):
        super().__init__(status_code=code.status, detail=detail)
        self.code = code
        self.reason = reason
        self.errors = errors


def problem(
    code: ErrorCode,
    detail: str,
    reason: str | None = None,
    errors: list[dict[str, Any]] | None = None,
) -> AppHTTPException:
    return AppHTTPException(code, detail, reason=reason, errors=errors)


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------
def bad_request(detail: str, reason: str | None = None) -> AppHTTPException:
    return problem(ErrorCode.BAD_REQUEST, detail, reason)


def validation_error(
    detail: str,
    errors: list[dict[str, Any]] | None = None,
    reason: str | None = None,
) -> AppHTTPException:
    return problem(ErrorCode.VALIDATION_ERROR, detail, reason, errors)


def not_found(resource: str, identifier: str, reason: str | None = None) -> AppHTTPException:
    return problem(ErrorCode.NOT_FOUND, f"{resource} '{identifier}' no encontrado", reason)


def conflict(detail: str, reason: str | None = None) -> AppHTTPException:
    return problem(ErrorCode.CONFLICT, detail, reason)


def unauthorized(detail: str = "Autenticación requerida", reason: str | None = None) -> AppHTTPException:
    return problem(ErrorCode.UNAUTHORIZED, detail, reason)


def forbidden(detail: str = "Acceso denegado", reason: str | None = None) -> AppHTTPException:
    return problem(ErrorCode.FORBIDDEN, detail, reason)


def payload_too_large(max_size: str) -> AppHTTPException:
    return problem(ErrorCode.PAYLOAD_TOO_LARGE, f"El archivo excede el máximo permitido ({max_size})")


def internal_error(detail: str = "Ocurrió un error inesperado") -> AppHTTPException:
    return problem(ErrorCode.INTERNAL_ERROR, detail)


async def app_exception_handler(request: Request, exc: AppHTTPException) -> JSONResponse:
    """Serializa la excepción como problem+json y agrega el request_id a errors[]."""
    errors = list(exc.errors or [])
    request_id = getattr(request.state, "request_id", None)
    if request_id:
        errors.append({"request_id": request_id})

    body = ErrorDetail(
        type=f"about:blank/{exc.code.value.lower()}",
        title=exc.code.problem_title,
        status=exc.status_code,
        detail=str(exc.detail),
        code=exc.code,
        reason=exc.reason,
        instance=str(request.url),
        errors=errors or None,
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=body.model_dump(mode="json", exclude_none=True),
        headers=exc.headers,
        media_type=PROBLEM_JSON_MEDIA_TYPE,
    )
