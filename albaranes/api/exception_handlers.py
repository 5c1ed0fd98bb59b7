"""
===============================================================================
TARJETA CRC — albaranes/api/exception_handlers.py
===============================================================================

Responsabilidades:
  - Traducir los errores internos (AlbaranesError y derivadas) a problem+json
    con el status que corresponde a cada familia.
  - Loguear cada falla con su error_id, que también viaja en errors[].
  - Errores de esquema (Pydantic) -> 422 con un item por campo.
  - Fallback para excepciones no tipadas: 500 sin detalles en producción.

Colaboradores:
  - crosscutting.error_responses, crosscutting.exceptions
===============================================================================
"""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..crosscutting.config import get_settings
from ..crosscutting.error_responses import (
    AppHTTPException,
    ErrorCode,
    app_exception_handler,
    problem,
)
from ..crosscutting.exceptions import (
    AlbaranesError,
    DatabaseError,
    DuplicateKeyError,
    ReferencedRecordError,
    UpstreamError,
)
from ..crosscutting.logger import logger

GENERIC_DETAIL = "Ocurrió un error inesperado"

# Starlette resuelve por MRO: cada familia cae en su entrada más específica.
# detail=None -> se expone exc.message.
_SERVICE_ERRORS: tuple[tuple[type[AlbaranesError], ErrorCode, str | None], ...] = (
    # Solo si un caso de uso no re-etiquetó la violación con su reason.
    (DuplicateKeyError, ErrorCode.CONFLICT, None),
    (ReferencedRecordError, ErrorCode.CONFLICT, None),
    (DatabaseError, ErrorCode.DATABASE_ERROR, "Falla en operación de base de datos"),
    # Pinata / S3 / SMTP: la causa queda en el log.
    (UpstreamError, ErrorCode.INTERNAL_ERROR, GENERIC_DETAIL),
    (AlbaranesError, ErrorCode.INTERNAL_ERROR, None),
)


def _service_error_handler(code: ErrorCode, public_detail: str | None):
    async def handler(request: Request, exc: AlbaranesError) -> JSONResponse:
        logger.error(
            "Error de servicio",
            extra={
                "code": code.value,
                "error_type": type(exc).__name__,
                "error_id": exc.error_id,
                "error_message": exc.message,
            },
        )
        app_exc = problem(code, public_detail or exc.message, errors=[{"error_id": exc.error_id}])
        return await app_exception_handler(request, app_exc)

    return handler


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [
        {"field": ".".join(str(part) for part in err.get("loc", ())), "msg": err.get("msg", "")}
        for err in exc.errors()
    ]
    app_exc = problem(ErrorCode.VALIDATION_ERROR, "Datos de entrada inválidos", errors=errors)
    return await app_exception_handler(request, app_exc)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Excepción no controlada", exc_info=True, extra={"error_type": type(exc).__name__})
    detail = "Error interno." if get_settings().is_production() else str(exc)
    return await app_exception_handler(request, problem(ErrorCode.INTERNAL_ERROR, detail))


def register_exception_handlers(app: FastAPI) -> None:
    for exc_type, code, public_detail in _SERVICE_ERRORS:
        app.add_exception_handler(exc_type, _service_error_handler(code, public_detail))
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(AppHTTPException, app_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)


__all__ = ["register_exception_handlers"]
