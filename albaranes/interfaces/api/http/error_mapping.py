"""
===============================================================================
TARJETA CRC — error_mapping.py (UseCaseError -> HTTP RFC7807)
===============================================================================

Responsabilidades:
  - Traducir UseCaseError (code + reason) a AppHTTPException RFC7807.
  - Centralizar el mapeo para evitar duplicación en routers.
  - Mantener la capa de aplicación libre de HTTP.

Reglas:
  - NOT_FOUND es la única señal para "no existe" y "no es tuyo".
  - El `reason` viaja siempre en el body (campo `reason`).
  - UPSTREAM_FAILURE => 500 genérico (la causa ya quedó logueada).

Colaboradores:
  - application.usecases.results (UseCaseError, UseCaseErrorCode)
  - crosscutting.error_responses (factories)
===============================================================================
"""

from __future__ import annotations

from typing import NoReturn
from uuid import UUID

from albaranes.application.usecases.results import UseCaseError, UseCaseErrorCode
from albaranes.crosscutting.error_responses import (
    bad_request,
    conflict,
    forbidden,
    internal_error,
    not_found,
    unauthorized,
    validation_error,
)


def raise_use_case_error(
    error: UseCaseError, *, identifier: UUID | str | None = None
) -> NoReturn:
    """
    Traduce UseCaseError -> HTTP.

    Nota:
      - identifier se usa en el detail de NOT_FOUND.
    """
    code = error.code
    reason = error.reason

    if code == UseCaseErrorCode.VALIDATION_ERROR:
        raise validation_error(error.message, reason=reason)
    if code == UseCaseErrorCode.BAD_REQUEST:
        raise bad_request(error.message, reason=reason)
    if code == UseCaseErrorCode.UNAUTHORIZED:
        raise unauthorized(error.message, reason=reason)
    if code == UseCaseErrorCode.FORBIDDEN:
        raise forbidden(error.message, reason=reason)
    if code == UseCaseErrorCode.NOT_FOUND:
        raise not_found(error.resource or "Resource", str(identifier or "-"), reason=reason)
    if code == UseCaseErrorCode.CONFLICT:
        raise conflict(error.message, reason=reason)

    # UPSTREAM_FAILURE y cualquier código nuevo: 500 sin detalle interno
    raise internal_error()
