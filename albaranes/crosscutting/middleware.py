"""
===============================================================================
CRC CARD — crosscutting/middleware.py
===============================================================================

Componente:
  RequestContextMiddleware

Responsabilidades:
  - Aceptar X-Request-Id del cliente (o generar uno) y devolverlo siempre.
  - Abrir el contexto del request (albaranes/context.py) y cerrarlo al final,
    también cuando el handler falla.
  - Una línea de log por request con status y latencia (salvo sondas).

Colaboradores:
  - albaranes/context.py
  - crosscutting/logger.py
===============================================================================
"""

from __future__ import annotations

import time
import uuid
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from ..context import clear_context, set_request_context
from .logger import logger

REQUEST_ID_HEADER = "X-Request-Id"
MAX_REQUEST_ID_LENGTH = 128

# Sondas de Kubernetes / balanceador.
_PROBE_PATHS = frozenset({"/healthz", "/readyz"})


def resolve_request_id(incoming: str | None) -> str:
    candidate = (incoming or "").strip()
    if candidate and len(candidate) <= MAX_REQUEST_ID_LENGTH:
        return candidate
    return str(uuid.uuid4())


class RequestContextMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        request.state.request_id = request_id
        set_request_context(request_id=request_id, method=request.method, path=request.url.path)

        started = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        except Exception:
            logger.exception("Request sin respuesta", extra={"status_code": status_code})
            raise
        finally:
            if request.url.path not in _PROBE_PATHS:
                logger.info(
                    "Request completado",
                    extra={
                        "status_code": status_code,
                        "latency_ms": round((time.perf_counter() - started) * 1000, 2),
                    },
                )
            clear_context()
