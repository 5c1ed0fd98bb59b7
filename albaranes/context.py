"""
===============================================================================
TARJETA CRC — albaranes/context.py (Contexto por request)
===============================================================================

Responsabilidades:
  - Guardar en un ContextVar una foto inmutable del request en curso:
    request_id, método, path y, una vez autenticado, usuario y rol.
  - Dársela al logger para correlacionar sin pasar parámetros.

Colaboradores:
  - crosscutting/middleware.py: abre y cierra el contexto.
  - identity/auth_users.py: agrega el usuario resuelto del JWT.
  - crosscutting/logger.py: get_context_dict().
===============================================================================
"""

from __future__ import annotations

from contextvars import ContextVar
from dataclasses import asdict, dataclass, replace


@dataclass(frozen=True)
class RequestContext:
    request_id: str = ""
    method: str = ""
    path: str = ""
    user_id: str = ""
    role: str = ""


_EMPTY = RequestContext()
_current: ContextVar[RequestContext] = ContextVar("albaranes_request", default=_EMPTY)


def set_request_context(*, request_id: str = "", method: str = "", path: str = "") -> None:
    _current.set(RequestContext(request_id=request_id, method=method, path=path))


def set_user_context(user_id: str = "", role: str = "") -> None:
    _current.set(replace(_current.get(), user_id=user_id, role=role))


def get_context_dict() -> dict[str, str]:
    """Campos no vacíos del contexto actual."""
    return {key: value for key, value in asdict(_current.get()).items() if value}


def clear_context() -> None:
    _current.set(_EMPTY)
