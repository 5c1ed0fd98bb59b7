"""
===============================================================================
TARJETA CRC — router.py (Router raíz / Composición)
===============================================================================

Responsabilidades:
  - Definir el APIRouter raíz que se incluye en FastAPI (app.include_router).
  - Centralizar responses RFC7807 para OpenAPI.
  - Componer routers por feature (user/client/project/deliverynote/mail).

Colaboradores:
  - crosscutting.error_responses.OPENAPI_ERROR_RESPONSES
  - routers.* (sub-routers por feature)

Notas:
  - Este router se incluye desde albaranes/api/main.py con prefix="/api".
===============================================================================
"""

from __future__ import annotations

from fastapi import APIRouter

from albaranes.crosscutting.error_responses import OPENAPI_ERROR_RESPONSES

from .routers.clients import router as clients_router
from .routers.delivery_notes import router as delivery_notes_router
from .routers.mail import router as mail_router
from .routers.projects import router as projects_router
from .routers.users import router as users_router


def build_router() -> APIRouter:
    """Construye el router raíz de la API."""
    api_router = APIRouter(responses=OPENAPI_ERROR_RESPONSES)

    api_router.include_router(users_router)
    api_router.include_router(clients_router)
    api_router.include_router(projects_router)
    api_router.include_router(delivery_notes_router)
    api_router.include_router(mail_router)

    return api_router


router = build_router()

__all__ = ["router", "build_router"]
