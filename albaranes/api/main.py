"""
Name: Albaranes API application

Responsibilities:
  - Build the FastAPI app: CORS, request context, RFC 7807 handlers
  - Mount users, clients, projects, delivery notes and mail under /api
  - Open and close the psycopg pool in the lifespan (not under APP_ENV=test)
  - Liveness (/healthz) and readiness (/readyz) probes

Collaborators:
  - container: repositories and adapters per environment
  - interfaces.api.http.router
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ..container import _is_test_env, get_user_repository
from ..crosscutting.config import get_settings
from ..crosscutting.logger import logger
from ..crosscutting.middleware import REQUEST_ID_HEADER, RequestContextMiddleware
from ..infrastructure.db.pool import close_pool, init_pool
from ..interfaces.api.http.router import router
from .exception_handlers import register_exception_handlers

API_PREFIX = "/api"
DEFAULT_ORIGINS = ["http://localhost:3000"]

OPENAPI_TAGS = [
    {"name": "users", "description": "Registration, verification and profile"},
    {"name": "clients", "description": "Clients of the authenticated user"},
    {"name": "projects", "description": "Projects per client"},
    {"name": "delivery-notes", "description": "Delivery notes, signature and PDF"},
    {"name": "mail", "description": "Outgoing mail"},
]


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    if settings.is_production():
        settings.validate_security_requirements()

    uses_database = not _is_test_env()
    if uses_database:
        init_pool(
            database_url=settings.database_url,
            min_size=settings.db_pool_min_size,
            max_size=settings.db_pool_max_size,
        )
    logger.info(
        "Albaranes API iniciada",
        extra={
            "app_env": settings.app_env,
            "storage_backend": settings.storage_backend,
            "notifier_backend": settings.notifier_backend,
            "uses_database": uses_database,
        },
    )
    try:
        yield
    finally:
        if uses_database:
            close_pool()
        logger.info("Albaranes API detenida")


def _cors_options() -> dict:
    # Settings inválidas no deben impedir importar la app (tooling, OpenAPI).
    try:
        settings = get_settings()
        return {
            "allow_origins": settings.get_allowed_origins_list(),
            "allow_credentials": settings.cors_allow_credentials,
        }
    except ValueError:
        return {"allow_origins": DEFAULT_ORIGINS, "allow_credentials": False}


def _store_answers() -> bool:
    try:
        return bool(get_user_repository().ping())
    except Exception as exc:
        logger.warning("Store sin respuesta", extra={"error_type": type(exc).__name__})
        return False


def create_app() -> FastAPI:
    application = FastAPI(
        title="Albaranes API",
        version="0.1.0",
        lifespan=lifespan,
        openapi_tags=OPENAPI_TAGS,
    )
    # El último middleware agregado es el primero en ejecutarse: CORS responde
    # el preflight antes de abrir el contexto del request.
    application.add_middleware(RequestContextMiddleware)
    application.add_middleware(
        CORSMiddleware,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", REQUEST_ID_HEADER],
        **_cors_options(),
    )
    application.include_router(router, prefix=API_PREFIX)
    register_exception_handlers(application)

    @application.get("/healthz")
    def healthz(request: Request):
        """Liveness: el proceso responde; informa si el store contesta."""
        connected = _store_answers()
        return {
            "ok": connected,
            "db": "connected" if connected else "disconnected",
            "request_id": getattr(request.state, "request_id", None),
        }

    @application.get("/readyz")
    def readyz(request: Request):
        """Readiness: 503 mientras el store no conteste."""
        settings = get_settings()
        connected = _store_answers()
        return JSONResponse(
            status_code=200 if connected else 503,
            content={
                "ok": connected,
                "db": "connected" if connected else "disconnected",
                "storage": settings.storage_backend,
                "notifier": settings.notifier_backend,
                "request_id": getattr(request.state, "request_id", None),
            },
        )

    return application


app = create_app()
