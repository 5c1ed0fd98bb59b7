"""
===============================================================================
TARJETA CRC — identity/auth_users.py
===============================================================================

Módulo:
    Dependencias FastAPI de autenticación (JWT)

Responsabilidades:
    - Extraer token desde Authorization: Bearer o cookie.
    - Resolver usuario actual (token -> user_id -> repo).
    - Rechazar cuentas archivadas (403 USER_ACCOUNT_DEACTIVATED).
    - Traducir User -> Actor (principal de la policy de ownership).
    - Cargar user_id en el contexto de logging.

Colaboradores:
    - identity.tokens.decode_access_token
    - container.get_user_repository
    - domain.ownership_policy.Actor
    - context.set_user_context

Notas:
    - Usuarios sin verificar SÍ se autentican (necesitan el token para
      PUT /validation); el login es quien exige la verificación.
===============================================================================
"""

from __future__ import annotations

from typing import Callable

from fastapi import Depends, Header, Request

from ..container import get_user_repository
from ..context import set_user_context
from ..crosscutting.error_responses import forbidden, unauthorized
from ..domain.entities import User
from ..domain.ownership_policy import Actor
from ..domain.repositories import UserRepository
from ..domain.soft_delete import Visibility
from .tokens import decode_access_token, get_auth_settings

DEFAULT_ACCESS_TOKEN_COOKIE: str = "access_token"


def _extract_bearer_token(authorization: str | None) -> str | None:
    """Extrae token desde `Authorization: Bearer <token>`."""
    if not authorization:
        return None
    parts = authorization.strip().split(" ", 1)
    if len(parts) != 2 or parts[0].lower() != "bearer":
        return None
    token = parts[1].strip()
    return token or None


def extract_access_token(request: Request, authorization: str | None) -> str | None:
    """Resuelve token desde Authorization o cookie."""
    token = _extract_bearer_token(authorization)
    if token:
        return token

    cookie_name = (
        get_auth_settings().jwt_cookie_name or ""
    ).strip() or DEFAULT_ACCESS_TOKEN_COOKIE
    return request.cookies.get(cookie_name)


def get_current_user(token: str, users: UserRepository) -> User:
    """Resuelve el usuario actual a partir del access token."""
    payload = decode_access_token(token)

    user = users.get_user(payload.user_id, visibility=Visibility.ALL)
    if user is None:
        raise unauthorized("Token inválido.", reason="INVALID_TOKEN")
    if user.is_archived:
        raise forbidden("La cuenta está desactivada.", reason="USER_ACCOUNT_DEACTIVATED")
    return user


def require_user() -> Callable:
    """Dependency FastAPI: requiere usuario autenticado por JWT."""

    def dependency(
        request: Request,
        authorization: str | None = Header(None, alias="Authorization"),
        users: UserRepository = Depends(get_user_repository),
    ) -> User:
        token = extract_access_token(request, authorization)
        if not token:
            raise unauthorized("Falta token Bearer.", reason="NOT_TOKEN")

        user = get_current_user(token, users)
        request.state.user = user
        set_user_context(str(user.id), user.role.value)
        return user

    return dependency


def to_actor(user: User) -> Actor:
    return Actor(user_id=user.id, role=user.role)


def require_actor() -> Callable:
    """Dependency FastAPI: Actor (user_id + role) del usuario autenticado."""
    user_dependency = require_user()

    def dependency(user: User = Depends(user_dependency)) -> Actor:
        return to_actor(user)

    return dependency
