"""
===============================================================================
TARJETA CRC — identity/tokens.py
===============================================================================

Módulo:
    Tokens de acceso (JWT) y códigos de un solo uso

Responsabilidades:
    - Emitir el JWT de acceso de un usuario (sub, email, role, iat, exp, typ).
    - Validarlo y devolver el TokenPayload; cualquier falla es 401
      (TOKEN_EXPIRED o INVALID_TOKEN).
    - Generar el código de verificación de 6 dígitos y los tokens hex de 40
      caracteres (reset de password e invitación).

Colaboradores:
    - PyJWT, secrets
    - crosscutting.config.get_settings (secreto, TTL, cookie)
===============================================================================
"""

from __future__ import annotations

import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any
from uuid import UUID

import jwt

from ..crosscutting.config import get_settings
from ..crosscutting.error_responses import unauthorized
from ..domain.entities import User, UserRole

JWT_ALGORITHM = "HS256"
ACCESS_TOKEN_TYPE = "access"
REQUIRED_CLAIMS = ("sub", "email", "role", "exp")

VERIFICATION_CODE_DIGITS = 6
HEX_TOKEN_BYTES = 20


@dataclass(frozen=True, slots=True)
class AuthSettings:
    jwt_secret: str
    jwt_access_ttl_minutes: int
    jwt_cookie_name: str
    jwt_cookie_secure: bool

    @property
    def access_ttl(self) -> timedelta:
        return timedelta(minutes=self.jwt_access_ttl_minutes)


@dataclass(frozen=True, slots=True)
class TokenPayload:
    """Identidad que viaja en el access token."""

    user_id: UUID
    email: str
    role: UserRole

    @classmethod
    def for_user(cls, user: User) -> "TokenPayload":
        return cls(user_id=user.id, email=user.email, role=user.role)

    def to_claims(self, issued_at: datetime, ttl: timedelta) -> dict[str, Any]:
        return {
            "sub": str(self.user_id),
            "email": self.email,
            "role": self.role.value,
            "iat": int(issued_at.timestamp()),
            "exp": int((issued_at + ttl).timestamp()),
            "typ": ACCESS_TOKEN_TYPE,
        }

    @classmethod
    def from_claims(cls, claims: dict[str, Any]) -> "TokenPayload":
        """ValueError si sub no es UUID o role no es un rol conocido."""
        return cls(
            user_id=UUID(str(claims["sub"])),
            email=str(claims["email"]),
            role=UserRole(str(claims["role"])),
        )


def get_auth_settings() -> AuthSettings:
    s = get_settings()
    return AuthSettings(
        jwt_secret=s.jwt_secret,
        jwt_access_ttl_minutes=s.jwt_access_ttl_minutes,
        jwt_cookie_name=s.jwt_cookie_name,
        jwt_cookie_secure=s.jwt_cookie_secure,
    )


def create_access_token(user: User, settings: AuthSettings | None = None) -> tuple[str, int]:
    """R: (token, expires_in en segundos)."""
    auth = settings or get_auth_settings()
    claims = TokenPayload.for_user(user).to_claims(utcnow(), auth.access_ttl)
    token = jwt.encode(claims, auth.jwt_secret, algorithm=JWT_ALGORITHM)
    return token, int(auth.access_ttl.total_seconds())


def decode_access_token(token: str, settings: AuthSettings | None = None) -> TokenPayload:
    auth = settings or get_auth_settings()
    try:
        claims = jwt.decode(
            token,
            auth.jwt_secret,
            algorithms=[JWT_ALGORITHM],
            options={"require": list(REQUIRED_CLAIMS)},
        )
    except jwt.ExpiredSignatureError as exc:
        raise unauthorized("Token expirado.", reason="TOKEN_EXPIRED") from exc
    except jwt.InvalidTokenError as exc:
        raise unauthorized("Token inválido.", reason="INVALID_TOKEN") from exc

    # Tokens sin "typ" se aceptan como acceso.
    if claims.get("typ", ACCESS_TOKEN_TYPE) != ACCESS_TOKEN_TYPE:
        raise unauthorized("Tipo de token inválido.", reason="INVALID_TOKEN")

    try:
        return TokenPayload.from_claims(claims)
    except ValueError as exc:
        raise unauthorized("Token inválido.", reason="INVALID_TOKEN") from exc


def generate_verification_code() -> str:
    """Código numérico de 6 dígitos (con ceros a la izquierda)."""
    return f"{secrets.randbelow(10 ** VERIFICATION_CODE_DIGITS):0{VERIFICATION_CODE_DIGITS}d}"


def generate_hex_token() -> str:
    """Token hex de 40 caracteres (reset de password / invitación)."""
    return secrets.token_hex(HEX_TOKEN_BYTES)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)
