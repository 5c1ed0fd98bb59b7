"""
===============================================================================
TARJETA CRC — schemas/users.py
===============================================================================

Módulo:
    Schemas HTTP para Usuarios (registro, login, verificación, perfil,
    reset de password e invitaciones)

Reglas:
    - Email normalizado (strip + lower).
    - Password >= 8 caracteres en alta, reset y aceptación de invitación.
    - Código de verificación de 6 dígitos; NIF ^\\d{8}[A-Z]$.
    - Tokens de reset / invitación: 40 caracteres hex.
===============================================================================
"""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from albaranes.domain.entities import UserRole

from .common import CompanyDTO

_EMAIL_FIELD = Field(..., min_length=3, max_length=320, pattern=r"^[^@\s]+@[^@\s]+$")
_PASSWORD_FIELD = Field(..., min_length=8, max_length=512)


def _normalize_email(v: str) -> str:
    return v.strip().lower()


# -----------------------------------------------------------------------------
# Requests
# -----------------------------------------------------------------------------
class RegisterReq(BaseModel):
    email: str = _EMAIL_FIELD
    password: str = _PASSWORD_FIELD
    role: UserRole = Field(default=UserRole.USER)

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return _normalize_email(v) if isinstance(v, str) else v

    @field_validator("role")
    @classmethod
    def self_service_role(cls, v: UserRole) -> UserRole:
        if v == UserRole.INVITADO:
            raise ValueError("role debe ser user o autonomo")
        return v


class LoginReq(BaseModel):
    email: str = Field(..., min_length=3, max_length=320)
    password: str = Field(..., min_length=1, max_length=512)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return _normalize_email(v)


class VerificationReq(BaseModel):
    code: str = Field(..., pattern=r"^\d{6}$")


class PersonalDataReq(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    surnames: str = Field(..., min_length=1, max_length=200)
    nif: str = Field(..., pattern=r"^\d{8}[A-Z]$")


class ForgotPasswordReq(BaseModel):
    email: str = Field(..., min_length=3, max_length=320)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return _normalize_email(v)


class ResetPasswordReq(BaseModel):
    token: str = Field(..., pattern=r"^[0-9a-f]{40}$")
    password: str = _PASSWORD_FIELD


class InviteReq(BaseModel):
    email: str = _EMAIL_FIELD

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return _normalize_email(v) if isinstance(v, str) else v


class AcceptInvitationReq(BaseModel):
    token: str = Field(..., pattern=r"^[0-9a-f]{40}$")
    password: str = _PASSWORD_FIELD
    name: str | None = Field(default=None, max_length=100)
    surnames: str | None = Field(default=None, max_length=200)


# -----------------------------------------------------------------------------
# Responses
# -----------------------------------------------------------------------------
class UserRes(BaseModel):
    id: UUID
    email: str
    role: UserRole
    status: bool
    name: str | None = None
    surnames: str | None = None
    nif: str | None = None
    company: CompanyDTO | None = None
    logo_url: str | None = None
    invited_by_user_id: UUID | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class AuthRes(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int
    user: UserRes


class VerificationRes(BaseModel):
    acknowledged: bool
    message: str | None = None
