"""
===============================================================================
TARJETA CRC — schemas/clients.py
===============================================================================

Módulo:
    Schemas HTTP para Clientes

Responsabilidades:
    - DTOs de request/response de /client.
    - Normalizar strings (strip); el CIF se normaliza en el caso de uso.
===============================================================================
"""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from .common import AddressDTO


# -----------------------------------------------------------------------------
# Requests
# -----------------------------------------------------------------------------
class CreateClientReq(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    cif: str = Field(..., min_length=1, max_length=20)
    address: AddressDTO | None = None

    @field_validator("name", "cif")
    @classmethod
    def strip_text(cls, v: str) -> str:
        return v.strip()


class UpdateClientReq(BaseModel):
    """Patch: campos ausentes no cambian."""

    name: str | None = Field(default=None, min_length=1, max_length=200)
    cif: str | None = Field(default=None, min_length=1, max_length=20)
    address: AddressDTO | None = None

    @field_validator("name", "cif")
    @classmethod
    def strip_text(cls, v: str | None) -> str | None:
        return v.strip() if v is not None else None


# -----------------------------------------------------------------------------
# Responses
# -----------------------------------------------------------------------------
class ClientRes(BaseModel):
    id: UUID
    owner_user_id: UUID
    name: str
    cif: str
    address: AddressDTO | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    deleted: bool = False
    deleted_at: datetime | None = None


class ClientsListRes(BaseModel):
    clients: list[ClientRes]
