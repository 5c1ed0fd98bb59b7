"""
===============================================================================
TARJETA CRC — schemas/projects.py
===============================================================================

Módulo:
    Schemas HTTP para Proyectos

Responsabilidades:
    - DTOs de request/response de /project (alta, edición, precios,
      importe, activación).
    - Importes y precios no negativos (ge=0) antes de tocar el store.
===============================================================================
"""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from .common import AddressDTO, UnitPriceDTO


# -----------------------------------------------------------------------------
# Requests
# -----------------------------------------------------------------------------
class CreateProjectReq(BaseModel):
    client_id: UUID
    name: str = Field(..., min_length=1, max_length=200)
    project_code: str | None = Field(default=None, max_length=50)
    code: str | None = Field(default=None, max_length=50)
    address: AddressDTO | None = None
    begin: str | None = Field(default=None, max_length=50)
    end: str | None = Field(default=None, max_length=50)
    notes: str | None = Field(default=None, max_length=2000)
    unit_prices: list[UnitPriceDTO] = Field(default_factory=list)
    amount: float | None = Field(default=None, ge=0)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return v.strip()


class UpdateProjectReq(BaseModel):
    """Patch: campos ausentes no cambian; project_code "" quita el código."""

    client_id: UUID | None = None
    name: str | None = Field(default=None, min_length=1, max_length=200)
    project_code: str | None = Field(default=None, max_length=50)
    code: str | None = Field(default=None, max_length=50)
    address: AddressDTO | None = None
    begin: str | None = Field(default=None, max_length=50)
    end: str | None = Field(default=None, max_length=50)
    notes: str | None = Field(default=None, max_length=2000)
    unit_prices: list[UnitPriceDTO] | None = None
    amount: float | None = Field(default=None, ge=0)


class ActivateProjectReq(BaseModel):
    active: bool


class ProjectPricesReq(BaseModel):
    prices: list[UnitPriceDTO]


class ProjectAmountReq(BaseModel):
    amount: float = Field(..., ge=0)


# -----------------------------------------------------------------------------
# Responses
# -----------------------------------------------------------------------------
class ProjectRes(BaseModel):
    id: UUID
    owner_user_id: UUID
    client_id: UUID
    name: str
    project_code: str | None = None
    code: str | None = None
    address: AddressDTO | None = None
    begin: str | None = None
    end: str | None = None
    notes: str | None = None
    is_active: bool = True
    unit_prices: list[UnitPriceDTO] = Field(default_factory=list)
    amount: float | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    deleted: bool = False
    deleted_at: datetime | None = None


class ProjectsListRes(BaseModel):
    projects: list[ProjectRes]
