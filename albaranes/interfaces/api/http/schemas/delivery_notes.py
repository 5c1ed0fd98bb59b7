"""
===============================================================================
TARJETA CRC — schemas/delivery_notes.py
===============================================================================

Módulo:
    Schemas HTTP para Albaranes

Responsabilidades:
    - DTOs de request/response de /deliverynote.
    - Regla hours/material validada en el borde (422 antes del store) con la
      misma función de dominio que usa el caso de uso.
    - Respuesta "poblada" (usuario, cliente, proyecto) para GET /{id}.
===============================================================================
"""

from __future__ import annotations

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator, model_validator

from albaranes.domain.entities import WorkFormat
from albaranes.domain.rules import work_quantity_error

from .clients import ClientRes
from .projects import ProjectRes
from .users import UserRes


# -----------------------------------------------------------------------------
# Requests
# -----------------------------------------------------------------------------
class CreateDeliveryNoteReq(BaseModel):
    client_id: UUID
    project_id: UUID
    format: WorkFormat
    workdate: date
    description: str = Field(..., min_length=1, max_length=2000)
    hours: float | None = None
    quantity: float | None = None
    observer_name: str | None = Field(default=None, max_length=200)
    observer_nif: str | None = Field(default=None, max_length=20)
    observations: str | None = Field(default=None, max_length=2000)

    @field_validator("description")
    @classmethod
    def strip_description(cls, v: str) -> str:
        return v.strip()

    @model_validator(mode="after")
    def check_quantity_for_format(self) -> "CreateDeliveryNoteReq":
        error = work_quantity_error(self.format, self.hours, self.quantity)
        if error is not None:
            raise ValueError(error)
        return self


# -----------------------------------------------------------------------------
# Responses
# -----------------------------------------------------------------------------
class DeliveryNoteRes(BaseModel):
    id: UUID
    owner_user_id: UUID
    client_id: UUID
    project_id: UUID
    format: WorkFormat
    workdate: date
    description: str
    hours: float | None = None
    quantity: float | None = None
    sign_url: str | None = None
    is_signed: bool = False
    pdf_url: str | None = None
    observer_name: str | None = None
    observer_nif: str | None = None
    observations: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class DeliveryNotesListRes(BaseModel):
    delivery_notes: list[DeliveryNoteRes]


class PopulatedDeliveryNoteRes(DeliveryNoteRes):
    user: UserRes
    client: ClientRes
    project: ProjectRes


class DeliveryNotePdfRes(BaseModel):
    pdf_url: str
    delivery_note: DeliveryNoteRes
