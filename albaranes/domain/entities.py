"""
===============================================================================
TARJETA CRC — domain/entities.py
===============================================================================

Módulo:
    Entidades del Dominio (User, Client, Project, DeliveryNote)

Responsabilidades:
    - Definir estructuras centrales del negocio (sin infraestructura).
    - Brindar helpers mínimos (archivado, estado de firma, verificación).
    - Mantener tipos claros para casos de uso y repositorios.

Colaboradores:
    - domain.repositories: persisten/recuperan estas entidades.
    - application/usecases: construyen/consumen estas entidades.
    - interfaces/api: serializan/retornan DTOs basados en estas entidades.

Principios:
    - Sin dependencias a DB/FastAPI.
    - Todas las entidades llevan estado de archivado: deleted + deleted_at.
    - Cadena de ownership: DeliveryNote -> Project -> Client -> User.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import List, Optional
from uuid import UUID


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class UserRole(str, Enum):
    """Roles de cuenta."""

    USER = "user"
    AUTONOMO = "autonomo"
    INVITADO = "invitado"


class WorkFormat(str, Enum):
    """Formato de trabajo (albarán y precios unitarios)."""

    HOURS = "hours"
    MATERIAL = "material"


# ---------------------------------------------------------------------------
# Value objects embebidos
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Address:
    street: Optional[str] = None
    number: Optional[str] = None
    postal: Optional[str] = None
    city: Optional[str] = None
    province: Optional[str] = None


@dataclass(frozen=True)
class CompanyProfile:
    """Perfil de empresa embebido en el usuario."""

    name: Optional[str] = None
    cif: Optional[str] = None
    street: Optional[str] = None
    number: Optional[str] = None
    postal: Optional[str] = None
    city: Optional[str] = None
    province: Optional[str] = None


@dataclass(frozen=True)
class UnitPrice:
    """Precio unitario de un proyecto (price >= 0)."""

    format: WorkFormat
    concept: str
    price: float
    unit: Optional[str] = None


# ---------------------------------------------------------------------------
# User
# ---------------------------------------------------------------------------


@dataclass
class User:
    """
    Cuenta de usuario.

    Ciclo de vida:
      - Alta sin verificar (status=False) -> verificación por código.
      - Invitado (role=invitado) -> activación por token de invitación.
      - Archivado (soft) o borrado físico.
    """

    id: UUID
    email: str
    password_hash: str
    role: UserRole = UserRole.USER
    status: bool = False

    # Verificación
    verification_code: Optional[str] = None
    verification_attempts: int = 3

    # Datos personales
    name: Optional[str] = None
    surnames: Optional[str] = None
    nif: Optional[str] = None

    company: Optional[CompanyProfile] = None
    logo_url: Optional[str] = None

    # Tokens de un solo uso
    reset_token: Optional[str] = None
    reset_token_expires_at: Optional[datetime] = None
    invitation_token: Optional[str] = None
    invitation_expires_at: Optional[datetime] = None
    invited_by_user_id: Optional[UUID] = None

    # Auditoría / archivado
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    deleted: bool = False
    deleted_at: Optional[datetime] = None

    @property
    def is_verified(self) -> bool:
        return self.status

    @property
    def is_archived(self) -> bool:
        return self.deleted


# ---------------------------------------------------------------------------
# Client
# ---------------------------------------------------------------------------


@dataclass
class Client:
    """Cliente de un usuario. (owner, cif) es único entre clientes activos."""

    id: UUID
    owner_user_id: UUID
    name: str
    cif: str
    address: Optional[Address] = None

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    deleted: bool = False
    deleted_at: Optional[datetime] = None

    @property
    def is_archived(self) -> bool:
        return self.deleted


# ---------------------------------------------------------------------------
# Project
# ---------------------------------------------------------------------------


@dataclass
class Project:
    """
    Proyecto de un cliente.

    project_code es opcional; cuando existe, (owner, client, project_code) es
    único entre proyectos activos.
    """

    id: UUID
    owner_user_id: UUID
    client_id: UUID
    name: str
    project_code: Optional[str] = None
    code: Optional[str] = None
    address: Optional[Address] = None
    begin: Optional[str] = None
    end: Optional[str] = None
    notes: Optional[str] = None
    is_active: bool = True
    unit_prices: List[UnitPrice] = field(default_factory=list)
    amount: Optional[float] = None

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    deleted: bool = False
    deleted_at: Optional[datetime] = None

    @property
    def is_archived(self) -> bool:
        return self.deleted

    def prices_for(self, format: WorkFormat | None) -> List[UnitPrice]:
        """Filtra precios unitarios por formato (None = todos)."""
        if format is None:
            return list(self.unit_prices)
        return [p for p in self.unit_prices if p.format == format]


# ---------------------------------------------------------------------------
# DeliveryNote
# ---------------------------------------------------------------------------


@dataclass
class DeliveryNote:
    """
    Albarán (parte de horas o de material).

    Máquina de estados: sin firmar -> firmado (terminal). Un albarán firmado no
    se puede borrar.
    """

    id: UUID
    owner_user_id: UUID
    client_id: UUID
    project_id: UUID
    format: WorkFormat
    workdate: date
    description: str
    hours: Optional[float] = None
    quantity: Optional[float] = None

    sign_url: Optional[str] = None
    is_signed: bool = False
    pdf_url: Optional[str] = None

    observer_name: Optional[str] = None
    observer_nif: Optional[str] = None
    observations: Optional[str] = None

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    deleted: bool = False
    deleted_at: Optional[datetime] = None

    @property
    def is_archived(self) -> bool:
        return self.deleted
