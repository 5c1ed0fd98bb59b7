"""
===============================================================================
TARJETA CRC — domain/company_profile.py
===============================================================================

Módulo:
    Actualización del perfil de empresa según rol (variante etiquetada)

Responsabilidades:
    - Clasificar un pedido de actualización de empresa por rol:
        * autonomo  -> DerivedFromPersonalData: nombre/CIF salen de los datos
                       personales (name / nif); solo se toma la
                       dirección del pedido.
        * resto     -> MergeIntoExisting: el parche se fusiona campo a campo
                       sobre el perfil existente.
    - Aplicar la variante sobre el usuario con funciones puras y totales.

Colaboradores:
    - domain.entities: User, CompanyProfile, UserRole
    - application/usecases/users/update_profile.py

Reglas:
    - Sin IO; nunca muta el usuario recibido (devuelve un CompanyProfile nuevo).
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Optional, Union

from .entities import CompanyProfile, User, UserRole

_ADDRESS_FIELDS = ("street", "number", "postal", "city", "province")


@dataclass(frozen=True)
class DerivedFromPersonalData:
    """Autónomo: la empresa es la persona; solo la dirección viene del pedido."""

    street: Optional[str] = None
    number: Optional[str] = None
    postal: Optional[str] = None
    city: Optional[str] = None
    province: Optional[str] = None


@dataclass(frozen=True)
class MergeIntoExisting:
    """Otros roles: los campos presentes (no None) pisan a los existentes."""

    patch: CompanyProfile


CompanyUpdate = Union[DerivedFromPersonalData, MergeIntoExisting]


def classify_company_update(role: UserRole, patch: CompanyProfile) -> CompanyUpdate:
    if role == UserRole.AUTONOMO:
        return DerivedFromPersonalData(
            **{name: getattr(patch, name) for name in _ADDRESS_FIELDS}
        )
    return MergeIntoExisting(patch=patch)


def apply_company_update(user: User, update: CompanyUpdate) -> CompanyProfile:
    """Calcula el nuevo perfil de empresa para `user`."""
    if isinstance(update, DerivedFromPersonalData):
        return CompanyProfile(
            name=user.name,
            cif=user.nif,
            **{name: getattr(update, name) for name in _ADDRESS_FIELDS},
        )

    current = user.company or CompanyProfile()
    changes = {
        f.name: getattr(update.patch, f.name)
        for f in fields(CompanyProfile)
        if getattr(update.patch, f.name) is not None
    }
    return replace(current, **changes)
