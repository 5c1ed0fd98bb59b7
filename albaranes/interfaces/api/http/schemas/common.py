"""
===============================================================================
TARJETA CRC — schemas/common.py
===============================================================================

Módulo:
    DTOs compartidos (dirección, empresa, precio unitario) y sus mapeos
    DTO <-> entidad.

Colaboradores:
    - domain.entities (Address, CompanyProfile, UnitPrice, WorkFormat)
===============================================================================
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from albaranes.domain.entities import Address, CompanyProfile, UnitPrice, WorkFormat


def _strip(v: str | None) -> str | None:
    if v is None:
        return None
    cleaned = v.strip()
    return cleaned or None


class AddressDTO(BaseModel):
    street: str | None = Field(default=None, max_length=200)
    number: str | None = Field(default=None, max_length=20)
    postal: str | None = Field(default=None, max_length=20)
    city: str | None = Field(default=None, max_length=100)
    province: str | None = Field(default=None, max_length=100)

    @field_validator("street", "number", "postal", "city", "province")
    @classmethod
    def strip_fields(cls, v: str | None) -> str | None:
        return _strip(v)

    def to_entity(self) -> Address:
        return Address(**self.model_dump())

    @classmethod
    def from_entity(cls, address: Address | None) -> "AddressDTO | None":
        if address is None:
            return None
        return cls(
            street=address.street,
            number=address.number,
            postal=address.postal,
            city=address.city,
            province=address.province,
        )


class CompanyDTO(BaseModel):
    name: str | None = Field(default=None, max_length=200)
    cif: str | None = Field(default=None, max_length=20)
    street: str | None = Field(default=None, max_length=200)
    number: str | None = Field(default=None, max_length=20)
    postal: str | None = Field(default=None, max_length=20)
    city: str | None = Field(default=None, max_length=100)
    province: str | None = Field(default=None, max_length=100)

    @field_validator("name", "cif", "street", "number", "postal", "city", "province")
    @classmethod
    def strip_fields(cls, v: str | None) -> str | None:
        return _strip(v)

    def to_entity(self) -> CompanyProfile:
        return CompanyProfile(**self.model_dump())

    @classmethod
    def from_entity(cls, company: CompanyProfile | None) -> "CompanyDTO | None":
        if company is None:
            return None
        return cls(
            name=company.name,
            cif=company.cif,
            street=company.street,
            number=company.number,
            postal=company.postal,
            city=company.city,
            province=company.province,
        )


class UnitPriceDTO(BaseModel):
    format: WorkFormat
    concept: str = Field(..., min_length=1, max_length=200)
    price: float = Field(..., ge=0)
    unit: str | None = Field(default=None, max_length=50)

    @field_validator("concept")
    @classmethod
    def strip_concept(cls, v: str) -> str:
        return v.strip()

    def to_entity(self) -> UnitPrice:
        return UnitPrice(
            format=self.format, concept=self.concept, price=self.price, unit=self.unit
        )

    @classmethod
    def from_entity(cls, price: UnitPrice) -> "UnitPriceDTO":
        return cls(
            format=price.format, concept=price.concept, price=price.price, unit=price.unit
        )


class DeletionRes(BaseModel):
    deleted: bool
    hard: bool = False


class AcknowledgedRes(BaseModel):
    acknowledged: bool
    message: str | None = None
