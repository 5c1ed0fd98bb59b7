"""
Mapping de columnas JSONB (address, company, unit_prices) <-> value objects.

psycopg devuelve JSONB como dict/list; al escribir se envuelve en Jsonb().
"""

from __future__ import annotations

from dataclasses import asdict
from typing import Any, List, Optional

from psycopg.types.json import Jsonb

from ....domain.entities import Address, CompanyProfile, UnitPrice, WorkFormat


def address_to_db(address: Optional[Address]) -> Optional[Jsonb]:
    return Jsonb(asdict(address)) if address is not None else None


def address_from_db(value: Any) -> Optional[Address]:
    if not value:
        return None
    return Address(**{k: value.get(k) for k in Address.__dataclass_fields__})


def company_to_db(company: Optional[CompanyProfile]) -> Optional[Jsonb]:
    return Jsonb(asdict(company)) if company is not None else None


def company_from_db(value: Any) -> Optional[CompanyProfile]:
    if not value:
        return None
    return CompanyProfile(
        **{k: value.get(k) for k in CompanyProfile.__dataclass_fields__}
    )


def unit_prices_to_db(prices: List[UnitPrice]) -> Jsonb:
    return Jsonb(
        [
            {
                "format": p.format.value,
                "unit": p.unit,
                "concept": p.concept,
                "price": p.price,
            }
            for p in prices
        ]
    )


def unit_prices_from_db(value: Any) -> List[UnitPrice]:
    return [
        UnitPrice(
            format=WorkFormat(item["format"]),
            unit=item.get("unit"),
            concept=item["concept"],
            price=float(item["price"]),
        )
        for item in (value or [])
    ]
