"""
===============================================================================
TARJETA CRC — domain/rules.py
===============================================================================

Módulo:
    Reglas de validación de negocio (funciones puras)

Responsabilidades:
    - Regla hours/material de un albarán: el campo de cantidad que
      corresponde al formato debe estar presente y en rango.
    - Formato de NIF y de códigos de un solo uso.
    - Normalización de claves de negocio (CIF, email, project code).

Colaboradores:
    - application/usecases: validan antes de tocar el store.
    - interfaces/api/http/schemas: reutilizan las mismas reglas en Pydantic.

Reglas:
    - Sin IO. Devuelven mensaje de error (str) o None.
===============================================================================
"""

from __future__ import annotations

import re
from typing import Optional

from .entities import WorkFormat

MIN_HOURS = 0.1
MIN_QUANTITY = 0.0
MIN_PASSWORD_LENGTH = 8

NIF_PATTERN = re.compile(r"^\d{8}[A-Z]$")
VERIFICATION_CODE_PATTERN = re.compile(r"^\d{6}$")
HEX_TOKEN_PATTERN = re.compile(r"^[0-9a-f]{40}$")


def work_quantity_error(
    format: WorkFormat, hours: Optional[float], quantity: Optional[float]
) -> Optional[str]:
    """Valida que exista la cantidad que exige el formato del albarán."""
    if format == WorkFormat.HOURS:
        if hours is None:
            return "HOURS_REQUIRED_FOR_HOURS_FORMAT"
        if hours < MIN_HOURS:
            return "HOURS_MUST_BE_AT_LEAST_0_1"
        return None

    if quantity is None:
        return "QUANTITY_REQUIRED_FOR_MATERIAL_FORMAT"
    if quantity < MIN_QUANTITY:
        return "QUANTITY_MUST_BE_NON_NEGATIVE"
    return None


def is_valid_nif(value: str) -> bool:
    return bool(NIF_PATTERN.match(value or ""))


def is_valid_verification_code(value: str) -> bool:
    return bool(VERIFICATION_CODE_PATTERN.match(value or ""))


def normalize_email(value: str) -> str:
    return (value or "").strip().lower()


def normalize_cif(value: str) -> str:
    return (value or "").strip().upper()


def normalize_project_code(value: Optional[str]) -> Optional[str]:
    """Códigos vacíos equivalen a "sin código" (no participan en unicidad)."""
    if value is None:
        return None
    cleaned = value.strip()
    return cleaned or None
