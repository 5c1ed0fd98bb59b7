"""Modelos de resultado de los casos de uso de clientes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from ....domain.entities import Client
from ..results import UseCaseError

CLIENT_NOT_FOUND = "CLIENT_NOT_FOUND"
ARCHIVED_CLIENT_NOT_FOUND = "ARCHIVED_CLIENT_NOT_FOUND_OR_NOT_AUTHORIZED"
CLIENT_CIF_ALREADY_EXISTS_FOR_USER = "CLIENT_CIF_ALREADY_EXISTS_FOR_USER"
CLIENT_HAS_DEPENDENT_RECORDS = "CLIENT_HAS_DEPENDENT_RECORDS"


@dataclass
class ClientResult:
    client: Client | None = None
    error: UseCaseError | None = None


@dataclass
class ClientListResult:
    clients: List[Client] = field(default_factory=list)
    error: UseCaseError | None = None
