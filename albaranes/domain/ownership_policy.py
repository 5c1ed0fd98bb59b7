"""
===============================================================================
TARJETA CRC — domain/ownership_policy.py
===============================================================================

Módulo:
    Política de Ownership (cadena DeliveryNote -> Project -> Client -> User)

Responsabilidades:
    - Definir reglas puras de pertenencia (sin DB, sin FastAPI).
    - Separar "policy" de "repos" (repos traen datos filtrados por owner,
      policy confirma la coherencia de la cadena).
    - Ser 100% testeable: funciones puras, inputs explícitos.

Colaboradores:
    - domain.entities: Client, Project, DeliveryNote
    - application/usecases: verifican el padre antes de operar sobre el hijo.

Reglas:
    - No hay bypass de administrador: solo el dueño ve sus registros.
    - Padre inexistente y padre ajeno son indistinguibles para el caller.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from .entities import Client, DeliveryNote, Project, UserRole


@dataclass(frozen=True, slots=True)
class Actor:
    """Principal autenticado que ejecuta la operación."""

    user_id: UUID
    role: UserRole


def owns(actor: Actor | None, record) -> bool:
    """True si el actor es dueño directo del registro (owner_user_id)."""
    if actor is None or record is None:
        return False
    return getattr(record, "owner_user_id", None) == actor.user_id


def client_chain_ok(actor: Actor | None, client: Optional[Client]) -> bool:
    return owns(actor, client)


def project_chain_ok(
    actor: Actor | None,
    project: Optional[Project],
    client: Optional[Client],
) -> bool:
    """Proyecto propio, colgando de un cliente propio."""
    if not (owns(actor, project) and owns(actor, client)):
        return False
    return project.client_id == client.id


def delivery_note_chain_ok(
    actor: Actor | None,
    note: DeliveryNote,
    project: Optional[Project],
    client: Optional[Client],
) -> bool:
    """Albarán coherente con su proyecto y cliente, todos del mismo dueño."""
    if not owns(actor, note):
        return False
    if not project_chain_ok(actor, project, client):
        return False
    return note.project_id == project.id and note.client_id == client.id
