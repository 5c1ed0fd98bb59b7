"""
===============================================================================
TARJETA CRC — domain/__init__.py
===============================================================================

Módulo:
    Exportaciones de la Capa de Dominio (API pública del dominio)

Responsabilidades:
    - Centralizar exports para imports limpios en application/interfaces.
    - Evitar imports profundos y acoplamientos innecesarios.

Reglas:
    - Solo re-exporta contratos/entidades del dominio.
    - No importar infraestructura aquí.
===============================================================================
"""

from .entities import (
    Address,
    Client,
    CompanyProfile,
    DeliveryNote,
    Project,
    UnitPrice,
    User,
    UserRole,
    WorkFormat,
)
from .ownership_policy import Actor
from .repositories import (
    ClientRepository,
    DeliveryNoteRepository,
    ProjectRepository,
    UserRepository,
)
from .services import (
    DeliveryNoteDocument,
    DeliveryNoteRendererPort,
    NotifierPort,
    ObjectStoragePort,
)
from .soft_delete import Visibility

__all__ = [
    "Actor",
    "Address",
    "Client",
    "ClientRepository",
    "CompanyProfile",
    "DeliveryNote",
    "DeliveryNoteDocument",
    "DeliveryNoteRendererPort",
    "DeliveryNoteRepository",
    "NotifierPort",
    "ObjectStoragePort",
    "Project",
    "ProjectRepository",
    "UnitPrice",
    "User",
    "UserRepository",
    "UserRole",
    "Visibility",
    "WorkFormat",
]
