"""
===============================================================================
TARJETA CRC — domain/services.py
===============================================================================

Módulo:
    Puertos de Servicios Externos (Protocols)

Responsabilidades:
    - Definir contratos para colaboradores externos: object storage / pinning,
      renderer de albaranes y notificador (correo).
    - Proteger a application de detalles del proveedor (Pinata, S3, ReportLab,
      SMTP).

Colaboradores:
    - infrastructure/storage, pdf, notifications: implementaciones concretas.
    - application/usecases: consumen estos puertos.

Reglas:
    - SOLO interfaces y DTOs de entrada: nada de implementación.
    - Las fallas se reportan como crosscutting.exceptions.UpstreamError.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol

from .entities import Client, DeliveryNote, Project, User


class ObjectStoragePort(Protocol):
    """Contrato para subir binarios y obtener una referencia estable (URL)."""

    def upload(self, content: bytes, *, filename: str, content_type: str) -> str:
        """Sube el blob y devuelve su URL direccionada por contenido."""
        ...


@dataclass(frozen=True)
class DeliveryNoteDocument:
    """Campos estructurados que necesita el renderer (nota + cadena completa)."""

    note: DeliveryNote
    user: Optional[User]
    client: Optional[Client]
    project: Optional[Project]


class DeliveryNoteRendererPort(Protocol):
    """Contrato para generar el documento binario (PDF) de un albarán."""

    def render(self, document: DeliveryNoteDocument) -> bytes:
        ...


class NotifierPort(Protocol):
    """Contrato para enviar notificaciones (correo u otro canal)."""

    def send(
        self,
        *,
        recipient: str,
        subject: str,
        body: str,
        sender: str | None = None,
    ) -> None:
        ...
