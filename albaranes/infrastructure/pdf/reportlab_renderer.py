"""
===============================================================================
TARJETA CRC — infrastructure/pdf/reportlab_renderer.py
===============================================================================

Clase:
    ReportLabDeliveryNoteRenderer

Responsabilidades:
    - Implementar DeliveryNoteRendererPort generando un PDF A4 en memoria.
    - Secciones: título, emisor (usuario + empresa), cliente, proyecto,
      detalle del trabajo y firma.
    - Firma: si el albarán está firmado se descarga la imagen por URL; si la
      descarga falla se imprime un texto de reemplazo. Sin firmar: línea en
      blanco + observador.

Colaboradores:
    - reportlab (canvas, A4, ImageReader)
    - httpx (descarga de la firma, cliente inyectable)
    - infrastructure.services.retry (reintentos de la descarga)
    - domain.services.DeliveryNoteDocument

Constraints:
    - Sin IO de disco: todo en BytesIO.
    - Fallas de la imagen de firma NO abortan el render.
===============================================================================
"""

from __future__ import annotations

from io import BytesIO
from typing import Iterable, Optional

import httpx
from reportlab.lib.pagesizes import A4
from reportlab.lib.utils import ImageReader, simpleSplit
from reportlab.pdfgen import canvas

from ...crosscutting.config import get_settings
from ...crosscutting.logger import logger
from ...domain.entities import Address, WorkFormat
from ...domain.services import DeliveryNoteDocument
from ..services.retry import create_retry_decorator

SIGNATURE_FALLBACK_TEXT = "(Signature image could not be loaded)"

_MARGIN_X = 50
_LINE = 16
_SIGNATURE_WIDTH = 180
_SIGNATURE_HEIGHT = 80


def _format_address(address: Optional[Address]) -> str:
    if address is None:
        return ""
    street = " ".join(p for p in (address.street, address.number) if p)
    city = " ".join(p for p in (address.postal, address.city) if p)
    parts = [p for p in (street, city, address.province) if p]
    return ", ".join(parts)


def _format_amount(value: Optional[float]) -> str:
    if value is None:
        return "-"
    return f"{value:g}"


class ReportLabDeliveryNoteRenderer:
    """R: Renderer PDF basado en ReportLab."""

    def __init__(
        self,
        *,
        http_client: httpx.Client | None = None,
        timeout_seconds: float | None = None,
    ) -> None:
        timeout = (
            timeout_seconds
            if timeout_seconds is not None
            else get_settings().signature_fetch_timeout_seconds
        )
        self._http = http_client or httpx.Client(timeout=timeout, follow_redirects=True)
        self._fetch_with_retry = create_retry_decorator()(self._fetch)

    # =========================================================
    # Port
    # =========================================================
    def render(self, document: DeliveryNoteDocument) -> bytes:
        buffer = BytesIO()
        pdf = canvas.Canvas(buffer, pagesize=A4)
        width, height = A4
        note = document.note

        pdf.setTitle(f"Delivery note {note.id}")

        # -----------------------------
        # Título
        # -----------------------------
        y = height - 60
        pdf.setFont("Helvetica-Bold", 20)
        pdf.drawCentredString(width / 2, y, "DELIVERY NOTE")
        y -= _LINE * 2

        y = self._section(pdf, y, "From", self._issuer_lines(document))
        y = self._section(pdf, y, "To", self._client_lines(document))
        y = self._section(pdf, y, "Project", self._project_lines(document))
        y = self._section(pdf, y, "Details", self._detail_lines(document, width))

        self._signature(pdf, y, document)

        pdf.showPage()
        pdf.save()
        return buffer.getvalue()

    # =========================================================
    # Secciones
    # =========================================================
    @staticmethod
    def _section(pdf: canvas.Canvas, y: float, title: str, lines: Iterable[str]) -> float:
        pdf.setFont("Helvetica-Bold", 12)
        pdf.drawString(_MARGIN_X, y, title)
        y -= _LINE
        pdf.setFont("Helvetica", 10)
        for line in lines:
            pdf.drawString(_MARGIN_X + 10, y, line)
            y -= _LINE
        return y - _LINE / 2

    @staticmethod
    def _issuer_lines(document: DeliveryNoteDocument) -> list[str]:
        user = document.user
        if user is None:
            return ["-"]
        full_name = " ".join(p for p in (user.name, user.surnames) if p)
        lines = [full_name or user.email, user.email]
        if user.nif:
            lines.append(f"NIF: {user.nif}")
        company = user.company
        if company is not None:
            if company.name:
                lines.append(f"Company: {company.name}")
            if company.cif:
                lines.append(f"CIF: {company.cif}")
            street = " ".join(p for p in (company.street, company.number) if p)
            city = " ".join(p for p in (company.postal, company.city) if p)
            address = ", ".join(p for p in (street, city, company.province) if p)
            if address:
                lines.append(address)
        return lines

    @staticmethod
    def _client_lines(document: DeliveryNoteDocument) -> list[str]:
        client = document.client
        if client is None:
            return ["-"]
        lines = [client.name, f"CIF: {client.cif}"]
        address = _format_address(client.address)
        if address:
            lines.append(address)
        return lines

    @staticmethod
    def _project_lines(document: DeliveryNoteDocument) -> list[str]:
        project = document.project
        if project is None:
            return ["-"]
        lines = [project.name]
        if project.project_code:
            lines.append(f"Code: {project.project_code}")
        return lines

    @staticmethod
    def _detail_lines(document: DeliveryNoteDocument, page_width: float) -> list[str]:
        note = document.note
        lines = [
            f"Work date: {note.workdate.isoformat()}",
            f"Format: {note.format.value}",
        ]
        if note.format == WorkFormat.HOURS:
            lines.append(f"Hours: {_format_amount(note.hours)}")
        else:
            lines.append(f"Quantity: {_format_amount(note.quantity)}")

        max_width = page_width - 2 * _MARGIN_X - 10
        lines.extend(
            simpleSplit(f"Description: {note.description}", "Helvetica", 10, max_width)
        )
        if note.observations:
            lines.extend(
                simpleSplit(
                    f"Observations: {note.observations}", "Helvetica", 10, max_width
                )
            )
        return lines

    def _signature(self, pdf: canvas.Canvas, y: float, document: DeliveryNoteDocument) -> None:
        note = document.note
        pdf.setFont("Helvetica-Bold", 12)
        pdf.drawString(_MARGIN_X, y, "Signature")
        y -= _LINE
        pdf.setFont("Helvetica", 10)

        if note.is_signed and note.sign_url:
            image = self._load_signature(note.sign_url)
            if image is not None:
                pdf.drawImage(
                    image,
                    _MARGIN_X + 10,
                    y - _SIGNATURE_HEIGHT,
                    width=_SIGNATURE_WIDTH,
                    height=_SIGNATURE_HEIGHT,
                    preserveAspectRatio=True,
                    mask="auto",
                )
                y -= _SIGNATURE_HEIGHT + _LINE
            else:
                pdf.drawString(_MARGIN_X + 10, y, SIGNATURE_FALLBACK_TEXT)
                y -= _LINE
        else:
            y -= _LINE * 2
            pdf.line(_MARGIN_X + 10, y, _MARGIN_X + 10 + _SIGNATURE_WIDTH, y)
            y -= _LINE

        if note.observer_name:
            observer = note.observer_name
            if note.observer_nif:
                observer = f"{observer} ({note.observer_nif})"
            pdf.drawString(_MARGIN_X + 10, y, f"Observer: {observer}")

    # =========================================================
    # Firma (descarga best-effort)
    # =========================================================
    def _fetch(self, url: str) -> bytes:
        response = self._http.get(url)
        response.raise_for_status()
        return response.content

    def _load_signature(self, url: str) -> Optional[ImageReader]:
        if not url.startswith(("http://", "https://")):
            logger.warning("URL de firma no descargable", extra={"sign_url": url})
            return None
        try:
            content = self._fetch_with_retry(url)
            return ImageReader(BytesIO(content))
        except Exception as exc:
            logger.warning(
                "No se pudo cargar la imagen de firma",
                extra={"error": str(exc), "error_type": type(exc).__name__},
            )
            return None
