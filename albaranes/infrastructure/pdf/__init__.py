"""Renderers de documentos (PDF de albaranes)."""

from .reportlab_renderer import ReportLabDeliveryNoteRenderer

__all__ = ["ReportLabDeliveryNoteRenderer"]
