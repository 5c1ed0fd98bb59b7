"""Envío best-effort de correos de cuenta (código, reset, invitación)."""

from __future__ import annotations

import logging

from ....crosscutting.exceptions import UpstreamError
from ....domain.services import NotifierPort

logger = logging.getLogger(__name__)


def notify_best_effort(
    notifier: NotifierPort | None, *, recipient: str, subject: str, body: str
) -> bool:
    """Devuelve False si el envío falló; la falla queda logueada, nunca se propaga."""
    if notifier is None:
        return False
    try:
        notifier.send(recipient=recipient, subject=subject, body=body)
    except UpstreamError as exc:
        logger.warning(
            "Account notification not delivered. recipient=%s error_id=%s",
            recipient,
            exc.error_id,
        )
        return False
    return True
