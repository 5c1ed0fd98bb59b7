"""
===============================================================================
USE CASE: Send Mail
===============================================================================

Business Goal:
    Enviar un correo libre (to, from, subject, text) por el notificador
    configurado. A diferencia de los correos de cuenta, acá la falla del
    envío SÍ se informa: UPSTREAM_FAILURE (500 genérico, causa logueada).
===============================================================================
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from ....crosscutting.exceptions import UpstreamError
from ....domain.services import NotifierPort
from ..results import AcknowledgedResult, upstream_failure, validation

logger = logging.getLogger(__name__)

MAIL_SENT = "MAIL_SENT"
MAIL_DELIVERY_FAILED = "MAIL_DELIVERY_FAILED"


@dataclass(frozen=True)
class SendMailInput:
    to: str
    subject: str
    text: str
    sender: Optional[str] = None


class SendMailUseCase:
    def __init__(self, notifier: NotifierPort) -> None:
        self._notifier = notifier

    def execute(self, input_data: SendMailInput) -> AcknowledgedResult:
        recipient = (input_data.to or "").strip()
        if not recipient:
            return AcknowledgedResult(acknowledged=False, error=validation("RECIPIENT_REQUIRED"))

        try:
            self._notifier.send(
                recipient=recipient,
                subject=input_data.subject,
                body=input_data.text,
                sender=input_data.sender,
            )
        except UpstreamError as exc:
            logger.error(
                "Mail delivery failed. recipient=%s error_id=%s", recipient, exc.error_id
            )
            return AcknowledgedResult(
                acknowledged=False,
                error=upstream_failure(MAIL_DELIVERY_FAILED, "The mail could not be sent."),
            )
        return AcknowledgedResult(acknowledged=True, message=MAIL_SENT)
