"""
===============================================================================
TARJETA CRC — infrastructure/notifications/logging_notifier.py
===============================================================================

Clase:
    LoggingNotifier

Responsabilidades:
    - NotifierPort para desarrollo/tests: el mensaje se escribe en el log en
      lugar de enviarse.
    - Guardar los mensajes enviados (sent) para inspección en tests.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from threading import Lock
from typing import List

from ...crosscutting.logger import logger


@dataclass(frozen=True)
class SentMessage:
    recipient: str
    subject: str
    body: str
    sender: str | None


class LoggingNotifier:
    def __init__(self, *, default_sender: str | None = None) -> None:
        self._default_sender = default_sender
        self._lock = Lock()
        self._sent: List[SentMessage] = []

    @property
    def sent(self) -> List[SentMessage]:
        with self._lock:
            return list(self._sent)

    def send(
        self,
        *,
        recipient: str,
        subject: str,
        body: str,
        sender: str | None = None,
    ) -> None:
        message = SentMessage(
            recipient=recipient,
            subject=subject,
            body=body,
            sender=sender or self._default_sender,
        )
        with self._lock:
            self._sent.append(message)
        logger.info(
            "Notificación (log)",
            extra={
                "recipient": recipient,
                "subject": subject,
                "sender": message.sender,
                "body": body,
            },
        )
