"""
===============================================================================
TARJETA CRC — infrastructure/notifications/smtp_notifier.py
===============================================================================

Clase:
    SmtpNotifier

Responsabilidades:
    - NotifierPort sobre SMTP (smtplib): SSL directo (465) o STARTTLS.
    - Armar un MIMEText simple (texto plano, UTF-8).
    - Traducir fallas de conexión/envío a UpstreamError.

Colaboradores:
    - smtplib / ssl / email.mime
    - services/retry.py (desconexiones y respuestas 4xx)
    - crosscutting.exceptions.UpstreamError

Constraints:
    - La password SMTP nunca se loguea.
    - Una conexión por mensaje (volumen bajo, sin pool).
===============================================================================
"""

from __future__ import annotations

import smtplib
import ssl
from dataclasses import dataclass
from email.mime.text import MIMEText
from typing import Callable, Optional

from ...crosscutting.exceptions import UpstreamError
from ...crosscutting.logger import logger
from ..services.retry import create_retry_decorator

SMTP_TIMEOUT_SECONDS = 30


@dataclass(frozen=True)
class SmtpConfig:
    host: str
    port: int = 587
    user: Optional[str] = None
    password: Optional[str] = None
    use_tls: bool = True
    use_ssl: bool = False
    default_sender: Optional[str] = None


class SmtpNotifier:
    """R: Envío de correo por SMTP."""

    def __init__(
        self,
        config: SmtpConfig,
        *,
        smtp_factory: Callable[..., smtplib.SMTP] | None = None,
        smtp_ssl_factory: Callable[..., smtplib.SMTP] | None = None,
    ) -> None:
        self._config = config
        self._smtp_factory = smtp_factory or smtplib.SMTP
        self._smtp_ssl_factory = smtp_ssl_factory or smtplib.SMTP_SSL
        self._deliver_with_retry = create_retry_decorator()(self._deliver)

    def send(
        self,
        *,
        recipient: str,
        subject: str,
        body: str,
        sender: str | None = None,
    ) -> None:
        from_addr = sender or self._config.default_sender or self._config.user
        if not from_addr:
            raise UpstreamError("SMTP: remitente no configurado (MAIL_FROM).")

        message = MIMEText(body, "plain", "utf-8")
        message["Subject"] = subject
        message["From"] = from_addr
        message["To"] = recipient

        try:
            self._deliver_with_retry(from_addr, recipient, message.as_string())
        except (smtplib.SMTPException, OSError) as exc:
            logger.error(
                "SMTP: envío fallido",
                extra={
                    "recipient": recipient,
                    "host": self._config.host,
                    "error_type": type(exc).__name__,
                },
            )
            raise UpstreamError("No se pudo enviar el correo.", original_error=exc) from exc

        logger.info("Correo enviado", extra={"recipient": recipient, "subject": subject})

    def _deliver(self, from_addr: str, recipient: str, raw: str) -> None:
        server = self._connect()
        try:
            server.sendmail(from_addr, [recipient], raw)
        finally:
            server.quit()

    def _connect(self) -> smtplib.SMTP:
        cfg = self._config

        # SSL directo (puerto 465)
        if cfg.use_ssl:
            server = self._smtp_ssl_factory(
                cfg.host,
                cfg.port,
                context=ssl.create_default_context(),
                timeout=SMTP_TIMEOUT_SECONDS,
            )
        else:
            server = self._smtp_factory(cfg.host, cfg.port, timeout=SMTP_TIMEOUT_SECONDS)
            server.ehlo()
            if cfg.use_tls:
                server.starttls(context=ssl.create_default_context())
                server.ehlo()

        if cfg.user:
            server.login(cfg.user, cfg.password or "")
        return server
