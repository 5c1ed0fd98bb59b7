"""Notificadores (correo por SMTP o solo log)."""

from .logging_notifier import LoggingNotifier
from .smtp_notifier import SmtpConfig, SmtpNotifier

__all__ = ["LoggingNotifier", "SmtpConfig", "SmtpNotifier"]
