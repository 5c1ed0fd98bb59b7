"""
Name: Notifier Tests

Responsibilities:
  - Validate LoggingNotifier keeps sent messages
  - Validate SmtpNotifier connection modes, retries and failure translation
"""

import smtplib
from unittest.mock import MagicMock

import pytest

from albaranes.crosscutting.exceptions import UpstreamError
from albaranes.infrastructure.notifications import (
    LoggingNotifier,
    SmtpConfig,
    SmtpNotifier,
)

pytestmark = pytest.mark.unit


def test_logging_notifier_records_messages_with_default_sender():
    notifier = LoggingNotifier(default_sender="no-reply@example.com")

    notifier.send(recipient="a@example.com", subject="Hi", body="Body")

    [message] = notifier.sent
    assert message.recipient == "a@example.com"
    assert message.sender == "no-reply@example.com"


def test_smtp_starttls_login_and_send():
    server = MagicMock()
    factory = MagicMock(return_value=server)
    notifier = SmtpNotifier(
        SmtpConfig(host="smtp.example", user="u", password="p", default_sender="from@example.com"),
        smtp_factory=factory,
    )

    notifier.send(recipient="to@example.com", subject="S", body="B")

    factory.assert_called_once()
    server.starttls.assert_called_once()
    server.login.assert_called_once_with("u", "p")
    from_addr, recipients, raw = server.sendmail.call_args[0]
    assert from_addr == "from@example.com"
    assert recipients == ["to@example.com"]
    assert "Subject: S" in raw
    server.quit.assert_called_once()


def test_smtp_ssl_mode_uses_ssl_factory():
    server = MagicMock()
    ssl_factory = MagicMock(return_value=server)
    plain_factory = MagicMock()
    notifier = SmtpNotifier(
        SmtpConfig(host="smtp.example", port=465, use_ssl=True, default_sender="f@example.com"),
        smtp_factory=plain_factory,
        smtp_ssl_factory=ssl_factory,
    )

    notifier.send(recipient="to@example.com", subject="S", body="B")

    ssl_factory.assert_called_once()
    plain_factory.assert_not_called()
    server.login.assert_not_called()


def test_smtp_failure_becomes_upstream_error():
    server = MagicMock()
    server.sendmail.side_effect = smtplib.SMTPRecipientsRefused({})
    notifier = SmtpNotifier(
        SmtpConfig(host="smtp.example", default_sender="f@example.com"),
        smtp_factory=MagicMock(return_value=server),
    )

    with pytest.raises(UpstreamError):
        notifier.send(recipient="to@example.com", subject="S", body="B")
    server.quit.assert_called_once()


def test_smtp_without_sender_is_rejected():
    notifier = SmtpNotifier(SmtpConfig(host="smtp.example"), smtp_factory=MagicMock())

    with pytest.raises(UpstreamError):
        notifier.send(recipient="to@example.com", subject="S", body="B")


def test_smtp_retries_dropped_connection(monkeypatch):
    monkeypatch.setenv("RETRY_MAX_ATTEMPTS", "2")
    from albaranes.crosscutting.config import get_settings

    get_settings.cache_clear()
    server = MagicMock()
    factory = MagicMock(side_effect=[smtplib.SMTPServerDisconnected("closed"), server])
    notifier = SmtpNotifier(
        SmtpConfig(host="smtp.example", default_sender="f@example.com"),
        smtp_factory=factory,
    )

    notifier.send(recipient="to@example.com", subject="S", body="B")

    assert factory.call_count == 2
    server.sendmail.assert_called_once()
