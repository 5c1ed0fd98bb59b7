"""
Name: Structured Logger Tests

Responsibilities:
  - Validate redaction of secrets and masking of emails
  - Validate JSON output carries request context and extra fields
"""

import json
import logging

import pytest

from albaranes.context import clear_context, set_request_context
from albaranes.crosscutting.logger import REDACTED, JSONFormatter, mask_email, sanitize

pytestmark = pytest.mark.unit


@pytest.mark.parametrize(
    "key", ["password", "password_hash", "access_token", "PINATA_JWT", "verification_code"]
)
def test_sensitive_keys_are_redacted(key):
    assert sanitize("value", key=key) == REDACTED


def test_nested_values_are_sanitized():
    out = sanitize({"smtp": {"smtp_password": "x", "host": "mail"}, "sign": b"\x89PNG"})

    assert out == {"smtp": {"smtp_password": REDACTED, "host": "mail"}, "sign": "<bytes 4B>"}


def test_email_fields_are_masked():
    assert sanitize("owner@example.com", key="recipient") == "o***@example.com"
    assert mask_email("not-an-email") == "not-an-email"


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord("albaranes", logging.INFO, __file__, 1, "hola", (), None)
    record.__dict__.update(extra)
    return record


def test_json_formatter_includes_context_and_extra():
    set_request_context(request_id="req-1", method="POST", path="/api/deliverynote")
    try:
        line = JSONFormatter().format(_record(note_id="n1", password="pw"))
    finally:
        clear_context()

    payload = json.loads(line)
    assert payload["message"] == "hola"
    assert payload["request_id"] == "req-1"
    assert payload["note_id"] == "n1"
    assert payload["password"] == REDACTED
