"""
Name: Request Context Tests

Responsibilities:
  - Validate X-Request-Id propagation by the middleware
  - Validate request context snapshot (set / enrich / clear)
"""

import pytest

from albaranes.context import (
    clear_context,
    get_context_dict,
    set_request_context,
    set_user_context,
)
from albaranes.crosscutting.middleware import REQUEST_ID_HEADER, resolve_request_id

pytestmark = pytest.mark.unit


def test_incoming_request_id_is_echoed(api):
    response = api.get("/healthz", headers={REQUEST_ID_HEADER: "abc-123"})

    assert response.headers[REQUEST_ID_HEADER] == "abc-123"


def test_oversized_request_id_is_replaced(api):
    response = api.get("/healthz", headers={REQUEST_ID_HEADER: "x" * 500})

    assert len(response.headers[REQUEST_ID_HEADER]) == 36


def test_resolve_request_id_generates_when_missing():
    assert resolve_request_id(None) != resolve_request_id("  ")
    assert resolve_request_id(" keep ") == "keep"


def test_context_snapshot_lifecycle():
    set_request_context(request_id="r1", method="GET", path="/api/client")
    set_user_context("u1", "autonomo")

    assert get_context_dict() == {
        "request_id": "r1",
        "method": "GET",
        "path": "/api/client",
        "user_id": "u1",
        "role": "autonomo",
    }

    clear_context()
    assert get_context_dict() == {}
