"""
Name: Client / Project / Delivery Note Endpoint Tests

Responsibilities:
  - Validate the archive -> list archived -> restore cycle over HTTP
  - Validate owner scoping (foreign records answer 404)
  - Validate the delivery note lifecycle: create, sign, PDF, delete rules
  - Validate schema-level 422s (hours/material rule, sort and prices filters)
"""

from uuid import uuid4

import pytest

from albaranes.api.main import app
from albaranes.application.usecases import SendMailUseCase
from albaranes.container import get_send_mail_use_case
from albaranes.crosscutting.exceptions import UpstreamError

pytestmark = pytest.mark.unit


def _create_client(api, headers, *, name="Acme", cif="B12345678"):
    response = api.post("/api/client", json={"name": name, "cif": cif}, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


def _create_project(api, headers, client_id, *, name="Obra", project_code="P-001"):
    response = api.post(
        "/api/project",
        json={
            "client_id": client_id,
            "name": name,
            "project_code": project_code,
            "unit_prices": [
                {"format": "hours", "concept": "Oficial", "price": 25},
                {"format": "material", "concept": "Cemento", "price": 8, "unit": "saco"},
            ],
        },
        headers=headers,
    )
    assert response.status_code == 201, response.text
    return response.json()


def _create_note(api, headers, client_id, project_id, **overrides):
    payload = {
        "client_id": client_id,
        "project_id": project_id,
        "format": "hours",
        "workdate": "2024-05-10",
        "description": "Montaje",
        "hours": 4,
    }
    payload.update(overrides)
    return api.post("/api/deliverynote", json=payload, headers=headers)


# ============================================================================
# Clients
# ============================================================================


def test_client_crud_and_archive_cycle(api, auth):
    client = _create_client(api, auth, cif=" b12345678 ")
    assert client["cif"] == "B12345678"

    archived = api.delete(f"/api/client/{client['id']}", headers=auth)
    listing = api.get("/api/client", headers=auth).json()["clients"]
    trash = api.get("/api/client/archived", headers=auth).json()["clients"]
    restored = api.patch(f"/api/client/{client['id']}/restore", headers=auth)

    assert archived.json() == {"deleted": True, "hard": False}
    assert listing == []
    assert [c["id"] for c in trash] == [client["id"]]
    assert restored.status_code == 200
    assert restored.json()["deleted"] is False


def test_duplicate_client_cif(api, auth):
    _create_client(api, auth)

    response = api.post("/api/client", json={"name": "Otro", "cif": "B12345678"}, headers=auth)

    assert response.status_code == 409
    assert response.json()["reason"] == "CLIENT_CIF_ALREADY_EXISTS_FOR_USER"


def test_same_cif_for_different_owners(api, signup):
    first = signup("first@example.com")
    second = signup("second@example.com")

    _create_client(api, first)
    _create_client(api, second)


def test_foreign_client_is_not_found(api, signup):
    owner = signup("owner@example.com")
    stranger = signup("stranger@example.com")
    client = _create_client(api, owner)

    response = api.get(f"/api/client/{client['id']}", headers=stranger)
    update = api.put(f"/api/client/{client['id']}", json={"name": "X"}, headers=stranger)

    assert response.status_code == 404
    assert response.json()["reason"] == "CLIENT_NOT_FOUND"
    assert update.status_code == 404


def test_restore_conflict_after_cif_reused(api, auth):
    client = _create_client(api, auth)
    api.delete(f"/api/client/{client['id']}", headers=auth)
    _create_client(api, auth, name="Nuevo")

    response = api.patch(f"/api/client/{client['id']}/restore", headers=auth)

    assert response.status_code == 409


def test_invalid_uuid_is_422(api, auth):
    response = api.get("/api/client/not-a-uuid", headers=auth)

    assert response.status_code == 422
    assert response.json()["code"] == "VALIDATION_ERROR"


# ============================================================================
# Projects
# ============================================================================


def test_project_listing_and_filters(api, auth):
    client = _create_client(api, auth)
    first = _create_project(api, auth, client["id"], name="Uno", project_code="P-1")
    second = _create_project(api, auth, client["id"], name="Dos", project_code="P-2")

    desc = api.get(f"/api/project/{client['id']}", headers=auth).json()["projects"]
    asc = api.get(
        f"/api/project/{client['id']}", params={"sort": "asc"}, headers=auth
    ).json()["projects"]
    bad_sort = api.get("/api/project", params={"sort": "sideways"}, headers=auth)
    hours_only = api.get(
        f"/api/project/one/{first['id']}", params={"prices": "hours"}, headers=auth
    ).json()
    bad_prices = api.get(
        f"/api/project/one/{first['id']}", params={"prices": "gold"}, headers=auth
    )

    assert [p["id"] for p in desc] == [second["id"], first["id"]]
    assert [p["id"] for p in asc] == [first["id"], second["id"]]
    assert bad_sort.status_code == 422
    assert bad_sort.json()["reason"] == "INVALID_SORT"
    assert [p["format"] for p in hours_only["unit_prices"]] == ["hours"]
    assert bad_prices.json()["reason"] == "INVALID_PRICES_FILTER"


def test_project_for_client_checks_chain(api, auth):
    client = _create_client(api, auth)
    other = _create_client(api, auth, name="Otro", cif="B999")
    project = _create_project(api, auth, client["id"])

    ok = api.get(f"/api/project/{client['id']}/{project['id']}", headers=auth)
    wrong = api.get(f"/api/project/{other['id']}/{project['id']}", headers=auth)

    assert ok.status_code == 200
    assert wrong.status_code == 404


def test_project_code_unique_per_client(api, auth):
    client = _create_client(api, auth)
    _create_project(api, auth, client["id"])

    response = api.post(
        "/api/project",
        json={"client_id": client["id"], "name": "Otra", "project_code": "P-001"},
        headers=auth,
    )

    assert response.status_code == 409


def test_project_archive_restore_and_patches(api, auth):
    client = _create_client(api, auth)
    project = _create_project(api, auth, client["id"])

    archived = api.delete(f"/api/project/archive/{project['id']}", headers=auth)
    trash = api.get("/api/project/archive", headers=auth).json()["projects"]
    trash_by_client = api.get(f"/api/project/archive/{client['id']}", headers=auth).json()
    restored = api.patch(f"/api/project/restore/{project['id']}", headers=auth)
    inactive = api.patch(
        f"/api/project/activate/{project['id']}", json={"active": False}, headers=auth
    )
    amount = api.patch(f"/api/project/amount/{project['id']}", json={"amount": 1500}, headers=auth)
    negative = api.patch(f"/api/project/amount/{project['id']}", json={"amount": -1}, headers=auth)
    prices = api.patch(
        f"/api/project/prices/{project['id']}",
        json={"prices": [{"format": "material", "concept": "Arena", "price": 3}]},
        headers=auth,
    )

    assert archived.json()["deleted"] is True
    assert [p["id"] for p in trash] == [project["id"]]
    assert len(trash_by_client["projects"]) == 1
    assert restored.status_code == 200
    assert inactive.json()["is_active"] is False
    assert amount.json()["amount"] == 1500
    assert negative.status_code == 422
    assert [p["concept"] for p in prices.json()["unit_prices"]] == ["Arena"]


def test_project_for_foreign_client_is_not_found(api, signup):
    owner = signup("owner@example.com")
    stranger = signup("stranger@example.com")
    client = _create_client(api, owner)

    response = api.post(
        "/api/project", json={"client_id": client["id"], "name": "X"}, headers=stranger
    )

    assert response.status_code == 404


# ============================================================================
# Delivery notes
# ============================================================================


def test_delivery_note_lifecycle(api, auth):
    client = _create_client(api, auth)
    project = _create_project(api, auth, client["id"])

    created = _create_note(api, auth, client["id"], project["id"])
    note_id = created.json()["id"]
    listing = api.get("/api/deliverynote", headers=auth).json()["delivery_notes"]
    populated = api.get(f"/api/deliverynote/{note_id}", headers=auth).json()
    signed = api.patch(
        f"/api/deliverynote/sign/{note_id}",
        files={"sign": ("firma.png", b"signature-bytes", "image/png")},
        headers=auth,
    )
    pdf = api.get(f"/api/deliverynote/pdf/{note_id}", headers=auth)
    delete_signed = api.delete(
        f"/api/deliverynote/{note_id}", params={"hard": "true"}, headers=auth
    )

    assert created.status_code == 201
    assert [n["id"] for n in listing] == [note_id]
    assert populated["client"]["id"] == client["id"]
    assert populated["project"]["id"] == project["id"]
    assert populated["user"]["email"] == "owner@example.com"
    assert signed.status_code == 200
    assert signed.json()["is_signed"] is True
    assert signed.json()["sign_url"].startswith("memory://objects/")
    assert pdf.status_code == 200
    assert pdf.json()["pdf_url"].startswith("memory://objects/")
    assert delete_signed.status_code == 409


def test_sign_twice_and_sign_without_file(api, auth):
    client = _create_client(api, auth)
    project = _create_project(api, auth, client["id"])
    note_id = _create_note(api, auth, client["id"], project["id"]).json()["id"]

    missing = api.patch(f"/api/deliverynote/sign/{note_id}", headers=auth)
    api.patch(
        f"/api/deliverynote/sign/{note_id}",
        files={"sign": ("firma.png", b"one", "image/png")},
        headers=auth,
    )
    again = api.patch(
        f"/api/deliverynote/sign/{note_id}",
        files={"sign": ("firma.png", b"two", "image/png")},
        headers=auth,
    )

    assert missing.status_code == 400
    assert again.status_code == 404
    assert again.json()["reason"] == "DELIVERY_NOTE_NOT_FOUND_OR_ALREADY_SIGNED"


def test_delivery_note_delete_rules(api, auth):
    client = _create_client(api, auth)
    project = _create_project(api, auth, client["id"])
    note_id = _create_note(api, auth, client["id"], project["id"]).json()["id"]

    soft = api.delete(f"/api/deliverynote/{note_id}", headers=auth)
    hard = api.delete(f"/api/deliverynote/{note_id}", params={"hard": "true"}, headers=auth)
    gone = api.get(f"/api/deliverynote/{note_id}", headers=auth)

    assert soft.status_code == 400
    assert soft.json()["reason"] == "SOFT_DELETE_NOT_SUPPORTED_USE_HARD_DELETE"
    assert hard.json() == {"deleted": True, "hard": True}
    assert gone.status_code == 404


@pytest.mark.parametrize(
    "overrides, message",
    [
        ({"hours": None}, "HOURS_REQUIRED_FOR_HOURS_FORMAT"),
        ({"hours": 0.05}, "HOURS_MUST_BE_AT_LEAST_0_1"),
        ({"format": "material", "hours": None}, "QUANTITY_REQUIRED_FOR_MATERIAL_FORMAT"),
    ],
)
def test_delivery_note_quantity_rule_is_422(api, auth, overrides, message):
    response = _create_note(api, auth, str(uuid4()), str(uuid4()), **overrides)

    assert response.status_code == 422
    assert any(message in err.get("msg", "") for err in response.json()["errors"])


def test_project_with_notes_cannot_be_hard_deleted(api, auth):
    client = _create_client(api, auth)
    project = _create_project(api, auth, client["id"])
    _create_note(api, auth, client["id"], project["id"])

    response = api.delete(
        f"/api/project/{project['id']}", params={"hard": "true"}, headers=auth
    )

    assert response.status_code == 409
    assert response.json()["reason"] == "PROJECT_HAS_DEPENDENT_RECORDS"


def test_project_with_notes_cannot_move_to_another_client(api, auth):
    client_a = _create_client(api, auth)
    client_b = _create_client(api, auth, name="Beta", cif="A87654321")
    project = _create_project(api, auth, client_a["id"])
    note_id = _create_note(api, auth, client_a["id"], project["id"]).json()["id"]

    response = api.put(
        f"/api/project/{project['id']}", json={"client_id": client_b["id"]}, headers=auth
    )
    populated = api.get(f"/api/deliverynote/{note_id}", headers=auth).json()

    assert response.status_code == 409
    assert response.json()["reason"] == "PROJECT_HAS_DEPENDENT_RECORDS"
    assert populated["client"]["id"] == client_a["id"]
    assert populated["project"]["client_id"] == client_a["id"]


def test_project_of_archived_client_cannot_be_restored(api, auth):
    client = _create_client(api, auth)
    project = _create_project(api, auth, client["id"])
    api.delete(f"/api/project/archive/{project['id']}", headers=auth)
    api.delete(f"/api/client/{client['id']}", headers=auth)

    response = api.patch(f"/api/project/restore/{project['id']}", headers=auth)
    listing = api.get("/api/project", headers=auth).json()["projects"]

    assert response.status_code == 404
    assert response.json()["reason"] == "CLIENT_NOT_FOUND"
    assert listing == []


def test_foreign_delivery_note_is_not_found(api, signup):
    owner = signup("owner@example.com")
    stranger = signup("stranger@example.com")
    client = _create_client(api, owner)
    project = _create_project(api, owner, client["id"])
    note_id = _create_note(api, owner, client["id"], project["id"]).json()["id"]

    response = api.get(f"/api/deliverynote/{note_id}", headers=stranger)
    pdf = api.get(f"/api/deliverynote/pdf/{note_id}", headers=stranger)

    assert response.status_code == 404
    assert pdf.status_code == 404


# ============================================================================
# Mail / health
# ============================================================================


def test_send_mail_requires_auth(api, auth):
    ok = api.post(
        "/api/mail",
        json={"to": "x@example.com", "from": "me@example.com", "subject": "S", "text": "T"},
        headers=auth,
    )
    api.cookies.clear()
    anonymous = api.post("/api/mail", json={"to": "x@example.com", "subject": "S", "text": "T"})

    assert ok.status_code == 200
    assert ok.json()["message"] == "MAIL_SENT"
    assert anonymous.status_code == 401


class _FailingNotifier:
    def send(self, *, recipient, subject, body, sender=None):
        raise UpstreamError("smtp down")


def test_mail_delivery_failure_is_generic_500(api, auth):
    app.dependency_overrides[get_send_mail_use_case] = lambda: SendMailUseCase(
        _FailingNotifier()
    )
    try:
        response = api.post(
            "/api/mail",
            json={"to": "x@example.com", "subject": "S", "text": "T"},
            headers=auth,
        )
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 500
    assert response.json()["code"] == "INTERNAL_ERROR"
    assert "smtp" not in response.text


def test_health_endpoints(api):
    health = api.get("/healthz")
    ready = api.get("/readyz")

    assert health.json()["ok"] is True
    assert health.json()["db"] == "connected"
    assert ready.status_code == 200
    assert ready.json()["storage"] == "memory"


def test_readiness_fails_when_store_is_down(api, monkeypatch):
    class _DownRepository:
        def ping(self):
            raise ConnectionError("db down")

    monkeypatch.setattr("albaranes.api.main.get_user_repository", lambda: _DownRepository())

    ready = api.get("/readyz")

    assert ready.status_code == 503
    assert ready.json()["db"] == "disconnected"
