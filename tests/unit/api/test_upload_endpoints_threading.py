"""
Name: Upload Endpoint Threading Tests

Responsibilities:
  - Validate that signature and logo uploads run the (blocking) use case in
    the worker threadpool, never on the event loop thread
"""

import asyncio

import pytest

from albaranes.api.main import app
from albaranes.application.usecases import SignDeliveryNoteUseCase, UpdateLogoUseCase
from albaranes.container import (
    get_delivery_note_repository,
    get_sign_delivery_note_use_case,
    get_update_logo_use_case,
    get_user_repository,
)
from albaranes.infrastructure.storage import InMemoryObjectStorage

pytestmark = pytest.mark.unit


class _LoopAwareStorage(InMemoryObjectStorage):
    """Registra si cada upload corrió con un event loop activo en su hilo."""

    def __init__(self) -> None:
        super().__init__()
        self.ran_on_loop: list[bool] = []

    def upload(self, content: bytes, *, filename: str, content_type: str) -> str:
        try:
            asyncio.get_running_loop()
            self.ran_on_loop.append(True)
        except RuntimeError:
            self.ran_on_loop.append(False)
        return super().upload(content, filename=filename, content_type=content_type)


@pytest.fixture
def storage():
    storage = _LoopAwareStorage()
    app.dependency_overrides[get_sign_delivery_note_use_case] = lambda: SignDeliveryNoteUseCase(
        delivery_note_repository=get_delivery_note_repository(), storage=storage
    )
    app.dependency_overrides[get_update_logo_use_case] = lambda: UpdateLogoUseCase(
        user_repository=get_user_repository(), storage=storage
    )
    yield storage
    app.dependency_overrides.clear()


def test_signature_upload_runs_off_the_event_loop(api, auth, storage):
    client = api.post("/api/client", json={"name": "Acme", "cif": "B12345678"}, headers=auth).json()
    project = api.post(
        "/api/project", json={"client_id": client["id"], "name": "Obra"}, headers=auth
    ).json()
    note = api.post(
        "/api/deliverynote",
        json={
            "client_id": client["id"],
            "project_id": project["id"],
            "format": "hours",
            "workdate": "2024-05-10",
            "description": "Montaje",
            "hours": 2,
        },
        headers=auth,
    ).json()

    response = api.patch(
        f"/api/deliverynote/sign/{note['id']}",
        files={"sign": ("firma.png", b"signature", "image/png")},
        headers=auth,
    )

    assert response.status_code == 200
    assert storage.ran_on_loop == [False]


def test_logo_upload_runs_off_the_event_loop(api, auth, storage):
    response = api.patch(
        "/api/user/logo",
        files={"logo": ("logo.png", b"\x89PNG data", "image/png")},
        headers=auth,
    )

    assert response.status_code == 200
    assert storage.ran_on_loop == [False]
