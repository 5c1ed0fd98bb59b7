"""
Name: Client Use Case Tests

Responsibilities:
  - Validate per-owner CIF uniqueness among active clients
  - Validate archive / restore / hard delete flows
  - Validate NOT_FOUND for missing and foreign clients alike
"""

from uuid import uuid4

import pytest

from albaranes.application.usecases import (
    CreateClientInput,
    CreateClientUseCase,
    DeleteClientUseCase,
    GetClientUseCase,
    ListClientsUseCase,
    RestoreClientUseCase,
    UpdateClientInput,
    UpdateClientUseCase,
    UseCaseErrorCode,
)
from albaranes.crosscutting.exceptions import DuplicateKeyError
from albaranes.domain.entities import Project

pytestmark = pytest.mark.unit


def test_create_normalizes_cif(clients, actor):
    result = CreateClientUseCase(clients).execute(
        actor, CreateClientInput(name=" Acme ", cif=" b123 ")
    )

    assert result.error is None
    assert result.client.name == "Acme"
    assert result.client.cif == "B123"
    assert result.client.owner_user_id == actor.user_id


def test_duplicate_cif_for_same_owner_conflicts(clients, actor, stranger):
    use_case = CreateClientUseCase(clients)
    use_case.execute(actor, CreateClientInput(name="A", cif="B123"))

    duplicate = use_case.execute(actor, CreateClientInput(name="B", cif="b123"))
    other_owner = use_case.execute(stranger, CreateClientInput(name="C", cif="B123"))

    assert duplicate.error.code == UseCaseErrorCode.CONFLICT
    assert duplicate.error.reason == "CLIENT_CIF_ALREADY_EXISTS_FOR_USER"
    assert other_owner.error is None


def test_archived_client_frees_its_cif(clients, projects, actor):
    create = CreateClientUseCase(clients)
    first = create.execute(actor, CreateClientInput(name="A", cif="B123")).client

    DeleteClientUseCase(clients, projects).execute(actor, first.id)
    second = create.execute(actor, CreateClientInput(name="A2", cif="B123"))

    assert second.error is None
    assert second.client.id != first.id


def test_restore_blocked_while_cif_taken_by_active_client(clients, projects, actor):
    create = CreateClientUseCase(clients)
    first = create.execute(actor, CreateClientInput(name="A", cif="B123")).client
    DeleteClientUseCase(clients, projects).execute(actor, first.id)
    create.execute(actor, CreateClientInput(name="A2", cif="B123"))

    result = RestoreClientUseCase(clients).execute(actor, first.id)

    assert result.error.code == UseCaseErrorCode.CONFLICT
    assert result.error.reason == "CLIENT_CIF_ALREADY_EXISTS_FOR_USER"


def test_restore_brings_client_back(clients, projects, actor, sample_client):
    DeleteClientUseCase(clients, projects).execute(actor, sample_client.id)

    result = RestoreClientUseCase(clients).execute(actor, sample_client.id)

    assert result.error is None
    assert result.client.deleted is False
    assert ListClientsUseCase(clients).execute(actor).clients[0].id == sample_client.id


def test_restore_of_active_client_is_not_found(clients, actor, sample_client):
    result = RestoreClientUseCase(clients).execute(actor, sample_client.id)

    assert result.error.code == UseCaseErrorCode.NOT_FOUND
    assert result.error.reason == "ARCHIVED_CLIENT_NOT_FOUND_OR_NOT_AUTHORIZED"


def test_foreign_and_missing_clients_are_indistinguishable(clients, stranger, sample_client):
    foreign = GetClientUseCase(clients).execute(stranger, sample_client.id)
    missing = GetClientUseCase(clients).execute(stranger, uuid4())

    assert foreign.error == missing.error
    assert foreign.error.code == UseCaseErrorCode.NOT_FOUND


def test_list_archived(clients, projects, actor, sample_client):
    DeleteClientUseCase(clients, projects).execute(actor, sample_client.id)

    listing = ListClientsUseCase(clients)
    assert listing.execute(actor).clients == []
    assert [c.id for c in listing.execute(actor, archived=True).clients] == [sample_client.id]


def test_update_cif_conflict_excludes_self(clients, actor, sample_client):
    CreateClientUseCase(clients).execute(actor, CreateClientInput(name="Z", cif="Z999"))
    use_case = UpdateClientUseCase(clients)

    same = use_case.execute(actor, sample_client.id, UpdateClientInput(cif="b12345678"))
    clash = use_case.execute(actor, sample_client.id, UpdateClientInput(cif="z999"))

    assert same.error is None
    assert clash.error.code == UseCaseErrorCode.CONFLICT


def test_update_rejects_blank_name(clients, actor, sample_client):
    result = UpdateClientUseCase(clients).execute(
        actor, sample_client.id, UpdateClientInput(name="  ")
    )

    assert result.error.code == UseCaseErrorCode.VALIDATION_ERROR


def test_hard_delete_blocked_by_projects(clients, projects, actor, sample_client):
    projects.create_project(
        Project(id=uuid4(), owner_user_id=actor.user_id, client_id=sample_client.id, name="P")
    )

    result = DeleteClientUseCase(clients, projects).execute(actor, sample_client.id, hard=True)

    assert result.deleted is False
    assert result.error.reason == "CLIENT_HAS_DEPENDENT_RECORDS"


def test_hard_delete_from_archive(clients, projects, actor, sample_client):
    use_case = DeleteClientUseCase(clients, projects)
    use_case.execute(actor, sample_client.id)

    result = use_case.execute(actor, sample_client.id, hard=True)

    assert result.deleted and result.hard
    assert GetClientUseCase(clients).execute(actor, sample_client.id).error is not None


def test_create_race_is_reported_as_conflict(clients, actor, monkeypatch):
    def racing_create(client):
        raise DuplicateKeyError("race", key="clients_owner_cif_active_uidx")

    monkeypatch.setattr(clients, "create_client", racing_create)

    result = CreateClientUseCase(clients).execute(actor, CreateClientInput(name="A", cif="B1"))

    assert result.error.reason == "CLIENT_CIF_ALREADY_EXISTS_FOR_USER"
