"""
Name: Project Use Case Tests

Responsibilities:
  - Validate parent client ownership on create / move
  - Validate project code uniqueness per (owner, client) among active projects
  - Validate listing, price filtering, archive / restore / hard delete
"""

from uuid import uuid4

import pytest

from albaranes.application.usecases import (
    CreateProjectInput,
    CreateProjectUseCase,
    DeleteProjectUseCase,
    GetProjectUseCase,
    ListProjectsUseCase,
    RestoreProjectUseCase,
    UpdateProjectInput,
    UpdateProjectUseCase,
    UseCaseErrorCode,
)
from albaranes.domain.entities import Client, UnitPrice, WorkFormat

pytestmark = pytest.mark.unit


def _create(projects, clients, actor, client_id, **kwargs):
    values = dict(client_id=client_id, name="Obra")
    values.update(kwargs)
    return CreateProjectUseCase(projects, clients).execute(
        actor, CreateProjectInput(**values)
    )


def test_create_requires_own_active_client(projects, clients, actor, stranger, sample_client):
    ok = _create(projects, clients, actor, sample_client.id, project_code=" P-9 ")
    foreign = _create(projects, clients, stranger, sample_client.id)

    assert ok.error is None
    assert ok.project.project_code == "P-9"
    assert foreign.error.code == UseCaseErrorCode.NOT_FOUND
    assert foreign.error.reason == "CLIENT_NOT_FOUND"


def test_create_rejects_negative_amounts(projects, clients, actor, sample_client):
    negative_amount = _create(projects, clients, actor, sample_client.id, amount=-1)
    negative_price = _create(
        projects,
        clients,
        actor,
        sample_client.id,
        unit_prices=[UnitPrice(format=WorkFormat.HOURS, concept="Hora", price=-5)],
    )

    assert negative_amount.error.reason == "AMOUNT_MUST_BE_NON_NEGATIVE"
    assert negative_price.error.reason == "PRICE_MUST_BE_NON_NEGATIVE"


def test_project_code_unique_per_client(projects, clients, actor, sample_client):
    other_client = clients.create_client(
        Client(id=uuid4(), owner_user_id=actor.user_id, name="Other", cif="X1")
    )

    _create(projects, clients, actor, sample_client.id, project_code="P-1")
    clash = _create(projects, clients, actor, sample_client.id, project_code="P-1")
    elsewhere = _create(projects, clients, actor, other_client.id, project_code="P-1")

    assert clash.error.code == UseCaseErrorCode.CONFLICT
    assert clash.error.reason == "PROJECT_CODE_ALREADY_EXISTS_FOR_CLIENT"
    assert elsewhere.error is None


@pytest.mark.parametrize("code", [None, "", "   "])
def test_projects_without_code_never_conflict(projects, clients, actor, sample_client, code):
    _create(projects, clients, actor, sample_client.id, project_code="P-1")

    results = [
        _create(projects, clients, actor, sample_client.id, project_code=code)
        for _ in range(4)
    ]

    assert all(r.error is None for r in results)
    assert all(r.project.project_code is None for r in results)
    listed = projects.list_projects(owner_user_id=actor.user_id, client_id=sample_client.id)
    assert len(listed) == 5


def test_archive_frees_code_and_restore_detects_clash(projects, clients, notes, actor, sample_project):
    DeleteProjectUseCase(projects, notes).execute(actor, sample_project.id)
    replacement = _create(
        projects, clients, actor, sample_project.client_id, project_code="P-001"
    )

    restored = RestoreProjectUseCase(projects, clients).execute(actor, sample_project.id)

    assert replacement.error is None
    assert restored.error.reason == "PROJECT_CODE_ALREADY_EXISTS_FOR_CLIENT"


def test_restore_returns_active_project(projects, clients, notes, actor, sample_project):
    DeleteProjectUseCase(projects, notes).execute(actor, sample_project.id)

    result = RestoreProjectUseCase(projects, clients).execute(actor, sample_project.id)

    assert result.error is None
    assert result.project.id == sample_project.id
    assert result.project.deleted is False


def test_get_with_client_checks_chain(projects, clients, actor, sample_client, sample_project):
    other_client = clients.create_client(
        Client(id=uuid4(), owner_user_id=actor.user_id, name="Other", cif="X1")
    )
    use_case = GetProjectUseCase(projects, clients)

    assert use_case.execute(actor, sample_project.id, client_id=sample_client.id).error is None
    wrong = use_case.execute(actor, sample_project.id, client_id=other_client.id)
    assert wrong.error.reason == "PROJECT_NOT_FOUND_FOR_CLIENT"


def test_get_filters_unit_prices_by_format(projects, clients, actor, sample_client):
    created = _create(
        projects,
        clients,
        actor,
        sample_client.id,
        unit_prices=[
            UnitPrice(format=WorkFormat.HOURS, concept="Hora", price=30),
            UnitPrice(format=WorkFormat.MATERIAL, concept="Saco", price=5, unit="ud"),
        ],
    ).project

    result = GetProjectUseCase(projects, clients).execute(
        actor, created.id, prices=WorkFormat.MATERIAL
    )

    assert [p.concept for p in result.project.unit_prices] == ["Saco"]


def test_list_by_client_and_archived(projects, clients, notes, actor, sample_client, sample_project):
    second = _create(projects, clients, actor, sample_client.id).project
    listing = ListProjectsUseCase(projects, clients)

    desc = listing.execute(actor, client_id=sample_client.id)
    asc = listing.execute(actor, client_id=sample_client.id, ascending=True)
    assert [p.id for p in desc.projects] == [second.id, sample_project.id]
    assert [p.id for p in asc.projects] == [sample_project.id, second.id]

    DeleteProjectUseCase(projects, notes).execute(actor, second.id)
    archived = listing.execute(actor, client_id=sample_client.id, archived=True)
    assert [p.id for p in archived.projects] == [second.id]

    missing = listing.execute(actor, client_id=uuid4())
    assert missing.error.reason == "CLIENT_NOT_FOUND"


def test_update_code_conflict_and_move_to_foreign_client(projects, clients, notes, actor, sample_client, sample_project):
    other = _create(projects, clients, actor, sample_client.id, project_code="P-2").project
    use_case = UpdateProjectUseCase(projects, clients, notes)

    clash = use_case.execute(actor, other.id, UpdateProjectInput(project_code="P-001"))
    foreign = use_case.execute(actor, other.id, UpdateProjectInput(client_id=uuid4()))
    toggled = use_case.execute(actor, other.id, UpdateProjectInput(is_active=False, amount=120))

    assert clash.error.code == UseCaseErrorCode.CONFLICT
    assert foreign.error.reason == "CLIENT_NOT_FOUND"
    assert toggled.project.is_active is False
    assert toggled.project.amount == 120


def test_hard_delete_blocked_by_delivery_notes(projects, notes, actor, sample_note, sample_project):
    result = DeleteProjectUseCase(projects, notes).execute(actor, sample_project.id, hard=True)

    assert result.deleted is False
    assert result.error.reason == "PROJECT_HAS_DEPENDENT_RECORDS"


def test_soft_delete_of_foreign_project_is_not_found(projects, notes, stranger, sample_project):
    result = DeleteProjectUseCase(projects, notes).execute(stranger, sample_project.id)

    assert result.error.code == UseCaseErrorCode.NOT_FOUND


def test_move_to_other_client_allowed_without_delivery_notes(projects, clients, notes, actor, sample_project):
    other_client = clients.create_client(
        Client(id=uuid4(), owner_user_id=actor.user_id, name="Other", cif="X1")
    )

    moved = UpdateProjectUseCase(projects, clients, notes).execute(
        actor, sample_project.id, UpdateProjectInput(client_id=other_client.id)
    )

    assert moved.error is None
    assert moved.project.client_id == other_client.id


def test_move_to_other_client_blocked_by_delivery_notes(
    projects, clients, notes, actor, sample_project, sample_note
):
    other_client = clients.create_client(
        Client(id=uuid4(), owner_user_id=actor.user_id, name="Other", cif="X1")
    )

    result = UpdateProjectUseCase(projects, clients, notes).execute(
        actor, sample_project.id, UpdateProjectInput(client_id=other_client.id)
    )

    assert result.error.code == UseCaseErrorCode.CONFLICT
    assert result.error.reason == "PROJECT_HAS_DEPENDENT_RECORDS"
    stored = projects.get_project(sample_project.id, owner_user_id=actor.user_id)
    assert stored.client_id == sample_note.client_id


def test_restore_requires_active_client(projects, clients, notes, actor, sample_client, sample_project):
    DeleteProjectUseCase(projects, notes).execute(actor, sample_project.id)
    clients.archive_client(sample_client.id, owner_user_id=actor.user_id)

    result = RestoreProjectUseCase(projects, clients).execute(actor, sample_project.id)

    assert result.error.code == UseCaseErrorCode.NOT_FOUND
    assert result.error.reason == "CLIENT_NOT_FOUND"
    assert projects.list_projects(owner_user_id=actor.user_id) == []
