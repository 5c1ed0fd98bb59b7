"""
Name: Pytest Configuration and Shared Fixtures

Responsibilities:
  - Configure test environment (APP_ENV=test -> in-memory adapters)
  - Provide reusable fixtures: repositories, actors, sample records
  - Reset cached Settings and container singletons between tests

Collaborators:
  - pytest: Test framework
  - albaranes.container: in-memory wiring
  - albaranes.crosscutting.config: Settings cache

Notes:
  - Env vars are set BEFORE importing albaranes so Settings sees them.
  - Use @pytest.fixture(scope="function") for per-test isolation
"""

import os
import sys
from datetime import date
from pathlib import Path
from uuid import uuid4

import pytest

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

os.environ["APP_ENV"] = "test"
os.environ.setdefault("STORAGE_BACKEND", "memory")
os.environ.setdefault("NOTIFIER_BACKEND", "log")
os.environ.setdefault("LOG_JSON", "false")
os.environ.setdefault("RETRY_MAX_ATTEMPTS", "1")
os.environ.setdefault("RETRY_BASE_DELAY_SECONDS", "0")
os.environ.setdefault("RETRY_MAX_DELAY_SECONDS", "0.01")

from albaranes.crosscutting import config as app_config  # noqa: E402

app_config.Settings.model_config["env_file"] = None

from albaranes.container import clear_container_caches  # noqa: E402
from albaranes.domain.entities import (  # noqa: E402
    Client,
    DeliveryNote,
    Project,
    User,
    UserRole,
    WorkFormat,
)
from albaranes.domain.ownership_policy import Actor  # noqa: E402
from albaranes.infrastructure.repositories import (  # noqa: E402
    InMemoryClientRepository,
    InMemoryDeliveryNoteRepository,
    InMemoryProjectRepository,
    InMemoryUserRepository,
)


def pytest_configure(config) -> None:
    config.addinivalue_line(
        "markers", "unit: Unit tests (fast, no external dependencies)"
    )


@pytest.fixture(autouse=True)
def _reset_singletons():
    """R: Settings y singletons del container limpios en cada test."""
    app_config.get_settings.cache_clear()
    clear_container_caches()
    yield
    app_config.get_settings.cache_clear()
    clear_container_caches()


# ============================================================================
# Repository Fixtures
# ============================================================================


@pytest.fixture
def users() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def clients() -> InMemoryClientRepository:
    return InMemoryClientRepository()


@pytest.fixture
def projects() -> InMemoryProjectRepository:
    return InMemoryProjectRepository()


@pytest.fixture
def notes() -> InMemoryDeliveryNoteRepository:
    return InMemoryDeliveryNoteRepository()


# ============================================================================
# Domain Entity Fixtures
# ============================================================================


@pytest.fixture
def owner(users: InMemoryUserRepository) -> User:
    """R: Usuario verificado dueño de los registros de prueba."""
    return users.create_user(
        User(
            id=uuid4(),
            email="owner@example.com",
            password_hash="hash",
            status=True,
        )
    )


@pytest.fixture
def actor(owner: User) -> Actor:
    return Actor(user_id=owner.id, role=owner.role)


@pytest.fixture
def stranger() -> Actor:
    """R: Otro usuario autenticado, sin registros propios."""
    return Actor(user_id=uuid4(), role=UserRole.USER)


@pytest.fixture
def sample_client(clients: InMemoryClientRepository, owner: User) -> Client:
    return clients.create_client(
        Client(id=uuid4(), owner_user_id=owner.id, name="Acme", cif="B12345678")
    )


@pytest.fixture
def sample_project(
    projects: InMemoryProjectRepository, owner: User, sample_client: Client
) -> Project:
    return projects.create_project(
        Project(
            id=uuid4(),
            owner_user_id=owner.id,
            client_id=sample_client.id,
            name="Reforma local",
            project_code="P-001",
        )
    )


@pytest.fixture
def sample_note(
    notes: InMemoryDeliveryNoteRepository,
    owner: User,
    sample_client: Client,
    sample_project: Project,
) -> DeliveryNote:
    return notes.create_delivery_note(
        DeliveryNote(
            id=uuid4(),
            owner_user_id=owner.id,
            client_id=sample_client.id,
            project_id=sample_project.id,
            format=WorkFormat.HOURS,
            workdate=date(2024, 5, 10),
            description="Montaje",
            hours=4.0,
        )
    )
