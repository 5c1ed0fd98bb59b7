"""
CRC — domain/repositories.py

Name
- Domain Repository Interfaces (Protocols)

Responsibilities
- Define persistence contracts for the domain layer (ports).
- Every finder is owner-scoped and visibility-aware (ACTIVE by default).
- Every collection offers archive / restore / hard-delete semantics.

Collaborators
- domain.entities: User, Client, Project, DeliveryNote
- domain.soft_delete: Visibility
- infrastructure.repositories: postgres_*, in_memory_* implementations

Constraints
- Pure interfaces only: no side effects, no infrastructure imports, no SQL.
- Implementations MUST match method signatures exactly.
- Writes that violate a business key raise crosscutting.exceptions.DuplicateKeyError.

Notes
- We use typing.Protocol for structural subtyping ("duck typing").
- archive_* only matches active rows; restore_* only matches archived rows.
  Both return False otherwise (callers surface NOT_FOUND).
"""

from typing import List, Optional, Protocol
from uuid import UUID

from .entities import Client, DeliveryNote, Project, User
from .soft_delete import Visibility


class UserRepository(Protocol):
    """
    R: Interface for user accounts.

    Email is unique among active (non-archived) accounts.
    """

    def create_user(self, user: User) -> User:
        """R: Persist a new user. Raises DuplicateKeyError on email/company CIF."""
        ...

    def get_user(
        self, user_id: UUID, *, visibility: Visibility = Visibility.ACTIVE
    ) -> Optional[User]:
        """R: Fetch a user by ID."""
        ...

    def get_user_by_email(self, email: str) -> Optional[User]:
        """R: Fetch the active user with this email (case-insensitive)."""
        ...

    def get_user_by_reset_token(self, token: str) -> Optional[User]:
        """R: Fetch the active user holding this password-reset token."""
        ...

    def get_user_by_invitation_token(self, token: str) -> Optional[User]:
        """R: Fetch the active user holding this invitation token."""
        ...

    def find_user_by_company_cif(
        self, cif: str, *, exclude_user_id: UUID | None = None
    ) -> Optional[User]:
        """R: Active user (other than exclude_user_id) whose company has this CIF."""
        ...

    def update_user(self, user: User) -> Optional[User]:
        """R: Replace mutable fields of an active user. None if not found."""
        ...

    def archive_user(self, user_id: UUID) -> bool:
        """R: Soft-delete an active user."""
        ...

    def delete_user(self, user_id: UUID) -> bool:
        """R: Hard-delete a user regardless of archival state."""
        ...

    def ping(self) -> bool:
        """R: Health check of the backing store."""
        ...


class ClientRepository(Protocol):
    """
    R: Interface for clients.

    Business key: (owner_user_id, cif) among active clients.
    """

    def create_client(self, client: Client) -> Client:
        ...

    def list_clients(
        self,
        *,
        owner_user_id: UUID,
        visibility: Visibility = Visibility.ACTIVE,
    ) -> List[Client]:
        """R: List the owner's clients (created_at desc)."""
        ...

    def get_client(
        self,
        client_id: UUID,
        *,
        owner_user_id: UUID,
        visibility: Visibility = Visibility.ACTIVE,
    ) -> Optional[Client]:
        ...

    def find_client_by_cif(
        self,
        *,
        owner_user_id: UUID,
        cif: str,
        exclude_id: UUID | None = None,
    ) -> Optional[Client]:
        """R: Active client of the owner with this CIF (excluding exclude_id)."""
        ...

    def count_clients(self, *, owner_user_id: UUID) -> int:
        """R: Count every client of the owner, archived included."""
        ...

    def update_client(self, client: Client) -> Optional[Client]:
        """R: Update name/cif/address of an active client. None if not found."""
        ...

    def archive_client(self, client_id: UUID, *, owner_user_id: UUID) -> bool:
        ...

    def restore_client(self, client_id: UUID, *, owner_user_id: UUID) -> bool:
        ...

    def delete_client(self, client_id: UUID, *, owner_user_id: UUID) -> bool:
        """R: Hard delete. Raises ReferencedRecordError while projects exist."""
        ...


class ProjectRepository(Protocol):
    """
    R: Interface for projects.

    Business key: (owner_user_id, client_id, project_code), only when
    project_code is set (sparse), among active projects.
    """

    def create_project(self, project: Project) -> Project:
        ...

    def list_projects(
        self,
        *,
        owner_user_id: UUID,
        client_id: UUID | None = None,
        visibility: Visibility = Visibility.ACTIVE,
        ascending: bool = False,
    ) -> List[Project]:
        """R: List projects ordered by created_at (desc by default)."""
        ...

    def get_project(
        self,
        project_id: UUID,
        *,
        owner_user_id: UUID,
        client_id: UUID | None = None,
        visibility: Visibility = Visibility.ACTIVE,
    ) -> Optional[Project]:
        ...

    def find_project_by_code(
        self,
        *,
        owner_user_id: UUID,
        client_id: UUID,
        project_code: str,
        exclude_id: UUID | None = None,
    ) -> Optional[Project]:
        ...

    def count_projects(self, *, owner_user_id: UUID, client_id: UUID) -> int:
        """R: Count every project of the client, archived included."""
        ...

    def update_project(self, project: Project) -> Optional[Project]:
        """R: Update mutable fields of an active project. None if not found."""
        ...

    def archive_project(self, project_id: UUID, *, owner_user_id: UUID) -> bool:
        ...

    def restore_project(self, project_id: UUID, *, owner_user_id: UUID) -> bool:
        ...

    def delete_project(self, project_id: UUID, *, owner_user_id: UUID) -> bool:
        """R: Hard delete. Raises ReferencedRecordError while notes exist."""
        ...


class DeliveryNoteRepository(Protocol):
    """
    R: Interface for delivery notes.

    Signing is one-way: mark_signed only matches unsigned notes and
    delete_unsigned_delivery_note never removes a signed note.
    """

    def create_delivery_note(self, note: DeliveryNote) -> DeliveryNote:
        ...

    def list_delivery_notes(self, *, owner_user_id: UUID) -> List[DeliveryNote]:
        """R: Active notes of the owner (created_at desc)."""
        ...

    def get_delivery_note(
        self,
        note_id: UUID,
        *,
        owner_user_id: UUID,
        visibility: Visibility = Visibility.ACTIVE,
    ) -> Optional[DeliveryNote]:
        ...

    def count_delivery_notes(self, *, owner_user_id: UUID, project_id: UUID) -> int:
        """R: Count every note of the project, archived included."""
        ...

    def mark_signed(
        self, note_id: UUID, *, owner_user_id: UUID, sign_url: str
    ) -> Optional[DeliveryNote]:
        """R: Atomically set sign_url + is_signed on an unsigned active note."""
        ...

    def set_pdf_url(
        self, note_id: UUID, *, owner_user_id: UUID, pdf_url: str
    ) -> Optional[DeliveryNote]:
        ...

    def delete_unsigned_delivery_note(
        self, note_id: UUID, *, owner_user_id: UUID
    ) -> bool:
        """R: Hard delete, only while is_signed is false."""
        ...
