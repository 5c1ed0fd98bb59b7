"""
============================================================
TARJETA CRC — infrastructure/repositories/in_memory/user.py
============================================================
Class: InMemoryUserRepository

Responsibilities:
  - Implementar UserRepository en memoria (tests / APP_ENV=test).
  - Emular índices parciales: email activo y CIF de empresa activo.

Collaborators:
  - SoftDeleteStore (composición)
  - domain.entities.User
============================================================
"""

from __future__ import annotations

from typing import Optional
from uuid import UUID

from ....domain.entities import User
from ....domain.rules import normalize_cif, normalize_email
from ....domain.soft_delete import Visibility
from .soft_delete_store import SoftDeleteStore, UniqueKey

EMAIL_KEY = "users_email_active_uidx"
COMPANY_CIF_KEY = "users_company_cif_active_uidx"


def _email_key(user: User) -> tuple:
    return (normalize_email(user.email),)


def _company_cif_key(user: User) -> Optional[tuple]:
    if user.company is None or not user.company.cif:
        return None
    return (normalize_cif(user.company.cif),)


class InMemoryUserRepository:
    def __init__(self) -> None:
        self._store: SoftDeleteStore[User] = SoftDeleteStore(
            unique_keys=(
                UniqueKey(EMAIL_KEY, _email_key),
                UniqueKey(COMPANY_CIF_KEY, _company_cif_key),
            )
        )

    def create_user(self, user: User) -> User:
        return self._store.insert(user)

    def get_user(
        self, user_id: UUID, *, visibility: Visibility = Visibility.ACTIVE
    ) -> Optional[User]:
        return self._store.get(user_id, visibility=visibility)

    def get_user_by_email(self, email: str) -> Optional[User]:
        wanted = normalize_email(email)
        return self._store.find_one(where=lambda u: normalize_email(u.email) == wanted)

    def get_user_by_reset_token(self, token: str) -> Optional[User]:
        if not token:
            return None
        return self._store.find_one(where=lambda u: u.reset_token == token)

    def get_user_by_invitation_token(self, token: str) -> Optional[User]:
        if not token:
            return None
        return self._store.find_one(where=lambda u: u.invitation_token == token)

    def find_user_by_company_cif(
        self, cif: str, *, exclude_user_id: UUID | None = None
    ) -> Optional[User]:
        wanted = normalize_cif(cif)
        return self._store.find_one(
            where=lambda u: u.id != exclude_user_id
            and _company_cif_key(u) == (wanted,)
        )

    def update_user(self, user: User) -> Optional[User]:
        return self._store.update(
            user.id,
            {
                "email": user.email,
                "password_hash": user.password_hash,
                "role": user.role,
                "status": user.status,
                "verification_code": user.verification_code,
                "verification_attempts": user.verification_attempts,
                "name": user.name,
                "surnames": user.surnames,
                "nif": user.nif,
                "company": user.company,
                "logo_url": user.logo_url,
                "reset_token": user.reset_token,
                "reset_token_expires_at": user.reset_token_expires_at,
                "invitation_token": user.invitation_token,
                "invitation_expires_at": user.invitation_expires_at,
            },
        )

    def archive_user(self, user_id: UUID) -> bool:
        return self._store.archive(user_id)

    def delete_user(self, user_id: UUID) -> bool:
        return self._store.hard_delete(user_id)

    def ping(self) -> bool:
        return True
