"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/user.py
============================================================
Class: PostgresUserRepository

Responsibilities:
- Implementar UserRepository en PostgreSQL (SQL crudo).
- Búsquedas por email / token de reset / token de invitación / CIF de empresa,
  siempre entre cuentas activas.
- Delegar archive / hard delete en SoftDeleteTable (tabla sin owner).

Collaborators:
- SoftDeleteTable
- Tabla: users (índices únicos parciales users_email_active_uidx y
  users_company_cif_active_uidx)
============================================================
"""

from __future__ import annotations

from typing import Optional
from uuid import UUID

from psycopg_pool import ConnectionPool

from ....crosscutting.exceptions import DatabaseError
from ....domain.entities import User, UserRole
from ....domain.rules import normalize_cif
from ....domain.soft_delete import Visibility
from .json_columns import company_from_db, company_to_db
from .soft_delete_table import SoftDeleteTable


class PostgresUserRepository:
    """R: Implementación PostgreSQL del repositorio de usuarios."""

    _SELECT_COLUMNS = """
        id, email, password_hash, role, status,
        verification_code, verification_attempts,
        name, surnames, nif, company, logo_url,
        reset_token, reset_token_expires_at,
        invitation_token, invitation_expires_at, invited_by_user_id,
        created_at, updated_at, deleted, deleted_at
    """

    def __init__(self, pool: Optional[ConnectionPool] = None):
        self._table = SoftDeleteTable(table="users", owner_column=None, pool=pool)

    # =========================================================
    # Mapping
    # =========================================================
    @staticmethod
    def _row_to_user(row: tuple) -> User:
        (
            user_id,
            email,
            password_hash,
            role,
            status,
            verification_code,
            verification_attempts,
            name,
            surnames,
            nif,
            company,
            logo_url,
            reset_token,
            reset_token_expires_at,
            invitation_token,
            invitation_expires_at,
            invited_by_user_id,
            created_at,
            updated_at,
            deleted,
            deleted_at,
        ) = row

        return User(
            id=user_id,
            email=email,
            password_hash=password_hash,
            role=UserRole(role),
            status=bool(status),
            verification_code=verification_code,
            verification_attempts=int(verification_attempts),
            name=name,
            surnames=surnames,
            nif=nif,
            company=company_from_db(company),
            logo_url=logo_url,
            reset_token=reset_token,
            reset_token_expires_at=reset_token_expires_at,
            invitation_token=invitation_token,
            invitation_expires_at=invitation_expires_at,
            invited_by_user_id=invited_by_user_id,
            created_at=created_at,
            updated_at=updated_at,
            deleted=bool(deleted),
            deleted_at=deleted_at,
        )

    def _select_one(
        self, *, conditions: list[str | None], params: list[object], context_msg: str
    ) -> Optional[User]:
        query = f"""
            SELECT {self._SELECT_COLUMNS}
            FROM users
            {self._table.where(conditions)}
            LIMIT 1
        """
        row = self._table.fetchone(query=query, params=params, context_msg=context_msg)
        return self._row_to_user(row) if row else None

    # =========================================================
    # Public API
    # =========================================================
    def create_user(self, user: User) -> User:
        query = f"""
            INSERT INTO users (
                id, email, password_hash, role, status,
                verification_code, verification_attempts,
                name, surnames, nif, company, logo_url,
                invitation_token, invitation_expires_at, invited_by_user_id
            )
            VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s)
            RETURNING {self._SELECT_COLUMNS}
        """
        row = self._table.fetchone(
            query=query,
            params=[
                user.id,
                user.email,
                user.password_hash,
                user.role.value,
                user.status,
                user.verification_code,
                user.verification_attempts,
                user.name,
                user.surnames,
                user.nif,
                company_to_db(user.company),
                user.logo_url,
                user.invitation_token,
                user.invitation_expires_at,
                user.invited_by_user_id,
            ],
            context_msg="PostgresUserRepository: Failed to create user",
            extra={"user_id": str(user.id)},
        )
        return self._row_to_user(row)

    def get_user(
        self, user_id: UUID, *, visibility: Visibility = Visibility.ACTIVE
    ) -> Optional[User]:
        return self._select_one(
            conditions=["id = %s", self._table.visibility_condition(visibility)],
            params=[user_id],
            context_msg="PostgresUserRepository: Failed to get user",
        )

    def get_user_by_email(self, email: str) -> Optional[User]:
        return self._select_one(
            conditions=["lower(email) = lower(%s)", "deleted = false"],
            params=[email.strip()],
            context_msg="PostgresUserRepository: Failed to get user by email",
        )

    def get_user_by_reset_token(self, token: str) -> Optional[User]:
        return self._select_one(
            conditions=["reset_token = %s", "deleted = false"],
            params=[token],
            context_msg="PostgresUserRepository: Failed to get user by reset token",
        )

    def get_user_by_invitation_token(self, token: str) -> Optional[User]:
        return self._select_one(
            conditions=["invitation_token = %s", "deleted = false"],
            params=[token],
            context_msg="PostgresUserRepository: Failed to get user by invitation token",
        )

    def find_user_by_company_cif(
        self, cif: str, *, exclude_user_id: UUID | None = None
    ) -> Optional[User]:
        conditions = ["upper(btrim(company->>'cif')) = %s", "deleted = false"]
        params: list[object] = [normalize_cif(cif)]
        if exclude_user_id is not None:
            conditions.append("id <> %s")
            params.append(exclude_user_id)
        return self._select_one(
            conditions=conditions,
            params=params,
            context_msg="PostgresUserRepository: Failed to find user by company cif",
        )

    def update_user(self, user: User) -> Optional[User]:
        query = f"""
            UPDATE users
            SET email = %s, password_hash = %s, role = %s, status = %s,
                verification_code = %s, verification_attempts = %s,
                name = %s, surnames = %s, nif = %s, company = %s, logo_url = %s,
                reset_token = %s, reset_token_expires_at = %s,
                invitation_token = %s, invitation_expires_at = %s,
                updated_at = now()
            WHERE id = %s AND deleted = false
            RETURNING {self._SELECT_COLUMNS}
        """
        row = self._table.fetchone(
            query=query,
            params=[
                user.email,
                user.password_hash,
                user.role.value,
                user.status,
                user.verification_code,
                user.verification_attempts,
                user.name,
                user.surnames,
                user.nif,
                company_to_db(user.company),
                user.logo_url,
                user.reset_token,
                user.reset_token_expires_at,
                user.invitation_token,
                user.invitation_expires_at,
                user.id,
            ],
            context_msg="PostgresUserRepository: Failed to update user",
            extra={"user_id": str(user.id)},
        )
        return self._row_to_user(row) if row else None

    def archive_user(self, user_id: UUID) -> bool:
        return self._table.archive(user_id)

    def delete_user(self, user_id: UUID) -> bool:
        return self._table.hard_delete(user_id)

    def ping(self) -> bool:
        try:
            row = self._table.fetchone(
                query="SELECT 1",
                params=[],
                context_msg="PostgresUserRepository: ping failed",
            )
        except DatabaseError:
            return False
        return row is not None
