"""
===============================================================================
USE CASE: Login
===============================================================================

Business Rules:
    R1) Email inexistente o password incorrecta => UNAUTHORIZED
        INVALID_CREDENTIALS (sin distinguir).
    R2) Credenciales válidas pero cuenta sin verificar => UNAUTHORIZED
        USER_NOT_VALIDATED.
    R3) La emisión del JWT queda en el borde HTTP.
    R4) Un login válido con hash de parámetros viejos lo regenera.
===============================================================================
"""

from __future__ import annotations

from dataclasses import replace

from ....domain.repositories import UserRepository
from ....domain.rules import normalize_email
from ....identity.passwords import hash_password, password_needs_rehash, verify_password
from ..results import unauthorized
from .user_results import INVALID_CREDENTIALS, USER_NOT_VALIDATED, UserResult


class LoginUserUseCase:
    def __init__(self, user_repository: UserRepository) -> None:
        self._users = user_repository

    def execute(self, email: str, password: str) -> UserResult:
        user = self._users.get_user_by_email(normalize_email(email))
        if user is None or not verify_password(password or "", user.password_hash):
            return UserResult(
                error=unauthorized(INVALID_CREDENTIALS, "Invalid email or password.")
            )
        if not user.is_verified:
            return UserResult(
                error=unauthorized(USER_NOT_VALIDATED, "The email is not verified yet.")
            )
        if password_needs_rehash(user.password_hash):
            rehashed = replace(user, password_hash=hash_password(password))
            user = self._users.update_user(rehashed) or user
        return UserResult(user=user)
