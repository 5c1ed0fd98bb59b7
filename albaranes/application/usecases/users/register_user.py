"""
===============================================================================
USE CASE: Register User
===============================================================================

Business Goal:
    Alta de una cuenta sin verificar con código de verificación de 6 dígitos.

-------------------------------------------------------------------------------
CRC CARD
-------------------------------------------------------------------------------
Class:
    RegisterUserUseCase

Responsibilities:
    - Normalizar email; validar password (>= 8) y rol (user | autonomo).
    - Email de cuenta activa y verificada => CONFLICT
      EMAIL_ALREADY_REGISTERED_AND_VERIFIED.
    - Email de invitado pendiente => CONFLICT EMAIL_ALREADY_REGISTERED
      (se activa por token de invitación, no por registro).
    - Email de cuenta activa sin verificar => re-emitir código y password
      sobre la misma cuenta (intentos reiniciados).
    - Loguear el código y enviarlo por el notificador (best-effort).

Collaborators:
    - UserRepository: get_user_by_email / create_user / update_user
    - identity.passwords.hash_password
    - identity.tokens.generate_verification_code
    - NotifierPort
===============================================================================
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from uuid import uuid4

from ....crosscutting.exceptions import DuplicateKeyError
from ....domain.entities import User, UserRole
from ....domain.repositories import UserRepository
from ....domain.rules import MIN_PASSWORD_LENGTH, normalize_email
from ....domain.services import NotifierPort
from ....identity.passwords import hash_password
from ....identity.tokens import generate_verification_code
from ..results import conflict, validation
from .notifications import notify_best_effort
from .user_results import (
    EMAIL_ALREADY_REGISTERED,
    EMAIL_ALREADY_REGISTERED_AND_VERIFIED,
    PASSWORD_TOO_SHORT,
    UserResult,
)

logger = logging.getLogger(__name__)

_SELF_SERVICE_ROLES = frozenset({UserRole.USER, UserRole.AUTONOMO})


@dataclass(frozen=True)
class RegisterUserInput:
    email: str
    password: str
    role: UserRole = UserRole.USER


class RegisterUserUseCase:
    def __init__(
        self,
        user_repository: UserRepository,
        notifier: NotifierPort | None = None,
        *,
        verification_attempts: int = 3,
    ) -> None:
        self._users = user_repository
        self._notifier = notifier
        self._attempts = verification_attempts

    def execute(self, input_data: RegisterUserInput) -> UserResult:
        # ---------------------------------------------------------------------
        # 1) Validaciones de input.
        # ---------------------------------------------------------------------
        email = normalize_email(input_data.email)
        if not email:
            return UserResult(error=validation("EMAIL_REQUIRED"))
        if len(input_data.password or "") < MIN_PASSWORD_LENGTH:
            return UserResult(error=validation(PASSWORD_TOO_SHORT))
        if input_data.role not in _SELF_SERVICE_ROLES:
            return UserResult(error=validation("ROLE_NOT_ALLOWED"))

        code = generate_verification_code()
        password_hash = hash_password(input_data.password)

        # ---------------------------------------------------------------------
        # 2) Cuenta existente (activa) con el mismo email.
        # ---------------------------------------------------------------------
        existing = self._users.get_user_by_email(email)
        if existing is not None:
            if existing.is_verified:
                return UserResult(
                    error=conflict(
                        EMAIL_ALREADY_REGISTERED_AND_VERIFIED,
                        "This email is already registered and verified.",
                    )
                )
            if existing.role == UserRole.INVITADO:
                return self._already_registered()

            user = self._users.update_user(
                replace(
                    existing,
                    password_hash=password_hash,
                    role=input_data.role,
                    verification_code=code,
                    verification_attempts=self._attempts,
                )
            )
            if user is None:
                return self._already_registered()
            logger.info("Verification code reissued. user_id=%s", user.id)
        else:
            # -----------------------------------------------------------------
            # 3) Alta nueva (índice parcial de email como respaldo).
            # -----------------------------------------------------------------
            try:
                user = self._users.create_user(
                    User(
                        id=uuid4(),
                        email=email,
                        password_hash=password_hash,
                        role=input_data.role,
                        status=False,
                        verification_code=code,
                        verification_attempts=self._attempts,
                    )
                )
            except DuplicateKeyError:
                return self._already_registered()
            logger.info("User registered. user_id=%s", user.id)

        # ---------------------------------------------------------------------
        # 4) Entregar el código (log + notificador).
        # ---------------------------------------------------------------------
        logger.info(
            "Verification code issued. email=%s verification_code=%s", email, code
        )
        notify_best_effort(
            self._notifier,
            recipient=email,
            subject="Verification code",
            body=f"Your verification code is {code}.",
        )
        return UserResult(user=user)

    @staticmethod
    def _already_registered() -> UserResult:
        return UserResult(
            error=conflict(EMAIL_ALREADY_REGISTERED, "This email is already registered.")
        )
