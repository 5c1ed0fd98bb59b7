"""
===============================================================================
USE CASES: Forgot / Reset Password
===============================================================================

Business Rules:
    R1) forgot-password responde siempre lo mismo (no revela si el email
        existe).
    R2) Cuenta activa => token hex de 40 caracteres válido
        `reset_token_ttl_minutes`; el link se loguea y se notifica
        (best-effort).
    R3) reset-password con token inexistente, mal formado o vencido =>
        BAD_REQUEST INVALID_OR_EXPIRED_TOKEN. Éxito => nueva password y el
        token se consume.
===============================================================================
"""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime, timedelta
from typing import Callable

from ....domain.repositories import UserRepository
from ....domain.rules import HEX_TOKEN_PATTERN, MIN_PASSWORD_LENGTH, normalize_email
from ....domain.services import NotifierPort
from ....identity.passwords import hash_password
from ....identity.tokens import generate_hex_token, utcnow
from ..results import AcknowledgedResult, bad_request, validation
from .notifications import notify_best_effort
from .user_results import INVALID_OR_EXPIRED_TOKEN, PASSWORD_TOO_SHORT

logger = logging.getLogger(__name__)

RESET_REQUESTED_MESSAGE = "If the email exists, a reset link has been sent."
PASSWORD_RESET_MESSAGE = "PASSWORD_UPDATED"


class ForgotPasswordUseCase:
    def __init__(
        self,
        user_repository: UserRepository,
        notifier: NotifierPort | None = None,
        *,
        token_ttl_minutes: int = 60,
        public_base_url: str = "",
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._users = user_repository
        self._notifier = notifier
        self._ttl = timedelta(minutes=token_ttl_minutes)
        self._base_url = public_base_url.rstrip("/")
        self._clock = clock

    def execute(self, email: str) -> AcknowledgedResult:
        user = self._users.get_user_by_email(normalize_email(email))
        if user is None:
            return AcknowledgedResult(acknowledged=True, message=RESET_REQUESTED_MESSAGE)

        token = generate_hex_token()
        self._users.update_user(
            replace(
                user,
                reset_token=token,
                reset_token_expires_at=self._clock() + self._ttl,
            )
        )

        link = f"{self._base_url}/reset-password?token={token}"
        logger.info("Password reset requested. user_id=%s reset_link=%s", user.id, link)
        notify_best_effort(
            self._notifier,
            recipient=user.email,
            subject="Password reset",
            body=f"Use this link to choose a new password: {link}",
        )
        return AcknowledgedResult(acknowledged=True, message=RESET_REQUESTED_MESSAGE)


class ResetPasswordUseCase:
    def __init__(
        self,
        user_repository: UserRepository,
        *,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._users = user_repository
        self._clock = clock

    def execute(self, token: str, password: str) -> AcknowledgedResult:
        if len(password or "") < MIN_PASSWORD_LENGTH:
            return AcknowledgedResult(acknowledged=False, error=validation(PASSWORD_TOO_SHORT))

        token = (token or "").strip()
        if not HEX_TOKEN_PATTERN.match(token):
            return self._invalid_token()

        user = self._users.get_user_by_reset_token(token)
        if user is None:
            return self._invalid_token()
        expires_at = user.reset_token_expires_at
        if expires_at is None or expires_at <= self._clock():
            return self._invalid_token()

        self._users.update_user(
            replace(
                user,
                password_hash=hash_password(password),
                reset_token=None,
                reset_token_expires_at=None,
            )
        )
        logger.info("Password reset completed. user_id=%s", user.id)
        return AcknowledgedResult(acknowledged=True, message=PASSWORD_RESET_MESSAGE)

    @staticmethod
    def _invalid_token() -> AcknowledgedResult:
        return AcknowledgedResult(
            acknowledged=False,
            error=bad_request(INVALID_OR_EXPIRED_TOKEN, "The token is invalid or expired."),
        )
