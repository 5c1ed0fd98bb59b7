"""
===============================================================================
USE CASES: Invite User / Accept Invitation
===============================================================================

Business Goal:
    Un usuario invita a otra persona por email; la cuenta invitada
    (role=invitado) se activa canjeando el token, sin código de verificación.

-------------------------------------------------------------------------------
CRC CARD
-------------------------------------------------------------------------------
Classes:
    InviteUserUseCase, AcceptInvitationUseCase

Responsibilities:
    - Invitar: email ya usado por una cuenta activa => CONFLICT
      EMAIL_ALREADY_REGISTERED. Si no, crear invitado (status=false,
      invited_by, token hex de 40 caracteres válido `invitation_ttl_days`).
      El link se loguea y se notifica (best-effort).
    - Aceptar: token mal formado, inexistente o vencido => BAD_REQUEST
      INVALID_OR_EXPIRED_TOKEN. Éxito => password nueva, status=true,
      nombre/apellidos opcionales y token consumido.

Notes:
    - El invitado no hereda la empresa del invitante (el CIF de empresa es
      único entre cuentas activas).
    - La password inicial es el hash de un secreto aleatorio que nadie conoce.
===============================================================================
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import datetime, timedelta
from typing import Callable, Optional
from uuid import uuid4

from ....crosscutting.exceptions import DuplicateKeyError
from ....domain.entities import User, UserRole
from ....domain.repositories import UserRepository
from ....domain.rules import HEX_TOKEN_PATTERN, MIN_PASSWORD_LENGTH, normalize_email
from ....domain.services import NotifierPort
from ....identity.passwords import hash_password
from ....identity.tokens import generate_hex_token, utcnow
from ..results import bad_request, conflict, not_found, validation
from .notifications import notify_best_effort
from .user_results import (
    EMAIL_ALREADY_REGISTERED,
    INVALID_OR_EXPIRED_TOKEN,
    PASSWORD_TOO_SHORT,
    USER_NOT_FOUND,
    UserResult,
)

logger = logging.getLogger(__name__)


class InviteUserUseCase:
    def __init__(
        self,
        user_repository: UserRepository,
        notifier: NotifierPort | None = None,
        *,
        invitation_ttl_days: int = 7,
        public_base_url: str = "",
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._users = user_repository
        self._notifier = notifier
        self._ttl = timedelta(days=invitation_ttl_days)
        self._base_url = public_base_url.rstrip("/")
        self._clock = clock

    def execute(self, inviter: User, email: str) -> UserResult:
        email = normalize_email(email)
        if not email:
            return UserResult(error=validation("EMAIL_REQUIRED"))
        if self._users.get_user_by_email(email) is not None:
            return self._already_registered()

        token = generate_hex_token()
        try:
            guest = self._users.create_user(
                User(
                    id=uuid4(),
                    email=email,
                    password_hash=hash_password(generate_hex_token()),
                    role=UserRole.INVITADO,
                    status=False,
                    invitation_token=token,
                    invitation_expires_at=self._clock() + self._ttl,
                    invited_by_user_id=inviter.id,
                )
            )
        except DuplicateKeyError:
            return self._already_registered()

        link = f"{self._base_url}/accept-invitation?token={token}"
        logger.info(
            "User invited. inviter_id=%s guest_id=%s invitation_link=%s",
            inviter.id,
            guest.id,
            link,
        )
        notify_best_effort(
            self._notifier,
            recipient=email,
            subject="You have been invited",
            body=f"{inviter.email} invited you. Accept the invitation here: {link}",
        )
        return UserResult(user=guest)

    @staticmethod
    def _already_registered() -> UserResult:
        return UserResult(
            error=conflict(EMAIL_ALREADY_REGISTERED, "This email is already registered.")
        )


@dataclass(frozen=True)
class AcceptInvitationInput:
    token: str
    password: str
    name: Optional[str] = None
    surnames: Optional[str] = None


class AcceptInvitationUseCase:
    def __init__(
        self,
        user_repository: UserRepository,
        *,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._users = user_repository
        self._clock = clock

    def execute(self, input_data: AcceptInvitationInput) -> UserResult:
        if len(input_data.password or "") < MIN_PASSWORD_LENGTH:
            return UserResult(error=validation(PASSWORD_TOO_SHORT))

        token = (input_data.token or "").strip()
        if not HEX_TOKEN_PATTERN.match(token):
            return self._invalid_token()

        guest = self._users.get_user_by_invitation_token(token)
        if guest is None:
            return self._invalid_token()
        expires_at = guest.invitation_expires_at
        if expires_at is None or expires_at <= self._clock():
            return self._invalid_token()

        activated = self._users.update_user(
            replace(
                guest,
                password_hash=hash_password(input_data.password),
                status=True,
                verification_code=None,
                name=input_data.name.strip() if input_data.name else guest.name,
                surnames=input_data.surnames.strip() if input_data.surnames else guest.surnames,
                invitation_token=None,
                invitation_expires_at=None,
            )
        )
        if activated is None:
            return UserResult(error=not_found("User", USER_NOT_FOUND))
        logger.info("Invitation accepted. user_id=%s", activated.id)
        return UserResult(user=activated)

    @staticmethod
    def _invalid_token() -> UserResult:
        return UserResult(
            error=bad_request(INVALID_OR_EXPIRED_TOKEN, "The token is invalid or expired.")
        )
