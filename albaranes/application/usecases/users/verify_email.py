"""
===============================================================================
USE CASE: Verify Email
===============================================================================

Business Rules:
    R1) Ya verificado => acknowledged + EMAIL_ALREADY_VERIFIED, sin efectos.
    R2) Sin intentos restantes => FORBIDDEN VERIFICATION_ATTEMPTS_EXHAUSTED.
    R3) Código incorrecto => consume un intento y VALIDATION_ERROR
        INVALID_VERIFICATION_CODE.
    R4) Código correcto => status=true y el código se borra.
===============================================================================
"""

from __future__ import annotations

import hmac
import logging
from dataclasses import replace
from uuid import UUID

from ....domain.repositories import UserRepository
from ..results import forbidden, not_found, validation
from .user_results import (
    EMAIL_ALREADY_VERIFIED,
    EMAIL_VERIFIED,
    INVALID_VERIFICATION_CODE,
    USER_NOT_FOUND,
    VERIFICATION_ATTEMPTS_EXHAUSTED,
    VerificationResult,
)

logger = logging.getLogger(__name__)


class VerifyEmailUseCase:
    def __init__(self, user_repository: UserRepository) -> None:
        self._users = user_repository

    def execute(self, user_id: UUID, code: str) -> VerificationResult:
        user = self._users.get_user(user_id)
        if user is None:
            return VerificationResult(error=not_found("User", USER_NOT_FOUND))

        if user.is_verified:
            return VerificationResult(
                acknowledged=True, message=EMAIL_ALREADY_VERIFIED, user=user
            )

        if user.verification_attempts <= 0:
            return VerificationResult(
                error=forbidden(
                    VERIFICATION_ATTEMPTS_EXHAUSTED,
                    "No verification attempts left.",
                )
            )

        expected = user.verification_code or ""
        if not expected or not hmac.compare_digest(expected, (code or "").strip()):
            remaining = max(user.verification_attempts - 1, 0)
            self._users.update_user(replace(user, verification_attempts=remaining))
            logger.info(
                "Wrong verification code. user_id=%s remaining=%s", user.id, remaining
            )
            return VerificationResult(error=validation(INVALID_VERIFICATION_CODE))

        verified = self._users.update_user(
            replace(user, status=True, verification_code=None)
        )
        if verified is None:
            return VerificationResult(error=not_found("User", USER_NOT_FOUND))
        logger.info("Email verified. user_id=%s", user.id)
        return VerificationResult(acknowledged=True, message=EMAIL_VERIFIED, user=verified)
