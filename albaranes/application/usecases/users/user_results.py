"""Modelos de resultado de los casos de uso de usuarios."""

from __future__ import annotations

from dataclasses import dataclass

from ....domain.entities import User
from ..results import UseCaseError

USER_NOT_FOUND = "USER_NOT_FOUND"
EMAIL_ALREADY_REGISTERED = "EMAIL_ALREADY_REGISTERED"
EMAIL_ALREADY_REGISTERED_AND_VERIFIED = "EMAIL_ALREADY_REGISTERED_AND_VERIFIED"
EMAIL_ALREADY_VERIFIED = "EMAIL_ALREADY_VERIFIED"
EMAIL_VERIFIED = "EMAIL_VERIFIED"
INVALID_VERIFICATION_CODE = "INVALID_VERIFICATION_CODE"
VERIFICATION_ATTEMPTS_EXHAUSTED = "VERIFICATION_ATTEMPTS_EXHAUSTED"
INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
USER_NOT_VALIDATED = "USER_NOT_VALIDATED"
COMPANY_CIF_ALREADY_EXISTS = "COMPANY_CIF_ALREADY_EXISTS"
USER_HAS_DEPENDENT_RECORDS = "USER_HAS_DEPENDENT_RECORDS"
INVALID_OR_EXPIRED_TOKEN = "INVALID_OR_EXPIRED_TOKEN"
PASSWORD_TOO_SHORT = "PASSWORD_MIN_8_CHARS"


@dataclass
class UserResult:
    user: User | None = None
    error: UseCaseError | None = None


@dataclass
class VerificationResult:
    acknowledged: bool = False
    message: str | None = None
    user: User | None = None
    error: UseCaseError | None = None
