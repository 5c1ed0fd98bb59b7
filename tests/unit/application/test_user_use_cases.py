"""
Name: User Use Case Tests

Responsibilities:
  - Validate register -> verify -> login flow and its error matrix
  - Validate profile updates (personal data, company CIF uniqueness, logo)
  - Validate password reset and guest invitation tokens
  - Validate account archive / hard delete
"""

from dataclasses import replace
from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest
from argon2 import PasswordHasher

from albaranes.application.usecases import (
    AcceptInvitationInput,
    AcceptInvitationUseCase,
    DeleteAccountUseCase,
    ForgotPasswordUseCase,
    InviteUserUseCase,
    LoginUserUseCase,
    RegisterUserInput,
    RegisterUserUseCase,
    ResetPasswordUseCase,
    UpdateCompanyUseCase,
    UpdateLogoUseCase,
    UpdatePersonalDataInput,
    UpdatePersonalDataUseCase,
    UploadedFile,
    UseCaseErrorCode,
    VerifyEmailUseCase,
)
from albaranes.crosscutting.exceptions import UpstreamError
from albaranes.domain.entities import Client, CompanyProfile, User, UserRole
from albaranes.identity.passwords import hash_password, verify_password
from albaranes.infrastructure.notifications import LoggingNotifier
from albaranes.infrastructure.storage import InMemoryObjectStorage

pytestmark = pytest.mark.unit

PASSWORD = "supersecret"


class FailingNotifier:
    def send(self, *, recipient, subject, body, sender=None):
        raise UpstreamError("smtp down")


def _register(users, email="new@example.com", role=UserRole.USER, notifier=None):
    return RegisterUserUseCase(users, notifier).execute(
        RegisterUserInput(email=email, password=PASSWORD, role=role)
    )


# ============================================================================
# Register / verify / login
# ============================================================================


def test_register_creates_unverified_user_and_sends_code(users):
    notifier = LoggingNotifier()

    result = _register(users, email=" New@Example.com ", notifier=notifier)

    user = result.user
    assert result.error is None
    assert user.email == "new@example.com"
    assert user.status is False
    assert len(user.verification_code) == 6
    assert user.verification_attempts == 3
    assert verify_password(PASSWORD, user.password_hash)
    assert user.verification_code in notifier.sent[0].body


def test_register_rejects_short_password_and_guest_role(users):
    short = RegisterUserUseCase(users).execute(
        RegisterUserInput(email="a@example.com", password="short")
    )
    guest = _register(users, role=UserRole.INVITADO)

    assert short.error.reason == "PASSWORD_MIN_8_CHARS"
    assert guest.error.reason == "ROLE_NOT_ALLOWED"


def test_register_again_while_unverified_reissues_code(users):
    first = _register(users).user

    again = _register(users, role=UserRole.AUTONOMO)

    assert again.error is None
    assert again.user.id == first.id
    assert again.user.role == UserRole.AUTONOMO


def test_register_verified_email_conflicts(users, owner):
    result = _register(users, email=owner.email)

    assert result.error.code == UseCaseErrorCode.CONFLICT
    assert result.error.reason == "EMAIL_ALREADY_REGISTERED_AND_VERIFIED"


def test_notification_failure_does_not_fail_registration(users):
    result = _register(users, notifier=FailingNotifier())

    assert result.error is None


def test_verify_email_success_and_idempotence(users):
    user = _register(users).user
    use_case = VerifyEmailUseCase(users)

    verified = use_case.execute(user.id, user.verification_code)
    again = use_case.execute(user.id, "000000")

    assert verified.message == "EMAIL_VERIFIED"
    assert verified.user.status is True
    assert verified.user.verification_code is None
    assert again.acknowledged and again.message == "EMAIL_ALREADY_VERIFIED"


def test_verify_email_wrong_code_consumes_attempts(users):
    user = _register(users).user
    wrong = "000000" if user.verification_code != "000000" else "111111"
    use_case = VerifyEmailUseCase(users)

    for _ in range(3):
        result = use_case.execute(user.id, wrong)
        assert result.error.reason == "INVALID_VERIFICATION_CODE"

    locked = use_case.execute(user.id, user.verification_code)
    assert locked.error.code == UseCaseErrorCode.FORBIDDEN
    assert users.get_user(user.id).verification_attempts == 0


def test_login_requires_valid_credentials_and_verification(users):
    user = _register(users).user
    login = LoginUserUseCase(users)

    assert login.execute(user.email, "wrong-password").error.reason == "INVALID_CREDENTIALS"
    assert login.execute("nobody@example.com", PASSWORD).error.reason == "INVALID_CREDENTIALS"
    assert login.execute(user.email, PASSWORD).error.reason == "USER_NOT_VALIDATED"

    VerifyEmailUseCase(users).execute(user.id, user.verification_code)
    ok = login.execute(user.email.upper(), PASSWORD)
    assert ok.error is None and ok.user.id == user.id


def test_login_upgrades_outdated_password_hash(users):
    user = _register(users).user
    VerifyEmailUseCase(users).execute(user.id, user.verification_code)
    weak_hash = PasswordHasher(time_cost=1, memory_cost=8, parallelism=1).hash(PASSWORD)
    users.update_user(replace(users.get_user(user.id), password_hash=weak_hash))

    LoginUserUseCase(users).execute(user.email, PASSWORD)

    stored = users.get_user(user.id).password_hash
    assert stored != weak_hash
    assert verify_password(PASSWORD, stored)


# ============================================================================
# Profile
# ============================================================================


def test_update_personal_data_validates_nif(users, owner):
    use_case = UpdatePersonalDataUseCase(users)

    bad = use_case.execute(owner, UpdatePersonalDataInput(name="Ana", surnames="Gil", nif="123"))
    ok = use_case.execute(
        owner, UpdatePersonalDataInput(name=" Ana ", surnames="Gil", nif="12345678z")
    )

    assert bad.error.reason == "INVALID_NIF"
    assert ok.user.name == "Ana"
    assert ok.user.nif == "12345678Z"


def test_company_cif_unique_across_active_accounts(users, owner):
    other = users.create_user(
        User(id=uuid4(), email="other@example.com", password_hash="h", status=True)
    )
    use_case = UpdateCompanyUseCase(users)

    first = use_case.execute(owner, CompanyProfile(name="Obras SL", cif="b111"))
    clash = use_case.execute(other, CompanyProfile(name="Otra SL", cif="B111"))
    own_again = use_case.execute(first.user, CompanyProfile(city="Madrid"))

    assert first.user.company.cif == "B111"
    assert clash.error.code == UseCaseErrorCode.CONFLICT
    assert clash.error.reason == "COMPANY_CIF_ALREADY_EXISTS"
    assert own_again.error is None
    assert own_again.user.company.city == "Madrid"


def test_company_requires_name_and_cif(users, owner):
    result = UpdateCompanyUseCase(users).execute(owner, CompanyProfile(city="Madrid"))

    assert result.error.reason == "COMPANY_NAME_AND_CIF_REQUIRED"


def test_autonomo_company_uses_personal_data(users):
    autonomo = users.create_user(
        User(
            id=uuid4(),
            email="auto@example.com",
            password_hash="h",
            role=UserRole.AUTONOMO,
            status=True,
            name="Luis",
            nif="87654321X",
        )
    )

    result = UpdateCompanyUseCase(users).execute(
        autonomo, CompanyProfile(name="Ignored", cif="B000", street="Mayor", number="1")
    )

    assert result.user.company.name == "Luis"
    assert result.user.company.cif == "87654321X"
    assert result.user.company.street == "Mayor"


def test_update_logo(users, owner):
    storage = InMemoryObjectStorage()
    use_case = UpdateLogoUseCase(users, storage)

    missing = use_case.execute(owner, None)
    ok = use_case.execute(
        owner, UploadedFile(content=b"logo", filename="logo.png", content_type="image/png")
    )

    assert missing.error.reason == "LOGO_IMAGE_FILE_REQUIRED"
    assert storage.get(ok.user.logo_url) == b"logo"


# ============================================================================
# Account deletion
# ============================================================================


def test_soft_delete_archives_and_frees_email(users, clients, owner):
    result = DeleteAccountUseCase(users, clients).execute(owner)

    assert result.deleted and not result.hard
    assert users.get_user(owner.id) is None
    assert _register(users, email=owner.email).error is None


def test_hard_delete_blocked_by_clients(users, clients, owner):
    clients.create_client(Client(id=uuid4(), owner_user_id=owner.id, name="C", cif="X1"))

    result = DeleteAccountUseCase(users, clients).execute(owner, soft=False)

    assert result.error.reason == "USER_HAS_DEPENDENT_RECORDS"


def test_hard_delete_without_clients(users, clients, owner):
    result = DeleteAccountUseCase(users, clients).execute(owner, soft=False)

    assert result.deleted and result.hard


# ============================================================================
# Password reset
# ============================================================================


def test_forgot_password_is_silent_for_unknown_email(users):
    notifier = LoggingNotifier()

    result = ForgotPasswordUseCase(users, notifier).execute("ghost@example.com")

    assert result.acknowledged
    assert notifier.sent == []


def test_reset_password_flow(users, owner):
    notifier = LoggingNotifier()
    ForgotPasswordUseCase(
        users, notifier, public_base_url="https://app.example/"
    ).execute(owner.email)
    token = users.get_user(owner.id).reset_token
    assert f"https://app.example/reset-password?token={token}" in notifier.sent[0].body

    use_case = ResetPasswordUseCase(users)
    assert use_case.execute(token, "short").error.reason == "PASSWORD_MIN_8_CHARS"

    result = use_case.execute(token, "brand-new-pass")
    reused = use_case.execute(token, "brand-new-pass")

    stored = users.get_user(owner.id)
    assert result.acknowledged
    assert verify_password("brand-new-pass", stored.password_hash)
    assert stored.reset_token is None
    assert reused.error.reason == "INVALID_OR_EXPIRED_TOKEN"


def test_expired_reset_token_is_rejected(users, owner):
    token = "a" * 40
    users.update_user(
        replace(
            owner,
            reset_token=token,
            reset_token_expires_at=datetime.now(timezone.utc) - timedelta(minutes=1),
        )
    )

    result = ResetPasswordUseCase(users).execute(token, "brand-new-pass")

    assert result.error.code == UseCaseErrorCode.BAD_REQUEST


def test_malformed_reset_token_is_rejected(users):
    result = ResetPasswordUseCase(users).execute("not-a-token", "brand-new-pass")

    assert result.error.reason == "INVALID_OR_EXPIRED_TOKEN"


# ============================================================================
# Invitations
# ============================================================================


def test_invite_and_accept(users, owner):
    notifier = LoggingNotifier()
    invited = InviteUserUseCase(users, notifier).execute(owner, "Guest@Example.com")

    guest = invited.user
    assert guest.role == UserRole.INVITADO
    assert guest.status is False
    assert guest.invited_by_user_id == owner.id
    assert LoginUserUseCase(users).execute(guest.email, PASSWORD).error is not None

    accepted = AcceptInvitationUseCase(users).execute(
        AcceptInvitationInput(token=guest.invitation_token, password=PASSWORD, name="Eva")
    )

    assert accepted.user.status is True
    assert accepted.user.name == "Eva"
    assert accepted.user.invitation_token is None
    assert LoginUserUseCase(users).execute("guest@example.com", PASSWORD).error is None


def test_invite_existing_email_conflicts(users, owner):
    result = InviteUserUseCase(users).execute(owner, owner.email)

    assert result.error.reason == "EMAIL_ALREADY_REGISTERED"


def test_pending_guest_cannot_self_register(users, owner):
    InviteUserUseCase(users).execute(owner, "guest@example.com")

    result = _register(users, email="guest@example.com")

    assert result.error.reason == "EMAIL_ALREADY_REGISTERED"


def test_expired_invitation_is_rejected(users, owner):
    token = "b" * 40
    users.create_user(
        User(
            id=uuid4(),
            email="late@example.com",
            password_hash=hash_password("irrelevant"),
            role=UserRole.INVITADO,
            invitation_token=token,
            invitation_expires_at=datetime.now(timezone.utc) - timedelta(days=1),
        )
    )

    result = AcceptInvitationUseCase(users).execute(
        AcceptInvitationInput(token=token, password=PASSWORD)
    )

    assert result.error.reason == "INVALID_OR_EXPIRED_TOKEN"

