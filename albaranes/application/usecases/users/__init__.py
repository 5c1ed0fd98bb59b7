from .delete_account import DeleteAccountUseCase
from .invitations import AcceptInvitationInput, AcceptInvitationUseCase, InviteUserUseCase
from .login_user import LoginUserUseCase
from .password_reset import ForgotPasswordUseCase, ResetPasswordUseCase
from .register_user import RegisterUserInput, RegisterUserUseCase
from .update_profile import (
    UpdateCompanyUseCase,
    UpdateLogoUseCase,
    UpdatePersonalDataInput,
    UpdatePersonalDataUseCase,
)
from .user_results import UserResult, VerificationResult
from .verify_email import VerifyEmailUseCase

__all__ = [
    "AcceptInvitationInput",
    "AcceptInvitationUseCase",
    "DeleteAccountUseCase",
    "ForgotPasswordUseCase",
    "InviteUserUseCase",
    "LoginUserUseCase",
    "RegisterUserInput",
    "RegisterUserUseCase",
    "ResetPasswordUseCase",
    "UpdateCompanyUseCase",
    "UpdateLogoUseCase",
    "UpdatePersonalDataInput",
    "UpdatePersonalDataUseCase",
    "UserResult",
    "VerificationResult",
    "VerifyEmailUseCase",
]
