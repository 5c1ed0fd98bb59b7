"""
===============================================================================
TARJETA CRC — albaranes/interfaces/api/http/routers/users.py
===============================================================================

Class/Module:
    User Router (/user)

Responsibilities:
    - Registro, login y verificación por código.
    - Perfil: datos personales, empresa, logo, /me y baja de cuenta.
    - Reset de password e invitaciones (tokens de un solo uso).
    - Emitir el JWT (y la cookie httpOnly) en el borde HTTP.

Collaborators:
    - albaranes.application.usecases.users
    - albaranes.identity.auth_users.require_user
    - albaranes.identity.tokens.create_access_token
    - albaranes.container (factories DI)
    - schemas.users (DTOs Pydantic)
===============================================================================
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, File, Query, Response, UploadFile
from starlette.concurrency import run_in_threadpool

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
    VerifyEmailUseCase,
)
from albaranes.container import (
    get_accept_invitation_use_case,
    get_delete_account_use_case,
    get_forgot_password_use_case,
    get_invite_user_use_case,
    get_login_user_use_case,
    get_register_user_use_case,
    get_reset_password_use_case,
    get_update_company_use_case,
    get_update_logo_use_case,
    get_update_personal_data_use_case,
    get_verify_email_use_case,
)
from albaranes.crosscutting.error_responses import internal_error
from albaranes.domain.entities import User
from albaranes.identity.auth_users import DEFAULT_ACCESS_TOKEN_COOKIE, require_user
from albaranes.identity.tokens import create_access_token, get_auth_settings

from ..dependencies import read_optional_upload
from ..error_mapping import raise_use_case_error
from ..schemas.common import AcknowledgedRes, CompanyDTO, DeletionRes
from ..schemas.users import (
    AcceptInvitationReq,
    AuthRes,
    ForgotPasswordReq,
    InviteReq,
    LoginReq,
    PersonalDataReq,
    RegisterReq,
    ResetPasswordReq,
    UserRes,
    VerificationReq,
    VerificationRes,
)

router = APIRouter(prefix="/user", tags=["users"])


# =============================================================================
# Helpers internos
# =============================================================================


def _to_user_res(user: User) -> UserRes:
    return UserRes(
        id=user.id,
        email=user.email,
        role=user.role,
        status=user.status,
        name=user.name,
        surnames=user.surnames,
        nif=user.nif,
        company=CompanyDTO.from_entity(user.company),
        logo_url=user.logo_url,
        invited_by_user_id=user.invited_by_user_id,
        created_at=user.created_at,
        updated_at=user.updated_at,
    )


def _set_auth_cookie(response: Response, token: str, expires_in: int) -> None:
    """Setea cookie httpOnly de acceso."""
    settings = get_auth_settings()
    cookie_name = settings.jwt_cookie_name or DEFAULT_ACCESS_TOKEN_COOKIE
    response.set_cookie(
        key=cookie_name,
        value=token,
        httponly=True,
        secure=settings.jwt_cookie_secure,
        samesite="lax",
        max_age=expires_in,
        path="/",
    )


def _auth_response(response: Response, user: User | None) -> AuthRes:
    if user is None:
        raise internal_error()
    token, expires_in = create_access_token(user)
    _set_auth_cookie(response, token, expires_in)
    return AuthRes(access_token=token, expires_in=expires_in, user=_to_user_res(user))


# =============================================================================
# Endpoints públicos
# =============================================================================


@router.post("/register", response_model=AuthRes, status_code=201)
def register(
    req: RegisterReq,
    response: Response,
    use_case: RegisterUserUseCase = Depends(get_register_user_use_case),
):
    result = use_case.execute(
        RegisterUserInput(email=req.email, password=req.password, role=req.role)
    )
    if result.error is not None:
        raise_use_case_error(result.error)
    return _auth_response(response, result.user)


@router.post("/login", response_model=AuthRes)
def login(
    req: LoginReq,
    response: Response,
    use_case: LoginUserUseCase = Depends(get_login_user_use_case),
):
    result = use_case.execute(req.email, req.password)
    if result.error is not None:
        raise_use_case_error(result.error)
    return _auth_response(response, result.user)


@router.post("/forgot-password", response_model=AcknowledgedRes)
def forgot_password(
    req: ForgotPasswordReq,
    use_case: ForgotPasswordUseCase = Depends(get_forgot_password_use_case),
):
    result = use_case.execute(req.email)
    return AcknowledgedRes(acknowledged=result.acknowledged, message=result.message)


@router.post("/reset-password", response_model=AcknowledgedRes)
def reset_password(
    req: ResetPasswordReq,
    use_case: ResetPasswordUseCase = Depends(get_reset_password_use_case),
):
    result = use_case.execute(req.token, req.password)
    if result.error is not None:
        raise_use_case_error(result.error)
    return AcknowledgedRes(acknowledged=result.acknowledged, message=result.message)


@router.post("/accept-invitation", response_model=AuthRes)
def accept_invitation(
    req: AcceptInvitationReq,
    response: Response,
    use_case: AcceptInvitationUseCase = Depends(get_accept_invitation_use_case),
):
    result = use_case.execute(
        AcceptInvitationInput(
            token=req.token,
            password=req.password,
            name=req.name,
            surnames=req.surnames,
        )
    )
    if result.error is not None:
        raise_use_case_error(result.error)
    return _auth_response(response, result.user)


# =============================================================================
# Endpoints autenticados
# =============================================================================


@router.put("/validation", response_model=VerificationRes)
def verify_email(
    req: VerificationReq,
    user: User = Depends(require_user()),
    use_case: VerifyEmailUseCase = Depends(get_verify_email_use_case),
):
    result = use_case.execute(user.id, req.code)
    if result.error is not None:
        raise_use_case_error(result.error, identifier=user.id)
    return VerificationRes(acknowledged=result.acknowledged, message=result.message)


@router.put("/personal", response_model=UserRes)
def update_personal_data(
    req: PersonalDataReq,
    user: User = Depends(require_user()),
    use_case: UpdatePersonalDataUseCase = Depends(get_update_personal_data_use_case),
):
    result = use_case.execute(
        user, UpdatePersonalDataInput(name=req.name, surnames=req.surnames, nif=req.nif)
    )
    if result.error is not None:
        raise_use_case_error(result.error, identifier=user.id)
    return _to_user_res(result.user)


@router.patch("/company", response_model=UserRes)
def update_company(
    req: CompanyDTO,
    user: User = Depends(require_user()),
    use_case: UpdateCompanyUseCase = Depends(get_update_company_use_case),
):
    result = use_case.execute(user, req.to_entity())
    if result.error is not None:
        raise_use_case_error(result.error, identifier=user.id)
    return _to_user_res(result.user)


@router.patch("/logo", response_model=UserRes)
async def update_logo(
    logo: UploadFile | None = File(None),
    user: User = Depends(require_user()),
    use_case: UpdateLogoUseCase = Depends(get_update_logo_use_case),
):
    uploaded = await read_optional_upload(logo)
    result = await run_in_threadpool(use_case.execute, user, uploaded)
    if result.error is not None:
        raise_use_case_error(result.error, identifier=user.id)
    return _to_user_res(result.user)


@router.get("/me", response_model=UserRes)
def get_me(user: User = Depends(require_user())):
    return _to_user_res(user)


@router.delete("/me", response_model=DeletionRes)
def delete_me(
    soft: bool = Query(True),
    user: User = Depends(require_user()),
    use_case: DeleteAccountUseCase = Depends(get_delete_account_use_case),
):
    result = use_case.execute(user, soft=soft)
    if result.error is not None:
        raise_use_case_error(result.error, identifier=user.id)
    return DeletionRes(deleted=result.deleted, hard=result.hard)


@router.post("/invite", response_model=UserRes, status_code=201)
def invite(
    req: InviteReq,
    user: User = Depends(require_user()),
    use_case: InviteUserUseCase = Depends(get_invite_user_use_case),
):
    result = use_case.execute(user, req.email)
    if result.error is not None:
        raise_use_case_error(result.error)
    return _to_user_res(result.user)
