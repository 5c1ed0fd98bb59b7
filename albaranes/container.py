"""
===============================================================================
TARJETA CRC — albaranes/container.py (Composition Root / DI manual)
===============================================================================

Responsabilidades:
  - Componer dependencias (repositorios, storage, renderer, notificador).
  - Exponer factories para FastAPI (Depends).
  - Mantener singletons con caching (lru_cache) para recursos compartidos.
  - Centralizar decisiones runtime basadas en Settings (config).

Colaboradores:
  - albaranes.crosscutting.config.get_settings
  - albaranes.domain.repositories.* / albaranes.domain.services.* (puertos)
  - albaranes.infrastructure.* (implementaciones)
  - albaranes.application.usecases.* (casos de uso)

Notas:
  - Este archivo NO contiene lógica de negocio.
  - Este archivo NO depende de FastAPI (solo expone factories).
  - En test (APP_ENV=test|testing|ci) todos los repositorios son in-memory.
===============================================================================
"""

from __future__ import annotations

from functools import lru_cache

from .application.usecases import (
    AcceptInvitationUseCase,
    CreateClientUseCase,
    CreateDeliveryNoteUseCase,
    CreateProjectUseCase,
    DeleteAccountUseCase,
    DeleteClientUseCase,
    DeleteDeliveryNoteUseCase,
    DeleteProjectUseCase,
    ForgotPasswordUseCase,
    GetClientUseCase,
    GetDeliveryNoteUseCase,
    GetProjectUseCase,
    InviteUserUseCase,
    ListClientsUseCase,
    ListDeliveryNotesUseCase,
    ListProjectsUseCase,
    LoginUserUseCase,
    RegisterUserUseCase,
    RenderDeliveryNotePdfUseCase,
    ResetPasswordUseCase,
    RestoreClientUseCase,
    RestoreProjectUseCase,
    SendMailUseCase,
    SignDeliveryNoteUseCase,
    UpdateClientUseCase,
    UpdateCompanyUseCase,
    UpdateLogoUseCase,
    UpdatePersonalDataUseCase,
    UpdateProjectUseCase,
    VerifyEmailUseCase,
)
from .crosscutting.config import get_settings
from .domain.repositories import (
    ClientRepository,
    DeliveryNoteRepository,
    ProjectRepository,
    UserRepository,
)
from .domain.services import DeliveryNoteRendererPort, NotifierPort, ObjectStoragePort
from .infrastructure.notifications import LoggingNotifier, SmtpConfig, SmtpNotifier
from .infrastructure.pdf import ReportLabDeliveryNoteRenderer
from .infrastructure.repositories import (
    InMemoryClientRepository,
    InMemoryDeliveryNoteRepository,
    InMemoryProjectRepository,
    InMemoryUserRepository,
    PostgresClientRepository,
    PostgresDeliveryNoteRepository,
    PostgresProjectRepository,
    PostgresUserRepository,
)
from .infrastructure.storage import (
    InMemoryObjectStorage,
    PinataConfig,
    PinataObjectStorage,
    S3Config,
    S3ObjectStorage,
)

# =============================================================================
# Helpers internos
# =============================================================================


def _is_test_env() -> bool:
    """
    Determina si estamos en entorno de test.

    Regla:
      - app_env ∈ {"test", "testing", "ci"} => se favorecen in-memory adapters.
    """
    env = get_settings().app_env.strip().lower()
    return env in {"test", "testing", "ci"}


# =============================================================================
# Repositorios (singletons)
# =============================================================================


@lru_cache(maxsize=1)
def get_user_repository() -> UserRepository:
    """Repositorio de usuarios (in-memory en test; Postgres en runtime)."""
    if _is_test_env():
        return InMemoryUserRepository()
    return PostgresUserRepository()


@lru_cache(maxsize=1)
def get_client_repository() -> ClientRepository:
    """Repositorio de clientes (in-memory en test; Postgres en runtime)."""
    if _is_test_env():
        return InMemoryClientRepository()
    return PostgresClientRepository()


@lru_cache(maxsize=1)
def get_project_repository() -> ProjectRepository:
    """Repositorio de proyectos (in-memory en test; Postgres en runtime)."""
    if _is_test_env():
        return InMemoryProjectRepository()
    return PostgresProjectRepository()


@lru_cache(maxsize=1)
def get_delivery_note_repository() -> DeliveryNoteRepository:
    """Repositorio de albaranes (in-memory en test; Postgres en runtime)."""
    if _is_test_env():
        return InMemoryDeliveryNoteRepository()
    return PostgresDeliveryNoteRepository()


# =============================================================================
# Adapters externos (singletons)
# =============================================================================


@lru_cache(maxsize=1)
def get_object_storage() -> ObjectStoragePort:
    """
    Object storage para firmas, logos y PDFs.

    Regla:
      - STORAGE_BACKEND=pinata|s3 usa el proveedor remoto; memory (default y
        test) guarda los binarios en el proceso.
    """
    settings = get_settings()
    backend = settings.storage_backend

    if backend == "pinata":
        return PinataObjectStorage(
            PinataConfig(
                jwt=settings.pinata_jwt,
                api_url=settings.pinata_api_url,
                gateway_url=settings.pinata_gateway_url,
            )
        )
    if backend == "s3":
        return S3ObjectStorage(
            S3Config(
                bucket=settings.s3_bucket,
                access_key=settings.s3_access_key,
                secret_key=settings.s3_secret_key,
                region=settings.s3_region or None,
                endpoint_url=settings.s3_endpoint_url or None,
                public_base_url=settings.s3_public_base_url or None,
            )
        )
    return InMemoryObjectStorage()


@lru_cache(maxsize=1)
def get_notifier() -> NotifierPort:
    """Notificador de correo: SMTP si está configurado; si no, solo log."""
    settings = get_settings()
    if settings.notifier_backend == "smtp":
        return SmtpNotifier(
            SmtpConfig(
                host=settings.smtp_host,
                port=settings.smtp_port,
                user=settings.smtp_user or None,
                password=settings.smtp_password or None,
                use_tls=settings.smtp_use_tls,
                use_ssl=settings.smtp_use_ssl,
                default_sender=settings.mail_from,
            )
        )
    return LoggingNotifier(default_sender=settings.mail_from)


@lru_cache(maxsize=1)
def get_delivery_note_renderer() -> DeliveryNoteRendererPort:
    """Renderer PDF (ReportLab) con timeout de descarga de firma por Settings."""
    return ReportLabDeliveryNoteRenderer(
        timeout_seconds=get_settings().signature_fetch_timeout_seconds
    )


# =============================================================================
# Casos de uso: usuarios
# =============================================================================


def get_register_user_use_case() -> RegisterUserUseCase:
    return RegisterUserUseCase(
        user_repository=get_user_repository(),
        notifier=get_notifier(),
        verification_attempts=get_settings().verification_attempts,
    )


def get_verify_email_use_case() -> VerifyEmailUseCase:
    return VerifyEmailUseCase(user_repository=get_user_repository())


def get_login_user_use_case() -> LoginUserUseCase:
    return LoginUserUseCase(user_repository=get_user_repository())


def get_update_personal_data_use_case() -> UpdatePersonalDataUseCase:
    return UpdatePersonalDataUseCase(user_repository=get_user_repository())


def get_update_company_use_case() -> UpdateCompanyUseCase:
    return UpdateCompanyUseCase(user_repository=get_user_repository())


def get_update_logo_use_case() -> UpdateLogoUseCase:
    return UpdateLogoUseCase(
        user_repository=get_user_repository(), storage=get_object_storage()
    )


def get_delete_account_use_case() -> DeleteAccountUseCase:
    return DeleteAccountUseCase(
        user_repository=get_user_repository(),
        client_repository=get_client_repository(),
    )


def get_forgot_password_use_case() -> ForgotPasswordUseCase:
    settings = get_settings()
    return ForgotPasswordUseCase(
        user_repository=get_user_repository(),
        notifier=get_notifier(),
        token_ttl_minutes=settings.reset_token_ttl_minutes,
        public_base_url=settings.public_base_url,
    )


def get_reset_password_use_case() -> ResetPasswordUseCase:
    return ResetPasswordUseCase(user_repository=get_user_repository())


def get_invite_user_use_case() -> InviteUserUseCase:
    settings = get_settings()
    return InviteUserUseCase(
        user_repository=get_user_repository(),
        notifier=get_notifier(),
        invitation_ttl_days=settings.invitation_ttl_days,
        public_base_url=settings.public_base_url,
    )


def get_accept_invitation_use_case() -> AcceptInvitationUseCase:
    return AcceptInvitationUseCase(user_repository=get_user_repository())


# =============================================================================
# Casos de uso: clientes
# =============================================================================


def get_create_client_use_case() -> CreateClientUseCase:
    return CreateClientUseCase(client_repository=get_client_repository())


def get_list_clients_use_case() -> ListClientsUseCase:
    return ListClientsUseCase(client_repository=get_client_repository())


def get_get_client_use_case() -> GetClientUseCase:
    return GetClientUseCase(client_repository=get_client_repository())


def get_update_client_use_case() -> UpdateClientUseCase:
    return UpdateClientUseCase(client_repository=get_client_repository())


def get_delete_client_use_case() -> DeleteClientUseCase:
    return DeleteClientUseCase(
        client_repository=get_client_repository(),
        project_repository=get_project_repository(),
    )


def get_restore_client_use_case() -> RestoreClientUseCase:
    return RestoreClientUseCase(client_repository=get_client_repository())


# =============================================================================
# Casos de uso: proyectos
# =============================================================================


def get_create_project_use_case() -> CreateProjectUseCase:
    return CreateProjectUseCase(
        project_repository=get_project_repository(),
        client_repository=get_client_repository(),
    )


def get_list_projects_use_case() -> ListProjectsUseCase:
    return ListProjectsUseCase(
        project_repository=get_project_repository(),
        client_repository=get_client_repository(),
    )


def get_get_project_use_case() -> GetProjectUseCase:
    return GetProjectUseCase(
        project_repository=get_project_repository(),
        client_repository=get_client_repository(),
    )


def get_update_project_use_case() -> UpdateProjectUseCase:
    return UpdateProjectUseCase(
        project_repository=get_project_repository(),
        client_repository=get_client_repository(),
        delivery_note_repository=get_delivery_note_repository(),
    )


def get_delete_project_use_case() -> DeleteProjectUseCase:
    return DeleteProjectUseCase(
        project_repository=get_project_repository(),
        delivery_note_repository=get_delivery_note_repository(),
    )


def get_restore_project_use_case() -> RestoreProjectUseCase:
    return RestoreProjectUseCase(
        project_repository=get_project_repository(),
        client_repository=get_client_repository(),
    )


# =============================================================================
# Casos de uso: albaranes
# =============================================================================


def get_create_delivery_note_use_case() -> CreateDeliveryNoteUseCase:
    return CreateDeliveryNoteUseCase(
        delivery_note_repository=get_delivery_note_repository(),
        project_repository=get_project_repository(),
        client_repository=get_client_repository(),
    )


def get_list_delivery_notes_use_case() -> ListDeliveryNotesUseCase:
    return ListDeliveryNotesUseCase(
        delivery_note_repository=get_delivery_note_repository()
    )


def get_get_delivery_note_use_case() -> GetDeliveryNoteUseCase:
    return GetDeliveryNoteUseCase(
        delivery_note_repository=get_delivery_note_repository(),
        user_repository=get_user_repository(),
        client_repository=get_client_repository(),
        project_repository=get_project_repository(),
    )


def get_delete_delivery_note_use_case() -> DeleteDeliveryNoteUseCase:
    return DeleteDeliveryNoteUseCase(
        delivery_note_repository=get_delivery_note_repository()
    )


def get_sign_delivery_note_use_case() -> SignDeliveryNoteUseCase:
    return SignDeliveryNoteUseCase(
        delivery_note_repository=get_delivery_note_repository(),
        storage=get_object_storage(),
    )


def get_render_delivery_note_pdf_use_case() -> RenderDeliveryNotePdfUseCase:
    return RenderDeliveryNotePdfUseCase(
        get_delivery_note=get_get_delivery_note_use_case(),
        delivery_note_repository=get_delivery_note_repository(),
        renderer=get_delivery_note_renderer(),
        storage=get_object_storage(),
    )


# =============================================================================
# Casos de uso: correo
# =============================================================================


def get_send_mail_use_case() -> SendMailUseCase:
    return SendMailUseCase(notifier=get_notifier())


def clear_container_caches() -> None:
    """Resetea los singletons (tests y recarga de Settings)."""
    for factory in (
        get_user_repository,
        get_client_repository,
        get_project_repository,
        get_delivery_note_repository,
        get_object_storage,
        get_notifier,
        get_delivery_note_renderer,
    ):
        factory.cache_clear()
