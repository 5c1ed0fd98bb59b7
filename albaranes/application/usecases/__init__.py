"""
Use Cases Layer (Business Operations)

Entry points for business logic, organized by feature.

Structure
---------
usecases/
├── clients/         # Client CRUD, archive/restore
├── projects/        # Project CRUD, prices/amount/activation, archive/restore
├── delivery_notes/  # Delivery notes, signature, PDF
├── users/           # Registration, verification, profile, tokens
└── mail/            # Free-form mail through the notifier

Usage
-----
    from albaranes.application.usecases.clients import CreateClientUseCase

Or use the barrel exports from this module:

    from albaranes.application.usecases import CreateClientUseCase
"""

# Clients
from .clients import (
    ClientListResult,
    ClientResult,
    CreateClientInput,
    CreateClientUseCase,
    DeleteClientUseCase,
    GetClientUseCase,
    ListClientsUseCase,
    RestoreClientUseCase,
    UpdateClientInput,
    UpdateClientUseCase,
)

# Delivery notes
from .delivery_notes import (
    CreateDeliveryNoteInput,
    CreateDeliveryNoteUseCase,
    DeleteDeliveryNoteUseCase,
    DeliveryNoteDocumentResult,
    DeliveryNoteListResult,
    DeliveryNotePdfResult,
    DeliveryNoteResult,
    GetDeliveryNoteUseCase,
    ListDeliveryNotesUseCase,
    RenderDeliveryNotePdfUseCase,
    SignDeliveryNoteUseCase,
)

# Mail
from .mail import SendMailInput, SendMailUseCase

# Projects
from .projects import (
    CreateProjectInput,
    CreateProjectUseCase,
    DeleteProjectUseCase,
    GetProjectUseCase,
    ListProjectsUseCase,
    ProjectListResult,
    ProjectResult,
    RestoreProjectUseCase,
    UpdateProjectInput,
    UpdateProjectUseCase,
)

# Shared
from .results import (
    AcknowledgedResult,
    DeletionResult,
    UploadedFile,
    UseCaseError,
    UseCaseErrorCode,
)

# Users
from .users import (
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
    UserResult,
    VerificationResult,
    VerifyEmailUseCase,
)

__all__ = [
    # Clients
    "ClientListResult",
    "ClientResult",
    "CreateClientInput",
    "CreateClientUseCase",
    "DeleteClientUseCase",
    "GetClientUseCase",
    "ListClientsUseCase",
    "RestoreClientUseCase",
    "UpdateClientInput",
    "UpdateClientUseCase",
    # Delivery notes
    "CreateDeliveryNoteInput",
    "CreateDeliveryNoteUseCase",
    "DeleteDeliveryNoteUseCase",
    "DeliveryNoteDocumentResult",
    "DeliveryNoteListResult",
    "DeliveryNotePdfResult",
    "DeliveryNoteResult",
    "GetDeliveryNoteUseCase",
    "ListDeliveryNotesUseCase",
    "RenderDeliveryNotePdfUseCase",
    "SignDeliveryNoteUseCase",
    # Mail
    "SendMailInput",
    "SendMailUseCase",
    # Projects
    "CreateProjectInput",
    "CreateProjectUseCase",
    "DeleteProjectUseCase",
    "GetProjectUseCase",
    "ListProjectsUseCase",
    "ProjectListResult",
    "ProjectResult",
    "RestoreProjectUseCase",
    "UpdateProjectInput",
    "UpdateProjectUseCase",
    # Shared
    "AcknowledgedResult",
    "DeletionResult",
    "UploadedFile",
    "UseCaseError",
    "UseCaseErrorCode",
    # Users
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
