from .client_results import ClientListResult, ClientResult
from .create_client import CreateClientInput, CreateClientUseCase
from .delete_client import DeleteClientUseCase
from .get_client import GetClientUseCase, ListClientsUseCase
from .restore_client import RestoreClientUseCase
from .update_client import UpdateClientInput, UpdateClientUseCase

__all__ = [
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
]
