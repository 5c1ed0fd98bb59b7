"""
===============================================================================
TARJETA CRC — albaranes/interfaces/api/http/routers/clients.py
===============================================================================

Class/Module:
    Client Router (/client)

Responsibilities:
    - CRUD de clientes del usuario autenticado.
    - Papelera: listado de archivados y restore.
    - Traducir UseCaseError -> RFC7807.

Collaborators:
    - albaranes.application.usecases.clients
    - albaranes.identity.auth_users.require_actor
    - albaranes.container (factories DI)
    - schemas.clients (DTOs Pydantic)
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Query

from albaranes.application.usecases import (
    CreateClientInput,
    CreateClientUseCase,
    DeleteClientUseCase,
    GetClientUseCase,
    ListClientsUseCase,
    RestoreClientUseCase,
    UpdateClientInput,
    UpdateClientUseCase,
)
from albaranes.container import (
    get_create_client_use_case,
    get_delete_client_use_case,
    get_get_client_use_case,
    get_list_clients_use_case,
    get_restore_client_use_case,
    get_update_client_use_case,
)
from albaranes.domain.entities import Client
from albaranes.domain.ownership_policy import Actor
from albaranes.identity.auth_users import require_actor

from ..error_mapping import raise_use_case_error
from ..schemas.clients import ClientRes, ClientsListRes, CreateClientReq, UpdateClientReq
from ..schemas.common import AddressDTO, DeletionRes

router = APIRouter(prefix="/client", tags=["clients"])


def _to_client_res(client: Client) -> ClientRes:
    return ClientRes(
        id=client.id,
        owner_user_id=client.owner_user_id,
        name=client.name,
        cif=client.cif,
        address=AddressDTO.from_entity(client.address),
        created_at=client.created_at,
        updated_at=client.updated_at,
        deleted=client.deleted,
        deleted_at=client.deleted_at,
    )


@router.post("", response_model=ClientRes, status_code=201)
def create_client(
    req: CreateClientReq,
    actor: Actor = Depends(require_actor()),
    use_case: CreateClientUseCase = Depends(get_create_client_use_case),
):
    result = use_case.execute(
        actor,
        CreateClientInput(
            name=req.name,
            cif=req.cif,
            address=req.address.to_entity() if req.address else None,
        ),
    )
    if result.error is not None:
        raise_use_case_error(result.error)
    return _to_client_res(result.client)


@router.get("", response_model=ClientsListRes)
def list_clients(
    actor: Actor = Depends(require_actor()),
    use_case: ListClientsUseCase = Depends(get_list_clients_use_case),
):
    result = use_case.execute(actor)
    return ClientsListRes(clients=[_to_client_res(c) for c in result.clients])


@router.get("/archived", response_model=ClientsListRes)
def list_archived_clients(
    actor: Actor = Depends(require_actor()),
    use_case: ListClientsUseCase = Depends(get_list_clients_use_case),
):
    result = use_case.execute(actor, archived=True)
    return ClientsListRes(clients=[_to_client_res(c) for c in result.clients])


@router.get("/{client_id}", response_model=ClientRes)
def get_client(
    client_id: UUID,
    actor: Actor = Depends(require_actor()),
    use_case: GetClientUseCase = Depends(get_get_client_use_case),
):
    result = use_case.execute(actor, client_id)
    if result.error is not None:
        raise_use_case_error(result.error, identifier=client_id)
    return _to_client_res(result.client)


@router.put("/{client_id}", response_model=ClientRes)
def update_client(
    client_id: UUID,
    req: UpdateClientReq,
    actor: Actor = Depends(require_actor()),
    use_case: UpdateClientUseCase = Depends(get_update_client_use_case),
):
    result = use_case.execute(
        actor,
        client_id,
        UpdateClientInput(
            name=req.name,
            cif=req.cif,
            address=req.address.to_entity() if req.address else None,
        ),
    )
    if result.error is not None:
        raise_use_case_error(result.error, identifier=client_id)
    return _to_client_res(result.client)


@router.delete("/{client_id}", response_model=DeletionRes)
def delete_client(
    client_id: UUID,
    hard: bool = Query(False),
    actor: Actor = Depends(require_actor()),
    use_case: DeleteClientUseCase = Depends(get_delete_client_use_case),
):
    result = use_case.execute(actor, client_id, hard=hard)
    if result.error is not None:
        raise_use_case_error(result.error, identifier=client_id)
    return DeletionRes(deleted=result.deleted, hard=result.hard)


@router.patch("/{client_id}/restore", response_model=ClientRes)
def restore_client(
    client_id: UUID,
    actor: Actor = Depends(require_actor()),
    use_case: RestoreClientUseCase = Depends(get_restore_client_use_case),
):
    result = use_case.execute(actor, client_id)
    if result.error is not None:
        raise_use_case_error(result.error, identifier=client_id)
    return _to_client_res(result.client)
