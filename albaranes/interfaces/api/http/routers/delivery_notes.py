"""
===============================================================================
TARJETA CRC — albaranes/interfaces/api/http/routers/delivery_notes.py
===============================================================================

Class/Module:
    Delivery Note Router (/deliverynote)

Responsibilities:
    - Alta, listado y detalle poblado (usuario, cliente, proyecto).
    - Firma (multipart `sign`) y generación del PDF (render + upload).
    - Borrado físico de albaranes sin firmar (`?hard=true`).

Collaborators:
    - albaranes.application.usecases.delivery_notes
    - albaranes.identity.auth_users.require_actor
    - routers.clients / routers.projects / routers.users (mapeos a DTO)
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, File, Query, UploadFile
from starlette.concurrency import run_in_threadpool

from albaranes.application.usecases import (
    CreateDeliveryNoteInput,
    CreateDeliveryNoteUseCase,
    DeleteDeliveryNoteUseCase,
    GetDeliveryNoteUseCase,
    ListDeliveryNotesUseCase,
    RenderDeliveryNotePdfUseCase,
    SignDeliveryNoteUseCase,
)
from albaranes.container import (
    get_create_delivery_note_use_case,
    get_delete_delivery_note_use_case,
    get_get_delivery_note_use_case,
    get_list_delivery_notes_use_case,
    get_render_delivery_note_pdf_use_case,
    get_sign_delivery_note_use_case,
)
from albaranes.crosscutting.error_responses import internal_error
from albaranes.domain.entities import DeliveryNote
from albaranes.domain.ownership_policy import Actor
from albaranes.identity.auth_users import require_actor

from ..dependencies import read_optional_upload
from ..error_mapping import raise_use_case_error
from ..schemas.common import DeletionRes
from ..schemas.delivery_notes import (
    CreateDeliveryNoteReq,
    DeliveryNotePdfRes,
    DeliveryNoteRes,
    DeliveryNotesListRes,
    PopulatedDeliveryNoteRes,
)
from .clients import _to_client_res
from .projects import _to_project_res
from .users import _to_user_res

router = APIRouter(prefix="/deliverynote", tags=["delivery-notes"])


def _to_note_res(note: DeliveryNote) -> DeliveryNoteRes:
    return DeliveryNoteRes(
        id=note.id,
        owner_user_id=note.owner_user_id,
        client_id=note.client_id,
        project_id=note.project_id,
        format=note.format,
        workdate=note.workdate,
        description=note.description,
        hours=note.hours,
        quantity=note.quantity,
        sign_url=note.sign_url,
        is_signed=note.is_signed,
        pdf_url=note.pdf_url,
        observer_name=note.observer_name,
        observer_nif=note.observer_nif,
        observations=note.observations,
        created_at=note.created_at,
        updated_at=note.updated_at,
    )


@router.post("", response_model=DeliveryNoteRes, status_code=201)
def create_delivery_note(
    req: CreateDeliveryNoteReq,
    actor: Actor = Depends(require_actor()),
    use_case: CreateDeliveryNoteUseCase = Depends(get_create_delivery_note_use_case),
):
    result = use_case.execute(
        actor,
        CreateDeliveryNoteInput(
            client_id=req.client_id,
            project_id=req.project_id,
            format=req.format,
            workdate=req.workdate,
            description=req.description,
            hours=req.hours,
            quantity=req.quantity,
            observer_name=req.observer_name,
            observer_nif=req.observer_nif,
            observations=req.observations,
        ),
    )
    if result.error is not None:
        raise_use_case_error(result.error, identifier=req.project_id)
    return _to_note_res(result.note)


@router.get("", response_model=DeliveryNotesListRes)
def list_delivery_notes(
    actor: Actor = Depends(require_actor()),
    use_case: ListDeliveryNotesUseCase = Depends(get_list_delivery_notes_use_case),
):
    result = use_case.execute(actor)
    return DeliveryNotesListRes(delivery_notes=[_to_note_res(n) for n in result.notes])


@router.get("/pdf/{note_id}", response_model=DeliveryNotePdfRes)
def render_delivery_note_pdf(
    note_id: UUID,
    actor: Actor = Depends(require_actor()),
    use_case: RenderDeliveryNotePdfUseCase = Depends(
        get_render_delivery_note_pdf_use_case
    ),
):
    result = use_case.execute(actor, note_id)
    if result.error is not None:
        raise_use_case_error(result.error, identifier=note_id)
    if result.pdf_url is None or result.note is None:
        raise internal_error()
    return DeliveryNotePdfRes(pdf_url=result.pdf_url, delivery_note=_to_note_res(result.note))


@router.patch("/sign/{note_id}", response_model=DeliveryNoteRes)
async def sign_delivery_note(
    note_id: UUID,
    sign: UploadFile | None = File(None),
    actor: Actor = Depends(require_actor()),
    use_case: SignDeliveryNoteUseCase = Depends(get_sign_delivery_note_use_case),
):
    signature = await read_optional_upload(sign)
    # Subida a storage y escritura en DB son bloqueantes: fuera del event loop.
    result = await run_in_threadpool(use_case.execute, actor, note_id, signature)
    if result.error is not None:
        raise_use_case_error(result.error, identifier=note_id)
    return _to_note_res(result.note)


@router.get("/{note_id}", response_model=PopulatedDeliveryNoteRes)
def get_delivery_note(
    note_id: UUID,
    actor: Actor = Depends(require_actor()),
    use_case: GetDeliveryNoteUseCase = Depends(get_get_delivery_note_use_case),
):
    result = use_case.execute(actor, note_id)
    if result.error is not None:
        raise_use_case_error(result.error, identifier=note_id)
    document = result.document
    return PopulatedDeliveryNoteRes(
        **_to_note_res(document.note).model_dump(),
        user=_to_user_res(document.user),
        client=_to_client_res(document.client),
        project=_to_project_res(document.project),
    )


@router.delete("/{note_id}", response_model=DeletionRes)
def delete_delivery_note(
    note_id: UUID,
    hard: bool = Query(False),
    actor: Actor = Depends(require_actor()),
    use_case: DeleteDeliveryNoteUseCase = Depends(get_delete_delivery_note_use_case),
):
    result = use_case.execute(actor, note_id, hard=hard)
    if result.error is not None:
        raise_use_case_error(result.error, identifier=note_id)
    return DeletionRes(deleted=result.deleted, hard=result.hard)
