"""
===============================================================================
TARJETA CRC — albaranes/interfaces/api/http/routers/projects.py
===============================================================================

Class/Module:
    Project Router (/project)

Responsibilities:
    - CRUD de proyectos del usuario autenticado, listados por cliente y
      ordenados por fecha de alta (sort=asc|desc).
    - Papelera: archive, listado de archivados (global y por cliente),
      restore.
    - Patches puntuales: activate, prices, amount (vía UpdateProjectUseCase).

Notes:
    - Las rutas estáticas (/one, /archive, /restore, ...) se declaran antes
      que /{client_id} para que no las capture el path param.
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Query

from albaranes.application.usecases import (
    CreateProjectInput,
    CreateProjectUseCase,
    DeleteProjectUseCase,
    GetProjectUseCase,
    ListProjectsUseCase,
    RestoreProjectUseCase,
    UpdateProjectInput,
    UpdateProjectUseCase,
)
from albaranes.container import (
    get_create_project_use_case,
    get_delete_project_use_case,
    get_get_project_use_case,
    get_list_projects_use_case,
    get_restore_project_use_case,
    get_update_project_use_case,
)
from albaranes.domain.entities import Project
from albaranes.domain.ownership_policy import Actor
from albaranes.identity.auth_users import require_actor

from ..dependencies import parse_prices_filter, parse_sort
from ..error_mapping import raise_use_case_error
from ..schemas.common import AddressDTO, DeletionRes, UnitPriceDTO
from ..schemas.projects import (
    ActivateProjectReq,
    CreateProjectReq,
    ProjectAmountReq,
    ProjectPricesReq,
    ProjectRes,
    ProjectsListRes,
    UpdateProjectReq,
)

router = APIRouter(prefix="/project", tags=["projects"])


# =============================================================================
# Helpers internos
# =============================================================================


def _to_project_res(project: Project) -> ProjectRes:
    return ProjectRes(
        id=project.id,
        owner_user_id=project.owner_user_id,
        client_id=project.client_id,
        name=project.name,
        project_code=project.project_code,
        code=project.code,
        address=AddressDTO.from_entity(project.address),
        begin=project.begin,
        end=project.end,
        notes=project.notes,
        is_active=project.is_active,
        unit_prices=[UnitPriceDTO.from_entity(p) for p in project.unit_prices],
        amount=project.amount,
        created_at=project.created_at,
        updated_at=project.updated_at,
        deleted=project.deleted,
        deleted_at=project.deleted_at,
    )


def _to_projects_res(projects: list[Project]) -> ProjectsListRes:
    return ProjectsListRes(projects=[_to_project_res(p) for p in projects])


def _apply_update(
    use_case: UpdateProjectUseCase,
    actor: Actor,
    project_id: UUID,
    input_data: UpdateProjectInput,
) -> ProjectRes:
    result = use_case.execute(actor, project_id, input_data)
    if result.error is not None:
        raise_use_case_error(result.error, identifier=project_id)
    return _to_project_res(result.project)


# =============================================================================
# Endpoints
# =============================================================================


@router.post("", response_model=ProjectRes, status_code=201)
def create_project(
    req: CreateProjectReq,
    actor: Actor = Depends(require_actor()),
    use_case: CreateProjectUseCase = Depends(get_create_project_use_case),
):
    result = use_case.execute(
        actor,
        CreateProjectInput(
            client_id=req.client_id,
            name=req.name,
            project_code=req.project_code,
            code=req.code,
            address=req.address.to_entity() if req.address else None,
            begin=req.begin,
            end=req.end,
            notes=req.notes,
            unit_prices=[p.to_entity() for p in req.unit_prices],
            amount=req.amount,
        ),
    )
    if result.error is not None:
        raise_use_case_error(result.error, identifier=req.client_id)
    return _to_project_res(result.project)


@router.get("", response_model=ProjectsListRes)
def list_projects(
    sort: str | None = Query(None),
    actor: Actor = Depends(require_actor()),
    use_case: ListProjectsUseCase = Depends(get_list_projects_use_case),
):
    result = use_case.execute(actor, ascending=parse_sort(sort))
    return _to_projects_res(result.projects)


@router.get("/one/{project_id}", response_model=ProjectRes)
def get_project(
    project_id: UUID,
    prices: str | None = Query(None),
    actor: Actor = Depends(require_actor()),
    use_case: GetProjectUseCase = Depends(get_get_project_use_case),
):
    result = use_case.execute(actor, project_id, prices=parse_prices_filter(prices))
    if result.error is not None:
        raise_use_case_error(result.error, identifier=project_id)
    return _to_project_res(result.project)


@router.get("/archive", response_model=ProjectsListRes)
def list_archived_projects(
    actor: Actor = Depends(require_actor()),
    use_case: ListProjectsUseCase = Depends(get_list_projects_use_case),
):
    result = use_case.execute(actor, archived=True)
    return _to_projects_res(result.projects)


@router.get("/archive/{client_id}", response_model=ProjectsListRes)
def list_archived_projects_by_client(
    client_id: UUID,
    actor: Actor = Depends(require_actor()),
    use_case: ListProjectsUseCase = Depends(get_list_projects_use_case),
):
    result = use_case.execute(actor, client_id=client_id, archived=True)
    if result.error is not None:
        raise_use_case_error(result.error, identifier=client_id)
    return _to_projects_res(result.projects)


@router.delete("/archive/{project_id}", response_model=DeletionRes)
def archive_project(
    project_id: UUID,
    actor: Actor = Depends(require_actor()),
    use_case: DeleteProjectUseCase = Depends(get_delete_project_use_case),
):
    result = use_case.execute(actor, project_id, hard=False)
    if result.error is not None:
        raise_use_case_error(result.error, identifier=project_id)
    return DeletionRes(deleted=result.deleted, hard=result.hard)


@router.patch("/restore/{project_id}", response_model=ProjectRes)
def restore_project(
    project_id: UUID,
    actor: Actor = Depends(require_actor()),
    use_case: RestoreProjectUseCase = Depends(get_restore_project_use_case),
):
    result = use_case.execute(actor, project_id)
    if result.error is not None:
        raise_use_case_error(result.error, identifier=project_id)
    return _to_project_res(result.project)


@router.patch("/activate/{project_id}", response_model=ProjectRes)
def activate_project(
    project_id: UUID,
    req: ActivateProjectReq,
    actor: Actor = Depends(require_actor()),
    use_case: UpdateProjectUseCase = Depends(get_update_project_use_case),
):
    return _apply_update(
        use_case, actor, project_id, UpdateProjectInput(is_active=req.active)
    )


@router.patch("/prices/{project_id}", response_model=ProjectRes)
def update_project_prices(
    project_id: UUID,
    req: ProjectPricesReq,
    actor: Actor = Depends(require_actor()),
    use_case: UpdateProjectUseCase = Depends(get_update_project_use_case),
):
    return _apply_update(
        use_case,
        actor,
        project_id,
        UpdateProjectInput(unit_prices=[p.to_entity() for p in req.prices]),
    )


@router.patch("/amount/{project_id}", response_model=ProjectRes)
def update_project_amount(
    project_id: UUID,
    req: ProjectAmountReq,
    actor: Actor = Depends(require_actor()),
    use_case: UpdateProjectUseCase = Depends(get_update_project_use_case),
):
    return _apply_update(
        use_case, actor, project_id, UpdateProjectInput(amount=req.amount)
    )


@router.get("/{client_id}", response_model=ProjectsListRes)
def list_projects_by_client(
    client_id: UUID,
    sort: str | None = Query(None),
    actor: Actor = Depends(require_actor()),
    use_case: ListProjectsUseCase = Depends(get_list_projects_use_case),
):
    result = use_case.execute(actor, client_id=client_id, ascending=parse_sort(sort))
    if result.error is not None:
        raise_use_case_error(result.error, identifier=client_id)
    return _to_projects_res(result.projects)


@router.get("/{client_id}/{project_id}", response_model=ProjectRes)
def get_project_for_client(
    client_id: UUID,
    project_id: UUID,
    actor: Actor = Depends(require_actor()),
    use_case: GetProjectUseCase = Depends(get_get_project_use_case),
):
    result = use_case.execute(actor, project_id, client_id=client_id)
    if result.error is not None:
        raise_use_case_error(result.error, identifier=project_id)
    return _to_project_res(result.project)


@router.put("/{project_id}", response_model=ProjectRes)
def update_project(
    project_id: UUID,
    req: UpdateProjectReq,
    actor: Actor = Depends(require_actor()),
    use_case: UpdateProjectUseCase = Depends(get_update_project_use_case),
):
    return _apply_update(
        use_case,
        actor,
        project_id,
        UpdateProjectInput(
            client_id=req.client_id,
            name=req.name,
            project_code=req.project_code,
            code=req.code,
            address=req.address.to_entity() if req.address else None,
            begin=req.begin,
            end=req.end,
            notes=req.notes,
            unit_prices=(
                [p.to_entity() for p in req.unit_prices]
                if req.unit_prices is not None
                else None
            ),
            amount=req.amount,
        ),
    )


@router.delete("/{project_id}", response_model=DeletionRes)
def delete_project(
    project_id: UUID,
    hard: bool = Query(False),
    actor: Actor = Depends(require_actor()),
    use_case: DeleteProjectUseCase = Depends(get_delete_project_use_case),
):
    result = use_case.execute(actor, project_id, hard=hard)
    if result.error is not None:
        raise_use_case_error(result.error, identifier=project_id)
    return DeletionRes(deleted=result.deleted, hard=result.hard)
