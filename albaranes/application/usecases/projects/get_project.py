"""
===============================================================================
USE CASES: Get Project / List Projects
===============================================================================

Responsibilities:
    - GetProjectUseCase: proyecto activo propio; opcionalmente acotado a un
      cliente (ruta /{client_id}/{id}) y con precios filtrados por formato.
    - ListProjectsUseCase: proyectos propios (activos o archivados), todos o
      de un cliente, ordenados por fecha de alta (asc | desc).

Reglas:
    - Listar "por padre" verifica primero que el cliente sea del actor:
      cliente ajeno => NOT_FOUND, nunca lista vacía.
===============================================================================
"""

from __future__ import annotations

from dataclasses import replace
from uuid import UUID

from ....domain.entities import WorkFormat
from ....domain.ownership_policy import Actor, project_chain_ok
from ....domain.repositories import ClientRepository, ProjectRepository
from ....domain.soft_delete import Visibility
from ..results import not_found
from .project_results import (
    CLIENT_NOT_FOUND,
    PROJECT_NOT_FOUND,
    PROJECT_NOT_FOUND_FOR_CLIENT,
    ProjectListResult,
    ProjectResult,
)


class GetProjectUseCase:
    def __init__(
        self,
        project_repository: ProjectRepository,
        client_repository: ClientRepository,
    ) -> None:
        self._projects = project_repository
        self._clients = client_repository

    def execute(
        self,
        actor: Actor,
        project_id: UUID,
        *,
        client_id: UUID | None = None,
        prices: WorkFormat | None = None,
    ) -> ProjectResult:
        if client_id is None:
            project = self._projects.get_project(project_id, owner_user_id=actor.user_id)
            if project is None:
                return ProjectResult(error=not_found("Project", PROJECT_NOT_FOUND))
        else:
            client = self._clients.get_client(client_id, owner_user_id=actor.user_id)
            if client is None:
                return ProjectResult(error=not_found("Client", CLIENT_NOT_FOUND))
            project = self._projects.get_project(
                project_id, owner_user_id=actor.user_id, client_id=client_id
            )
            if not project_chain_ok(actor, project, client):
                return ProjectResult(
                    error=not_found("Project", PROJECT_NOT_FOUND_FOR_CLIENT)
                )

        if prices is not None:
            project = replace(project, unit_prices=project.prices_for(prices))
        return ProjectResult(project=project)


class ListProjectsUseCase:
    def __init__(
        self,
        project_repository: ProjectRepository,
        client_repository: ClientRepository,
    ) -> None:
        self._projects = project_repository
        self._clients = client_repository

    def execute(
        self,
        actor: Actor,
        *,
        client_id: UUID | None = None,
        archived: bool = False,
        ascending: bool = False,
    ) -> ProjectListResult:
        if client_id is not None:
            # La papelera de un cliente se puede consultar aunque el cliente
            # también esté archivado.
            client_visibility = Visibility.ALL if archived else Visibility.ACTIVE
            client = self._clients.get_client(
                client_id, owner_user_id=actor.user_id, visibility=client_visibility
            )
            if client is None:
                return ProjectListResult(error=not_found("Client", CLIENT_NOT_FOUND))

        projects = self._projects.list_projects(
            owner_user_id=actor.user_id,
            client_id=client_id,
            visibility=Visibility.ARCHIVED if archived else Visibility.ACTIVE,
            ascending=ascending,
        )
        return ProjectListResult(projects=projects)
