from .create_project import CreateProjectInput, CreateProjectUseCase
from .delete_project import DeleteProjectUseCase
from .get_project import GetProjectUseCase, ListProjectsUseCase
from .project_results import ProjectListResult, ProjectResult
from .restore_project import RestoreProjectUseCase
from .update_project import UpdateProjectInput, UpdateProjectUseCase

__all__ = [
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
]
