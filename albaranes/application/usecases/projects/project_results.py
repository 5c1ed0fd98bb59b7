"""Modelos de resultado de los casos de uso de proyectos."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from ....domain.entities import Project
from ..results import UseCaseError, conflict

PROJECT_NOT_FOUND = "PROJECT_NOT_FOUND"
PROJECT_NOT_FOUND_FOR_CLIENT = "PROJECT_NOT_FOUND_FOR_CLIENT"
ARCHIVED_PROJECT_NOT_FOUND = "ARCHIVED_PROJECT_NOT_FOUND_OR_NOT_AUTHORIZED"
CLIENT_NOT_FOUND = "CLIENT_NOT_FOUND"
PROJECT_CODE_ALREADY_EXISTS_FOR_CLIENT = "PROJECT_CODE_ALREADY_EXISTS_FOR_CLIENT"
PROJECT_HAS_DEPENDENT_RECORDS = "PROJECT_HAS_DEPENDENT_RECORDS"


@dataclass
class ProjectResult:
    project: Project | None = None
    error: UseCaseError | None = None


@dataclass
class ProjectListResult:
    projects: List[Project] = field(default_factory=list)
    error: UseCaseError | None = None


def duplicate_code_error() -> UseCaseError:
    return conflict(
        PROJECT_CODE_ALREADY_EXISTS_FOR_CLIENT,
        "Another active project of this client already uses this project code.",
    )
