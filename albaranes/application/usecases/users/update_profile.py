"""
===============================================================================
USE CASES: Profile (personal data, company, logo)
===============================================================================

Business Rules:
    R1) Datos personales: NIF con formato ^\\d{8}[A-Z]$ (INVALID_NIF).
    R2) Empresa por rol:
          - autonomo => nombre/CIF derivados de name/nif + dirección enviada
            (sin name o nif => VALIDATION_ERROR).
          - resto    => el parche se fusiona sobre el perfil existente.
    R3) CIF de empresa usado por otra cuenta activa => CONFLICT
        COMPANY_CIF_ALREADY_EXISTS (el índice parcial es el respaldo).
    R4) Logo: se sube al object storage y se guarda la URL.
===============================================================================
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace

from ....crosscutting.exceptions import DuplicateKeyError, UpstreamError
from ....domain.company_profile import apply_company_update, classify_company_update
from ....domain.entities import CompanyProfile, User
from ....domain.repositories import UserRepository
from ....domain.rules import is_valid_nif, normalize_cif
from ....domain.services import ObjectStoragePort
from ..results import UploadedFile, bad_request, conflict, not_found, upstream_failure, validation
from .user_results import COMPANY_CIF_ALREADY_EXISTS, USER_NOT_FOUND, UserResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UpdatePersonalDataInput:
    name: str
    surnames: str
    nif: str


class UpdatePersonalDataUseCase:
    def __init__(self, user_repository: UserRepository) -> None:
        self._users = user_repository

    def execute(self, user: User, input_data: UpdatePersonalDataInput) -> UserResult:
        nif = (input_data.nif or "").strip().upper()
        if not is_valid_nif(nif):
            return UserResult(error=validation("INVALID_NIF"))

        updated = self._users.update_user(
            replace(
                user,
                name=input_data.name.strip(),
                surnames=input_data.surnames.strip(),
                nif=nif,
            )
        )
        if updated is None:
            return UserResult(error=not_found("User", USER_NOT_FOUND))
        return UserResult(user=updated)


class UpdateCompanyUseCase:
    def __init__(self, user_repository: UserRepository) -> None:
        self._users = user_repository

    def execute(self, user: User, patch: CompanyProfile) -> UserResult:
        company = apply_company_update(user, classify_company_update(user.role, patch))
        if not company.name or not company.cif:
            return UserResult(
                error=validation(
                    "COMPANY_NAME_AND_CIF_REQUIRED",
                    "Company name and CIF are required; autonomos must set "
                    "their personal name and NIF first.",
                )
            )
        company = replace(company, cif=normalize_cif(company.cif))

        clash = self._users.find_user_by_company_cif(company.cif, exclude_user_id=user.id)
        if clash is not None:
            return self._cif_taken()

        try:
            updated = self._users.update_user(replace(user, company=company))
        except DuplicateKeyError:
            return self._cif_taken()
        if updated is None:
            return UserResult(error=not_found("User", USER_NOT_FOUND))
        return UserResult(user=updated)

    @staticmethod
    def _cif_taken() -> UserResult:
        return UserResult(
            error=conflict(
                COMPANY_CIF_ALREADY_EXISTS,
                "Another account already registered this company CIF.",
            )
        )


class UpdateLogoUseCase:
    def __init__(self, user_repository: UserRepository, storage: ObjectStoragePort) -> None:
        self._users = user_repository
        self._storage = storage

    def execute(self, user: User, logo: UploadedFile | None) -> UserResult:
        if logo is None or not logo.content:
            return UserResult(error=bad_request("LOGO_IMAGE_FILE_REQUIRED"))

        try:
            logo_url = self._storage.upload(
                logo.content, filename=logo.filename, content_type=logo.content_type
            )
        except UpstreamError as exc:
            logger.error("Logo upload failed. user_id=%s error_id=%s", user.id, exc.error_id)
            return UserResult(
                error=upstream_failure("STORAGE_UPLOAD_FAILED", "The logo could not be stored.")
            )

        updated = self._users.update_user(replace(user, logo_url=logo_url))
        if updated is None:
            return UserResult(error=not_found("User", USER_NOT_FOUND))
        return UserResult(user=updated)
