"""
===============================================================================
TARJETA CRC — domain/soft_delete.py
===============================================================================

Módulo:
    Modos de visibilidad para colecciones con archivado (soft delete)

Responsabilidades:
    - Nombrar los tres modos de consulta que ofrece cada repositorio:
        * ACTIVE:   solo registros no archivados (default de todo finder)
        * ARCHIVED: solo archivados (listados de papelera)
        * ALL:      incluye archivados (restore / borrado físico / populate)
    - Decidir si un registro es visible bajo un modo (regla pura).

Colaboradores:
    - domain.repositories: los contratos reciben `visibility`.
    - infrastructure.repositories.in_memory.soft_delete_store
    - infrastructure.repositories.postgres.soft_delete_table

Reglas:
    - archive() solo actúa sobre activos; restore() solo sobre archivados.
    - Las claves únicas de negocio solo consideran registros activos.
===============================================================================
"""

from __future__ import annotations

from enum import Enum


class Visibility(str, Enum):
    ACTIVE = "active"
    ARCHIVED = "archived"
    ALL = "all"

    def includes(self, deleted: bool) -> bool:
        """True si un registro con `deleted` es visible en este modo."""
        if self is Visibility.ALL:
            return True
        if self is Visibility.ARCHIVED:
            return deleted
        return not deleted
