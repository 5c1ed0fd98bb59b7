# albaranes/crosscutting/exceptions.py
"""
===============================================================================
MÓDULO: Excepciones tipadas del backend (errores internos)
===============================================================================

Objetivo
--------
Tener excepciones internas coherentes, con:
- error_code estable
- error_id para correlación con logs
- message “humana” (sin filtrar secretos)

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Componente:
  AlbaranesError + subclases

Responsabilidades:
  - Estandarizar errores de infraestructura que luego se mapean a HTTP
  - Etiquetar violaciones de claves únicas (DuplicateKeyError) para que los
    casos de uso las traduzcan al mismo Conflict que el pre-chequeo
  - Generar error_id para rastreo

Colaboradores:
  - infrastructure/repositories/* (lanzan DatabaseError / DuplicateKeyError)
  - infrastructure/storage, pdf, notifications (lanzan UpstreamError)
  - api/exception_handlers.py (mapea a RFC 7807)
===============================================================================
"""

from __future__ import annotations

from uuid import uuid4


class AlbaranesError(Exception):
    """
    ----------------------------------------------------------------------------
    CRC (Class Card)
    ----------------------------------------------------------------------------
    Clase:
      AlbaranesError

    Responsabilidades:
      - Base para errores internos del sistema
      - Proveer error_code + error_id + message

    Colaboradores:
      - api/exception_handlers.py
    ----------------------------------------------------------------------------
    """

    error_code: str = "ALBARANES_ERROR"

    def __init__(
        self,
        message: str,
        error_id: str | None = None,
        original_error: Exception | None = None,
    ):
        self.message = message
        self.error_id = error_id or str(uuid4())
        self.original_error = original_error
        super().__init__(message)


class DatabaseError(AlbaranesError):
    """Errores de DB (conexión, query, timeout, pool)."""

    error_code: str = "DATABASE_ERROR"


class DuplicateKeyError(DatabaseError):
    """
    Violación de una clave de negocio única (índice parcial o store en memoria).

    `key` identifica la clave violada (ej: "clients_owner_cif") para que el caso
    de uso elija el reason code correcto.
    """

    error_code: str = "DUPLICATE_KEY"

    def __init__(
        self,
        message: str,
        *,
        key: str = "",
        error_id: str | None = None,
        original_error: Exception | None = None,
    ):
        super().__init__(message, error_id=error_id, original_error=original_error)
        self.key = key


class ReferencedRecordError(DatabaseError):
    """Borrado físico rechazado: otras filas referencian el registro (FK RESTRICT)."""

    error_code: str = "REFERENCED_RECORD"


class UpstreamError(AlbaranesError):
    """Falla de un colaborador externo (storage, renderer PDF, correo)."""

    error_code: str = "UPSTREAM_ERROR"
