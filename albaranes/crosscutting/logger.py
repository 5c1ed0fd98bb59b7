# albaranes/crosscutting/logger.py
"""
===============================================================================
MÓDULO: Logger estructurado (JSON) con contexto de request
===============================================================================

CRC (Component Card)
--------------------
Componente:
  JSONFormatter + setup_logger()

Responsabilidades:
  - Una línea JSON por evento, con el contexto del request
    (request_id, method, path, user_id, role).
  - Los campos de `extra=` pasan por sanitize():
      * claves con password / token / secret / jwt / verification_code
        se redactan;
      * emails de recipient / email se enmascaran (a***@dominio);
      * bytes (firmas, logos, PDFs) se resumen por tamaño.

Colaboradores:
  - albaranes/context.py
  - crosscutting/config.py (LOG_LEVEL, LOG_JSON)
===============================================================================
"""

from __future__ import annotations

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any

REDACTED = "***REDACTADO***"
MAX_STRING = 8_000
MAX_DEPTH = 4

_SENSITIVE_FRAGMENTS = ("password", "token", "secret", "jwt", "authorization", "verification_code")
_EMAIL_KEYS = frozenset({"recipient", "email"})

# Atributos estándar del LogRecord: todo lo demás llega por `extra=`.
_RECORD_ATTRS: frozenset[str] = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None))
) | {"message", "asctime", "taskName"}


def is_sensitive_key(key: str) -> bool:
    lowered = key.lower()
    return any(fragment in lowered for fragment in _SENSITIVE_FRAGMENTS)


def mask_email(value: str) -> str:
    local, sep, domain = value.partition("@")
    if not sep:
        return value
    return f"{local[:1]}***@{domain}"


def sanitize(value: Any, *, key: str | None = None, depth: int = 0) -> Any:
    """R: Valor seguro y serializable para un campo de log."""
    if key and is_sensitive_key(key):
        return REDACTED
    if depth > MAX_DEPTH:
        return "***TRUNCADO***"
    if isinstance(value, str):
        if key in _EMAIL_KEYS:
            value = mask_email(value)
        return value if len(value) <= MAX_STRING else value[:MAX_STRING] + "…(truncado)"
    if isinstance(value, (bytes, bytearray)):
        return f"<bytes {len(value)}B>"
    if isinstance(value, dict):
        return {str(k): sanitize(v, key=str(k), depth=depth + 1) for k, v in value.items()}
    if isinstance(value, (list, tuple, set)):
        return [sanitize(v, key=key, depth=depth + 1) for v in value]
    if value is None or isinstance(value, (bool, int, float)):
        return value
    return str(value)


class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        from ..context import get_context_dict

        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "location": f"{record.module}:{record.funcName}:{record.lineno}",
            "pid": os.getpid(),
            **get_context_dict(),
        }
        for key, value in record.__dict__.items():
            if key not in _RECORD_ATTRS:
                payload[key] = sanitize(value, key=key)

        if record.exc_info and record.exc_info[0] is not None:
            payload["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "stacktrace": self.formatException(record.exc_info),
            }
        return json.dumps(payload, ensure_ascii=False, default=str, separators=(",", ":"))


def setup_logger(name: str = "albaranes") -> logging.Logger:
    """
    Logger del servicio. Idempotente ante reimports; los loggers hijos
    (`albaranes.*`) heredan su handler.
    """
    from .config import get_settings

    settings = get_settings()
    log = logging.getLogger(name)
    log.setLevel(getattr(logging, (settings.log_level or "INFO").upper(), logging.INFO))

    if not log.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(
            JSONFormatter()
            if settings.log_json
            else logging.Formatter("%(levelname)s %(name)s %(message)s")
        )
        log.addHandler(handler)
    return log


logger = setup_logger()
