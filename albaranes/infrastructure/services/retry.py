"""albaranes.infrastructure.services.retry

Reintentos con backoff exponencial + jitter (tenacity) para los colaboradores
externos de la API: Pinata, la descarga de la imagen de firma y el SMTP.

CRC (Component Card)
--------------------
Component: retry helper
Responsibilities:
  - Clasificar fallas: transitorias (reintentar) vs permanentes (fail-fast)
  - Construir el decorator estándar a partir de RETRY_* en Settings
  - Loguear cada reintento con el nombre de la llamada y la causa
Collaborators:
  - storage/pinata_object_storage.py, pdf/reportlab_renderer.py,
    notifications/smtp_notifier.py
Constraints:
  - Un 4xx de Pinata (credenciales, CID inexistente) nunca se reintenta.
  - Un 5xx de SMTP (destinatario rechazado) tampoco.
"""

from __future__ import annotations

import smtplib
from typing import Callable, TypeVar

import httpx
from tenacity import (
    RetryCallState,
    retry,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential_jitter,
)

from ...crosscutting.config import get_settings
from ...crosscutting.logger import logger

T = TypeVar("T")

TRANSIENT_HTTP_CODES: frozenset[int] = frozenset({408, 425, 429, 500, 502, 503, 504})

# smtplib: el servidor cortó o no aceptó la conexión.
_TRANSIENT_SMTP_ERRORS = (smtplib.SMTPServerDisconnected, smtplib.SMTPConnectError)


def get_http_status_code(exception: BaseException) -> int | None:
    """R: Status HTTP de la excepción, si lo trae (httpx.HTTPStatusError u otras)."""
    for holder in (getattr(exception, "response", None), exception):
        status_code = getattr(holder, "status_code", None)
        if isinstance(status_code, int):
            return status_code
    return None


def is_transient_error(exception: BaseException) -> bool:
    """R: True si vale la pena volver a intentar.

    Orden:
      1) Status HTTP: solo los de TRANSIENT_HTTP_CODES.
      2) SMTP: desconexión, conexión rechazada o respuesta 4xx.
      3) Timeouts y errores de transporte (built-in o httpx).
    """
    status_code = get_http_status_code(exception)
    if status_code is not None:
        return status_code in TRANSIENT_HTTP_CODES

    if isinstance(exception, _TRANSIENT_SMTP_ERRORS):
        return True
    if isinstance(exception, smtplib.SMTPResponseException):
        return 400 <= exception.smtp_code < 500

    return isinstance(exception, (TimeoutError, ConnectionError, httpx.TransportError))


def _log_retry(retry_state: RetryCallState) -> None:
    exc = retry_state.outcome.exception() if retry_state.outcome else None
    wait = retry_state.next_action.sleep if retry_state.next_action else 0
    logger.warning(
        "Reintentando llamada externa",
        extra={
            "function": getattr(retry_state.fn, "__qualname__", "unknown"),
            "attempt": retry_state.attempt_number,
            "wait_seconds": round(float(wait), 2),
            "error_type": type(exc).__name__ if exc else None,
        },
    )


def create_retry_decorator(
    max_attempts: int | None = None,
    base_delay: float | None = None,
    max_delay: float | None = None,
) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """R: Decorator tenacity; los argumentos omitidos salen de Settings.

    Propaga la última excepción (reraise) para que el adapter la traduzca
    a UpstreamError.
    """
    settings = get_settings()
    attempts = settings.retry_max_attempts if max_attempts is None else max_attempts
    initial = settings.retry_base_delay_seconds if base_delay is None else float(base_delay)
    ceiling = settings.retry_max_delay_seconds if max_delay is None else float(max_delay)

    if attempts <= 0:
        raise ValueError("max_attempts must be > 0")
    if initial < 0 or ceiling <= 0:
        raise ValueError("base_delay must be >= 0 and max_delay > 0")

    return retry(
        stop=stop_after_attempt(attempts),
        wait=wait_exponential_jitter(initial=initial, max=ceiling, jitter=initial),
        retry=retry_if_exception(is_transient_error),
        before_sleep=_log_retry,
        reraise=True,
    )
