"""
===============================================================================
TARJETA CRC — albaranes/interfaces/api/http/routers/mail.py
===============================================================================

Responsibilities:
    - POST /mail: envío libre por el notificador configurado (auth requerida).
    - Falla del envío => 500 genérico (causa logueada en el caso de uso).
===============================================================================
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from albaranes.application.usecases import SendMailInput, SendMailUseCase
from albaranes.container import get_send_mail_use_case
from albaranes.domain.ownership_policy import Actor
from albaranes.identity.auth_users import require_actor

from ..error_mapping import raise_use_case_error
from ..schemas.common import AcknowledgedRes
from ..schemas.mail import SendMailReq

router = APIRouter(prefix="/mail", tags=["mail"])


@router.post("", response_model=AcknowledgedRes)
def send_mail(
    req: SendMailReq,
    _actor: Actor = Depends(require_actor()),
    use_case: SendMailUseCase = Depends(get_send_mail_use_case),
):
    result = use_case.execute(
        SendMailInput(to=req.to, subject=req.subject, text=req.text, sender=req.sender)
    )
    if result.error is not None:
        raise_use_case_error(result.error)
    return AcknowledgedRes(acknowledged=result.acknowledged, message=result.message)
