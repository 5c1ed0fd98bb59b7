"""Schemas HTTP para /mail."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class SendMailReq(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    to: str = Field(..., min_length=3, max_length=320)
    sender: str | None = Field(default=None, alias="from", max_length=320)
    subject: str = Field(..., min_length=1, max_length=300)
    text: str = Field(..., min_length=1, max_length=20000)
