"""Wire models for messages received as JSON."""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict


class MessageWire(BaseModel):
    model_config = ConfigDict(strict=True, extra="ignore")

    i: int
    msg: dict[str, Any]
    msg_id: str
    timestamp: int
    topic: str


class SignedMessageWire(MessageWire):
    signature: str
    certificate: str
