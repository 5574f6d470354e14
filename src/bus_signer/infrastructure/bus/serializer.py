"""Canonical JSON encoding of bus messages.

Signatures are computed over these exact bytes, so the output must not
depend on dict insertion order: every mapping is emitted with its keys
sorted, using compact separators and UTF-8 text.
"""
from __future__ import annotations

import json
from types import MappingProxyType
from typing import Any

import pydantic

from bus_signer.application.exceptions import AppError, SerializationError
from bus_signer.domain.entities.message import Message
from bus_signer.domain.entities.signed_message import SignedMessage
from bus_signer.infrastructure.bus.protocol import MessageWire, SignedMessageWire


class _Encoder(json.JSONEncoder):
    def default(self, o: object) -> Any:
        if isinstance(o, MappingProxyType):
            return dict(o)
        return super().default(o)


def _dumps(obj: dict[str, Any]) -> bytes:
    try:
        text = json.dumps(
            obj,
            cls=_Encoder,
            sort_keys=True,
            separators=(",", ":"),
            ensure_ascii=False,
            allow_nan=False,
        )
        return text.encode("utf-8")
    except (TypeError, ValueError) as exc:
        raise SerializationError(f"Message is not JSON-serializable: {exc}") from exc


def serialize_message(message: Message) -> bytes:
    """Canonical bytes of an unsigned message; this is what gets signed."""
    return _dumps(message.to_wire())


def serialize_signed(signed: SignedMessage) -> bytes:
    return _dumps(signed.to_wire())


def _message_from_wire(wire: MessageWire) -> Message:
    return Message(
        topic=wire.topic,
        payload=wire.msg,
        sequence=wire.i,
        timestamp=wire.timestamp,
        id=wire.msg_id,
    )


def deserialize_message(raw: str | bytes) -> Message:
    try:
        wire = MessageWire.model_validate_json(raw)
        return _message_from_wire(wire)
    except (pydantic.ValidationError, AppError) as exc:
        raise SerializationError(f"Invalid message document: {exc}") from exc


def deserialize_signed(raw: str | bytes) -> SignedMessage:
    try:
        wire = SignedMessageWire.model_validate_json(raw)
        message = _message_from_wire(wire)
    except (pydantic.ValidationError, AppError) as exc:
        raise SerializationError(f"Invalid signed message document: {exc}") from exc
    return SignedMessage(
        message=message,
        signature=wire.signature,
        certificate=wire.certificate,
    )
