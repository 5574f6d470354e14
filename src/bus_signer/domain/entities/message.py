from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from types import MappingProxyType
from typing import Any

from bus_signer.application.exceptions import ValidationError
from bus_signer.application.ports.clock import Clock, SystemClock, to_epoch_millis
from bus_signer.domain.value_objects.ids import new_message_id


def freeze(value: Any) -> Any:
    """Return a read-only deep snapshot of a JSON-like value.

    Mappings become ``MappingProxyType`` over a fresh dict, lists and tuples
    become tuples. Anything else is returned as is and left for the
    serializer to accept or reject.
    """
    if isinstance(value, Mapping):
        return MappingProxyType({k: freeze(v) for k, v in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(freeze(v) for v in value)
    return value


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True, slots=True)
class Message:
    """An unsigned bus message.

    Use :meth:`create` to build a new message; it stamps the current time and
    generates the id. The plain constructor takes every field and is meant for
    messages decoded off the wire.
    """

    topic: str
    payload: Mapping[str, Any]
    sequence: int
    timestamp: int
    id: str

    def __post_init__(self) -> None:
        if not isinstance(self.topic, str) or not self.topic:
            raise ValidationError("Message topic must be a non-empty string")
        if not isinstance(self.payload, Mapping):
            raise ValidationError("Message payload must be a mapping")
        if any(not isinstance(key, str) for key in self.payload):
            raise ValidationError("Message payload keys must be strings")
        if not _is_int(self.sequence):
            raise ValidationError("Message sequence must be an integer")
        if not _is_int(self.timestamp):
            raise ValidationError("Message timestamp must be an integer")
        if not isinstance(self.id, str) or not self.id:
            raise ValidationError("Message id must be a non-empty string")
        object.__setattr__(self, "payload", freeze(self.payload))

    @classmethod
    def create(
        cls,
        topic: str,
        payload: Mapping[str, Any],
        sequence: int,
        *,
        clock: Clock | None = None,
    ) -> Message:
        now = (clock or SystemClock()).now()
        return cls(
            topic=topic,
            payload=payload,
            sequence=sequence,
            timestamp=to_epoch_millis(now),
            id=new_message_id(now),
        )

    @property
    def created_at(self) -> datetime:
        return datetime(1970, 1, 1, tzinfo=timezone.utc) + timedelta(milliseconds=self.timestamp)

    def to_wire(self) -> dict[str, Any]:
        """Wire-format mapping of this message, keyed the way it is serialized."""
        return {
            "i": self.sequence,
            "msg": self.payload,
            "msg_id": self.id,
            "timestamp": self.timestamp,
            "topic": self.topic,
        }
