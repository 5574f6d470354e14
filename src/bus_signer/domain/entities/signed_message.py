from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from bus_signer.domain.entities.message import Message


@dataclass(frozen=True, slots=True)
class SignedMessage:
    """A message plus the signature over its canonical bytes and the signer's certificate.

    Both ``signature`` and ``certificate`` are base64 text.
    """

    message: Message
    signature: str
    certificate: str

    @property
    def topic(self) -> str:
        return self.message.topic

    @property
    def payload(self) -> Mapping[str, Any]:
        return self.message.payload

    @property
    def sequence(self) -> int:
        return self.message.sequence

    @property
    def timestamp(self) -> int:
        return self.message.timestamp

    @property
    def id(self) -> str:
        return self.message.id

    def to_wire(self) -> dict[str, Any]:
        return {
            **self.message.to_wire(),
            "signature": self.signature,
            "certificate": self.certificate,
        }
