from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from bus_signer.application.exceptions import SigningError
from bus_signer.domain.entities.message import Message
from bus_signer.domain.entities.signed_message import SignedMessage
from bus_signer.infrastructure.bus.serializer import serialize_message
from bus_signer.infrastructure.crypto.certificate import encode_certificate, load_certificate
from bus_signer.infrastructure.crypto.keys import load_private_key
from bus_signer.infrastructure.crypto.provider import ensure_provider
from bus_signer.infrastructure.crypto.rsa_signer import encode_signature, sign_bytes

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SigningResult:
    """Outcome of one signing run: exactly one of ``signed`` / ``error`` is set."""

    signed: SignedMessage | None = None
    error: SigningError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> SignedMessage:
        if self.error is not None:
            raise self.error
        if self.signed is None:
            raise SigningError("Signing result holds neither a message nor an error")
        return self.signed


@dataclass(frozen=True, slots=True)
class SigningRequest:
    """Deferred signing of one message with one certificate/key pair.

    Building a request touches nothing; files are read and the signature is
    computed each time :meth:`run` or :meth:`attempt` is called.
    """

    message: Message
    cert_path: str | os.PathLike[str]
    key_path: str | os.PathLike[str]
    key_password: bytes | None = None

    def run(self) -> SignedMessage:
        """Sign the message, raising the first :class:`SigningError` hit."""
        ensure_provider()
        cert_text = load_certificate(self.cert_path)
        key = load_private_key(self.key_path, self.key_password)
        data = serialize_message(self.message)
        signature = sign_bytes(key, data)

        signed = SignedMessage(
            message=self.message,
            signature=encode_signature(signature),
            certificate=encode_certificate(cert_text),
        )
        logger.info("Signed message %s on '%s'", self.message.id, self.message.topic)
        return signed

    def attempt(self) -> SigningResult:
        """Like :meth:`run`, but hand back the failure instead of raising it."""
        try:
            return SigningResult(signed=self.run())
        except SigningError as exc:
            logger.debug("Signing message %s failed: %s", self.message.id, exc.detail)
            return SigningResult(error=exc)


def sign_message(
    message: Message,
    cert_path: str | os.PathLike[str],
    key_path: str | os.PathLike[str],
    key_password: bytes | None = None,
) -> SigningRequest:
    return SigningRequest(
        message=message,
        cert_path=cert_path,
        key_path=key_path,
        key_password=key_password,
    )
