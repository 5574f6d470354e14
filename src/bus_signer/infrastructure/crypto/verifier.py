"""Check signed messages against the public key of their embedded certificate.

Only the signature is checked. The certificate itself is not validated
against any CA, and its validity period is ignored.
"""
from __future__ import annotations

import base64
import logging

from cryptography import x509
from cryptography.exceptions import InvalidSignature, UnsupportedAlgorithm
from cryptography.hazmat.primitives.asymmetric import rsa

from bus_signer.application.exceptions import CryptoError
from bus_signer.domain.entities.signed_message import SignedMessage
from bus_signer.infrastructure.bus.serializer import serialize_message
from bus_signer.infrastructure.crypto.provider import ensure_provider
from bus_signer.infrastructure.crypto.rsa_signer import SIGNATURE_HASH, SIGNATURE_PADDING

logger = logging.getLogger(__name__)


def _b64decode(value: str, what: str) -> bytes:
    try:
        return base64.b64decode(value, validate=True)
    except ValueError as exc:
        raise CryptoError(f"{what} is not valid base64") from exc


def load_public_key(certificate: str) -> rsa.RSAPublicKey:
    """Public key of the first PEM certificate in the base64 ``certificate`` text."""
    pem = _b64decode(certificate, "Certificate")
    try:
        cert = x509.load_pem_x509_certificate(pem)
        public_key = cert.public_key()
    except (ValueError, UnsupportedAlgorithm) as exc:
        raise CryptoError(f"Cannot load certificate: {exc}") from exc
    if not isinstance(public_key, rsa.RSAPublicKey):
        raise CryptoError(f"Unsupported certificate key type {type(public_key).__name__}")
    return public_key


def verify_bytes(data: bytes, signature: str, certificate: str) -> bool:
    ensure_provider()
    public_key = load_public_key(certificate)
    raw_signature = _b64decode(signature, "Signature")
    try:
        public_key.verify(raw_signature, data, SIGNATURE_PADDING, SIGNATURE_HASH())
    except InvalidSignature:
        return False
    return True


def verify(signed: SignedMessage) -> bool:
    ok = verify_bytes(serialize_message(signed.message), signed.signature, signed.certificate)
    if not ok:
        logger.warning("Signature check failed for message %s on '%s'", signed.id, signed.topic)
    return ok
