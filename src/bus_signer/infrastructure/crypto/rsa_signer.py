"""RSA PKCS#1 v1.5 signatures over SHA-1.

The algorithm pair is fixed by the wire protocol and is not configurable.
"""
from __future__ import annotations

import base64

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import padding, rsa

from bus_signer.application.exceptions import CryptoError

SIGNATURE_PADDING = padding.PKCS1v15()
SIGNATURE_HASH = hashes.SHA1


def sign_bytes(key: rsa.RSAPrivateKey, data: bytes) -> bytes:
    try:
        return key.sign(data, SIGNATURE_PADDING, SIGNATURE_HASH())
    except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
        raise CryptoError(f"Signing failed: {exc}") from exc


def encode_signature(signature: bytes) -> str:
    return base64.b64encode(signature).decode("ascii")
