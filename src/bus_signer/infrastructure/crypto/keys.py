from __future__ import annotations

import base64
import logging
import os
import re

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives.asymmetric import rsa
from cryptography.hazmat.primitives.serialization import load_pem_private_key

from bus_signer.application.exceptions import CryptoError, ParseError, ReadError

logger = logging.getLogger(__name__)

_PEM_PRIVATE_KEY = re.compile(
    r"-----BEGIN (?P<label>[A-Z0-9 ]*PRIVATE KEY)-----\r?\n"
    r"(?P<body>.*?)"
    r"-----END (?P=label)-----",
    re.DOTALL,
)


def _check_body(body: str) -> None:
    # Legacy encrypted keys carry "Proc-Type:"/"DEK-Info:" headers before the data.
    lines = [ln.strip() for ln in body.splitlines()]
    data = "".join(ln for ln in lines if ln and ":" not in ln)
    if not data:
        raise ParseError("PEM private key block is empty")
    try:
        base64.b64decode(data, validate=True)
    except ValueError as exc:
        raise ParseError("PEM private key block is not valid base64") from exc


def extract_private_key_block(text: str) -> bytes:
    """Return the first PEM private key block in ``text``, delimiters included."""
    match = _PEM_PRIVATE_KEY.search(text)
    if match is None:
        raise ParseError("No PEM private key block found")
    _check_body(match.group("body"))
    try:
        return match.group(0).encode("ascii") + b"\n"
    except UnicodeEncodeError as exc:
        raise ParseError("PEM private key block contains non-ASCII text") from exc


def load_private_key(
    path: str | os.PathLike[str],
    password: bytes | None = None,
) -> rsa.RSAPrivateKey:
    """Load an RSA signing key from a PEM file."""
    try:
        with open(path, "rb") as f:
            text = f.read().decode("utf-8", errors="replace")
    except OSError as exc:
        raise ReadError(f"Cannot read key file '{path}': {exc}") from exc

    block = extract_private_key_block(text)

    try:
        key = load_pem_private_key(block, password=password)
    except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
        raise CryptoError(f"Cannot load private key from '{path}': {exc}") from exc

    if not isinstance(key, rsa.RSAPrivateKey):
        raise CryptoError(
            f"Unsupported key type {type(key).__name__} in '{path}', RSA key required"
        )

    logger.debug("Loaded %d-bit RSA key from '%s'", key.key_size, path)
    return key
