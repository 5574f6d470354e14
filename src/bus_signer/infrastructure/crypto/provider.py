"""One-time check that the crypto backend can do RSA over SHA-1."""
from __future__ import annotations

import logging
import threading

import cryptography
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes

from bus_signer.application.exceptions import CryptoError

logger = logging.getLogger(__name__)

_lock = threading.Lock()
_registered = False


def ensure_provider() -> None:
    """Register the crypto provider for this process.

    Safe to call any number of times from any thread; the probe runs once.
    A failed probe is not cached, so a later call tries again.
    """
    global _registered
    if _registered:
        return
    with _lock:
        if _registered:
            return
        try:
            digest = hashes.Hash(hashes.SHA1())
            digest.update(b"")
            digest.finalize()
        except UnsupportedAlgorithm as exc:
            raise CryptoError("Crypto backend does not support SHA-1") from exc
        _registered = True
        logger.debug("Crypto provider registered (cryptography %s)", cryptography.__version__)


def is_registered() -> bool:
    return _registered
