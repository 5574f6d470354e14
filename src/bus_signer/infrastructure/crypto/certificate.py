from __future__ import annotations

import base64
import logging
import os

from bus_signer.application.exceptions import ReadError

logger = logging.getLogger(__name__)

PEM_MARKER = "----"


def load_certificate(path: str | os.PathLike[str]) -> str:
    """Read the certificate text out of a ``.crt`` file.

    Capture starts at the first line containing a ``----`` marker and runs to
    the end of the file, including any later delimiter lines, extra PEM blocks
    or trailing text. Every captured line is terminated with ``\\n``.
    """
    captured: list[str] = []
    reading = False
    try:
        with open(path, "r", encoding="utf-8", errors="replace") as f:
            for line in f:
                line = line.rstrip("\n")
                if not reading and PEM_MARKER in line:
                    reading = True
                if reading:
                    captured.append(line + "\n")
    except OSError as exc:
        raise ReadError(f"Cannot read certificate file '{path}': {exc}") from exc

    if not reading:
        logger.warning("No PEM delimiter found in certificate file '%s'", path)
    else:
        logger.debug("Read %d certificate lines from '%s'", len(captured), path)
    return "".join(captured)


def encode_certificate(cert_text: str) -> str:
    """Base64 of the certificate text, as embedded in a signed message."""
    return base64.b64encode(cert_text.encode("utf-8")).decode("ascii")
