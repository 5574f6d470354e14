"""Root conftest: isolates settings from the host environment before any module imports."""
from __future__ import annotations

import os

for _name in [n for n in os.environ if n.startswith("BUS_SIGNER_")]:
    del os.environ[_name]

os.environ.setdefault("BUS_SIGNER_LOG_LEVEL", "DEBUG")
