from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Protocol

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_MILLISECOND = timedelta(milliseconds=1)


class Clock(Protocol):
    def now(self) -> datetime: ...


class SystemClock:
    """Default wall-clock implementation."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


def to_epoch_millis(moment: datetime) -> int:
    """Whole milliseconds since the Unix epoch; ``moment`` must be timezone-aware."""
    return (moment - _EPOCH) // _MILLISECOND
