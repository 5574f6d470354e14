from __future__ import annotations

import re
import uuid
from datetime import datetime
from typing import NewType

MessageId = NewType("MessageId", str)

MESSAGE_ID_PATTERN = re.compile(r"^\d{4}-[0-9a-f-]{36}$")


def new_message_id(now: datetime) -> MessageId:
    """Build a ``<year>-<uuid4>`` message id for a message created at ``now``."""
    return MessageId(f"{now.year:04d}-{uuid.uuid4()}")
