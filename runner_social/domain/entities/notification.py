"""Domain entity representing a user notification."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from .message import Message


@dataclass
class Notification:
    """Pending alert telling ``user`` about ``message``."""

    id: str
    user: str
    message: Message
    created_at: datetime | None = None


__all__ = ["Notification"]
