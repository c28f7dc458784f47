"""Domain entity representing a direct message."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from .user import User


@dataclass
class Message:
    """A message sent inside exactly one conversation."""

    id: str
    message_content: str
    sender: User
    sent_at: datetime
    conversation_id: str
    read_by: list[User] = field(default_factory=list)


__all__ = ["Message"]
