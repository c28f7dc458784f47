"""Domain entity representing a conversation between users."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable

from .message import Message
from .user import User

MIN_PARTICIPANTS = 2


def participant_key(user_ids: Iterable[str]) -> str:
    """Return the canonical key of an unordered participant set."""

    return ":".join(sorted(set(user_ids)))


@dataclass
class Conversation:
    """An immutable participant set and its chronological messages."""

    id: str
    users: list[User]
    updated_at: datetime
    messages: list[Message] = field(default_factory=list)

    @property
    def participant_ids(self) -> set[str]:
        return {user.id for user in self.users}

    @property
    def participant_key(self) -> str:
        return participant_key(self.participant_ids)

    def has_participant(self, user: User) -> bool:
        """Return ``True`` when ``user`` is part of the conversation by identity."""

        return user.id in self.participant_ids


__all__ = ["Conversation", "MIN_PARTICIPANTS", "participant_key"]
