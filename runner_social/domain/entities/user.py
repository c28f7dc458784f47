"""Domain entity representing a user of the directory."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class User:
    """Identity and follow graph of a registered runner."""

    id: str
    username: str
    first_name: str
    last_name: str
    email: str
    profile_graphic: int = 0
    deleted: bool = False
    following: list[str] = field(default_factory=list)
    followers: list[str] = field(default_factory=list)
    created_at: datetime | None = None

    @property
    def is_registered(self) -> bool:
        """Return ``True`` when the user has not been soft-deleted."""

        return not self.deleted


__all__ = ["User"]
