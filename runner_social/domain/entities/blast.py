"""Outcome of fanning a blast message out to followers."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class BlastFailure:
    """A follower the blast could not be delivered to."""

    follower_id: str
    follower_username: str
    reason: str


@dataclass
class BlastReport:
    """Per-follower summary of a blast message."""

    succeeded: list[str] = field(default_factory=list)
    failed: list[BlastFailure] = field(default_factory=list)

    @property
    def attempted(self) -> int:
        return len(self.succeeded) + len(self.failed)

    @property
    def all_failed(self) -> bool:
        """Return ``True`` when followers were attempted and none succeeded."""

        return bool(self.failed) and not self.succeeded


__all__ = ["BlastFailure", "BlastReport"]
