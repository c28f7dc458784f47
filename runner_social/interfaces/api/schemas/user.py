"""Pydantic models describing users as they appear on the wire."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class UserRead(BaseModel):
    """Public representation of a user populated into conversations and messages."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str = Field(alias="_id")
    username: str
    first_name: str
    last_name: str
    email: str
    profile_graphic: int = 0
    deleted: bool = False
    following: list[str] = Field(default_factory=list)
    followers: list[str] = Field(default_factory=list)


class UserReference(BaseModel):
    """A user named in a request body; only the username is trusted."""

    model_config = ConfigDict(extra="ignore")

    username: str = Field(..., min_length=1)


__all__ = ["UserRead", "UserReference"]
