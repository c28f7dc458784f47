"""Pydantic models describing conversation payloads."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .message import MessageRead
from .user import UserRead, UserReference


class ConversationRead(BaseModel):
    """A conversation with users and messages populated."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str = Field(alias="_id")
    users: list[UserRead]
    messages: list[MessageRead] = Field(default_factory=list)
    updated_at: datetime


class ConversationCreate(BaseModel):
    """Payload used to start a conversation."""

    users: list[UserReference]


class BlastMessageRequest(BaseModel):
    """Payload used to send one message to every follower of ``uid``."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    uid: str
    message_content: str


class BlastFailureRead(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    follower_id: str
    follower_username: str
    reason: str


class BlastReportRead(BaseModel):
    """Per-follower outcome of a blast message."""

    succeeded: list[str] = Field(default_factory=list)
    failed: list[BlastFailureRead] = Field(default_factory=list)


__all__ = [
    "BlastFailureRead",
    "BlastMessageRequest",
    "BlastReportRead",
    "ConversationCreate",
    "ConversationRead",
]
