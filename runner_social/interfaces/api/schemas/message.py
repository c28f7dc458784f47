"""Pydantic models describing message payloads."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .user import UserRead


class MessageRead(BaseModel):
    """A message with its sender and readers populated."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str = Field(alias="_id")
    message_content: str
    sender: UserRead
    sent_at: datetime
    read_by: list[UserRead] = Field(default_factory=list)
    cid: str


class SendMessageRequest(BaseModel):
    """Payload used to send a message to an existing conversation."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    sent_by: str = Field(..., description="Username of the sender")
    message_content: str
    cid: str


class MarkAsReadRequest(BaseModel):
    """Payload used to record that a user read a message."""

    mid: str
    uid: str


__all__ = ["MarkAsReadRequest", "MessageRead", "SendMessageRequest"]
