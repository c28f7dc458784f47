"""Pydantic models describing notification payloads."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .message import MessageRead


class NotificationRead(BaseModel):
    """Representation of a notification delivered to the client."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias="_id")
    user: str
    message: MessageRead


__all__ = ["NotificationRead"]
