"""Aggregate application use cases."""

from .conversations import (
    create_conversation,
    find_or_create_conversation,
    get_conversation,
    list_conversations,
    send_blast_message,
)
from .messages import mark_as_read, send_message
from .notifications import delete_notification, list_notifications

__all__ = [
    "create_conversation",
    "delete_notification",
    "find_or_create_conversation",
    "get_conversation",
    "list_conversations",
    "list_notifications",
    "mark_as_read",
    "send_blast_message",
    "send_message",
]
