"""Serialize conversation events and push them to websocket subscribers."""

from __future__ import annotations

import logging
from datetime import datetime
from enum import Enum
from typing import Any, Protocol

from runner_social.domain.entities import Conversation, Message, Notification, User
from runner_social.utils import ensure_utc

from .manager import RealtimeConnectionManager, realtime_manager

logger = logging.getLogger(__name__)

CONVERSATION_UPDATE = "conversationUpdate"
NOTIFICATIONS_UPDATE = "notificationsUpdate"


class NotificationUpdateType(str, Enum):
    """Whether a ``notificationsUpdate`` event adds or removes a notification."""

    ADD = "add"
    REMOVE = "remove"


class EventPublisher(Protocol):
    """What the use cases need from a realtime channel."""

    def publish_conversation_update(self, conversation: Conversation) -> None: ...

    def publish_notification_update(
        self, notification: Notification, update_type: NotificationUpdateType
    ) -> None: ...


class ConversationEventPublisher:
    """Broadcast ``conversationUpdate`` and ``notificationsUpdate`` events.

    Publishing is fire-and-forget: delivery problems are logged and never
    reach the caller.
    """

    def __init__(self, manager: RealtimeConnectionManager) -> None:
        self._manager = manager

    def publish_conversation_update(self, conversation: Conversation) -> None:
        self._publish(CONVERSATION_UPDATE, serialize_conversation(conversation))

    def publish_notification_update(
        self, notification: Notification, update_type: NotificationUpdateType
    ) -> None:
        payload = {
            "notification": serialize_notification(notification),
            "type": NotificationUpdateType(update_type).value,
        }
        self._publish(NOTIFICATIONS_UPDATE, payload)

    def _publish(self, event_type: str, payload: dict[str, Any]) -> None:
        try:
            self._manager.broadcast({"type": event_type, "data": payload})
        except Exception:
            logger.exception("Could not publish %s event", event_type)


def _isoformat(value: datetime | None) -> str | None:
    value = ensure_utc(value)
    return value.isoformat() if value else None


def serialize_user(user: User) -> dict[str, Any]:
    return {
        "_id": user.id,
        "username": user.username,
        "firstName": user.first_name,
        "lastName": user.last_name,
        "email": user.email,
        "profileGraphic": user.profile_graphic,
        "deleted": user.deleted,
        "following": list(user.following),
        "followers": list(user.followers),
    }


def serialize_message(message: Message) -> dict[str, Any]:
    return {
        "_id": message.id,
        "messageContent": message.message_content,
        "sender": serialize_user(message.sender),
        "sentAt": _isoformat(message.sent_at),
        "readBy": [serialize_user(reader) for reader in message.read_by],
        "cid": message.conversation_id,
    }


def serialize_conversation(conversation: Conversation) -> dict[str, Any]:
    """Return the populated wire representation of ``conversation``."""

    return {
        "_id": conversation.id,
        "users": [serialize_user(user) for user in conversation.users],
        "messages": [serialize_message(message) for message in conversation.messages],
        "updatedAt": _isoformat(conversation.updated_at),
    }


def serialize_notification(notification: Notification) -> dict[str, Any]:
    return {
        "_id": notification.id,
        "user": notification.user,
        "message": serialize_message(notification.message),
    }


event_publisher = ConversationEventPublisher(realtime_manager)


__all__ = [
    "CONVERSATION_UPDATE",
    "ConversationEventPublisher",
    "EventPublisher",
    "NOTIFICATIONS_UPDATE",
    "NotificationUpdateType",
    "event_publisher",
    "serialize_conversation",
    "serialize_message",
    "serialize_notification",
    "serialize_user",
]
