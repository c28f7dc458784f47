"""Realtime notification helpers for the infrastructure layer."""

from .manager import RealtimeConnectionManager, Subscriber, realtime_manager
from .publisher import (
    CONVERSATION_UPDATE,
    NOTIFICATIONS_UPDATE,
    ConversationEventPublisher,
    EventPublisher,
    NotificationUpdateType,
    event_publisher,
    serialize_conversation,
    serialize_message,
    serialize_notification,
    serialize_user,
)

__all__ = [
    "CONVERSATION_UPDATE",
    "ConversationEventPublisher",
    "EventPublisher",
    "NOTIFICATIONS_UPDATE",
    "NotificationUpdateType",
    "RealtimeConnectionManager",
    "Subscriber",
    "event_publisher",
    "realtime_manager",
    "serialize_conversation",
    "serialize_message",
    "serialize_notification",
    "serialize_user",
]
