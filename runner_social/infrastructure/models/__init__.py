"""ORM models used by the application infrastructure."""

from .conversation import (
    ConversationModel,
    conversation_message_table,
    conversation_user_table,
)
from .message import MessageModel, message_read_by_table
from .notification import NotificationModel
from .user import UserModel, user_follow_table

__all__ = [
    "ConversationModel",
    "MessageModel",
    "NotificationModel",
    "UserModel",
    "conversation_message_table",
    "conversation_user_table",
    "message_read_by_table",
    "user_follow_table",
]
