"""Domain entities exposed by the application."""

from .blast import BlastFailure, BlastReport
from .conversation import MIN_PARTICIPANTS, Conversation, participant_key
from .message import Message
from .notification import Notification
from .user import User

__all__ = [
    "BlastFailure",
    "BlastReport",
    "Conversation",
    "MIN_PARTICIPANTS",
    "Message",
    "Notification",
    "User",
    "participant_key",
]
