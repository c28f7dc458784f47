from .conversation import (
    BlastFailureRead,
    BlastMessageRequest,
    BlastReportRead,
    ConversationCreate,
    ConversationRead,
)
from .message import MarkAsReadRequest, MessageRead, SendMessageRequest
from .notification import NotificationRead
from .user import UserRead, UserReference

__all__ = [
    "BlastFailureRead",
    "BlastMessageRequest",
    "BlastReportRead",
    "ConversationCreate",
    "ConversationRead",
    "MarkAsReadRequest",
    "MessageRead",
    "NotificationRead",
    "SendMessageRequest",
    "UserRead",
    "UserReference",
]
