"""Use cases for conversations."""

from .create_conversation import create_conversation
from .find_or_create_conversation import find_or_create_conversation
from .get_conversation import get_conversation
from .list_conversations import list_conversations
from .send_blast_message import send_blast_message

__all__ = [
    "create_conversation",
    "find_or_create_conversation",
    "get_conversation",
    "list_conversations",
    "send_blast_message",
]
