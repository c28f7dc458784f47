"""Use cases for messages."""

from .deliver_message import deliver_message
from .mark_as_read import mark_as_read
from .send_message import send_message

__all__ = ["deliver_message", "mark_as_read", "send_message"]
