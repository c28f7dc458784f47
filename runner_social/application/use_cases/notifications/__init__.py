"""Use cases for user notifications."""

from .delete_notification import delete_notification
from .list_notifications import list_notifications

__all__ = ["delete_notification", "list_notifications"]
