"""Errors raised by the conversation service.

Each error carries the HTTP status the interface layer maps it to and a coarse
``category`` that is safe to show to end users or to report in a blast
summary. The message is meant for logs.
"""

from __future__ import annotations


class ConversationServiceError(Exception):
    """Base class for every error raised by the conversation use cases."""

    status_code: int = 500
    category: str = "internal_error"
    public_message: str = "Could not complete the request, try again"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.public_message)
        self.message = message or self.public_message


class InvalidRequestError(ConversationServiceError):
    """A required field is missing, empty or otherwise unusable."""

    status_code = 400
    category = "invalid_request"
    public_message = "Invalid request"


class MalformedIdError(InvalidRequestError):
    """An identifier does not have the 24-character object id shape."""

    public_message = "Invalid ID format"

    def __init__(self, field: str, value: object) -> None:
        super().__init__(f"Invalid ID format for {field}: {value!r}")
        self.field = field


class UnregisteredUserError(ConversationServiceError):
    """A referenced user does not exist or has been deleted."""

    status_code = 400
    category = "unregistered_user"
    public_message = "User is not registered"


class UnregisteredParticipantError(UnregisteredUserError):
    """A participant of an existing conversation is no longer registered."""

    public_message = "Users are not still registered"


class DuplicateConversationError(ConversationServiceError):
    """A conversation with exactly the same participants already exists."""

    status_code = 400
    category = "duplicate"
    public_message = "Conversation with provided users already exists"


class NotAParticipantError(ConversationServiceError):
    """The acting user is not part of the conversation."""

    status_code = 401
    category = "forbidden"
    public_message = "Sender is not part of the conversation"


class NotFoundError(ConversationServiceError):
    """The requested message, conversation or user does not exist."""

    status_code = 404
    category = "not_found"
    public_message = "Resource not found"


class DuplicateDataError(ConversationServiceError):
    """More records matched than the data model allows."""

    status_code = 500
    category = "integrity_error"
    public_message = "Could not complete the request, try again"


class StoreError(ConversationServiceError):
    """A persistence call failed."""

    status_code = 500
    category = "store_error"
    public_message = "Could not complete the request, try again"

    def __init__(self, operation: str, reason: str) -> None:
        super().__init__(f"{operation} failed: {reason}")
        self.operation = operation
        self.reason = reason


__all__ = [
    "ConversationServiceError",
    "DuplicateConversationError",
    "DuplicateDataError",
    "InvalidRequestError",
    "MalformedIdError",
    "NotAParticipantError",
    "NotFoundError",
    "StoreError",
    "UnregisteredParticipantError",
    "UnregisteredUserError",
]
