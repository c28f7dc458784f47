"""Use case for recording that a user read a message."""

import logging

from sqlalchemy.orm import Session

from runner_social.domain.entities import Message, User
from runner_social.domain.exceptions import DuplicateDataError, NotFoundError
from runner_social.domain.results import unwrap
from runner_social.infrastructure.notifications import (
    EventPublisher,
    NotificationUpdateType,
    event_publisher,
)
from runner_social.infrastructure.repositories import (
    ConversationRepository,
    MessageRepository,
    NotificationRepository,
    UserRepository,
)

from ..validators import ensure_object_id

logger = logging.getLogger(__name__)


def _clear_notification(
    session: Session, reader: User, message: Message, publisher: EventPublisher
) -> None:
    repository = NotificationRepository(session)
    pending = unwrap(repository.list_for_user_and_message(reader.username, message.id))
    if not pending:
        return
    if len(pending) > 1:
        logger.error(
            "Found %d notifications for %s on message %s",
            len(pending),
            reader.username,
            message.id,
        )
        raise DuplicateDataError()

    notification = pending[0]
    if unwrap(repository.delete(notification.id)):
        publisher.publish_notification_update(notification, NotificationUpdateType.REMOVE)


def mark_as_read(
    session: Session,
    *,
    message_id: str,
    user_id: str,
    publisher: EventPublisher | None = None,
) -> Message:
    """Add ``user_id`` to the readers of ``message_id``.

    Marking a message twice is not an error. The reader's notification for the
    message goes away and the owning conversation is published again.
    """

    message_id = ensure_object_id(message_id, "mid")
    user_id = ensure_object_id(user_id, "uid")
    publisher = publisher or event_publisher

    reader = unwrap(UserRepository(session).get(user_id))
    if reader is None:
        raise NotFoundError("User not found")

    messages = MessageRepository(session)
    if unwrap(messages.get(message_id)) is None:
        raise NotFoundError("Message not found")
    message = unwrap(messages.add_reader(message_id, reader.id))
    if message is None:
        raise NotFoundError("Message not found")

    _clear_notification(session, reader, message, publisher)

    conversation = unwrap(ConversationRepository(session).get(message.conversation_id))
    if conversation is None:
        logger.warning(
            "Message %s points at missing conversation %s", message.id, message.conversation_id
        )
    else:
        publisher.publish_conversation_update(conversation)
    return message
