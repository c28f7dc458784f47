"""Use case for sending a message inside an existing conversation."""

import logging

from sqlalchemy.orm import Session

from runner_social.domain.entities import Message
from runner_social.domain.exceptions import (
    NotAParticipantError,
    NotFoundError,
    UnregisteredParticipantError,
)
from runner_social.domain.results import unwrap
from runner_social.infrastructure.notifications import EventPublisher, event_publisher
from runner_social.infrastructure.repositories import ConversationRepository, UserRepository

from ..directory import require_registered_username
from ..validators import ensure_content, ensure_object_id, ensure_username
from .deliver_message import deliver_message

logger = logging.getLogger(__name__)


def send_message(
    session: Session,
    *,
    sender_username: str,
    content: str,
    conversation_id: str,
    publisher: EventPublisher | None = None,
) -> Message:
    """Send ``content`` from ``sender_username`` to ``conversation_id``."""

    content = ensure_content(content)
    conversation_id = ensure_object_id(conversation_id, "cid")
    sender_username = ensure_username(sender_username)

    conversation = unwrap(ConversationRepository(session).get(conversation_id))
    if conversation is None:
        raise NotFoundError("Conversation not found")

    user_repository = UserRepository(session)
    for participant in conversation.users:
        if unwrap(user_repository.get(participant.id)) is None:
            logger.warning(
                "Conversation %s has unregistered participant %s",
                conversation_id,
                participant.username,
            )
            raise UnregisteredParticipantError()

    sender = require_registered_username(user_repository, sender_username)
    if not conversation.has_participant(sender):
        raise NotAParticipantError()

    message, _ = deliver_message(
        session,
        conversation_id=conversation.id,
        sender=sender,
        content=content,
        publisher=publisher or event_publisher,
    )
    logger.info("User %s sent message %s to %s", sender.username, message.id, conversation.id)
    return message
