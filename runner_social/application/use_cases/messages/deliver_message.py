"""Persist a message and append it to its conversation."""

from sqlalchemy.orm import Session

from runner_social.domain.entities import Conversation, Message, User
from runner_social.domain.exceptions import NotFoundError
from runner_social.domain.identifiers import new_object_id
from runner_social.domain.results import Ok, unwrap
from runner_social.infrastructure.notifications import EventPublisher
from runner_social.infrastructure.repositories import ConversationRepository, MessageRepository
from runner_social.utils import now_utc


def deliver_message(
    session: Session,
    *,
    conversation_id: str,
    sender: User,
    content: str,
    publisher: EventPublisher,
) -> tuple[Message, Conversation]:
    """Store a message from ``sender``, append it and publish the conversation.

    The sender is the only initial reader. The message row and the append
    commit together, so a failed append leaves no message behind.
    Preconditions are checked by the caller.
    """

    message = Message(
        id=new_object_id(),
        message_content=content,
        sender=sender,
        sent_at=now_utc(),
        conversation_id=conversation_id,
        read_by=[sender],
    )
    stored = unwrap(MessageRepository(session).create(message, commit=False))
    appended = ConversationRepository(session).append_message(
        conversation_id, stored.id, stored.sent_at
    )
    if not isinstance(appended, Ok) or appended.value is None:
        session.rollback()
    conversation = unwrap(appended)
    if conversation is None:
        raise NotFoundError("Conversation not found")

    publisher.publish_conversation_update(conversation)
    return stored, conversation
