"""Use case for retrieving a conversation."""

from sqlalchemy.orm import Session

from runner_social.domain.entities import Conversation
from runner_social.domain.exceptions import NotFoundError
from runner_social.domain.results import unwrap
from runner_social.infrastructure.repositories import ConversationRepository

from ..validators import ensure_object_id


def get_conversation(session: Session, *, conversation_id: str) -> Conversation:
    """Return the populated conversation identified by ``conversation_id``."""

    conversation_id = ensure_object_id(conversation_id, "cid")
    conversation = unwrap(ConversationRepository(session).get(conversation_id))
    if conversation is None:
        raise NotFoundError("Conversation not found")
    return conversation
