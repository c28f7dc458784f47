"""Use case for listing the conversations of a user."""

from sqlalchemy.orm import Session

from runner_social.domain.entities import Conversation
from runner_social.domain.exceptions import NotFoundError
from runner_social.domain.results import unwrap
from runner_social.infrastructure.repositories import ConversationRepository, UserRepository

from ..validators import ensure_object_id


def list_conversations(session: Session, *, user_id: str) -> list[Conversation]:
    """Return every conversation ``user_id`` takes part in, most recent first."""

    user_id = ensure_object_id(user_id, "uid")
    if unwrap(UserRepository(session).get(user_id)) is None:
        raise NotFoundError("User not found")
    return unwrap(
        ConversationRepository(session).find_by_participants({user_id}, exact=False)
    )
