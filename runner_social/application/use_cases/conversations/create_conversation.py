"""Use case for starting a conversation between registered users."""

import logging
from collections.abc import Sequence

from sqlalchemy.orm import Session

from runner_social.domain.entities import MIN_PARTICIPANTS, Conversation
from runner_social.domain.exceptions import (
    DuplicateConversationError,
    DuplicateDataError,
    InvalidRequestError,
)
from runner_social.domain.identifiers import new_object_id
from runner_social.domain.results import Failure, unwrap
from runner_social.infrastructure.repositories import ConversationRepository, UserRepository
from runner_social.utils import now_utc

from ..directory import require_registered_username
from ..validators import ensure_username

logger = logging.getLogger(__name__)


def create_conversation(session: Session, *, usernames: Sequence[str]) -> Conversation:
    """Create an empty conversation for ``usernames``.

    Every participant is looked up again by username, so the caller's copy of a
    user is never trusted. Only one conversation may exist per participant set.
    """

    if not usernames:
        raise InvalidRequestError("A conversation needs at least two users")
    distinct = list(dict.fromkeys(ensure_username(name) for name in usernames))
    if len(distinct) < MIN_PARTICIPANTS:
        raise InvalidRequestError("A conversation needs at least two distinct users")

    user_repository = UserRepository(session)
    users = [require_registered_username(user_repository, name) for name in distinct]

    repository = ConversationRepository(session)
    participant_ids = {user.id for user in users}
    existing = unwrap(repository.find_by_participants(participant_ids, exact=True))
    if len(existing) > 1:
        logger.error(
            "Found %d conversations for participants %s", len(existing), sorted(participant_ids)
        )
        raise DuplicateDataError()
    if existing:
        raise DuplicateConversationError()

    conversation = Conversation(
        id=new_object_id(),
        users=users,
        updated_at=now_utc(),
        messages=[],
    )
    result = repository.create(conversation)
    if isinstance(result, Failure) and result.is_conflict:
        # a concurrent request created the same participant set first
        raise DuplicateConversationError()
    created = unwrap(result)

    logger.info("Created conversation %s for %s", created.id, ", ".join(distinct))
    return created
