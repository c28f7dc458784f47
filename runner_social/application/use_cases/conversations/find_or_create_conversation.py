"""Use case returning the one-to-one conversation between two users."""

import logging

from sqlalchemy.orm import Session

from runner_social.domain.entities import Conversation, User
from runner_social.domain.exceptions import DuplicateDataError, InvalidRequestError, StoreError
from runner_social.domain.identifiers import new_object_id
from runner_social.domain.results import Failure, unwrap
from runner_social.infrastructure.repositories import ConversationRepository
from runner_social.utils import now_utc

logger = logging.getLogger(__name__)


def _single_match(repository: ConversationRepository, participant_ids: set[str]) -> Conversation | None:
    matches = unwrap(repository.find_by_participants(participant_ids, exact=True))
    if len(matches) > 1:
        logger.error(
            "Found %d conversations for participants %s", len(matches), sorted(participant_ids)
        )
        raise DuplicateDataError()
    return matches[0] if matches else None


def find_or_create_conversation(
    session: Session, *, user_a: User, user_b: User
) -> Conversation:
    """Return the conversation of exactly ``{user_a, user_b}``, creating it if needed."""

    participant_ids = {user_a.id, user_b.id}
    if len(participant_ids) != 2:
        raise InvalidRequestError("A conversation needs two distinct users")

    repository = ConversationRepository(session)
    existing = _single_match(repository, participant_ids)
    if existing is not None:
        return existing

    result = repository.create(
        Conversation(
            id=new_object_id(),
            users=[user_a, user_b],
            updated_at=now_utc(),
            messages=[],
        )
    )
    if isinstance(result, Failure) and result.is_conflict:
        existing = _single_match(repository, participant_ids)
        if existing is None:
            raise StoreError(result.operation, result.reason)
        return existing

    created = unwrap(result)
    logger.info(
        "Created conversation %s between %s and %s",
        created.id,
        user_a.username,
        user_b.username,
    )
    return created
