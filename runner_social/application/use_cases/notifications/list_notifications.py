"""Use case for listing pending notifications."""

from sqlalchemy.orm import Session

from runner_social.domain.entities import Notification
from runner_social.domain.results import unwrap
from runner_social.infrastructure.repositories import NotificationRepository

from ..validators import ensure_username


def list_notifications(session: Session, *, username: str) -> list[Notification]:
    """Return notifications addressed to ``username``, newest message first."""

    username = ensure_username(username)
    return list(unwrap(NotificationRepository(session).list_for_user(username)))
