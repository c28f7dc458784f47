"""Use case for dismissing a notification."""

import logging

from sqlalchemy.orm import Session

from runner_social.domain.results import unwrap
from runner_social.infrastructure.repositories import NotificationRepository

from ..validators import ensure_object_id

logger = logging.getLogger(__name__)


def delete_notification(session: Session, *, notification_id: str) -> bool:
    """Delete a notification; ``False`` when none matched. Messages are left alone."""

    notification_id = ensure_object_id(notification_id, "nid")
    removed = unwrap(NotificationRepository(session).delete(notification_id))
    if removed:
        logger.info("Deleted notification %s", notification_id)
    return removed
