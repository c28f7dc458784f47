"""Endpoints for listing and dismissing notifications."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from runner_social.application.use_cases.notifications import (
    delete_notification as delete_notification_uc,
    list_notifications as list_notifications_uc,
)
from runner_social.domain.entities import Notification
from runner_social.domain.exceptions import ConversationServiceError
from runner_social.infrastructure.database import get_db
from runner_social.infrastructure.notifications import serialize_notification
from runner_social.interfaces.api.routes_helpers import to_http_exception
from runner_social.interfaces.api.schemas import NotificationRead

router = APIRouter(prefix="/notification", tags=["notifications"])


def _to_read_model(notification: Notification) -> NotificationRead:
    return NotificationRead.model_validate(serialize_notification(notification))


@router.get("/getNotifications/{username}", response_model=list[NotificationRead])
def list_notifications(username: str, db: Session = Depends(get_db)):
    """Return the notifications addressed to ``username``."""

    try:
        notifications = list_notifications_uc(db, username=username)
    except ConversationServiceError as exc:
        raise to_http_exception(exc) from exc
    return [_to_read_model(notification) for notification in notifications]


@router.delete("/deleteNotification/{nid}", response_model=bool)
def delete_notification(nid: str, db: Session = Depends(get_db)) -> bool:
    """Dismiss a notification; ``false`` when it did not exist."""

    try:
        return delete_notification_uc(db, notification_id=nid)
    except ConversationServiceError as exc:
        raise to_http_exception(exc) from exc
