"""Persistence helpers for notification entities."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from runner_social.domain.entities import Notification
from runner_social.domain.results import Ok, StoreResult
from runner_social.infrastructure.models import MessageModel, NotificationModel
from runner_social.utils import ensure_naive_utc, ensure_utc, now_utc

from ._guard import store_operation
from .message_repository import MessageRepository


class NotificationRepository:
    """Provide create, list and delete operations for :class:`Notification` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    @store_operation("list notifications")
    def list_for_user(self, username: str) -> StoreResult[Sequence[Notification]]:
        """Return notifications for ``username``, newest message first."""

        query = (
            self.session.query(NotificationModel)
            .populate_existing()
            .join(MessageModel, NotificationModel.message_id == MessageModel.id)
            .filter(NotificationModel.user == username)
            .order_by(
                MessageModel.sent_at.desc(),
                NotificationModel.created_at.asc(),
                NotificationModel.id.asc(),
            )
        )
        return Ok([self._to_entity(model) for model in query.all()])

    @store_operation("find notifications for message")
    def list_for_user_and_message(
        self, username: str, message_id: str
    ) -> StoreResult[Sequence[Notification]]:
        query = (
            self.session.query(NotificationModel)
            .populate_existing()
            .filter(NotificationModel.user == username)
            .filter(NotificationModel.message_id == message_id)
            .order_by(NotificationModel.created_at.asc(), NotificationModel.id.asc())
        )
        return Ok([self._to_entity(model) for model in query.all()])

    @store_operation("create notification")
    def create(self, notification: Notification) -> StoreResult[Notification]:
        model = NotificationModel(
            id=notification.id,
            user=notification.user,
            message_id=notification.message.id,
            created_at=ensure_naive_utc(notification.created_at or now_utc()),
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return Ok(self._to_entity(model))

    @store_operation("delete notification")
    def delete(self, notification_id: str) -> StoreResult[bool]:
        """Delete one notification; ``Ok(False)`` when nothing matched."""

        removed = (
            self.session.query(NotificationModel)
            .filter(NotificationModel.id == notification_id)
            .delete(synchronize_session=False)
        )
        self.session.commit()
        return Ok(removed > 0)

    @staticmethod
    def _to_entity(model: NotificationModel) -> Notification:
        return Notification(
            id=model.id,
            user=model.user,
            message=MessageRepository.to_entity(model.message),
            created_at=ensure_utc(model.created_at),
        )


__all__ = ["NotificationRepository"]
