"""Persistence helpers for messages and read receipts."""

from __future__ import annotations

import logging

from sqlalchemy import insert, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from runner_social.domain.entities import Message
from runner_social.domain.results import Ok, StoreResult
from runner_social.infrastructure.models import MessageModel, message_read_by_table
from runner_social.utils import ensure_naive_utc, ensure_utc, now_utc

from ._guard import store_operation
from .user_repository import UserRepository

logger = logging.getLogger(__name__)


class MessageRepository:
    """Create messages and grow their ``read_by`` sets."""

    def __init__(self, session: Session) -> None:
        self.session = session

    @store_operation("fetch message")
    def get(self, message_id: str) -> StoreResult[Message | None]:
        model = self._get_model(message_id)
        return Ok(self.to_entity(model) if model else None)

    @store_operation("create message")
    def create(self, message: Message, *, commit: bool = True) -> StoreResult[Message]:
        """Insert ``message`` with its sender as the first reader.

        With ``commit=False`` the rows are only flushed so the caller can finish
        the transaction together with the conversation append.
        """

        sent_at = ensure_naive_utc(message.sent_at)
        model = MessageModel(
            id=message.id,
            conversation_id=message.conversation_id,
            sender_id=message.sender.id,
            message_content=message.message_content,
            sent_at=sent_at,
        )
        self.session.add(model)
        self.session.flush()

        readers = {message.sender.id, *(reader.id for reader in message.read_by)}
        self.session.execute(
            insert(message_read_by_table),
            [
                {"message_id": model.id, "user_id": reader_id, "read_at": sent_at}
                for reader_id in sorted(readers)
            ],
        )
        if commit:
            self.session.commit()
        return Ok(self.to_entity(self._get_model(model.id)))

    @store_operation("add message reader")
    def add_reader(self, message_id: str, user_id: str) -> StoreResult[Message | None]:
        """Add ``user_id`` to the readers of ``message_id``.

        Adding a user that already read the message leaves the set unchanged.
        """

        if self._get_model(message_id) is None:
            return Ok(None)

        already_read = self.session.execute(
            select(message_read_by_table.c.user_id).where(
                message_read_by_table.c.message_id == message_id,
                message_read_by_table.c.user_id == user_id,
            )
        ).first()
        if already_read is None:
            try:
                self.session.execute(
                    insert(message_read_by_table).values(
                        message_id=message_id,
                        user_id=user_id,
                        read_at=ensure_naive_utc(now_utc()),
                    )
                )
                self.session.commit()
            except IntegrityError:
                # another request recorded the same read first
                self.session.rollback()
                logger.debug("Reader %s already recorded for message %s", user_id, message_id)

        return Ok(self.to_entity(self._get_model(message_id)))

    def _get_model(self, message_id: str) -> MessageModel | None:
        return (
            self.session.query(MessageModel)
            .populate_existing()
            .filter(MessageModel.id == message_id)
            .one_or_none()
        )

    @staticmethod
    def to_entity(model: MessageModel) -> Message:
        return Message(
            id=model.id,
            message_content=model.message_content,
            sender=UserRepository.to_entity(model.sender),
            sent_at=ensure_utc(model.sent_at),
            conversation_id=model.conversation_id,
            read_by=[UserRepository.to_entity(reader) for reader in model.read_by],
        )


__all__ = ["MessageRepository"]
