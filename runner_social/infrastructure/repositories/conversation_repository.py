"""Persistence helpers for conversations."""

from __future__ import annotations

from datetime import datetime
from typing import Iterable

from sqlalchemy import case, func, insert, select, update
from sqlalchemy.orm import Session

from runner_social.domain.entities import Conversation, participant_key
from runner_social.domain.results import Ok, StoreResult
from runner_social.infrastructure.models import (
    ConversationModel,
    UserModel,
    conversation_message_table,
    conversation_user_table,
)
from runner_social.utils import ensure_naive_utc, ensure_utc

from ._guard import store_operation
from .message_repository import MessageRepository
from .user_repository import UserRepository


class ConversationRepository:
    """Provide lookups and atomic appends for :class:`Conversation` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    @store_operation("fetch conversation")
    def get(self, conversation_id: str) -> StoreResult[Conversation | None]:
        model = self._get_model(conversation_id)
        return Ok(self.to_entity(model) if model else None)

    @store_operation("find conversations by participants")
    def find_by_participants(
        self, user_ids: Iterable[str], *, exact: bool
    ) -> StoreResult[list[Conversation]]:
        """Return conversations whose participants match ``user_ids``.

        With ``exact`` the participant set must equal ``user_ids``; otherwise it
        must contain every id in ``user_ids``. Most recently updated first.
        """

        ids = set(user_ids)
        query = self.session.query(ConversationModel).populate_existing()
        if exact:
            query = query.filter(ConversationModel.participant_key == participant_key(ids))
        else:
            containing = (
                select(conversation_user_table.c.conversation_id)
                .where(conversation_user_table.c.user_id.in_(ids))
                .group_by(conversation_user_table.c.conversation_id)
                .having(func.count(conversation_user_table.c.user_id) == len(ids))
            )
            query = query.filter(ConversationModel.id.in_(containing))
        query = query.order_by(
            ConversationModel.updated_at.desc(), ConversationModel.id.desc()
        )
        return Ok([self.to_entity(model) for model in query.all()])

    @store_operation("create conversation")
    def create(self, conversation: Conversation) -> StoreResult[Conversation]:
        """Insert ``conversation``; a participant set that already exists is a conflict."""

        users = (
            self.session.query(UserModel)
            .filter(UserModel.id.in_(conversation.participant_ids))
            .all()
        )
        model = ConversationModel(
            id=conversation.id,
            participant_key=conversation.participant_key,
            updated_at=ensure_naive_utc(conversation.updated_at),
            users=users,
        )
        self.session.add(model)
        self.session.commit()
        return Ok(self.to_entity(self._get_model(model.id)))

    @store_operation("append message to conversation")
    def append_message(
        self, conversation_id: str, message_id: str, sent_at: datetime
    ) -> StoreResult[Conversation | None]:
        """Append ``message_id`` and bump ``updated_at`` in one transaction.

        ``updated_at`` only moves forward, so concurrent appends cannot rewind it.
        Returns ``Ok(None)`` when the conversation does not exist.
        """

        stamp = ensure_naive_utc(sent_at)
        bumped = self.session.execute(
            update(ConversationModel)
            .where(ConversationModel.id == conversation_id)
            .values(
                updated_at=case(
                    (ConversationModel.updated_at < stamp, stamp),
                    else_=ConversationModel.updated_at,
                )
            )
            .execution_options(synchronize_session=False)
        )
        if bumped.rowcount == 0:
            self.session.rollback()
            return Ok(None)

        self.session.execute(
            insert(conversation_message_table).values(
                conversation_id=conversation_id, message_id=message_id
            )
        )
        self.session.commit()
        return Ok(self.to_entity(self._get_model(conversation_id)))

    def _get_model(self, conversation_id: str) -> ConversationModel | None:
        return (
            self.session.query(ConversationModel)
            .populate_existing()
            .filter(ConversationModel.id == conversation_id)
            .one_or_none()
        )

    @staticmethod
    def to_entity(model: ConversationModel) -> Conversation:
        return Conversation(
            id=model.id,
            users=[UserRepository.to_entity(user) for user in model.users],
            updated_at=ensure_utc(model.updated_at),
            messages=[MessageRepository.to_entity(message) for message in model.messages],
        )


__all__ = ["ConversationRepository"]
