"""SQLAlchemy models for conversations and their participants."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Table
from sqlalchemy.orm import relationship

from runner_social.infrastructure.database import Base

conversation_user_table = Table(
    "conversation_user",
    Base.metadata,
    Column(
        "conversation_id", String(24), ForeignKey("conversation.id"), primary_key=True
    ),
    Column("user_id", String(24), ForeignKey("user.id"), primary_key=True, index=True),
)

# Position is the append order of a message inside its conversation.
conversation_message_table = Table(
    "conversation_message",
    Base.metadata,
    Column("position", Integer, primary_key=True, autoincrement=True),
    Column(
        "conversation_id",
        String(24),
        ForeignKey("conversation.id"),
        nullable=False,
        index=True,
    ),
    Column("message_id", String(24), ForeignKey("message.id"), nullable=False, unique=True),
)


class ConversationModel(Base):
    """Database representation of a conversation."""

    __tablename__ = "conversation"

    id = Column(String(24), primary_key=True)
    participant_key = Column(String(512), nullable=False, unique=True)
    updated_at = Column(DateTime, nullable=False)

    users = relationship(
        "UserModel",
        secondary=conversation_user_table,
        order_by="UserModel.username",
        lazy="selectin",
    )
    messages = relationship(
        "MessageModel",
        secondary=conversation_message_table,
        order_by=conversation_message_table.c.position,
        lazy="selectin",
        viewonly=True,
    )


__all__ = [
    "ConversationModel",
    "conversation_message_table",
    "conversation_user_table",
]
