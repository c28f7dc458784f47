"""SQLAlchemy models for messages and their read receipts."""

from sqlalchemy import Column, DateTime, ForeignKey, String, Table, Text
from sqlalchemy.orm import relationship

from runner_social.infrastructure.database import Base

message_read_by_table = Table(
    "message_read_by",
    Base.metadata,
    Column("message_id", String(24), ForeignKey("message.id"), primary_key=True),
    Column("user_id", String(24), ForeignKey("user.id"), primary_key=True),
    Column("read_at", DateTime, nullable=False),
)


class MessageModel(Base):
    """Database representation of a message sent in a conversation."""

    __tablename__ = "message"

    id = Column(String(24), primary_key=True)
    conversation_id = Column(
        String(24), ForeignKey("conversation.id"), nullable=False, index=True
    )
    sender_id = Column(String(24), ForeignKey("user.id"), nullable=False, index=True)
    message_content = Column(Text, nullable=False)
    sent_at = Column(DateTime, nullable=False)

    sender = relationship("UserModel", lazy="joined")
    read_by = relationship(
        "UserModel",
        secondary=message_read_by_table,
        order_by=message_read_by_table.c.read_at,
        lazy="selectin",
    )


__all__ = ["MessageModel", "message_read_by_table"]
