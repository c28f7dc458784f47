"""SQLAlchemy model for persisted notifications."""

from sqlalchemy import Column, DateTime, ForeignKey, String
from sqlalchemy.orm import relationship

from runner_social.infrastructure.database import Base


class NotificationModel(Base):
    """Database representation for user notifications."""

    __tablename__ = "notification"

    id = Column(String(24), primary_key=True)
    user = Column(String(50), nullable=False, index=True)
    message_id = Column(String(24), ForeignKey("message.id"), nullable=False, index=True)
    created_at = Column(DateTime, nullable=False)

    message = relationship("MessageModel", lazy="joined")


__all__ = ["NotificationModel"]
