"""SQLAlchemy model for the user directory."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Table
from sqlalchemy.orm import relationship
from sqlalchemy.sql import expression

from runner_social.infrastructure.database import Base
from runner_social.utils import ensure_naive_utc, now_utc


def _now_naive_utc():
    return ensure_naive_utc(now_utc())


user_follow_table = Table(
    "user_follow",
    Base.metadata,
    Column("follower_id", String(24), ForeignKey("user.id"), primary_key=True),
    Column("followed_id", String(24), ForeignKey("user.id"), primary_key=True),
)


class UserModel(Base):
    """Database representation of a registered runner."""

    __tablename__ = "user"

    id = Column(String(24), primary_key=True)
    username = Column(String(50), nullable=False, unique=True, index=True)
    first_name = Column(String(50), nullable=False, default="")
    last_name = Column(String(50), nullable=False, default="")
    email = Column(String(120), nullable=False)
    profile_graphic = Column(Integer, nullable=False, default=0)
    deleted = Column(
        Boolean,
        nullable=False,
        default=False,
        server_default=expression.false(),
    )
    created_at = Column(DateTime, nullable=False, default=_now_naive_utc)

    following = relationship(
        "UserModel",
        secondary=user_follow_table,
        primaryjoin=id == user_follow_table.c.follower_id,
        secondaryjoin=id == user_follow_table.c.followed_id,
        back_populates="followers",
        lazy="select",
    )
    followers = relationship(
        "UserModel",
        secondary=user_follow_table,
        primaryjoin=id == user_follow_table.c.followed_id,
        secondaryjoin=id == user_follow_table.c.follower_id,
        back_populates="following",
        lazy="select",
    )


__all__ = ["UserModel", "user_follow_table"]
