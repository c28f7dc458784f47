"""Persistence layer for the user directory."""

from __future__ import annotations

from sqlalchemy.orm import Session

from runner_social.domain.entities import User
from runner_social.domain.results import Ok, StoreResult
from runner_social.infrastructure.models import UserModel, user_follow_table
from runner_social.utils import ensure_naive_utc, ensure_utc, now_utc

from ._guard import store_operation


class UserRepository:
    """Look up registered users and maintain follow edges."""

    def __init__(self, session: Session) -> None:
        self.session = session

    @store_operation("fetch user by id")
    def get(self, user_id: str, *, include_deleted: bool = False) -> StoreResult[User | None]:
        model = self._get_model(include_deleted=include_deleted, id=user_id)
        return Ok(self.to_entity(model, include_follow_graph=True) if model else None)

    @store_operation("fetch user by username")
    def get_by_username(
        self, username: str, *, include_deleted: bool = False
    ) -> StoreResult[User | None]:
        model = self._get_model(include_deleted=include_deleted, username=username)
        return Ok(self.to_entity(model, include_follow_graph=True) if model else None)

    @store_operation("list followers")
    def list_followers(self, user_id: str) -> StoreResult[list[User]]:
        """Return the registered users following ``user_id``, ordered by username."""

        query = (
            self.session.query(UserModel)
            .populate_existing()
            .join(user_follow_table, user_follow_table.c.follower_id == UserModel.id)
            .filter(user_follow_table.c.followed_id == user_id)
            .filter(UserModel.deleted.is_(False))
            .order_by(UserModel.username)
        )
        return Ok([self.to_entity(follower) for follower in query.all()])

    @store_operation("create user")
    def create(self, user: User) -> StoreResult[User]:
        model = UserModel(
            id=user.id,
            username=user.username,
            first_name=user.first_name,
            last_name=user.last_name,
            email=user.email,
            profile_graphic=user.profile_graphic,
            deleted=user.deleted,
            created_at=ensure_naive_utc(user.created_at or now_utc()),
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return Ok(self.to_entity(model, include_follow_graph=True))

    @store_operation("follow user")
    def follow(self, follower_id: str, followed_id: str) -> StoreResult[bool]:
        """Add the edge ``follower_id -> followed_id``; ``False`` when a user is missing."""

        follower = self._get_model(id=follower_id)
        followed = self._get_model(id=followed_id)
        if follower is None or followed is None or follower.id == followed.id:
            return Ok(False)
        if followed not in follower.following:
            follower.following.append(followed)
            self.session.commit()
        return Ok(True)

    @store_operation("soft delete user")
    def mark_deleted(self, username: str) -> StoreResult[User | None]:
        model = self._get_model(include_deleted=True, username=username)
        if model is None:
            return Ok(None)
        if not model.deleted:
            model.deleted = True
            self.session.add(model)
            self.session.commit()
            self.session.refresh(model)
        return Ok(self.to_entity(model))

    @staticmethod
    def to_entity(model: UserModel, *, include_follow_graph: bool = False) -> User:
        following: list[str] = []
        followers: list[str] = []
        if include_follow_graph:
            following = [user.id for user in model.following if not user.deleted]
            followers = [user.id for user in model.followers if not user.deleted]
        return User(
            id=model.id,
            username=model.username,
            first_name=model.first_name,
            last_name=model.last_name,
            email=model.email,
            profile_graphic=model.profile_graphic,
            deleted=model.deleted,
            following=following,
            followers=followers,
            created_at=ensure_utc(model.created_at),
        )

    def _get_model(self, include_deleted: bool = False, **filters) -> UserModel | None:
        query = self.session.query(UserModel).populate_existing()
        if not include_deleted:
            query = query.filter(UserModel.deleted.is_(False))
        return query.filter_by(**filters).first()


__all__ = ["UserRepository"]
