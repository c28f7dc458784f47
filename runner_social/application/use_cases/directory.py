"""Lookups against the user directory that only accept registered users."""

from runner_social.domain.entities import User
from runner_social.domain.exceptions import UnregisteredUserError
from runner_social.domain.results import unwrap
from runner_social.infrastructure.repositories import UserRepository


def require_registered_username(repository: UserRepository, username: str) -> User:
    user = unwrap(repository.get_by_username(username))
    if user is None:
        raise UnregisteredUserError(f"User {username!r} is not registered")
    return user


def require_registered_user(repository: UserRepository, user_id: str) -> User:
    user = unwrap(repository.get(user_id))
    if user is None:
        raise UnregisteredUserError(f"User {user_id} is not registered")
    return user
