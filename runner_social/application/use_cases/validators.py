"""Validation helpers shared by the conversation use cases."""

from runner_social.domain.exceptions import InvalidRequestError, MalformedIdError
from runner_social.domain.identifiers import is_valid_object_id, normalize_object_id


def ensure_object_id(value: object, field: str) -> str:
    """Return the canonical form of ``value`` or raise :class:`MalformedIdError`."""

    if not is_valid_object_id(value):
        raise MalformedIdError(field, value)
    return normalize_object_id(value)


def ensure_content(content: object) -> str:
    """Return ``content`` unchanged when it has text besides whitespace."""

    if not isinstance(content, str) or not content.strip():
        raise InvalidRequestError("Message content must not be empty")
    return content


def ensure_username(username: object) -> str:
    if not isinstance(username, str) or not username.strip():
        raise InvalidRequestError("Username must not be empty")
    return username.strip()
