"""FastAPI dependency utilities."""

from collections.abc import Callable

from sqlalchemy.orm import Session

from runner_social.infrastructure.database import SessionLocal, get_db
from runner_social.infrastructure.notifications import EventPublisher, event_publisher


def get_session_factory() -> Callable[[], Session]:
    """Return the factory used by work that needs one session per thread."""

    return SessionLocal


def get_event_publisher() -> EventPublisher:
    """Return the publisher that pushes realtime events to websocket clients."""

    return event_publisher


__all__ = ["get_db", "get_event_publisher", "get_session_factory"]
