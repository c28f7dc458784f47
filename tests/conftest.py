"""Shared fixtures: a throwaway SQLite database and an in-memory event recorder."""

from __future__ import annotations

import os
import tempfile
import threading
from pathlib import Path

import pytest

TEST_DB_PATH = Path(tempfile.gettempdir()) / "runner_social_test.db"
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ["BLAST_MAX_WORKERS"] = "4"
os.environ.pop("SENDGRID_API_KEY", None)
os.environ.pop("SENDGRID_SENDER", None)

from runner_social.config import get_settings  # noqa: E402

get_settings.cache_clear()

from fastapi.testclient import TestClient  # noqa: E402

from runner_social.domain.entities import User  # noqa: E402
from runner_social.domain.identifiers import new_object_id  # noqa: E402
from runner_social.domain.results import unwrap  # noqa: E402
from runner_social.infrastructure.database import (  # noqa: E402
    Base,
    SessionLocal,
    engine,
    initialize_database,
)
from runner_social.infrastructure.notifications import (  # noqa: E402
    CONVERSATION_UPDATE,
    NOTIFICATIONS_UPDATE,
)
from runner_social.infrastructure.repositories import UserRepository  # noqa: E402
from runner_social.interfaces.api.dependencies import get_event_publisher  # noqa: E402
from main import create_app  # noqa: E402


class RecordingPublisher:
    """Collect published events instead of broadcasting them."""

    def __init__(self) -> None:
        self.events: list[tuple[str, object]] = []
        self._lock = threading.Lock()

    def publish_conversation_update(self, conversation) -> None:
        with self._lock:
            self.events.append((CONVERSATION_UPDATE, conversation))

    def publish_notification_update(self, notification, update_type) -> None:
        with self._lock:
            self.events.append((NOTIFICATIONS_UPDATE, (notification, update_type)))

    def of_type(self, event_type: str) -> list[object]:
        return [payload for name, payload in self.events if name == event_type]

    def clear(self) -> None:
        with self._lock:
            self.events.clear()


@pytest.fixture(autouse=True)
def reset_database():
    """Start every test from an empty schema."""

    Base.metadata.drop_all(bind=engine)
    initialize_database()
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def session():
    with SessionLocal() as db:
        yield db


@pytest.fixture()
def publisher() -> RecordingPublisher:
    return RecordingPublisher()


@pytest.fixture()
def make_user(session):
    """Register a user named ``username`` and return it."""

    def _make_user(username: str, *, email: str | None = None) -> User:
        user = User(
            id=new_object_id(),
            username=username,
            first_name=username.capitalize(),
            last_name="Runner",
            email=email or f"{username}@example.com",
        )
        return unwrap(UserRepository(session).create(user))

    return _make_user


@pytest.fixture()
def follow(session):
    """Make ``follower`` follow ``followed``."""

    def _follow(follower: User, followed: User) -> None:
        assert unwrap(UserRepository(session).follow(follower.id, followed.id)) is True

    return _follow


@pytest.fixture()
def client(publisher):
    """Return a test client whose realtime events go to ``publisher``."""

    app = create_app()
    app.dependency_overrides[get_event_publisher] = lambda: publisher
    with TestClient(app) as test_client:
        yield test_client
