"""Tests for sending messages and read receipts."""

from concurrent.futures import ThreadPoolExecutor

import pytest

from runner_social.application.use_cases import (
    create_conversation,
    list_notifications,
    mark_as_read,
    send_blast_message,
    send_message,
)
from runner_social.domain.entities import Notification
from runner_social.domain.exceptions import (
    DuplicateDataError,
    InvalidRequestError,
    MalformedIdError,
    NotAParticipantError,
    NotFoundError,
    StoreError,
    UnregisteredParticipantError,
    UnregisteredUserError,
)
from runner_social.domain.identifiers import new_object_id
from runner_social.domain.results import Failure, unwrap
from runner_social.infrastructure.database import SessionLocal
from runner_social.infrastructure.models import MessageModel
from runner_social.infrastructure.notifications import (
    CONVERSATION_UPDATE,
    NOTIFICATIONS_UPDATE,
    NotificationUpdateType,
)
from runner_social.infrastructure.repositories import (
    ConversationRepository,
    MessageRepository,
    NotificationRepository,
    UserRepository,
)
from runner_social.utils import now_utc


@pytest.fixture()
def pair(session, make_user):
    alice, bob = make_user("alice"), make_user("bob")
    conversation = create_conversation(session, usernames=["alice", "bob"])
    return alice, bob, conversation


def test_send_message_appends_and_publishes(session, pair, publisher) -> None:
    alice, _, conversation = pair

    message = send_message(
        session,
        sender_username="alice",
        content="tempo run at 6?",
        conversation_id=conversation.id,
        publisher=publisher,
    )

    stored = unwrap(ConversationRepository(session).get(conversation.id))
    assert [m.id for m in stored.messages] == [message.id]
    assert stored.updated_at == message.sent_at
    assert [reader.id for reader in message.read_by] == [alice.id]
    assert message.sender.id == alice.id

    updates = publisher.of_type(CONVERSATION_UPDATE)
    assert len(updates) == 1
    assert [m.id for m in updates[0].messages] == [message.id]


def test_send_message_rejects_non_participant(session, pair, make_user, publisher) -> None:
    _, _, conversation = pair
    make_user("carol")

    with pytest.raises(NotAParticipantError):
        send_message(
            session,
            sender_username="carol",
            content="hi",
            conversation_id=conversation.id,
            publisher=publisher,
        )

    assert unwrap(ConversationRepository(session).get(conversation.id)).messages == []
    assert publisher.events == []


def test_send_message_validates_before_touching_the_store(session, pair, publisher) -> None:
    _, _, conversation = pair

    with pytest.raises(InvalidRequestError):
        send_message(
            session,
            sender_username="alice",
            content="   ",
            conversation_id=conversation.id,
            publisher=publisher,
        )
    with pytest.raises(MalformedIdError):
        send_message(
            session,
            sender_username="alice",
            content="hi",
            conversation_id="xyz",
            publisher=publisher,
        )
    with pytest.raises(NotFoundError):
        send_message(
            session,
            sender_username="alice",
            content="hi",
            conversation_id=new_object_id(),
            publisher=publisher,
        )


def test_send_message_checks_registration(session, pair, publisher) -> None:
    _, _, conversation = pair

    with pytest.raises(UnregisteredUserError):
        send_message(
            session,
            sender_username="ghost",
            content="hi",
            conversation_id=conversation.id,
            publisher=publisher,
        )

    unwrap(UserRepository(session).mark_deleted("bob"))
    with pytest.raises(UnregisteredParticipantError):
        send_message(
            session,
            sender_username="alice",
            content="hi",
            conversation_id=conversation.id,
            publisher=publisher,
        )


def test_mark_as_read_is_idempotent_and_monotonic(session, pair, publisher) -> None:
    _, bob, conversation = pair
    message = send_message(
        session,
        sender_username="alice",
        content="hi",
        conversation_id=conversation.id,
        publisher=publisher,
    )
    publisher.clear()

    first = mark_as_read(session, message_id=message.id, user_id=bob.id, publisher=publisher)
    second = mark_as_read(session, message_id=message.id, user_id=bob.id, publisher=publisher)

    assert sorted(reader.username for reader in first.read_by) == ["alice", "bob"]
    assert sorted(reader.username for reader in second.read_by) == ["alice", "bob"]
    assert len(publisher.of_type(CONVERSATION_UPDATE)) == 2


def test_mark_as_read_requires_existing_user_and_message(session, pair, publisher) -> None:
    _, bob, conversation = pair
    message = send_message(
        session,
        sender_username="alice",
        content="hi",
        conversation_id=conversation.id,
        publisher=publisher,
    )

    with pytest.raises(NotFoundError):
        mark_as_read(session, message_id=new_object_id(), user_id=bob.id, publisher=publisher)
    with pytest.raises(NotFoundError):
        mark_as_read(session, message_id=message.id, user_id=new_object_id(), publisher=publisher)
    with pytest.raises(MalformedIdError):
        mark_as_read(session, message_id="nope", user_id=bob.id, publisher=publisher)


def test_mark_as_read_clears_the_readers_notification(
    session, make_user, follow, publisher
) -> None:
    alice, bob = make_user("alice"), make_user("bob")
    follow(bob, alice)
    send_blast_message(SessionLocal, sender_id=alice.id, content="long run sunday", publisher=publisher)
    [notification] = list_notifications(session, username="bob")
    publisher.clear()

    mark_as_read(
        session, message_id=notification.message.id, user_id=bob.id, publisher=publisher
    )

    assert list_notifications(session, username="bob") == []
    [(removed, update_type)] = publisher.of_type(NOTIFICATIONS_UPDATE)
    assert removed.id == notification.id
    assert update_type is NotificationUpdateType.REMOVE
    assert unwrap(MessageRepository(session).get(notification.message.id)) is not None


def test_mark_as_read_flags_duplicate_notifications(session, pair, publisher) -> None:
    _, bob, conversation = pair
    message = send_message(
        session,
        sender_username="alice",
        content="hi",
        conversation_id=conversation.id,
        publisher=publisher,
    )
    notifications = NotificationRepository(session)
    for _ in range(2):
        unwrap(
            notifications.create(
                Notification(id=new_object_id(), user="bob", message=message, created_at=now_utc())
            )
        )

    with pytest.raises(DuplicateDataError):
        mark_as_read(session, message_id=message.id, user_id=bob.id, publisher=publisher)


def test_send_message_keeps_no_message_when_the_append_fails(
    session, pair, publisher, monkeypatch: pytest.MonkeyPatch
) -> None:
    _, _, conversation = pair

    def failing_append(self, conversation_id, message_id, sent_at):
        return Failure("append message to conversation", "database is locked")

    monkeypatch.setattr(ConversationRepository, "append_message", failing_append)

    with pytest.raises(StoreError):
        send_message(
            session,
            sender_username="alice",
            content="lost?",
            conversation_id=conversation.id,
            publisher=publisher,
        )

    assert session.query(MessageModel).count() == 0
    with SessionLocal() as other:
        assert other.query(MessageModel).count() == 0
    assert unwrap(ConversationRepository(session).get(conversation.id)).messages == []
    assert publisher.of_type(CONVERSATION_UPDATE) == []


def test_concurrent_sends_to_one_conversation_are_all_appended(pair, publisher) -> None:
    _, _, conversation = pair
    senders = ["alice", "bob"] * 4

    def send_batch(sender_username: str) -> list:
        with SessionLocal() as worker_session:
            return [
                send_message(
                    worker_session,
                    sender_username=sender_username,
                    content=f"split {index}",
                    conversation_id=conversation.id,
                    publisher=publisher,
                )
                for index in range(5)
            ]

    with ThreadPoolExecutor(max_workers=len(senders)) as executor:
        batches = list(executor.map(send_batch, senders))
    sent = [message for batch in batches for message in batch]

    with SessionLocal() as reader:
        stored = unwrap(ConversationRepository(reader).get(conversation.id))
    assert len(sent) == 40
    assert sorted(m.id for m in stored.messages) == sorted(m.id for m in sent)
    assert stored.updated_at == max(m.sent_at for m in sent)
