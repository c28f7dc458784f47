"""Tests for blasting a message to every follower."""

import importlib

import pytest

from runner_social.application.use_cases import (
    create_conversation,
    list_notifications,
    send_blast_message,
    send_message,
)
from runner_social.domain.entities import BlastFailure
from runner_social.domain.exceptions import (
    InvalidRequestError,
    MalformedIdError,
    StoreError,
    UnregisteredUserError,
)
from runner_social.domain.identifiers import new_object_id
from runner_social.domain.results import unwrap
from runner_social.infrastructure.database import SessionLocal
from runner_social.infrastructure.notifications import (
    CONVERSATION_UPDATE,
    NOTIFICATIONS_UPDATE,
    NotificationUpdateType,
)
from runner_social.infrastructure.repositories import ConversationRepository, UserRepository

blast_module = importlib.import_module(
    "runner_social.application.use_cases.conversations.send_blast_message"
)


def _pair(session, a, b):
    [conversation] = unwrap(
        ConversationRepository(session).find_by_participants({a.id, b.id}, exact=True)
    )
    return conversation


def test_blast_reaches_every_follower(session, make_user, follow, publisher) -> None:
    alice = make_user("alice")
    followers = [make_user(name) for name in ("f1", "f2", "f3")]
    for follower in followers:
        follow(follower, alice)

    report = send_blast_message(
        SessionLocal, sender_id=alice.id, content="track workout tonight", publisher=publisher
    )

    assert report.failed == []
    assert len(report.succeeded) == 3
    for follower in followers:
        conversation = _pair(session, alice, follower)
        assert conversation.id in report.succeeded
        assert [m.message_content for m in conversation.messages] == ["track workout tonight"]
        assert conversation.messages[0].sender.id == alice.id
        [notification] = list_notifications(session, username=follower.username)
        assert notification.message.id == conversation.messages[0].id
    assert list_notifications(session, username="alice") == []


def test_blast_scenario_with_existing_and_new_conversations(
    session, make_user, follow, publisher
) -> None:
    alice, bob, carol = make_user("alice"), make_user("bob"), make_user("carol")
    follow(bob, alice)
    follow(carol, alice)
    existing = create_conversation(session, usernames=["alice", "bob"])
    send_message(
        session,
        sender_username="bob",
        content="see you at the track",
        conversation_id=existing.id,
        publisher=publisher,
    )
    publisher.clear()

    report = send_blast_message(
        SessionLocal, sender_id=alice.id, content="hi all", publisher=publisher
    )

    with_bob = _pair(session, alice, bob)
    with_carol = _pair(session, alice, carol)
    assert with_bob.id == existing.id
    assert [m.message_content for m in with_bob.messages] == ["see you at the track", "hi all"]
    assert [m.message_content for m in with_carol.messages] == ["hi all"]
    assert sorted(report.succeeded) == sorted([with_bob.id, with_carol.id])

    assert len(publisher.of_type(CONVERSATION_UPDATE)) == 2
    added = publisher.of_type(NOTIFICATIONS_UPDATE)
    assert len(added) == 2
    assert {notification.user for notification, _ in added} == {"bob", "carol"}
    assert all(update_type is NotificationUpdateType.ADD for _, update_type in added)


def test_blast_without_followers_does_nothing(make_user, publisher) -> None:
    alice = make_user("alice")

    report = send_blast_message(SessionLocal, sender_id=alice.id, content="hi", publisher=publisher)

    assert report.succeeded == []
    assert report.failed == []
    assert report.all_failed is False
    assert publisher.events == []


def test_blast_skips_deleted_followers(session, make_user, follow, publisher) -> None:
    alice, bob, carol = make_user("alice"), make_user("bob"), make_user("carol")
    follow(bob, alice)
    follow(carol, alice)
    unwrap(UserRepository(session).mark_deleted("carol"))

    report = send_blast_message(SessionLocal, sender_id=alice.id, content="hi", publisher=publisher)

    assert report.succeeded == [_pair(session, alice, bob).id]
    assert list_notifications(session, username="carol") == []


def test_blast_continues_past_a_failing_follower(
    session, make_user, follow, publisher, monkeypatch: pytest.MonkeyPatch
) -> None:
    alice, bob, carol = make_user("alice"), make_user("bob"), make_user("carol")
    follow(bob, alice)
    follow(carol, alice)
    original = blast_module.find_or_create_conversation

    def failing_for_carol(session, *, user_a, user_b):
        if user_b.username == "carol":
            raise StoreError("create conversation", "disk full")
        return original(session, user_a=user_a, user_b=user_b)

    monkeypatch.setattr(blast_module, "find_or_create_conversation", failing_for_carol)

    report = send_blast_message(SessionLocal, sender_id=alice.id, content="hi", publisher=publisher)

    assert report.succeeded == [_pair(session, alice, bob).id]
    assert report.failed == [BlastFailure(carol.id, "carol", "store_error")]
    assert report.all_failed is False
    assert len(list_notifications(session, username="bob")) == 1
    assert list_notifications(session, username="carol") == []


def test_blast_reports_when_every_follower_fails(
    make_user, follow, publisher, monkeypatch: pytest.MonkeyPatch
) -> None:
    alice, bob = make_user("alice"), make_user("bob")
    follow(bob, alice)

    def always_fails(session, *, user_a, user_b):
        raise RuntimeError("connection reset")

    monkeypatch.setattr(blast_module, "find_or_create_conversation", always_fails)

    report = send_blast_message(SessionLocal, sender_id=alice.id, content="hi", publisher=publisher)

    assert report.all_failed is True
    assert report.failed == [BlastFailure(bob.id, "bob", "internal_error")]


def test_blast_emails_followers_without_failing_on_email_errors(
    make_user, follow, publisher, monkeypatch: pytest.MonkeyPatch
) -> None:
    alice = make_user("alice")
    bob = make_user("bob", email="bob@runners.test")
    carol = make_user("carol", email="carol@runners.test")
    follow(bob, alice)
    follow(carol, alice)
    sent = []

    def fake_email(email, sender_username):
        sent.append((email, sender_username))
        if email.startswith("carol"):
            raise ValueError("invalid recipient")
        return True

    monkeypatch.setattr(blast_module, "send_new_message_email", fake_email)

    report = send_blast_message(SessionLocal, sender_id=alice.id, content="hi", publisher=publisher)

    assert len(report.succeeded) == 2
    assert sorted(sent) == [("bob@runners.test", "alice"), ("carol@runners.test", "alice")]


def test_blast_validates_its_input(make_user, publisher) -> None:
    alice = make_user("alice")

    with pytest.raises(InvalidRequestError):
        send_blast_message(SessionLocal, sender_id=alice.id, content=" ", publisher=publisher)
    with pytest.raises(MalformedIdError):
        send_blast_message(SessionLocal, sender_id="alice", content="hi", publisher=publisher)
    with pytest.raises(UnregisteredUserError):
        send_blast_message(
            SessionLocal, sender_id=new_object_id(), content="hi", publisher=publisher
        )
