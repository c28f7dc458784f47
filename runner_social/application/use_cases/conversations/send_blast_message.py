"""Use case fanning one message out to every follower of a user."""

import logging
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor, as_completed

from sqlalchemy.orm import Session

from runner_social.config import get_settings
from runner_social.domain.entities import BlastFailure, BlastReport, Notification, User
from runner_social.domain.exceptions import ConversationServiceError
from runner_social.domain.identifiers import new_object_id
from runner_social.domain.results import unwrap
from runner_social.infrastructure.email import send_new_message_email
from runner_social.infrastructure.notifications import (
    EventPublisher,
    NotificationUpdateType,
    event_publisher,
)
from runner_social.infrastructure.repositories import NotificationRepository, UserRepository
from runner_social.utils import now_utc

from ..directory import require_registered_user
from ..messages.deliver_message import deliver_message
from ..validators import ensure_content, ensure_object_id
from .find_or_create_conversation import find_or_create_conversation

logger = logging.getLogger(__name__)

SessionFactory = Callable[[], Session]


def _email_follower(follower: User, sender: User) -> None:
    try:
        send_new_message_email(follower.email, sender.username)
    except Exception:
        logger.warning(
            "Could not email %s about a blast from %s", follower.username, sender.username,
            exc_info=True,
        )


def _deliver_to_follower(
    session_factory: SessionFactory,
    sender: User,
    follower: User,
    content: str,
    publisher: EventPublisher,
) -> str:
    """Run the whole blast for one follower and return the conversation id."""

    with session_factory() as session:
        conversation = find_or_create_conversation(session, user_a=sender, user_b=follower)
        message, conversation = deliver_message(
            session,
            conversation_id=conversation.id,
            sender=sender,
            content=content,
            publisher=publisher,
        )
        notification = unwrap(
            NotificationRepository(session).create(
                Notification(
                    id=new_object_id(),
                    user=follower.username,
                    message=message,
                    created_at=now_utc(),
                )
            )
        )
        publisher.publish_notification_update(notification, NotificationUpdateType.ADD)

    _email_follower(follower, sender)
    return conversation.id


def send_blast_message(
    session_factory: SessionFactory,
    *,
    sender_id: str,
    content: str,
    publisher: EventPublisher | None = None,
    max_workers: int | None = None,
) -> BlastReport:
    """Send ``content`` from ``sender_id`` to each registered follower.

    Followers are handled independently on a bounded thread pool, each with its
    own session. A follower that fails is recorded in the report with a coarse
    reason; work already done for it is kept and the other followers proceed.
    """

    content = ensure_content(content)
    sender_id = ensure_object_id(sender_id, "uid")
    publisher = publisher or event_publisher

    with session_factory() as session:
        user_repository = UserRepository(session)
        sender = require_registered_user(user_repository, sender_id)
        followers = unwrap(user_repository.list_followers(sender.id))

    report = BlastReport()
    if not followers:
        logger.info("User %s has no followers to blast", sender.username)
        return report

    workers = min(max_workers or get_settings().blast_max_workers, len(followers))
    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="blast") as executor:
        futures = {
            executor.submit(
                _deliver_to_follower, session_factory, sender, follower, content, publisher
            ): follower
            for follower in followers
        }
        for future in as_completed(futures):
            follower = futures[future]
            try:
                conversation_id = future.result()
            except ConversationServiceError as exc:
                logger.warning(
                    "Blast from %s to %s failed: %s", sender.username, follower.username, exc.message
                )
                report.failed.append(BlastFailure(follower.id, follower.username, exc.category))
            except Exception:
                logger.exception(
                    "Blast from %s to %s failed unexpectedly", sender.username, follower.username
                )
                report.failed.append(
                    BlastFailure(follower.id, follower.username, ConversationServiceError.category)
                )
            else:
                report.succeeded.append(conversation_id)

    logger.info(
        "Blast from %s reached %d of %d followers",
        sender.username,
        len(report.succeeded),
        report.attempted,
    )
    return report
