"""Endpoints for sending messages and read receipts."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from runner_social.application.use_cases.messages import (
    mark_as_read as mark_as_read_uc,
    send_message as send_message_uc,
)
from runner_social.domain.entities import Message
from runner_social.domain.exceptions import ConversationServiceError
from runner_social.infrastructure.database import get_db
from runner_social.infrastructure.notifications import EventPublisher, serialize_message
from runner_social.interfaces.api.dependencies import get_event_publisher
from runner_social.interfaces.api.routes_helpers import to_http_exception
from runner_social.interfaces.api.schemas import (
    MarkAsReadRequest,
    MessageRead,
    SendMessageRequest,
)

router = APIRouter(prefix="/message", tags=["messages"])


def _to_read_model(message: Message) -> MessageRead:
    return MessageRead.model_validate(serialize_message(message))


@router.post("/sendMessage", response_model=MessageRead)
def send_message(
    payload: SendMessageRequest,
    db: Session = Depends(get_db),
    publisher: EventPublisher = Depends(get_event_publisher),
):
    """Send a message to a conversation the sender belongs to."""

    try:
        message = send_message_uc(
            db,
            sender_username=payload.sent_by,
            content=payload.message_content,
            conversation_id=payload.cid,
            publisher=publisher,
        )
    except ConversationServiceError as exc:
        raise to_http_exception(exc) from exc
    return _to_read_model(message)


@router.post("/markAsRead", response_model=MessageRead)
def mark_as_read(
    payload: MarkAsReadRequest,
    db: Session = Depends(get_db),
    publisher: EventPublisher = Depends(get_event_publisher),
):
    """Record that ``uid`` read ``mid``."""

    try:
        message = mark_as_read_uc(
            db, message_id=payload.mid, user_id=payload.uid, publisher=publisher
        )
    except ConversationServiceError as exc:
        raise to_http_exception(exc) from exc
    return _to_read_model(message)
