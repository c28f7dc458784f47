"""Endpoints for creating, reading and blasting conversations."""

from collections.abc import Callable

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from runner_social.application.use_cases.conversations import (
    create_conversation as create_conversation_uc,
    get_conversation as get_conversation_uc,
    list_conversations as list_conversations_uc,
    send_blast_message as send_blast_message_uc,
)
from runner_social.domain.entities import BlastReport, Conversation
from runner_social.domain.exceptions import ConversationServiceError
from runner_social.infrastructure.database import get_db
from runner_social.infrastructure.notifications import EventPublisher, serialize_conversation
from runner_social.interfaces.api.dependencies import get_event_publisher, get_session_factory
from runner_social.interfaces.api.routes_helpers import to_http_exception
from runner_social.interfaces.api.schemas import (
    BlastFailureRead,
    BlastMessageRequest,
    BlastReportRead,
    ConversationCreate,
    ConversationRead,
)

router = APIRouter(prefix="/conversation", tags=["conversations"])


def _to_read_model(conversation: Conversation) -> ConversationRead:
    return ConversationRead.model_validate(serialize_conversation(conversation))


def _report_to_read_model(report: BlastReport) -> BlastReportRead:
    return BlastReportRead(
        succeeded=report.succeeded,
        failed=[
            BlastFailureRead(
                follower_id=failure.follower_id,
                follower_username=failure.follower_username,
                reason=failure.reason,
            )
            for failure in report.failed
        ],
    )


@router.post("/addConversation", response_model=ConversationRead)
def add_conversation(payload: ConversationCreate, db: Session = Depends(get_db)):
    """Create an empty conversation between the given users."""

    try:
        conversation = create_conversation_uc(
            db, usernames=[user.username for user in payload.users]
        )
    except ConversationServiceError as exc:
        raise to_http_exception(exc) from exc
    return _to_read_model(conversation)


@router.get("/getConversation/{cid}", response_model=ConversationRead)
def read_conversation(cid: str, db: Session = Depends(get_db)):
    """Return one conversation with its users and messages."""

    try:
        conversation = get_conversation_uc(db, conversation_id=cid)
    except ConversationServiceError as exc:
        raise to_http_exception(exc) from exc
    return _to_read_model(conversation)


@router.get("/getConversations/{uid}", response_model=list[ConversationRead])
def read_conversations(uid: str, db: Session = Depends(get_db)):
    """Return the conversations of a user, most recently updated first."""

    try:
        conversations = list_conversations_uc(db, user_id=uid)
    except ConversationServiceError as exc:
        raise to_http_exception(exc) from exc
    return [_to_read_model(conversation) for conversation in conversations]


@router.post("/sendBlastMessage", response_model=BlastReportRead)
def send_blast_message(
    payload: BlastMessageRequest,
    response: Response,
    session_factory: Callable[[], Session] = Depends(get_session_factory),
    publisher: EventPublisher = Depends(get_event_publisher),
):
    """Send one message to every follower of ``uid``.

    Responds with 500 and the report when no follower could be reached.
    """

    try:
        report = send_blast_message_uc(
            session_factory,
            sender_id=payload.uid,
            content=payload.message_content,
            publisher=publisher,
        )
    except ConversationServiceError as exc:
        raise to_http_exception(exc) from exc
    if report.all_failed:
        response.status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    return _report_to_read_model(report)
