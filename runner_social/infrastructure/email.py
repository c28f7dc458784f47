"""Best-effort transactional email through SendGrid."""

from __future__ import annotations

import json
import logging
from html import escape
from typing import Any

from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Mail

from runner_social.config import get_settings

logger = logging.getLogger(__name__)


def _describe_sendgrid_errors(body: Any) -> str | None:
    """Return the readable part of a SendGrid error payload, if any."""

    if isinstance(body, bytes):
        try:
            body = body.decode("utf-8")
        except UnicodeDecodeError:
            return None
    if isinstance(body, str):
        body = body.strip()
        if not body:
            return None
        try:
            body = json.loads(body)
        except json.JSONDecodeError:
            return body

    if isinstance(body, dict):
        messages = []
        for error in body.get("errors") or []:
            if not isinstance(error, dict) or not error.get("message"):
                continue
            if error.get("help"):
                messages.append(f"{error['message']} (help: {error['help']})")
            else:
                messages.append(str(error["message"]))
        if messages:
            return "; ".join(messages)
        return json.dumps(body, default=str)
    if isinstance(body, list):
        return "; ".join(str(item) for item in body)
    return None


def _log_delivery_failure(source: Any) -> None:
    """Log a failed send described by a SendGrid exception or response."""

    status_code = getattr(source, "status_code", None)
    details = _describe_sendgrid_errors(getattr(source, "body", None))
    if status_code and details:
        logger.error("SendGrid request failed with status %s: %s", status_code, details)
    elif status_code:
        logger.error("SendGrid request failed with status %s", status_code)
    elif details:
        logger.error("SendGrid request failed: %s", details)
    else:
        logger.error("SendGrid request failed: %r", source)


def send_email(subject: str, html_content: str, recipient: str) -> bool:
    """Send an email with the configured SendGrid account.

    Returns ``False`` without raising when email is not configured or SendGrid
    rejects the request.
    """

    settings = get_settings()
    if not (settings.sendgrid_api_key and settings.sendgrid_sender):
        logger.info("SendGrid is not configured; skipping email to %s", recipient)
        return False

    message = Mail(
        from_email=settings.sendgrid_sender,
        to_emails=recipient,
        subject=subject,
        html_content=html_content,
    )
    try:
        response = SendGridAPIClient(settings.sendgrid_api_key).send(message)
    except Exception as exc:
        _log_delivery_failure(exc)
        return False

    status_code = getattr(response, "status_code", None)
    if not isinstance(status_code, int) or not 200 <= status_code < 300:
        _log_delivery_failure(response)
        return False
    return True


def send_new_message_email(email: str, sender_username: str) -> bool:
    """Tell ``email`` that ``sender_username`` sent them a new direct message."""

    subject = f"New message from {sender_username}"
    html_content = "".join(
        (
            "<p>Hi,</p>",
            f"<p><strong>{escape(sender_username)}</strong> sent you a new message.</p>",
            "<p>Open your conversations to read and reply.</p>",
        )
    )
    return send_email(subject, html_content, email)


__all__ = ["send_email", "send_new_message_email"]
