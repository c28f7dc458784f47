"""Helper utilities shared across API route handlers."""

import logging

from fastapi import HTTPException

from runner_social.domain.exceptions import ConversationServiceError

logger = logging.getLogger(__name__)


def to_http_exception(exc: ConversationServiceError) -> HTTPException:
    """Map a use case error to the HTTP response the client sees.

    Server-side failures only expose their coarse message; the detailed one
    goes to the log.
    """

    if exc.status_code >= 500:
        logger.error("%s: %s", type(exc).__name__, exc.message)
    else:
        logger.info("Rejected request: %s", exc.message)
    return HTTPException(status_code=exc.status_code, detail=exc.public_message)
