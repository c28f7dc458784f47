"""Process-wide logging setup."""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

_HANDLER_MARKER = "_runner_social_handler"


def configure_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Attach a stream handler, and a rotating file handler when ``log_file`` is set.

    Calling it again replaces the handlers installed by a previous call.
    """

    package_logger = logging.getLogger("runner_social")
    package_logger.setLevel(level.upper())
    for handler in list(package_logger.handlers):
        if getattr(handler, _HANDLER_MARKER, False):
            package_logger.removeHandler(handler)
            handler.close()

    formatter = logging.Formatter(LOG_FORMAT)
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            RotatingFileHandler(
                log_file, maxBytes=10 * 1024 * 1024, backupCount=5, encoding="utf-8"
            )
        )
    for handler in handlers:
        handler.setFormatter(formatter)
        setattr(handler, _HANDLER_MARKER, True)
        package_logger.addHandler(handler)

    package_logger.info("Logging configured at %s", level.upper())


__all__ = ["LOG_FORMAT", "configure_logging"]
