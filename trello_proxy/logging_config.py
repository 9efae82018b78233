"""Centralized logging configuration for trello_proxy.

Records pass through a redacting filter before any handler writes them, so a
Trello key or token that ends up in a message or traceback prints as
``<hidden>``.
"""

from __future__ import annotations

import logging
import sys

LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}


class CredentialFilter(logging.Filter):
    """Replace registered secrets in log records with ``<hidden>``"""

    def __init__(self) -> None:
        super().__init__()
        self.secrets: set[str] = set()

    def redact(self, text: str) -> str:
        for secret in self.secrets:
            text = text.replace(secret, "<hidden>")
        return text

    def filter(self, record: logging.LogRecord) -> bool:
        if not self.secrets:
            return True

        record.msg = self.redact(record.getMessage())
        record.args = None
        if record.exc_info and not record.exc_text:
            record.exc_text = logging.Formatter().formatException(record.exc_info)
        if record.exc_text:
            record.exc_text = self.redact(record.exc_text)
        return True


credential_filter = CredentialFilter()


def register_secrets(*secrets: str) -> None:
    """Keep these values out of everything the trello_proxy logger writes"""
    credential_filter.secrets.update(s for s in secrets if s)


def setup_logging(level: str = "INFO", log_file: str | None = None) -> logging.Logger:
    """Configure the trello_proxy logger.

    Diagnostics always go to stderr so rendered markdown on stdout stays
    clean enough to pipe into another tool. Calling this again replaces (and
    closes) the handlers installed by the previous call.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR). Unknown names fall
               back to INFO.
        log_file: Optional path to a log file. Records written there carry
                  timestamps.

    Returns:
        The configured package logger

    Example:
        >>> setup_logging("DEBUG")  # Log every request made to the API
        >>> setup_logging("INFO", "trello.log")  # Console + file logging
    """
    logger = logging.getLogger("trello_proxy")
    logger.setLevel(LEVELS.get(level.upper(), logging.INFO))

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    handlers[0].setFormatter(logging.Formatter("%(levelname)s: %(message)s"))

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(logging.Formatter("%(asctime)s - %(levelname)s - %(message)s"))
        handlers.append(file_handler)

    for handler in handlers:
        handler.addFilter(credential_filter)
        logger.addHandler(handler)

    logger.propagate = False
    return logger
