"""Trello boards, lists and cards as markdown, with name-addressed updates."""

from __future__ import annotations

from trello_proxy.board import CreatedCard, TrelloBoard
from trello_proxy.cli import main
from trello_proxy.config import ClientConfig
from trello_proxy.connection import TrelloConnection, board_from_url
from trello_proxy.exceptions import (
    ConfigurationError,
    InvalidArgumentError,
    InvalidUrlError,
    NotFoundError,
    RemoteAuthenticationError,
    RemoteNotFoundError,
    RemoteRateLimitError,
    RemoteRequestError,
    RemoteServerError,
    TrelloProxyError,
)
from trello_proxy.logging_config import setup_logging
from trello_proxy.markdown import extract_id
from trello_proxy.resolver import extract_board_id_from_url, resolve_list_by_name

__version__ = "0.1.0"

__all__ = [
    # Core classes
    "TrelloConnection",
    "TrelloBoard",
    "CreatedCard",
    "ClientConfig",
    "board_from_url",
    "extract_id",
    "extract_board_id_from_url",
    "resolve_list_by_name",
    "setup_logging",
    # Exceptions
    "TrelloProxyError",
    "RemoteRequestError",
    "RemoteAuthenticationError",
    "RemoteNotFoundError",
    "RemoteRateLimitError",
    "RemoteServerError",
    "NotFoundError",
    "InvalidArgumentError",
    "InvalidUrlError",
    "ConfigurationError",
    # CLI
    "main",
]
