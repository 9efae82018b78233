"""Resolve human-facing names (list names, board URLs) to Trello IDs."""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

from trello_proxy.exceptions import InvalidArgumentError, InvalidUrlError, NotFoundError

if TYPE_CHECKING:
    from trello_proxy.connection import TrelloConnection

logger = logging.getLogger(__name__)

# Only the long-form board URL carries the board ID; /c/ card links and
# /w/ workspace links are rejected.
BOARD_URL_PATTERN = re.compile(r"/b/([a-zA-Z0-9]+)")


def extract_board_id_from_url(url: str) -> str:
    """Extract board ID from a Trello board URL

    Supports formats:
    - https://trello.com/b/Bm0nnz1R/board-name
    - https://trello.com/b/Bm0nnz1R
    - trello.com/b/Bm0nnz1R/board-name

    Raises:
        InvalidUrlError: If the URL is empty or has no /b/<id> segment
    """
    if not url:
        raise InvalidUrlError("URL cannot be empty")

    match = BOARD_URL_PATTERN.search(url)
    if not match:
        raise InvalidUrlError(
            f"Could not extract board ID from URL: {url}\n"
            "Expected a board URL like https://trello.com/b/<boardId>/<board-name>"
        )
    return match.group(1)


def find_list(lists: list[dict], list_name: str) -> dict | None:
    """Return the first list whose name matches exactly (case-sensitive)"""
    for trello_list in lists:
        if trello_list.get("name") == list_name:
            return trello_list
    return None


def resolve_list_by_name(connection: TrelloConnection, board_id: str, list_name: str) -> str:
    """Find the ID of the list called ``list_name`` on a board

    Lists are refetched on every call. Trello does not enforce unique list
    names, so when several lists share a name the first one returned wins.

    Raises:
        InvalidArgumentError: If list_name is empty
        NotFoundError: If no list on the board has that exact name
    """
    if not list_name:
        raise InvalidArgumentError("List name is required")

    lists = connection.request(f"boards/{board_id}/lists", {"fields": "id,name"})
    match = find_list(lists, list_name)
    if match is None:
        available = ", ".join(f"'{lst.get('name')}'" for lst in lists) or "none"
        raise NotFoundError(
            f"List '{list_name}' not found on board '{board_id}' (available: {available})"
        )

    logger.debug(f"Resolved list '{list_name}' to {match['id']}")
    return str(match["id"])
