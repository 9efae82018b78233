"""Custom exception classes for trello_proxy.

Remote failures (anything that went wrong talking to the Trello API) derive
from RemoteRequestError. Local failures (bad arguments, bad board URLs, names
that do not resolve) are raised before or instead of a network call.
"""

from __future__ import annotations


class TrelloProxyError(Exception):
    """Base exception for all trello_proxy errors"""

    pass


class RemoteRequestError(TrelloProxyError):
    """Raised when a request to the Trello API fails.

    Covers network failures, non-2xx responses and undecodable JSON bodies.
    The message never includes the API key or token.

    Attributes:
        status_code: HTTP status of the failed response, if one was received
        response_text: Body of the failed response, if one was received
    """

    def __init__(
        self, message: str, status_code: int | None = None, response_text: str | None = None
    ):
        self.status_code = status_code
        self.response_text = response_text
        super().__init__(message)


class RemoteAuthenticationError(RemoteRequestError):
    """Raised when API credentials are invalid or lack access (401/403)"""

    pass


class RemoteNotFoundError(RemoteRequestError):
    """Raised when the API reports a board, list or card does not exist (404)"""

    pass


class RemoteRateLimitError(RemoteRequestError):
    """Raised when rate limit is exceeded (429) after retries"""

    pass


class RemoteServerError(RemoteRequestError):
    """Raised when Trello's servers return an error (500/502/503/504) after retries"""

    pass


class NotFoundError(TrelloProxyError):
    """Raised when a name-based lookup finds no match.

    Example:
        >>> board.move_card("abc123", "Dnoe")
        NotFoundError: List 'Dnoe' not found on board 'cHkkifBS'
    """

    pass


class InvalidArgumentError(TrelloProxyError, ValueError):
    """Raised when a required argument is empty, before any request is made"""

    pass


class InvalidUrlError(TrelloProxyError, ValueError):
    """Raised when a board URL does not have the form .../b/<boardId>/<slug>"""

    pass


class ConfigurationError(TrelloProxyError):
    """Raised at startup when TRELLO_API_KEY or TRELLO_TOKEN is missing"""

    pass
