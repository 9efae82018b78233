"""Authenticated Trello API connection with timeout and retry policy."""

from __future__ import annotations

import logging
import time
from typing import Any

import requests

from trello_proxy.board import TrelloBoard
from trello_proxy.config import ClientConfig
from trello_proxy.exceptions import (
    RemoteAuthenticationError,
    RemoteNotFoundError,
    RemoteRateLimitError,
    RemoteRequestError,
    RemoteServerError,
)
from trello_proxy.logging_config import register_secrets
from trello_proxy.markdown import render_boards
from trello_proxy.resolver import extract_board_id_from_url

logger = logging.getLogger(__name__)

# Transient errors worth another attempt
RETRY_STATUSES = {429, 500, 502, 503, 504}
SERVER_ERROR_STATUSES = {500, 502, 503, 504}

# Safe to repeat after a failure the server may already have acted on
IDEMPOTENT_METHODS = {"GET", "PUT", "DELETE"}
BODY_METHODS = {"POST", "PUT"}


class TrelloConnection:
    """Authenticated access to the Trello REST API

    Every request carries the ``key`` and ``token`` query parameters from the
    config. Requests are issued one at a time; there is no caching, so two
    reads of the same resource may disagree.

    Retry policy (see ClientConfig):
    - GET/PUT retry on network errors and on 429/500/502/503/504
    - POST retries only on 429, so cards and comments are never duplicated
    - Delays grow exponentially: backoff_base, 2x, 4x, ...
    """

    def __init__(self, config: ClientConfig):
        self.config = config
        self.base_url = config.base_url.rstrip("/")
        register_secrets(config.api_key, config.token)

    @classmethod
    def from_env(cls, env_file: str | None = None, **overrides) -> TrelloConnection:
        """Create a connection from TRELLO_API_KEY / TRELLO_TOKEN"""
        return cls(ClientConfig.from_env(env_file, **overrides))

    def request(
        self,
        endpoint: str,
        params: dict[str, Any] | None = None,
        method: str = "GET",
        body: dict[str, Any] | None = None,
    ) -> Any:
        """Make an authenticated request and return the decoded JSON

        Args:
            endpoint: Path relative to the API root, e.g. ``boards/abc/lists``
            params: Extra query parameters (credentials are added automatically)
            method: GET, POST, PUT or DELETE
            body: JSON body, sent only with POST and PUT

        Raises:
            RemoteRequestError: On network failure, HTTP error or malformed JSON
        """
        method = method.upper()
        url = f"{self.base_url}/{endpoint.lstrip('/')}"
        query: dict[str, Any] = dict(params) if params else {}
        query.update({"key": self.config.api_key, "token": self.config.token})
        json_body = body if method in BODY_METHODS else None

        attempts = self.config.max_retries
        for attempt in range(attempts):
            logger.debug(f"{method} {endpoint} (attempt {attempt + 1}/{attempts})")
            is_last = attempt == attempts - 1

            try:
                response = requests.request(
                    method,
                    url,
                    params=query,
                    json=json_body,
                    timeout=self.config.timeout,
                    verify=self.config.verify_ssl,
                )
                response.raise_for_status()

            except requests.HTTPError as e:
                status_code = e.response.status_code if e.response is not None else 0
                response_text = e.response.text if e.response is not None else ""

                if is_last or not self._should_retry(method, status_code):
                    raise self._http_error(
                        method, endpoint, status_code, response_text, attempt + 1
                    ) from None

                self._backoff(attempt, f"HTTP {status_code} from {method} {endpoint}")
                continue

            except requests.RequestException as e:
                # Timeouts, refused connections, DNS failures, ...
                message = self._redact(str(e))
                if is_last or method not in IDEMPOTENT_METHODS:
                    raise RemoteRequestError(
                        f"Network error for {method} {endpoint} after {attempt + 1} "
                        f"attempt(s): {message}\n"
                        "Check your internet connection and try again."
                    ) from None

                self._backoff(attempt, f"network error on {method} {endpoint}: {message}")
                continue

            return self._decode(response, method, endpoint)

        # max_retries >= 1 is enforced by ClientConfig
        raise RuntimeError("Request loop exited without a result")

    def _should_retry(self, method: str, status_code: int) -> bool:
        if status_code not in RETRY_STATUSES:
            return False
        return method in IDEMPOTENT_METHODS or status_code == 429

    def _backoff(self, attempt: int, reason: str) -> None:
        delay = self.config.backoff_base * (2**attempt)
        logger.warning(f"Retrying after {reason} (waiting {delay:.1f}s)")
        time.sleep(delay)

    def _http_error(
        self, method: str, endpoint: str, status_code: int, response_text: str, attempts: int
    ) -> RemoteRequestError:
        """Map an HTTP failure to the most specific RemoteRequestError"""
        response_text = self._redact(response_text)

        if status_code == 401:
            return RemoteAuthenticationError(
                "Invalid API credentials. Check your TRELLO_API_KEY and TRELLO_TOKEN.\n"
                "Get credentials at: https://trello.com/power-ups/admin",
                status_code=status_code,
                response_text=response_text,
            )
        if status_code == 403:
            return RemoteAuthenticationError(
                f"Access forbidden to resource: {endpoint}\n"
                "Your API token may not have permission for this board or operation.",
                status_code=status_code,
                response_text=response_text,
            )
        if status_code == 404:
            return RemoteNotFoundError(
                f"Resource not found: {endpoint}\n"
                "Check that the board, list or card ID is correct.",
                status_code=status_code,
                response_text=response_text,
            )
        if status_code == 429:
            return RemoteRateLimitError(
                f"Rate limit exceeded after {attempts} attempt(s).\n"
                "Trello's API rate limit: 100 requests per 10 seconds per token.",
                status_code=status_code,
                response_text=response_text,
            )
        if status_code in SERVER_ERROR_STATUSES:
            return RemoteServerError(
                f"Trello server error (HTTP {status_code}) for {method} {endpoint} "
                f"after {attempts} attempt(s).",
                status_code=status_code,
                response_text=response_text,
            )
        return RemoteRequestError(
            f"HTTP {status_code} error for {method} {endpoint}: {response_text[:200]}",
            status_code=status_code,
            response_text=response_text,
        )

    def _decode(self, response: requests.Response, method: str, endpoint: str) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise RemoteRequestError(
                f"Malformed JSON in response to {method} {endpoint}: {e}",
                status_code=response.status_code,
                response_text=self._redact(response.text[:200]),
            ) from e

    def _redact(self, text: str) -> str:
        """Strip credentials from text that may echo the request URL"""
        for secret in (self.config.api_key, self.config.token):
            text = text.replace(secret, "<hidden>")
        return text

    # ----- account-level operations -----

    def get_boards(self) -> str:
        """Get all boards of the authenticated member as markdown"""
        boards = self.request("members/me/boards", {"fields": "id,name"})
        return render_boards(boards)

    def board(self, board_id: str) -> TrelloBoard:
        """Get a board handle by ID (no request is made)"""
        return TrelloBoard(self, board_id)

    def board_from_url(self, url: str) -> TrelloBoard:
        """Get a board handle from a URL like https://trello.com/b/<id>/<slug>"""
        return TrelloBoard(self, extract_board_id_from_url(url))


def board_from_url(url: str, config: ClientConfig | None = None) -> TrelloBoard:
    """Open a board from its URL.

    Without an explicit config, credentials are read from the environment
    (TRELLO_API_KEY, TRELLO_TOKEN, optionally via a .env file).

    Example:
        >>> board = board_from_url("https://trello.com/b/cHkkifBS/my-board")
        >>> print(board.get_lists())
    """
    board_id = extract_board_id_from_url(url)
    connection = TrelloConnection(config if config is not None else ClientConfig.from_env())
    return connection.board(board_id)
