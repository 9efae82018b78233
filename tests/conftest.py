"""
Shared pytest fixtures for trello_proxy tests
"""
import json
import logging
from pathlib import Path
from unittest.mock import MagicMock

import pytest
import requests

from trello_proxy import ClientConfig, TrelloConnection
from trello_proxy.logging_config import credential_filter


def load_fixture(name):
    with open(Path(__file__).parent / "fixtures" / name) as f:
        return json.load(f)


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Undo setup_logging() so handlers don't outlive captured streams"""
    yield
    logger = logging.getLogger("trello_proxy")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
    credential_filter.secrets.clear()


@pytest.fixture
def fixtures_dir():
    """Return path to test fixtures directory"""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def card_detail_fixture():
    """Card with every optional section populated"""
    return load_fixture("card_detail.json")


@pytest.fixture
def board_lists_fixture():
    return load_fixture("board_lists.json")


@pytest.fixture
def board_cards_fixture():
    return load_fixture("board_cards.json")


@pytest.fixture
def created_card_fixture():
    """POST /cards response for {name: X, desc: Y} in list L1"""
    return load_fixture("created_card.json")


@pytest.fixture
def comment_action_fixture():
    return load_fixture("comment_action.json")


@pytest.fixture
def boards_fixture():
    return load_fixture("boards.json")


@pytest.fixture
def config():
    """Config with fake credentials long enough to be masked"""
    return ClientConfig(
        api_key="test-api-key-0123456789abcdef",
        token="test-token-0123456789abcdefghijklmnop",
        backoff_base=1.0,
    )


@pytest.fixture
def connection(config):
    return TrelloConnection(config)


def _make_response(payload=None, status_code=200, text=""):
    """Build a fake requests.Response that raises for non-2xx statuses"""
    response = MagicMock()
    response.status_code = status_code
    response.text = text
    response.json.return_value = payload
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(response=response)
    else:
        response.raise_for_status.return_value = None
    return response


@pytest.fixture
def make_response():
    """Factory for fake HTTP responses: make_response(payload, status_code, text)"""
    return _make_response
