"""Board-level operations, returned as markdown."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from trello_proxy.exceptions import InvalidArgumentError
from trello_proxy.markdown import (
    render_card,
    render_card_archived,
    render_card_completed,
    render_card_moved,
    render_card_names,
    render_cards,
    render_comment_added,
    render_created_card,
    render_lists,
)
from trello_proxy.resolver import resolve_list_by_name

if TYPE_CHECKING:
    from trello_proxy.connection import TrelloConnection

logger = logging.getLogger(__name__)

# Nested resources requested for the card detail view
CARD_DETAIL_PARAMS = {
    "fields": (
        "id,name,desc,closed,due,dueComplete,dateLastActivity,"
        "idBoard,idList,pos,shortUrl,labels,badges"
    ),
    "attachments": "true",
    "attachment_fields": "id,name,url,bytes,date",
    "checklists": "all",
    "checklist_fields": "id,name,pos",
    "checkItem_fields": "id,name,pos,state",
    "actions": "commentCard",
    "actions_limit": "10",
}


class CreatedCard(str):
    """Markdown confirmation of a new card that also carries its IDs.

    Behaves as the rendered markdown string everywhere a string is expected;
    ``card_id`` and ``list_id`` let callers chain a follow-up operation
    without parsing the text.
    """

    card_id: str
    list_id: str

    def __new__(cls, markdown: str, card_id: str, list_id: str) -> CreatedCard:
        created = super().__new__(cls, markdown)
        created.card_id = card_id
        created.list_id = list_id
        return created


def _require(value: str | None, what: str) -> None:
    if not value:
        raise InvalidArgumentError(f"{what} is required")


class TrelloBoard:
    """Read and modify one board, addressing lists by name where possible

    Every method returns a markdown document. Methods that take a list name
    fetch the board's lists first to resolve it; nothing is cached between
    calls.

    Example:
        >>> board = connection.board_from_url("https://trello.com/b/cHkkifBS/tasks")
        >>> print(board.get_cards_in_list("ToDo"))
        >>> created = board.create_card_in_list("ToDo", "Write release notes")
        >>> print(board.mark_card_completed(created.card_id))
    """

    def __init__(self, connection: TrelloConnection, board_id: str):
        _require(board_id, "Board ID")
        self.connection = connection
        self.board_id = board_id

    def __repr__(self) -> str:
        return f"TrelloBoard(board_id={self.board_id!r})"

    def resolve_list(self, list_name: str) -> str:
        """Get the ID of the first list on this board named exactly ``list_name``"""
        return resolve_list_by_name(self.connection, self.board_id, list_name)

    # ----- reads -----

    def get_lists(self) -> str:
        """Get all lists in this board (id and name only)"""
        lists = self.connection.request(f"boards/{self.board_id}/lists", {"fields": "id,name"})
        return render_lists(lists)

    def get_cards(self) -> str:
        """Get all cards in this board (id and name only)"""
        cards = self.connection.request(f"boards/{self.board_id}/cards", {"fields": "id,name"})
        return render_cards(cards)

    def _list_cards(self, list_name: str, fields: str = "id,name") -> list[dict]:
        list_id = self.resolve_list(list_name)
        return self.connection.request(f"lists/{list_id}/cards", {"fields": fields})

    def get_cards_in_list(self, list_name: str) -> str:
        """Get the cards of the list named ``list_name``

        Raises:
            NotFoundError: If the board has no such list (no card request is made)
        """
        return render_cards(self._list_cards(list_name), title=f"Cards in {list_name}")

    def get_card_names(self, list_name: str | None = None) -> str:
        """Get just the card names, for the whole board or one list"""
        if list_name is None:
            cards = self.connection.request(f"boards/{self.board_id}/cards", {"fields": "name"})
            return render_card_names(cards, "Card Names in Board")
        return render_card_names(self._list_cards(list_name, "name"), f"Card Names in {list_name}")

    def get_card(self, card_id: str) -> str:
        """Get full detail for one card: labels, attachments, checklists, comments"""
        _require(card_id, "Card ID")
        card = self.connection.request(f"cards/{card_id}", CARD_DETAIL_PARAMS)
        return render_card(card)

    def get_first_open_card(self, list_name: str) -> str:
        """Get full detail for the topmost open card in a list"""
        cards = self._list_cards(list_name, "id,name,closed")
        for card in cards:
            if not card.get("closed"):
                return self.get_card(card["id"])
        return f"# Cards in {list_name}\n\n_No open cards found._\n"

    # ----- writes -----

    def create_card(
        self,
        list_id: str,
        name: str,
        desc: str | None = None,
        pos: str | float | None = None,
        due: str | None = None,
        id_members: list[str] | None = None,
        id_labels: list[str] | None = None,
    ) -> CreatedCard:
        """Create a card in the list with ID ``list_id``

        Args:
            list_id: ID of the list to add the card to
            name: Card title
            desc: Card description (markdown)
            pos: 'top', 'bottom' or a numeric position
            due: Due date as an ISO 8601 string
            id_members: Member IDs to assign
            id_labels: Label IDs to add

        Returns:
            The confirmation markdown, with ``card_id`` and ``list_id`` attributes
        """
        _require(list_id, "List ID")
        _require(name, "Card name")

        body: dict[str, Any] = {"idList": list_id, "name": name}
        optional = {
            "desc": desc,
            "pos": pos,
            "due": due,
            "idMembers": id_members,
            "idLabels": id_labels,
        }
        body.update({key: value for key, value in optional.items() if value is not None})

        card = self.connection.request("cards", method="POST", body=body)
        logger.info(f"Created card '{card.get('name')}' ({card['id']}) in list {list_id}")
        return CreatedCard(render_created_card(card), card["id"], card.get("idList", list_id))

    def create_card_in_list(self, list_name: str, name: str, **options: Any) -> CreatedCard:
        """Create a card in the list named ``list_name`` (see create_card for options)"""
        _require(list_name, "List name")
        _require(name, "Card name")
        return self.create_card(self.resolve_list(list_name), name, **options)

    def comment_card(self, card_id: str, text: str) -> str:
        """Add a comment to a card"""
        _require(card_id, "Card ID")
        _require(text, "Comment text")

        action = self.connection.request(
            f"cards/{card_id}/actions/comments", method="POST", body={"text": text}
        )
        logger.info(f"Commented on card {card_id}")
        return render_comment_added(card_id, action)

    def mark_card_completed(self, card_id: str) -> str:
        """Set the card's due-complete flag"""
        _require(card_id, "Card ID")

        card = self.connection.request(f"cards/{card_id}", method="PUT", body={"dueComplete": True})
        logger.info(f"Marked card {card_id} complete")
        return render_card_completed(card)

    def archive_card(self, card_id: str) -> str:
        """Archive (close) a card"""
        _require(card_id, "Card ID")

        card = self.connection.request(f"cards/{card_id}", method="PUT", body={"closed": True})
        logger.info(f"Archived card {card_id}")
        return render_card_archived(card)

    def move_card(self, card_id: str, list_name: str) -> str:
        """Move a card to the list named ``list_name`` on this board

        Raises:
            NotFoundError: If the board has no such list (the card is untouched)
        """
        _require(card_id, "Card ID")
        _require(list_name, "Target list name")

        list_id = self.resolve_list(list_name)
        card = self.connection.request(f"cards/{card_id}", method="PUT", body={"idList": list_id})
        logger.info(f"Moved card {card_id} to '{list_name}' ({list_id})")
        return render_card_moved(card, list_name)
