"""Render Trello JSON resources as markdown documents.

Every function here is pure: it takes the decoded API response and returns a
string. Templates are fixed so the same response always renders the same
document.

Card documents put ``- **ID**: `<id>` `` directly under the name heading.
``extract_id()`` parses that exact line back out, so changing the ID line
template breaks extraction.
"""

from __future__ import annotations

import re
from typing import Any

ID_LINE_PATTERN = re.compile(r"- \*\*ID\*\*: `([^`]+)`")

CHECK_COMPLETE = "✓"
CHECK_INCOMPLETE = "☐"

BYTES_PER_MB = 1024 * 1024


def id_line(identifier: str) -> str:
    return f"- **ID**: `{identifier}`\n"


def extract_id(markdown: str) -> str | None:
    """Recover the first ``- **ID**: `...` `` identifier from rendered markdown

    Example:
        >>> extract_id("## Fix login\\n- **ID**: `abc123`\\n")
        'abc123'
    """
    match = ID_LINE_PATTERN.search(markdown)
    return match.group(1) if match else None


def format_size(num_bytes: int | float) -> str:
    """Attachment size in megabytes, two decimals (1048576 -> '1.00 MB')"""
    return f"{num_bytes / BYTES_PER_MB:.2f} MB"


def blockquote(text: str) -> str:
    return "".join(f"> {line}\n" for line in (text or "").split("\n"))


def _url_line(card: dict) -> str:
    url = card.get("url") or card.get("shortUrl")
    return f"\n**URL**: {url}\n" if url else ""


# ----- collections -----


def _render_collection(title: str, items: list[dict], kind: str) -> str:
    markdown = f"# {title}\n\n"
    if not items:
        return markdown + f"_No {kind} found._\n"

    for item in items:
        markdown += f"## {item.get('name', '')}\n"
        markdown += id_line(item["id"])
        markdown += "\n"
    return markdown


def render_boards(boards: list[dict]) -> str:
    return _render_collection("Trello Boards", boards, "boards")


def render_lists(lists: list[dict]) -> str:
    return _render_collection("Lists in Board", lists, "lists")


def render_cards(cards: list[dict], title: str = "Cards in Board") -> str:
    return _render_collection(title, cards, "cards")


def render_card_names(cards: list[dict], title: str) -> str:
    """Compact listing: one bullet per card name, no IDs"""
    markdown = f"# {title}\n\n"
    if not cards:
        return markdown + "_No cards found._\n"
    return markdown + "".join(f"- {card.get('name', '')}\n" for card in cards)


# ----- card detail -----


def render_card(card: dict[str, Any]) -> str:
    """Render full card detail.

    Sections appear in this order and each is left out entirely when its
    field is missing or empty: description, due date, labels, activity,
    attachments, checklists, recent comments, URL.
    """
    markdown = f"# Card: {card.get('name', '')}\n\n"
    markdown += id_line(card["id"])
    markdown += f"- **Status**: {'Closed' if card.get('closed') else 'Open'}\n"

    if card.get("desc"):
        markdown += f"\n## Description\n{card['desc']}\n"

    if card.get("due"):
        markdown += f"\n## Due Date\n- **Due**: {card['due']}\n"
        markdown += f"- **Complete**: {'Yes' if card.get('dueComplete') else 'No'}\n"

    labels = card.get("labels") or []
    if labels:
        markdown += "\n## Labels\n"
        for label in labels:
            markdown += f"- {label.get('name') or 'Unnamed'} ({label.get('color') or 'no color'})\n"

    badges = card.get("badges")
    if badges:
        markdown += "\n## Activity\n"
        markdown += f"- **Comments**: {badges.get('comments') or 0}\n"
        markdown += f"- **Attachments**: {badges.get('attachments') or 0}\n"
        markdown += (
            f"- **Checklist Items**: {badges.get('checkItems') or 0} "
            f"({badges.get('checkItemsChecked') or 0} complete)\n"
        )

    attachments = card.get("attachments") or []
    if attachments:
        markdown += "\n## Attachments\n"
        for att in attachments:
            markdown += f"- [{att.get('name', '')}]({att.get('url', '')})"
            if att.get("bytes"):
                markdown += f" ({format_size(att['bytes'])})"
            markdown += "\n"

    checklists = card.get("checklists") or []
    if checklists:
        markdown += "\n## Checklists\n"
        for checklist in checklists:
            markdown += f"\n### {checklist.get('name', '')}\n"
            for item in checklist.get("checkItems") or []:
                check = CHECK_COMPLETE if item.get("state") == "complete" else CHECK_INCOMPLETE
                markdown += f"- {check} {item.get('name', '')}\n"

    comments = [a for a in card.get("actions") or [] if a.get("type") == "commentCard"]
    if comments:
        markdown += "\n## Recent Comments\n"
        for action in comments:
            markdown += "\n" + _render_comment(action)

    if card.get("shortUrl"):
        markdown += f"\n**URL**: {card['shortUrl']}\n"

    return markdown


def _render_comment(action: dict) -> str:
    author = (action.get("memberCreator") or {}).get("fullName") or "Unknown"
    text = (action.get("data") or {}).get("text", "")
    return f"**{author}** ({action.get('date', '')}):\n" + blockquote(text)


# ----- mutation confirmations -----


def render_created_card(card: dict[str, Any]) -> str:
    markdown = "# Card Created Successfully\n\n"
    markdown += f"## {card.get('name', '')}\n"
    markdown += id_line(card["id"])
    markdown += f"- **List ID**: `{card.get('idList', '')}`\n"

    if card.get("desc"):
        markdown += f"\n### Description\n{card['desc']}\n"

    if card.get("due"):
        markdown += f"\n### Due Date\n{card['due']}\n"

    return markdown + _url_line(card)


def render_comment_added(card_id: str, action: dict[str, Any]) -> str:
    card_name = ((action.get("data") or {}).get("card") or {}).get("name") or card_id
    markdown = "# Comment Added\n\n"
    markdown += f"## {card_name}\n"
    markdown += id_line(card_id)
    markdown += "\n" + _render_comment(action)
    return markdown


def render_card_completed(card: dict[str, Any]) -> str:
    markdown = "# Card Marked Complete\n\n"
    markdown += f"## {card.get('name', '')}\n"
    markdown += id_line(card["id"])
    markdown += f"- **Due Complete**: {'Yes' if card.get('dueComplete') else 'No'}\n"
    return markdown + _url_line(card)


def render_card_archived(card: dict[str, Any]) -> str:
    markdown = "# Card Archived\n\n"
    markdown += f"## {card.get('name', '')}\n"
    markdown += id_line(card["id"])
    markdown += f"- **Status**: {'Closed' if card.get('closed') else 'Open'}\n"
    return markdown + _url_line(card)


def render_card_moved(card: dict[str, Any], list_name: str) -> str:
    markdown = "# Card Moved\n\n"
    markdown += f"## {card.get('name', '')}\n"
    markdown += id_line(card["id"])
    markdown += f"- **List**: {list_name}\n"
    markdown += f"- **List ID**: `{card.get('idList', '')}`\n"
    return markdown + _url_line(card)
