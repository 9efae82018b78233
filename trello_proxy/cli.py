"""CLI entry point for trello_proxy."""

from __future__ import annotations

import logging
import sys

from trello_proxy.board import TrelloBoard
from trello_proxy.config import ClientConfig, load_environment
from trello_proxy.connection import TrelloConnection
from trello_proxy.exceptions import ConfigurationError, TrelloProxyError
from trello_proxy.logging_config import setup_logging

logger = logging.getLogger("trello_proxy.cli")

# Module docstring for --help
__doc__ = """
trello-proxy - Read and update a Trello board as markdown

Usage:
    export TRELLO_API_KEY="your-key"
    export TRELLO_TOKEN="your-token"
    export TRELLO_BOARD_URL="https://trello.com/b/<boardId>/<board-name>"

    trello-proxy boards                       # Boards you can access
    trello-proxy lists                        # Lists in the board
    trello-proxy cards [--list NAME]          # Cards in the board or one list
    trello-proxy names [--list NAME]          # Card names only
    trello-proxy card CARD_ID                 # Full card detail
    trello-proxy first-open --list NAME       # Detail of the first open card in a list
    trello-proxy create --list NAME --name TITLE [--desc TEXT] [--due ISO] [--pos top|bottom]
    trello-proxy comment CARD_ID TEXT
    trello-proxy complete CARD_ID
    trello-proxy archive CARD_ID
    trello-proxy move CARD_ID --to NAME

Options:
    --board-url URL      Board URL (default: $TRELLO_BOARD_URL)
    --board-id ID        Board ID (default: $TRELLO_BOARD_ID)
    --timeout SECONDS    Per-request timeout (default: 30)
    --retries N          Attempts per request, including the first (default: 3)
    --no-verify-ssl      Disable TLS certificate verification
    -v, --verbose        Log every API request
    -q, --quiet          Only log errors
    --log-level LEVEL    DEBUG, INFO, WARNING or ERROR
    --log-file PATH      Also write logs to PATH

Credentials may also be placed in a .env file (or the file named by
$TRELLO_ENV_FILE). Markdown is written to stdout, diagnostics to stderr.

Global options go before the first positional argument; anything after it,
other than the command's own options, is taken literally. Use -- to pass a
value that starts with a dash in an earlier position.
"""

GLOBAL_FLAGS = {
    "-h": "--help",
    "--help": "--help",
    "-v": "--verbose",
    "--verbose": "--verbose",
    "-q": "--quiet",
    "--quiet": "--quiet",
    "--no-verify-ssl": "--no-verify-ssl",
}
GLOBAL_OPTIONS = {"--log-level", "--log-file", "--board-url", "--board-id", "--timeout", "--retries"}

# Command name -> options it accepts
COMMANDS: dict[str, set[str]] = {
    "boards": set(),
    "lists": set(),
    "cards": {"--list"},
    "names": {"--list"},
    "card": set(),
    "first-open": {"--list"},
    "create": {"--list", "--name", "--desc", "--due", "--pos"},
    "comment": set(),
    "complete": set(),
    "archive": set(),
    "move": {"--to"},
}


class UsageError(Exception):
    """Raised for malformed command lines"""

    pass


def parse_args(argv: list[str]) -> tuple[str | None, dict, list[str]]:
    """Split a command line into (command, options, positionals).

    Flags are stored under their long name with the value True. Scanning
    stops at --help, in which case the command may be None.
    """
    command = None
    options: dict = {}
    positionals: list[str] = []
    tokens = iter(argv)

    for token in tokens:
        if token == "--":
            positionals.extend(tokens)
            break

        own_options = COMMANDS.get(command, set())
        in_options = not positionals

        if token in own_options or (in_options and token in GLOBAL_OPTIONS):
            value = next(tokens, None)
            if value is None:
                raise UsageError(f"{token} requires a value")
            options[token] = value
        elif in_options and token in GLOBAL_FLAGS:
            options[GLOBAL_FLAGS[token]] = True
            if GLOBAL_FLAGS[token] == "--help":
                return command, options, positionals
        elif in_options and token.startswith("-") and token != "-":
            target = f" for {command}" if command else ""
            raise UsageError(f"Unknown option{target}: {token} (see --help)")
        elif command is None:
            if token not in COMMANDS:
                raise UsageError(f"Unknown command: {token} (see --help)")
            command = token
        else:
            positionals.append(token)

    if command is None:
        raise UsageError(f"Expected a command: {', '.join(sorted(COMMANDS))} (see --help)")
    return command, options, positionals


def _positional(args: list[str], count: int, usage: str) -> list[str]:
    if len(args) != count:
        raise UsageError(f"Usage: trello-proxy {usage}")
    return args


def _open_board(connection: TrelloConnection, board_url: str | None, board_id: str | None):
    if board_url:
        return connection.board_from_url(board_url)
    if board_id:
        return connection.board(board_id)
    raise ConfigurationError(
        "Missing board identifier. Provide --board-url/--board-id or set one of:\n"
        "  TRELLO_BOARD_URL   - The full board URL (e.g., https://trello.com/b/Bm0nnz1R/my-board)\n"
        "  TRELLO_BOARD_ID    - The board ID (e.g., Bm0nnz1R)"
    )


def run_command(board: TrelloBoard, command: str, options: dict, args: list[str]) -> str:
    """Execute one board command with its parsed options and positional args"""
    list_name = options.get("--list")

    if command == "lists":
        _positional(args, 0, "lists")
        return board.get_lists()

    if command == "cards":
        _positional(args, 0, "cards [--list NAME]")
        return board.get_cards_in_list(list_name) if list_name else board.get_cards()

    if command == "names":
        _positional(args, 0, "names [--list NAME]")
        return board.get_card_names(list_name)

    if command == "card":
        (card_id,) = _positional(args, 1, "card CARD_ID")
        return board.get_card(card_id)

    if command == "first-open":
        _positional(args, 0, "first-open --list NAME")
        if not list_name:
            raise UsageError("first-open requires --list NAME")
        return board.get_first_open_card(list_name)

    if command == "create":
        name = options.get("--name")
        _positional(args, 0, "create --list NAME --name TITLE [--desc TEXT] [--due ISO]")
        if not list_name or not name:
            raise UsageError("create requires --list NAME and --name TITLE")
        return board.create_card_in_list(
            list_name,
            name,
            desc=options.get("--desc"),
            due=options.get("--due"),
            pos=options.get("--pos"),
        )

    if command == "comment":
        card_id, text = _positional(args, 2, "comment CARD_ID TEXT")
        return board.comment_card(card_id, text)

    if command == "complete":
        (card_id,) = _positional(args, 1, "complete CARD_ID")
        return board.mark_card_completed(card_id)

    if command == "archive":
        (card_id,) = _positional(args, 1, "archive CARD_ID")
        return board.archive_card(card_id)

    if command == "move":
        target = options.get("--to")
        (card_id,) = _positional(args, 1, "move CARD_ID --to NAME")
        if not target:
            raise UsageError("move requires --to NAME")
        return board.move_card(card_id, target)

    raise UsageError(f"Unknown command: {command}")


def main() -> None:
    try:
        command, options, rest = parse_args(sys.argv[1:])
    except UsageError as e:
        # Logging is not configured yet
        print(f"❌ Error: {e}", file=sys.stderr)
        sys.exit(1)

    # Show help
    if options.get("--help"):
        print(__doc__)
        sys.exit(0)

    # Parse logging flags
    log_level = "INFO"
    if options.get("--verbose"):
        log_level = "DEBUG"
    elif options.get("--quiet"):
        log_level = "ERROR"
    elif options.get("--log-level"):
        log_level = options["--log-level"].upper()

    setup_logging(log_level, options.get("--log-file"))

    no_verify_ssl = bool(options.get("--no-verify-ssl"))
    overrides: dict = {"verify_ssl": not no_verify_ssl}
    try:
        if "--timeout" in options:
            overrides["timeout"] = float(options["--timeout"])
        if "--retries" in options:
            overrides["max_retries"] = int(options["--retries"])
    except ValueError as e:
        logger.error(f"❌ Error: --timeout and --retries must be numbers: {e}")
        sys.exit(1)

    if no_verify_ssl:
        import urllib3

        urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)
        logger.info("🔓 SSL verification disabled")

    try:
        config = ClientConfig.from_env(**overrides)
        logger.debug(f"Using {config!r}")
        connection = TrelloConnection(config)

        if command == "boards":
            _positional(rest, 0, "boards")
            output = connection.get_boards()
        else:
            env = load_environment()
            # Flags beat the environment; within each, a URL beats a bare ID
            if options.get("--board-url") or options.get("--board-id"):
                board_url, board_id = options.get("--board-url"), options.get("--board-id")
            else:
                board_url, board_id = env.get("TRELLO_BOARD_URL"), env.get("TRELLO_BOARD_ID")
            board = _open_board(connection, board_url, board_id)
            output = run_command(board, command, options, rest)
    except UsageError as e:
        logger.error(f"❌ Error: {e}")
        sys.exit(1)
    except TrelloProxyError as e:
        logger.error(f"❌ {e}")
        sys.exit(1)

    print(output)


if __name__ == "__main__":
    main()
