"""CLI application entry point and command routing for tro.

This module is the **sole error boundary** for the entire application.
It catches :class:`~tro.exceptions.TroError`, ``KeyboardInterrupt``,
and any unexpected ``Exception``, rendering user-friendly messages via
Rich and returning well-defined exit codes.

Architecture notes
------------------
* No business logic lives here — resolution and mutations are
  delegated to the core services, transport to the infra layer.
* Every command resolves its full board/list/card path before any
  mutation is sent.
* This module is the only place that translates between the domain
  world and the OS process exit code.
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING

from tro.cli import exit_codes
from tro.cli.console import console
from tro.core.protocols import Disambiguator
from tro.exceptions import AmbiguousSelectionAborted, InvalidQueryError, TroError
from tro.utils.log import configure_logging
from tro.version import __version__

if TYPE_CHECKING:
    from tro.core.models import Board, Card
    from tro.core.resolver import Resolver
    from tro.infra.trello_client import HttpTrelloClient


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _add_card_path(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("board", help="Board name filter.")
    parser.add_argument("list", help="List name filter, or '-' for any list.")
    parser.add_argument("card", help="Card name filter.")


def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser.

    Every name argument is a case-insensitive fragment of the real
    name; an ambiguous fragment opens a selection menu.
    """
    parser = argparse.ArgumentParser(
        prog="tro",
        description="Trello CLI interface.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase log verbosity (-v info, -vv debug).",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to the config file (default: ~/.config/tro/config.toml).",
    )
    parser.add_argument(
        "--case-sensitive",
        action="store_true",
        help="Match names case-sensitively.",
    )
    parser.add_argument(
        "--no-input",
        action="store_true",
        help="Never prompt; fail on ambiguous names instead.",
    )

    sub = parser.add_subparsers(dest="command", metavar="COMMAND")

    show = sub.add_parser("show", help="Show boards, a board, a list, or a card.")
    show.add_argument("board", nargs="?", help="Board name filter.")
    show.add_argument("list", nargs="?", help="List name filter, or '-' for any list.")
    show.add_argument("card", nargs="?", help="Card name filter.")

    create = sub.add_parser("create", help="Create a card.")
    create.add_argument("board", help="Board name filter.")
    create.add_argument(
        "list",
        nargs="?",
        default="",
        help="List name filter (omit to pick from every list).",
    )
    create.add_argument("-n", "--name", help="Card name (prompted when omitted).")
    create.add_argument("-d", "--description", help="Card description.")

    edit = sub.add_parser("edit", help="Rename a card or change its description.")
    _add_card_path(edit)
    edit.add_argument("-n", "--name", help="New card name.")
    edit.add_argument("-d", "--description", help="New card description.")

    move = sub.add_parser("move", help="Move a card to another list of its board.")
    _add_card_path(move)
    move.add_argument("target", help="Destination list name filter.")

    close = sub.add_parser("close", help="Archive a card.")
    _add_card_path(close)

    delete = sub.add_parser("delete", help="Permanently delete a card.")
    _add_card_path(delete)
    delete.add_argument("-y", "--yes", action="store_true", help="Do not ask for confirmation.")

    sub.add_parser("doctor", help="Run environment diagnostics.")
    return parser


# ---------------------------------------------------------------------------
# Wiring
# ---------------------------------------------------------------------------

@contextmanager
def _open_client(args: argparse.Namespace) -> Iterator[HttpTrelloClient]:
    """Load the config and yield a connected HTTP client."""
    from tro.infra.config import load_config
    from tro.infra.trello_client import HttpTrelloClient

    config = load_config(args.config)
    with HttpTrelloClient(
        key=config.key,
        token=config.token,
        host=config.host,
        timeout=config.timeout,
    ) as client:
        yield client


def _build_disambiguator(args: argparse.Namespace) -> Disambiguator:
    """Prompt on a terminal; refuse to guess otherwise."""
    from tro.core.disambiguator import PromptDisambiguator, RejectingDisambiguator

    if args.no_input or not sys.stdin.isatty():
        return RejectingDisambiguator()

    from tro.cli.prompt import QuestionaryChooser

    return PromptDisambiguator(QuestionaryChooser())


def _build_resolver(args: argparse.Namespace, client: HttpTrelloClient) -> Resolver:
    from tro.core.resolver import Resolver

    return Resolver(
        client,
        _build_disambiguator(args),
        ignore_case=not args.case_sensitive,
    )


def _resolve_card(resolver: Resolver, args: argparse.Namespace) -> tuple[Board, Card]:
    """Resolve the BOARD LIST CARD positionals to the board and its card."""
    resolved = resolver.resolve([args.board, args.list, args.card])
    if resolved.card is None:
        raise InvalidQueryError(
            "A card name is required.",
            hint="Usage: tro <command> BOARD LIST CARD",
        )
    return resolved.board, resolved.card


def _cancelled() -> int:
    console.print("[yellow]Cancelled.[/yellow]")
    return exit_codes.CANCELLED


# ---------------------------------------------------------------------------
# Command handlers
# ---------------------------------------------------------------------------

def _handle_show(args: argparse.Namespace) -> int:
    """Render every board, or the entity the given path resolves to."""
    from tro.cli.render import render_board, render_boards, render_card, render_list

    fragments = [name for name in (args.board, args.list, args.card) if name is not None]

    with _open_client(args) as client:
        if not fragments:
            render_boards(client.list_boards())
            return exit_codes.SUCCESS

        resolved = _build_resolver(args, client).resolve(fragments)
        if resolved.card is not None:
            render_card(resolved.card)
        elif resolved.list is not None:
            render_list(resolved.list, client.list_cards(resolved.list.id))
        else:
            render_board(resolved.board, client.list_lists(resolved.board.id))
    return exit_codes.SUCCESS


def _handle_create(args: argparse.Namespace) -> int:
    """Create a card in the resolved list, prompting for a missing name."""
    from tro.cli.prompt import ask_text
    from tro.cli.render import render_card
    from tro.core.card_service import CardService

    with _open_client(args) as client:
        resolved = _build_resolver(args, client).resolve([args.board, args.list])
        trello_list = resolved.list
        if trello_list is None:
            raise InvalidQueryError(
                "A list name is required to create a card.",
                hint="Usage: tro create BOARD [LIST] [-n NAME]",
            )

        name = args.name
        if name is None:
            name = ask_text(f"Card name for '{trello_list.name}':")
            if name is None:
                return _cancelled()

        card = CardService(client).create(trello_list, name, args.description)

    console.print(f"[bold green]Created card[/bold green] '{card.name}'")
    render_card(card)
    return exit_codes.SUCCESS


def _handle_edit(args: argparse.Namespace) -> int:
    """Edit a card; without flags, prompt with the current values pre-filled."""
    from tro.cli.prompt import ask_text
    from tro.cli.render import render_card
    from tro.core.card_service import CardService

    with _open_client(args) as client:
        _board, card = _resolve_card(_build_resolver(args, client), args)

        name: str | None = args.name
        description: str | None = args.description
        if name is None and description is None:
            name = ask_text("Name:", default=card.name)
            if name is None:
                return _cancelled()
            description = ask_text(
                "Description (Esc then Enter to finish):",
                default=card.description or "",
                multiline=True,
            )
            if description is None:
                return _cancelled()
            # Only send what actually changed.
            if name == card.name:
                name = None
            if description == (card.description or ""):
                description = None

        updated = CardService(client).edit(card, name=name, description=description)

    if updated is card:
        console.print("[yellow]Nothing to change.[/yellow]")
    else:
        console.print(f"[bold green]Updated card[/bold green] '{updated.name}'")
    render_card(updated)
    return exit_codes.SUCCESS


def _handle_move(args: argparse.Namespace) -> int:
    """Move a card to another list on the same board."""
    from tro.core.card_service import CardService

    with _open_client(args) as client:
        resolver = _build_resolver(args, client)
        board, card = _resolve_card(resolver, args)
        target = resolver.resolve_list(board, args.target)
        moved = CardService(client).move(card, target)

    if moved is card:
        console.print(
            f"[yellow]Nothing to change:[/yellow] '{card.name}' "
            f"is already in '{target.name}'."
        )
    else:
        console.print(f"[bold green]Moved card[/bold green] '{card.name}' to '{target.name}'")
    return exit_codes.SUCCESS


def _handle_close(args: argparse.Namespace) -> int:
    """Archive a card."""
    from tro.core.card_service import CardService

    with _open_client(args) as client:
        _board, card = _resolve_card(_build_resolver(args, client), args)
        CardService(client).close(card)

    console.print(f"[bold green]Closed card[/bold green] '{card.name}'")
    return exit_codes.SUCCESS


def _handle_delete(args: argparse.Namespace) -> int:
    """Delete a card after confirmation."""
    from tro.cli.prompt import confirm
    from tro.core.card_service import CardService

    with _open_client(args) as client:
        _board, card = _resolve_card(_build_resolver(args, client), args)
        if not args.yes and not confirm(f"Permanently delete card '{card.name}'?"):
            return _cancelled()
        CardService(client).delete(card)

    console.print(f"[bold green]Deleted card[/bold green] '{card.name}'")
    return exit_codes.SUCCESS


def _handle_doctor(args: argparse.Namespace) -> int:
    """Dispatch the ``doctor`` diagnostics command."""
    from tro.cli.doctor import run_doctor

    return run_doctor(args.config)


_HANDLERS: dict[str, Callable[[argparse.Namespace], int]] = {
    "show": _handle_show,
    "create": _handle_create,
    "edit": _handle_edit,
    "move": _handle_move,
    "close": _handle_close,
    "delete": _handle_delete,
    "doctor": _handle_doctor,
}


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the tro CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.

    Returns
    -------
    int
        OS process exit code.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return exit_codes.SUCCESS

    configure_logging(args.verbose)
    return _HANDLERS[args.command](args)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except AmbiguousSelectionAborted as exc:
        console.print(f"[yellow]{exc}[/yellow]")
        sys.exit(exit_codes.CANCELLED)
    except TroError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        if exc.hint:
            console.print(f"[yellow]Hint:[/yellow] {exc.hint}")
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {exc}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
