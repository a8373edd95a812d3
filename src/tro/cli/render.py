"""Rich rendering of boards, lists, and cards.

All display-related logic lives here — no resolution, no API calls.
Results are written to stdout via :data:`~tro.cli.console.output`.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from tro.cli.console import output
from tro.core.models import Board, Card, TrelloList
from tro.exceptions import EnvironmentError


def _import_rich_table() -> type[Any]:
    """Import rich table lazily for entity rendering."""
    try:
        from rich.table import Table
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "rich is not installed. Install with: pip install rich",
        ) from exc
    return Table


def _import_rich_panel() -> type[Any]:
    try:
        from rich.panel import Panel
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "rich is not installed. Install with: pip install rich",
        ) from exc
    return Panel


# ---------------------------------------------------------------------------
# Presentation helpers (pure transforms — no I/O themselves)
# ---------------------------------------------------------------------------

def _escape(text: str) -> str:
    """Escape Rich markup in user-supplied names."""
    try:
        from rich.markup import escape
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "rich is not installed. Install with: pip install rich",
        ) from exc
    return escape(text)


def _format_description(description: str | None) -> str:
    """Return the description, or a dim placeholder when there is none."""
    if not description or not description.strip():
        return "[dim]No description[/dim]"
    return _escape(description)


def _short_id(entity_id: str) -> str:
    """Trello ids are 24 hex chars; the tail is enough to tell them apart."""
    return entity_id[-6:]


def _new_table(title: str, *columns: str) -> Any:
    table_class = _import_rich_table()
    table = table_class(
        title=title,
        show_header=True,
        header_style="bold magenta",
        border_style="dim",
    )
    table.add_column("#", justify="right", style="dim", width=4)
    for column in columns:
        table.add_column(column, justify="left")
    table.add_column("Id", justify="right", style="dim")
    return table


# ---------------------------------------------------------------------------
# Public renderers
# ---------------------------------------------------------------------------

def render_boards(boards: Sequence[Board]) -> None:
    """Print a table of all boards."""
    table = _new_table("Boards", "Name", "URL")
    for i, board in enumerate(boards, start=1):
        table.add_row(str(i), _escape(board.name), board.url or "", _short_id(board.id))
    output.print(table)


def render_board(board: Board, lists: Sequence[TrelloList]) -> None:
    """Print *board* and its lists."""
    table = _new_table(_escape(board.name), "List")
    for i, trello_list in enumerate(lists, start=1):
        table.add_row(str(i), _escape(trello_list.name), _short_id(trello_list.id))
    output.print(table)


def render_list(trello_list: TrelloList, cards: Sequence[Card]) -> None:
    """Print *trello_list* and its cards."""
    table = _new_table(_escape(trello_list.name), "Card")
    for i, card in enumerate(cards, start=1):
        table.add_row(str(i), _escape(card.name), _short_id(card.id))
    output.print(table)


def render_card(card: Card) -> None:
    """Print a detail panel for *card*."""
    panel_class = _import_rich_panel()
    body = _format_description(card.description)
    if card.url:
        body = f"{body}\n\n[cyan]{card.url}[/cyan]"
    subtitle = "archived" if card.closed else None
    output.print(
        panel_class(
            body,
            title=f"[bold]{_escape(card.name)}[/bold]",
            subtitle=subtitle,
            expand=False,
        )
    )
