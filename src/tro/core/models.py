"""Domain models for tro.

All models are **frozen** dataclasses — immutable value objects with no
behaviour beyond data access.  Entity identity is the Trello ``id``
alone: every other field is declared with ``compare=False`` so that two
snapshots of the same board, list, or card compare (and hash) equal even
after a rename.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Union

Level = Literal["board", "list", "card"]
"""Depth of a board → list → card path."""

LEVELS: tuple[Level, ...] = ("board", "list", "card")


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Board:
    """Top-level Trello container holding lists."""

    id: str
    name: str = field(compare=False)
    url: str | None = field(default=None, compare=False)
    closed: bool = field(default=False, compare=False)

    @property
    def display_name(self) -> str:
        return self.name

    @property
    def parent_id(self) -> None:
        return None


@dataclass(frozen=True, slots=True)
class TrelloList:
    """Ordered column within a board holding cards."""

    id: str
    name: str = field(compare=False)
    board_id: str = field(compare=False)
    closed: bool = field(default=False, compare=False)
    position: float = field(default=0.0, compare=False)
    """Remote ``pos`` value; lists are presented in ascending order."""

    @property
    def display_name(self) -> str:
        return self.name

    @property
    def parent_id(self) -> str:
        return self.board_id


@dataclass(frozen=True, slots=True)
class Card:
    """Leaf work item within a list."""

    id: str
    name: str = field(compare=False)
    list_id: str = field(compare=False)
    description: str | None = field(default=None, compare=False)
    url: str | None = field(default=None, compare=False)
    closed: bool = field(default=False, compare=False)

    @property
    def display_name(self) -> str:
        return self.name

    @property
    def parent_id(self) -> str:
        return self.list_id


Entity = Union[Board, TrelloList, Card]


# ---------------------------------------------------------------------------
# Resolution values
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class MatchCandidate:
    """One ranked fuzzy-match result.

    ``score`` is the matched name length (lower ranks higher); exact
    matches carry ``0``, the best possible score.
    """

    entity: Entity
    score: int
    exact: bool

    @property
    def name(self) -> str:
        return self.entity.display_name


@dataclass(frozen=True, slots=True)
class ResolvedEntity:
    """Outcome of resolving a board[/list[/card]] path.

    ``list`` is ``None`` when only a board was requested, or when the
    card was found through the ``-`` list wildcard.
    """

    board: Board
    list: TrelloList | None = None
    card: Card | None = None

    @property
    def target(self) -> Entity:
        """The deepest entity that was resolved."""
        if self.card is not None:
            return self.card
        if self.list is not None:
            return self.list
        return self.board

    @property
    def level(self) -> Level:
        if self.card is not None:
            return "card"
        if self.list is not None:
            return "list"
        return "board"
