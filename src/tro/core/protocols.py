"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure and CLI adapters must
satisfy.  Core code depends ONLY on these protocols — never on concrete
implementations — so the resolver can run headlessly against stubs.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from tro.core.models import Board, Card, Entity, Level, MatchCandidate, TrelloList


class TrelloApi(Protocol):
    """Contract for Trello API backends.

    Any object that implements these methods with the correct
    signatures satisfies this protocol structurally (no explicit
    inheritance required).  Implementations must map all
    backend-specific exceptions to
    :class:`~tro.exceptions.ApiUnavailable`.
    """

    def list_boards(self) -> Sequence[Board]:
        """Return the open boards of the authenticated member."""
        ...  # pragma: no cover

    def list_lists(self, board_id: str) -> Sequence[TrelloList]:
        """Return the open lists of *board_id*, in board order."""
        ...  # pragma: no cover

    def list_cards(self, list_id: str) -> Sequence[Card]:
        """Return the open cards of *list_id*, in list order."""
        ...  # pragma: no cover

    def list_board_cards(self, board_id: str) -> Sequence[Card]:
        """Return the open cards of every list on *board_id*."""
        ...  # pragma: no cover

    def create_card(
        self,
        list_id: str,
        name: str,
        description: str | None = None,
    ) -> Card:
        """Create a card at the bottom of *list_id* and return it."""
        ...  # pragma: no cover

    def update_card(
        self,
        card_id: str,
        *,
        name: str | None = None,
        description: str | None = None,
        list_id: str | None = None,
        closed: bool | None = None,
    ) -> Card:
        """Update the given fields of *card_id*; ``None`` leaves a field as is."""
        ...  # pragma: no cover

    def delete_card(self, card_id: str) -> None:
        """Permanently delete *card_id*."""
        ...  # pragma: no cover


class Chooser(Protocol):
    """Contract for asking the user to pick one of several options."""

    def choose(self, message: str, options: Sequence[str]) -> int | None:
        """Block until the user picks an option.

        Returns
        -------
        int | None
            Zero-based index into *options*, or ``None`` when the user
            cancelled the prompt.
        """
        ...  # pragma: no cover


class Disambiguator(Protocol):
    """Contract for settling an ambiguous fuzzy match."""

    def disambiguate(
        self,
        candidates: Sequence[MatchCandidate],
        *,
        level: Level,
        fragment: str,
    ) -> Entity | None:
        """Pick one entity from ranked *candidates*.

        Returns ``None`` when the selection was cancelled.
        """
        ...  # pragma: no cover
