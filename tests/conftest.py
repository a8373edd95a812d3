"""Shared pytest fixtures and configuration for the tro test suite.

Guidelines
----------
* No internet access in any test.
* httpx is mocked at the infra boundary (``httpx.MockTransport``).
* Core tests run against the in-memory :class:`StubTrelloApi`.
* Tests must not depend on OS state or a real config file.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import replace

import pytest

from tro.core.models import Board, Card, Entity, Level, MatchCandidate, TrelloList


class StubTrelloApi:
    """In-memory :class:`~tro.core.protocols.TrelloApi` that records calls."""

    def __init__(
        self,
        boards: Sequence[Board] = (),
        lists: Sequence[TrelloList] = (),
        cards: Sequence[Card] = (),
    ) -> None:
        self.boards: list[Board] = list(boards)
        self.lists: list[TrelloList] = list(lists)
        self.cards: list[Card] = list(cards)
        self.calls: list[tuple[str, ...]] = []

    # reads

    def list_boards(self) -> list[Board]:
        self.calls.append(("list_boards",))
        return list(self.boards)

    def list_lists(self, board_id: str) -> list[TrelloList]:
        self.calls.append(("list_lists", board_id))
        return [lst for lst in self.lists if lst.board_id == board_id]

    def list_cards(self, list_id: str) -> list[Card]:
        self.calls.append(("list_cards", list_id))
        return [card for card in self.cards if card.list_id == list_id]

    def list_board_cards(self, board_id: str) -> list[Card]:
        self.calls.append(("list_board_cards", board_id))
        list_ids = {lst.id for lst in self.lists if lst.board_id == board_id}
        return [card for card in self.cards if card.list_id in list_ids]

    # mutations

    def create_card(
        self,
        list_id: str,
        name: str,
        description: str | None = None,
    ) -> Card:
        self.calls.append(("create_card", list_id, name))
        card = Card(
            id=f"new{len(self.cards)}",
            name=name,
            list_id=list_id,
            description=description,
        )
        self.cards.append(card)
        return card

    def update_card(
        self,
        card_id: str,
        *,
        name: str | None = None,
        description: str | None = None,
        list_id: str | None = None,
        closed: bool | None = None,
    ) -> Card:
        self.calls.append(("update_card", card_id))
        index = next(i for i, card in enumerate(self.cards) if card.id == card_id)
        current = self.cards[index]
        updated = replace(
            current,
            name=current.name if name is None else name,
            description=current.description if description is None else description,
            list_id=current.list_id if list_id is None else list_id,
            closed=current.closed if closed is None else closed,
        )
        self.cards[index] = updated
        return updated

    def delete_card(self, card_id: str) -> None:
        self.calls.append(("delete_card", card_id))
        self.cards = [card for card in self.cards if card.id != card_id]

    def call_names(self) -> list[str]:
        return [call[0] for call in self.calls]


class FailingDisambiguator:
    """Disambiguator stub that fails the test if it is ever consulted."""

    def disambiguate(
        self,
        candidates: Sequence[MatchCandidate],
        *,
        level: Level,
        fragment: str,
    ) -> Entity | None:
        pytest.fail(f"disambiguator invoked for {level} '{fragment}'")


class FirstChoiceDisambiguator:
    """Deterministic disambiguator: always picks index 0, records each call."""

    def __init__(self) -> None:
        self.calls: list[tuple[Level, str, list[str]]] = []

    def disambiguate(
        self,
        candidates: Sequence[MatchCandidate],
        *,
        level: Level,
        fragment: str,
    ) -> Entity | None:
        self.calls.append((level, fragment, [c.name for c in candidates]))
        return candidates[0].entity


class CancellingDisambiguator:
    """Disambiguator stub that behaves like a dismissed prompt."""

    def __init__(self) -> None:
        self.calls: int = 0

    def disambiguate(
        self,
        candidates: Sequence[MatchCandidate],
        *,
        level: Level,
        fragment: str,
    ) -> Entity | None:
        self.calls += 1
        return None


def sample_api() -> StubTrelloApi:
    """Two boards, three lists, a handful of cards with overlapping names."""
    return StubTrelloApi(
        boards=[
            Board(id="b1", name="Personal"),
            Board(id="b2", name="Work"),
            Board(id="b3", name="Workshop"),
        ],
        lists=[
            TrelloList(id="l1", name="Groceries", board_id="b1", position=1),
            TrelloList(id="l2", name="Grocery List", board_id="b1", position=2),
            TrelloList(id="l3", name="Done", board_id="b1", position=3),
            TrelloList(id="l4", name="Backlog", board_id="b2", position=1),
        ],
        cards=[
            Card(id="c1", name="Milk", list_id="l1"),
            Card(id="c2", name="Oat milk", list_id="l1"),
            Card(id="c3", name="Bread", list_id="l2"),
            Card(id="c4", name="Fix login", list_id="l4", description="500 on submit"),
            Card(id="c5", name="Buy milk", list_id="l3"),
        ],
    )


@pytest.fixture
def api() -> StubTrelloApi:
    return sample_api()
