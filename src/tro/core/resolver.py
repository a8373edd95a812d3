"""Core resolver — turns a fuzzy board[/list[/card]] path into entities.

The resolver walks the path one level at a time.  At each level it
fetches the candidates scoped to the parent resolved so far, ranks them
with :func:`~tro.core.matcher.match`, and either takes the single
winner or hands the ranked candidates to an injected
:class:`~tro.core.protocols.Disambiguator`.

Guarantees
----------
* Pure orchestration — no ``print()``, no direct network access.
* Exactly one API call per level traversed; nothing is cached.
* Never mutates remote state.
* Only :class:`~tro.exceptions.TroError` subclasses escape.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import TypeVar

from tro.core.matcher import exact_matches, match_entities
from tro.core.models import (
    LEVELS,
    Board,
    Card,
    Entity,
    Level,
    MatchCandidate,
    ResolvedEntity,
    TrelloList,
)
from tro.core.protocols import Disambiguator, TrelloApi
from tro.exceptions import (
    AmbiguousSelectionAborted,
    ApiUnavailable,
    EntityNotFound,
    InvalidQueryError,
    TroError,
    WildcardError,
)

logger = logging.getLogger(__name__)

LIST_WILDCARD: str = "-"
"""List fragment meaning "search cards across every list of the board"."""

_E = TypeVar("_E", Board, TrelloList, Card)


class Resolver:
    """Resolve fuzzy name paths against a :class:`TrelloApi`.

    Parameters
    ----------
    api:
        Any object satisfying the :class:`TrelloApi` protocol.
    disambiguator:
        Consulted whenever a level is ambiguous.
    ignore_case:
        Match names case-insensitively (the default).
    """

    def __init__(
        self,
        api: TrelloApi,
        disambiguator: Disambiguator,
        *,
        ignore_case: bool = True,
    ) -> None:
        self._api: TrelloApi = api
        self._disambiguator: Disambiguator = disambiguator
        self._ignore_case: bool = ignore_case

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def resolve(self, query_path: Sequence[str]) -> ResolvedEntity:
        """Resolve one to three fragments ``(board[, list[, card]])``.

        Raises
        ------
        InvalidQueryError
            If *query_path* is empty or longer than three fragments.
        WildcardError
            If the ``-`` list wildcard is given without a card fragment.
        EntityNotFound
            If a level has no matching entity.
        AmbiguousSelectionAborted
            If the user cancels a disambiguation prompt.
        InvalidInputError
            If the disambiguator returns a choice that was not offered.
        ApiUnavailable
            If the API client fails.
        """
        fragments = self._validate_path(query_path)

        board = self.resolve_board(fragments[0])
        if len(fragments) == 1:
            return ResolvedEntity(board=board)

        if fragments[1] == LIST_WILDCARD:
            card = self._resolve_card_on_board(board, fragments[2])
            return ResolvedEntity(board=board, card=card)

        trello_list = self.resolve_list(board, fragments[1])
        if len(fragments) == 2:
            return ResolvedEntity(board=board, list=trello_list)

        card = self.resolve_card(trello_list, fragments[2])
        return ResolvedEntity(board=board, list=trello_list, card=card)

    def resolve_board(self, fragment: str) -> Board:
        """Resolve *fragment* among all boards."""
        boards = self._fetch(self._api.list_boards)
        return self._select(boards, fragment, "board")

    def resolve_list(self, board: Board, fragment: str) -> TrelloList:
        """Resolve *fragment* among the lists of *board*."""
        lists = self._fetch(lambda: self._api.list_lists(board.id))
        return self._select(lists, fragment, "list")

    def resolve_card(self, trello_list: TrelloList, fragment: str) -> Card:
        """Resolve *fragment* among the cards of *trello_list*."""
        cards = self._fetch(lambda: self._api.list_cards(trello_list.id))
        return self._select(cards, fragment, "card")

    # ------------------------------------------------------------------
    # Path validation
    # ------------------------------------------------------------------

    @staticmethod
    def _validate_path(query_path: Sequence[str]) -> tuple[str, ...]:
        fragments = tuple(query_path)
        if not fragments:
            raise InvalidQueryError(
                "A board name is required.",
                hint="Usage: tro <command> BOARD [LIST [CARD]]",
            )
        if len(fragments) > len(LEVELS):
            raise InvalidQueryError(
                f"Too many names given ({len(fragments)}); "
                "expected at most BOARD LIST CARD.",
            )
        if len(fragments) == 2 and fragments[1] == LIST_WILDCARD:
            raise WildcardError(
                "Card name must be specified with list '-' wildcard.",
            )
        return fragments

    # ------------------------------------------------------------------
    # Matching and disambiguation
    # ------------------------------------------------------------------

    def _resolve_card_on_board(self, board: Board, fragment: str) -> Card:
        cards = self._fetch(lambda: self._api.list_board_cards(board.id))
        return self._select(cards, fragment, "card")

    def _select(self, entities: Sequence[_E], fragment: str, level: Level) -> _E:
        """Pick one entity of *entities* for *fragment*, or raise."""
        ranked = match_entities(fragment, entities, ignore_case=self._ignore_case)
        logger.debug(
            "%s '%s': %d candidate(s), %d match(es)",
            level,
            fragment,
            len(entities),
            len(ranked),
        )
        if not ranked:
            raise EntityNotFound(level, fragment)

        winner = self._single_winner(ranked)
        if winner is not None:
            return winner  # type: ignore[return-value]

        chosen = self._disambiguator.disambiguate(ranked, level=level, fragment=fragment)
        if chosen is None:
            raise AmbiguousSelectionAborted(level, fragment)
        logger.debug("%s '%s' disambiguated to %s", level, fragment, chosen.id)
        return chosen  # type: ignore[return-value]

    @staticmethod
    def _single_winner(ranked: Sequence[MatchCandidate]) -> Entity | None:
        """Return the unambiguous match, if there is one."""
        if len(ranked) == 1:
            return ranked[0].entity
        exact = exact_matches(ranked)
        if len(exact) == 1:
            return exact[0].entity
        return None

    # ------------------------------------------------------------------
    # Provider delegation (safe boundary)
    # ------------------------------------------------------------------

    @staticmethod
    def _fetch(call: Callable[[], Sequence[_E]]) -> Sequence[_E]:
        """Call the API and ensure only our exceptions escape."""
        try:
            return call()
        except TroError:
            # Already one of ours — let it propagate unchanged.
            raise
        except Exception as exc:
            raise ApiUnavailable(f"Unexpected API client error: {exc}") from exc
