"""Core card service — mutations on fully resolved cards and lists.

Callers resolve their targets with :class:`~tro.core.resolver.Resolver`
first; this service only ever receives concrete entities, so no remote
state is touched until resolution has fully succeeded.

Guarantees
----------
* Pure orchestration — no ``print()``, no direct network access.
* Only :class:`~tro.exceptions.TroError` subclasses escape.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TypeVar

from tro.core.models import Card, TrelloList
from tro.core.protocols import TrelloApi
from tro.exceptions import ApiUnavailable, InvalidInputError, TroError

logger = logging.getLogger(__name__)

_R = TypeVar("_R")


class CardService:
    """Stateless service that creates, edits, moves, and removes cards.

    Parameters
    ----------
    api:
        Any object satisfying the :class:`TrelloApi` protocol.
    """

    def __init__(self, api: TrelloApi) -> None:
        self._api: TrelloApi = api

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def create(
        self,
        trello_list: TrelloList,
        name: str,
        description: str | None = None,
    ) -> Card:
        """Create a card named *name* in *trello_list*.

        Raises
        ------
        InvalidInputError
            If *name* is blank.
        ApiUnavailable
            If the API client fails.
        """
        clean_name = self._validate_name(name)
        card = self._call(
            lambda: self._api.create_card(trello_list.id, clean_name, description or None)
        )
        logger.info("Created card %s in list %s", card.id, trello_list.id)
        return card

    def rename(self, card: Card, name: str) -> Card:
        """Give *card* a new, non-blank name."""
        clean_name = self._validate_name(name)
        updated = self._call(lambda: self._api.update_card(card.id, name=clean_name))
        logger.info("Renamed card %s", card.id)
        return updated

    def set_description(self, card: Card, description: str) -> Card:
        """Replace the description of *card*; ``""`` clears it."""
        updated = self._call(
            lambda: self._api.update_card(card.id, description=description)
        )
        logger.info("Updated description of card %s", card.id)
        return updated

    def edit(
        self,
        card: Card,
        *,
        name: str | None = None,
        description: str | None = None,
    ) -> Card:
        """Apply a rename and/or description change in a single request.

        Fields left as ``None`` are not sent.  Returns *card* unchanged
        when there is nothing to update.
        """
        if name is None and description is None:
            return card
        clean_name = self._validate_name(name) if name is not None else None
        updated = self._call(
            lambda: self._api.update_card(
                card.id, name=clean_name, description=description
            )
        )
        logger.info("Edited card %s", card.id)
        return updated

    def move(self, card: Card, target: TrelloList) -> Card:
        """Move *card* into *target*; a no-op when it is already there."""
        if card.list_id == target.id:
            logger.debug("Card %s already in list %s", card.id, target.id)
            return card
        moved = self._call(lambda: self._api.update_card(card.id, list_id=target.id))
        logger.info("Moved card %s to list %s", card.id, target.id)
        return moved

    def close(self, card: Card) -> Card:
        """Archive *card*."""
        closed = self._call(lambda: self._api.update_card(card.id, closed=True))
        logger.info("Closed card %s", card.id)
        return closed

    def delete(self, card: Card) -> None:
        """Permanently delete *card*."""
        self._call(lambda: self._api.delete_card(card.id))
        logger.info("Deleted card %s", card.id)

    # ------------------------------------------------------------------
    # Validation (pure)
    # ------------------------------------------------------------------

    @staticmethod
    def _validate_name(name: str) -> str:
        stripped = name.strip()
        if not stripped:
            raise InvalidInputError(
                "Card name must not be empty.",
                hint="Pass a name with --name or type one at the prompt.",
            )
        return stripped

    # ------------------------------------------------------------------
    # Provider delegation (safe boundary)
    # ------------------------------------------------------------------

    @staticmethod
    def _call(call: Callable[[], _R]) -> _R:
        """Call the API and ensure only our exceptions escape."""
        try:
            return call()
        except TroError:
            raise
        except Exception as exc:
            raise ApiUnavailable(f"Unexpected API client error: {exc}") from exc
