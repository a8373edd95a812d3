"""Tests for CardService (core/card_service.py).

Runs against the in-memory stub API; verifies validation, the fields
sent for each mutation, and exception mapping.
"""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from conftest import StubTrelloApi
from tro.core.card_service import CardService
from tro.core.models import Card, TrelloList
from tro.exceptions import ApiUnavailable, InvalidInputError


def _list(api: StubTrelloApi, list_id: str) -> TrelloList:
    return next(lst for lst in api.lists if lst.id == list_id)


def _card(api: StubTrelloApi, card_id: str) -> Card:
    return next(card for card in api.cards if card.id == card_id)


class TestCreate:
    def test_creates_in_list(self, api: StubTrelloApi) -> None:
        card = CardService(api).create(_list(api, "l1"), "  Eggs  ", "free range")
        assert card.name == "Eggs"
        assert card.list_id == "l1"
        assert card.description == "free range"

    def test_blank_name_rejected_before_any_call(self, api: StubTrelloApi) -> None:
        with pytest.raises(InvalidInputError):
            CardService(api).create(_list(api, "l1"), "   ")
        assert api.calls == []

    def test_empty_description_not_sent(self) -> None:
        mock_api = MagicMock()
        CardService(mock_api).create(
            TrelloList(id="l9", name="L", board_id="b9"), "Eggs", "",
        )
        mock_api.create_card.assert_called_once_with("l9", "Eggs", None)


class TestEdit:
    def test_rename(self, api: StubTrelloApi) -> None:
        updated = CardService(api).rename(_card(api, "c1"), "Whole milk")
        assert updated.name == "Whole milk"

    def test_set_description(self, api: StubTrelloApi) -> None:
        updated = CardService(api).set_description(_card(api, "c1"), "2 litres")
        assert updated.description == "2 litres"

    def test_edit_sends_only_given_fields(self) -> None:
        mock_api = MagicMock()
        card = Card(id="c9", name="Old", list_id="l9")
        CardService(mock_api).edit(card, description="new")
        mock_api.update_card.assert_called_once_with("c9", name=None, description="new")

    def test_edit_nothing_is_noop(self) -> None:
        mock_api = MagicMock()
        card = Card(id="c9", name="Old", list_id="l9")
        assert CardService(mock_api).edit(card) is card
        mock_api.update_card.assert_not_called()

    def test_edit_blank_name_rejected(self, api: StubTrelloApi) -> None:
        with pytest.raises(InvalidInputError):
            CardService(api).edit(_card(api, "c1"), name="")


class TestMoveCloseDelete:
    def test_move(self, api: StubTrelloApi) -> None:
        moved = CardService(api).move(_card(api, "c1"), _list(api, "l3"))
        assert moved.list_id == "l3"

    def test_move_to_same_list_is_noop(self, api: StubTrelloApi) -> None:
        card = _card(api, "c1")
        assert CardService(api).move(card, _list(api, "l1")) is card
        assert api.calls == []

    def test_close(self, api: StubTrelloApi) -> None:
        assert CardService(api).close(_card(api, "c1")).closed is True

    def test_delete(self, api: StubTrelloApi) -> None:
        CardService(api).delete(_card(api, "c1"))
        assert all(card.id != "c1" for card in api.cards)


class TestExceptionMapping:
    def test_api_unavailable_propagates(self) -> None:
        mock_api = MagicMock()
        mock_api.delete_card.side_effect = ApiUnavailable("down")
        with pytest.raises(ApiUnavailable, match="down"):
            CardService(mock_api).delete(Card(id="c9", name="x", list_id="l9"))

    def test_unexpected_error_wrapped(self) -> None:
        mock_api = MagicMock()
        mock_api.update_card.side_effect = KeyError("idList")
        with pytest.raises(ApiUnavailable, match="Unexpected"):
            CardService(mock_api).close(Card(id="c9", name="x", list_id="l9"))
