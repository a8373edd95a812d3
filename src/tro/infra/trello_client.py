"""httpx backed implementation of :class:`~tro.core.protocols.TrelloApi`.

This module is the **only** place in the codebase that imports
``httpx``.  All transport and HTTP errors are caught here and re-raised
as :class:`~tro.exceptions.ApiUnavailable` — nothing raw escapes the
infrastructure boundary.
"""

from __future__ import annotations

import logging
from typing import Any, NoReturn

import httpx

from tro.core.models import Board, Card, TrelloList
from tro.exceptions import ApiUnavailable

logger = logging.getLogger(__name__)

DEFAULT_HOST: str = "https://api.trello.com"
API_VERSION: str = "1"

BOARD_FIELDS: str = "id,name,url,closed"
LIST_FIELDS: str = "id,name,idBoard,closed,pos"
CARD_FIELDS: str = "id,name,idList,desc,url,closed"

# Hints shown for well-known HTTP failures.
_STATUS_HINTS: dict[int, str] = {
    401: "Invalid Trello API key or token. Check your tro config file.",
    403: "Insufficient permissions. Check your Trello token scopes.",
    404: "The requested Trello resource does not exist.",
    429: "Trello rate limit exceeded. Try again later.",
}


class HttpTrelloClient:
    """Concrete :class:`TrelloApi` backed by the Trello REST API v1.

    Usage::

        with HttpTrelloClient(key="...", token="...") as client:
            boards = client.list_boards()

    Credentials and the host are construction parameters; nothing is
    read from process-wide state.  *transport* lets tests substitute an
    :class:`httpx.MockTransport`.
    """

    def __init__(
        self,
        *,
        key: str,
        token: str,
        host: str = DEFAULT_HOST,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._auth: dict[str, str] = {"key": key, "token": token}
        self._client = httpx.Client(
            base_url=f"{host.rstrip('/')}/{API_VERSION}",
            timeout=timeout,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> HttpTrelloClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Protocol methods — reads
    # ------------------------------------------------------------------

    def list_boards(self) -> list[Board]:
        raw = self._request(
            "GET",
            "/members/me/boards",
            params={"filter": "open", "fields": BOARD_FIELDS},
        )
        return [self._parse_board(entry) for entry in self._as_list(raw)]

    def list_lists(self, board_id: str) -> list[TrelloList]:
        raw = self._request(
            "GET",
            f"/boards/{board_id}/lists",
            params={"filter": "open", "fields": LIST_FIELDS},
        )
        lists = [self._parse_list(entry, board_id) for entry in self._as_list(raw)]
        return sorted(lists, key=lambda trello_list: trello_list.position)

    def list_cards(self, list_id: str) -> list[Card]:
        raw = self._request(
            "GET",
            f"/lists/{list_id}/cards",
            params={"fields": CARD_FIELDS},
        )
        return [self._parse_card(entry) for entry in self._as_list(raw)]

    def list_board_cards(self, board_id: str) -> list[Card]:
        raw = self._request(
            "GET",
            f"/boards/{board_id}/cards",
            params={"filter": "open", "fields": CARD_FIELDS},
        )
        return [self._parse_card(entry) for entry in self._as_list(raw)]

    # ------------------------------------------------------------------
    # Protocol methods — mutations
    # ------------------------------------------------------------------

    def create_card(
        self,
        list_id: str,
        name: str,
        description: str | None = None,
    ) -> Card:
        params: dict[str, Any] = {"idList": list_id, "name": name, "pos": "bottom"}
        if description is not None:
            params["desc"] = description
        raw = self._request("POST", "/cards", params=params)
        return self._parse_card(self._as_dict(raw))

    def update_card(
        self,
        card_id: str,
        *,
        name: str | None = None,
        description: str | None = None,
        list_id: str | None = None,
        closed: bool | None = None,
    ) -> Card:
        params: dict[str, Any] = {
            "name": name,
            "desc": description,
            "idList": list_id,
            "closed": None if closed is None else str(closed).lower(),
        }
        params = {key: value for key, value in params.items() if value is not None}
        raw = self._request("PUT", f"/cards/{card_id}", params=params)
        return self._parse_card(self._as_dict(raw))

    def delete_card(self, card_id: str) -> None:
        self._request("DELETE", f"/cards/{card_id}")

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """Send one request and return the decoded JSON body.

        Raises
        ------
        ApiUnavailable
            On transport failure, HTTP error status, or undecodable body.
        """
        query: dict[str, Any] = dict(params or {})
        query.update(self._auth)
        logger.debug("%s %s", method, path)

        try:
            response = self._client.request(method, path, params=query)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            self._raise_mapped(exc)
        except httpx.RequestError as exc:
            raise ApiUnavailable(
                f"Could not reach Trello: {exc}",
                hint="Check your network connection and the configured host.",
            ) from exc

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise ApiUnavailable(
                f"Trello returned a non-JSON response for {method} {path}.",
            ) from exc

    @staticmethod
    def _raise_mapped(exc: httpx.HTTPStatusError) -> NoReturn:
        """Translate an HTTP error status into :class:`ApiUnavailable`."""
        response = exc.response
        status = response.status_code
        detail = response.text.strip() or response.reason_phrase
        raise ApiUnavailable(
            f"Trello API error (HTTP {status}): {detail}",
            hint=_STATUS_HINTS.get(status),
        ) from exc

    # ------------------------------------------------------------------
    # Raw-dict → domain-model parsers (pure)
    # ------------------------------------------------------------------

    @staticmethod
    def _as_list(raw: Any) -> list[dict[str, Any]]:
        if not isinstance(raw, list):
            raise ApiUnavailable("Trello returned an unexpected data structure.")
        # Skip malformed entries rather than failing the whole listing.
        return [entry for entry in raw if isinstance(entry, dict)]

    @staticmethod
    def _as_dict(raw: Any) -> dict[str, Any]:
        if not isinstance(raw, dict):
            raise ApiUnavailable("Trello returned an unexpected data structure.")
        return raw

    @staticmethod
    def _parse_board(raw: dict[str, Any]) -> Board:
        return Board(
            id=str(raw.get("id", "")),
            name=str(raw.get("name", "")),
            url=raw.get("url") or None,
            closed=bool(raw.get("closed", False)),
        )

    @staticmethod
    def _parse_list(raw: dict[str, Any], board_id: str) -> TrelloList:
        raw_pos = raw.get("pos")
        position = float(raw_pos) if isinstance(raw_pos, (int, float)) else 0.0
        return TrelloList(
            id=str(raw.get("id", "")),
            name=str(raw.get("name", "")),
            board_id=str(raw.get("idBoard") or board_id),
            closed=bool(raw.get("closed", False)),
            position=position,
        )

    @staticmethod
    def _parse_card(raw: dict[str, Any]) -> Card:
        return Card(
            id=str(raw.get("id", "")),
            name=str(raw.get("name", "")),
            list_id=str(raw.get("idList", "")),
            description=raw.get("desc") or None,
            url=raw.get("url") or None,
            closed=bool(raw.get("closed", False)),
        )
