"""Core / service layer — pure resolution logic and data transformations.

Rules
-----
* No ``print()`` calls.
* No filesystem or network I/O.
* No imports from ``cli`` or ``infra``.
* All functions must be fully typed and deterministic.
"""

from tro.core.card_service import CardService
from tro.core.disambiguator import PromptDisambiguator, RejectingDisambiguator
from tro.core.matcher import match, match_entities
from tro.core.models import Board, Card, MatchCandidate, ResolvedEntity, TrelloList
from tro.core.protocols import Chooser, Disambiguator, TrelloApi
from tro.core.resolver import LIST_WILDCARD, Resolver

__all__: list[str] = [
    "LIST_WILDCARD",
    "Board",
    "Card",
    "CardService",
    "Chooser",
    "Disambiguator",
    "MatchCandidate",
    "PromptDisambiguator",
    "RejectingDisambiguator",
    "ResolvedEntity",
    "Resolver",
    "TrelloApi",
    "TrelloList",
    "match",
    "match_entities",
]
