"""Disambiguators — adapters that settle an ambiguous fuzzy match.

Neither class ranks anything: candidates arrive already ordered by the
matcher and are presented (or reported) in exactly that order.
"""

from __future__ import annotations

from collections.abc import Sequence

from tro.core.models import Entity, Level, MatchCandidate
from tro.core.protocols import Chooser
from tro.exceptions import InvalidInputError, MultipleMatchesError


class PromptDisambiguator:
    """Ask the user to pick a candidate through a :class:`Chooser`.

    Parameters
    ----------
    chooser:
        Any object satisfying the :class:`Chooser` protocol.
    """

    def __init__(self, chooser: Chooser) -> None:
        self._chooser: Chooser = chooser

    def disambiguate(
        self,
        candidates: Sequence[MatchCandidate],
        *,
        level: Level,
        fragment: str,
    ) -> Entity | None:
        """Return the chosen entity, or ``None`` if the user cancelled."""
        options = [candidate.name for candidate in candidates]
        message = f"Multiple {level}s match '{fragment}'. Select one:"
        index = self._chooser.choose(message, options)
        if index is None:
            return None
        if not 0 <= index < len(candidates):
            raise InvalidInputError(
                f"Selection {index + 1} is not one of the {len(candidates)} {level}s offered.",
            )
        return candidates[index].entity


class RejectingDisambiguator:
    """Refuse to guess: used when prompting is impossible or disabled."""

    def disambiguate(
        self,
        candidates: Sequence[MatchCandidate],
        *,
        level: Level,
        fragment: str,
    ) -> Entity | None:
        raise MultipleMatchesError(
            level,
            fragment,
            [candidate.name for candidate in candidates],
        )
