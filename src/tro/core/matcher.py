"""Pure fuzzy name matching.

Every function in this module is a **pure** transformation — no I/O,
no side effects, fully deterministic, and trivially unit-testable.

Ranking rules (enforced by :func:`match`):

1. **Exact** — the name equals the query; ranked first, input order kept.
2. **Substring** — the query occurs contiguously in the name; shorter
   names rank higher, equal lengths keep input order.
3. Anything else is dropped.

An empty query is a substring of every name, so it lists every
candidate ordered by name length.
"""

from __future__ import annotations

from collections.abc import Sequence

from tro.core.models import Entity, MatchCandidate

EXACT_SCORE: int = 0
"""Score given to exact matches; lower scores rank higher."""


def _normalise(text: str, ignore_case: bool) -> str:
    return text.casefold() if ignore_case else text


def score_name(
    query: str,
    name: str,
    *,
    ignore_case: bool = True,
) -> tuple[bool, int] | None:
    """Return ``(exact, score)`` for *name*, or ``None`` when it does not match."""
    needle = _normalise(query, ignore_case)
    haystack = _normalise(name, ignore_case)
    if haystack == needle:
        return True, EXACT_SCORE
    if needle in haystack:
        return False, len(name)
    return None


def _sort_key(candidate: MatchCandidate) -> tuple[int, int]:
    """Exact matches first, then shortest name first."""
    return (0 if candidate.exact else 1, candidate.score)


def match(
    query: str,
    candidates: Sequence[tuple[str, Entity]],
    *,
    ignore_case: bool = True,
) -> list[MatchCandidate]:
    """Rank *candidates* against *query*.

    Parameters
    ----------
    query:
        The user-typed fragment.  ``""`` matches every candidate.
    candidates:
        ``(name, entity)`` pairs in their original (remote) order.
    ignore_case:
        Compare case-insensitively (the default).

    Returns
    -------
    list[MatchCandidate]
        Matching candidates, best first.  Empty when nothing matches —
        deciding whether that is an error is the caller's business.
    """
    matched: list[MatchCandidate] = []
    for name, entity in candidates:
        scored = score_name(query, name, ignore_case=ignore_case)
        if scored is None:
            continue
        exact, score = scored
        matched.append(MatchCandidate(entity=entity, score=score, exact=exact))
    # sorted() is stable, so equal keys keep their input order.
    return sorted(matched, key=_sort_key)


def match_entities(
    query: str,
    entities: Sequence[Entity],
    *,
    ignore_case: bool = True,
) -> list[MatchCandidate]:
    """Convenience wrapper of :func:`match` keyed on ``display_name``."""
    return match(
        query,
        [(entity.display_name, entity) for entity in entities],
        ignore_case=ignore_case,
    )


def exact_matches(candidates: Sequence[MatchCandidate]) -> list[MatchCandidate]:
    """Return the exact matches of an already-ranked sequence."""
    return [candidate for candidate in candidates if candidate.exact]
