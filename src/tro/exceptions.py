"""Custom exception hierarchy for tro.

All exceptions that cross layer boundaries must inherit from
:class:`TroError`.  Raw third-party exceptions (e.g. from httpx or
tomllib) must NEVER propagate beyond the infrastructure layer — they
must be caught and re-raised as a typed subclass defined here.

Hierarchy
---------
TroError
├── EntityNotFound
├── AmbiguousSelectionAborted
├── MultipleMatchesError
├── ApiUnavailable
├── InvalidQueryError
│   └── WildcardError
├── InvalidInputError
├── ConfigError
└── EnvironmentError
"""

from __future__ import annotations

from collections.abc import Sequence


class TroError(Exception):
    """Base exception for all tro errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Resolution ------------------------------------------------------------

class EntityNotFound(TroError):
    """Raised when no entity at *level* matches *fragment*."""

    def __init__(self, level: str, fragment: str) -> None:
        super().__init__(
            f"{level.capitalize()} not found: '{fragment}'",
            hint=f"Specify a different {level} filter than '{fragment}'.",
        )
        self.level: str = level
        self.fragment: str = fragment


class AmbiguousSelectionAborted(TroError):
    """Raised when the user cancels an interactive disambiguation prompt.

    This is a user decision, not a failure: the CLI reports it quietly.
    """

    def __init__(self, level: str, fragment: str) -> None:
        super().__init__(f"No {level} selected for '{fragment}'.")
        self.level: str = level
        self.fragment: str = fragment


class MultipleMatchesError(TroError):
    """Raised when a fragment is ambiguous and prompting is disabled."""

    def __init__(self, level: str, fragment: str, names: Sequence[str]) -> None:
        found = ", ".join(f"'{name}'" for name in names)
        super().__init__(
            f"More than one {level} found for '{fragment}' (Found {found})",
            hint=f"Specify a more precise {level} filter than '{fragment}'.",
        )
        self.level: str = level
        self.fragment: str = fragment
        self.names: tuple[str, ...] = tuple(names)


# --- Remote API ------------------------------------------------------------

class ApiUnavailable(TroError):
    """Raised when the Trello API cannot serve a request."""

    def __init__(self, detail: str, *, hint: str | None = None) -> None:
        super().__init__(detail, hint=hint)
        self.detail: str = detail


# --- User input ------------------------------------------------------------

class InvalidQueryError(TroError):
    """Raised when a board/list/card path is malformed."""


class WildcardError(InvalidQueryError):
    """Raised when the ``-`` list wildcard is used without a card filter."""


class InvalidInputError(TroError):
    """Raised when a value supplied for a mutation is unusable."""


# --- Environment / configuration -------------------------------------------

class ConfigError(TroError):
    """Raised when the configuration file is missing or invalid."""


class EnvironmentError(TroError):
    """Raised when a required runtime dependency is not available."""
