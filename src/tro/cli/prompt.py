"""Interactive prompts for the CLI layer.

This module is responsible for:

* Arrow-key selection among ambiguous matches (:class:`QuestionaryChooser`).
* Line-editing text prompts pre-filled with the current value.
* Yes/no confirmation before destructive commands.

All prompting goes through questionary, imported lazily so that
bootstrap paths work without it.  questionary's ``ask()`` returns
``None`` on Ctrl+C / Esc; that is surfaced as a cancellation, never as
a crash.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from tro.exceptions import EnvironmentError


def _import_questionary() -> Any:
    """Import questionary lazily for interactive prompts."""
    try:
        import questionary
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "questionary is not installed. Install with: pip install questionary",
        ) from exc
    return questionary


def _build_choice_label(index: int, name: str) -> str:
    """Build the single-line label shown in the selector.

    Format: ``" 1. Groceries"``
    """
    return f"{index + 1:>2}. {name}"


# ---------------------------------------------------------------------------
# Selection
# ---------------------------------------------------------------------------

class QuestionaryChooser:
    """Concrete :class:`~tro.core.protocols.Chooser` using questionary.

    Options are shown in the order given; the first one is highlighted.
    """

    def choose(self, message: str, options: Sequence[str]) -> int | None:
        questionary = _import_questionary()

        choices = [
            questionary.Choice(title=_build_choice_label(i, name), value=i)
            for i, name in enumerate(options)
        ]
        selected: int | None = questionary.select(
            message,
            choices=choices,
            use_arrow_keys=True,
            use_shortcuts=False,
        ).ask()  # Returns None on Ctrl+C / Esc
        return selected


# ---------------------------------------------------------------------------
# Free text and confirmation
# ---------------------------------------------------------------------------

def ask_text(
    message: str,
    *,
    default: str = "",
    multiline: bool = False,
) -> str | None:
    """Prompt for a line (or block) of text with *default* pre-filled.

    Returns ``None`` when the prompt was cancelled.
    """
    questionary = _import_questionary()
    answer: str | None = questionary.text(
        message,
        default=default,
        multiline=multiline,
    ).ask()
    return answer


def confirm(message: str, *, default: bool = False) -> bool:
    """Ask a yes/no question; cancelling counts as "no"."""
    questionary = _import_questionary()
    answer: bool | None = questionary.confirm(message, default=default).ask()
    return bool(answer)
