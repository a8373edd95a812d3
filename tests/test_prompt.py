"""Tests for the interactive prompts (cli/prompt.py).

``questionary`` is replaced by a mock through ``_import_questionary`` —
no terminal interaction.  We test the mapping between the user's
selection and the returned index or text.
"""

from __future__ import annotations

from unittest.mock import MagicMock, patch

from tro.cli.prompt import QuestionaryChooser, _build_choice_label, ask_text, confirm


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _real_choice_class() -> type:
    """Return a minimal Choice-like class for mocking questionary.Choice."""

    class FakeChoice:
        def __init__(self, title: str, value: int) -> None:
            self.title = title
            self.value = value

    return FakeChoice


def _questionary(answer: object) -> MagicMock:
    questionary_mod = MagicMock()
    questionary_mod.Choice = _real_choice_class()
    questionary_mod.select.return_value.ask.return_value = answer
    questionary_mod.text.return_value.ask.return_value = answer
    questionary_mod.confirm.return_value.ask.return_value = answer
    return questionary_mod


# ---------------------------------------------------------------------------
# Labels
# ---------------------------------------------------------------------------

class TestBuildChoiceLabel:
    def test_index_one_based_display(self) -> None:
        assert _build_choice_label(0, "Groceries").strip().startswith("1.")

    def test_contains_name(self) -> None:
        assert "Grocery List" in _build_choice_label(1, "Grocery List")

    def test_numbers_aligned(self) -> None:
        assert len(_build_choice_label(0, "x")) == len(_build_choice_label(9, "x"))


# ---------------------------------------------------------------------------
# QuestionaryChooser
# ---------------------------------------------------------------------------

class TestQuestionaryChooser:
    @patch("tro.cli.prompt._import_questionary")
    def test_returns_selected_index(self, mock_q: MagicMock) -> None:
        mock_q.return_value = _questionary(1)
        assert QuestionaryChooser().choose("Pick:", ["Groceries", "Grocery List"]) == 1

    @patch("tro.cli.prompt._import_questionary")
    def test_cancel_returns_none(self, mock_q: MagicMock) -> None:
        mock_q.return_value = _questionary(None)
        assert QuestionaryChooser().choose("Pick:", ["a", "b"]) is None

    @patch("tro.cli.prompt._import_questionary")
    def test_choices_keep_order(self, mock_q: MagicMock) -> None:
        questionary_mod = _questionary(0)
        mock_q.return_value = questionary_mod

        QuestionaryChooser().choose("Pick:", ["Done", "Groceries", "Grocery List"])

        call = questionary_mod.select.call_args
        assert call[0][0] == "Pick:"
        choices = call[1]["choices"]
        assert [choice.value for choice in choices] == [0, 1, 2]
        assert "Done" in choices[0].title


# ---------------------------------------------------------------------------
# Text and confirmation
# ---------------------------------------------------------------------------

class TestAskText:
    @patch("tro.cli.prompt._import_questionary")
    def test_returns_answer(self, mock_q: MagicMock) -> None:
        questionary_mod = _questionary("Eggs")
        mock_q.return_value = questionary_mod

        assert ask_text("Name:", default="Milk") == "Eggs"
        call = questionary_mod.text.call_args
        assert call[1]["default"] == "Milk"
        assert call[1]["multiline"] is False

    @patch("tro.cli.prompt._import_questionary")
    def test_cancel_returns_none(self, mock_q: MagicMock) -> None:
        mock_q.return_value = _questionary(None)
        assert ask_text("Name:") is None


class TestConfirm:
    @patch("tro.cli.prompt._import_questionary")
    def test_yes(self, mock_q: MagicMock) -> None:
        mock_q.return_value = _questionary(True)
        assert confirm("Delete?") is True

    @patch("tro.cli.prompt._import_questionary")
    def test_cancel_counts_as_no(self, mock_q: MagicMock) -> None:
        mock_q.return_value = _questionary(None)
        assert confirm("Delete?") is False
