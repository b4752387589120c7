"""Tests for the interactive grid dialogue."""

import io

import pytest
from rich.console import Console

from grid_prompt import (
    ChoiceFormatError,
    DimensionsFormatError,
    GridPrompter,
    IllegalColumnError,
    RowFormatError,
    UserTerminated,
    escape_key,
    parse_choices,
    valid_choice,
)


def make_prompter(lines: list[str], keys: list[str]) -> tuple[GridPrompter, io.StringIO]:
    """Prompter fed from canned input, writing to a string buffer."""
    out = io.StringIO()
    console = Console(file=out, width=500, color_system=None, force_terminal=False)
    prompter = GridPrompter(
        console=console,
        read_line=iter(lines).__next__,
        read_key=iter(keys).__next__,
    )
    return prompter, out


class TestChoices:
    """Tests for choice extraction."""

    def test_parse_choices(self) -> None:
        assert parse_choices("Continue (C), Retry (R) Cancel (X)? ") == ["C", "R", "X"]

    def test_no_choices(self) -> None:
        with pytest.raises(ChoiceFormatError):
            parse_choices("Continue? ")

    def test_multi_character_parentheses_ignored(self) -> None:
        assert parse_choices("(yes) or (N)") == ["N"]

    def test_valid_choice(self) -> None:
        assert valid_choice("A", "A", "B")
        assert not valid_choice("D", "A", "B")
        assert not valid_choice("A")


class TestPrompt:
    """Tests for the retrying single-key prompt."""

    def test_valid_first_time(self) -> None:
        prompter, out = make_prompter([], ["B"])
        assert prompter.prompt("choose (A) or (B) ") == "B"
        assert out.getvalue() == "choose (A) or (B) B\n"

    def test_invalid_then_valid(self) -> None:
        prompter, out = make_prompter([], ["D", "A"])
        assert prompter.prompt("choose (A) or (B) ") == "A"
        assert out.getvalue() == (
            "choose (A) or (B) D\n"
            '"D" invalid choice, try again\n'
            "choose (A) or (B) A\n"
        )

    def test_control_key_is_escaped(self) -> None:
        """An arrow key is echoed and reported as text, never as a raw escape sequence."""
        prompter, out = make_prompter([], ["\x1b[A", "B"])
        assert prompter.prompt("choose (A) or (B) ") == "B"
        assert "\x1b" not in out.getvalue()
        assert out.getvalue() == (
            "choose (A) or (B) \\x1b[A\n"
            '"\\x1b[A" invalid choice, try again\n'
            "choose (A) or (B) B\n"
        )

    def test_escape_key(self) -> None:
        assert escape_key("C") == "C"
        assert escape_key("\x1b[A") == "\\x1b[A"
        assert escape_key("\r") == "\\r"

    def test_choices_are_case_sensitive(self) -> None:
        prompter, _ = make_prompter([], ["c", "C"])
        assert prompter.prompt("Continue (C)? ") == "C"


class TestDimensions:
    """Tests for the dimensions question."""

    def test_continue(self) -> None:
        prompter, out = make_prompter(["34 6"], ["C"])
        assert prompter.get_dimensions() == (34, 6)
        assert out.getvalue() == (
            "Enter dimensions row count and column count separated by a space. "
            "You entered 34 rows and 6 columns.\n"
            "Continue (C), Retry (R) Cancel (X)? C\n"
        )

    def test_retry(self) -> None:
        prompter, out = make_prompter(["1 2", "4 5"], ["R", "C"])
        assert prompter.get_dimensions() == (4, 5)
        assert out.getvalue().count("Enter dimensions") == 2

    def test_cancel(self) -> None:
        prompter, _ = make_prompter(["1 2"], ["X"])
        with pytest.raises(UserTerminated, match="user terminated"):
            prompter.get_dimensions()

    def test_malformed(self) -> None:
        prompter, _ = make_prompter(["three 4"], [])
        with pytest.raises(DimensionsFormatError):
            prompter.get_dimensions()


class TestReadRow:
    """Tests for reading a single row line."""

    def test_valid(self) -> None:
        prompter, _ = make_prompter(["0 1 0 0"], [])
        assert prompter.read_row(4) == [0, 1, 0, 0]

    def test_non_integer(self) -> None:
        prompter, _ = make_prompter(["bob 0 0 0"], [])
        with pytest.raises(RowFormatError):
            prompter.read_row(4)

    def test_illegal_value(self) -> None:
        prompter, _ = make_prompter(["0 20 0 0"], [])
        with pytest.raises(IllegalColumnError, match="column value must be one or zero"):
            prompter.read_row(4)

    def test_too_many_values(self) -> None:
        prompter, _ = make_prompter(["0 1 0 0 0"], [])
        with pytest.raises(RowFormatError):
            prompter.read_row(4)

    def test_too_few_values(self) -> None:
        prompter, _ = make_prompter(["0 1 0 0"], [])
        with pytest.raises(RowFormatError, match="expected 5 values, got 4"):
            prompter.read_row(5)


class TestGetRow:
    """Tests for the row question with confirmation."""

    header = "Enter a 4 element row containing space separated ones or zeros\n"

    def test_continue(self) -> None:
        prompter, out = make_prompter(["1 0 0 1"], ["C"])
        assert prompter.get_row(4) == [1, 0, 0, 1]
        assert out.getvalue() == (
            self.header
            + "You entered [1 0 0 1]\n"
            + "Continue (C) Retry (R) Cancel (X)? C\n"
        )

    def test_error_then_cancel(self) -> None:
        prompter, out = make_prompter(["1 0 0"], ["X"])
        with pytest.raises(UserTerminated):
            prompter.get_row(4)
        assert out.getvalue() == (
            self.header
            + 'Error: "expected 4 values, got 3" Retry (R) Cancel (X)? X\n'
        )

    def test_error_then_retry(self) -> None:
        prompter, out = make_prompter(["1 0 0", "1 1 1 1"], ["R", "C"])
        assert prompter.get_row(4) == [1, 1, 1, 1]
        assert out.getvalue().count(self.header) == 2

    def test_retry_after_confirmation(self) -> None:
        prompter, out = make_prompter(["1 0 0 1", "1 1 1 1"], ["R", "C"])
        assert prompter.get_row(4) == [1, 1, 1, 1]
        assert "You entered [1 0 0 1]\n" in out.getvalue()
        assert "You entered [1 1 1 1]\n" in out.getvalue()

    def test_cancel_after_confirmation(self) -> None:
        prompter, _ = make_prompter(["1 0 0 1", "1 1 1 1"], ["R", "X"])
        with pytest.raises(UserTerminated):
            prompter.get_row(4)


class TestReadGrid:
    """Tests for the full dialogue."""

    def test_read_grid(self) -> None:
        lines = ["4 6", "1 0 1 0 1 0", "0 1 0 1 0 1", "1 1 1 1 1 1", "1 1 1 0 0 0"]
        prompter, _ = make_prompter(lines, ["C"] * 5)
        assert prompter.read_grid() == [
            [1, 0, 1, 0, 1, 0],
            [0, 1, 0, 1, 0, 1],
            [1, 1, 1, 1, 1, 1],
            [1, 1, 1, 0, 0, 0],
        ]

    def test_zero_rows_read_nothing(self) -> None:
        prompter, _ = make_prompter(["0 3"], ["C"])
        assert prompter.read_grid() == []

