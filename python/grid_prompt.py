"""
Interactive console dialogue for entering a grid.

The user gives the dimensions, then each row, confirming every answer with
Continue (C), Retry (R) or Cancel (X). Choices are single keystrokes read
with readchar; rows and dimensions are whole lines.
"""

from __future__ import annotations

import logging
import re
from typing import Callable

import readchar
from rich.console import Console

logger = logging.getLogger(__name__)

__all__ = [
    "ChoiceFormatError",
    "DimensionsFormatError",
    "GridPrompter",
    "IllegalColumnError",
    "RowFormatError",
    "UserTerminated",
    "escape_key",
    "parse_choices",
    "valid_choice",
]


class UserTerminated(Exception):
    """The user chose Cancel."""

    def __init__(self) -> None:
        super().__init__("user terminated")


class ChoiceFormatError(ValueError):
    """A prompt offers no (c)-style choices."""


class DimensionsFormatError(ValueError):
    """Dimensions line is not two non-negative integers."""


class RowFormatError(ValueError):
    """A row line has non-integer tokens or the wrong number of them."""


class IllegalColumnError(ValueError):
    """A row holds a value other than 0 or 1."""

    def __init__(self) -> None:
        super().__init__("column value must be one or zero")


_CHOICE_RE = re.compile(r"\(.\)")


def parse_choices(prompt: str) -> list[str]:
    """
    Collect the valid responses of a prompt.

    Every single character wrapped in parentheses is a choice, so
    "Choose (A) or (B)" accepts "A" and "B".

    Raises:
        ChoiceFormatError: If the prompt has no choices
    """
    choices = [match.strip("()") for match in _CHOICE_RE.findall(prompt)]
    if not choices:
        raise ChoiceFormatError(f"choice string format: no (c) choices in {prompt!r}")
    return choices


def valid_choice(response: str, *choices: str) -> bool:
    return response in choices


def escape_key(key: str) -> str:
    """Printable form of a keystroke; control sequences such as arrow keys are escaped."""
    if key.isprintable():
        return key
    return key.encode("unicode_escape").decode("ascii")


class GridPrompter:
    """Console dialogue that produces a validated grid."""

    def __init__(
        self,
        console: Console | None = None,
        read_line: Callable[[], str] | None = None,
        read_key: Callable[[], str] | None = None,
    ) -> None:
        self.console = console if console is not None else Console()
        self.read_line = read_line if read_line is not None else self.console.input
        self.read_key = read_key if read_key is not None else readchar.readkey

    def _write(self, text: str) -> None:
        self.console.print(text, end="", markup=False, highlight=False, emoji=False, soft_wrap=True)

    def prompt(self, text: str) -> str:
        """Ask until the user presses one of the prompt's choices, and return it."""
        choices = parse_choices(text)
        while True:
            self._write(text)
            response = self.read_key()
            shown = escape_key(response)
            self._write(shown + "\n")
            if valid_choice(response, *choices):
                return response
            self._write(f'"{shown}" invalid choice, try again\n')

    def get_dimensions(self) -> tuple[int, int]:
        """
        Ask for the row and column counts.

        Raises:
            DimensionsFormatError: If the answer is not two non-negative integers
            UserTerminated: If the user cancels
        """
        while True:
            self._write("Enter dimensions row count and column count separated by a space. ")
            line = self.read_line()
            tokens = line.split()
            if len(tokens) != 2 or not all(t.isdigit() for t in tokens):
                raise DimensionsFormatError(
                    f"expected two non-negative integers, got {line.strip()!r}"
                )
            rows, cols = int(tokens[0]), int(tokens[1])
            self._write(f"You entered {rows} rows and {cols} columns.\n")

            response = self.prompt("Continue (C), Retry (R) Cancel (X)? ")
            if response == "X":
                raise UserTerminated()
            if response == "C":
                return rows, cols

    def read_row(self, cols: int) -> list[int]:
        """
        Read one row of exactly cols values, each 0 or 1.

        Raises:
            RowFormatError: On a non-integer token or a wrong value count
            IllegalColumnError: On a value other than 0 or 1
        """
        tokens = self.read_line().split()
        try:
            row = [int(token) for token in tokens]
        except ValueError:
            raise RowFormatError(f"expected integer, got {' '.join(tokens)!r}") from None
        if len(row) != cols:
            raise RowFormatError(f"expected {cols} values, got {len(row)}")
        if any(value not in (0, 1) for value in row):
            raise IllegalColumnError()
        return row

    def get_row(self, cols: int) -> list[int]:
        """
        Ask for one row, offering a retry when it is malformed.

        Raises:
            UserTerminated: If the user cancels
        """
        while True:
            self._write(f"Enter a {cols} element row containing space separated ones or zeros\n")
            try:
                row = self.read_row(cols)
            except (RowFormatError, IllegalColumnError) as err:
                logger.debug("rejected row: %s", err)
                if self.prompt(f'Error: "{err}" Retry (R) Cancel (X)? ') == "X":
                    raise UserTerminated() from err
                continue

            self._write(f"You entered [{' '.join(str(v) for v in row)}]\n")
            response = self.prompt("Continue (C) Retry (R) Cancel (X)? ")
            if response == "C":
                return row
            if response == "X":
                raise UserTerminated()

    def read_grid(self) -> list[list[int]]:
        """Run the whole dialogue and return the grid rows."""
        rows, cols = self.get_dimensions()
        grid = [self.get_row(cols) for _ in range(rows)]
        logger.info("read %dx%d grid interactively", rows, cols)
        return grid
