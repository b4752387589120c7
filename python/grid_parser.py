"""
Grid parsing utilities for the shape finder.

Turns text into the rows of 0/1 values that find_shapes() expects.
"""

from __future__ import annotations

__all__ = ["parse_grid", "parse_row"]

_CELL_VALUES = {"0": 0, "1": 1}


def parse_row(row_str: str, row_idx: int = 0) -> list[int]:
    """
    Parse one row of a grid.

    A row containing whitespace is split into tokens ("0 1 1"); otherwise
    every character is a cell ("011").

    Raises:
        ValueError: If a token is anything other than 0 or 1
    """
    tokens = row_str.split() if any(ch.isspace() for ch in row_str.strip()) else list(row_str.strip())
    row: list[int] = []
    for col_idx, token in enumerate(tokens):
        if token not in _CELL_VALUES:
            raise ValueError(
                f"Invalid cell '{token}'\n"
                f"  Row {row_idx}: \"{row_str.strip()}\"\n"
                f"  Position: column {col_idx}\n"
                f"  Column value must be one or zero"
            )
        row.append(_CELL_VALUES[token])
    return row


def parse_grid(text: str) -> list[list[int]]:
    """
    Parse a binary occupancy grid from text.

    Format:
    - Rows separated by newlines or |
    - Cells either separated by whitespace ("0 1 0") or written as a run
      of digits ("010")
    - Blank lines and lines starting with # are ignored

    Example:
        \"\"\"
        # a T
        111
        010
        \"\"\"
        -> [[1, 1, 1], [0, 1, 0]]

    Returns:
        List of rows (empty if the text holds no rows)

    Raises:
        ValueError: On an illegal cell or rows of different lengths
    """
    row_strings: list[str] = []
    for line in text.splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        row_strings.extend(part for part in stripped.split("|") if part.strip())

    rows = [parse_row(row_str, row_idx) for row_idx, row_str in enumerate(row_strings)]

    # Validate all rows have same length
    if rows:
        cols = len(rows[0])
        mismatched = [(i, len(row)) for i, row in enumerate(rows) if len(row) != cols]
        if mismatched:
            error_msg = (
                f"Inconsistent row lengths\n"
                f"  Expected: {cols} columns (from row 0)\n"
                f"  Mismatched rows:\n"
            )
            for row_idx, actual_cols in mismatched:
                error_msg += f"    Row {row_idx}: {actual_cols} columns - \"{row_strings[row_idx].strip()}\"\n"
            error_msg += "  All rows must have the same number of cells"
            raise ValueError(error_msg)

    return rows
