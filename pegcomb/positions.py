"""
Line and column arithmetic for cursor positions within a string.
"""

from typing import Tuple


__all__ = [
    "offset_to_line_and_column",
    "extract_line",
]


def offset_to_line_and_column(string: str, offset: int) -> Tuple[int, int]:
    """
    Return the (1-indexed) line and column of the cursor at ``offset``.

    Offsets at or beyond the end of the string describe the position just
    after the last character. When the string ends with a line break, that is
    the first column of a new (empty) line.
    """
    lines = string.splitlines(keepends=True)
    remaining = min(offset, len(string))
    for row, line in enumerate(lines, 1):
        if remaining < len(line):
            return row, remaining + 1
        remaining -= len(line)

    if not lines or lines[-1].splitlines()[0] != lines[-1]:
        return len(lines) + 1, 1
    else:
        return len(lines), len(lines[-1]) + 1


def extract_line(string: str, line: int) -> str:
    """
    Given a line number (from :py:func:`offset_to_line_and_column`), return
    just that line (without any trailing line break).
    """
    lines = string.splitlines()
    if line <= len(lines):
        return lines[line - 1]
    else:
        # The empty line after a trailing line break (or in an empty string)
        return ""
