"""
Character sources consumed by the parser.
"""

from typing import Any, Optional

from pegcomb.positions import offset_to_line_and_column, extract_line


__all__ = [
    "Source",
    "StringSource",
]


class Source:
    """
    A cursor over some character input. Abstract base class.

    The parser reads characters using :py:meth:`peek` and :py:meth:`consume`
    and backtracks using :py:meth:`mark` and :py:meth:`reset`. A source is
    owned by a single parse at a time and is not safe for concurrent use.
    """

    def peek(self) -> Optional[str]:
        """
        Return the character at the cursor without advancing, or None at the
        end of the input.
        """
        raise NotImplementedError()

    def consume(self) -> Optional[str]:
        """
        Return the character at the cursor and advance past it. At the end of
        the input, returns None and does not move the cursor.
        """
        raise NotImplementedError()

    def mark(self) -> Any:
        """
        Return an opaque token describing the current cursor position, to be
        passed to :py:meth:`reset` later. Tokens for the same position must
        compare equal.
        """
        raise NotImplementedError()

    def reset(self, mark: Any) -> None:
        """Move the cursor back to a position previously returned by :py:meth:`mark`."""
        raise NotImplementedError()

    @property
    def name(self) -> str:
        """A name for this source, for use in diagnostics."""
        raise NotImplementedError()

    @property
    def row(self) -> int:
        """The (1-indexed) line number of the cursor."""
        raise NotImplementedError()

    @property
    def col(self) -> int:
        """The (1-indexed) column number of the cursor."""
        raise NotImplementedError()


class StringSource(Source):
    """
    A :py:class:`Source` reading from an in-memory string.

    Parameters
    ----------
    string : str
        The input to be parsed.
    name : str
        A name for the input (e.g. a filename) used in diagnostics. Default =
        ``"<string>"``.
    """

    _string: str
    """The string being read."""

    _offset: int
    """The offset of the cursor into :py:attr:`_string`."""

    def __init__(self, string: str, name: str = "<string>") -> None:
        self._string = string
        self._name = name
        self._offset = 0

    def peek(self) -> Optional[str]:
        if self._offset < len(self._string):
            return self._string[self._offset]
        else:
            return None

    def consume(self) -> Optional[str]:
        char = self.peek()
        if char is not None:
            self._offset += 1
        return char

    def mark(self) -> int:
        return self._offset

    def reset(self, mark: int) -> None:
        if not 0 <= mark <= len(self._string):
            raise ValueError(
                "mark {} is outside of {} (length {})".format(
                    mark, self._name, len(self._string)
                )
            )
        self._offset = mark

    @property
    def offset(self) -> int:
        """The offset of the cursor from the start of the string."""
        return self._offset

    @property
    def at_end(self) -> bool:
        """True when all of the input has been consumed."""
        return self._offset >= len(self._string)

    @property
    def name(self) -> str:
        return self._name

    @property
    def row(self) -> int:
        return offset_to_line_and_column(self._string, self._offset)[0]

    @property
    def col(self) -> int:
        return offset_to_line_and_column(self._string, self._offset)[1]

    @property
    def line(self) -> str:
        """The contents of the line the cursor is on (without line endings)."""
        return extract_line(self._string, self.row)

    def __repr__(self) -> str:
        return "<StringSource {} at line {} column {}>".format(
            self._name, self.row, self.col
        )
