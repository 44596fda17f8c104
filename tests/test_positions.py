import pytest  # type: ignore

from pegcomb.positions import (
    offset_to_line_and_column,
    extract_line,
)


class TestOffsetToLineAndColumn:
    @pytest.mark.parametrize(
        "string, offset, exp",
        [
            # Within a single line
            ("foobar", 0, (1, 1)),
            ("foobar", 5, (1, 6)),
            # On a line break, which belongs to the line it ends
            ("foo\nbar", 3, (1, 4)),
            ("foo\r\nbar", 4, (1, 5)),
            # Start of later lines
            ("foo\nbar", 4, (2, 1)),
            ("foo\r\nbar", 5, (2, 1)),
            ("foo\rbar", 4, (2, 1)),
            ("a\n\nb", 2, (2, 1)),
            ("a\n\nb", 3, (3, 1)),
        ],
    )
    def test_within_string(self, string: str, offset: int, exp: tuple) -> None:
        assert offset_to_line_and_column(string, offset) == exp

    @pytest.mark.parametrize(
        "string, exp",
        [
            ("", (1, 1)),
            ("foobar", (1, 7)),
            ("foo\nbar", (2, 4)),
            # After a trailing line break the cursor starts a new line
            ("foo\n", (2, 1)),
            ("foo\r\n", (2, 1)),
            ("a\n\n", (3, 1)),
            ("\n", (2, 1)),
        ],
    )
    def test_end_of_string(self, string: str, exp: tuple) -> None:
        assert offset_to_line_and_column(string, len(string)) == exp

    def test_beyond_end_is_clamped(self) -> None:
        assert offset_to_line_and_column("foo\n", 111) == (2, 1)
        assert offset_to_line_and_column("foo", 111) == (1, 4)


@pytest.mark.parametrize(
    "string, line, exp",
    [
        ("", 1, ""),
        ("foo", 1, "foo"),
        # Line breaks are stripped
        ("foo\r\nbar\rbaz\n", 1, "foo"),
        ("foo\r\nbar\rbaz\n", 2, "bar"),
        ("foo\r\nbar\rbaz\n", 3, "baz"),
        # The empty line following a trailing line break
        ("foo\n", 2, ""),
        ("a\n\n", 2, ""),
        ("a\n\n", 3, ""),
    ],
)
def test_extract_line(string: str, line: int, exp: str) -> None:
    assert extract_line(string, line) == exp


@pytest.mark.parametrize("string", ["", "foo", "foo\n", "a\n\nb\r\n", "x\ry"])
def test_line_of_every_offset(string: str) -> None:
    # Every cursor position names a line which exists and a column within (or
    # just past the end of) that line
    for offset in range(len(string) + 1):
        row, col = offset_to_line_and_column(string, offset)
        assert 1 <= col <= len(extract_line(string, row)) + 2
