"""Tests for comment, terminator and directive-line filtering."""

import pytest

from prompt_manager.errors import InvalidInputError
from prompt_manager.filters import (
    filter_text,
    is_directive_line,
    remove_directives,
    strip_comments,
    truncate_at_end_marker,
)


class TestTruncateAtEndMarker:
    """Tests for the __END__ terminator."""

    def test_truncates(self) -> None:
        """Test that the marker and everything after it is removed."""
        assert truncate_at_end_marker("line1\n__END__\nline2") == "line1"

    def test_trailing_whitespace_on_marker(self) -> None:
        """Test that trailing whitespace after the marker is ignored."""
        assert truncate_at_end_marker("line1\n__END__   \nline2") == "line1"

    def test_indented_marker_is_text(self) -> None:
        """Test that a marker with leading whitespace is ordinary text."""
        text = "line1\n  __END__\nline2"
        assert truncate_at_end_marker(text) == text

    def test_first_marker_wins(self) -> None:
        """Test that the first marker line is used."""
        assert truncate_at_end_marker("a\n__END__\nb\n__END__\nc") == "a"

    def test_no_marker(self) -> None:
        """Test that text without a marker is unchanged."""
        assert truncate_at_end_marker("a\nb") == "a\nb"


class TestStripComments:
    """Tests for strip_comments."""

    def test_comment_line_removed(self) -> None:
        """Test that comment lines are dropped."""
        assert strip_comments("# note\nreal text") == "real text"

    def test_indented_comment_removed(self) -> None:
        """Test that leading whitespace before the signal still marks a comment."""
        assert strip_comments("   # note\nreal text") == "real text"

    def test_inline_hash_kept(self) -> None:
        """Test that a hash later in a line is ordinary text."""
        assert strip_comments("Item #1 is here") == "Item #1 is here"

    def test_leading_blank_lines_dropped(self) -> None:
        """Test that blank lines at the very start are removed."""
        assert strip_comments("\n\nreal text") == "real text"

    def test_inner_blank_lines_kept(self) -> None:
        """Test that blank lines after the first kept line survive."""
        assert strip_comments("# c\n\nfirst\n\n\nsecond") == "first\n\n\nsecond"

    def test_directives_kept(self) -> None:
        """Test that directive lines are left for the renderer."""
        assert strip_comments("# c\n//include a.txt\ntext") == "//include a.txt\ntext"

    def test_comments_after_terminator_irrelevant(self) -> None:
        """Test that the terminator is applied before comment removal."""
        assert strip_comments("text\n__END__\n# note\nmore") == "text"

    def test_empty(self) -> None:
        """Test that empty input yields empty output."""
        assert strip_comments("") == ""

    def test_custom_signals(self) -> None:
        """Test configurable comment signal and end marker."""
        text = "; note\nkeep\n--STOP--\ndrop"
        assert strip_comments(text, comment_signal=";", end_marker="--STOP--") == "keep"

    @pytest.mark.parametrize("value", [None, 42, ["a", "b"]])
    def test_rejects_non_text(self, value: object) -> None:
        """Test that non-string input raises InvalidInputError."""
        with pytest.raises(InvalidInputError):
            strip_comments(value)  # type: ignore[arg-type]


class TestDirectiveLines:
    """Tests for directive line classification and removal."""

    def test_mid_line_signal_is_not_directive(self) -> None:
        """Test that // inside a line does not make a directive."""
        assert not is_directive_line("see http://x//y")

    def test_indented_directive(self) -> None:
        """Test that leading whitespace before // still makes a directive."""
        assert is_directive_line("  //include a.txt")

    def test_remove_directives(self) -> None:
        """Test that directive lines are dropped and others kept."""
        text = "//include a.txt\nsee http://x//y\n  //shell date"
        assert remove_directives(text) == "see http://x//y"


class TestFilterText:
    """Tests for the full filter."""

    def test_all_rules(self) -> None:
        """Test terminator, comments, directives and leading blanks together."""
        text = "# Demo\n\n//include greeting.txt\n\nHello [NAME]!\n__END__\nignored"
        assert filter_text(text) == "Hello [NAME]!"

    def test_plain_text_unchanged(self) -> None:
        """Test that text without special lines is unchanged."""
        assert filter_text("one\ntwo") == "one\ntwo"

    @pytest.mark.parametrize(
        "text", ["a\u2028b", "c\x0cd", "e\x0bf", "g\x85h", "i\r\nj", "k\x1c# not a comment"]
    )
    def test_only_newline_separates_lines(self, text: str) -> None:
        """Test that other line-boundary characters are kept verbatim."""
        assert filter_text(text) == text

    def test_trailing_newline_kept(self) -> None:
        """Test that a final newline is not dropped."""
        assert strip_comments("# c\nbody\n") == "body\n"

    def test_rejects_non_text(self) -> None:
        """Test that None raises InvalidInputError."""
        with pytest.raises(InvalidInputError):
            filter_text(None)  # type: ignore[arg-type]
