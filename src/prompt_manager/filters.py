"""Comment, terminator and directive-line filtering.

Filtering rules, applied in order:

1. The first line equal to the end marker (``__END__``), ignoring trailing
   whitespace, and everything after it is discarded.
2. Lines whose stripped content starts with the comment signal are discarded.
3. Lines whose stripped content starts with the directive signal are
   discarded (``filter_text`` only; the renderer keeps them for resolution).
4. Leading blank lines are dropped.
5. The remaining lines are joined with newlines.

Lines are split on ``\\n`` only. Form feeds, ``\\u2028`` and the other
characters ``str.splitlines`` treats as boundaries are ordinary text.
"""

from __future__ import annotations

from prompt_manager.errors import InvalidInputError

COMMENT_SIGNAL = "#"
DIRECTIVE_SIGNAL = "//"
END_MARKER = "__END__"


def _check_text(text: object) -> None:
    if not isinstance(text, str):
        raise InvalidInputError(f"Expected text as str, got {type(text).__name__}")


def _drop_leading_blank(lines: list[str]) -> list[str]:
    start = 0
    while start < len(lines) and not lines[start].strip():
        start += 1
    return lines[start:]


def is_comment_line(line: str, signal: str = COMMENT_SIGNAL) -> bool:
    """Check whether a line is a comment."""
    return line.lstrip().startswith(signal)


def is_directive_line(line: str, signal: str = DIRECTIVE_SIGNAL) -> bool:
    """Check whether a line is a directive.

    Only the first characters of the stripped line count, so
    ``see http://x//y`` is ordinary text.
    """
    return line.lstrip().startswith(signal)


def truncate_at_end_marker(text: str, end_marker: str = END_MARKER) -> str:
    """Discard the end marker line and everything after it.

    Args:
        text: Raw text.
        end_marker: Terminator line.

    Returns:
        Text before the terminator, unchanged when there is none.

    Raises:
        InvalidInputError: If text is not a string.
    """
    _check_text(text)
    lines = text.split("\n")
    for index, line in enumerate(lines):
        if line.rstrip() == end_marker:
            return "\n".join(lines[:index])
    return text


def strip_comments(
    text: str,
    comment_signal: str = COMMENT_SIGNAL,
    end_marker: str = END_MARKER,
) -> str:
    """Remove the terminator section, comment lines and leading blank lines.

    Directive lines are kept.

    Args:
        text: Raw text.
        comment_signal: Prefix marking a comment line.
        end_marker: Terminator line.

    Returns:
        Filtered text.

    Raises:
        InvalidInputError: If text is not a string.
    """
    _check_text(text)
    lines = truncate_at_end_marker(text, end_marker).split("\n")
    kept = [line for line in lines if not is_comment_line(line, comment_signal)]
    return "\n".join(_drop_leading_blank(kept))


def remove_directives(text: str, directive_signal: str = DIRECTIVE_SIGNAL) -> str:
    """Remove directive lines.

    Args:
        text: Text possibly containing directive lines.
        directive_signal: Prefix marking a directive line.

    Returns:
        Text without directive lines, leading blank lines dropped.

    Raises:
        InvalidInputError: If text is not a string.
    """
    _check_text(text)
    kept = [
        line for line in text.split("\n") if not is_directive_line(line, directive_signal)
    ]
    return "\n".join(_drop_leading_blank(kept))


def filter_text(
    text: str,
    comment_signal: str = COMMENT_SIGNAL,
    directive_signal: str = DIRECTIVE_SIGNAL,
    end_marker: str = END_MARKER,
) -> str:
    """Apply every filtering rule, producing the plain text of a prompt.

    Example:
        >>> filter_text("# note\\n//include a.txt\\nreal text\\n__END__\\nignored")
        'real text'

    Raises:
        InvalidInputError: If text is not a string.
    """
    return remove_directives(
        strip_comments(text, comment_signal, end_marker),
        directive_signal,
    )
