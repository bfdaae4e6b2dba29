"""Directive line collection.

A directive is a line whose stripped content begins with the directive
signal, e.g. ``//include notes.txt``. Collection runs on text after
parameter substitution, so ``//[COMMAND] [ARGS]`` can name its directive
dynamically.
"""

from __future__ import annotations

from dataclasses import dataclass

from prompt_manager.errors import InvalidInputError
from prompt_manager.filters import DIRECTIVE_SIGNAL, is_directive_line


@dataclass(frozen=True)
class DirectiveEntry:
    """A parsed directive line.

    Attributes:
        name: First whitespace-delimited token after the signal.
        arguments: Remaining tokens joined by single spaces.
        raw: The directive line with surrounding whitespace stripped.
    """

    name: str
    arguments: str
    raw: str

    @property
    def args(self) -> list[str]:
        """Arguments split on whitespace."""
        return self.arguments.split()


def _check_text(text: object) -> None:
    if not isinstance(text, str):
        raise InvalidInputError(f"Expected text as str, got {type(text).__name__}")


def parse_directive(line: str, signal: str = DIRECTIVE_SIGNAL) -> DirectiveEntry:
    """Split a directive line into name and arguments.

    Args:
        line: A line for which ``is_directive_line`` holds.
        signal: Directive signal.

    Returns:
        Parsed DirectiveEntry.

    Example:
        >>> parse_directive("  //include   a.txt  b.txt")
        DirectiveEntry(name='include', arguments='a.txt b.txt', raw='//include   a.txt  b.txt')
    """
    raw = line.strip()
    tokens = raw[len(signal) :].split()
    if not tokens:
        return DirectiveEntry(name="", arguments="", raw=raw)
    return DirectiveEntry(name=tokens[0], arguments=" ".join(tokens[1:]), raw=raw)


def collect_directive_lines(text: str, signal: str = DIRECTIVE_SIGNAL) -> list[str]:
    """List directive lines top to bottom, duplicates included.

    Raises:
        InvalidInputError: If text is not a string.
    """
    _check_text(text)
    return [line.strip() for line in text.split("\n") if is_directive_line(line, signal)]


def collect_directives(text: str, signal: str = DIRECTIVE_SIGNAL) -> dict[str, str]:
    """Collect directive lines into an ordered mapping.

    Keys are the stripped directive lines, values an empty placeholder for
    the resolved text. Identical lines collapse into a single entry.

    Args:
        text: Text after parameter substitution.
        signal: Directive signal.

    Returns:
        Ordered mapping of directive line to ``""``.

    Raises:
        InvalidInputError: If text is not a string.
    """
    return dict.fromkeys(collect_directive_lines(text, signal), "")


def list_directives(text: str, signal: str = DIRECTIVE_SIGNAL) -> list[DirectiveEntry]:
    """Parse every directive line in text.

    Raises:
        InvalidInputError: If text is not a string.
    """
    return [parse_directive(line, signal) for line in collect_directive_lines(text, signal)]
