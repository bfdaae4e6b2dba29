"""Keyword token extraction and substitution.

Keywords are placeholders such as ``[NAME]`` matched by a configurable
pattern. When the pattern has a capturing group, the group is the token;
otherwise the whole match is.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from prompt_manager.config import DEFAULT_PARAMETER_PATTERN
from prompt_manager.errors import InvalidInputError

if TYPE_CHECKING:
    from prompt_manager.parameters import ParameterStore

DEFAULT_KEYWORD_PATTERN = re.compile(DEFAULT_PARAMETER_PATTERN)


def _token(match: re.Match[str]) -> str:
    return match.group(1) if match.re.groups else match.group(0)


def extract_keywords(
    text: str,
    pattern: re.Pattern[str] = DEFAULT_KEYWORD_PATTERN,
) -> list[str]:
    """Extract keyword tokens from text.

    Args:
        text: Template text to scan.
        pattern: Compiled keyword pattern.

    Returns:
        Unique tokens in first-seen order.

    Raises:
        InvalidInputError: If text is not a string.

    Example:
        >>> extract_keywords("Hi [A] and [B], bye [A]")
        ['[A]', '[B]']
    """
    if not isinstance(text, str):
        raise InvalidInputError(f"Expected text as str, got {type(text).__name__}")

    seen: dict[str, None] = {}
    for match in pattern.finditer(text):
        seen.setdefault(_token(match), None)
    return list(seen)


def substitute_keywords(
    text: str,
    parameters: ParameterStore,
    pattern: re.Pattern[str] = DEFAULT_KEYWORD_PATTERN,
) -> str:
    """Replace keyword tokens with their current values.

    Tokens without a current value are left unchanged.

    Args:
        text: Text containing keyword tokens.
        parameters: Store providing current values.
        pattern: Compiled keyword pattern.

    Returns:
        Text with known tokens substituted.

    Raises:
        InvalidInputError: If text is not a string.
    """
    if not isinstance(text, str):
        raise InvalidInputError(f"Expected text as str, got {type(text).__name__}")

    def replace(match: re.Match[str]) -> str:
        token = _token(match)
        value = parameters.current_value(token)
        if not value:
            return match.group(0)
        start, end = match.span()
        token_start, token_end = match.span(1) if match.re.groups else (start, end)
        # Keep any text the pattern matched outside the token itself.
        return text[start:token_start] + value + text[token_end:end]

    return pattern.sub(replace, text)
