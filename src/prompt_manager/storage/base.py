"""Storage adapter protocol and shared helpers."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

from prompt_manager.errors import InvalidArgumentError

ID_PATTERN = re.compile(r"^[a-zA-Z0-9\-_/]+$")


def validate_id(prompt_id: object) -> str:
    """Check that a prompt identifier is safe to use as a storage key.

    Args:
        prompt_id: Candidate identifier.

    Returns:
        The identifier.

    Raises:
        InvalidArgumentError: If the identifier is empty, not a string, or
            contains characters outside ``[a-zA-Z0-9-_/]``.
    """
    if not isinstance(prompt_id, str) or not prompt_id:
        raise InvalidArgumentError("prompt_id cannot be blank")
    if not ID_PATTERN.match(prompt_id):
        raise InvalidArgumentError(f"Invalid prompt_id format: {prompt_id!r}")
    if any(part in ("", "..") for part in prompt_id.split("/")):
        raise InvalidArgumentError(f"Invalid prompt_id format: {prompt_id!r}")
    return prompt_id


@dataclass
class PromptRecord:
    """A stored prompt.

    Attributes:
        id: Prompt identifier.
        text: Raw template text, as stored.
        parameters: Keyword token to value history.
    """

    id: str
    text: str
    parameters: dict[str, list[str]] = field(default_factory=dict)


@runtime_checkable
class StorageAdapter(Protocol):
    """Persistence contract consumed by the renderer."""

    def get(self, prompt_id: str) -> PromptRecord:
        """Load a prompt. Raises PromptNotFoundError for unknown ids."""
        ...

    def save(self, prompt_id: str, text: str, parameters: dict[str, list[str]]) -> None:
        """Store raw text and parameter history."""
        ...

    def delete(self, prompt_id: str) -> None:
        """Remove a prompt. Raises PromptNotFoundError for unknown ids."""
        ...

    def list(self) -> list[str]:
        """Return all known identifiers, sorted."""
        ...

    def search(self, term: str) -> list[str]:
        """Return identifiers whose text matches ``term``, sorted."""
        ...

    def exists(self, prompt_id: str) -> bool:
        """Check whether a prompt is stored."""
        ...
