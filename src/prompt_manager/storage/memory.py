"""In-memory storage adapter."""

from __future__ import annotations

import logging
from collections.abc import Callable

from prompt_manager.errors import PromptNotFoundError
from prompt_manager.storage.base import PromptRecord, validate_id

logger = logging.getLogger(__name__)


class InMemoryAdapter:
    """Keeps prompts in a dictionary.

    Stored data is copied on the way in and out, so callers cannot mutate
    it without calling ``save``.

    Example:
        >>> storage = InMemoryAdapter()
        >>> storage.save("greeting", "Hello [NAME]", {"[NAME]": ["World"]})
        >>> storage.get("greeting").parameters
        {'[NAME]': ['World']}
    """

    def __init__(self, search_fn: Callable[[str], list[str]] | None = None) -> None:
        """Initialize the adapter.

        Args:
            search_fn: Optional replacement for the built-in text search.
        """
        self._prompts: dict[str, tuple[str, dict[str, list[str]]]] = {}
        self._search_fn = search_fn

    def get(self, prompt_id: str) -> PromptRecord:
        validate_id(prompt_id)
        if prompt_id not in self._prompts:
            raise PromptNotFoundError(prompt_id)
        text, parameters = self._prompts[prompt_id]
        return PromptRecord(
            id=prompt_id,
            text=text,
            parameters={key: list(values) for key, values in parameters.items()},
        )

    def save(self, prompt_id: str, text: str, parameters: dict[str, list[str]]) -> None:
        validate_id(prompt_id)
        self._prompts[prompt_id] = (
            text,
            {key: list(values) for key, values in parameters.items()},
        )
        logger.debug("Saved prompt '%s' in memory", prompt_id)

    def delete(self, prompt_id: str) -> None:
        validate_id(prompt_id)
        if self._prompts.pop(prompt_id, None) is None:
            raise PromptNotFoundError(prompt_id)
        logger.debug("Deleted prompt '%s' from memory", prompt_id)

    def list(self) -> list[str]:
        return sorted(self._prompts)

    def search(self, term: str) -> list[str]:
        if self._search_fn is not None:
            return self._search_fn(term)
        needle = term.lower()
        return sorted(
            prompt_id for prompt_id, (text, _) in self._prompts.items() if needle in text.lower()
        )

    def exists(self, prompt_id: str) -> bool:
        validate_id(prompt_id)
        return prompt_id in self._prompts
