"""Parameter store: keyword tokens mapped to their value history."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping, MutableMapping
from typing import Any

logger = logging.getLogger(__name__)


class ParameterStore(MutableMapping[str, list[str]]):
    """Mapping from keyword token to an ordered history of values.

    The last element of a history is the current value. Assignment through
    ``store[key] = value`` keeps the two historical behaviors apart by the
    shape of ``value``:

    - a ``str`` is appended as the newest entry (see ``append_value``)
    - a list or tuple replaces the whole history (see ``replace_history``)

    Example:
        >>> store = ParameterStore()
        >>> store["[NAME]"] = "Alice"
        >>> store["[NAME]"] = "Bob"
        >>> store["[NAME]"]
        ['Alice', 'Bob']
        >>> store.current_value("[NAME]")
        'Bob'
    """

    def __init__(self, data: Mapping[str, Any] | None = None) -> None:
        """Initialize the store.

        Args:
            data: Initial contents. Each value is applied with ``__setitem__``
                semantics, so lists become histories and strings single entries.
        """
        self._data: dict[str, list[str]] = {}
        if data:
            self.update(data)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> ParameterStore:
        """Build a store from its serialized mapping.

        Scalar values written by older versions are read as one-element
        histories, and numbers are stored as text. ``None`` values become
        empty histories.

        Args:
            data: Mapping of keyword token to list of values.

        Returns:
            New ParameterStore.
        """
        store = cls()
        for key, value in (data or {}).items():
            if value is None:
                store.replace_history(key, [])
            elif isinstance(value, (list, tuple)):
                store.replace_history(key, value)
            else:
                store.replace_history(key, [value])
        return store

    def to_dict(self) -> dict[str, list[str]]:
        """Return a serializable copy of the store."""
        return {key: list(history) for key, history in self._data.items()}

    def __getitem__(self, key: str) -> list[str]:
        return self._data[key]

    def __setitem__(self, key: str, value: str | Iterable[str]) -> None:
        if isinstance(value, str):
            self.append_value(key, value)
        else:
            self.replace_history(key, value)

    def __delitem__(self, key: str) -> None:
        del self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._data!r})"

    def get_history(self, key: str) -> list[str]:
        """Get a copy of the history for a keyword, empty when absent."""
        return list(self._data.get(key, []))

    def current_value(self, key: str) -> str | None:
        """Get the most recent value for a keyword.

        Args:
            key: Keyword token.

        Returns:
            Last history entry, or None when the history is missing or empty.
        """
        history = self._data.get(key)
        if not history:
            return None
        return history[-1]

    def append_value(self, key: str, value: str) -> None:
        """Record one more usage of a value.

        The value is not appended when it already is the current value.

        Args:
            key: Keyword token.
            value: Value to record.
        """
        history = self._data.setdefault(key, [])
        if history and history[-1] == value:
            return
        history.append(value)

    def replace_history(self, key: str, history: Iterable[str]) -> None:
        """Replace the whole history for a keyword.

        Args:
            key: Keyword token.
            history: New ordered history, most recent last.
                Values are stored as text.
        """
        self._data[key] = [str(value) for value in history]

    def ensure_key(self, key: str) -> bool:
        """Initialize an empty history for a keyword if it is absent.

        Args:
            key: Keyword token.

        Returns:
            True if the key was added.
        """
        if key in self._data:
            return False
        self._data[key] = []
        return True

    def sync_keywords(self, keywords: Iterable[str]) -> list[str]:
        """Ensure every keyword has an entry.

        Args:
            keywords: Keyword tokens found in a text.

        Returns:
            Keywords that were newly added.
        """
        added = [key for key in keywords if self.ensure_key(key)]
        if added:
            logger.debug("Added empty history for keywords: %s", ", ".join(added))
        return added

    def prune(self, keywords: Iterable[str]) -> list[str]:
        """Remove entries whose keyword is not in ``keywords``.

        Args:
            keywords: Keyword tokens to keep.

        Returns:
            Keywords that were removed.
        """
        keep = set(keywords)
        removed = [key for key in self._data if key not in keep]
        for key in removed:
            del self._data[key]
        if removed:
            logger.debug("Pruned unused keywords: %s", ", ".join(removed))
        return removed

    def current_values(self) -> dict[str, str]:
        """Get the current value of every keyword that has one."""
        return {key: history[-1] for key, history in self._data.items() if history}

    def copy(self) -> ParameterStore:
        """Return an independent copy of the store."""
        return ParameterStore.from_dict(self._data)
