"""Prompt document: raw template text plus its parameter store."""

from __future__ import annotations

import re
from enum import Enum
from typing import TYPE_CHECKING

from prompt_manager.errors import InvalidArgumentError
from prompt_manager.keywords import DEFAULT_KEYWORD_PATTERN, extract_keywords
from prompt_manager.parameters import ParameterStore
from prompt_manager.storage.base import validate_id

if TYPE_CHECKING:
    from prompt_manager.storage.base import StorageAdapter


class RenderStage(Enum):
    """Stages of a render call, in order.

    Attributes:
        LOADED: Raw text and parameters are available.
        COMMENTS_STRIPPED: Terminator section and comment lines removed.
        PARAMETERS_SUBSTITUTED: Keyword tokens replaced by current values.
        DIRECTIVES_COLLECTED: Directive lines gathered.
        DIRECTIVES_RESOLVED: Dispatcher produced replacement text.
        FINAL: Replacement text inserted; output ready.
    """

    LOADED = "loaded"
    COMMENTS_STRIPPED = "comments_stripped"
    PARAMETERS_SUBSTITUTED = "parameters_substituted"
    DIRECTIVES_COLLECTED = "directives_collected"
    DIRECTIVES_RESOLVED = "directives_resolved"
    FINAL = "final"


class PromptDocument:
    """One prompt template.

    ``raw_text`` is always the text as stored, never a rendered result.
    ``keywords`` is derived from it lazily; ``directives`` and ``stage`` are
    filled in by the renderer.

    Attributes:
        id: Prompt identifier.
        parameters: Keyword token to value history.
        directives: Directive line to resolved text from the last render.
        stage: Last completed stage of the last render.
    """

    def __init__(
        self,
        prompt_id: str,
        text: str = "",
        parameters: ParameterStore | dict[str, list[str]] | None = None,
    ) -> None:
        """Initialize the document.

        Args:
            prompt_id: Prompt identifier.
            text: Raw template text.
            parameters: Parameter store or its serialized mapping.

        Raises:
            InvalidArgumentError: If the identifier is malformed.
        """
        self.id = validate_id(prompt_id)
        self._raw_text = text
        if isinstance(parameters, ParameterStore):
            self.parameters = parameters
        else:
            self.parameters = ParameterStore.from_dict(parameters)
        self.directives: dict[str, str] = {}
        self.stage = RenderStage.LOADED
        self._keywords: tuple[re.Pattern[str], list[str]] | None = None

    @classmethod
    def load(cls, prompt_id: str, storage: StorageAdapter | None) -> PromptDocument:
        """Load a document from storage.

        Arguments are validated before any I/O.

        Args:
            prompt_id: Prompt identifier.
            storage: Storage collaborator.

        Returns:
            Loaded document.

        Raises:
            InvalidArgumentError: If the identifier is malformed or storage is None.
            PromptNotFoundError: If storage has no such prompt.
        """
        validate_id(prompt_id)
        if storage is None:
            raise InvalidArgumentError("storage cannot be None")
        record = storage.get(prompt_id)
        return cls(record.id, record.text, record.parameters)

    @property
    def raw_text(self) -> str:
        """Raw template text, as stored."""
        return self._raw_text

    @raw_text.setter
    def raw_text(self, text: str) -> None:
        self._raw_text = text
        self._keywords = None
        self.directives = {}
        self.stage = RenderStage.LOADED

    @property
    def keywords(self) -> list[str]:
        """Keyword tokens in the raw text, using the default pattern."""
        return self.keywords_for(DEFAULT_KEYWORD_PATTERN)

    def keywords_for(self, pattern: re.Pattern[str]) -> list[str]:
        """Keyword tokens in the raw text for a given pattern."""
        if self._keywords is None or self._keywords[0] is not pattern:
            self._keywords = (pattern, extract_keywords(self._raw_text, pattern))
        return list(self._keywords[1])

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id!r}, parameters={len(self.parameters)})"
