"""Prompt manager facade over storage, rendering and directives."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from prompt_manager.config import DEFAULT_PARAMETER_PATTERN, PromptConfig, RenderContext
from prompt_manager.document import PromptDocument
from prompt_manager.renderer import PromptRenderer
from prompt_manager.storage.memory import InMemoryAdapter

if TYPE_CHECKING:
    from prompt_manager.directives.dispatcher import DirectiveDispatcher
    from prompt_manager.storage.base import StorageAdapter

logger = logging.getLogger(__name__)


class PromptManager:
    """Loads, renders and persists prompts.

    Example:
        >>> manager = PromptManager()
        >>> _ = manager.create("greeting", "Hello [NAME]!")
        >>> manager.render("greeting", NAME="World")
        'Hello World!'
        >>> manager.get("greeting").parameters["[NAME]"]
        ['World']
    """

    def __init__(
        self,
        config: PromptConfig | None = None,
        storage: StorageAdapter | None = None,
        dispatcher: DirectiveDispatcher | None = None,
    ) -> None:
        """Initialize the prompt manager.

        Args:
            config: Pipeline configuration. Uses defaults if not provided.
            storage: Storage collaborator. Uses an in-memory store if not provided.
            dispatcher: Directive collaborator. Directives resolve to an
                ``Error: Unknown directive`` marker if not provided.
        """
        self._context = RenderContext(
            config=config or PromptConfig(),
            dispatcher=dispatcher,
            storage=storage if storage is not None else InMemoryAdapter(),
        )
        self._renderer = PromptRenderer(self._context)

    @property
    def config(self) -> PromptConfig:
        """Get the pipeline configuration."""
        return self._context.config

    @property
    def context(self) -> RenderContext:
        """Get the render context."""
        return self._context

    @property
    def renderer(self) -> PromptRenderer:
        """Get the renderer."""
        return self._renderer

    def _keyword(self, name: str) -> str:
        """Bracket a bare keyword name when the default brackets are in use."""
        if name.startswith("[") or self.config.parameter_pattern != DEFAULT_PARAMETER_PATTERN:
            return name
        return f"[{name}]"

    def get(self, prompt_id: str) -> PromptDocument:
        """Load a prompt document.

        Raises:
            InvalidArgumentError: If the identifier is malformed.
            PromptNotFoundError: If the prompt does not exist.
        """
        return self._renderer.load(prompt_id)

    def render(
        self,
        prompt_id: str,
        values: Mapping[str, str] | None = None,
        /,
        *,
        save: bool = False,
        **keywords: str,
    ) -> str:
        """Render a stored prompt, recording new parameter values first.

        Each value is appended to its keyword's history. Keys may be given
        bare (``NAME``) or bracketed (``[NAME]``). Keywords that clash with
        ``save`` go in the ``values`` mapping.

        Args:
            prompt_id: Prompt identifier.
            values: Keyword values for this render.
            save: Persist the updated parameter history after rendering.
            **keywords: More keyword values, applied after ``values``.

        Returns:
            Final prompt text.
        """
        document = self.get(prompt_id)
        for name, value in {**(values or {}), **keywords}.items():
            document.parameters.append_value(self._keyword(name), value)
        text = self._renderer.render(document)
        if save:
            self._renderer.save(document)
        return text

    def render_document(self, document: PromptDocument) -> str:
        """Render an already loaded document."""
        return self._renderer.render(document)

    def create(
        self,
        prompt_id: str,
        text: str,
        parameters: dict[str, Any] | None = None,
    ) -> PromptDocument:
        """Create and store a new prompt.

        Args:
            prompt_id: Prompt identifier.
            text: Raw template text.
            parameters: Optional initial parameter history.

        Returns:
            The stored document.
        """
        document = PromptDocument(prompt_id, text, parameters)
        self._renderer.sync_parameters(document)
        self._renderer.save(document)
        logger.info("Created prompt '%s'", prompt_id)
        return document

    def save(self, document: PromptDocument) -> None:
        """Persist a document's raw text and parameter history."""
        self._renderer.save(document)

    def delete(self, prompt_id: str) -> None:
        """Delete a stored prompt.

        Raises:
            PromptNotFoundError: If the prompt does not exist.
        """
        self._renderer.delete(prompt_id)
        logger.info("Deleted prompt '%s'", prompt_id)

    def list_prompts(self, category: str | None = None) -> list[str]:
        """List stored prompt identifiers.

        Args:
            category: Optional leading path segment filter (e.g., "coding").

        Returns:
            Sorted identifiers.
        """
        ids = self._context.storage.list()
        if category is None:
            return ids
        return [prompt_id for prompt_id in ids if prompt_id.startswith(f"{category}/")]

    def search(self, term: str) -> list[str]:
        """Find prompts whose text contains ``term``."""
        return self._context.storage.search(term)

    def exists(self, prompt_id: str) -> bool:
        """Check whether a prompt is stored."""
        return self._context.storage.exists(prompt_id)
