"""Prompt rendering pipeline.

A render call moves a document through fixed stages::

    LOADED -> COMMENTS_STRIPPED -> PARAMETERS_SUBSTITUTED
           -> DIRECTIVES_COLLECTED -> DIRECTIVES_RESOLVED -> FINAL

Keyword discovery runs on the raw text, comments and directive lines
included, so every keyword gets a parameter entry. Substitution runs on the
filtered text, and directives are collected after substitution so their
names and arguments can come from parameters.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import TYPE_CHECKING, Any

from prompt_manager.config import RenderContext
from prompt_manager.directives.collector import collect_directive_lines
from prompt_manager.directives.dispatcher import error_text
from prompt_manager.document import PromptDocument, RenderStage
from prompt_manager.environment import resolve_environment, substitute_environment
from prompt_manager.errors import InvalidArgumentError
from prompt_manager.filters import is_directive_line, strip_comments
from prompt_manager.keywords import substitute_keywords
from prompt_manager.parameters import ParameterStore
from prompt_manager.templating import render_template

if TYPE_CHECKING:
    from prompt_manager.storage.base import StorageAdapter

logger = logging.getLogger(__name__)


class PromptRenderer:
    """Renders prompt documents within a RenderContext.

    Example:
        >>> from prompt_manager.directives import DirectiveProcessor
        >>> renderer = PromptRenderer(RenderContext(dispatcher=DirectiveProcessor()))
        >>> renderer.render_text("# note\\nHello [NAME]!", {"[NAME]": ["World"]})
        'Hello World!'
    """

    def __init__(self, context: RenderContext | None = None) -> None:
        """Initialize the renderer.

        Args:
            context: Render context. Uses defaults if not provided.
        """
        self._context = context or RenderContext()

    @property
    def context(self) -> RenderContext:
        """Get the render context."""
        return self._context

    def _require_storage(self) -> StorageAdapter:
        storage = self._context.storage
        if storage is None:
            raise InvalidArgumentError("storage cannot be None")
        return storage

    def sync_parameters(self, document: PromptDocument, *, prune: bool = False) -> list[str]:
        """Give every keyword in the raw text a parameter entry.

        Args:
            document: Document to synchronize.
            prune: Also drop entries for keywords no longer in the text.

        Returns:
            Keywords found in the raw text.
        """
        keywords = document.keywords_for(self._context.pattern)
        document.parameters.sync_keywords(keywords)
        if prune:
            document.parameters.prune(keywords)
        return keywords

    def load(self, prompt_id: str) -> PromptDocument:
        """Load a document from storage and synchronize its parameters.

        Raises:
            InvalidArgumentError: If the identifier is malformed or no storage is set.
            PromptNotFoundError: If storage has no such prompt.
        """
        document = PromptDocument.load(prompt_id, self._context.storage)
        self.sync_parameters(document, prune=self._context.config.prune_unused_parameters)
        logger.debug("Loaded prompt '%s' with %d keywords", prompt_id, len(document.parameters))
        return document

    def render(self, document: PromptDocument) -> str:
        """Render a document to its final text.

        The document's raw text and parameter values are not changed, apart
        from empty entries added for newly seen keywords.

        Args:
            document: Document to render.

        Returns:
            Final prompt text.

        Raises:
            InvalidInputError: If the raw text is not a string.
            TemplateRenderError: If the template-engine pass fails.
        """
        config = self._context.config
        pattern = self._context.pattern

        document.stage = RenderStage.LOADED
        document.directives = {}
        self.sync_parameters(document)

        text = strip_comments(document.raw_text, config.comment_signal, config.end_marker)
        self._advance(document, RenderStage.COMMENTS_STRIPPED)

        env: dict[str, str] = {}
        if config.env_substitution or config.template_engine:
            env = resolve_environment(config.env_file)
        if config.env_substitution:
            text = substitute_environment(text, env)
        text = substitute_keywords(text, document.parameters, pattern)
        if config.template_engine:
            text = render_template(
                text,
                self._template_variables(document.parameters, env),
                strict=config.strict_mode,
                name=document.id,
            )
        self._advance(document, RenderStage.PARAMETERS_SUBSTITUTED)

        lines = collect_directive_lines(text, config.directive_signal)
        self._advance(document, RenderStage.DIRECTIVES_COLLECTED)

        replacements = self._resolve(document, lines)
        self._advance(document, RenderStage.DIRECTIVES_RESOLVED)

        text = self._insert(text, iter(replacements))
        self._advance(document, RenderStage.FINAL)
        return text

    def render_text(
        self,
        text: str,
        parameters: ParameterStore | dict[str, Any] | None = None,
        *,
        prompt_id: str = "inline",
    ) -> str:
        """Render text that is not stored anywhere.

        Args:
            text: Raw template text.
            parameters: Parameter store or serialized mapping.
            prompt_id: Identifier used in log and error messages.

        Returns:
            Final prompt text.
        """
        return self.render(PromptDocument(prompt_id, text, parameters))

    def save(self, document: PromptDocument) -> None:
        """Persist the raw text and parameter history of a document.

        The rendered output is never stored.

        Raises:
            InvalidArgumentError: If no storage is set.
        """
        self._require_storage().save(
            document.id,
            document.raw_text,
            document.parameters.to_dict(),
        )

    def delete(self, prompt_id: str) -> None:
        """Delete a stored prompt.

        Raises:
            InvalidArgumentError: If no storage is set.
            PromptNotFoundError: If storage has no such prompt.
        """
        self._require_storage().delete(prompt_id)

    @staticmethod
    def _advance(document: PromptDocument, stage: RenderStage) -> None:
        document.stage = stage
        logger.debug("Prompt '%s' reached stage %s", document.id, stage.value)

    @staticmethod
    def _template_variables(parameters: ParameterStore, env: dict[str, str]) -> dict[str, Any]:
        return {"params": parameters.current_values(), "env": env}

    def _dispatch(self, directives: dict[str, str]) -> dict[str, str]:
        dispatcher = self._context.dispatcher
        if dispatcher is None:
            return {line: error_text(f"Unknown directive '{line}'") for line in directives}
        try:
            return dispatcher.run(directives)
        except Exception as e:
            logger.warning("Directive dispatcher raised %s: %s", type(e).__name__, e)
            return {line: error_text(str(e)) for line in directives}

    def _resolve(self, document: PromptDocument, lines: list[str]) -> list[str]:
        """Resolve directive lines, returning one replacement per occurrence."""
        if not lines:
            return []

        if self._context.config.collapse_duplicate_directives:
            resolved = self._dispatch(dict.fromkeys(lines, ""))
            document.directives = {line: resolved.get(line, line) for line in dict.fromkeys(lines)}
            return [document.directives[line] for line in lines]

        replacements: list[str] = []
        for line in lines:
            value = self._dispatch({line: ""}).get(line, line)
            document.directives[line] = value
            replacements.append(value)
        return replacements

    def _insert(self, text: str, replacements: Iterator[str]) -> str:
        signal = self._context.config.directive_signal
        output = [
            next(replacements) if is_directive_line(line, signal) else line
            for line in text.split("\n")
        ]
        return "\n".join(output)
