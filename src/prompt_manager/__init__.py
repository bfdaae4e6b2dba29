"""Prompt manager: parameterized text prompts for generative-AI clients.

This package provides:
- Keyword placeholders (``[NAME]``) with per-keyword value history
- Comment lines (``#``) and an ``__END__`` terminator for inline notes
- Directive lines (``//include file.txt``) resolved by a pluggable dispatcher
- File-system and in-memory storage adapters

Example:
    Render a stored prompt:

    >>> from prompt_manager import PromptManager
    >>>
    >>> manager = PromptManager()
    >>> _ = manager.create("greeting", "# Says hello\\nHello [NAME]!")
    >>> manager.render("greeting", NAME="World")
    'Hello World!'

    Directives with the default processor:

    >>> from prompt_manager import DirectiveProcessor
    >>>
    >>> manager = PromptManager(dispatcher=DirectiveProcessor(include_dir="prompts"))

    File-system storage:

    >>> from prompt_manager import FileSystemAdapter, FileSystemConfig
    >>>
    >>> storage = FileSystemAdapter(FileSystemConfig(prompts_dir="prompts"))
    >>> manager = PromptManager(storage=storage)
"""

from prompt_manager.config import FileSystemConfig, PromptConfig, RenderContext, ShellConfig
from prompt_manager.directives import (
    DirectiveDispatcher,
    DirectiveEntry,
    DirectiveProcessor,
    collect_directives,
    list_directives,
)
from prompt_manager.document import PromptDocument, RenderStage
from prompt_manager.errors import (
    ConfigurationError,
    DirectiveResolutionError,
    InvalidArgumentError,
    InvalidInputError,
    PromptError,
    PromptNotFoundError,
    StorageError,
    TemplateRenderError,
)
from prompt_manager.filters import filter_text, remove_directives, strip_comments
from prompt_manager.keywords import extract_keywords, substitute_keywords
from prompt_manager.manager import PromptManager
from prompt_manager.parameters import ParameterStore
from prompt_manager.renderer import PromptRenderer
from prompt_manager.storage import FileSystemAdapter, InMemoryAdapter, PromptRecord, StorageAdapter

__all__ = [
    "ConfigurationError",
    "DirectiveDispatcher",
    "DirectiveEntry",
    "DirectiveProcessor",
    "DirectiveResolutionError",
    "FileSystemAdapter",
    "FileSystemConfig",
    "InMemoryAdapter",
    "InvalidArgumentError",
    "InvalidInputError",
    "ParameterStore",
    "PromptConfig",
    "PromptDocument",
    "PromptError",
    "PromptManager",
    "PromptNotFoundError",
    "PromptRecord",
    "PromptRenderer",
    "RenderContext",
    "RenderStage",
    "ShellConfig",
    "StorageAdapter",
    "StorageError",
    "TemplateRenderError",
    "collect_directives",
    "extract_keywords",
    "filter_text",
    "list_directives",
    "remove_directives",
    "strip_comments",
    "substitute_keywords",
]
