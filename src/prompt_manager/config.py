"""Prompt manager configuration."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from functools import cached_property
from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field, field_validator

from prompt_manager.errors import ConfigurationError

if TYPE_CHECKING:
    from prompt_manager.directives.dispatcher import DirectiveDispatcher
    from prompt_manager.storage.base import StorageAdapter

DEFAULT_PARAMETER_PATTERN = r"(\[[A-Z _|]+\])"


class PromptConfig(BaseModel):
    """Configuration for the rendering pipeline.

    Attributes:
        parameter_pattern: Regex matching keyword tokens, delimiters included.
        comment_signal: Prefix marking a comment line.
        directive_signal: Prefix marking a directive line.
        end_marker: Line after which the rest of the text is ignored.
        collapse_duplicate_directives: Resolve identical directive lines once.
        prune_unused_parameters: Drop history for keywords absent from the text on load.
        env_substitution: Whether to replace ``$NAME`` / ``${NAME}`` references.
        env_file: Optional ``.env`` file layered over the process environment.
        template_engine: Whether to run the text through Jinja2.
        strict_mode: Whether the template engine raises on undefined variables.
    """

    parameter_pattern: str = Field(
        default=DEFAULT_PARAMETER_PATTERN,
        description="Regex matching keyword tokens, delimiters included",
    )
    comment_signal: str = Field(
        default="#",
        min_length=1,
        description="Prefix marking a comment line",
    )
    directive_signal: str = Field(
        default="//",
        min_length=1,
        description="Prefix marking a directive line",
    )
    end_marker: str = Field(
        default="__END__",
        min_length=1,
        description="Line after which the rest of the text is ignored",
    )
    collapse_duplicate_directives: bool = Field(
        default=True,
        description="Resolve identical directive lines once and reuse the result",
    )
    prune_unused_parameters: bool = Field(
        default=False,
        description="Drop parameter history for keywords no longer in the text",
    )
    env_substitution: bool = Field(
        default=False,
        description="Whether to replace $NAME and ${NAME} environment references",
    )
    env_file: Path | None = Field(
        default=None,
        description="Optional .env file layered over the process environment",
    )
    template_engine: bool = Field(
        default=False,
        description="Whether to run the text through the Jinja2 template engine",
    )
    strict_mode: bool = Field(
        default=False,
        description="Whether the template engine raises on undefined variables",
    )

    @field_validator("parameter_pattern")
    @classmethod
    def _check_pattern(cls, value: str) -> str:
        try:
            compiled = re.compile(value)
        except re.error as e:
            raise ConfigurationError(f"Invalid parameter_pattern {value!r}: {e}") from e
        if compiled.groups > 1:
            raise ConfigurationError(
                f"parameter_pattern must have at most one capturing group, "
                f"got {compiled.groups}"
            )
        return value


class FileSystemConfig(BaseModel):
    """Configuration for the file-system storage adapter.

    Attributes:
        prompts_dir: Directory holding prompt text and parameter files.
        prompt_extension: Extension of prompt text files.
        params_extension: Extension of parameter history files.
    """

    prompts_dir: Path = Field(
        default=Path("prompts"),
        description="Directory holding prompt text and parameter files",
    )
    prompt_extension: str = Field(
        default=".txt",
        description="Extension of prompt text files",
    )
    params_extension: str = Field(
        default=".json",
        description="Extension of parameter history files",
    )

    @field_validator("prompt_extension", "params_extension")
    @classmethod
    def _check_extension(cls, value: str) -> str:
        if not value.startswith(".") or len(value) < 2:
            raise ConfigurationError(f"Invalid extension: {value!r}")
        return value


class ShellConfig(BaseModel):
    """Configuration for the ``//shell`` directive.

    Attributes:
        enabled: Whether the shell directive is registered at all.
        allow_dangerous: Run commands that fail the safety screen anyway.
        timeout: Seconds before a command is abandoned.
        cwd: Working directory for commands.
    """

    enabled: bool = True
    allow_dangerous: bool = False
    timeout: float = Field(default=30.0, gt=0)
    cwd: Path | None = None


@dataclass(frozen=True)
class RenderContext:
    """Everything a render call needs, passed explicitly.

    Attributes:
        config: Pipeline configuration.
        dispatcher: Collaborator resolving directive lines.
        storage: Collaborator persisting prompt text and parameters.
    """

    config: PromptConfig = field(default_factory=PromptConfig)
    dispatcher: DirectiveDispatcher | None = None
    storage: StorageAdapter | None = None

    @cached_property
    def pattern(self) -> re.Pattern[str]:
        """Compiled keyword pattern."""
        return re.compile(self.config.parameter_pattern)
