"""Directive dispatch: turn collected directive lines into replacement text.

The renderer only depends on the ``DirectiveDispatcher`` protocol. The
default ``DirectiveProcessor`` looks handlers up in an explicit registry and
never raises: unknown, reserved and failing directives all resolve to an
``Error: ...`` string that ends up inline in the rendered prompt.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from pathlib import Path
from typing import Protocol, runtime_checkable

from prompt_manager.config import ShellConfig
from prompt_manager.directives.collector import parse_directive
from prompt_manager.directives.include import FileIncluder
from prompt_manager.directives.shell import ShellRunner
from prompt_manager.errors import ConfigurationError, DirectiveResolutionError
from prompt_manager.filters import DIRECTIVE_SIGNAL

logger = logging.getLogger(__name__)

DirectiveHandler = Callable[[list[str]], str]

# Names that collide with the processor's own entry points.
EXCLUDED_NAMES = frozenset({"run", "initialize"})

INCLUDE_ALIASES = ("include", "import")
SHELL_ALIASES = ("shell", "execute", "run_command", "bash", "sh")


@runtime_checkable
class DirectiveDispatcher(Protocol):
    """Resolves directive lines to replacement text."""

    def run(self, directives: Mapping[str, str]) -> dict[str, str]:
        """Resolve directives.

        Args:
            directives: Ordered mapping of directive line to placeholder.

        Returns:
            Mapping of the same lines to their replacement text. Must not
            raise for unknown or failing directives.
        """
        ...


def error_text(message: str) -> str:
    """Format an inline directive error."""
    return f"Error: {message}"


class DirectiveProcessor:
    """Registry-based directive dispatcher.

    Built-in directives:
        - ``include`` / ``import``: insert a file's content.
        - ``shell`` / ``execute`` / ``run_command`` / ``bash`` / ``sh``: insert
          a command's output, when shell support is enabled.

    Example:
        >>> processor = DirectiveProcessor(shell=ShellConfig(enabled=False))
        >>> processor.register("upper", lambda args: " ".join(args).upper())
        >>> processor.run({"//upper hello world": ""})
        {'//upper hello world': 'HELLO WORLD'}
        >>> processor.run({"//bogus foo": ""})
        {'//bogus foo': "Error: Unknown directive '//bogus foo'"}
    """

    def __init__(
        self,
        *,
        signal: str = DIRECTIVE_SIGNAL,
        include_dir: Path | str | None = None,
        shell: ShellConfig | None = None,
        builtins: bool = True,
    ) -> None:
        """Initialize the processor.

        Args:
            signal: Directive signal stripped from each line.
            include_dir: Directory relative include paths resolve against.
            shell: Shell directive configuration. Uses defaults if not provided.
            builtins: Whether to register the built-in directives.
        """
        self._signal = signal
        self._handlers: dict[str, DirectiveHandler] = {}
        self._includer = FileIncluder(include_dir)
        self._shell = ShellRunner(shell)

        if builtins:
            self.register(INCLUDE_ALIASES[0], self._includer, aliases=INCLUDE_ALIASES[1:])
            if self._shell.config.enabled:
                self.register(SHELL_ALIASES[0], self._shell, aliases=SHELL_ALIASES[1:])

    @property
    def names(self) -> list[str]:
        """Registered directive names, aliases included."""
        return sorted(self._handlers)

    @property
    def includer(self) -> FileIncluder:
        """The built-in file includer."""
        return self._includer

    def register(
        self,
        name: str,
        handler: DirectiveHandler,
        aliases: Iterable[str] = (),
    ) -> None:
        """Register a directive handler.

        Args:
            name: Directive name.
            handler: Callable receiving the argument tokens and returning text.
            aliases: Additional names for the same handler.

        Raises:
            ConfigurationError: If a name is reserved or empty.
        """
        for directive in (name, *aliases):
            if not directive or directive in EXCLUDED_NAMES:
                raise ConfigurationError(f"'{directive}' cannot be used as a directive name")
            self._handlers[directive] = handler

    def unregister(self, name: str) -> None:
        """Remove a directive name. Unknown names are ignored."""
        self._handlers.pop(name, None)

    def run(self, directives: Mapping[str, str] | None) -> dict[str, str]:
        """Resolve every directive line.

        The include history is reset first, so each run starts fresh.

        Args:
            directives: Ordered mapping of directive line to placeholder.

        Returns:
            Mapping of each line to its replacement text.
        """
        if not directives:
            return {}

        self._includer.reset()
        return {line: self.resolve(line) for line in directives}

    def resolve(self, line: str) -> str:
        """Resolve a single directive line, never raising."""
        entry = parse_directive(line, self._signal)

        if entry.name in EXCLUDED_NAMES:
            logger.warning("Reserved directive name in %r", line)
            return error_text(f"{entry.name} is not a valid directive: {line}")

        handler = self._handlers.get(entry.name)
        if handler is None:
            logger.warning("Unknown directive %r", line)
            return error_text(f"Unknown directive '{line}'")

        try:
            return str(handler(entry.args))
        except DirectiveResolutionError as e:
            logger.warning("Directive %r failed: %s", line, e.reason)
            return error_text(e.reason)
        except Exception as e:
            logger.warning("Directive %r raised %s: %s", line, type(e).__name__, e)
            return error_text(f"{entry.name} failed: {e}")
