"""``//include`` directive: insert the content of a file."""

from __future__ import annotations

import logging
from pathlib import Path

from prompt_manager.errors import DirectiveResolutionError

logger = logging.getLogger(__name__)


class FileIncluder:
    """Reads files for ``//include`` and ``//import`` directives.

    Each file is included at most once per dispatcher run; a repeated
    include of the same resolved path is refused, which stops inclusion
    loops.

    Attributes:
        base_dir: Directory relative paths are resolved against. None uses
            the current working directory.
    """

    def __init__(self, base_dir: Path | str | None = None) -> None:
        """Initialize the includer.

        Args:
            base_dir: Directory relative paths are resolved against.
        """
        self.base_dir = Path(base_dir) if base_dir is not None else None
        self._included: set[Path] = set()

    @property
    def included(self) -> frozenset[Path]:
        """Resolved paths included since the last reset."""
        return frozenset(self._included)

    def reset(self) -> None:
        """Forget previously included files."""
        self._included.clear()

    def _resolve(self, file_path: str) -> Path:
        path = Path(file_path).expanduser()
        if not path.is_absolute() and self.base_dir is not None:
            path = self.base_dir / path
        return path.resolve()

    def __call__(self, args: list[str]) -> str:
        """Return the content of the file named by ``args``.

        Args:
            args: Path tokens; joined with single spaces.

        Returns:
            File content with one trailing newline removed.

        Raises:
            DirectiveResolutionError: If the file is missing, unreadable or
                already included.
        """
        file_path = " ".join(args)
        if not file_path:
            raise DirectiveResolutionError("include", "No file given to include")

        path = self._resolve(file_path)
        if path in self._included:
            logger.debug("Skipping repeated include of %s", path)
            raise DirectiveResolutionError("include", f"File '{file_path}' not accessible")

        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.debug("Cannot include %s: %s", path, e)
            raise DirectiveResolutionError(
                "include", f"File '{file_path}' not accessible"
            ) from e

        self._included.add(path)
        return content[:-1] if content.endswith("\n") else content
