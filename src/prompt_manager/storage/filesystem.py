"""File-system storage adapter.

Each prompt is stored as two files next to each other::

    prompts/
    ├── greeting.txt        # raw template text
    ├── greeting.json       # {"[NAME]": ["Alice", "Bob"]}
    └── coding/
        ├── review.txt      # id "coding/review"
        └── review.json
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any

from prompt_manager.config import FileSystemConfig
from prompt_manager.errors import ConfigurationError, PromptNotFoundError, StorageError
from prompt_manager.parameters import ParameterStore
from prompt_manager.storage.base import ID_PATTERN, PromptRecord, validate_id

logger = logging.getLogger(__name__)


class FileSystemAdapter:
    """Stores prompt text and parameter history as files.

    A missing parameter file reads as an empty history; scalar values from
    older files are read as single-entry histories.
    """

    def __init__(
        self,
        config: FileSystemConfig | None = None,
        search_fn: Callable[[str], list[str]] | None = None,
    ) -> None:
        """Initialize the adapter.

        Args:
            config: Adapter configuration. Uses defaults if not provided.
            search_fn: Optional replacement for the built-in text search.

        Raises:
            ConfigurationError: If the prompts directory does not exist.
        """
        self._config = config or FileSystemConfig()
        self._base_dir = Path(self._config.prompts_dir).expanduser().resolve()
        self._search_fn = search_fn

        if not self._base_dir.is_dir():
            raise ConfigurationError(f"prompts_dir is not a directory: {self._base_dir}")

    @property
    def config(self) -> FileSystemConfig:
        """Get the adapter configuration."""
        return self._config

    @property
    def prompts_dir(self) -> Path:
        """Resolved prompts directory."""
        return self._base_dir

    def path(self, prompt_id: str) -> Path:
        """Path of the text file for a prompt. The file may not exist."""
        validate_id(prompt_id)
        return self._file_path(prompt_id, self._config.prompt_extension)

    def _file_path(self, prompt_id: str, extension: str) -> Path:
        return self._base_dir / f"{prompt_id}{extension}"

    def _read(self, path: Path) -> str:
        try:
            return path.read_text(encoding="utf-8")
        except OSError as e:
            raise StorageError(f"Failed to read {path}", cause=e) from e

    def _write(self, path: Path, content: str) -> None:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        except OSError as e:
            raise StorageError(f"Failed to write {path}", cause=e) from e

    def _read_parameters(self, path: Path) -> dict[str, list[str]]:
        if not path.is_file():
            return {}
        raw = self._read(path)
        if not raw.strip():
            return {}
        try:
            data: Any = json.loads(raw)
        except json.JSONDecodeError as e:
            raise StorageError(f"Invalid parameter file {path}", cause=e) from e
        if not isinstance(data, dict):
            raise StorageError(
                f"Parameter file {path} must hold a JSON object, got {type(data).__name__}"
            )
        return ParameterStore.from_dict(data).to_dict()

    def get(self, prompt_id: str) -> PromptRecord:
        validate_id(prompt_id)
        text_path = self._file_path(prompt_id, self._config.prompt_extension)
        if not text_path.is_file():
            raise PromptNotFoundError(prompt_id)

        return PromptRecord(
            id=prompt_id,
            text=self._read(text_path),
            parameters=self._read_parameters(
                self._file_path(prompt_id, self._config.params_extension)
            ),
        )

    def save(self, prompt_id: str, text: str, parameters: dict[str, list[str]]) -> None:
        validate_id(prompt_id)
        self._write(self._file_path(prompt_id, self._config.prompt_extension), text)
        self._write(
            self._file_path(prompt_id, self._config.params_extension),
            json.dumps(parameters, indent=2, ensure_ascii=False),
        )
        logger.info("Saved prompt '%s' to %s", prompt_id, self._base_dir)

    def delete(self, prompt_id: str) -> None:
        validate_id(prompt_id)
        text_path = self._file_path(prompt_id, self._config.prompt_extension)
        if not text_path.is_file():
            raise PromptNotFoundError(prompt_id)

        params_path = self._file_path(prompt_id, self._config.params_extension)
        try:
            text_path.unlink()
            params_path.unlink(missing_ok=True)
        except OSError as e:
            raise StorageError(f"Failed to delete prompt '{prompt_id}'", cause=e) from e
        logger.info("Deleted prompt '%s' from %s", prompt_id, self._base_dir)

    def _iter_prompt_files(self) -> list[tuple[str, Path]]:
        ext = self._config.prompt_extension
        found: list[tuple[str, Path]] = []
        for path in self._base_dir.rglob(f"*{ext}"):
            if not path.is_file():
                continue
            prompt_id = path.relative_to(self._base_dir).as_posix()[: -len(ext)]
            if not ID_PATTERN.match(prompt_id):
                logger.debug("Skipping %s: not a valid prompt id", path)
                continue
            found.append((prompt_id, path))
        return sorted(found)

    def list(self) -> list[str]:
        return [prompt_id for prompt_id, _ in self._iter_prompt_files()]

    def search(self, term: str) -> list[str]:
        if self._search_fn is not None:
            return self._search_fn(term)
        needle = term.lower()
        return [
            prompt_id
            for prompt_id, path in self._iter_prompt_files()
            if needle in self._read(path).lower()
        ]

    def exists(self, prompt_id: str) -> bool:
        validate_id(prompt_id)
        return self._file_path(prompt_id, self._config.prompt_extension).is_file()
