"""Shared test fixtures and configuration for prompt-manager tests."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path

import pytest

from prompt_manager.config import FileSystemConfig
from prompt_manager.storage.filesystem import FileSystemAdapter
from prompt_manager.storage.memory import InMemoryAdapter


class StubDispatcher:
    """Dispatcher resolving lines from a fixed table.

    Lines missing from the table resolve to an unknown-directive error.
    Every call to ``run`` is recorded.
    """

    def __init__(self, table: Mapping[str, str] | None = None) -> None:
        self.table = dict(table or {})
        self.calls: list[dict[str, str]] = []

    def run(self, directives: Mapping[str, str]) -> dict[str, str]:
        self.calls.append(dict(directives))
        return {
            line: self.table.get(line, f"Error: Unknown directive '{line}'")
            for line in directives
        }


@pytest.fixture
def stub_dispatcher() -> type[StubDispatcher]:
    """Factory fixture for table-driven dispatchers.

    Usage:
        def test_something(stub_dispatcher):
            dispatcher = stub_dispatcher({"//include a.txt": "A"})
    """
    return StubDispatcher


@pytest.fixture
def prompts_dir(tmp_path: Path) -> Path:
    """Create an empty prompts directory."""
    path = tmp_path / "prompts"
    path.mkdir()
    return path


@pytest.fixture
def fs_storage(prompts_dir: Path) -> FileSystemAdapter:
    """Provide a file-system adapter rooted at ``prompts_dir``."""
    return FileSystemAdapter(FileSystemConfig(prompts_dir=prompts_dir))


@pytest.fixture
def memory_storage() -> InMemoryAdapter:
    """Provide an empty in-memory adapter."""
    return InMemoryAdapter()


@pytest.fixture
def demo_text() -> str:
    """Template exercising comments, a directive, a keyword and the terminator."""
    return "# Demo\n//include greeting.txt\nHello [NAME]!\n__END__\nignored\n"
