#!/usr/bin/env python3
"""Basic prompt rendering example.

This example demonstrates:
- Creating prompts with [KEYWORD] placeholders
- Comment lines and the __END__ terminator
- Value history per keyword
- In-memory and file-system storage
"""

import tempfile
from pathlib import Path

from prompt_manager import FileSystemAdapter, FileSystemConfig, PromptManager


def in_memory_example():
    """Render prompts kept in memory."""
    print("--- In-Memory Example ---\n")

    manager = PromptManager()
    manager.create(
        "greeting",
        """# Greets the user by name
Hello [NAME], welcome to [PLACE]!
__END__
Anything below the terminator is notes for the author.""",
    )

    print(manager.render("greeting", NAME="Alice", PLACE="Python land", save=True))
    print(manager.render("greeting", NAME="Bob", save=True))

    history = manager.get("greeting").parameters
    print(f"\nHistory for [NAME]: {history['[NAME]']}")
    print(f"History for [PLACE]: {history['[PLACE]']}")


def file_system_example():
    """Render prompts stored as <id>.txt plus <id>.json."""
    print("\n--- File-System Example ---\n")

    with tempfile.TemporaryDirectory() as tmpdir:
        prompts_dir = Path(tmpdir) / "prompts"
        prompts_dir.mkdir()

        storage = FileSystemAdapter(FileSystemConfig(prompts_dir=prompts_dir))
        manager = PromptManager(storage=storage)

        manager.create("coding/review", "Review this [LANGUAGE] code for [FOCUS].")
        print(manager.render("coding/review", LANGUAGE="Python", FOCUS="security", save=True))

        print(f"\nStored files: {sorted(p.name for p in (prompts_dir / 'coding').iterdir())}")
        print(f"Prompts in 'coding': {manager.list_prompts('coding')}")


def main():
    in_memory_example()
    file_system_example()


if __name__ == "__main__":
    main()
