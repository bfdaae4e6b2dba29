#!/usr/bin/env python3
"""Directive example.

This example demonstrates:
- //include to pull in another file
- //shell to insert command output
- Custom directives registered on DirectiveProcessor
- Directive names built from parameters
"""

import tempfile
from datetime import date
from pathlib import Path

from prompt_manager import DirectiveProcessor, PromptManager, ShellConfig


def include_and_shell_example():
    """Built-in directives."""
    print("--- Built-in Directives Example ---\n")

    with tempfile.TemporaryDirectory() as tmpdir:
        base = Path(tmpdir)
        (base / "persona.txt").write_text("You are a careful code reviewer.\n")

        processor = DirectiveProcessor(include_dir=base, shell=ShellConfig(timeout=5))
        manager = PromptManager(dispatcher=processor)
        manager.create(
            "review",
            """# Persona comes from a shared file
//include persona.txt
Today is:
//shell date +%Y-%m-%d
Review the [LANGUAGE] code below.""",
        )

        print(manager.render("review", LANGUAGE="Python"))

        # Refused commands become inline error text instead of running
        manager.create("unsafe", "//shell rm -rf build")
        print(f"\n{manager.render('unsafe')}")


def custom_directive_example():
    """Register a directive of your own."""
    print("\n--- Custom Directive Example ---\n")

    processor = DirectiveProcessor(shell=ShellConfig(enabled=False))
    processor.register("today", lambda args: date.today().isoformat(), aliases=["date"])
    processor.register("upper", lambda args: " ".join(args).upper())

    manager = PromptManager(dispatcher=processor)
    manager.create("custom", "//[ACTION] [TEXT]\n//today")

    print(manager.render("custom", ACTION="upper", TEXT="shout this"))


def main():
    include_and_shell_example()
    custom_directive_example()


if __name__ == "__main__":
    main()
