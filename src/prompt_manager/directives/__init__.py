"""Directive collection and dispatch.

Directive lines start with ``//`` and are resolved by a dispatcher into
replacement text:

    //include notes/context.txt
    //shell date
"""

from prompt_manager.directives.collector import (
    DirectiveEntry,
    collect_directive_lines,
    collect_directives,
    list_directives,
    parse_directive,
)
from prompt_manager.directives.dispatcher import (
    EXCLUDED_NAMES,
    DirectiveDispatcher,
    DirectiveHandler,
    DirectiveProcessor,
)
from prompt_manager.directives.include import FileIncluder
from prompt_manager.directives.shell import ShellRunner, check_command

__all__ = [
    "EXCLUDED_NAMES",
    "DirectiveDispatcher",
    "DirectiveEntry",
    "DirectiveHandler",
    "DirectiveProcessor",
    "FileIncluder",
    "ShellRunner",
    "check_command",
    "collect_directive_lines",
    "collect_directives",
    "list_directives",
    "parse_directive",
]
