"""``//shell`` directive: insert the output of a command."""

from __future__ import annotations

import logging
import re
import subprocess

from prompt_manager.config import ShellConfig
from prompt_manager.errors import DirectiveResolutionError

logger = logging.getLogger(__name__)

DANGEROUS_COMMANDS = (
    "rm",
    "rmdir",
    "dd",
    "mkfs",
    "format",
    "del",
    ":",
    ">",
    ">>",
    "|",
    "chmod",
    "chown",
    "sudo",
    "su",
    "shutdown",
    "reboot",
    "halt",
    "mv",
    "cp",
)

_WORD_COMMANDS = tuple(cmd for cmd in DANGEROUS_COMMANDS if cmd.isalnum())
_SYMBOL_COMMANDS = tuple(cmd for cmd in DANGEROUS_COMMANDS if not cmd.isalnum())


def check_command(command: str) -> str | None:
    """Screen a command for potentially destructive operations.

    Args:
        command: Shell command line.

    Returns:
        Reason the command is dangerous, or None if it looks safe.

    Example:
        >>> check_command("echo hello") is None
        True
        >>> check_command("sudo ls")
        "Command contains potentially dangerous operation: 'sudo'"
    """
    lowered = command.lower()

    for name in _WORD_COMMANDS:
        if re.search(rf"\b{re.escape(name)}\b", lowered):
            return f"Command contains potentially dangerous operation: '{name}'"

    for symbol in _SYMBOL_COMMANDS:
        if symbol in lowered:
            return f"Command contains potentially dangerous operation: '{symbol}'"

    if "*" in command or "?" in command:
        return "Command contains wildcards which might affect multiple files"

    if ("bash" in command and ".sh" in command) or "eval" in command:
        return "Command appears to execute a shell script"

    return None


class ShellRunner:
    """Runs shell commands for the ``//shell`` directive and its aliases."""

    def __init__(self, config: ShellConfig | None = None) -> None:
        """Initialize the runner.

        Args:
            config: Shell configuration. Uses defaults if not provided.
        """
        self._config = config or ShellConfig()

    @property
    def config(self) -> ShellConfig:
        """Get the shell configuration."""
        return self._config

    def __call__(self, args: list[str]) -> str:
        """Run the command named by ``args`` and return its output.

        Args:
            args: Command tokens; joined with single spaces.

        Returns:
            Standard output without its trailing newline.

        Raises:
            DirectiveResolutionError: If the command is refused, fails,
                times out or cannot be started.
        """
        command = " ".join(args)
        if not command:
            raise DirectiveResolutionError("shell", "No command given")

        reason = check_command(command)
        if reason and not self._config.allow_dangerous:
            logger.warning("Refusing shell directive %r: %s", command, reason)
            raise DirectiveResolutionError("shell", f"Command refused: {reason}")

        cwd = str(self._config.cwd) if self._config.cwd else None
        try:
            result = subprocess.run(
                command,
                shell=True,
                cwd=cwd,
                capture_output=True,
                text=True,
                timeout=self._config.timeout,
            )
        except subprocess.TimeoutExpired as e:
            raise DirectiveResolutionError(
                "shell",
                f"Command timed out after {self._config.timeout:g} seconds",
            ) from e
        except OSError as e:
            raise DirectiveResolutionError("shell", f"Error executing command: {e}") from e

        if result.returncode != 0:
            raise DirectiveResolutionError(
                "shell", f"Command execution failed: {result.stderr.strip()}"
            )

        return result.stdout.rstrip("\n")
