"""Environment variable substitution for prompt text."""

from __future__ import annotations

import os
import re
from collections.abc import Mapping
from pathlib import Path

from dotenv import dotenv_values

from prompt_manager.errors import InvalidInputError

# $NAME or ${NAME}
ENV_VAR_PATTERN = re.compile(r"\$(?:\{([A-Za-z_][A-Za-z0-9_]*)\}|([A-Za-z_][A-Za-z0-9_]*))")


def resolve_environment(env_file: Path | str | None = None) -> dict[str, str]:
    """Build the variable mapping used for substitution.

    Merges in order (later overwrites earlier):
    1. os.environ
    2. env_file contents

    Args:
        env_file: Optional ``.env`` file.

    Returns:
        Merged environment.

    Raises:
        FileNotFoundError: If env_file is given but does not exist.
    """
    env = dict(os.environ)
    if env_file:
        env_path = Path(env_file)
        if not env_path.exists():
            raise FileNotFoundError(f"env_file not found: {env_path}")
        file_vars = dotenv_values(env_path)
        # dotenv_values yields None for keys without a value
        env.update({k: v for k, v in file_vars.items() if v is not None})
    return env


def substitute_environment(text: str, env: Mapping[str, str] | None = None) -> str:
    """Replace ``$NAME`` and ``${NAME}`` with environment values.

    Unknown variables are left verbatim.

    Args:
        text: Text with environment references.
        env: Variable mapping. Uses os.environ if not provided.

    Returns:
        Text with known references substituted.

    Example:
        >>> substitute_environment("Say $GREETING, ${WHO}!", {"GREETING": "Hello"})
        'Say Hello, ${WHO}!'
    """
    if not isinstance(text, str):
        raise InvalidInputError(f"Expected text as str, got {type(text).__name__}")

    variables = os.environ if env is None else env

    def replace(match: re.Match[str]) -> str:
        name = match.group(1) or match.group(2)
        value = variables.get(name)
        return match.group(0) if value is None else value

    return ENV_VAR_PATTERN.sub(replace, text)
