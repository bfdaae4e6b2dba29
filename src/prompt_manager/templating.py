"""Jinja2 template-engine pass for prompt text."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from jinja2 import Environment, StrictUndefined, Undefined

from prompt_manager.errors import TemplateRenderError


def create_environment(strict: bool = False) -> Environment:
    """Create a Jinja2 environment suited to plain-text prompts.

    Args:
        strict: Whether undefined variables raise.

    Returns:
        Configured Jinja2 Environment.
    """
    return Environment(
        autoescape=False,  # Prompts don't need HTML escaping
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=False,
        undefined=StrictUndefined if strict else Undefined,
    )


def render_template(
    text: str,
    variables: Mapping[str, Any] | None = None,
    *,
    strict: bool = False,
    name: str = "unknown",
) -> str:
    """Render text as a Jinja2 template.

    Args:
        text: Template source.
        variables: Variables available to the template.
        strict: Whether undefined variables raise.
        name: Prompt identifier for error messages.

    Returns:
        Rendered text.

    Raises:
        TemplateRenderError: If the template fails to parse or render.

    Example:
        >>> render_template("2+2 is {{ 2 + 2 }}")
        '2+2 is 4'
    """
    try:
        template = create_environment(strict).from_string(text)
        return template.render(**dict(variables or {}))
    except Exception as e:
        raise TemplateRenderError(name, e) from e
