"""Tests for the Jinja2 template pass."""

from __future__ import annotations

import pytest

from prompt_manager.errors import TemplateRenderError
from prompt_manager.templating import create_environment, render_template


class TestRenderTemplate:
    """Tests for render_template."""

    def test_expression(self) -> None:
        """Test a simple expression."""
        assert render_template("2+2 is {{ 2 + 2 }}") == "2+2 is 4"

    def test_variables(self) -> None:
        """Test variables and loops."""
        text = "{% for item in items %}- {{ item }}\n{% endfor %}"
        assert render_template(text, {"items": ["a", "b"]}) == "- a\n- b\n"

    def test_no_html_escaping(self) -> None:
        """Test that prompt text is not escaped."""
        assert render_template("{{ code }}", {"code": "<b>&</b>"}) == "<b>&</b>"

    def test_undefined_is_empty(self) -> None:
        """Test that undefined variables render empty by default."""
        assert render_template("[{{ missing }}]") == "[]"

    def test_strict_undefined(self) -> None:
        """Test that strict mode raises on undefined variables."""
        with pytest.raises(TemplateRenderError, match="greeting"):
            render_template("{{ missing }}", strict=True, name="greeting")

    def test_syntax_error(self) -> None:
        """Test that template syntax errors are wrapped."""
        with pytest.raises(TemplateRenderError) as exc_info:
            render_template("{% if %}", name="broken")
        assert exc_info.value.name == "broken"


class TestCreateEnvironment:
    """Tests for create_environment."""

    def test_settings(self) -> None:
        """Test environment options."""
        env = create_environment()

        assert env.autoescape is False
        assert env.trim_blocks is True
        assert env.lstrip_blocks is True
