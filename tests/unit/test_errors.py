"""Tests for the exception hierarchy."""

from __future__ import annotations

import pickle

import pytest

from prompt_manager.errors import (
    ConfigurationError,
    DirectiveResolutionError,
    InvalidArgumentError,
    InvalidInputError,
    PromptError,
    PromptNotFoundError,
    StorageError,
    TemplateRenderError,
)


class TestHierarchy:
    """Tests for base classes."""

    @pytest.mark.parametrize(
        "error",
        [
            PromptNotFoundError("x"),
            InvalidArgumentError("bad"),
            InvalidInputError("bad"),
            ConfigurationError("bad"),
            StorageError("bad"),
            TemplateRenderError("x", ValueError("v")),
            DirectiveResolutionError("include", "gone"),
        ],
    )
    def test_all_are_prompt_errors(self, error: PromptError) -> None:
        """Test that every error derives from PromptError."""
        assert isinstance(error, PromptError)

    def test_builtin_bases(self) -> None:
        """Test compatibility with builtin exception types."""
        assert isinstance(InvalidArgumentError("x"), ValueError)
        assert isinstance(InvalidInputError("x"), TypeError)


class TestMessages:
    """Tests for messages and representations."""

    def test_not_found(self) -> None:
        """Test PromptNotFoundError message and repr."""
        error = PromptNotFoundError("greeting")

        assert str(error) == "Prompt not found: greeting"
        assert error.prompt_id == "greeting"
        assert repr(error) == "PromptNotFoundError(prompt_id='greeting')"

    def test_storage_error_cause(self) -> None:
        """Test that the cause is appended to the message."""
        error = StorageError("Cannot read x", cause=OSError("denied"))
        assert str(error) == "Cannot read x (caused by: denied)"
        assert str(StorageError("plain")) == "plain"

    def test_template_error(self) -> None:
        """Test TemplateRenderError message."""
        error = TemplateRenderError("greeting", ValueError("boom"))
        assert str(error) == "Failed to render template 'greeting': boom"

    def test_base_repr(self) -> None:
        """Test the generic repr."""
        assert repr(ConfigurationError("bad value")) == "ConfigurationError('bad value')"


class TestPickling:
    """Tests for pickle support."""

    def test_not_found_round_trip(self) -> None:
        """Test that PromptNotFoundError survives pickling."""
        error = pickle.loads(pickle.dumps(PromptNotFoundError("greeting")))
        assert error.prompt_id == "greeting"
        assert str(error) == "Prompt not found: greeting"

    def test_directive_error_round_trip(self) -> None:
        """Test that DirectiveResolutionError survives pickling."""
        error = pickle.loads(pickle.dumps(DirectiveResolutionError("include", "gone")))
        assert (error.directive, error.reason) == ("include", "gone")
