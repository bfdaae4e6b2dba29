"""Tests for PromptDocument."""

from __future__ import annotations

import re

import pytest

from prompt_manager.document import PromptDocument, RenderStage
from prompt_manager.errors import InvalidArgumentError, PromptNotFoundError
from prompt_manager.parameters import ParameterStore
from prompt_manager.storage.memory import InMemoryAdapter


class TestPromptDocument:
    """Tests for construction and derived fields."""

    def test_defaults(self) -> None:
        """Test a freshly created document."""
        document = PromptDocument("greeting")

        assert document.raw_text == ""
        assert len(document.parameters) == 0
        assert document.directives == {}
        assert document.stage is RenderStage.LOADED

    def test_invalid_id(self) -> None:
        """Test that malformed identifiers are rejected."""
        with pytest.raises(InvalidArgumentError):
            PromptDocument("not valid")

    def test_parameters_from_mapping(self) -> None:
        """Test that a serialized mapping becomes a store."""
        document = PromptDocument("p", "Hi [NAME]", {"[NAME]": "Ann"})

        assert isinstance(document.parameters, ParameterStore)
        assert document.parameters["[NAME]"] == ["Ann"]

    def test_store_is_shared(self) -> None:
        """Test that a passed store is used as-is."""
        store = ParameterStore()
        assert PromptDocument("p", "", store).parameters is store

    def test_keywords(self) -> None:
        """Test keyword extraction from the raw text."""
        document = PromptDocument("p", "Hi [NAME], [NAME] is [AGE]")
        assert document.keywords == ["[NAME]", "[AGE]"]

    def test_keywords_for_pattern(self) -> None:
        """Test keyword extraction with another pattern."""
        document = PromptDocument("p", "Hi {name} [NAME]")
        assert document.keywords_for(re.compile(r"\{[a-z]+\}")) == ["{name}"]

    def test_keywords_returns_copy(self) -> None:
        """Test that mutating the result leaves the cache alone."""
        document = PromptDocument("p", "Hi [NAME]")
        document.keywords.append("[OTHER]")
        assert document.keywords == ["[NAME]"]

    def test_raw_text_setter_resets(self) -> None:
        """Test that replacing the text resets derived state."""
        document = PromptDocument("p", "Hi [NAME]")
        assert document.keywords == ["[NAME]"]
        document.directives = {"//x": "y"}
        document.stage = RenderStage.FINAL

        document.raw_text = "Bye [WHO]"

        assert document.keywords == ["[WHO]"]
        assert document.directives == {}
        assert document.stage is RenderStage.LOADED

    def test_repr(self) -> None:
        """Test the debug representation."""
        document = PromptDocument("p", "", {"[A]": []})
        assert repr(document) == "PromptDocument(id='p', parameters=1)"


class TestPromptDocumentLoad:
    """Tests for PromptDocument.load."""

    def test_load(self, memory_storage: InMemoryAdapter) -> None:
        """Test loading text and parameters."""
        memory_storage.save("p", "Hello [NAME]", {"[NAME]": ["Alice", "Bob"]})
        document = PromptDocument.load("p", memory_storage)

        assert document.id == "p"
        assert document.raw_text == "Hello [NAME]"
        assert document.parameters.current_value("[NAME]") == "Bob"

    def test_missing_storage(self) -> None:
        """Test that None storage is rejected."""
        with pytest.raises(InvalidArgumentError, match="storage"):
            PromptDocument.load("p", None)

    def test_invalid_id_checked_first(self) -> None:
        """Test that the identifier is validated before storage is consulted."""
        with pytest.raises(InvalidArgumentError, match="format"):
            PromptDocument.load("bad id", None)

    def test_not_found(self, memory_storage: InMemoryAdapter) -> None:
        """Test that storage errors propagate."""
        with pytest.raises(PromptNotFoundError):
            PromptDocument.load("missing", memory_storage)
