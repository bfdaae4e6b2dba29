"""Prompt manager exceptions."""

from __future__ import annotations


class PromptError(Exception):
    """Base exception for all prompt manager errors.

    Attributes:
        message: Human-readable error message.
    """

    def __init__(self, message: str) -> None:
        """Initialize the error.

        Args:
            message: Human-readable error message.
        """
        self.message = message
        super().__init__(message)

    def __repr__(self) -> str:
        """Return detailed representation for debugging."""
        return f"{type(self).__name__}({self.message!r})"


class PromptNotFoundError(PromptError):
    """Raised when a prompt identifier does not resolve in storage.

    Attributes:
        prompt_id: Identifier that was not found.
    """

    def __init__(self, prompt_id: str) -> None:
        """Initialize the error.

        Args:
            prompt_id: Identifier that was not found.
        """
        self.prompt_id = prompt_id
        super().__init__(f"Prompt not found: {prompt_id}")

    def __reduce__(self) -> tuple:
        """Support pickling by returning constructor arguments."""
        return (type(self), (self.prompt_id,))

    def __repr__(self) -> str:
        """Return detailed representation for debugging."""
        return f"{type(self).__name__}(prompt_id={self.prompt_id!r})"


class InvalidArgumentError(PromptError, ValueError):
    """Raised for a malformed identifier or a missing collaborator.

    Raised eagerly, before any storage I/O happens.
    """


class InvalidInputError(PromptError, TypeError):
    """Raised when non-text input is handed to a text-processing stage."""


class ConfigurationError(PromptError):
    """Raised when configuration values are invalid or incompatible."""


class StorageError(PromptError):
    """Raised when a storage backend fails to read or write.

    Attributes:
        cause: Underlying exception, if any.
    """

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        """Initialize the error.

        Args:
            message: Human-readable error message.
            cause: The underlying exception.
        """
        self.cause = cause
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation."""
        if self.cause:
            return f"{self.message} (caused by: {self.cause})"
        return self.message


class TemplateRenderError(PromptError):
    """Raised when the template-engine pass fails.

    Attributes:
        name: Prompt identifier being rendered.
        cause: The underlying exception.
    """

    def __init__(self, name: str, cause: Exception) -> None:
        """Initialize the error.

        Args:
            name: Prompt identifier being rendered.
            cause: The underlying exception.
        """
        self.name = name
        self.cause = cause
        super().__init__(f"Failed to render template '{name}': {cause}")


class DirectiveResolutionError(PromptError):
    """Raised inside a directive handler when it cannot produce output.

    The dispatcher converts this into inline ``Error: ...`` text, so it
    never reaches the caller of a render.

    Attributes:
        directive: Directive name that failed.
        reason: Description of the failure.
    """

    def __init__(self, directive: str, reason: str) -> None:
        """Initialize the error.

        Args:
            directive: Directive name that failed.
            reason: Description of the failure.
        """
        self.directive = directive
        self.reason = reason
        super().__init__(reason)

    def __reduce__(self) -> tuple:
        """Support pickling by returning constructor arguments."""
        return (type(self), (self.directive, self.reason))
