"""
Custom exception definitions.

This module defines the exception hierarchy for tsemit-specific
errors. Every error is raised synchronously to the immediate caller;
nothing is retried or recovered internally.
"""

from typing import Any, Optional


class TsEmitError(Exception):
    """
    Base exception for all tsemit errors.

    Carries a human-readable message plus an optional dictionary of
    structured context that is appended to ``str(error)``.
    """

    def __init__(self, message: str, details: Optional[dict] = None):
        """
        Initialize tsemit error.

        Args:
            message: Human-readable error message
            details: Optional dictionary with additional error context
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return formatted error message."""
        if self.details:
            detail_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({detail_str})"
        return self.message


class FormatterError(TsEmitError):
    """
    Raised when a template cannot be expanded.

    A formatter error aborts the single write call that triggered it;
    content already in the writer is left untouched.
    """

    def __init__(self, message: str, template: str = "", details: Optional[dict] = None):
        """
        Initialize formatter error.

        Args:
            message: Error description
            template: The template that failed to expand
            details: Optional additional context
        """
        super().__init__(message, details)
        self.template = template


class MalformedTemplate(FormatterError):
    """Raised when ``$`` is used unescaped and no valid directive follows it."""

    def __init__(self, reason: str, template: str = "", position: Optional[int] = None):
        details = {}
        if position is not None:
            details["position"] = position
        super().__init__(f"Malformed template: {reason}", template, details)
        self.reason = reason
        self.position = position


class UnknownDirective(FormatterError):
    """
    Raised when a directive selector has no registered handler.

    The offending selector character and the index of its ``$`` are
    available as ``directive`` and ``position``.
    """

    def __init__(self, directive: str, position: int, template: str = ""):
        super().__init__(
            f"Unknown directive '${directive}' at position {position}",
            template,
            {"directive": directive, "position": position},
        )
        self.directive = directive
        self.position = position


class ArityMismatch(FormatterError):
    """
    Raised when the arguments do not fit the directives of a template.

    Covers missing or unused positional arguments, out-of-range
    positional indices, missing named arguments, and values of the
    wrong type for a directive.
    """

    def __init__(
        self,
        message: str,
        template: str = "",
        expected: Optional[Any] = None,
        actual: Optional[Any] = None,
    ):
        details = {}
        if expected is not None:
            details["expected"] = expected
        if actual is not None:
            details["actual"] = actual
        super().__init__(message, template, details)
        self.expected = expected
        self.actual = actual


class WriterStateError(TsEmitError):
    """
    Raised when a writer or buffer is driven into an invalid state.

    Examples are closing more indentation scopes than were opened, or
    splicing before a marker taken from a different buffer.
    """


class ConfigError(TsEmitError):
    """Raised when a configuration value is out of range or of the wrong type."""

    def __init__(self, key: str, value: Any, reason: str):
        super().__init__(f"Invalid configuration value for '{key}': {reason}", {"value": value})
        self.key = key
        self.value = value
