"""Exception hierarchy for XCTwine.

Every error raised by the generation pipeline derives from ``XCTwineError``
and carries structured context so it can be logged with structlog and shown
to the user by the CLI.

Usage:
    from xctwine.exceptions import MalformedCatalogueError

    try:
        strings = load_catalogue(path)
    except MalformedCatalogueError as e:
        logger.error("catalogue_invalid", error=str(e), context=e.context)
"""

from __future__ import annotations

from typing import Any


class XCTwineError(Exception):
    """Base exception for all XCTwine errors.

    Attributes:
        message: Human-readable error message
        context: Additional context for debugging (dict)
        original_error: Original exception if wrapped
    """

    #: Short message shown on the console by the CLI.
    description = "Generation failed"

    def __init__(
        self,
        message: str | None = None,
        *,
        context: dict[str, Any] | None = None,
        original_error: Exception | None = None,
    ) -> None:
        """Initialize exception with rich context.

        Args:
            message: Human-readable error description (defaults to ``description``)
            context: Additional structured data for debugging
            original_error: Original exception if this wraps another error
        """
        message = message or self.description
        super().__init__(message)
        self.message = message
        self.context = context or {}
        self.original_error = original_error

    def __str__(self) -> str:
        """Format exception with context for logging."""
        base = self.message
        if self.context:
            ctx_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            base = f"{base} ({ctx_str})"
        if self.original_error:
            base = f"{base} [caused by: {type(self.original_error).__name__}]"
        return base

    def __repr__(self) -> str:
        """Developer-friendly representation."""
        return f"{self.__class__.__name__}(message={self.message!r}, context={self.context!r})"


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(XCTwineError):
    """Raised when XCTWINE_ settings are invalid."""

    description = "Invalid configuration"

    def __init__(
        self,
        message: str | None = None,
        *,
        setting: str | None = None,
        expected: str | None = None,
        **kwargs: Any,
    ) -> None:
        """Initialize configuration error.

        Args:
            message: Error description
            setting: Name of the problematic setting
            expected: Expected value or type
            **kwargs: Additional context
        """
        context = kwargs.get("context", {})
        if setting:
            context["setting"] = setting
        if expected:
            context["expected"] = expected
        kwargs["context"] = context
        super().__init__(message, **kwargs)


# =============================================================================
# Input Errors
# =============================================================================


class InputError(XCTwineError):
    """Base class for problems with the command-line inputs."""

    def __init__(
        self,
        message: str | None = None,
        *,
        path: str | None = None,
        expected: str | None = None,
        **kwargs: Any,
    ) -> None:
        """Initialize input error.

        Args:
            message: Error description
            path: Offending file path
            expected: Expected extension or condition
            **kwargs: Additional context
        """
        context = kwargs.get("context", {})
        if path:
            context["path"] = path
        if expected:
            context["expected"] = expected
        kwargs["context"] = context
        super().__init__(message, **kwargs)


class InputNotFoundError(InputError):
    """Raised when the input catalogue does not exist."""

    description = "Input file not found"


class InvalidInputExtensionError(InputError):
    """Raised when the input file is not an .xcstrings catalogue."""

    description = "Input file has an invalid extension, expected .xcstrings"


class InvalidOutputExtensionError(InputError):
    """Raised when the output file is not a .swift source file."""

    description = "Output file has an invalid extension, expected .swift"


# =============================================================================
# Catalogue Errors
# =============================================================================


class CatalogueError(XCTwineError):
    """Base class for catalogue content errors."""


class MalformedCatalogueError(CatalogueError):
    """Raised when the catalogue is not valid JSON or has no ``strings`` object."""

    description = "Input file is not a valid string catalogue"


class EmptyCatalogueError(CatalogueError):
    """Raised when the catalogue contains no localization entries."""

    description = "No localization entries, exiting"


# =============================================================================
# Output Errors
# =============================================================================


class OutputError(XCTwineError):
    """Base class for output generation errors."""


class InvalidEncodingError(OutputError):
    """Raised when the rendered source cannot be encoded as UTF-8."""

    description = "Generated output could not be encoded"


class WriteFailureError(OutputError):
    """Raised when the output file could not be written."""

    description = "Failed to write output file"


# =============================================================================
# Utility Functions
# =============================================================================


def wrap_exception(
    error: Exception,
    message: str | None = None,
    *,
    exception_class: type[XCTwineError] = XCTwineError,
    **context: Any,
) -> XCTwineError:
    """Wrap an external exception in the XCTwine exception hierarchy.

    Args:
        error: Original exception to wrap
        message: Human-readable description
        exception_class: Which XCTwine exception to use
        **context: Additional context to attach

    Returns:
        Wrapped exception with original error preserved

    Example:
        try:
            payload = json.loads(text)
        except json.JSONDecodeError as e:
            raise wrap_exception(
                e,
                exception_class=MalformedCatalogueError,
                path=str(path),
            ) from e
    """
    return exception_class(
        message,
        context=context,
        original_error=error,
    )


__all__ = [
    # Base
    "XCTwineError",
    # Configuration
    "ConfigurationError",
    # Input
    "InputError",
    "InputNotFoundError",
    "InvalidInputExtensionError",
    "InvalidOutputExtensionError",
    # Catalogue
    "CatalogueError",
    "MalformedCatalogueError",
    "EmptyCatalogueError",
    # Output
    "OutputError",
    "InvalidEncodingError",
    "WriteFailureError",
    # Utilities
    "wrap_exception",
]
