"""
Custom exceptions for stream2lines.
"""

__all__ = [
    "Stream2LinesError",
    "ConfigurationError",
    "LineTooLongError",
    "SourceError",
]


class Stream2LinesError(Exception):
    """Base exception for all stream2lines errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} - {self.details}"
        return self.message


class ConfigurationError(Stream2LinesError):
    """Raised when a reader cannot be built from the given source and options."""

    def __init__(self, message: str, config_key: str | None = None):
        details = {}
        if config_key is not None:
            details["config_key"] = config_key
        super().__init__(message, details)
        self.config_key = config_key


class LineTooLongError(Stream2LinesError):
    """
    Reported when a line's content exceeds the configured maximum.

    The length excludes the terminator. This is always fatal for the reader
    that saw it.
    """

    def __init__(
        self,
        line_length: int,
        max_length: int,
        line_number: int | None = None,
    ):
        details = {
            "line_length": line_length,
            "max_length": max_length,
        }
        if line_number is not None:
            details["line_number"] = line_number
        super().__init__("Maximum line length exceeded", details)
        self.line_length = line_length
        self.max_length = max_length
        self.line_number = line_number


class SourceError(Stream2LinesError):
    """Wraps an error signalled by the underlying source."""

    def __init__(self, message: str, original: BaseException | None = None):
        super().__init__(message)
        self.original = original
        if original is not None:
            self.__cause__ = original

    @classmethod
    def from_exception(cls, exc: BaseException) -> "SourceError":
        """Build a SourceError carrying the source's own message verbatim."""
        if isinstance(exc, SourceError):
            return exc
        return cls(str(exc) or exc.__class__.__name__, original=exc)
