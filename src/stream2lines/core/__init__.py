"""
Core data models, exceptions and limits for stream2lines.
"""

from stream2lines.core.models import (
    Encoding,
    EolMatch,
    LineMatch,
    ReaderState,
    SignalKind,
    SourceSignal,
)
from stream2lines.core.events import EventEmitter
from stream2lines.core.exceptions import (
    Stream2LinesError,
    ConfigurationError,
    LineTooLongError,
    SourceError,
)
from stream2lines.core.limits import (
    DEFAULT_MAX_LINE_LENGTH,
    MAX_SOURCE_BUFFER,
    DEFAULT_HIGH_WATER_MARK,
    FILE_HIGH_WATER_MARK,
    validate_max_line_length,
    validate_auto_destroy,
    validate_source_buffering,
    check_line_length,
)

__all__ = [
    "Encoding",
    "EolMatch",
    "LineMatch",
    "ReaderState",
    "SignalKind",
    "SourceSignal",
    "EventEmitter",
    "Stream2LinesError",
    "ConfigurationError",
    "LineTooLongError",
    "SourceError",
    # Limits
    "DEFAULT_MAX_LINE_LENGTH",
    "MAX_SOURCE_BUFFER",
    "DEFAULT_HIGH_WATER_MARK",
    "FILE_HIGH_WATER_MARK",
    "validate_max_line_length",
    "validate_auto_destroy",
    "validate_source_buffering",
    "check_line_length",
]
