"""
Limits and validators shared by the reader and its sources.

Centralizes the size constants and the checks that guard them so the
engine, the configuration layer and the CLI enforce the same boundaries.
"""

from typing import Any

from stream2lines.core.exceptions import ConfigurationError, LineTooLongError

__all__ = [
    # Configuration constants
    "DEFAULT_MAX_LINE_LENGTH",
    "MAX_SOURCE_BUFFER",
    "DEFAULT_HIGH_WATER_MARK",
    "FILE_HIGH_WATER_MARK",
    # Validators
    "validate_max_line_length",
    "validate_auto_destroy",
    "validate_source_buffering",
    "check_line_length",
]


# =============================================================================
# Configuration Constants
# =============================================================================

# Longest line content accepted when the caller does not say otherwise
DEFAULT_MAX_LINE_LENGTH = 4096

# Ceiling on a source's internal buffering; matches a file stream's chunk size
MAX_SOURCE_BUFFER = 64 * 1024

# Buffering of in-memory and socket sources
DEFAULT_HIGH_WATER_MARK = 16 * 1024

# Buffering of file sources
FILE_HIGH_WATER_MARK = 64 * 1024


# =============================================================================
# Validation Functions
# =============================================================================

def validate_max_line_length(value: Any) -> int:
    """
    Validate the max_line_length option.

    Args:
        value: Requested maximum; 0 means unlimited

    Returns:
        The value as an int

    Raises:
        ConfigurationError: If value is not a non-negative integer
    """
    # bool is an int subclass, but True is not a length
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ConfigurationError(
            f"Invalid maxLineLength: {value!r}",
            config_key="max_line_length",
        )
    return value


def validate_auto_destroy(value: Any) -> bool:
    """
    Validate the auto_destroy_source option.

    Raises:
        ConfigurationError: If value is not a bool
    """
    if not isinstance(value, bool):
        raise ConfigurationError(
            f"Invalid autoDestroySource option value: {value!r}",
            config_key="auto_destroy_source",
        )
    return value


def validate_source_buffering(source: Any, limit: int = MAX_SOURCE_BUFFER) -> None:
    """
    Check that a source does not buffer more than the reader can tolerate.

    A source whose high water mark is above the limit is still accepted
    when it has already ended with less than the limit buffered.

    Args:
        source: A pull source
        limit: Maximum acceptable buffering in bytes

    Raises:
        ConfigurationError: If the source buffers too much
    """
    high_water_mark = source.high_water_mark
    if high_water_mark <= limit:
        return
    if source.ended and source.buffered_length < limit:
        return
    raise ConfigurationError(
        f"Stream has inappropriate highWaterMark: {high_water_mark}",
        config_key="source",
    )


def check_line_length(
    content: str,
    max_length: int,
    line_number: int | None = None,
) -> str:
    """
    Check a line's content against the maximum.

    Args:
        content: Line content, terminator excluded
        max_length: Maximum content length; 0 disables the check
        line_number: Number the line would get if emitted

    Returns:
        The content if it fits

    Raises:
        LineTooLongError: If content is longer than max_length
    """
    if max_length and len(content) > max_length:
        raise LineTooLongError(len(content), max_length, line_number)
    return content
