"""
Boundary scanner.

Finds the first line in a text window under a given EOL dialect. Every
pattern has the same shape: a run of non-terminator characters, then
either a terminator or the end of the window, so a match always exists.
"""

import re

from stream2lines.core.models import EolMatch, LineMatch

__all__ = ["scan"]


# \r\n is tried before a lone \r wherever \r is a terminator
_CRLF = re.compile(r"(.*?)(\r\n|\Z)", re.DOTALL)
_LF = re.compile(r"([^\n]*)(\n|\Z)")
_BASIC = re.compile(r"([^\n\r]*)(\r\n|[\n\r]|\Z)")
_7BIT = re.compile(r"([^\x0c\n\r\x0b]*)(\r\n|[\x0c\n\r\x0b]|\Z)")
_ISO8859 = re.compile(r"([^\x0c\n\r\x0b\x85]*)(\r\n|[\x0c\n\r\x0b\x85]|\Z)")
_ALL = re.compile(
    r"([^\x0c\n\r\x0b\x85\u2028\u2029]*)(\r\n|[\x0c\n\r\x0b\x85\u2028\u2029]|\Z)"
)


def _pattern(dialect: EolMatch) -> re.Pattern:
    match dialect:
        case EolMatch.CRLF:
            return _CRLF
        case EolMatch.LF:
            return _LF
        case EolMatch.BASIC:
            return _BASIC
        case EolMatch.SEVEN_BIT:
            return _7BIT
        case EolMatch.ISO8859:
            return _ISO8859
        case EolMatch.ALL:
            return _ALL
    raise ValueError(f"Unknown EOL match type: {dialect!r}")


def scan(window: str, dialect: EolMatch, pos: int = 0) -> LineMatch:
    """
    Find the first line of window[pos:].

    Args:
        window: Buffered text
        dialect: Terminator class to split on
        pos: Offset where unscanned text begins

    Returns:
        LineMatch whose whole_match is the consumed prefix; terminator is
        empty when the rest of the window holds no terminator
    """
    m = _pattern(dialect).match(window, pos)
    # Patterns cannot fail: both groups may match empty at end of window
    return LineMatch(
        whole_match=m.group(0),
        content=m.group(1),
        terminator=m.group(2),
    )
