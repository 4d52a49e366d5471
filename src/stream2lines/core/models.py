"""
Core data models for stream2lines.

These enumerations and small value types are shared by the classification
table, the boundary scanner, the reader and its lifecycle controller.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

__all__ = [
    "Encoding",
    "EolMatch",
    "LineMatch",
    "ReaderState",
    "SignalKind",
    "SourceSignal",
]


class Encoding(Enum):
    """
    Encoding families a reader accepts.

    Values are the canonical option names.
    """
    ASCII = "ascii"
    BINARY = "binary"
    LATIN1 = "latin1"
    UTF8 = "utf8"
    UTF16LE = "utf16le"
    UCS2 = "ucs2"


class EolMatch(Enum):
    """
    End-of-line dialects.

    Each dialect is a class of terminators recognized as a unit, listed
    here in ascending order of match level.
    """
    CRLF = "crlf"
    LF = "lf"
    BASIC = "basic"
    SEVEN_BIT = "7bit"
    ISO8859 = "iso8859"
    ALL = "all"


@dataclass(frozen=True)
class LineMatch:
    """
    Result of scanning a window for its first line.

    Attributes:
        whole_match: Prefix of the window consumed (content + terminator)
        content: Line text without the terminator
        terminator: Matched terminator, empty if the window ran out first
    """
    whole_match: str
    content: str
    terminator: str

    @property
    def ends_ambiguously(self) -> bool:
        """True when more data could still change where this line ends."""
        return not self.terminator or self.terminator == "\r"


class ReaderState(Enum):
    """States of the source lifecycle controller."""
    IDLE = "idle"
    AWAITING_CHUNK = "awaiting-chunk"
    DATA_BUFFERED = "data-buffered"
    ENDING = "ending"
    CLOSING = "closing"
    CLOSED = "closed"

    @property
    def is_terminal(self) -> bool:
        return self in (ReaderState.CLOSING, ReaderState.CLOSED)


class SignalKind(Enum):
    """Signals a pull source can raise."""
    READABLE = "readable"
    ERROR = "error"
    CLOSE = "close"


@dataclass(frozen=True)
class SourceSignal:
    """One inbound source signal, queued for the lifecycle controller."""
    kind: SignalKind
    payload: Any = None
