"""
Domain layer for stream2lines.

Contains the EOL classification table and the boundary scanner.
This layer has no dependencies on sources, event loops or I/O.
"""

from stream2lines.domain.eol import (
    EOL_ALIASES,
    codec_for,
    default_eol_match,
    encoding_match_level,
    encodings,
    eol_match_level,
    eol_matches,
    parse_encoding,
    parse_eol_match,
    resolve_eol_match,
)
from stream2lines.domain.scanner import scan

__all__ = [
    # Classification table
    "EOL_ALIASES",
    "codec_for",
    "default_eol_match",
    "encoding_match_level",
    "encodings",
    "eol_match_level",
    "eol_matches",
    "parse_encoding",
    "parse_eol_match",
    "resolve_eol_match",
    # Scanner
    "scan",
]
