"""
EOL classification table.

Maps each encoding family to its match level, its default dialect and the
codec sources use to decode it, and validates requested dialects against
those levels.

Match levels:
    0: single-byte-safe encodings (crlf, lf, basic, 7bit)
    1: 8-bit encodings that carry NEL (adds iso8859)
    2: Unicode-aware encodings (adds all)
"""

import os

from stream2lines.core.exceptions import ConfigurationError
from stream2lines.core.models import Encoding, EolMatch

__all__ = [
    "EOL_ALIASES",
    "parse_encoding",
    "parse_eol_match",
    "encoding_match_level",
    "eol_match_level",
    "default_eol_match",
    "codec_for",
    "resolve_eol_match",
    "encodings",
    "eol_matches",
]


# Alternative dialect names folded to canonical ones
EOL_ALIASES = {
    "dos": EolMatch.CRLF,
    "rfc2046": EolMatch.CRLF,
    "unix": EolMatch.LF,
    "linux": EolMatch.LF,
    "native": EolMatch.CRLF if os.linesep == "\r\n" else EolMatch.LF,
    "os": EolMatch.CRLF if os.linesep == "\r\n" else EolMatch.LF,
}


def encoding_match_level(encoding: Encoding) -> int:
    """Return the richest dialect level an encoding can safely use."""
    match encoding:
        case Encoding.ASCII | Encoding.BINARY:
            return 0
        case Encoding.LATIN1:
            return 1
        case Encoding.UTF8 | Encoding.UTF16LE | Encoding.UCS2:
            return 2


def eol_match_level(dialect: EolMatch) -> int:
    """Return the level an encoding needs to use this dialect."""
    match dialect:
        case EolMatch.CRLF | EolMatch.LF | EolMatch.BASIC | EolMatch.SEVEN_BIT:
            return 0
        case EolMatch.ISO8859:
            return 1
        case EolMatch.ALL:
            return 2


def default_eol_match(encoding: Encoding) -> EolMatch:
    """Return the dialect used when none (or an unusable one) is requested."""
    match encoding:
        case Encoding.ASCII | Encoding.BINARY:
            return EolMatch.SEVEN_BIT
        case Encoding.LATIN1:
            return EolMatch.ISO8859
        case Encoding.UTF8 | Encoding.UTF16LE | Encoding.UCS2:
            return EolMatch.ALL


def codec_for(encoding: Encoding) -> str:
    """Return the Python codec that decodes this encoding family."""
    match encoding:
        case Encoding.ASCII:
            return "ascii"
        case Encoding.BINARY | Encoding.LATIN1:
            return "latin-1"
        case Encoding.UTF8:
            return "utf-8"
        case Encoding.UTF16LE | Encoding.UCS2:
            return "utf-16-le"


def parse_encoding(name: "str | Encoding") -> Encoding:
    """
    Look up an encoding family by name.

    Matching ignores case, hyphens and underscores, so "UTF-8" and
    "utf_16_le" are accepted.

    Raises:
        ConfigurationError: If the name is not a supported family
    """
    if isinstance(name, Encoding):
        return name
    if isinstance(name, str):
        folded = name.lower().replace("-", "").replace("_", "")
        for encoding in Encoding:
            if encoding.value == folded:
                return encoding
    raise ConfigurationError(
        f"Encoding not valid here: {name}",
        config_key="encoding",
    )


def parse_eol_match(name: "str | EolMatch") -> EolMatch:
    """
    Look up a dialect by canonical name or alias, ignoring case.

    Raises:
        ConfigurationError: If name is not a string or not a known dialect
    """
    if isinstance(name, EolMatch):
        return name
    if not isinstance(name, str):
        raise ConfigurationError(
            "eolMatch option must be a string",
            config_key="eol_match",
        )
    folded = name.lower()
    if folded in EOL_ALIASES:
        return EOL_ALIASES[folded]
    try:
        return EolMatch(folded)
    except ValueError:
        raise ConfigurationError(
            f"Unknown EOL match type: {name}",
            config_key="eol_match",
        ) from None


def resolve_eol_match(
    encoding: "str | Encoding",
    requested: "str | EolMatch | None" = None,
    strict: bool = True,
) -> EolMatch:
    """
    Pick the dialect a reader will use.

    Args:
        encoding: Encoding family
        requested: Requested dialect name, alias or member; None for default
        strict: Reject unusable requests instead of substituting the default

    Returns:
        The requested dialect if legal for the encoding, else the
        encoding's default (non-strict only)

    Raises:
        ConfigurationError: On an unknown encoding, or (strict) on an
            unknown dialect or one whose level exceeds the encoding's
    """
    family = parse_encoding(encoding)
    if requested is None or requested == "":
        return default_eol_match(family)
    if not isinstance(requested, (str, EolMatch)):
        raise ConfigurationError(
            "eolMatch option must be a string",
            config_key="eol_match",
        )

    try:
        dialect = parse_eol_match(requested)
    except ConfigurationError:
        if strict:
            raise ConfigurationError(
                f"Invalid EOL match type for {family.value} encoding: {requested}",
                config_key="eol_match",
            ) from None
        return default_eol_match(family)

    if eol_match_level(dialect) > encoding_match_level(family):
        if strict:
            raise ConfigurationError(
                f"Invalid EOL match type for {family.value} encoding: {requested}",
                config_key="eol_match",
            )
        return default_eol_match(family)

    return dialect


def encodings() -> list[str]:
    """List the supported encoding family names."""
    return [encoding.value for encoding in Encoding]


def eol_matches(encoding: "str | Encoding") -> list[str]:
    """
    List the dialects legal for an encoding, by ascending match level.

    Raises:
        ConfigurationError: If the encoding is not supported
    """
    level = encoding_match_level(parse_encoding(encoding))
    return [
        dialect.value
        for dialect in EolMatch
        if eol_match_level(dialect) <= level
    ]
