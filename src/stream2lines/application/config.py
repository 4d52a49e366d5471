"""
Reader configuration.

EngineConfig is fixed once a reader is built. Build it with
EngineConfig.from_options() to get option validation and defaults.
"""

import logging
from dataclasses import dataclass
from typing import Any

from stream2lines.core.exceptions import ConfigurationError
from stream2lines.core.limits import (
    DEFAULT_MAX_LINE_LENGTH,
    validate_auto_destroy,
    validate_max_line_length,
)
from stream2lines.core.models import Encoding, EolMatch
from stream2lines.domain.eol import (
    encoding_match_level,
    eol_match_level,
    parse_encoding,
    resolve_eol_match,
)

__all__ = ["EngineConfig"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EngineConfig:
    """
    Options of one line reader.

    Attributes:
        encoding: Encoding family of the source data
        eol_match: Dialect used to find line ends
        max_line_length: Longest accepted line content; 0 for unlimited
        auto_destroy_source: Destroy the source when the reader closes
    """
    encoding: Encoding = Encoding.UTF8
    eol_match: EolMatch = EolMatch.ALL
    max_line_length: int = DEFAULT_MAX_LINE_LENGTH
    auto_destroy_source: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.encoding, Encoding):
            raise ConfigurationError(
                f"Encoding not valid here: {self.encoding}",
                config_key="encoding",
            )
        if not isinstance(self.eol_match, EolMatch):
            raise ConfigurationError(
                f"Invalid EOL match type: {self.eol_match}",
                config_key="eol_match",
            )
        if eol_match_level(self.eol_match) > encoding_match_level(self.encoding):
            raise ConfigurationError(
                f"Invalid EOL match type for {self.encoding.value} encoding: "
                f"{self.eol_match.value}",
                config_key="eol_match",
            )
        validate_max_line_length(self.max_line_length)
        validate_auto_destroy(self.auto_destroy_source)

    @classmethod
    def from_options(
        cls,
        source: Any = None,
        *,
        encoding: "str | Encoding" = Encoding.UTF8,
        eol_match: "str | EolMatch | None" = None,
        max_line_length: int = DEFAULT_MAX_LINE_LENGTH,
        auto_destroy_source: bool = False,
    ) -> "EngineConfig":
        """
        Validate reader options and fill in defaults.

        Args:
            source: Source the reader will wrap, consulted for auto_destroy_source
            encoding: Encoding family name (default: utf8)
            eol_match: Dialect name or alias (default: the encoding's default)
            max_line_length: Non-negative int; 0 means unlimited (default: 4096)
            auto_destroy_source: Destroy the source on close (default: False)

        Returns:
            A validated EngineConfig

        Raises:
            ConfigurationError: If any option is invalid
        """
        family = parse_encoding(encoding)
        dialect = resolve_eol_match(family, eol_match, strict=True)
        max_length = validate_max_line_length(max_line_length)
        destroy = validate_auto_destroy(auto_destroy_source)

        # Only sources that declare themselves destroyable get torn down
        if destroy and not getattr(source, "destroyable", False):
            logger.debug(
                "auto_destroy_source ignored for %s", type(source).__name__
            )
            destroy = False

        return cls(
            encoding=family,
            eol_match=dialect,
            max_line_length=max_length,
            auto_destroy_source=destroy,
        )
