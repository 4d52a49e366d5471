"""
stream2lines - Read any chunked byte source one line at a time.

Handles the end-of-line conventions of several encodings, terminators split
across chunks, a maximum line length, and clean hand-back or teardown of
the source when reading stops.

Usage:
    from stream2lines import create_line_reader, MemoryStreamSource

    source = MemoryStreamSource()
    reader = create_line_reader(source, encoding="ascii", eol_match="lf")

    def on_readable():
        while (line := reader.read()) is not None:
            print(reader.line_count(), line)

    reader.on("readable", on_readable)
    source.write("foo\\nbar\\n")
    source.end()

    # From a coroutine
    async for line in open_file("access.log", encoding="latin1"):
        print(line)

    # Introspection
    encodings()            # ['ascii', 'binary', 'latin1', 'utf8', ...]
    eol_matches("latin1")  # ['crlf', 'lf', 'basic', '7bit', 'iso8859']
"""

__version__ = "0.3.0"

from pathlib import Path

from stream2lines.core.models import Encoding, EolMatch, LineMatch, ReaderState
from stream2lines.core.exceptions import (
    Stream2LinesError,
    ConfigurationError,
    LineTooLongError,
    SourceError,
)
from stream2lines.domain.eol import encodings, eol_matches
from stream2lines.domain.scanner import scan
from stream2lines.application import (
    EngineConfig,
    LineReader,
    PullSourcePort,
    create_line_reader,
)

# Infrastructure adapters
from stream2lines.infrastructure import (
    BufferedPullSource,
    MemoryStreamSource,
    FileStreamSource,
    SocketStreamSource,
    StdinStreamSource,
)

__all__ = [
    # Version
    "__version__",
    # Core models
    "Encoding",
    "EolMatch",
    "LineMatch",
    "ReaderState",
    # Exceptions
    "Stream2LinesError",
    "ConfigurationError",
    "LineTooLongError",
    "SourceError",
    # Reader
    "EngineConfig",
    "LineReader",
    "PullSourcePort",
    "create_line_reader",
    "scan",
    # Sources
    "BufferedPullSource",
    "MemoryStreamSource",
    "FileStreamSource",
    "SocketStreamSource",
    "StdinStreamSource",
    # Convenience functions
    "encodings",
    "eol_matches",
    "open_file",
    "read_file",
]


def open_file(file_path: str | Path, **options) -> LineReader:
    """
    Open a file and wrap it in a line reader.

    Args:
        file_path: Path to the file
        **options: Reader options (encoding, eol_match, max_line_length,
            auto_destroy_source)

    Returns:
        A LineReader over a FileStreamSource

    Example:
        async for line in open_file("app.log", eol_match="lf"):
            print(line)
    """
    # Validate before the file is opened
    config = EngineConfig.from_options(FileStreamSource, **options)
    return LineReader(FileStreamSource(file_path), config)


async def read_file(file_path: str | Path, **options) -> list[str]:
    """
    Read every line of a file.

    Args:
        file_path: Path to the file
        **options: Reader options, as for open_file()

    Returns:
        The lines, without terminators

    Raises:
        LineTooLongError: If a line exceeds max_line_length
        SourceError: If reading the file fails
    """
    return [line async for line in open_file(file_path, **options)]
