"""
CLI command implementations.

This module wires the infrastructure sources to the line reader and runs
the reader on an asyncio event loop.
"""

import asyncio
from pathlib import Path
from typing import Any, Callable

from rich.console import Console

from stream2lines.application import LineReader, create_line_reader
from stream2lines.core.exceptions import Stream2LinesError
from stream2lines.infrastructure import (
    BufferedPullSource,
    FileStreamSource,
    StdinStreamSource,
)
from stream2lines.cli.output import render_lines

__all__ = ["create_source", "split_command", "count_command"]


def create_source(file_path: str | None) -> BufferedPullSource:
    """
    Create appropriate source adapter for the input.

    Args:
        file_path: Path to file, or None / "-" for stdin

    Returns:
        Source adapter instance
    """
    if file_path is None or file_path == "-":
        return StdinStreamSource()

    path = Path(file_path)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {file_path}")
    return FileStreamSource(path)


async def read_source(
    file_path: str | None,
    options: dict[str, Any],
    on_line: Callable[[int, str], None],
) -> int:
    """
    Read every line of a file or stdin.

    Args:
        file_path: Path to file, or None / "-" for stdin
        options: Reader options
        on_line: Called with (line_number, text) for each line

    Returns:
        Number of lines read
    """
    source = create_source(file_path)
    try:
        reader: LineReader = create_line_reader(source, **options)
    except Stream2LinesError:
        source.destroy()
        raise

    async for line in reader:
        on_line(reader.line_count(), line)
    await reader.wait_closed()
    return reader.line_count()


def _reader_options(
    encoding: str,
    eol: str | None,
    max_line_length: int,
) -> dict[str, Any]:
    return {
        "encoding": encoding,
        "eol_match": eol,
        "max_line_length": max_line_length,
        "auto_destroy_source": True,
    }


def split_command(
    file_path: str | None,
    encoding: str,
    eol: str | None,
    max_line_length: int,
    output_format: str,
    number: bool,
    quiet: bool,
    console: Console,
    error_console: Console,
) -> int:
    """
    Execute the split command.

    Returns:
        Exit code (0 = success, 1 = error)
    """
    lines: list[tuple[int, str]] = []

    def collect(line_number: int, text: str) -> None:
        lines.append((line_number, text))

    options = _reader_options(encoding, eol, max_line_length)
    try:
        asyncio.run(read_source(file_path, options, collect))
    except (Stream2LinesError, OSError) as e:
        # Show what was read before the failure
        if lines:
            render_lines(lines, output_format, console, number)
        error_console.print(f"[red]Error:[/red] {e}")
        return 1

    title = None if quiet else Path(file_path or "-").name
    render_lines(lines, output_format, console, number, title=title)
    return 0


def count_command(
    file_path: str | None,
    encoding: str,
    eol: str | None,
    max_line_length: int,
    console: Console,
    error_console: Console,
) -> int:
    """
    Execute the count command.

    Returns:
        Exit code (0 = success, 1 = error)
    """
    options = _reader_options(encoding, eol, max_line_length)
    try:
        total = asyncio.run(read_source(file_path, options, lambda n, text: None))
    except (Stream2LinesError, OSError) as e:
        error_console.print(f"[red]Error:[/red] {e}")
        return 1

    console.print(str(total), highlight=False)
    return 0
