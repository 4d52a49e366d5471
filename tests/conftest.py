"""
Pytest fixtures for stream2lines tests.
"""

import asyncio

import pytest

from stream2lines.application import LineReader
from stream2lines.infrastructure import MemoryStreamSource


class ReaderRecorder:
    """
    Consumes a reader from its "readable" event and records what happens.

    Attributes:
        lines: Lines returned by read()
        counts: line_count() after each line
        events: "end", "error" and "close" in the order they were raised
        errors: Error objects raised through "error"
    """

    def __init__(self, reader: LineReader, close_after: int | None = None):
        self.reader = reader
        self.close_after = close_after
        self.lines: list[str] = []
        self.counts: list[int] = []
        self.events: list[str] = []
        self.errors: list[Exception] = []

        reader.on("readable", self._on_readable)
        reader.on("end", lambda: self.events.append("end"))
        reader.on("close", lambda: self.events.append("close"))
        reader.on("error", self._on_error)

    def _on_readable(self) -> None:
        while (line := self.reader.read()) is not None:
            self.lines.append(line)
            self.counts.append(self.reader.line_count())
            if self.close_after is not None and len(self.lines) >= self.close_after:
                self.reader.close()
                break

    def _on_error(self, exc: Exception) -> None:
        self.events.append("error")
        self.errors.append(exc)

    async def finished(self, timeout: float = 2.0) -> None:
        await asyncio.wait_for(self.reader.wait_closed(), timeout)


@pytest.fixture
def memory_source() -> MemoryStreamSource:
    """An empty in-memory source."""
    return MemoryStreamSource()


@pytest.fixture
def sample_lines() -> list[str]:
    """Plain ASCII lines without terminators."""
    return [
        "2026-01-27 10:15:32 INFO Starting application",
        "ERROR: Something went wrong!",
        "",
        "[2026/01/27 10:15:34] WARN - Deprecated API called",
        "Application initialized at 10:15:35",
    ]


@pytest.fixture
def temp_text_file(tmp_path, sample_lines):
    """Create a temporary LF-terminated file with sample content."""
    path = tmp_path / "sample.txt"
    path.write_bytes(("\n".join(sample_lines) + "\n").encode("ascii"))
    return path


@pytest.fixture
def settle():
    """Coroutine function that lets the event loop run every ready callback."""
    async def _settle(rounds: int = 10) -> None:
        for _ in range(rounds):
            await asyncio.sleep(0)
    return _settle


@pytest.fixture
def feed(settle):
    """
    Coroutine function writing data to a source in pieces.

    Piece sizes cycle through sizes until the data is used up; the loop
    runs between pieces.
    """
    async def _feed(source: MemoryStreamSource, data: bytes, sizes: list[int]) -> None:
        pos = 0
        i = 0
        while pos < len(data):
            size = sizes[i % len(sizes)]
            source.write(data[pos:pos + size])
            pos += size
            i += 1
            await settle()
    return _feed


@pytest.fixture
def reader_recorder():
    """Factory recording what a reader emits: reader_recorder(reader, close_after=None)."""
    return ReaderRecorder
