"""
In-memory pass-through source.
"""

from stream2lines.infrastructure.sources.base import BufferedPullSource

__all__ = ["MemoryStreamSource"]


class MemoryStreamSource(BufferedPullSource):
    """
    Source fed by the program itself.

    Whatever is written comes out of read(), in order. Useful for data
    that is already in memory, for bridging callback-style producers,
    and in tests.

    Example:
        source = MemoryStreamSource()
        reader = create_line_reader(source, eol_match="lf")
        source.write("foo\\nbar\\n")
        source.end()
    """

    def write(self, data: bytes | str, encoding: str = "utf-8") -> None:
        """Deliver data; text is encoded with encoding first."""
        if isinstance(data, str):
            data = data.encode(encoding)
        self.push(data)

    def end(self, data: bytes | str | None = None, encoding: str = "utf-8") -> None:
        """Deliver optional final data, then mark the end."""
        if data:
            self.write(data, encoding)
        self.push(None)

    def fail(self, exc: BaseException) -> None:
        """Report a producer failure; the source is destroyed."""
        self.destroy(exc)
