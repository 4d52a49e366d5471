"""
Infrastructure layer for stream2lines.

Contains adapters that implement the ports defined in the application layer.
These connect the line reader to external systems (files, sockets, pipes).
"""

from stream2lines.infrastructure.sources import (
    BufferedPullSource,
    SelectableStreamSource,
    MemoryStreamSource,
    FileStreamSource,
    SocketStreamSource,
    StdinStreamSource,
)

__all__ = [
    # Sources
    "BufferedPullSource",
    "SelectableStreamSource",
    "MemoryStreamSource",
    "FileStreamSource",
    "SocketStreamSource",
    "StdinStreamSource",
]
