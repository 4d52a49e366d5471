"""
Source adapters for stream2lines.

These implement the PullSourcePort interface for various inputs.
"""

from stream2lines.infrastructure.sources.base import (
    BufferedPullSource,
    SelectableStreamSource,
)
from stream2lines.infrastructure.sources.memory_source import MemoryStreamSource
from stream2lines.infrastructure.sources.file_source import FileStreamSource
from stream2lines.infrastructure.sources.socket_source import SocketStreamSource
from stream2lines.infrastructure.sources.stdin_source import StdinStreamSource

__all__ = [
    "BufferedPullSource",
    "SelectableStreamSource",
    "MemoryStreamSource",
    "FileStreamSource",
    "SocketStreamSource",
    "StdinStreamSource",
]
