"""
Application layer for stream2lines.

Contains the line reader, the source lifecycle controller that drives it,
and the port a source must implement.
"""

from stream2lines.application.config import EngineConfig
from stream2lines.application.line_reader import LineReader, create_line_reader
from stream2lines.application.lifecycle import SourceLifecycleController
from stream2lines.application.ports import ChunkSink, PullSourcePort

__all__ = [
    "EngineConfig",
    "LineReader",
    "create_line_reader",
    "SourceLifecycleController",
    "ChunkSink",
    "PullSourcePort",
]
