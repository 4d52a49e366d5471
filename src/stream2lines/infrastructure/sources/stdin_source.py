"""
Stdin source adapter for stream2lines.

Provides streaming input from standard input for piped data.
"""

import asyncio
import sys

from stream2lines.core.limits import DEFAULT_HIGH_WATER_MARK
from stream2lines.infrastructure.sources.base import SelectableStreamSource

__all__ = ["StdinStreamSource"]


class StdinStreamSource(SelectableStreamSource):
    """
    Streaming source adapter for stdin.

    Reads piped input as it arrives without buffering the entire input;
    input redirected from a regular file is read on demand. Standard input
    is shared with the rest of the process, so a reader never destroys it,
    and the descriptor is only non-blocking while a reader waits on it.

    Example:
        # cat huge.log | stream2lines split -
        source = StdinStreamSource()
        async for line in create_line_reader(source):
            process(line)
    """

    def __init__(
        self,
        fileno: int | None = None,
        high_water_mark: int = DEFAULT_HIGH_WATER_MARK,
        loop: asyncio.AbstractEventLoop | None = None,
    ):
        """
        Initialize stdin stream source.

        Args:
            fileno: Descriptor to read (default: sys.stdin)
            high_water_mark: Bytes read at once (default: 16 KiB)
            loop: Event loop for signals (default: running loop)
        """
        if fileno is None:
            fileno = sys.stdin.fileno()
        super().__init__(fileno, high_water_mark, False, loop)
