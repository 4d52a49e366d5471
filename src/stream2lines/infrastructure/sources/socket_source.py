"""
Socket source adapter for stream2lines.
"""

import asyncio
import socket

from stream2lines.core.limits import DEFAULT_HIGH_WATER_MARK
from stream2lines.infrastructure.sources.base import SelectableStreamSource

__all__ = ["SocketStreamSource"]


class SocketStreamSource(SelectableStreamSource):
    """
    Connected stream socket as a pull source.

    The socket is switched to non-blocking mode and watched by the event
    loop. destroy() closes it.

    Example:
        sock = socket.create_connection(("logs.internal", 5140))
        reader = create_line_reader(
            SocketStreamSource(sock), auto_destroy_source=True
        )
    """

    destroyable = True

    def __init__(
        self,
        sock: socket.socket,
        high_water_mark: int = DEFAULT_HIGH_WATER_MARK,
        loop: asyncio.AbstractEventLoop | None = None,
    ):
        sock.setblocking(False)
        super().__init__(sock.fileno(), high_water_mark, False, loop)
        self.socket = sock

    def _recv(self) -> bytes:
        return self.socket.recv(self.high_water_mark)

    def _release(self) -> None:
        super()._release()
        self.socket.close()
