"""
Shared machinery for pull sources.

BufferedPullSource keeps a queue of delivered chunks, decodes them once an
encoding is set, and signals "readable" on the event loop whenever a
subscriber can make progress with read(). Subclasses deliver data by
calling push(), either on demand from _fill() (files) or when the loop
reports their descriptor readable (sockets, pipes).
"""

import asyncio
import codecs
import logging
import os
import stat
from collections import deque

from stream2lines.core.events import EventEmitter
from stream2lines.core.limits import DEFAULT_HIGH_WATER_MARK

__all__ = ["BufferedPullSource", "SelectableStreamSource"]

logger = logging.getLogger(__name__)


class BufferedPullSource(EventEmitter):
    """
    Readable source that only hands out data when read() is called.

    Events:
        readable: read() will return a chunk, or None at end of data
        end: read() found the end of data
        error: the source failed (followed by close)
        close: the underlying resource was released

    Attributes:
        high_water_mark: Preferred amount of data buffered at once
        auto_close: Release the resource once the end has been read
        destroyable: Whether a reader may destroy this source on close
    """

    destroyable = False

    def __init__(
        self,
        high_water_mark: int = DEFAULT_HIGH_WATER_MARK,
        auto_close: bool = False,
        loop: asyncio.AbstractEventLoop | None = None,
    ):
        super().__init__(loop)
        self.high_water_mark = high_water_mark
        self.auto_close = auto_close
        self._chunks: deque[bytes | str] = deque()
        self._buffered = 0
        self._codec: str | None = None
        self._decoder: codecs.IncrementalDecoder | None = None
        self._paused = False
        self._ended = False
        self._end_emitted = False
        self._closed = False
        self._destroyed = False
        self._readable_scheduled = False

    @property
    def buffered_length(self) -> int:
        return self._buffered

    @property
    def ended(self) -> bool:
        return self._ended

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def destroyed(self) -> bool:
        return self._destroyed

    @property
    def encoding(self) -> str | None:
        return self._codec

    def pause(self) -> "BufferedPullSource":
        self._paused = True
        return self

    def set_encoding(self, codec: str) -> "BufferedPullSource":
        """
        Decode delivered bytes with codec.

        Chunks already buffered as bytes are decoded immediately.
        Undecodable input is replaced, not raised. Setting the same codec
        again keeps any partial sequence the decoder holds.
        """
        if self._decoder is not None and codec == self._codec:
            return self
        self._codec = codec
        self._decoder = codecs.getincrementaldecoder(codec)(errors="replace")

        pending = [c for c in self._chunks if isinstance(c, bytes)]
        if pending:
            texts = [c for c in self._chunks if isinstance(c, str)]
            text = self._decoder.decode(b"".join(pending), final=self._ended)
            self._chunks.clear()
            self._chunks.extend(texts)
            if text:
                self._chunks.append(text)
            self._buffered = sum(len(c) for c in self._chunks)
        return self

    # -- consumer side ----------------------------------------------------

    def read(self) -> str | bytes | None:
        """
        Return everything buffered as one chunk.

        Returns:
            A chunk, or None when nothing is buffered (at end of data, or
            when no more data has arrived yet)
        """
        if self._destroyed:
            return None
        if not self._chunks and not self._ended:
            self._fill()
        if not self._chunks:
            if self._ended:
                self._finish_end()
            return None

        if self._decoder is not None:
            data = "".join(
                c if isinstance(c, str) else self._decoder.decode(c)
                for c in self._chunks
            )
        else:
            data = b"".join(
                c if isinstance(c, bytes) else c.encode("utf-8")
                for c in self._chunks
            )
        self._chunks.clear()
        self._buffered = 0
        return data

    def unshift(self, chunk: str | bytes) -> None:
        """Put chunk back in front of the buffer."""
        if not chunk or self._destroyed:
            return
        self._chunks.appendleft(chunk)
        self._buffered += len(chunk)
        self._schedule_readable()

    def destroy(self, exc: BaseException | None = None) -> None:
        """
        Release the resource and drop buffered data.

        Args:
            exc: Error to report before close
        """
        if self._destroyed:
            return
        self._destroyed = True
        self._chunks.clear()
        self._buffered = 0
        try:
            self._release()
        finally:
            self._closed = True
            if exc is not None:
                self.call_soon(self._emit_error, exc)
            self.call_soon(self.emit, "close")

    # -- producer side ----------------------------------------------------

    def push(self, chunk: bytes | None) -> None:
        """
        Deliver a chunk; None marks the end of data.

        Raises:
            ValueError: If data is pushed after the end
        """
        if self._destroyed:
            return
        if self._ended:
            raise ValueError("push after end of data")

        if chunk is None:
            self._ended = True
            if self._decoder is not None:
                tail = self._decoder.decode(b"", final=True)
                if tail:
                    self._chunks.append(tail)
                    self._buffered += len(tail)
            self._schedule_readable()
            return

        if not chunk:
            return
        if self._decoder is not None:
            text = self._decoder.decode(chunk)
            if not text:
                # partial multi-byte sequence, held by the decoder
                return
            self._chunks.append(text)
            self._buffered += len(text)
        else:
            self._chunks.append(chunk)
            self._buffered += len(chunk)
        self._schedule_readable()

    # -- hooks ------------------------------------------------------------

    def _fill(self) -> None:
        """Pull more data from the resource on demand, if it supports that."""

    def _can_fill(self) -> bool:
        return False

    def _release(self) -> None:
        """Close the underlying resource."""

    # -- internals --------------------------------------------------------

    def _listener_added(self, event: str) -> None:
        if event == "readable":
            self._schedule_readable()

    def _schedule_readable(self) -> None:
        if self._readable_scheduled or self._destroyed:
            return
        if not self.listener_count("readable"):
            return
        if not self._chunks and not self._ended and not self._can_fill():
            return
        self._readable_scheduled = True
        self.call_soon(self._emit_readable)

    def _emit_readable(self) -> None:
        if self._destroyed:
            self._readable_scheduled = False
            return
        if not self._chunks and not self._ended:
            self._fill()
        self._readable_scheduled = False
        if self._chunks or self._ended:
            self.emit("readable")

    def _emit_error(self, exc: BaseException) -> None:
        if not self.emit("error", exc):
            logger.warning("Unhandled %s error: %s", type(self).__name__, exc)

    def _finish_end(self) -> None:
        if self._end_emitted:
            return
        self._end_emitted = True
        self.call_soon(self.emit, "end")
        if self.auto_close:
            self.destroy()


class SelectableStreamSource(BufferedPullSource):
    """
    Source fed from a file descriptor.

    Pipes, sockets and terminals are watched by the event loop, in
    non-blocking mode and only while a subscriber waits for data. Reading
    stops while high_water_mark worth of data is buffered and resumes when
    read() drains the buffer. Regular files cannot be watched, so a
    descriptor that refers to one is read on demand instead.
    """

    def __init__(
        self,
        fileno: int,
        high_water_mark: int = DEFAULT_HIGH_WATER_MARK,
        auto_close: bool = False,
        loop: asyncio.AbstractEventLoop | None = None,
    ):
        super().__init__(high_water_mark, auto_close, loop)
        self._fileno = fileno
        self._watching = False
        self._pollable = not stat.S_ISREG(os.fstat(fileno).st_mode)
        self._was_blocking = os.get_blocking(fileno)

    @property
    def fileno(self) -> int | None:
        return None if self._closed else self._fileno

    @property
    def pollable(self) -> bool:
        """False when the descriptor is a regular file read on demand."""
        return self._pollable

    def read(self) -> str | bytes | None:
        data = super().read()
        if not self._ended and self.listener_count("readable"):
            self._watch()
        return data

    def remove_listener(self, event: str, listener) -> "SelectableStreamSource":
        super().remove_listener(event, listener)
        if event == "readable" and not self.listener_count("readable"):
            # the last subscriber detached
            self._unwatch()
        return self

    def _recv(self) -> bytes:
        return os.read(self._fileno, self.high_water_mark)

    def _can_fill(self) -> bool:
        return not self._pollable and not self._ended and not self._destroyed

    def _fill(self) -> None:
        if not self._can_fill():
            return
        try:
            data = self._recv()
        except OSError as exc:
            self.destroy(exc)
            return
        self.push(data if data else None)

    def _listener_added(self, event: str) -> None:
        if event == "readable":
            self._watch()
        super()._listener_added(event)

    def _watch(self) -> None:
        if self._watching or not self._pollable:
            return
        if self._ended or self._destroyed:
            return
        if self._buffered >= self.high_water_mark:
            return
        self._watching = True
        os.set_blocking(self._fileno, False)
        self.loop.add_reader(self._fileno, self._on_fd_readable)

    def _unwatch(self) -> None:
        if not self._watching:
            return
        self._watching = False
        self.loop.remove_reader(self._fileno)
        os.set_blocking(self._fileno, self._was_blocking)

    def _on_fd_readable(self) -> None:
        try:
            data = self._recv()
        except (BlockingIOError, InterruptedError):
            return
        except OSError as exc:
            self._unwatch()
            self.destroy(exc)
            return

        if not data:
            self._unwatch()
            self.push(None)
            return
        self.push(data)
        if self._buffered >= self.high_water_mark:
            self._unwatch()

    def _release(self) -> None:
        self._unwatch()
