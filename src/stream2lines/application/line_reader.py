"""
Line segmentation engine.

LineReader wraps one pull source and hands out its data one line at a
time. It emits:

    readable  the backlog may now satisfy read()
    end       the source is exhausted and every line was returned (once)
    error     a LineTooLongError or SourceError (fatal)
    close     the reader is torn down (once, always last)

Typical use from a callback:

    reader = create_line_reader(source, encoding="ascii", eol_match="lf")

    def on_readable():
        while (line := reader.read()) is not None:
            handle(line)

    reader.on("readable", on_readable)

or from a coroutine:

    async for line in create_line_reader(source):
        handle(line)
"""

import asyncio
import logging
from typing import AsyncIterator

from stream2lines.application.config import EngineConfig
from stream2lines.application.lifecycle import SourceLifecycleController
from stream2lines.application.ports import PullSourcePort
from stream2lines.core.events import EventEmitter
from stream2lines.core.exceptions import (
    ConfigurationError,
    LineTooLongError,
    SourceError,
    Stream2LinesError,
)
from stream2lines.core.limits import (
    DEFAULT_MAX_LINE_LENGTH,
    MAX_SOURCE_BUFFER,
    check_line_length,
    validate_source_buffering,
)
from stream2lines.core.models import Encoding, EolMatch, ReaderState
from stream2lines.domain.eol import codec_for
from stream2lines.domain.scanner import scan

__all__ = ["LineReader", "create_line_reader"]

logger = logging.getLogger(__name__)


class LineReader(EventEmitter):
    """
    Pull-based line reader over a PullSourcePort.

    Attributes:
        config: The validated EngineConfig
    """

    def __init__(
        self,
        source: PullSourcePort,
        config: EngineConfig | None = None,
        loop: asyncio.AbstractEventLoop | None = None,
        buffer_limit: int = MAX_SOURCE_BUFFER,
    ):
        """
        Bind a reader to its source.

        Args:
            source: Pull source to read from
            config: Reader options (default: EngineConfig())
            loop: Event loop for deferred notifications (default: running loop)
            buffer_limit: Largest source buffering accepted

        Raises:
            ConfigurationError: If the source is unusable
        """
        if source is None or not isinstance(source, PullSourcePort):
            raise ConfigurationError("Must give a pull source", config_key="source")
        validate_source_buffering(source, buffer_limit)

        super().__init__(loop)
        self.config = config if config is not None else EngineConfig()

        self._backlog = ""
        self._offset = 0
        self._line_count = 0
        self._source_ended = False
        self._source_errored = False
        self._closing = False
        self._end_scheduled = False
        self._end_emitted = False
        self._close_emitted = False

        self._controller = SourceLifecycleController(
            source,
            self,
            codec=codec_for(self.config.encoding),
            auto_destroy=self.config.auto_destroy_source,
        )
        self._controller.attach()

    # -- public API -------------------------------------------------------

    @property
    def source(self) -> PullSourcePort:
        return self._controller.source

    @property
    def state(self) -> ReaderState:
        return self._controller.state

    @property
    def closed(self) -> bool:
        """True once close has been announced."""
        return self._close_emitted

    def line_count(self) -> int:
        """Number of lines returned by read() so far."""
        return self._line_count

    def read(self) -> str | None:
        """
        Return the next complete line, without its terminator.

        Returns None when no complete line is available yet (wait for
        "readable"), or when the reader is closing or closed. Errors are
        reported through "error", never raised from here.
        """
        if self._closing:
            return None

        if not self.has_backlog():
            if not self._source_ended:
                self._controller.request_chunk()
            return None

        found = scan(self._backlog, self.config.eol_match, self._offset)

        measured = found.content
        if not found.terminator and measured.endswith("\r") and not self._source_ended:
            # the \r may be the first half of a \r\n still in transit
            measured = measured[:-1]
        try:
            check_line_length(
                measured, self.config.max_line_length, self._line_count + 1
            )
        except LineTooLongError as exc:
            self._fail(exc)
            return None

        consumed = self._offset + len(found.whole_match)
        if consumed >= len(self._backlog):
            if self._source_ended:
                self._clear_backlog()
                self._line_count += 1
                self._end_scheduled = True
                self._controller.mark_ending()
                self.call_soon(self._notify_end)
                return found.content
            if found.ends_ambiguously:
                # the next chunk may complete this line or its terminator
                self._controller.request_chunk()
                return None
            self._clear_backlog()
        else:
            self._offset = consumed

        self._line_count += 1
        return found.content

    def close(self) -> None:
        """
        Stop reading and detach from the source. Safe to call repeatedly.

        Unconsumed text is handed back to the source unless the reader was
        configured to destroy it.
        """
        if self._closing:
            return
        if self._end_scheduled:
            # the final line is already out; end is announced before close
            self._end_scheduled = False
            self._emit_end()
            if self._closing:
                return

        self._closing = True
        remaining = self._backlog[self._offset:]
        self._clear_backlog()

        deferred = self._controller.release(remaining, errored=self._source_errored)
        if not deferred:
            self._emit_close()

    async def wait_closed(self) -> None:
        """Wait until the reader has announced close."""
        if self._close_emitted:
            return
        done = self.loop.create_future()

        def on_close() -> None:
            if not done.done():
                done.set_result(None)

        self.once("close", on_close)
        await done

    def __aiter__(self) -> AsyncIterator[str]:
        return self._iterate()

    async def _iterate(self) -> AsyncIterator[str]:
        wakeup = asyncio.Event()
        errors: list[Stream2LinesError] = []

        def wake(*_args) -> None:
            wakeup.set()

        def on_error(exc: Stream2LinesError) -> None:
            errors.append(exc)
            wakeup.set()

        self.on("readable", wake)
        self.on("end", wake)
        self.on("close", wake)
        self.on("error", on_error)
        try:
            while True:
                line = self.read()
                if line is not None:
                    yield line
                    continue
                if errors:
                    raise errors[0]
                if self._close_emitted:
                    return
                wakeup.clear()
                await wakeup.wait()
        finally:
            self.remove_listener("readable", wake)
            self.remove_listener("end", wake)
            self.remove_listener("close", wake)
            self.remove_listener("error", on_error)

    # -- ChunkSink --------------------------------------------------------

    def has_backlog(self) -> bool:
        return self._offset < len(self._backlog)

    def accept_chunk(self, chunk: str) -> None:
        if self._offset:
            self._backlog = self._backlog[self._offset:] + chunk
            self._offset = 0
        else:
            self._backlog += chunk
        self.emit("readable")

    def source_ended(self) -> None:
        self._source_ended = True
        if self.has_backlog():
            self.emit("readable")
        else:
            self._notify_end()

    def source_failed(self, exc: BaseException) -> None:
        self._source_errored = True
        self._fail(SourceError.from_exception(exc))

    def source_closed(self) -> None:
        if self._closing:
            self._emit_close()
        else:
            self.close()

    # -- internals --------------------------------------------------------

    def _clear_backlog(self) -> None:
        self._backlog = ""
        self._offset = 0

    def _notify_end(self) -> None:
        if self._closing or self._end_emitted:
            return
        self._end_scheduled = False
        self._emit_end()
        self.close()

    def _emit_end(self) -> None:
        if self._end_emitted:
            return
        self._end_emitted = True
        self.emit("end")

    def _emit_close(self) -> None:
        if self._close_emitted:
            return
        self._close_emitted = True
        self.emit("close")

    def _fail(self, exc: Stream2LinesError) -> None:
        if self.listener_count("error"):
            self.emit("error", exc)
        else:
            logger.error("Line reader failed: %s", exc)
        self.close()


def create_line_reader(
    source: PullSourcePort,
    *,
    encoding: "str | Encoding" = Encoding.UTF8,
    eol_match: "str | EolMatch | None" = None,
    max_line_length: int = DEFAULT_MAX_LINE_LENGTH,
    auto_destroy_source: bool = False,
    loop: asyncio.AbstractEventLoop | None = None,
) -> LineReader:
    """
    Validate options and build a LineReader over source.

    Args:
        source: Pull source to read from
        encoding: Encoding family (default: utf8)
        eol_match: EOL dialect or alias (default: the encoding's default)
        max_line_length: Longest line content; 0 for unlimited (default: 4096)
        auto_destroy_source: Destroy the source on close; ignored for
            sources that are not destroyable (default: False)
        loop: Event loop for deferred notifications

    Returns:
        A reader subscribed to source

    Raises:
        ConfigurationError: On an unusable source or invalid option
    """
    if source is None or not isinstance(source, PullSourcePort):
        raise ConfigurationError("Must give a pull source", config_key="source")
    validate_source_buffering(source)

    config = EngineConfig.from_options(
        source,
        encoding=encoding,
        eol_match=eol_match,
        max_line_length=max_line_length,
        auto_destroy_source=auto_destroy_source,
    )
    return LineReader(source, config, loop=loop)
