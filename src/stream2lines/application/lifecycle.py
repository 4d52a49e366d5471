"""
Source lifecycle controller.

Owns the subscriptions to a pull source and the state machine that
decides what each source signal means for the reader:

    idle -> awaiting-chunk          subscribed, waiting for readiness
    awaiting-chunk -> data-buffered a chunk was pulled into the backlog
    awaiting-chunk -> ending        the pull found the end, backlog empty
    * -> closing -> closed          teardown (consumer close, end, error)

Source signals are queued and handled one at a time, so a signal raised
while another is being handled (for example from a consumer callback
that closes the reader) waits its turn instead of nesting.
"""

import logging
from collections import deque

from stream2lines.application.ports import ChunkSink, PullSourcePort
from stream2lines.core.models import ReaderState, SignalKind, SourceSignal

__all__ = ["SourceLifecycleController"]

logger = logging.getLogger(__name__)


class SourceLifecycleController:
    """
    Drives one pull source on behalf of one line reader.

    Example:
        controller = SourceLifecycleController(source, reader, codec="utf-8")
        controller.attach()
        ...
        controller.request_chunk()   # when the backlog cannot satisfy a read
        ...
        deferred = controller.release(unconsumed_text, errored=False)
    """

    def __init__(
        self,
        source: PullSourcePort,
        sink: ChunkSink,
        codec: str,
        auto_destroy: bool = False,
    ):
        self.source = source
        self._sink = sink
        self._codec = codec
        self._auto_destroy = auto_destroy
        self._state = ReaderState.IDLE
        self._inbox: deque[SourceSignal] = deque()
        self._dispatching = False
        self._awaiting_readable = False
        self._awaiting_close = False
        self._source_ended = False

    @property
    def state(self) -> ReaderState:
        return self._state

    @property
    def source_ended(self) -> bool:
        return self._source_ended

    def attach(self) -> None:
        """Prepare the source for pull-based reading and subscribe to it."""
        self.source.pause()
        self.source.set_encoding(self._codec)
        self.source.once("error", self._on_error)
        self.source.once("close", self._on_close)
        self.request_chunk()

    def request_chunk(self) -> None:
        """Register interest in the source's next readiness signal."""
        if self._state.is_terminal or self._source_ended:
            return
        if self._awaiting_readable:
            return
        self._awaiting_readable = True
        self._transition(ReaderState.AWAITING_CHUNK)
        self.source.once("readable", self._on_readable)

    def mark_ending(self) -> None:
        """The final line has been handed out; only the end notice remains."""
        if not self._state.is_terminal:
            self._transition(ReaderState.ENDING)

    def release(self, backlog: str, errored: bool = False) -> bool:
        """
        Detach from the source.

        With auto-destroy a destroyable source is destroyed. Otherwise unconsumed
        text goes back to the source, unless it errored or has already
        closed.

        Args:
            backlog: Text received but never emitted as lines
            errored: The source signalled an error

        Returns:
            True if the reader must wait for the source's close signal
            before announcing its own close
        """
        if self._state.is_terminal:
            return False
        self._transition(ReaderState.CLOSING)

        self.source.remove_listener("readable", self._on_readable)
        self._awaiting_readable = False
        self.source.remove_listener("error", self._on_error)

        destroy = getattr(self.source, "destroy", None)
        if (
            self._auto_destroy
            and getattr(self.source, "destroyable", False)
            and callable(destroy)
            and not self.source.closed
        ):
            logger.debug("Destroying %s", type(self.source).__name__)
            self._awaiting_close = True
            destroy()
            # a source may close synchronously; its signal is then queued
            return self._state is not ReaderState.CLOSED

        self.source.remove_listener("close", self._on_close)
        if backlog and not errored and not self.source.closed:
            logger.debug("Returning %d unconsumed characters to source", len(backlog))
            self.source.unshift(backlog)
        self._transition(ReaderState.CLOSED)
        return False

    # -- source listeners -------------------------------------------------

    def _on_readable(self) -> None:
        self._enqueue(SourceSignal(SignalKind.READABLE))

    def _on_error(self, exc: BaseException) -> None:
        self._enqueue(SourceSignal(SignalKind.ERROR, exc))

    def _on_close(self) -> None:
        self._enqueue(SourceSignal(SignalKind.CLOSE))

    # -- dispatch ---------------------------------------------------------

    def _enqueue(self, signal: SourceSignal) -> None:
        self._inbox.append(signal)
        if self._dispatching:
            return
        self._dispatching = True
        try:
            while self._inbox:
                self._dispatch(self._inbox.popleft())
        finally:
            self._dispatching = False

    def _dispatch(self, signal: SourceSignal) -> None:
        match signal.kind:
            case SignalKind.READABLE:
                self._handle_readable()
            case SignalKind.ERROR:
                self._handle_error(signal.payload)
            case SignalKind.CLOSE:
                self._handle_close()

    def _handle_readable(self) -> None:
        self._awaiting_readable = False
        if self._state.is_terminal:
            logger.debug("Dropping readiness signal while %s", self._state.value)
            return
        if self._source_ended:
            return

        chunk = self.source.read()
        if chunk is not None:
            self._transition(ReaderState.DATA_BUFFERED)
            self._sink.accept_chunk(chunk)
            return

        if not self.source.ended:
            # spurious readiness
            self.request_chunk()
            return

        self._source_ended = True
        if self._sink.has_backlog():
            self._transition(ReaderState.DATA_BUFFERED)
        else:
            self._transition(ReaderState.ENDING)
        self._sink.source_ended()

    def _handle_error(self, exc: BaseException) -> None:
        if self._state.is_terminal:
            logger.debug("Dropping source error while %s: %s", self._state.value, exc)
            return
        self._sink.source_failed(exc)

    def _handle_close(self) -> None:
        if self._state is ReaderState.CLOSED:
            return
        if self._state is ReaderState.CLOSING:
            if self._awaiting_close:
                self._awaiting_close = False
                self._transition(ReaderState.CLOSED)
                self._sink.source_closed()
            return
        if self._source_ended:
            # closed itself after the end; the backlog can still be drained
            logger.debug("Source closed after end")
            return
        logger.debug("Source closed before end")
        self._sink.source_closed()

    def _transition(self, state: ReaderState) -> None:
        if state is not self._state:
            logger.debug("Reader state %s -> %s", self._state.value, state.value)
            self._state = state
