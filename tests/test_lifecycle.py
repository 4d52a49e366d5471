"""
Tests for the source lifecycle controller.
"""

import pytest

from stream2lines.application.lifecycle import SourceLifecycleController
from stream2lines.core.models import ReaderState
from stream2lines.infrastructure import FileStreamSource


class RecordingSink:
    """ChunkSink that records what the controller tells it."""

    def __init__(self):
        self.chunks = []
        self.calls = []
        self.backlog = False

    def accept_chunk(self, chunk):
        self.chunks.append(chunk)
        self.calls.append("chunk")

    def has_backlog(self):
        return self.backlog

    def source_ended(self):
        self.calls.append("ended")

    def source_failed(self, exc):
        self.calls.append(("failed", exc))

    def source_closed(self):
        self.calls.append("closed")


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def controller(memory_source, sink):
    controller = SourceLifecycleController(memory_source, sink, codec="utf-8")
    controller.attach()
    return controller


class TestAttach:
    """Tests for subscribing to a source."""

    def test_attach(self, controller, memory_source):
        """Attaching pauses the source, sets its encoding and subscribes."""
        assert memory_source.encoding == "utf-8"
        assert controller.state is ReaderState.AWAITING_CHUNK
        assert memory_source.listener_count("readable") == 1
        assert memory_source.listener_count("error") == 1
        assert memory_source.listener_count("close") == 1

    def test_request_chunk_once(self, controller, memory_source):
        """Repeated requests keep a single readiness subscription."""
        controller.request_chunk()
        controller.request_chunk()
        assert memory_source.listener_count("readable") == 1

    def test_spurious_readiness(self, controller, memory_source, sink):
        """A readiness signal with nothing to read re-subscribes."""
        memory_source.emit("readable")
        assert sink.calls == []
        assert controller.state is ReaderState.AWAITING_CHUNK
        assert memory_source.listener_count("readable") == 1


class TestSignals:
    """Tests for translating source signals."""

    @pytest.mark.asyncio
    async def test_chunk(self, controller, memory_source, sink, settle):
        """A pulled chunk is handed to the sink."""
        memory_source.write(b"abc")
        await settle()

        assert sink.chunks == ["abc"]
        assert controller.state is ReaderState.DATA_BUFFERED
        assert memory_source.listener_count("readable") == 0

    @pytest.mark.asyncio
    async def test_end_without_backlog(self, controller, memory_source, sink, settle):
        """End with an empty backlog moves to ending."""
        memory_source.end()
        await settle()

        assert sink.calls == ["ended"]
        assert controller.source_ended
        assert controller.state is ReaderState.ENDING

    @pytest.mark.asyncio
    async def test_end_with_backlog(self, controller, memory_source, sink, settle):
        """End with backlog left keeps the data-buffered state."""
        sink.backlog = True
        memory_source.end()
        await settle()

        assert sink.calls == ["ended"]
        assert controller.state is ReaderState.DATA_BUFFERED

    @pytest.mark.asyncio
    async def test_error(self, controller, memory_source, sink, settle):
        """A source error is forwarded to the sink."""
        boom = RuntimeError("boom")
        memory_source.fail(boom)
        await settle()

        assert sink.calls[0] == ("failed", boom)

    @pytest.mark.asyncio
    async def test_close_before_end(self, controller, memory_source, sink, settle):
        """A source closing before its end is forwarded."""
        memory_source.destroy()
        await settle()

        assert sink.calls == ["closed"]

    @pytest.mark.asyncio
    async def test_close_after_end_ignored(self, controller, memory_source, sink, settle):
        """A source closing after its end is not forwarded."""
        memory_source.end()
        await settle()
        memory_source.destroy()
        await settle()

        assert sink.calls == ["ended"]

    @pytest.mark.asyncio
    async def test_release_inside_handler(self, memory_source, settle):
        """Releasing from inside a sink callback drops later signals."""

        class ReleasingSink(RecordingSink):
            def accept_chunk(self, chunk):
                super().accept_chunk(chunk)
                controller.release("")
                memory_source.fail(RuntimeError("late"))

        sink = ReleasingSink()
        controller = SourceLifecycleController(memory_source, sink, codec="utf-8")
        controller.attach()

        memory_source.write("abc")
        await settle()

        assert sink.calls == ["chunk"]
        assert controller.state is ReaderState.CLOSED


class TestRelease:
    """Tests for detaching from a source."""

    def test_release_hands_back(self, controller, memory_source):
        """Unconsumed text goes back to the source."""
        assert controller.release("left over") is False
        assert controller.state is ReaderState.CLOSED
        assert memory_source.listener_count("readable") == 0
        assert memory_source.listener_count("error") == 0
        assert memory_source.listener_count("close") == 0
        assert memory_source.read() == "left over"

    def test_release_after_error(self, controller, memory_source):
        """Nothing is handed back to an errored source."""
        controller.release("left over", errored=True)
        assert memory_source.buffered_length == 0

    @pytest.mark.asyncio
    async def test_auto_destroy_needs_destroyable_source(self, memory_source, sink):
        """A source that does not declare itself destroyable gets its text back."""
        controller = SourceLifecycleController(
            memory_source, sink, codec="utf-8", auto_destroy=True
        )
        controller.attach()

        assert controller.release("kept") is False
        assert controller.state is ReaderState.CLOSED
        assert not memory_source.destroyed
        assert memory_source.read() == "kept"

    def test_release_twice(self, controller):
        """A second release does nothing."""
        controller.release("")
        assert controller.release("again") is False

    @pytest.mark.asyncio
    async def test_release_destroys(self, temp_text_file, sink, settle):
        """With auto_destroy the source is destroyed and its close awaited."""
        source = FileStreamSource(temp_text_file, auto_close=False)
        controller = SourceLifecycleController(
            source, sink, codec="ascii", auto_destroy=True
        )
        controller.attach()

        assert controller.release("unused") is True
        assert controller.state is ReaderState.CLOSING
        assert source.fd is None

        await settle()
        assert controller.state is ReaderState.CLOSED
        assert sink.calls == ["closed"]
