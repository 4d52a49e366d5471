"""
Tests for the event emitter.
"""

from stream2lines.core.events import EventEmitter


class Counter:
    def __init__(self):
        self.hits = 0

    def hit(self):
        self.hits += 1


class TestRemoveListener:
    """Tests for unsubscribing."""

    def test_bound_method_removed(self):
        """A fresh bound method of the same object removes the registration."""
        emitter = EventEmitter()
        counter = Counter()
        emitter.on("tick", counter.hit)
        emitter.remove_listener("tick", counter.hit)

        assert emitter.listener_count("tick") == 0
        assert emitter.emit("tick") is False
        assert counter.hits == 0

    def test_latest_registration_removed(self):
        """Only one registration goes per call."""
        emitter = EventEmitter()
        counter = Counter()
        emitter.on("tick", counter.hit)
        emitter.once("tick", counter.hit)
        emitter.remove_listener("tick", counter.hit)

        emitter.emit("tick")
        emitter.emit("tick")
        assert counter.hits == 2

    def test_once_removed_after_emit(self):
        """A one-shot listener runs once."""
        emitter = EventEmitter()
        counter = Counter()
        emitter.once("tick", counter.hit)

        emitter.emit("tick")
        emitter.emit("tick")
        assert counter.hits == 1
        assert emitter.listener_count("tick") == 0
