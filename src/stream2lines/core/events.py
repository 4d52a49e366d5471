"""
Minimal event emitter used by readers and sources.

Listeners run synchronously, in registration order, on the thread that
emits. Deferred work goes through the emitter's event loop with
call_soon(), which is looked up lazily so objects can be built and
validated without a running loop.
"""

import asyncio
from typing import Any, Callable

__all__ = ["EventEmitter"]


Listener = Callable[..., Any]


class EventEmitter:
    """
    Named-event publisher with on/once/remove semantics.

    Example:
        emitter.on("readable", on_readable)
        emitter.once("end", on_end)
        emitter.emit("readable")
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None):
        self._listeners: dict[str, list[tuple[Listener, bool]]] = {}
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        """The event loop used for deferred callbacks."""
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def call_soon(self, callback: Listener, *args: Any) -> asyncio.Handle:
        """Schedule callback on the next loop iteration."""
        return self.loop.call_soon(callback, *args)

    def on(self, event: str, listener: Listener) -> "EventEmitter":
        """Register a listener for every emission of event."""
        self._listeners.setdefault(event, []).append((listener, False))
        self._listener_added(event)
        return self

    def once(self, event: str, listener: Listener) -> "EventEmitter":
        """Register a listener for the next emission of event only."""
        self._listeners.setdefault(event, []).append((listener, True))
        self._listener_added(event)
        return self

    def remove_listener(self, event: str, listener: Listener) -> "EventEmitter":
        """Remove the most recently added registration of listener, if any."""
        entries = self._listeners.get(event)
        if not entries:
            return self
        for i in range(len(entries) - 1, -1, -1):
            # == so that bound methods of the same object match
            if entries[i][0] == listener:
                del entries[i]
                break
        if not entries:
            del self._listeners[event]
        return self

    def listener_count(self, event: str) -> int:
        return len(self._listeners.get(event, ()))

    def emit(self, event: str, *args: Any) -> bool:
        """
        Call every listener of event with args.

        Returns:
            True if the event had listeners
        """
        entries = self._listeners.get(event)
        if not entries:
            return False

        # Snapshot so listeners may subscribe or unsubscribe while we iterate
        snapshot = list(entries)
        for entry in snapshot:
            listener, one_shot = entry
            current = self._listeners.get(event)
            if current is None or entry not in current:
                # removed by an earlier listener
                continue
            if one_shot:
                current.remove(entry)
                if not current:
                    del self._listeners[event]
            listener(*args)
        return True

    def _listener_added(self, event: str) -> None:
        """Hook for subclasses that react to new subscriptions."""
