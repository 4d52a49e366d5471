"""
Port interfaces for the application layer.

These are the interfaces that infrastructure adapters must implement.
They define the contract between the line reader and the outside world.
"""

from typing import Any, Callable, Protocol, runtime_checkable

__all__ = [
    "PullSourcePort",
    "ChunkSink",
]


@runtime_checkable
class PullSourcePort(Protocol):
    """
    Port for byte/text pull sources.

    Implementations deliver data only when read() is called, announce
    with a "readable" signal that read() has something to return (a chunk,
    or None meaning end of data), and report fatal problems with "error".
    Sources that own a resource may also signal "close" and offer
    destroy(); those that can be destroyed safely set destroyable = True.

    Sources include:
    - In-memory pass-through streams
    - Files
    - Sockets and standard input
    """

    high_water_mark: int

    @property
    def buffered_length(self) -> int:
        """Bytes or characters currently buffered inside the source."""
        ...

    @property
    def ended(self) -> bool:
        """True once the producer has delivered everything it will."""
        ...

    @property
    def closed(self) -> bool:
        """True once the underlying resource has been released."""
        ...

    def pause(self) -> Any:
        """Stop any push-style delivery; data moves only on read()."""
        ...

    def set_encoding(self, codec: str) -> Any:
        """Decode delivered bytes with codec from now on."""
        ...

    def read(self) -> str | None:
        """Return everything buffered, or None when nothing is left."""
        ...

    def unshift(self, chunk: str) -> None:
        """Put chunk back in front of the buffer, as not yet consumed."""
        ...

    def on(self, event: str, listener: Callable[..., Any]) -> Any:
        ...

    def once(self, event: str, listener: Callable[..., Any]) -> Any:
        ...

    def remove_listener(self, event: str, listener: Callable[..., Any]) -> Any:
        ...


class ChunkSink(Protocol):
    """
    What the lifecycle controller drives.

    The line reader implements this to receive pulled chunks and terminal
    source conditions.
    """

    def accept_chunk(self, chunk: str) -> None:
        """Append a pulled chunk to the backlog."""
        ...

    def has_backlog(self) -> bool:
        """True if buffered text is waiting to be read."""
        ...

    def source_ended(self) -> None:
        """The source has no more data."""
        ...

    def source_failed(self, exc: BaseException) -> None:
        """The source signalled a fatal error."""
        ...

    def source_closed(self) -> None:
        """The source released its resource."""
        ...
