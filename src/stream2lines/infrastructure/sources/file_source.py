"""
File source adapter for stream2lines.

Reads files in fixed-size chunks, only as fast as the reader pulls.
"""

import asyncio
from pathlib import Path

from stream2lines.core.limits import FILE_HIGH_WATER_MARK
from stream2lines.infrastructure.sources.base import BufferedPullSource

__all__ = ["FileStreamSource"]


class FileStreamSource(BufferedPullSource):
    """
    Chunked file source.

    The file is opened on construction and read high_water_mark bytes at
    a time. With auto_close (the default) it is closed as soon as the
    end has been read; otherwise it stays open until destroy().

    Example:
        source = FileStreamSource("/var/log/app.log")
        reader = create_line_reader(source, encoding="latin1")
    """

    destroyable = True

    def __init__(
        self,
        path: str | Path,
        high_water_mark: int = FILE_HIGH_WATER_MARK,
        auto_close: bool = True,
        loop: asyncio.AbstractEventLoop | None = None,
    ):
        """
        Initialize file stream source.

        Args:
            path: Path to the file
            high_water_mark: Bytes read per chunk (default: 64 KiB)
            auto_close: Close the file once fully read (default: True)
            loop: Event loop for signals (default: running loop)
        """
        self.path = Path(path)
        if not self.path.exists():
            raise FileNotFoundError(f"File not found: {self.path}")

        super().__init__(high_water_mark, auto_close, loop)
        self._file = open(self.path, "rb")

    @property
    def fd(self) -> int | None:
        """OS file descriptor, or None once the file is closed."""
        if self._file is None:
            return None
        return self._file.fileno()

    def _can_fill(self) -> bool:
        return self._file is not None and not self._ended

    def _fill(self) -> None:
        if not self._can_fill():
            return
        try:
            data = self._file.read(self.high_water_mark)
        except OSError as exc:
            self.destroy(exc)
            return
        if data:
            self.push(data)
        else:
            self.push(None)

    def _release(self) -> None:
        if self._file is not None:
            self._file.close()
            self._file = None
