"""
Tailing reader for a growing access log file.
"""

import os
import threading
import time
from typing import BinaryIO, Iterator, List, Optional

from .exceptions import LogSourceError
from .logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_POLL_INTERVAL = 0.1


class LineSource:
    """Yields lines appended to a file after it was opened.

    A line is only yielded once its newline has been written; a partial
    trailing line is buffered until it is completed. When the file has
    nothing new the reader sleeps for ``poll_interval`` seconds and tries
    again. End of file never ends the sequence.

    If the file shrinks below the read position (truncation or
    copy-truncate rotation) the reader starts over from offset 0.
    """

    def __init__(
        self,
        path: str,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        from_start: bool = False,
    ) -> None:
        self.path = path
        self.poll_interval = poll_interval
        self.from_start = from_start
        self._file: Optional[BinaryIO] = None
        self._partial = b""

    def open(self) -> "LineSource":
        """Open the file and move the cursor to its end.

        Raises:
            LogSourceError: If the file cannot be opened.
        """
        try:
            self._file = open(self.path, "rb")
        except OSError as e:
            raise LogSourceError(
                f"Cannot open log file: {e.strerror or e}", file_path=self.path
            ) from e

        if not self.from_start:
            self._file.seek(0, os.SEEK_END)
        self._partial = b""
        logger.debug("Opened %s at offset %d", self.path, self._file.tell())
        return self

    def close(self) -> None:
        if self._file is not None:
            self._file.close()
            self._file = None

    @property
    def closed(self) -> bool:
        return self._file is None

    def __enter__(self) -> "LineSource":
        if self._file is None:
            self.open()
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def lines(self, stop_event: Optional[threading.Event] = None) -> Iterator[str]:
        """Lazily yield new lines, polling while none are available.

        Each line is handed out as soon as it is read; nothing beyond the
        current partial line is buffered.

        Args:
            stop_event: Optional cancellation token. It is checked after
                every yielded line and at every poll.

        Yields:
            Each complete line, without its line terminator.
        """
        if self._file is None:
            self.open()

        while stop_event is None or not stop_event.is_set():
            self._check_truncated()
            line = self._read_line()
            while line is not None:
                yield line
                if stop_event is not None and stop_event.is_set():
                    return
                line = self._read_line()

            if stop_event is None:
                time.sleep(self.poll_interval)
            elif stop_event.wait(self.poll_interval):
                return

    def read_available(self) -> List[str]:
        """Read every complete line currently in the file without waiting."""
        if self._file is None:
            raise LogSourceError("Log source is not open", file_path=self.path)

        self._check_truncated()
        lines: List[str] = []
        line = self._read_line()
        while line is not None:
            lines.append(line)
            line = self._read_line()
        return lines

    def _read_line(self) -> Optional[str]:
        """Return the next complete line, or None if none is written yet."""
        try:
            chunk = self._file.readline()
        except OSError as e:
            logger.warning("Error reading %s: %s", self.path, e)
            return None
        if not chunk:
            return None
        if not chunk.endswith(b"\n"):
            self._partial += chunk
            return None
        raw = self._partial + chunk
        self._partial = b""
        return raw.decode("utf-8", errors="replace").rstrip("\r\n")

    def _check_truncated(self) -> None:
        try:
            size = os.fstat(self._file.fileno()).st_size
        except OSError as e:
            logger.warning("Cannot stat %s: %s", self.path, e)
            return
        if size < self._file.tell():
            logger.warning(
                "Log file %s shrank to %d bytes, reading from the start", self.path, size
            )
            self._file.seek(0)
            self._partial = b""
