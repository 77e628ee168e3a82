"""Fixed-capacity sliding window over a byte stream.

The window always holds exactly ``size`` elements. Each fill pulls at most
``scan_size`` bytes from the source, appends them at the tail and drops the
same number of elements from the head, so the contents read oldest to
newest. Slots that have never been filled hold ``default_value``.
"""

from __future__ import annotations

from collections import deque
from itertools import islice
from typing import Callable, Generic, TypeVar

T = TypeVar("T")
R = TypeVar("R")


def _identity(b):
    return b


class ScanBuffer(Generic[T]):
    """Sliding window of ``size`` elements filled from a binary source."""

    def __init__(
        self,
        size: int,
        scan_size: int | None = None,
        default_value: T = 0,
        *,
        convert: Callable[[int], T] = _identity,
        logger=None,
    ):
        if scan_size is None:
            scan_size = size
        if size <= 0:
            raise ValueError(f"size must be positive, got {size}")
        if not 0 < scan_size <= size:
            raise ValueError(f"scan_size must be in 1..{size}, got {scan_size}")
        self.size = size
        self.scan_size = scan_size
        self.default_value = default_value
        self.exhausted = False
        self._convert = convert
        self._logger = logger
        self._buffer: deque[T] = deque([default_value] * size, maxlen=size)

    def __len__(self) -> int:
        return len(self._buffer)

    def fill(self, source) -> int:
        """Read up to ``scan_size`` bytes from ``source`` into the window.

        Returns the number of elements added. 0 means the source is at end
        of stream or failed to read; the window is left untouched and the
        caller should stop. Read errors are reported, never retried.
        """
        read = getattr(source, "read1", None) or source.read
        try:
            data = read(self.scan_size)
        except OSError as e:
            if self._logger is not None:
                self._logger.error(f"Failed to read input: {e}")
            self.exhausted = True
            return 0

        if not data:
            self.exhausted = True
            return 0

        # maxlen discards from the head as the tail grows
        if self._convert is _identity:
            self._buffer.extend(data)
        else:
            self._buffer.extend(map(self._convert, data))
        return len(data)

    def process(self, viewer: Callable[[tuple[T, ...]], R]) -> R:
        """Call ``viewer`` with a read-only snapshot of the window."""
        return viewer(tuple(self._buffer))

    def tail(self, count: int) -> tuple[T, ...]:
        """Return the newest ``count`` elements, oldest first.

        Only the requested elements are copied, not the whole window.
        """
        count = max(0, min(count, self.size))
        newest = list(islice(reversed(self._buffer), count))
        newest.reverse()
        return tuple(newest)
