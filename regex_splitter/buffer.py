"""
Growable byte buffer holding the bytes read from the source but not yet emitted.

Layout of the stored bytes:

    [0, consumed_to)           already emitted or skipped, never referenced again
    [consumed_to, scanned_to)  searched, cannot start a delimiter match
    [scanned_to, len)          not searched yet

The consumed prefix is dropped once it outweighs the live bytes, so memory stays
proportional to the largest run between two delimiters.
"""
import logging

logger = logging.getLogger(__name__)


class GrowableBuffer:
    def __init__(self, capacity: int) -> None:
        if capacity <= 0:
            raise ValueError(f"capacity must be positive, got {capacity}")
        self.capacity = capacity
        self._data = bytearray()
        self.consumed_to = 0
        self.scanned_to = 0

    def __len__(self) -> int:
        return len(self._data)

    @property
    def pending(self) -> int:
        """Number of live (not yet consumed) bytes."""
        return len(self._data) - self.consumed_to

    def append(self, data: bytes) -> None:
        self._data += data

    def unscanned_range(self) -> tuple[int, int]:
        return self.scanned_to, len(self._data)

    def mark_scanned(self, up_to: int) -> None:
        if not self.consumed_to <= up_to <= len(self._data):
            raise ValueError(
                f"scanned offset {up_to} outside live range [{self.consumed_to}, {len(self._data)}]"
            )
        self.scanned_to = up_to

    def live(self) -> memoryview:
        """Read-only view of the live bytes; offsets inside it start at consumed_to."""
        return memoryview(self._data).toreadonly()[self.consumed_to :]

    def take(self, end: int) -> bytes:
        """Copy out the live bytes up to `end`."""
        return bytes(self._data[self.consumed_to : end])

    def consume(self, up_to: int) -> None:
        """Advance consumed_to (and scanned_to with it), compacting when worthwhile."""
        if not self.consumed_to <= up_to <= len(self._data):
            raise ValueError(
                f"consume offset {up_to} outside live range [{self.consumed_to}, {len(self._data)}]"
            )
        self.consumed_to = up_to
        self.scanned_to = up_to
        if self.consumed_to >= self.pending:
            self._compact()

    def _compact(self) -> None:
        dropped = self.consumed_to
        if not dropped:
            return
        del self._data[:dropped]
        self.consumed_to = 0
        self.scanned_to -= dropped
        logger.debug("dropped %d consumed bytes, %d live bytes kept", dropped, len(self._data))

    def free_space(self) -> int:
        return max(self.capacity - len(self._data), 0)

    def reserve(self) -> None:
        """Make room for another read: compact first, double the capacity if less than half is free."""
        self._compact()
        if self.free_space() * 2 < self.capacity:
            self.capacity *= 2
            logger.debug("buffer holds %d live bytes, capacity grown to %d", len(self._data), self.capacity)
