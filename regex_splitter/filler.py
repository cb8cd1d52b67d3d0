"""
Pulls bytes from the underlying source into the buffer.
"""
import logging
from typing import Protocol

from regex_splitter.buffer import GrowableBuffer

logger = logging.getLogger(__name__)


class ByteSource(Protocol):
    """Anything with a blocking `read`: files opened in binary mode, sockets' makefile, BytesIO, pipes."""

    def read(self, size: int = -1, /) -> bytes | None: ...


class SourceFiller:
    def __init__(self, source: ByteSource) -> None:
        self.source = source
        self.exhausted = False
        self.bytes_read = 0

    def fill(self, buffer: GrowableBuffer) -> int:
        """Read one batch from the source into `buffer`.

        Args:
            buffer: The buffer to append to. It is grown first if it has no free space.

        Returns:
            The number of bytes appended; 0 means the source is exhausted.

        Raises:
            Whatever the source raises. A non-blocking source with nothing to
            deliver raises BlockingIOError instead of being mistaken for end of stream.
        """
        if self.exhausted:
            return 0
        if not buffer.free_space():
            buffer.reserve()

        try:
            block = self.source.read(buffer.free_space())
        except Exception:
            logger.debug("source read failed after %d bytes", self.bytes_read, exc_info=True)
            raise
        if block is None:
            raise BlockingIOError("byte source has no data available; a blocking source is required")

        if not block:
            self.exhausted = True
            logger.debug("source exhausted after %d bytes", self.bytes_read)
            return 0
        buffer.append(block)
        self.bytes_read += len(block)
        return len(block)
