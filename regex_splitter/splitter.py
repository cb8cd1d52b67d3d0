"""
RegexSplitter: an iterator over the runs of bytes between delimiter matches in a byte stream.

Usage:
    with open("access.log", "rb") as f:
        for record in RegexSplitter(f, rb"\r?\n"):
            ...

Chunk policy:
- A chunk is emitted before every delimiter match, even an empty one
  (b",a" -> [b"", b"a"], b"," -> [b""]).
- The empty run after a delimiter that ends the stream is not emitted
  (b"a," -> [b"a"]).
- An empty stream yields nothing; a stream without any delimiter yields itself.

The internal buffer grows in proportion to the largest span of bytes between two
delimiter matches. A stream that never matches is held entirely in memory.
"""
import enum
import logging
from collections.abc import Iterator

from regex_splitter.buffer import GrowableBuffer
from regex_splitter.filler import ByteSource, SourceFiller
from regex_splitter.locator import DelimiterLocator, Match
from regex_splitter.pattern import compile_delimiter

logger = logging.getLogger(__name__)

# This value is arbitrary, but seems good enough.
DEFAULT_CAPACITY = 64 * 1024  # 64 KiB


class ChunkerState(enum.Enum):
    SCANNING = "scanning"
    AWAITING_MORE = "awaiting_more"
    EXHAUSTED_PENDING_FINAL = "exhausted_pending_final"
    DONE = "done"


class RegexSplitter(Iterator[bytes]):
    def __init__(self, source: ByteSource, delimiter, capacity: int = DEFAULT_CAPACITY) -> None:
        """Initialize a RegexSplitter. Nothing is read until the first chunk is requested.

        Args:
            source: Object with a blocking `read(size) -> bytes`. It is not closed by the splitter.
            delimiter: Pattern as str, bytes or compiled pattern (see `compile_delimiter`).
            capacity: Initial buffer capacity in bytes, also the size of the first read.
        """
        self._locator = DelimiterLocator(compile_delimiter(delimiter))
        self._buffer = GrowableBuffer(capacity)
        self._filler = SourceFiller(source)
        self._state = ChunkerState.SCANNING

    @property
    def state(self) -> ChunkerState:
        return self._state

    @property
    def delimiter(self):
        return self._locator.pattern

    def __iter__(self) -> "RegexSplitter":
        return self

    def __next__(self) -> bytes:
        while True:
            if self._state is ChunkerState.DONE:
                raise StopIteration

            if self._state is ChunkerState.SCANNING:
                match = self._locator.find(self._buffer)
                if match is not None and match.settled:
                    return self._emit(match)
                # Everything before a provisional match is known not to start one.
                self._buffer.mark_scanned(len(self._buffer) if match is None else match.start)
                self._state = ChunkerState.AWAITING_MORE

            elif self._state is ChunkerState.AWAITING_MORE:
                try:
                    added = self._filler.fill(self._buffer)
                except Exception:
                    # The error is reported once; the stream is not resumed after it.
                    self._state = ChunkerState.DONE
                    raise
                if added:
                    self._state = ChunkerState.SCANNING
                else:
                    self._state = ChunkerState.EXHAUSTED_PENDING_FINAL

            elif self._state is ChunkerState.EXHAUSTED_PENDING_FINAL:
                match = self._locator.find(self._buffer, final=True)
                if match is not None:
                    return self._emit(match)
                trailing = self._buffer.take(len(self._buffer))
                self._buffer.consume(len(self._buffer))
                self._state = ChunkerState.DONE
                logger.debug("splitter done after %d bytes", self._filler.bytes_read)
                if trailing:
                    return trailing

    def _emit(self, match: Match) -> bytes:
        chunk = self._buffer.take(match.start)
        self._buffer.consume(match.end)
        return chunk
