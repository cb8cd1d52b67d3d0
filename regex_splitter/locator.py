"""
Delimiter search over the live part of the buffer.

While more input may still arrive, the search runs with regex's partial matching:
a position where a match could begin once more bytes are appended is reported as a
partial match instead of being passed over. That gives an exact resume point after
every unsuccessful search, whatever the maximum width of the pattern:

- no match at all: nothing in the searched range can ever start a match, so the
  next search begins where this one ended;
- partial match, or complete match touching the end of the data (which could still
  grow, e.g. ",+" followed by more commas): the match is provisional and the next
  search starts again at its start;
- complete match short of the end: regex prefers it to a longer partial match, so
  it only settles once no match from its start (or from an earlier position) could
  still run past the end of the data, e.g. "ab" in "zabc" for "abcd|ab".

Once the source is exhausted a plain search is used and every match is settled.
"""
from dataclasses import dataclass

import regex as re

from regex_splitter.buffer import GrowableBuffer


@dataclass(frozen=True)
class Match:
    """Delimiter occurrence, offsets relative to the buffer."""
    start: int
    end: int
    settled: bool = True


class DelimiterLocator:
    def __init__(self, pattern: re.Pattern) -> None:
        self.pattern = pattern

    def find(self, buffer: GrowableBuffer, final: bool = False) -> Match | None:
        """Return the leftmost match in the unscanned part of `buffer`, or None.

        Args:
            buffer: The buffer to search, from its scanned_to offset to its end.
            final: True once the source is exhausted; disables partial matching.

        Returns:
            The match, with `settled=False` if more input could still change it.
        """
        base = buffer.consumed_to
        pos = buffer.scanned_to - base
        with buffer.live() as view:
            span = self._locate(view, pos, final)
        if span is None:
            return None
        start, end, settled = span
        return Match(base + start, base + end, settled)

    def _locate(self, view: memoryview, pos: int, final: bool) -> tuple[int, int, bool] | None:
        span = self._first_match(view, pos, partial=not final)
        if span is None:
            return None
        start, end, partial = span
        if final:
            return start, end, True
        if partial or end == len(view):
            return start, end, False
        # The engine reports a complete match ahead of a longer partial one, so
        # check whether a match from here (or from an earlier position) could
        # still grow once more bytes arrive.
        held = self._growable_start(view, pos, start)
        if held is not None:
            return held, len(view), False
        return start, end, True

    def _first_match(self, view: memoryview, pos: int, partial: bool) -> tuple[int, int, bool] | None:
        while pos <= len(view):
            m = self.pattern.search(view, pos, partial=partial)
            if m is None:
                return None
            start, end, is_partial = m.start(), m.end(), m.partial
            del m
            if start == end:
                # An empty partial match can only sit at the end of the data.
                if is_partial:
                    return None
                # A zero-width match splits nothing; look again one byte further on.
                pos = start + 1
                continue
            return start, end, is_partial
        return None

    def _growable_start(self, view: memoryview, pos: int, start: int) -> int | None:
        """Earliest position in [pos, start] where a match could run past the end of the data."""
        while pos < start:
            # Searching the data cut at `start` lists the candidates cheaply;
            # each is then checked against the full data.
            m = self.pattern.search(view, pos, start, partial=True)
            if m is None:
                break
            candidate = m.start()
            del m
            if candidate >= start:
                break
            if self._could_grow(view, candidate):
                return candidate
            pos = candidate + 1
        if self._could_grow(view, start):
            return start
        return None

    def _could_grow(self, view: memoryview, at: int) -> bool:
        m = self.pattern.fullmatch(view, at, partial=True)
        grows = m is not None
        del m
        return grows
