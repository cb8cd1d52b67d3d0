# Shared test sources.
# Scripted byte sources that control exactly how the stream is fragmented,
# when it fails, and how often it is read.

from __future__ import annotations

import random


class FragmentSource:
    """Delivers the given fragments one read at a time, never more than `size` bytes."""

    def __init__(self, fragments: list[bytes], error: BaseException | None = None) -> None:
        self._fragments = [bytes(f) for f in fragments if f]
        self._error = error
        self.reads = 0
        self.sizes: list[int] = []

    def read(self, size: int = -1) -> bytes:
        self.reads += 1
        self.sizes.append(size)
        if not self._fragments:
            if self._error is not None:
                raise self._error
            return b""
        head = self._fragments[0]
        if 0 <= size < len(head):
            self._fragments[0] = head[size:]
            return head[:size]
        self._fragments.pop(0)
        return head


def fragments(data: bytes, size: int) -> list[bytes]:
    """Cut data into pieces of `size` bytes."""
    return [data[i : i + size] for i in range(0, len(data), size)]


def random_fragments(data: bytes, seed: int = 42, max_size: int = 7) -> list[bytes]:
    """Cut data into pieces of random length in [1, max_size]."""
    rnd = random.Random(seed)
    out = []
    i = 0
    while i < len(data):
        n = rnd.randint(1, max_size)
        out.append(data[i : i + n])
        i += n
    return out


def rand_records(n: int, seed: int = 42) -> bytes:
    """Deterministic ASCII words separated by runs of commas and whitespace."""
    rnd = random.Random(seed)
    out = bytearray()
    for _ in range(n):
        out += bytes(rnd.choice(b"abcdefghijklmnopqrstuvwxyz") for _ in range(rnd.randint(0, 12)))
        out += rnd.choice([b",", b",,", b", ", b" \n", b"\r\n", b",\t,"])
    return bytes(out)
