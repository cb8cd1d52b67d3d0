import os
from typing import Iterator

from regex_splitter.splitter import RegexSplitter


def iter_chunks_by_pattern(
    input_path: str | os.PathLike, delimiter, read_size: int
) -> Iterator[bytes]:
    """
    Stream the file and yield the byte chunks between matches of delimiter.
    At most read_size bytes are requested from the file per read; the buffer
    only grows beyond that when a single chunk is longer.
    """
    if read_size <= 0:
        raise ValueError(f"read_size must be positive, got {read_size}")

    with open(input_path, "rb") as f:
        yield from RegexSplitter(f, delimiter, capacity=read_size)


def iter_text_chunks(
    input_path: str | os.PathLike,
    delimiter,
    read_size: int,
    encoding: str = "utf-8",
    errors: str = "ignore",
) -> Iterator[str]:
    """
    Like iter_chunks_by_pattern, but decode each chunk and skip empty ones.
    Splitting happens on bytes and decoding only after slicing, so a multi-byte
    character is never cut in half unless the delimiter itself cuts it.
    """
    for chunk in iter_chunks_by_pattern(input_path, delimiter, read_size):
        if chunk:
            yield chunk.decode(encoding, errors=errors)
