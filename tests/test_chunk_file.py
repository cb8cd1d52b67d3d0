import pytest

from regex_splitter.chunk_file import iter_chunks_by_pattern, iter_text_chunks
from regex_splitter.errors import PatternCompileError


def test_iter_chunks_by_pattern(tmp_path):
    path = tmp_path / "corpus.txt"
    path.write_bytes(b"doc one<|endoftext|>doc two<|endoftext|><|endoftext|>doc three")
    chunks = list(iter_chunks_by_pattern(path, rb"(?:<\|endoftext\|>)+", read_size=5))
    assert chunks == [b"doc one", b"doc two", b"doc three"]


def test_iter_chunks_by_pattern_empty_file(tmp_path):
    path = tmp_path / "empty.txt"
    path.write_bytes(b"")
    assert list(iter_chunks_by_pattern(path, b"\n", read_size=4)) == []


def test_iter_chunks_by_pattern_bad_read_size(tmp_path):
    path = tmp_path / "a.txt"
    path.write_bytes(b"a")
    with pytest.raises(ValueError):
        list(iter_chunks_by_pattern(path, b"\n", read_size=0))


def test_iter_chunks_by_pattern_bad_pattern(tmp_path):
    path = tmp_path / "a.txt"
    path.write_bytes(b"a")
    with pytest.raises(PatternCompileError):
        list(iter_chunks_by_pattern(path, b"(", read_size=4))


def test_iter_text_chunks_keeps_multibyte_characters(tmp_path):
    path = tmp_path / "utf8.txt"
    path.write_text("héllo\n\nwörld\nñ", encoding="utf-8")
    # One byte per read: every two-byte character straddles a read.
    assert list(iter_text_chunks(path, b"\n", read_size=1)) == ["héllo", "wörld", "ñ"]
