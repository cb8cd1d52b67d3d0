import io
import json

import pytest

from regex_splitter.word_count import count_words, main


def test_count_words():
    text = b'Hello, world! "Hello" again.\nWorld?'
    counts = count_words(io.BytesIO(text), read_size=4)
    assert counts == {"hello": 2, "world": 2, "again": 1}


def test_count_words_custom_delimiter():
    counts = count_words(io.BytesIO(b"a|b||a"), delimiter=rb"\|+")
    assert counts == {"a": 2, "b": 1}


def test_count_words_with_progress():
    counts = count_words(io.BytesIO(b"x y x"), show_progress=True)
    assert counts == {"x": 2, "y": 1}


def test_main_file_to_output(tmp_path):
    input_path = tmp_path / "in.txt"
    input_path.write_bytes(b"b a b c b a")
    output_path = tmp_path / "counts.json"
    assert main(["--input", str(input_path), "--output", str(output_path), "--top", "2"]) == 0
    assert json.loads(output_path.read_text(encoding="utf-8")) == {"b": 3, "a": 2}


def test_main_stdout_sorted(tmp_path, capsys):
    input_path = tmp_path / "in.txt"
    input_path.write_bytes(b"pear apple pear")
    assert main(["--input", str(input_path)]) == 0
    out = capsys.readouterr().out
    assert list(json.loads(out)) == ["apple", "pear"]


def test_main_rejects_bad_delimiter(tmp_path):
    input_path = tmp_path / "in.txt"
    input_path.write_bytes(b"x")
    with pytest.raises(SystemExit) as excinfo:
        main(["--input", str(input_path), "--delimiter", "("])
    assert excinfo.value.code == 2


def test_main_rejects_bad_read_size():
    with pytest.raises(SystemExit):
        main(["--read_size", "0"])
