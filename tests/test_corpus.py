import io
import logging
from collections import Counter

from spasmify.corpus import STDIN_NAME, process_sources, process_stream, source_set
from spasmify.stemming import light_stem
from spasmify.wordindex import WordIndex


def test_process_stream_scenario():
    idx = WordIndex()
    n = process_stream(io.StringIO("The cat sat. The Cat ran!"), "a.txt", idx)
    assert n == 6
    assert idx.words() == ["cat", "ran", "sat", "the"]
    assert {w: idx.count(w, "a.txt") for w in idx.words()} == {"the": 2, "cat": 2, "sat": 1, "ran": 1}


def test_process_stream_with_stemmer():
    idx = WordIndex()
    process_stream(io.StringIO("cats cat Cats."), "s", idx, stemmer=light_stem)
    assert idx.words() == ["cat"]
    assert idx.count("cat", "s") == 3


def test_counts_sum_to_occurrences(write_text):
    texts = {
        "a.txt": "one two two three. One!",
        "b.txt": "two . three three\nfour",
    }
    for name, text in texts.items():
        write_text(name, text)
    idx = WordIndex()
    process_sources(source_set(texts), idx)

    expected = Counter()
    for text in texts.values():
        for tok in text.split():
            w = tok.lower().rstrip(".,;:!")
            if w:
                expected[w] += 1
    assert {w: idx.total(w) for w in idx.words()} == dict(expected)


def test_source_set_deduplicates(write_text):
    write_text("a.txt", "x y")
    sources = source_set(["a.txt", "a.txt"])
    assert sources == ["a.txt"]
    idx = WordIndex()
    process_sources(sources, idx)
    assert idx.count("x", "a.txt") == 1


def test_source_set_sorted():
    assert source_set(["b", "a", "c", "a"]) == ["a", "b", "c"]
    assert source_set([]) == []


def test_missing_file_warns_and_continues(write_text, caplog):
    write_text("b.txt", "hello")
    idx = WordIndex()
    with caplog.at_level(logging.WARNING, logger="spasmify.corpus"):
        read = process_sources(["a.txt", "b.txt"], idx)
    assert read == ["b.txt"]
    assert idx.count("hello", "b.txt") == 1
    assert "a.txt" in caplog.text


def test_directory_source_warns(workdir, caplog):
    (workdir / "d").mkdir()
    with caplog.at_level(logging.WARNING, logger="spasmify.corpus"):
        read = process_sources(["d"], WordIndex())
    assert read == []
    assert "cannot read d" in caplog.text


def test_no_sources_reads_stdin():
    idx = WordIndex()
    read = process_sources([], idx, stdin=io.BytesIO(b"Hello hello"))
    assert read == [STDIN_NAME]
    assert idx.count("hello", STDIN_NAME) == 2


def test_encoding_errors_ignored(workdir):
    (workdir / "bin.txt").write_bytes(b"caf\xff word")
    idx = WordIndex()
    process_sources(["bin.txt"], idx)
    assert idx.words() == ["caf", "word"]


def test_stdin_uses_encoding():
    idx = WordIndex()
    process_sources([], idx, encoding="latin-1", stdin=io.BytesIO(b"caf\xe9 Caf\xe9."))
    assert idx.words() == ["café"]
    assert idx.count("café", STDIN_NAME) == 2


def test_stdin_undecodable_bytes_ignored():
    idx = WordIndex()
    process_sources([], idx, stdin=io.BytesIO(b"caf\xff word"))
    assert idx.words() == ["caf", "word"]


def test_stdin_left_open():
    raw = io.BytesIO(b"one two")
    process_sources([], WordIndex(), stdin=raw)
    assert not raw.closed
