import io
import logging
import sys
from typing import BinaryIO, Iterable, List, Optional, TextIO

from tqdm import tqdm

from .tokenizer import Stemmer, normalized_tokens
from .wordindex import WordIndex

STDIN_NAME = "STDIN"

log = logging.getLogger("spasmify.corpus")


def source_set(names: Iterable[str]) -> List[str]:
    return sorted(set(names))


def process_stream(stream: TextIO, name: str, index: WordIndex, stemmer: Optional[Stemmer] = None) -> int:
    n = 0
    for w in normalized_tokens(stream, stemmer):
        index.record(w, name)
        n += 1
    return n


def process_stdin(index: WordIndex, stemmer: Optional[Stemmer] = None, encoding: str = "utf-8",
                  raw: Optional[BinaryIO] = None) -> int:
    # same codec and errors="ignore" policy as named files
    stream = io.TextIOWrapper(sys.stdin.buffer if raw is None else raw, encoding=encoding, errors="ignore")
    try:
        return process_stream(stream, STDIN_NAME, index, stemmer)
    finally:
        stream.detach()


def process_sources(
    sources: List[str],
    index: WordIndex,
    stemmer: Optional[Stemmer] = None,
    encoding: str = "utf-8",
    progress: bool = False,
    stdin: Optional[BinaryIO] = None,
) -> List[str]:
    """Read every source into ``index``; return the names actually read.

    With no sources, standard input (``stdin`` if given, a binary stream) is
    read under STDIN_NAME. A file that cannot be opened is logged and skipped.
    """
    if not sources:
        n = process_stdin(index, stemmer, encoding, stdin)
        log.debug("%s: %d tokens", STDIN_NAME, n)
        return [STDIN_NAME]

    read = []
    for name in tqdm(sources, desc="spasmify: files", unit="file", disable=not progress):
        try:
            f = open(name, "r", encoding=encoding, errors="ignore")
        except OSError as e:
            log.warning("cannot read %s: %s", name, e.strerror or e)
            continue
        with f:
            n = process_stream(f, name, index, stemmer)
        log.debug("%s: %d tokens", name, n)
        read.append(name)
    return read
