import re
import string
from typing import Callable, Iterator, Optional, TextIO

Stemmer = Callable[[str], str]

TRAILING_PUNCT = ".,;:!"
CHUNK_SIZE = 64 * 1024

# space, \t, \n, \v, \f, \r only; NBSP and other Unicode spaces stay inside tokens
WS_RE = re.compile(r"[ \t\n\v\f\r]+")

_ASCII_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)


def ascii_lower(tok: str) -> str:
    return tok.translate(_ASCII_LOWER)


def iter_tokens(stream: TextIO, chunk_size: int = CHUNK_SIZE) -> Iterator[str]:
    """Yield whitespace-delimited tokens from ``stream`` one at a time.

    The stream is read in chunks of ``chunk_size`` characters; a token cut
    by a chunk boundary is held back and joined with the next chunk.
    """
    tail = ""
    while True:
        chunk = stream.read(chunk_size)
        if not chunk:
            break
        parts = WS_RE.split(tail + chunk)
        tail = parts.pop()
        yield from (p for p in parts if p)
    if tail:
        yield tail


def normalize(tok: str, stemmer: Optional[Stemmer] = None) -> Optional[str]:
    t = ascii_lower(tok)
    if t and t[-1] in TRAILING_PUNCT:
        t = t[:-1]
    if t and stemmer is not None:
        t = stemmer(t)
    return t or None


def normalized_tokens(stream: TextIO, stemmer: Optional[Stemmer] = None) -> Iterator[str]:
    for tok in iter_tokens(stream):
        w = normalize(tok, stemmer)
        if w is not None:
            yield w
