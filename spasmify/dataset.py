import contextlib
import os
from typing import Iterator, List, Optional, TextIO

from .wordindex import WordIndex

MARKER = "^^^^^^^^"
DATASET_TYPE = "Text data"
SINGLE_FILE_DEFAULT = "a.edsf"
MULTI_FILE_DEFAULT = "a.edmf"
VECTOR_SUFFIX = ".spasms"


class DatasetWriteError(Exception):
    def __init__(self, path: str, reason):
        super().__init__(f"cannot write {path}: {reason}")
        self.path = path


def destination(single_file: bool, output_file: Optional[str] = None) -> str:
    if output_file:
        return output_file
    return SINGLE_FILE_DEFAULT if single_file else MULTI_FILE_DEFAULT


def vector_path(source: str) -> str:
    return source + VECTOR_SUFFIX


def write_header(out: TextIO, name: str, index: WordIndex):
    out.write(f"{name}\n{MARKER}\n{DATASET_TYPE}\n{MARKER}\n")
    for dim, word in index.dimensions():
        out.write(f"{dim}\t{word}\n")


def write_vector(out: TextIO, index: WordIndex, source: str):
    for dim, n in index.vector(source):
        out.write(f"{dim}\t{n}\n")


@contextlib.contextmanager
def _output(path: str) -> Iterator[TextIO]:
    # open, write and the final flush on close all surface as DatasetWriteError
    try:
        with open(path, "w", encoding="utf-8", newline="\n") as out:
            yield out
    except OSError as e:
        raise DatasetWriteError(path, e.strerror or e) from e


def check_distinct(paths: List[str]):
    seen = {}
    for p in paths:
        key = os.path.normcase(os.path.abspath(p))
        if key in seen:
            raise DatasetWriteError(p, f"same file as {seen[key]}")
        seen[key] = p


def write_single_file(path: str, index: WordIndex, sources: List[str]) -> List[str]:
    with _output(path) as out:
        write_header(out, path, index)
        for src in sources:
            out.write(f"{MARKER}\n{src}\n{MARKER}\n")
            write_vector(out, index, src)
    return [path]


def write_multi_file(path: str, index: WordIndex, sources: List[str]) -> List[str]:
    vpaths = [vector_path(src) for src in sources]
    check_distinct([path] + vpaths)

    written = [path]
    with _output(path) as manifest:
        write_header(manifest, path, index)
        manifest.write(MARKER + "\n")
        for src, vpath in zip(sources, vpaths):
            manifest.write(vpath + "\n")
            with _output(vpath) as out:
                write_vector(out, index, src)
            written.append(vpath)
    return written


def write_dataset(index: WordIndex, sources: List[str], single_file: bool = False,
                  output_file: Optional[str] = None) -> List[str]:
    """Write ``index`` in the chosen layout; return every file written."""
    path = destination(single_file, output_file)
    if single_file:
        return write_single_file(path, index, sources)
    return write_multi_file(path, index, sources)
