import argparse
import codecs
import logging
import os
import sys
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import yaml

from .corpus import STDIN_NAME, process_sources, source_set
from .dataset import DatasetWriteError, destination, write_dataset
from .stemming import STEMMERS, get_stemmer
from .wordindex import WordIndex

LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING").upper()

log = logging.getLogger("spasmify")

DESCRIPTION = """\
spasmify is a utility to convert text files to multi-dimensional
data points in enchilada data format.  Each dimension corresponds to
a different word.  The words are listed in the description of the
collection.  A new set of dimensions is calculated each time you run
spasmify based upon the words in the input files.  With no FILE,
standard input is read as a single data point named STDIN."""

EPILOG = "All options with arguments require them."

CONFIG_KEYS = ("single_file", "output_file", "stemmer", "encoding", "verbose")


class UsageError(Exception):
    pass


class HelpRequested(Exception):
    pass


@dataclass(frozen=True)
class Config:
    single_file: bool = False
    output_file: Optional[str] = None
    stemmer: Optional[str] = None
    encoding: str = "utf-8"
    verbose: bool = False
    progress: bool = False

    @property
    def destination(self) -> str:
        return destination(self.single_file, self.output_file)


class ArgParser(argparse.ArgumentParser):
    def error(self, message):
        raise UsageError(message)


def nonempty_path(s: str) -> str:
    if not s:
        raise argparse.ArgumentTypeError("empty file name")
    return s


def encoding_name(s: str) -> str:
    try:
        return codecs.lookup(s).name
    except LookupError:
        raise argparse.ArgumentTypeError(f"unknown encoding: {s}") from None


def build_parser() -> ArgParser:
    ap = ArgParser(
        prog="spasmify",
        usage="%(prog)s [OPTION]... [FILE]...",
        description=DESCRIPTION,
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=False,
        allow_abbrev=False,
    )
    ap.add_argument("files", nargs="*", metavar="FILE", help="input text files")
    ap.add_argument("-s", "--single-file", action="store_true", default=None,
                    help="output to single-file format")
    ap.add_argument("--output-file", type=nonempty_path, metavar="FILENAME",
                    help="the name of the datafile to output to; "
                         "defaults to a.edmf (or a.edsf with -s)")
    ap.add_argument("-p", "--porter-stem", dest="stemmer", action="store_const", const="porter",
                    help="reduce words to their Porter stems")
    ap.add_argument("--stemmer", choices=sorted(STEMMERS), help="reduce words with the named stemmer")
    ap.add_argument("--encoding", type=encoding_name, help="input encoding (default utf-8)")
    ap.add_argument("--config", metavar="FILENAME", help="YAML file with default options")
    ap.add_argument("-v", "--verbose", action="store_true", default=None,
                    help="print a summary of the run")
    ap.add_argument("-q", "--quiet", action="store_true", help="no progress bar")
    ap.add_argument("-h", "--help", action="store_true", help="show this help and exit")
    return ap


def load_config(path: str) -> dict:
    try:
        with open(path, "r", encoding="utf-8") as f:
            cfg = yaml.safe_load(f)
    except OSError as e:
        raise UsageError(f"cannot read config {path}: {e.strerror or e}") from e
    except yaml.YAMLError as e:
        raise UsageError(f"bad config {path}: {e}") from e

    if cfg is None:
        return {}
    if not isinstance(cfg, dict):
        raise UsageError(f"bad config {path}: expected a mapping")
    unknown = sorted(set(cfg) - set(CONFIG_KEYS))
    if unknown:
        raise UsageError(f"bad config {path}: unknown keys {', '.join(map(str, unknown))}")

    for key in ("single_file", "verbose"):
        if cfg.get(key) is not None and not isinstance(cfg[key], bool):
            raise UsageError(f"bad config {path}: {key} must be true or false")
    if "output_file" in cfg and cfg["output_file"] is not None:
        if not isinstance(cfg["output_file"], str) or not cfg["output_file"]:
            raise UsageError(f"bad config {path}: output_file must be a non-empty string")
    if cfg.get("stemmer") is not None and cfg["stemmer"] not in STEMMERS:
        raise UsageError(f"bad config {path}: unknown stemmer {cfg['stemmer']!r}")
    if cfg.get("encoding") is not None:
        try:
            cfg["encoding"] = encoding_name(str(cfg["encoding"]))
        except argparse.ArgumentTypeError as e:
            raise UsageError(f"bad config {path}: {e}") from e
    return cfg


def parse_args(argv: Optional[Sequence[str]] = None,
               parser: Optional[ArgParser] = None) -> Tuple[Config, List[str]]:
    """Resolve the command line into a Config and the sorted source list.

    Raises HelpRequested for -h/--help and UsageError for anything malformed.
    """
    ap = parser or build_parser()
    ns = ap.parse_intermixed_args(argv)
    if ns.help:
        raise HelpRequested()

    file_cfg = load_config(ns.config) if ns.config else {}

    def pick(key, default):
        v = getattr(ns, key)
        if v is None:
            v = file_cfg.get(key)
        return default if v is None else v

    config = Config(
        single_file=pick("single_file", False),
        output_file=pick("output_file", None),
        stemmer=pick("stemmer", None),
        encoding=pick("encoding", "utf-8"),
        verbose=pick("verbose", False),
        progress=not ns.quiet and sys.stderr.isatty(),
    )
    return config, source_set(ns.files or [])


def print_usage(parser: ArgParser, reason: Optional[str] = None):
    if reason is not None:
        print("One of your arguments was not recognized.  The correct syntax is:")
        print(f"  ({reason})")
        print()
    print(parser.format_help())


def print_summary(config: Config, sources: List[str], read: List[str], written: List[str], index: WordIndex):
    print("Arguments:")
    print(f"\tsingle_file = {config.single_file}")
    print(f"\toutput_file = {config.destination}")
    print(f"\tstemmer = {config.stemmer}")
    print("filenames:")
    for name in sources:
        status = "" if name in read else "   (not read)"
        print(f"    Input file:   {name}{status}")
    for path in written:
        print(f"    Output file:  {path}")
    print(f"dimensions: {len(index)}")


def main(argv: Optional[Sequence[str]] = None) -> int:
    logging.basicConfig(
        level=getattr(logging, LOG_LEVEL, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    parser = build_parser()
    try:
        config, sources = parse_args(argv, parser)
    except HelpRequested:
        print_usage(parser)
        return 0
    except UsageError as e:
        print_usage(parser, str(e))
        return 2

    if not sources:
        log.info("no input files, reading standard input")

    index = WordIndex()
    read = process_sources(
        sources,
        index,
        stemmer=get_stemmer(config.stemmer),
        encoding=config.encoding,
        progress=config.progress,
    )
    sources = sources or [STDIN_NAME]

    try:
        written = write_dataset(index, sources, config.single_file, config.output_file)
    except DatasetWriteError as e:
        log.error("%s", e)
        return 1

    if config.verbose:
        print_summary(config, sources, read, written, index)
    print("Saved:", written[0])
    return 0


def run():
    sys.exit(main())


if __name__ == "__main__":
    run()
