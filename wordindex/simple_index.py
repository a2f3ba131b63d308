"""Inverted index mapping each word to the set of text files that contain it."""

from __future__ import annotations

import argparse
import codecs
import enum
import os
import re
import string
import sys
import time
from collections.abc import Iterable, Iterator, Mapping
from concurrent.futures import ThreadPoolExecutor

BUFFER_SIZE = 1 << 16
DEFAULT_OUTPUT = "indice_invertido.txt"
_ENCODING = "utf-8"
_ERRORS = "surrogateescape"

_WHITESPACE = re.compile(r"[ \t\n\v\f\r]+")
_ALNUM_RUN = re.compile(r"[A-Za-z0-9]+")
_SPACE_CHARS = frozenset(" \t\n\v\f\r")
_CLEAN_TABLE = str.maketrans(
    string.ascii_uppercase,
    string.ascii_lowercase,
    string.punctuation,
)

Index = dict[str, set[str]]


class TokenMode(enum.Enum):
    """How file contents are split into words."""

    CHUNKED = "chunked"
    """Fixed-size binary reads, whitespace-separated words without punctuation."""
    WORDS = "words"
    """Line by line, whitespace-separated words without punctuation."""
    ALNUM = "alnum"
    """Line by line, every run of letters and digits is a word."""


def _clean(word: str) -> str:
    return word.translate(_CLEAN_TABLE)


def tokenize_words(line: str) -> list[str]:
    """Split on whitespace, lower-case, drop punctuation and empty words."""
    return [w for w in map(_clean, _WHITESPACE.split(line)) if w]


def tokenize_alnum(line: str) -> list[str]:
    """Return every run of ASCII letters and digits, lower-cased."""
    return [match.group().lower() for match in _ALNUM_RUN.finditer(line)]


class ChunkTokenizer:
    """Tokenizes text arriving in arbitrary pieces, keeping words cut at a boundary."""

    def __init__(self) -> None:
        self._carry = ""

    def feed(self, text: str) -> list[str]:
        """Return the complete words of the text seen so far, holding back a cut word."""
        data = self._carry + text
        self._carry = ""
        if not data:
            return []
        pieces = _WHITESPACE.split(data)
        if data[-1] not in _SPACE_CHARS:
            self._carry = pieces.pop()
        return [w for w in map(_clean, pieces) if w]

    def finish(self) -> list[str]:
        """Return the word still held back, if any, and reset."""
        word = _clean(self._carry)
        self._carry = ""
        return [word] if word else []


def list_text_files(directory: str, sort: bool = False) -> list[str]:
    """List the ``.txt`` files directly inside ``directory``."""
    files = [
        f"{directory}/{entry.name}"
        for entry in os.scandir(directory)
        if len(entry.name) > 4 and entry.name.endswith(".txt") and entry.is_file()
    ]
    if sort:
        files.sort()
    return files


def _chunked_words(path: str) -> Iterator[str]:
    decoder = codecs.getincrementaldecoder(_ENCODING)(errors=_ERRORS)
    tokenizer = ChunkTokenizer()
    with open(path, "rb") as handle:
        while block := handle.read(BUFFER_SIZE):
            yield from tokenizer.feed(decoder.decode(block))
    yield from tokenizer.feed(decoder.decode(b"", final=True))
    yield from tokenizer.finish()


def _line_words(path: str, tokenize) -> Iterator[str]:
    with open(path, encoding=_ENCODING, errors=_ERRORS) as handle:
        for line in handle:
            yield from tokenize(line)


def index_file(path: str, mode: TokenMode = TokenMode.CHUNKED) -> set[str]:
    """Return the set of words found in one file."""
    mode = TokenMode(mode)
    if mode is TokenMode.CHUNKED:
        words = _chunked_words(path)
    elif mode is TokenMode.WORDS:
        words = _line_words(path, tokenize_words)
    else:
        words = _line_words(path, tokenize_alnum)
    return set(words)


def _index_files(files: Iterable[str], mode: TokenMode) -> Index:
    local: Index = {}
    for path in files:
        try:
            words = index_file(path, mode)
        except OSError:
            print(f"Could not open {path}", file=sys.stderr)
            continue
        for word in words:
            local.setdefault(word, set()).add(path)
    return local


def build_index(
    files: Iterable[str], workers: int = 1, mode: TokenMode = TokenMode.CHUNKED
) -> Index:
    """Index the files, dealt round-robin to ``workers`` threads.

    Files that cannot be opened are reported on stderr and skipped.
    """
    if workers < 1:
        raise ValueError("workers must be at least 1")
    mode = TokenMode(mode)
    files = list(files)
    shares = [files[i::workers] for i in range(workers)]
    index: Index = {}
    with ThreadPoolExecutor(max_workers=workers) as pool:
        for local in pool.map(lambda share: _index_files(share, mode), shares):
            for word, paths in local.items():
                index.setdefault(word, set()).update(paths)
    return index


def write_index(index: Mapping[str, Iterable[str]], path: str | os.PathLike[str]) -> None:
    """Write one ``word: file file `` line per word, words and files sorted."""
    with open(path, "w", encoding=_ENCODING, errors=_ERRORS) as out:
        for word in sorted(index):
            files = "".join(f"{name} " for name in sorted(index[word]))
            out.write(f"{word}: {files}\n")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="simple-index",
        description="Build an inverted index of the .txt files in a directory.",
    )
    parser.add_argument("directory")
    parser.add_argument("threads", type=int)
    parser.add_argument(
        "--mode",
        choices=[mode.value for mode in TokenMode],
        default=TokenMode.CHUNKED.value,
    )
    parser.add_argument("-o", "--output", default=DEFAULT_OUTPUT)
    args = parser.parse_args(argv)

    if args.threads < 1:
        print("The number of threads must be at least 1.", file=sys.stderr)
        return 1
    mode = TokenMode(args.mode)
    try:
        files = list_text_files(args.directory, sort=mode is TokenMode.ALNUM)
    except OSError:
        print(f"Cannot open directory: {args.directory}", file=sys.stderr)
        return 1
    if not files:
        print("No .txt files in the directory.", file=sys.stderr)
        return 1

    started = time.perf_counter()
    index = build_index(files, args.threads, mode)
    elapsed = time.perf_counter() - started
    print(f"Inverted index built in {elapsed:g} seconds")

    try:
        write_index(index, args.output)
    except OSError as exc:
        print(f"Cannot write index: {exc}", file=sys.stderr)
        return 1
    print(f"Inverted index saved as '{args.output}'.")
    return 0


if __name__ == "__main__":
    sys.exit(main())