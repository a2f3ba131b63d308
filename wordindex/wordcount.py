"""Word frequency counting over text files, sequentially or split into chunks."""

from __future__ import annotations

import argparse
import os
import re
import sys
import time
from collections import Counter
from collections.abc import Iterable, Mapping
from concurrent.futures import ThreadPoolExecutor

_WHITESPACE = re.compile(rb"\s")
_READ_BLOCK = 1 << 16


def clean_word(word: str) -> str:
    """Lower-case a word and drop every character that is not an ASCII letter or digit."""
    return "".join(c.lower() for c in word if c.isascii() and c.isalnum())


def _count_tokens(tokens: Iterable[bytes]) -> Counter[str]:
    counts: Counter[str] = Counter()
    for token in tokens:
        cleaned = clean_word(token.decode("latin-1"))
        if cleaned:
            counts[cleaned] += 1
    return counts


def count_words(path: str | os.PathLike[str]) -> Counter[str]:
    """Count the cleaned words of a whole file."""
    with open(path, "rb") as handle:
        return _count_tokens(token for line in handle for token in line.split())


def chunk_bounds(size: int, parts: int) -> list[tuple[int, int]]:
    """Split ``size`` bytes into ``parts`` contiguous ranges; the last one takes the remainder."""
    if parts < 1:
        raise ValueError("parts must be at least 1")
    if size < 0:
        raise ValueError("size must not be negative")
    step = size // parts
    return [
        (i * step, size if i == parts - 1 else (i + 1) * step)
        for i in range(parts)
    ]


def _read_until_space(handle) -> bytes:
    pieces = []
    while block := handle.read(_READ_BLOCK):
        match = _WHITESPACE.search(block)
        if match:
            pieces.append(block[: match.start()])
            break
        pieces.append(block)
    return b"".join(pieces)


def count_words_in_chunk(
    path: str | os.PathLike[str], start: int, end: int
) -> Counter[str]:
    """Count the words that begin inside the byte range ``[start, end)``.

    A word cut at ``start`` belongs to the previous chunk and is skipped; a word
    cut at ``end`` is read to its end, so the chunks of a file together count
    every word exactly once.
    """
    if start < 0 or end < start:
        raise ValueError("invalid chunk range")
    with open(path, "rb") as handle:
        inside_word = False
        if start > 0:
            handle.seek(start - 1)
            previous = handle.read(1)
            inside_word = bool(previous) and not previous.isspace()
        handle.seek(start)
        data = handle.read(end - start)
        if inside_word:
            match = _WHITESPACE.search(data)
            data = data[match.start():] if match else b""
        tokens = data.split()
        if tokens and not data[-1:].isspace():
            tokens[-1] += _read_until_space(handle)
    return _count_tokens(tokens)


def count_words_parallel(
    path: str | os.PathLike[str], workers: int | None = None
) -> Counter[str]:
    """Count the words of a file by splitting it into one chunk per worker."""
    if workers is None:
        workers = os.cpu_count() or 1
    workers = max(1, workers)
    size = os.path.getsize(path)
    bounds = chunk_bounds(size, workers)
    total: Counter[str] = Counter()
    with ThreadPoolExecutor(max_workers=workers) as pool:
        for counts in pool.map(lambda b: count_words_in_chunk(path, *b), bounds):
            total.update(counts)
    return total


def rank_counts(counts: Mapping[str, int]) -> list[tuple[str, int]]:
    """Order words by descending count, ties broken alphabetically."""
    return sorted(counts.items(), key=lambda item: (-item[1], item[0]))


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="wordcount", description="Count word frequencies in a text file."
    )
    parser.add_argument("filename")
    parser.add_argument(
        "threads",
        nargs="?",
        type=int,
        help="split the file into this many chunks counted concurrently",
    )
    args = parser.parse_args(argv)

    started = time.perf_counter()
    if not os.path.isfile(args.filename):
        print(f"Error: {args.filename}", file=sys.stderr)
        return 1

    try:
        if args.threads is None:
            counts = count_words(args.filename)
        else:
            workers = max(1, args.threads)
            size = os.path.getsize(args.filename)
            print(f"Processing file: {args.filename} ({size} bytes)")
            print(f"Using {workers} threads")
            counts = count_words_parallel(args.filename, workers)
    except OSError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    elapsed_ms = int((time.perf_counter() - started) * 1000)

    print("Results:")
    print("Word\t\tCount")
    print("------------------------")
    for word, count in rank_counts(counts):
        print(f"{word}\t\t{count}")
    print(f"\nDistinct words: {len(counts)}")
    print(f"Time: {elapsed_ms} milliseconds")
    return 0


if __name__ == "__main__":
    sys.exit(main())