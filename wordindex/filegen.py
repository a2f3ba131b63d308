"""Generation of large text files made of random words."""

from __future__ import annotations

import argparse
import os
import random
import sys
import time
from collections.abc import Callable, Sequence

GB = 1024 * 1024 * 1024
BUFFER_SIZE = 8192
MAX_SIZE_GB = 9
DEFAULT_WORDS = ("the", "be", "to", "of", "and", "a", "in", "that", "have", "it", "for")

ProgressCallback = Callable[[int, int], None]


def read_words(path: str | os.PathLike[str]) -> list[str]:
    """Read one word per line, trimmed; fall back to a short default list."""
    try:
        with open(path, encoding="utf-8") as handle:
            words = [line.strip() for line in handle]
    except OSError:
        print(f"Error opening the file: {path}", file=sys.stderr)
        return list(DEFAULT_WORDS)
    words = [word for word in words if word]
    if not words:
        print("Empty csv file.", file=sys.stderr)
        return list(DEFAULT_WORDS)
    return words


def generate_random_text(
    path: str | os.PathLike[str],
    target_bytes: int,
    words: Sequence[str],
    rng: random.Random | None = None,
    progress: ProgressCallback | None = None,
) -> int:
    """Write random space-separated words until at least ``target_bytes`` are written.

    A line break follows a word with probability 1/15. ``progress`` is called
    with ``(bytes_written, target_bytes)`` after every buffer written. Returns
    the number of bytes written.
    """
    if not words:
        raise ValueError("word list is empty")
    rng = rng or random.Random()
    encoded = [f"{word} ".encode("utf-8") for word in words]
    written = 0
    with open(path, "wb") as out:
        while written < target_bytes:
            parts: list[bytes] = []
            length = 0
            while length < BUFFER_SIZE and written + length < target_bytes:
                piece = rng.choice(encoded)
                parts.append(piece)
                length += len(piece)
                if rng.randrange(15) == 0:
                    parts.append(b"\n")
                    length += 1
            out.write(b"".join(parts))
            written += length
            if progress is not None:
                progress(written, target_bytes)
    return written


def _progress_printer() -> ProgressCallback:
    started = time.perf_counter()
    interval = GB // 10
    last_step = 0

    def report(written: int, target: int) -> None:
        nonlocal last_step
        step = written // interval
        if step <= last_step:
            return
        last_step = step
        elapsed = int(time.perf_counter() - started)
        percent = written / target * 100.0
        mb_written = written / (1024.0 * 1024.0)
        rate = mb_written / elapsed if elapsed > 0 else 0
        print(f"\rProgress: {percent:g}% ({mb_written:g} MB, {rate:g} MB/s)", end="", flush=True)

    return report


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="filegen", description="Generate a large file of random words."
    )
    parser.add_argument("size_gb", nargs="?", type=int, help="size in GB (at most 9)")
    parser.add_argument("output", nargs="?", default="random_words.txt")
    parser.add_argument("word_list", nargs="?", default="words.csv")
    args = parser.parse_args(argv)

    size_gb = 20
    if args.size_gb is not None:
        size_gb = max(0, args.size_gb)
        if size_gb > MAX_SIZE_GB:
            print(f"Warning: Limiting size to {MAX_SIZE_GB} GB")
            size_gb = MAX_SIZE_GB

    words = read_words(args.word_list)
    print(f"Generating {size_gb} GB of random words to {args.output}")
    started = time.perf_counter()
    try:
        written = generate_random_text(
            args.output, size_gb * GB, words, progress=_progress_printer()
        )
    except OSError as exc:
        print(f"Error opening output file: {exc}", file=sys.stderr)
        return 1
    print(f"\nFile generation complete: {args.output} ({written} bytes)")
    print(f"Time taken: {int(time.perf_counter() - started)} seconds")
    return 0


if __name__ == "__main__":
    sys.exit(main())