"""Positional inverted index: term frequencies and word positions per document."""

from __future__ import annotations

import argparse
import os
import re
import sys
import time
from collections.abc import Iterable, Mapping, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_INDEX_FILE = "inverted_index.idx"
DEFAULT_MAPPING_FILE = "document_mapping.txt"
QUIT_WORD = "salir"
_ENCODING = "utf-8"
_ERRORS = "surrogateescape"
_WHITESPACE = re.compile(r"[ \t\n\v\f\r]+")


@dataclass(frozen=True)
class Document:
    """A file taking part in the index, with the identifier its postings refer to."""

    path: str
    doc_id: int


@dataclass
class Posting:
    """The occurrences of one term in one document."""

    doc_id: int
    positions: list[int] = field(default_factory=list)

    @property
    def frequency(self) -> int:
        return len(self.positions)


Postings = dict[str, list[Posting]]


def normalize_token(token: str) -> str:
    """Keep only ASCII letters and digits, lower-cased."""
    return "".join(c.lower() for c in token if c.isascii() and c.isalnum())


def tokenize(text: str) -> list[str]:
    """Split on whitespace and normalize, dropping tokens that end up empty."""
    return [t for t in map(normalize_token, _WHITESPACE.split(text)) if t]


def find_text_files(directory: str | os.PathLike[str]) -> list[str]:
    """Return every regular ``.txt`` file under ``directory``, recursively, sorted."""
    root = Path(directory)
    return sorted(
        str(path)
        for path in root.rglob("*")
        if path.suffix == ".txt" and path.is_file()
    )


def index_file(path: str | os.PathLike[str], doc_id: int) -> dict[str, Posting]:
    """Read one document and return a posting for each of its terms.

    Positions count the terms of the whole document, across lines, from zero.
    """
    postings: dict[str, Posting] = {}
    position = 0
    with open(path, encoding=_ENCODING, errors=_ERRORS) as handle:
        for line in handle:
            for token in tokenize(line):
                posting = postings.get(token)
                if posting is None:
                    postings[token] = posting = Posting(doc_id)
                posting.positions.append(position)
                position += 1
    return postings


def merge_partial_indices(partials: Iterable[Mapping[str, Sequence[Posting]]]) -> Postings:
    """Join partial indices, each term's postings ordered by document id."""
    merged: Postings = {}
    for partial in partials:
        for term, postings in partial.items():
            merged.setdefault(term, []).extend(postings)
    for postings in merged.values():
        postings.sort(key=lambda posting: posting.doc_id)
    return merged


@dataclass
class PositionalIndex:
    """Terms mapped to their postings, plus the documents they refer to."""

    terms: Postings = field(default_factory=dict)
    documents: list[Document] = field(default_factory=list)

    def search(self, query: str) -> list[Document]:
        """Return the documents containing every term of the query, by id."""
        query_terms = tokenize(query)
        if not query_terms:
            return []
        result: set[int] | None = None
        for term in query_terms:
            postings = self.terms.get(term)
            if postings is None:
                return []
            ids = {posting.doc_id for posting in postings}
            result = ids if result is None else result & ids
        by_id = {doc.doc_id: doc for doc in self.documents}
        return [by_id[doc_id] for doc_id in sorted(result or ()) if doc_id in by_id]

    def save(self, path: str | os.PathLike[str]) -> None:
        """Write ``term n id freq pos ... | ...`` lines, terms sorted."""
        with open(path, "w", encoding=_ENCODING, errors=_ERRORS) as out:
            for term in sorted(self.terms):
                postings = self.terms[term]
                parts = [f"{term} {len(postings)} "]
                for posting in postings:
                    parts.append(f"{posting.doc_id} {posting.frequency} ")
                    parts.extend(f"{pos} " for pos in posting.positions)
                    parts.append("| ")
                out.write("".join(parts) + "\n")

    def save_documents(self, path: str | os.PathLike[str]) -> None:
        """Write one ``id path`` line per document."""
        with open(path, "w", encoding=_ENCODING, errors=_ERRORS) as out:
            for doc in self.documents:
                out.write(f"{doc.doc_id} {doc.path}\n")


def _index_share(share: Sequence[tuple[int, str]]) -> tuple[Postings, list[Document]]:
    partial: Postings = {}
    documents: list[Document] = []
    for doc_id, path in share:
        try:
            postings = index_file(path, doc_id)
        except OSError:
            print(f"Error opening file: {path}", file=sys.stderr)
            continue
        documents.append(Document(path, doc_id))
        for term, posting in postings.items():
            partial.setdefault(term, []).append(posting)
    return partial, documents


def build_index(files: Iterable[str | os.PathLike[str]], workers: int = 1) -> PositionalIndex:
    """Index the files, split into contiguous shares among at most ``workers`` threads.

    Each file gets the id of its place in ``files``. Files that cannot be opened
    are reported on stderr and left out of the documents.
    """
    if workers < 1:
        raise ValueError("workers must be at least 1")
    numbered = [(doc_id, os.fspath(path)) for doc_id, path in enumerate(files)]
    count = min(workers, len(numbered))
    if count == 0:
        return PositionalIndex()
    per_share, remainder = divmod(len(numbered), count)
    shares = []
    start = 0
    for i in range(count):
        stop = start + per_share + (1 if i < remainder else 0)
        shares.append(numbered[start:stop])
        start = stop
    with ThreadPoolExecutor(max_workers=count) as pool:
        results = list(pool.map(_index_share, shares))
    terms = merge_partial_indices(partial for partial, _ in results)
    documents = sorted(
        (doc for _, docs in results for doc in docs), key=lambda doc: doc.doc_id
    )
    return PositionalIndex(terms, documents)


def _print_results(index: PositionalIndex, query: str) -> None:
    found = index.search(query)
    print(f"Results for: {query}")
    print(f"Documents found: {len(found)}")
    for doc in found:
        print(f"- {doc.path}")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="positional-index",
        description="Build a positional inverted index of the .txt files under a directory.",
    )
    parser.add_argument("directory")
    parser.add_argument("threads", type=int)
    parser.add_argument("-o", "--output", default=DEFAULT_INDEX_FILE)
    parser.add_argument("-m", "--mapping", default=DEFAULT_MAPPING_FILE)
    parser.add_argument(
        "--no-search", action="store_true", help="do not start the interactive search"
    )
    args = parser.parse_args(argv)

    if args.threads < 1:
        print("The number of threads must be at least 1.", file=sys.stderr)
        return 1
    if not os.path.isdir(args.directory):
        print(f"Cannot open directory: {args.directory}", file=sys.stderr)
        return 1

    started = time.perf_counter()
    files = find_text_files(args.directory)
    print(f"Found {len(files)} files to index.")
    if not files:
        print("No .txt files to index.", file=sys.stderr)
        return 1

    index = build_index(files, args.threads)
    elapsed = time.perf_counter() - started
    print(f"Indexing completed in {elapsed:g} seconds.")
    print(f"Unique terms: {len(index.terms)}")
    print(f"Documents processed: {len(index.documents)}")

    try:
        index.save(args.output)
        index.save_documents(args.mapping)
    except OSError as exc:
        print(f"Cannot write output: {exc}", file=sys.stderr)
        return 1
    print(f"Index saved in {args.output}")
    print(f"Document mapping saved in {args.mapping}")

    if args.no_search:
        return 0
    prompt = f"Enter a query (or '{QUIT_WORD}' to finish): "
    print(prompt, end="", flush=True)
    while line := sys.stdin.readline():
        query = line.rstrip("\r\n")
        if query == QUIT_WORD:
            break
        _print_results(index, query)
        print("\n" + prompt, end="", flush=True)
    return 0


if __name__ == "__main__":
    sys.exit(main())