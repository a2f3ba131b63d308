# wordindex

Small tools for working with plain-text corpora:

- count word frequencies in a file, in one pass or split into byte ranges
  counted by worker threads (`wordindex.wordcount`);
- generate large files of random words for benchmarking (`wordindex.filegen`);
- build a simple inverted index, word → files, over the `.txt` files of a
  directory (`wordindex.simple_index`);
- build a positional inverted index with document ids, term frequencies and
  positions, and query it (`wordindex.positional_index`).

No third-party libraries are needed.

## Installation

```
pip install .
```

For running the tests:

```
pip install .[test]
pytest
```

## Commands

### Word count

```
wordcount FILE [NUM_THREADS]
```

Words are separated by whitespace, lower-cased, and stripped of every character
that is not an ASCII letter or digit; words left empty are dropped. The command
prints each distinct word with its count, most frequent first and ties in
alphabetical order, then the number of distinct words and the elapsed time in
milliseconds.

Given `NUM_THREADS`, the file is split into that many byte ranges (at least
one), each counted by its own thread. A word cut by a range boundary is counted
once, by the range in which it starts.

### Random text generation

```
wordindex-filegen [SIZE_GB] [OUTPUT] [WORD_LIST]
```

Writes random words, each followed by a space and, with probability 1/15, a
line break, until at least `SIZE_GB` gigabytes have been written to `OUTPUT`
(default `random_words.txt`). Without `SIZE_GB` the size is 20 GB; a size given
on the command line is limited to 9 GB. Words come from `WORD_LIST` (default
`words.csv`), one per line, trimmed. If that file cannot be read or holds no
words, a short built-in list of common English words is used. Progress is shown
every tenth of a gigabyte.

### Simple inverted index

```
wordindex-simple DIRECTORY NUM_THREADS [--mode {chunked,words,alnum}] [-o OUTPUT]
```

Indexes every `.txt` file directly inside `DIRECTORY` (not its
subdirectories), with files dealt round-robin to `NUM_THREADS` threads, and
writes `OUTPUT` (default `indice_invertido.txt`): one `word: file file ` line
per word, words and files sorted. Files that cannot be opened are reported and
skipped.

Modes:

- `chunked` (default): the file is read in 64 KiB blocks; words are separated
  by whitespace, lower-cased, with ASCII punctuation removed. Words cut at a
  block boundary are joined back together.
- `words`: the same word rules, reading line by line.
- `alnum`: every run of ASCII letters and digits is a word, lower-cased.

### Positional inverted index

```
wordindex-positional DIRECTORY NUM_THREADS [-o OUTPUT] [-m MAPPING] [--no-search]
```

Recursively finds all `.txt` files under `DIRECTORY`, gives each an id in
sorted path order, and indexes them in contiguous shares across at most
`NUM_THREADS` threads. Tokens are separated by whitespace and keep only ASCII
letters and digits, lower-cased. Positions count the tokens of a document from
zero.

Two files are written:

- `OUTPUT` (default `inverted_index.idx`): one line per term, terms sorted,
  of the form `term N id freq pos pos ... | id freq pos ... | `, postings
  ordered by document id;
- `MAPPING` (default `document_mapping.txt`): one `id path` line per document.

Unless `--no-search` is given, the command then reads queries from standard
input and prints the documents that contain every word of the query. Type
`salir` to quit.

## Library use

```python
from wordindex.wordcount import count_words, count_words_parallel, rank_counts
from wordindex.simple_index import TokenMode, build_index as build_simple, list_text_files
from wordindex.positional_index import build_index

counts = count_words("book.txt")
for word, n in rank_counts(counts)[:10]:
    print(word, n)

counts = count_words_parallel("book.txt", workers=4)

simple = build_simple(list_text_files("corpus"), workers=2, mode=TokenMode.ALNUM)
print(sorted(simple.get("fox", ())))

index = build_index(["a.txt", "b.txt"], workers=2)
for doc in index.search("quick fox"):
    print(doc.doc_id, doc.path)
index.save("inverted_index.idx")
index.save_documents("document_mapping.txt")
```

Other helpers include `wordcount.clean_word`, `wordcount.chunk_bounds`,
`filegen.read_words` and `filegen.generate_random_text` (which takes an
optional `random.Random` and a progress callback), `simple_index.ChunkTokenizer`,
`positional_index.tokenize`, `positional_index.find_text_files` and
`positional_index.merge_partial_indices`.

## Limitations

The index files are written for reading by people or other tools; the package
has no function or command that loads a saved index back. Searching works only
on an index built in the same run. Queries match whole normalised words; there
is no phrase, prefix or ranked search, even though positions are recorded.