import pytest

from wordindex.simple_index import (
    ChunkTokenizer,
    TokenMode,
    build_index,
    index_file,
    list_text_files,
    main,
    tokenize_alnum,
    tokenize_words,
    write_index,
)


@pytest.fixture
def corpus(tmp_path):
    (tmp_path / "a.txt").write_text("Hello, World!\nthe cat\n")
    (tmp_path / "b.txt").write_text("the dog... hello\n")
    (tmp_path / "c.txt").write_text("don't stop")
    (tmp_path / "notes.md").write_text("ignored words")
    (tmp_path / ".txt").write_text("too short a name")
    return tmp_path


def test_tokenize_words_strips_punctuation_and_case():
    assert tokenize_words("Hello, World!  ...  don't") == ["hello", "world", "dont"]


def test_tokenize_words_empty_and_blank():
    assert tokenize_words("") == []
    assert tokenize_words(" \t\n") == []


def test_tokenize_alnum_splits_on_non_alnum():
    assert tokenize_alnum("don't STOP-now42") == ["don", "t", "stop", "now42"]


def test_chunk_tokenizer_holds_cut_word():
    tok = ChunkTokenizer()
    assert tok.feed("hello wor") == ["hello"]
    assert tok.feed("ld again ") == ["world", "again"]
    assert tok.finish() == []


def test_chunk_tokenizer_finish_returns_trailing_word():
    tok = ChunkTokenizer()
    assert tok.feed("Alpha Beta,") == ["alpha"]
    assert tok.finish() == ["beta"]
    assert tok.finish() == []


@pytest.mark.parametrize("size", [1, 2, 3, 5, 7, 100])
def test_chunk_tokenizer_matches_whole_text(size):
    text = "The quick, brown fox!  jumps\nover the lazy-dog. !!! end"
    tok = ChunkTokenizer()
    words = []
    for i in range(0, len(text), size):
        words.extend(tok.feed(text[i : i + size]))
    words.extend(tok.finish())
    assert words == tokenize_words(text)


def test_list_text_files(corpus):
    files = list_text_files(str(corpus), sort=True)
    assert files == [f"{corpus}/a.txt", f"{corpus}/b.txt", f"{corpus}/c.txt"]


def test_list_text_files_missing_directory(tmp_path):
    with pytest.raises(OSError):
        list_text_files(str(tmp_path / "missing"))


def test_index_file_modes(corpus):
    path = str(corpus / "c.txt")
    assert index_file(path, TokenMode.CHUNKED) == {"dont", "stop"}
    assert index_file(path, TokenMode.WORDS) == {"dont", "stop"}
    assert index_file(path, TokenMode.ALNUM) == {"don", "t", "stop"}


def test_index_file_chunked_large_file_matches_line_mode(tmp_path):
    path = tmp_path / "big.txt"
    path.write_text(("lorem ipsum, dolor sit amet " * 5000) + "finalword")
    assert index_file(str(path), TokenMode.CHUNKED) == index_file(
        str(path), TokenMode.WORDS
    )


def test_index_file_missing_raises(tmp_path):
    with pytest.raises(OSError):
        index_file(str(tmp_path / "nope.txt"))


def test_build_index_maps_words_to_files(corpus):
    files = list_text_files(str(corpus), sort=True)
    index = build_index(files, 2)
    a, b, c = files
    assert index["hello"] == {a, b}
    assert index["the"] == {a, b}
    assert index["dog"] == {b}
    assert index["dont"] == {c}


@pytest.mark.parametrize("workers", [1, 2, 3, 8])
def test_build_index_independent_of_workers(corpus, workers):
    files = list_text_files(str(corpus), sort=True)
    assert build_index(files, workers, TokenMode.WORDS) == build_index(
        files, 1, TokenMode.WORDS
    )


def test_build_index_skips_missing_files(corpus, capsys):
    good = f"{corpus}/c.txt"
    index = build_index([good, f"{corpus}/missing.txt"], 2)
    assert index == {"dont": {good}, "stop": {good}}
    assert "missing.txt" in capsys.readouterr().err


def test_build_index_rejects_zero_workers(corpus):
    with pytest.raises(ValueError):
        build_index([], 0)


def test_write_index_format(tmp_path):
    out = tmp_path / "index.txt"
    write_index({"b": {"y", "x"}, "a": {"z"}}, out)
    assert out.read_text() == "a: z \nb: x y \n"


def test_main_writes_index(corpus, tmp_path):
    out = tmp_path / "out" / "idx.txt"
    out.parent.mkdir()
    assert main([str(corpus), "3", "-o", str(out)]) == 0
    lines = out.read_text().splitlines()
    assert f"dog: {corpus}/b.txt " in lines
    assert f"hello: {corpus}/a.txt {corpus}/b.txt " in lines


def test_main_alnum_mode(corpus, tmp_path):
    out = tmp_path / "idx.txt"
    assert main([str(corpus), "1", "--mode", "alnum", "-o", str(out)]) == 0
    assert f"don: {corpus}/c.txt " in out.read_text().splitlines()


def test_main_no_text_files(tmp_path):
    empty = tmp_path / "empty"
    empty.mkdir()
    assert main([str(empty), "2", "-o", str(tmp_path / "x.txt")]) == 1


def test_main_missing_directory(tmp_path):
    assert main([str(tmp_path / "missing"), "2"]) == 1