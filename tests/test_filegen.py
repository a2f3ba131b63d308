import random

import pytest

from wordindex.filegen import (
    BUFFER_SIZE,
    DEFAULT_WORDS,
    generate_random_text,
    main,
    read_words,
)

WORDS = ["alpha", "beta", "gamma", "delta"]


def test_read_words_strips_and_skips_blank(tmp_path):
    path = tmp_path / "words.csv"
    path.write_text("  alpha \n\n\tbeta\r\n   \ngamma\n", encoding="utf-8")
    assert read_words(path) == ["alpha", "beta", "gamma"]


def test_read_words_missing_file_uses_defaults(tmp_path, capsys):
    assert read_words(tmp_path / "missing.csv") == list(DEFAULT_WORDS)
    assert "Error opening the file" in capsys.readouterr().err


def test_read_words_empty_file_uses_defaults(tmp_path, capsys):
    path = tmp_path / "empty.csv"
    path.write_text("\n  \n", encoding="utf-8")
    assert read_words(path) == list(DEFAULT_WORDS)
    assert "Empty csv file." in capsys.readouterr().err


@pytest.mark.parametrize("target", [1, 100, BUFFER_SIZE, 3 * BUFFER_SIZE + 17])
def test_generate_reaches_target(tmp_path, target):
    out = tmp_path / "out.txt"
    written = generate_random_text(out, target, WORDS, random.Random(1))
    data = out.read_bytes()
    assert written == len(data)
    assert target <= written < target + len("gamma ") + 1 + BUFFER_SIZE
    assert set(data.split()) <= {w.encode() for w in WORDS}


def test_generate_uses_only_spaces_and_newlines(tmp_path):
    out = tmp_path / "out.txt"
    generate_random_text(out, 5000, WORDS, random.Random(7))
    text = out.read_text(encoding="utf-8")
    assert text.endswith(" ") or text.endswith("\n")
    assert "\n" in text
    assert all(line == "" or line.endswith(" ") for line in text.split("\n"))


def test_generate_is_deterministic_with_seed(tmp_path):
    a = tmp_path / "a.txt"
    b = tmp_path / "b.txt"
    generate_random_text(a, 2000, WORDS, random.Random(42))
    generate_random_text(b, 2000, WORDS, random.Random(42))
    assert a.read_bytes() == b.read_bytes()


def test_generate_reports_progress(tmp_path):
    calls = []
    written = generate_random_text(
        tmp_path / "out.txt", 2 * BUFFER_SIZE + 5, WORDS, random.Random(3),
        progress=lambda done, total: calls.append((done, total)),
    )
    assert calls[-1] == (written, 2 * BUFFER_SIZE + 5)
    assert [done for done, _ in calls] == sorted(done for done, _ in calls)


def test_generate_zero_bytes(tmp_path):
    out = tmp_path / "out.txt"
    assert generate_random_text(out, 0, WORDS) == 0
    assert out.read_bytes() == b""


def test_generate_rejects_empty_word_list(tmp_path):
    with pytest.raises(ValueError):
        generate_random_text(tmp_path / "out.txt", 10, [])


def test_main_zero_size(tmp_path, capsys):
    out = tmp_path / "gen.txt"
    words = tmp_path / "words.csv"
    words.write_text("one\ntwo\n", encoding="utf-8")
    assert main(["0", str(out), str(words)]) == 0
    assert out.read_bytes() == b""
    assert "File generation complete" in capsys.readouterr().out