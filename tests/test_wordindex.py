import io

import pytest

from revindex.wordindex import (
    WordIndex,
    clean_word,
    find_word,
    format_occurrences,
    get_files,
    join_string,
    print_occurrences,
)


def _write(path, words):
    path.write_text(" ".join(words) + "\n")
    return str(path)


def test_clean_word_keeps_plain_lowercase():
    assert clean_word("hello") == "hello"


def test_clean_word_lowercases_and_strips_punctuation():
    assert clean_word("HeLLo!?,") == clean_word("hello")


def test_clean_word_keeps_apostrophes():
    assert clean_word("don't") == "don't"
    assert clean_word("books'") == "books'"


def test_clean_word_only_strips_trailing():
    assert clean_word("(quote") == "(quote"


def test_clean_word_all_punctuation_becomes_empty():
    assert clean_word("...;") == ""


def test_join_string_round_trip():
    words = ["the", "quick", "brown"]
    assert join_string(words).split(" ") == words


def test_find_word_single_match_context(tmp_path):
    words = ["a", "b", "hello", "c", "d", "e", "f"]
    path = _write(tmp_path / "t.txt", words)
    index = find_word(path, "hello")
    assert index.filename == path
    assert index.indexes == [3]
    assert index.phrases == [" ".join(words[0:5])]
    assert index.count == 1


def test_find_word_context_window_is_five_words(tmp_path):
    words = [f"w{i}" for i in range(1, 21)]
    words[9] = "Hello,"
    path = _write(tmp_path / "t.txt", words)
    index = find_word(path, "hello")
    assert index.indexes == [10]
    assert index.phrases == [" ".join(words[7:12])]


def test_find_word_match_at_end_uses_final_context(tmp_path):
    words = ["x", "y", "hello"]
    path = _write(tmp_path / "t.txt", words)
    index = find_word(path, "hello")
    assert index.indexes == [3]
    assert index.phrases == [" ".join(words)]


def test_find_word_adjacent_matches(tmp_path):
    words = ["hello", "hello", "a", "b", "c", "d"]
    path = _write(tmp_path / "t.txt", words)
    index = find_word(path, "hello")
    assert index.indexes == [1, 2]
    assert index.phrases == [" ".join(words[0:3]), " ".join(words[0:4])]
    assert index.count == len(index.indexes)


def test_find_word_splits_on_any_whitespace(tmp_path):
    path = tmp_path / "t.txt"
    path.write_text("one\ttwo\nhello\r\nthree")
    index = find_word(str(path), "hello")
    assert index.indexes == [3]


def test_find_word_missing_file(tmp_path):
    path = str(tmp_path / "nope.txt")
    index = find_word(path, "hello")
    assert index == WordIndex(filename=path)


def test_format_occurrences_report(tmp_path):
    found = WordIndex("a.txt", [3, 7], ["x y hello", "hello z"], 2)
    missing = WordIndex("b.txt")
    text = format_occurrences("hello", [found, missing])
    assert text.startswith("Found 2 instances of hello.\n")
    assert "hello found in a.txt at locations:\n" in text
    assert "Index 3: x y hello\nIndex 7: hello z\n\n" in text
    assert text.endswith("hello not found in b.txt\n")


def test_print_occurrences_writes_report():
    files = [WordIndex("c.txt", [1], ["hello"], 1)]
    out = io.StringIO()
    print_occurrences("hello", files, out)
    assert out.getvalue() == format_occurrences("hello", files)


def test_get_files_skips_dot_entries(tmp_path):
    for name in ("a.txt", "b.txt", ".hidden"):
        (tmp_path / name).write_text("x")
    names = get_files(str(tmp_path))
    assert sorted(names) == sorted(
        [f"{tmp_path}/a.txt", f"{tmp_path}/b.txt"]
    )


def test_get_files_missing_directory(tmp_path):
    with pytest.raises(OSError):
        get_files(str(tmp_path / "absent"))