import pytest

from emberquest.words import concat_reversed, split_words


def test_split_key_value_line():
    assert split_words("name = prota_idle\n", "=\n ") == ["name", "prota_idle"]


def test_split_drops_runs_of_separators():
    assert split_words("a,,b,,,c", ",") == ["a", "b", "c"]


def test_split_leading_and_trailing_separators():
    assert split_words("  x y  ", " ") == ["x", "y"]


@pytest.mark.parametrize("text", ["", ",,,", "\n\n"])
def test_split_without_words(text):
    assert split_words(text, ",\n") == []


def test_split_no_separator_present():
    assert split_words("maps/map.conf", ":") == ["maps/map.conf"]


def test_split_nul_ends_word():
    assert split_words("ab\0cd", ",") == ["ab", "cd"]


def test_split_several_separator_kinds():
    words = split_words("base_rect=0,0,32,32\n", "=\n ")
    assert words == ["base_rect", "0,0,32,32"]
    assert split_words(words[1], ",") == ["0", "0", "32", "32"]


def test_split_words_never_contain_separators():
    words = split_words("a:b\nc: d", ":\n ")
    assert all(not set(w) & set(":\n ") for w in words)
    assert "".join(words) == "abcd"


def test_concat_puts_src_first():
    assert concat_reversed("world", "hello ") == "hello world"


def test_concat_with_empty_parts():
    assert concat_reversed("", "abc") == "abc"
    assert concat_reversed("abc", "") == "abc"