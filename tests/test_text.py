import pytest

from raycub.text import find, find_unquoted, split_words


def test_find_locates_needle():
    assert find("hello world", "world", 20) == 6


def test_find_missing_needle():
    assert find("hello world", "xyz", 20) == -1


def test_find_needle_longer_than_limit():
    assert find("hello world", "world", 3) == -1


def test_find_unquoted_skips_quoted_match():
    text = '"a/*b" /*'
    assert find_unquoted(text, "/*", len(text)) == text.rindex("/*")


def test_find_unquoted_matches_plain_text():
    assert find_unquoted("ab//cd", "//", 10) == 2


def test_find_unquoted_all_inside_quotes():
    assert find_unquoted('"//"', "//", 10) == -1


@pytest.mark.parametrize(
    "text, words",
    [
        ("  a\tb  c ", ["a", "b", "c"]),
        ("", []),
        ("one", ["one"]),
        ("\t\t", []),
    ],
)
def test_split_words(text, words):
    assert split_words(text) == words


def test_split_words_keeps_other_characters():
    assert split_words("x,y\nz w") == ["x,y\nz", "w"]