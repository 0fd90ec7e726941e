import pytest

from minishell.parser import tokenize, trim


def test_trim_strips_surrounding_whitespace():
    assert trim("  \t ls -l \r\n") == "ls -l"


def test_trim_keeps_inner_whitespace():
    assert trim(" a  b ") == "a  b"


def test_trim_only_whitespace_gives_empty():
    assert trim(" \t\r\n ") == ""


def test_trim_empty():
    assert trim("") == ""


def test_trim_leaves_vertical_tab():
    assert trim("\vx\f") == "\vx\f"


def test_tokenize_splits_on_runs_of_whitespace():
    assert tokenize("ls   -l\t/tmp") == ["ls", "-l", "/tmp"]


def test_tokenize_empty_and_blank():
    assert tokenize("") == []
    assert tokenize("   \t\n") == []


def test_tokenize_vertical_tab_and_form_feed_separate():
    assert tokenize("a\vb\fc") == ["a", "b", "c"]


def test_tokenize_keeps_operators_attached():
    assert tokenize("echo hi>out") == ["echo", "hi>out"]


@pytest.mark.parametrize(
    "line",
    ["echo hello world", "  cat < in.txt > out.txt  ", "a\t\tb\nc", "x"],
)
def test_tokenize_round_trip(line):
    tokens = tokenize(line)
    assert tokenize(" ".join(tokens)) == tokens
    assert all(not any(ch.isspace() for ch in tok) for tok in tokens)