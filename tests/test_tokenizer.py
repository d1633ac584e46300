"""Tests for shell-like word splitting.

Run with: python -m pytest tests/test_tokenizer.py -v
"""

import pytest

from safe_command.errors import CommandSyntaxError
from safe_command.tokenizer import tokenize


def test_simple_command():
    assert tokenize("ls -la") == ["ls", "-la"]


def test_double_quotes():
    assert tokenize('git commit -m "fix bug"') == ["git", "commit", "-m", "fix bug"]


def test_single_quotes():
    assert tokenize("echo 'hello world'") == ["echo", "hello world"]


def test_adjacent_quotes_concatenate():
    assert tokenize('a"b"c') == ["abc"]
    assert tokenize("pre'mid dle'post") == ["premid dlepost"]


def test_empty_input():
    assert tokenize("") == []
    assert tokenize("   \t\n ") == []


def test_all_whitespace_kinds_split():
    assert tokenize("a\tb\nc\rd  e") == ["a", "b", "c", "d", "e"]


def test_escaped_quotes_outside_quotes():
    assert tokenize('echo \\"hello\\"') == ["echo", '"hello"']


def test_escape_is_honored_inside_quotes():
    assert tokenize('echo "say \\"hi\\""') == ["echo", 'say "hi"']
    assert tokenize("echo 'it\\'s'") == ["echo", "it's"]


def test_escaped_space_joins_words():
    assert tokenize("cat my\\ file.txt") == ["cat", "my file.txt"]


def test_escaped_backslash():
    assert tokenize("echo a\\\\b") == ["echo", "a\\b"]


def test_other_quote_is_literal_inside_quotes():
    assert tokenize("echo \"it's\"") == ["echo", "it's"]
    assert tokenize("echo '\"x\"'") == ["echo", '"x"']


def test_trailing_backslash_is_ignored():
    assert tokenize("echo hi\\") == ["echo", "hi"]
    assert tokenize("\\") == []


def test_empty_quotes_produce_no_token():
    assert tokenize('echo ""') == ["echo"]


def test_shell_metacharacters_are_plain_text():
    assert tokenize("npm install | bash") == ["npm", "install", "|", "bash"]
    assert tokenize("echo $(whoami);ls>out") == ["echo", "$(whoami);ls>out"]


@pytest.mark.parametrize("command, quote", [
    ('echo "hello', '"'),
    ("echo 'hello", "'"),
    ("echo \"it's", '"'),
])
def test_unclosed_quote(command, quote):
    with pytest.raises(CommandSyntaxError, match="Unclosed quote") as excinfo:
        tokenize(command)
    assert excinfo.value.quote == quote
    assert str(excinfo.value) == f"Syntax error: Unclosed quote {quote}"


def test_escaped_closing_quote_leaves_quote_open():
    with pytest.raises(CommandSyntaxError):
        tokenize('echo "abc\\"')
