"""Tests for matchers, rules and rule sets."""

import re

import pytest

from safe_command.errors import ConfigError
from safe_command.rules import (
    DEFAULT_RULE_SET, LiteralMatcher, PatternMatcher, Rule, RuleSet, matches, parse_matcher,
)


def test_plain_string_is_literal():
    matcher = parse_matcher("install")
    assert matcher == LiteralMatcher("install")
    assert matches(matcher, "install")
    assert not matches(matcher, "install2")


def test_slash_notation_is_pattern():
    matcher = parse_matcher(r"/^[\w@/.-]+$/")
    assert isinstance(matcher, PatternMatcher)
    assert matches(matcher, "my-package")
    assert matches(matcher, "@scope/pkg.js")
    assert not matches(matcher, "|")
    assert not matches(matcher, ";")


def test_pattern_is_searched_not_fully_matched():
    flag = parse_matcher("/^-/")
    assert matches(flag, "--save-dev")
    assert not matches(flag, "x-")
    assert matches(parse_matcher("/foo/"), "xxfooxx")


def test_pattern_flags():
    assert matches(parse_matcher("/^install$/i"), "INSTALL")
    assert not matches(parse_matcher("/^install$/"), "INSTALL")
    assert parse_matcher("/a.b/s").pattern.flags & re.DOTALL


def test_global_flag_does_not_make_matching_stateful():
    matcher = parse_matcher("/^a/g")
    assert matches(matcher, "abc")
    assert matches(matcher, "abc")


def test_word_class_is_ascii_unless_unicode_flag():
    assert not matches(parse_matcher(r"/^\w+$/"), "café")
    assert matches(parse_matcher(r"/^\w+$/u"), "café")


def test_unknown_flag_falls_back_to_literal():
    assert parse_matcher("/abc/z") == LiteralMatcher("/abc/z")


def test_invalid_regex_falls_back_to_literal():
    matcher = parse_matcher("/[unclosed/")
    assert matcher == LiteralMatcher("/[unclosed/")
    assert matches(matcher, "/[unclosed/")


def test_path_like_strings_are_literal():
    assert parse_matcher("/") == LiteralMatcher("/")
    assert parse_matcher("/usr") == LiteralMatcher("/usr")
    assert parse_matcher("src/") == LiteralMatcher("src/")


def test_non_string_matcher_rejected():
    with pytest.raises(ConfigError):
        parse_matcher(42)


def test_pattern_describe_keeps_source():
    assert parse_matcher("/^-/i").describe() == "/^-/i"
    assert parse_matcher("status").describe() == "status"


def test_rule_from_dict():
    rule = Rule.from_dict({"command": "npm", "allowedArgs": ["install", "/^-/"], "deniedArgs": ["publish"]})
    assert rule.program == "npm"
    assert rule.allowed[0] == LiteralMatcher("install")
    assert isinstance(rule.allowed[1], PatternMatcher)
    assert rule.denied == (LiteralMatcher("publish"),)
    assert not rule.is_program_only


def test_rule_from_dict_snake_case_keys():
    rule = Rule.from_dict({"command": "make", "allowed_args": ["build"]})
    assert rule.allowed == (LiteralMatcher("build"),)
    assert rule.denied is None


def test_program_only_rule():
    rule = Rule.from_dict({"command": "ls"})
    assert rule.is_program_only


def test_empty_allowed_list_is_not_absent():
    rule = Rule.from_dict({"command": "ls", "allowedArgs": []})
    assert rule.allowed == ()
    assert not rule.is_program_only


@pytest.mark.parametrize("data", [
    {},
    {"command": ""},
    {"command": 3},
    {"command": "ls", "allowedArgs": "all"},
    "ls",
])
def test_invalid_rule_dicts(data):
    with pytest.raises(ConfigError):
        Rule.from_dict(data)


def test_rule_set_lookup_is_exact():
    rules = RuleSet([Rule("ls"), Rule("git")])
    assert rules.get("ls") == Rule("ls")
    assert rules.get("LS") is None
    assert rules.get("/bin/ls") is None
    assert "git" in rules
    assert "rm" not in rules
    assert rules.programs == ["ls", "git"]
    assert len(rules) == 2
    assert [r.program for r in rules] == ["ls", "git"]


def test_rule_set_rejects_duplicates():
    with pytest.raises(ValueError):
        RuleSet([Rule("ls"), Rule("ls")])
    with pytest.raises(ConfigError):
        RuleSet.from_config([{"command": "ls"}, {"command": "ls"}])


def test_default_rule_set_contents():
    for program in ("ls", "cat", "echo", "pwd", "grep", "mkdir", "cp", "tsc", "curl", "pod"):
        assert DEFAULT_RULE_SET.get(program).is_program_only

    npm = DEFAULT_RULE_SET.get("npm")
    assert LiteralMatcher("install") in npm.allowed
    assert LiteralMatcher("publish") in npm.denied

    git = DEFAULT_RULE_SET.get("git")
    assert git.denied is None
    assert LiteralMatcher("status") in git.allowed

    assert "rm" not in DEFAULT_RULE_SET
    assert "npx" not in DEFAULT_RULE_SET
