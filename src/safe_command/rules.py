#!/usr/bin/env python

"""
Whitelist rules: argument matchers, per-program rules and the rule set.

A matcher is either a literal (exact equality) or a pattern (regular
expression, searched like JavaScript's RegExp.test, so `/^-/` matches any
flag). Rules are looked up by exact program name.
"""

import re
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple, Union

from .constants import DEFAULT_ALLOWED_COMMANDS
from .errors import ConfigError
from .logger import logger

# /pattern/flags notation -> Python regex flags
PATTERN_FLAGS = {
    'i': re.IGNORECASE,
    'm': re.MULTILINE,
    's': re.DOTALL,
    'u': 0,
    'g': 0,  # global/sticky only affect stateful matching, which we never do
    'y': 0,
}


@dataclass(frozen=True)
class LiteralMatcher:
    value: str

    def matches(self, arg: str) -> bool:
        return arg == self.value

    def describe(self) -> str:
        return self.value


@dataclass(frozen=True)
class PatternMatcher:
    pattern: re.Pattern
    source: str

    def matches(self, arg: str) -> bool:
        return self.pattern.search(arg) is not None

    def describe(self) -> str:
        return self.source


Matcher = Union[LiteralMatcher, PatternMatcher]


def matches(matcher: Matcher, arg: str) -> bool:
    """Check a single argument against a single matcher"""
    return matcher.matches(arg)


def matches_any(matchers: Iterable[Matcher], arg: str) -> bool:
    return any(matches(m, arg) for m in matchers)


def parse_matcher(text: str) -> Matcher:
    """
    Turn a config string into a matcher.

    `/pattern/flags` becomes a PatternMatcher. Without the `u` flag the
    pattern is compiled with re.ASCII so `\\w` keeps its ASCII meaning.
    Unknown flags or a pattern that does not compile leave the string as a
    literal, so a broken pattern can only ever match itself.
    """
    if not isinstance(text, str):
        raise ConfigError(f"Argument matcher must be a string, got {type(text).__name__}: {text!r}")

    last_slash = text.rfind('/')
    if not text.startswith('/') or last_slash <= 0:
        return LiteralMatcher(text)

    body = text[1:last_slash]
    flag_chars = text[last_slash + 1:]

    flags = 0 if 'u' in flag_chars else re.ASCII
    for char in flag_chars:
        if char not in PATTERN_FLAGS:
            logger.warning(f"Unknown regex flag '{char}' in {text}, treating it as a literal")
            return LiteralMatcher(text)
        flags |= PATTERN_FLAGS[char]

    try:
        return PatternMatcher(re.compile(body, flags), text)
    except re.error as e:
        logger.warning(f"Invalid regex {text} ({e}), treating it as a literal")
        return LiteralMatcher(text)


def _parse_matcher_list(data: Mapping[str, Any], *keys: str) -> Optional[Tuple[Matcher, ...]]:
    for key in keys:
        if key in data and data[key] is not None:
            values = data[key]
            if not isinstance(values, list):
                raise ConfigError(f"'{key}' must be a list, got {type(values).__name__}")
            return tuple(parse_matcher(value) for value in values)
    return None


@dataclass(frozen=True)
class Rule:
    """Allowed and denied argument matchers for one program"""

    program: str
    allowed: Optional[Tuple[Matcher, ...]] = None
    denied: Optional[Tuple[Matcher, ...]] = None

    @property
    def is_program_only(self) -> bool:
        return self.allowed is None and self.denied is None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'Rule':
        """Build a rule from one entry of an allowedCommands list"""
        if not isinstance(data, Mapping):
            raise ConfigError(f"Rule must be a mapping, got {type(data).__name__}")

        program = data.get("command")
        if not isinstance(program, str) or not program:
            raise ConfigError(f"Rule is missing a 'command' name: {dict(data)!r}")

        return cls(
            program=program,
            allowed=_parse_matcher_list(data, "allowedArgs", "allowed_args"),
            denied=_parse_matcher_list(data, "deniedArgs", "denied_args"),
        )


class RuleSet:
    """Ordered, read-only collection of rules keyed by program name"""

    def __init__(self, rules: Iterable[Rule]):
        self._rules: Tuple[Rule, ...] = tuple(rules)
        by_program: Dict[str, Rule] = {}
        for rule in self._rules:
            if rule.program in by_program:
                raise ValueError(f"Duplicate rule for command '{rule.program}'")
            by_program[rule.program] = rule
        self._by_program = by_program

    @classmethod
    def from_config(cls, commands: List[Mapping[str, Any]]) -> 'RuleSet':
        """Build a rule set from a parsed allowedCommands list"""
        try:
            return cls(Rule.from_dict(entry) for entry in commands)
        except ValueError as e:
            raise ConfigError(str(e)) from e

    def get(self, program: str) -> Optional[Rule]:
        return self._by_program.get(program)

    @property
    def programs(self) -> List[str]:
        return [rule.program for rule in self._rules]

    def __contains__(self, program: object) -> bool:
        return program in self._by_program

    def __iter__(self) -> Iterator[Rule]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __repr__(self) -> str:
        return f"RuleSet({self.programs!r})"


DEFAULT_RULE_SET = RuleSet.from_config(DEFAULT_ALLOWED_COMMANDS)
