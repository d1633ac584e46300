#!/usr/bin/env python

"""
Shell-like word splitting without a shell.

Honors single quotes, double quotes and backslash escapes the way a POSIX
shell splits words, but never expands anything: `$`, `|`, `;`, `>` and
friends come out as ordinary characters of ordinary tokens.
"""

from typing import List, Optional

from .errors import CommandSyntaxError

QUOTE_CHARS = ('"', "'")
WHITESPACE_CHARS = (' ', '\t', '\n', '\r')


def tokenize(command: str) -> List[str]:
    """
    Split a command line into words.

    A backslash escapes the next character everywhere, including inside
    quotes. Closing a quote does not end the word, so `a"b"c` is `abc`.
    A dangling backslash at the end of input is ignored.

    Raises CommandSyntaxError when a quote is never closed.
    """
    tokens: List[str] = []
    current = ""
    quote: Optional[str] = None
    escape = False

    for char in command:
        if escape:
            current += char
            escape = False
            continue

        if char == '\\':
            escape = True
            continue

        if quote:
            if char == quote:
                quote = None
            else:
                current += char
        elif char in QUOTE_CHARS:
            quote = char
        elif char in WHITESPACE_CHARS:
            if current:
                tokens.append(current)
                current = ""
        else:
            current += char

    if quote:
        raise CommandSyntaxError(quote)

    if current:
        tokens.append(current)
    return tokens
