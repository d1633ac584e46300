#!/usr/bin/env python

"""
Whitelist validation of a tokenized command.

Every argument is checked on its own: denied matchers first, then allowed
matchers. This lets one rule cover variable-length invocations such as
`npm install a b c`, but it cannot express relations between arguments.
"""

from typing import Optional, Sequence

from .errors import UnauthorizedArgument, UnauthorizedCommand, ValidationError
from .rules import RuleSet, matches_any


def check_command(program: str, args: Sequence[str], rule_set: RuleSet) -> None:
    """Raise a ValidationError unless the rule set permits program + args"""
    rule = rule_set.get(program)
    if rule is None:
        raise UnauthorizedCommand(program)

    if rule.is_program_only:
        return

    for arg in args:
        if rule.denied is not None and matches_any(rule.denied, arg):
            raise UnauthorizedArgument(program, arg, denied=True)

        if rule.allowed is not None and not matches_any(rule.allowed, arg):
            raise UnauthorizedArgument(program, arg)


def validate_command(program: str, args: Sequence[str], rule_set: RuleSet) -> Optional[str]:
    """Return the rejection reason, or None when the command is allowed"""
    try:
        check_command(program, args, rule_set)
    except ValidationError as e:
        return str(e)
    return None
