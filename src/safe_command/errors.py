#!/usr/bin/env python

"""
Error types for Safe Command.

Every error carries the human-readable message that is reported to the caller
verbatim. Nothing here is retried; retry policy belongs to the caller.
"""

from typing import Optional


class SafeCommandError(Exception):
    """Base class for every failure reported by Safe Command"""


class ConfigError(SafeCommandError):
    """Configuration file could not be used"""


class EmptyCommand(SafeCommandError):
    def __init__(self):
        super().__init__("Command is empty.")


class CommandSyntaxError(SafeCommandError):
    """Command line could not be tokenized (unclosed quote)"""

    def __init__(self, quote: str):
        self.quote = quote
        super().__init__(f"Syntax error: Unclosed quote {quote}")


class ValidationError(SafeCommandError):
    """Command rejected by the whitelist"""


class UnauthorizedCommand(ValidationError):
    def __init__(self, program: str):
        self.program = program
        super().__init__(f"Command '{program}' is not in the allowed whitelist.")


class UnauthorizedArgument(ValidationError):
    def __init__(self, program: str, argument: str, denied: bool = False):
        self.program = program
        self.argument = argument
        self.denied = denied
        if denied:
            message = f"Argument '{argument}' for command '{program}' is explicitly denied."
        else:
            message = f"Argument '{argument}' for command '{program}' is not allowed."
        super().__init__(message)


class ExecutionError(SafeCommandError):
    """Accepted command failed while running"""


class SpawnError(ExecutionError):
    """The OS refused to start the program"""

    def __init__(self, program: str, cause: Exception):
        self.program = program
        self.cause = cause
        reason = getattr(cause, "strerror", None) or str(cause)
        super().__init__(f"Failed to start '{program}': {reason}")


class CommandTimeout(ExecutionError):
    def __init__(self, timeout: float):
        self.timeout = timeout
        super().__init__(f"Command timed out after {timeout:g}s")


class NonZeroExit(ExecutionError):
    def __init__(self, exit_code: int, stderr: str, stdout: Optional[str] = None):
        self.exit_code = exit_code
        self.stderr = stderr
        self.stdout = stdout
        super().__init__(f"Command exited with code {exit_code}\nStderr: {stderr}")
