#!/usr/bin/env python

"""
The run_safe_command tool.

Ties the pipeline together (tokenize, validate, execute) and turns its
outcome into the text a host agent receives. Transport-independent: a stdio
or HTTP server only has to pass the tool name and arguments to dispatch().
"""

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from .config import SafeCommandConfig
from .constants import TOOL_NAME
from .errors import CommandSyntaxError, EmptyCommand, ExecutionError, ValidationError
from .logger import logger
from .runner import ExecutionResult, execute
from .tokenizer import tokenize
from .validator import check_command

TOOL_DESCRIPTION = (
    "Execute a shell command from a pre-approved whitelist. Use this for environment setup, "
    "building, and other development tasks safely. NOTE: Shell features like pipes (|), "
    "redirects (>), and command substitution ($()) are NOT supported."
)


def tool_definition() -> Dict[str, Any]:
    """Tool name, description and JSON input schema, as listed to a host"""
    return {
        "name": TOOL_NAME,
        "description": TOOL_DESCRIPTION,
        "inputSchema": {
            "type": "object",
            "properties": {
                "command": {
                    "type": "string",
                    "description": "The full command to execute (e.g., 'npm install'). Quotes are supported.",
                },
            },
            "required": ["command"],
        },
    }


@dataclass(frozen=True)
class ToolResponse:
    text: str
    is_error: bool = False
    result: Optional[ExecutionResult] = None


def format_output(result: ExecutionResult) -> str:
    return f"Stdout:\n{result.stdout}\n\nStderr:\n{result.stderr}"


class SafeCommandTool:
    """Runs whitelisted command lines without a shell"""

    def __init__(self, config: Optional[SafeCommandConfig] = None):
        self.config = config or SafeCommandConfig()

    def authorize(self, command: str):
        """Tokenize and validate; returns (program, args) or raises"""
        tokens = tokenize(command)
        if not tokens:
            raise EmptyCommand()

        program, args = tokens[0], tokens[1:]
        try:
            check_command(program, args, self.config.rules)
        except ValidationError as e:
            logger.log_security_event("REJECTED", f"{command!r}: {e}")
            raise
        return program, args

    async def run(self, command: str) -> ExecutionResult:
        """Full pipeline; raises a SafeCommandError on any failure"""
        program, args = self.authorize(command)

        logger.info(f"Executing safe command: {program} {' '.join(args)}")
        try:
            result = await execute(
                program,
                args,
                timeout=self.config.timeout,
                output_cap=self.config.max_output_bytes,
            )
        except ExecutionError as e:
            logger.log_command_execution(command, False, str(e))
            raise

        logger.log_command_execution(command, True, result.stdout[:200])
        return result

    async def call(self, command: str) -> ToolResponse:
        """Run a command and format the outcome for the caller"""
        try:
            result = await self.run(command)
        except EmptyCommand as e:
            return ToolResponse(f"Error: {e}", is_error=True)
        except ValidationError as e:
            return ToolResponse(f"Error: Command validation failed. {e}", is_error=True)
        except (CommandSyntaxError, ExecutionError) as e:
            # unclosed quotes are reported as failed runs
            return ToolResponse(f"Execution failed:\n{e}", is_error=True)

        return ToolResponse(format_output(result), result=result)

    async def dispatch(self, name: str, arguments: Optional[Mapping[str, Any]] = None) -> ToolResponse:
        """Entry point for a transport: route a named tool call"""
        if name != TOOL_NAME:
            raise ValueError(f"Unknown tool: {name}")
        command = (arguments or {}).get("command") or ""
        return await self.call(str(command))
