#!/usr/bin/env python
"""
Safe Command - Main Entry Point

Runs a command line only if the program and every argument are on the
whitelist, without ever starting a shell.

Usage:
    safe-command "npm install my-package"
    safe-command --check "git push origin main"
    safe-command --list-rules

Configuration:
    $SAFE_COMMAND_CONFIG_PATH, or ~/.config/safe-command/config.yaml
    (config.yml / config.json), otherwise the built-in whitelist.
"""

import argparse
import asyncio
import sys
from pathlib import Path
from typing import List, Optional

from .config import SafeCommandConfig, load_config
from .constants import APP_NAME, APP_VERSION, ERROR_EXIT_CODE, SUCCESS_EXIT_CODE, USAGE_EXIT_CODE
from .errors import SafeCommandError
from .tool import SafeCommandTool
from .ui import UIManager


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="safe-command",
        description="Run a whitelisted command without a shell.",
    )
    parser.add_argument("command", nargs="?", help="command line to run, quoted as one argument")
    parser.add_argument("--config", type=Path, help="path to a JSON or YAML config file")
    parser.add_argument("--timeout", type=float, help="seconds before the command is killed")
    parser.add_argument("--max-output", type=int, metavar="BYTES", help="per-stream output cap in bytes")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--check", action="store_true", help="validate the command without running it")
    mode.add_argument("--list-rules", action="store_true", help="show the active whitelist and exit")
    parser.add_argument("--version", action="version", version=f"{APP_NAME} {APP_VERSION}")
    return parser


def _apply_overrides(config: SafeCommandConfig, args: argparse.Namespace) -> SafeCommandConfig:
    return SafeCommandConfig(
        rules=config.rules,
        timeout=args.timeout if args.timeout is not None else config.timeout,
        max_output_bytes=args.max_output if args.max_output is not None else config.max_output_bytes,
        theme=config.theme,
        source=config.source,
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the Safe Command CLI"""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.timeout is not None and args.timeout <= 0:
        parser.error("--timeout must be positive")
    if args.max_output is not None and args.max_output <= 0:
        parser.error("--max-output must be positive")
    if not args.list_rules and args.command is None:
        parser.error("a command is required unless --list-rules is given")

    try:
        config = _apply_overrides(load_config(args.config), args)
    except SafeCommandError as e:
        UIManager().show_error(str(e))
        return USAGE_EXIT_CODE

    ui = UIManager(config.theme)
    if args.list_rules:
        ui.show_rules(config.rules, config.source)
        return SUCCESS_EXIT_CODE

    tool = SafeCommandTool(config)
    try:
        if args.check:
            program, cmd_args = tool.authorize(args.command)
            ui.show_accepted(program, cmd_args)
        else:
            result = asyncio.run(tool.run(args.command))
            ui.show_result(result)
    except SafeCommandError as e:
        ui.show_error(str(e))
        return ERROR_EXIT_CODE

    return SUCCESS_EXIT_CODE


if __name__ == "__main__":
    sys.exit(main())
