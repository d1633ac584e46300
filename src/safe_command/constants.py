#!/usr/bin/env python

"""Constants and configuration values for Safe Command"""

import os
from pathlib import Path
from typing import Any, Dict, List

# Application Information
APP_NAME = "Safe Command"
APP_VERSION = "1.0.0"
TOOL_NAME = "run_safe_command"

# File and Directory Constants
HOME_DIR = Path.home()
XDG_CONFIG_HOME = Path(os.environ.get("XDG_CONFIG_HOME") or HOME_DIR / ".config")
APP_DATA_DIR = HOME_DIR / ".safe-command"
LOGS_DIR = APP_DATA_DIR / "logs"
LOG_FILE_NAME = "safe-command.log"

# Environment Variables
CONFIG_PATH_ENV_VAR = "SAFE_COMMAND_CONFIG_PATH"
LOG_DIR_ENV_VAR = "SAFE_COMMAND_LOG_DIR"

# Config files searched under $XDG_CONFIG_HOME, in order
CONFIG_CANDIDATES = [
    Path("safe-command") / "config.yaml",
    Path("safe-command") / "config.yml",
    Path("safe-command") / "config.json",
    Path("gemini") / "safe-command.json",  # legacy location
]

# Timeouts (in seconds)
COMMAND_TIMEOUT = 10 * 60
PROCESS_CLEANUP_TIMEOUT = 2

# Output capture
MAX_OUTPUT_BYTES = 10 * 1024 * 1024  # 10MB per stream
READ_CHUNK_SIZE = 64 * 1024
TRUNCATION_MARKER = "\n...[Output truncated due to size limit]..."

# File Size Limits
MAX_CONFIG_FILE_SIZE = 1024 * 1024  # 1MB

# Logging Configuration
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

# Exit codes for the CLI
SUCCESS_EXIT_CODE = 0
ERROR_EXIT_CODE = 1
USAGE_EXIT_CODE = 2

# Package name arguments: plain names, scoped names, paths and quoted words
PACKAGE_ARG_PATTERN = r'/^["\w@/.-]+$/'
FLAG_ARG_PATTERN = r'/^-/'

# Default whitelist used when no configuration file is found.
# Entries use the same shape as the "allowedCommands" list of a config file;
# strings written as /pattern/flags are regular expressions.
DEFAULT_ALLOWED_COMMANDS: List[Dict[str, Any]] = [
    # Read-only commands
    {"command": "ls"},
    {"command": "cat"},
    {"command": "echo"},
    {"command": "pwd"},
    {"command": "whoami"},
    {"command": "date"},
    {"command": "grep"},
    {"command": "find"},
    {"command": "head"},
    {"command": "tail"},
    {"command": "wc"},
    {"command": "du"},
    {"command": "df"},
    {"command": "which"},

    # File operations
    {"command": "mkdir"},
    {"command": "touch"},
    {"command": "cp"},

    # Package managers
    {
        "command": "npm",
        "allowedArgs": [
            "install", "i", "ci",
            "run", "test", "start", "build", "dev", "lint", "format",
            "init", "create",
            "list", "ls",
            "view", "search", "info", "audit", "fund", "doctor",
            "version", "v",
            PACKAGE_ARG_PATTERN,
            FLAG_ARG_PATTERN,
        ],
        "deniedArgs": [
            "publish", "unpublish", "login", "logout", "adduser", "owner",
            "team", "token", "whoami", "eval", "exec",
        ],
    },
    {
        "command": "yarn",
        "allowedArgs": [
            "install", "add", "remove",
            "run", "test", "start", "build", "dev", "lint", "format",
            "init", "create",
            "list", "info", "audit", "why",
            "version", "-v", "--version",
            PACKAGE_ARG_PATTERN,
            FLAG_ARG_PATTERN,
        ],
        "deniedArgs": ["publish", "login", "logout", "owner", "team", "whoami", "exec", "node"],
    },
    {
        "command": "pnpm",
        "allowedArgs": [
            "install", "i", "add", "remove",
            "run", "test", "start", "build", "dev", "lint", "format",
            "init", "create",
            "list", "ls", "info", "audit", "why", "store",
            "version", "-v", "--version",
            PACKAGE_ARG_PATTERN,
            FLAG_ARG_PATTERN,
        ],
        "deniedArgs": ["publish", "login", "logout", "server", "exec", "dlx"],
    },

    # Development tools
    {"command": "tsc"},

    # Version control
    {
        "command": "git",
        "allowedArgs": [
            "status", "log", "diff", "show", "branch", "tag",
            "checkout", "switch", "add", "commit", "push", "pull", "fetch",
            "clone", "init", "remote", "config",
            "stash", "merge", "rebase", "reset", "restore",
            "clean", "blame", "grep",
            PACKAGE_ARG_PATTERN,
            FLAG_ARG_PATTERN,
            r"/^'[^']*'$/",
            r'/^"[^"]*"$/',
        ],
    },

    # Mobile development
    {"command": "pod"},
    {"command": "xcodebuild"},
    {"command": "fastlane"},

    # Others
    {"command": "curl"},
]
