#!/usr/bin/env python

import json
import os
import yaml
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from .constants import (
    COMMAND_TIMEOUT, CONFIG_CANDIDATES, CONFIG_PATH_ENV_VAR,
    MAX_CONFIG_FILE_SIZE, MAX_OUTPUT_BYTES, XDG_CONFIG_HOME,
)
from .errors import ConfigError
from .logger import logger
from .rules import DEFAULT_RULE_SET, RuleSet


@dataclass(frozen=True)
class SafeCommandConfig:
    """Everything resolved at startup; lives for the whole process"""

    rules: RuleSet = DEFAULT_RULE_SET
    timeout: float = COMMAND_TIMEOUT
    max_output_bytes: int = MAX_OUTPUT_BYTES
    theme: Dict[str, str] = field(default_factory=dict)
    source: Optional[Path] = None


def find_config_file(explicit_path: Optional[Path] = None) -> Optional[Path]:
    """
    Locate the configuration file.

    Order: explicit path, $SAFE_COMMAND_CONFIG_PATH, then the candidates under
    $XDG_CONFIG_HOME (~/.config by default). An explicit path must exist; the
    environment variable is skipped when it points nowhere.
    """
    if explicit_path is not None:
        if not explicit_path.is_file():
            raise ConfigError(f"Config file '{explicit_path}' does not exist")
        return explicit_path

    env_path = os.environ.get(CONFIG_PATH_ENV_VAR)
    if env_path and Path(env_path).is_file():
        return Path(env_path)

    xdg_home = Path(os.environ.get("XDG_CONFIG_HOME") or XDG_CONFIG_HOME)
    for candidate in CONFIG_CANDIDATES:
        path = xdg_home / candidate
        if path.is_file():
            return path

    return None


def load_config(explicit_path: Optional[Path] = None) -> SafeCommandConfig:
    """Load the configuration, falling back to the compiled-in whitelist"""
    config_path = find_config_file(explicit_path)
    if config_path is None:
        logger.debug("No config file found, using default whitelist")
        return SafeCommandConfig()

    try:
        return read_config_file(config_path)
    except ConfigError as e:
        logger.error(f"Failed to load config from {config_path}: {e}")
        logger.warning("Falling back to the default whitelist")
        return SafeCommandConfig()


def read_config_file(config_path: Path) -> SafeCommandConfig:
    """Parse a JSON or YAML config file into a SafeCommandConfig"""
    logger.info(f"Loading config from {config_path}")

    if not os.access(config_path, os.R_OK):
        raise ConfigError(f"Config file '{config_path}' is not readable")

    try:
        file_size = config_path.stat().st_size
    except OSError as e:
        raise ConfigError(f"Error accessing config file '{config_path}': {e}") from e
    if file_size > MAX_CONFIG_FILE_SIZE:
        raise ConfigError(f"Config file '{config_path}' is too large (>1MB)")

    try:
        with open(config_path, 'r', encoding='utf-8') as file:
            if config_path.suffix.lower() == ".json":
                data = json.load(file)
            else:
                data = yaml.safe_load(file)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigError(f"Invalid config syntax: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Error reading config file: {e}") from e

    config = parse_config(data)
    return SafeCommandConfig(
        rules=config.rules,
        timeout=config.timeout,
        max_output_bytes=config.max_output_bytes,
        theme=config.theme,
        source=config_path,
    )


def parse_config(data: Any) -> SafeCommandConfig:
    """Validate an already parsed config document"""
    if not isinstance(data, dict):
        raise ConfigError("Config must be a mapping with an 'allowedCommands' list")

    commands = data.get("allowedCommands")
    if not isinstance(commands, list):
        raise ConfigError("'allowedCommands' must be a list")

    settings = data.get("settings") or {}
    if not isinstance(settings, dict):
        raise ConfigError("'settings' must be a mapping")

    theme = data.get("theme") or {}
    if not isinstance(theme, dict):
        raise ConfigError("'theme' must be a mapping")

    return SafeCommandConfig(
        rules=RuleSet.from_config(commands),
        timeout=_positive_number(settings, "timeout_seconds", COMMAND_TIMEOUT),
        max_output_bytes=int(_positive_number(settings, "max_output_bytes", MAX_OUTPUT_BYTES)),
        theme={str(k): str(v) for k, v in theme.items()},
    )


def _positive_number(settings: Dict[str, Any], key: str, default: float) -> float:
    value = settings.get(key, default)
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
        raise ConfigError(f"Setting '{key}' must be a positive number, got {value!r}")
    return value
