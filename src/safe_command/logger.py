#!/usr/bin/env python

import logging
import os
from pathlib import Path
from typing import Optional
from rich.console import Console
from rich.logging import RichHandler

from .constants import LOG_DIR_ENV_VAR, LOG_FILE_NAME, LOG_FORMAT, LOG_DATE_FORMAT, LOGS_DIR


class SafeCommandLogger:
    """Centralized logging system for Safe Command"""

    _instance: Optional['SafeCommandLogger'] = None

    def __new__(cls) -> 'SafeCommandLogger':
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        if hasattr(self, '_initialized'):
            return

        self._initialized = True
        # stdout belongs to the command output, diagnostics go to stderr
        self.console = Console(stderr=True)
        self.logger = logging.getLogger("safe-command")
        self._setup_logging()

    def _setup_logging(self):
        """Setup logging configuration"""
        log_dir = Path(os.environ.get(LOG_DIR_ENV_VAR) or LOGS_DIR)

        # Setup console handler with Rich
        console_handler = RichHandler(
            console=self.console,
            show_time=False,
            show_path=False,
            markup=False
        )
        console_handler.setLevel(logging.WARNING)  # Only show warnings/errors in console
        self.logger.addHandler(console_handler)

        # Setup file handler
        try:
            log_dir.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_dir / LOG_FILE_NAME)
        except OSError as e:
            self.logger.warning(f"File logging disabled, cannot write to {log_dir}: {e}")
        else:
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(logging.Formatter(LOG_FORMAT, LOG_DATE_FORMAT))
            self.logger.addHandler(file_handler)

        self.logger.setLevel(logging.DEBUG)

        # Prevent propagation to root logger
        self.logger.propagate = False

    def debug(self, message: str, **kwargs):
        """Log debug message"""
        self.logger.debug(message, **kwargs)

    def info(self, message: str, **kwargs):
        """Log info message"""
        self.logger.info(message, **kwargs)

    def warning(self, message: str, **kwargs):
        """Log warning message"""
        self.logger.warning(message, **kwargs)

    def error(self, message: str, **kwargs):
        """Log error message"""
        self.logger.error(message, **kwargs)

    def log_command_execution(self, command: str, success: bool, output: str):
        """Log command execution details"""
        status = "SUCCESS" if success else "FAILED"
        self.info(f"Command {status}: {command}")
        if not success:
            self.debug(f"Command output: {output}")

    def log_security_event(self, event_type: str, details: str):
        """Log security-related events"""
        self.warning(f"SECURITY EVENT - {event_type}: {details}")


# Global logger instance
logger = SafeCommandLogger()
