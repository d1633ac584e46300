"""Test configuration: keep the logger and config lookup away from $HOME.

The logger is created at import time, so the log directory has to be set
before any safe_command module is imported.
"""

import os
import tempfile

import pytest

os.environ["SAFE_COMMAND_LOG_DIR"] = tempfile.mkdtemp(prefix="safe_command_logs_")


@pytest.fixture(autouse=True)
def isolated_config_env(monkeypatch, tmp_path):
    """No test should pick up a real user config file"""
    monkeypatch.delenv("SAFE_COMMAND_CONFIG_PATH", raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
