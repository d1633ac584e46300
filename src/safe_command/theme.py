#!/usr/bin/env python

"""
Colour palette for the Safe Command CLI.

Colors can be overridden from the config file under the 'theme' key.
"""

from typing import Dict, Optional

from rich.console import Console
from rich.theme import Theme as RichTheme

DEFAULT_THEME = {
    "accent": "#0066cc",
    "accent_alt": "#00cc66",
    "muted": "#555555",
    "error": "#ff5555",
    "warning": "#e5c07b",
    "success": "#00cc66",
}


def get_theme(overrides: Optional[Dict[str, str]] = None) -> Dict[str, str]:
    """Resolve theme colors, falling back to defaults for unknown keys"""
    theme = dict(DEFAULT_THEME)
    for key, value in (overrides or {}).items():
        if key in theme:
            theme[key] = value
    return theme


def create_console(overrides: Optional[Dict[str, str]] = None, **kwargs) -> Console:
    """Create a Rich Console with the application theme applied"""
    return Console(theme=RichTheme(get_theme(overrides)), **kwargs)
