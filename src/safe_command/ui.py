#!/usr/bin/env python

from rich.errors import StyleSyntaxError
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from .logger import logger
from .rules import RuleSet
from .runner import ExecutionResult
from .theme import create_console, get_theme


class UIManager:
    def __init__(self, theme_overrides=None):
        try:
            self.console = create_console(theme_overrides)
            self.err_console = create_console(theme_overrides, stderr=True)
        except StyleSyntaxError as e:
            logger.warning(f"Invalid theme color in config ({e}), using default theme")
            theme_overrides = None
            self.console = create_console()
            self.err_console = create_console(stderr=True)
        self._t = get_theme(theme_overrides)

    def show_result(self, result: ExecutionResult):
        """Display captured stdout/stderr of a successful command"""
        self.console.print(Panel(
            escape(result.stdout) or "[muted](empty)[/muted]",
            title="Stdout",
            title_align="left",
            border_style=self._t["success"],
        ))
        if result.stderr:
            self.console.print(Panel(
                escape(result.stderr),
                title="Stderr",
                title_align="left",
                border_style=self._t["warning"],
            ))
        self.console.print(f"[muted]exit code {result.exit_code} in {result.duration_ms}ms[/muted]")

    def show_accepted(self, program: str, args):
        joined = " ".join([program, *args])
        self.console.print(f"[success]Allowed:[/success] {escape(joined)}")

    def show_error(self, message: str):
        """Display an error message"""
        self.err_console.print(f"[error]Error: {escape(message)}[/error]")

    def show_rules(self, rules: RuleSet, source=None):
        """Display the active whitelist in a table"""
        t = self._t
        title = f"Allowed Commands ({source})" if source else "Allowed Commands (defaults)"
        table = Table(title=title)
        table.add_column("Command", style=t["accent"])
        table.add_column("Allowed Args", style=t["accent_alt"])
        table.add_column("Denied Args", style=t["error"])

        for rule in rules:
            table.add_row(
                rule.program,
                _describe(rule.allowed, "any"),
                _describe(rule.denied, "-"),
            )

        self.console.print(table)


def _describe(matchers, empty_text: str) -> str:
    if matchers is None:
        return empty_text
    return escape(", ".join(m.describe() for m in matchers))
