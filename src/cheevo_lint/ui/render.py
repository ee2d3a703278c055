"""Output rendering abstraction for the cheevo-lint CLI.

File: src/cheevo_lint/ui/render.py
Last updated: 2026-10-19

Purpose
- Provide a thin rendering layer for CLI output backed by ``rich``.
- Respect NO_COLOR environment variable and --no-color CLI flag.

What should be included in this file
- CLIRenderer class with methods for common output patterns.
- Factory function to create a renderer with appropriate settings.

Functional requirements
- Output written to a non-terminal stream carries no escape codes.
- Markup characters inside asset text are printed literally.
"""

from __future__ import annotations

import os
from typing import IO, TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.table import Table

if TYPE_CHECKING:
    from collections.abc import Sequence

_STATUS_STYLES = {"pass": "green", "info": "cyan", "warn": "yellow", "error": "bold red"}


def _color_allowed(no_color_flag: bool) -> bool:
    """Check whether color output should be attempted."""

    if no_color_flag:
        return False
    return not os.environ.get("NO_COLOR", "")


class CLIRenderer:
    """Thin CLI output renderer over a ``rich`` console."""

    def __init__(self, *, no_color: bool = False, file: IO[str] | None = None) -> None:
        self._color = _color_allowed(no_color)
        self._console = Console(
            file=file,
            no_color=not self._color,
            color_system="auto" if self._color else None,
            highlight=False,
            soft_wrap=True,
        )

    @property
    def color(self) -> bool:
        return self._color

    def heading(self, text: str) -> None:
        """Print a heading line."""

        self._console.print(escape(text), style="bold")

    def kv(self, key: str, value: object) -> None:
        """Print a key: value pair."""

        self._console.print(f"{escape(key)}: {escape(str(value))}")

    def text(self, line: str) -> None:
        self._console.print(escape(line))

    def blank(self) -> None:
        self._console.print()

    def section(self, title: str) -> None:
        """Print a section header with a preceding blank line."""

        self._console.print()
        self._console.print(escape(title), style="bold underline")

    def status(self, label: str, status: str) -> None:
        """Print ``label`` followed by a severity-styled status word."""

        style = _STATUS_STYLES.get(status, "bold")
        self._console.print(f"{escape(label)} [{style}]{status.upper()}[/]")

    def table(
        self,
        headers: Sequence[str],
        rows: Sequence[Sequence[str]],
        *,
        title: str | None = None,
    ) -> None:
        """Print a table; nothing is printed for an empty row set."""

        if not rows:
            return
        table = Table(title=escape(title) if title else None, show_lines=False)
        for header in headers:
            table.add_column(escape(header), overflow="fold")
        for row in rows:
            table.add_row(*(escape(str(cell)) for cell in row))
        self._console.print(table)

    def ok(self, label: str) -> None:
        self._console.print(f"  OK  {escape(label)}")

    def fail(self, label: str) -> None:
        self._console.print(f"  FAIL  {escape(label)}")


def create_renderer(*, no_color: bool = False, file: IO[str] | None = None) -> CLIRenderer:
    """Create a CLI renderer with the given settings."""

    return CLIRenderer(no_color=no_color, file=file)


__all__ = ["CLIRenderer", "create_renderer"]
