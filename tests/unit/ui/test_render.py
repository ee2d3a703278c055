"""
cheevo-lint - unit tests for CLI rendering

File: tests/unit/ui/test_render.py
Last updated: 2026-10-19

Purpose
- Validate the rich-backed renderer writes plain text to non-terminal streams.

What this test file should cover
- No escape codes when color is disabled by flag or NO_COLOR.
- Markup characters in asset text are printed literally.
- Empty tables print nothing.
"""

from __future__ import annotations

import io

import pytest

from cheevo_lint.ui.render import create_renderer


def test_plain_output_has_no_escape_codes() -> None:
    stream = io.StringIO()
    renderer = create_renderer(no_color=True, file=stream)

    renderer.heading("Test Game")
    renderer.status("Status:", "warn")
    renderer.ok("no issues at or above warn")

    output = stream.getvalue()
    assert not renderer.color
    assert "\x1b[" not in output
    assert output.splitlines() == ["Test Game", "Status: WARN", "  OK  no issues at or above warn"]


def test_no_color_environment_disables_color(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("NO_COLOR", "1")

    assert not create_renderer(file=io.StringIO()).color


def test_markup_in_text_is_literal() -> None:
    stream = io.StringIO()
    renderer = create_renderer(no_color=True, file=stream)

    renderer.kv("Title", "[bold]Boss[/bold] (hard)")
    renderer.fail("[red]x")

    assert stream.getvalue().splitlines() == ["Title: [bold]Boss[/bold] (hard)", "  FAIL  [red]x"]


def test_tables() -> None:
    stream = io.StringIO()
    renderer = create_renderer(no_color=True, file=stream)

    renderer.table(("Severity", "Code"), [], title="Empty")
    assert stream.getvalue() == ""

    renderer.table(("Severity", "Code"), [("warn", "ONE_CONDITION")], title="Logic & Design")
    output = stream.getvalue()
    assert "Logic & Design" in output
    assert "ONE_CONDITION" in output
