"""UI package exports for the CLI and report rendering."""

from cheevo_lint.ui.cli import build_parser, main, run_cli
from cheevo_lint.ui.render import CLIRenderer, create_renderer

__all__ = ["CLIRenderer", "build_parser", "create_renderer", "main", "run_cli"]
