"""Module entrypoint for ``python -m cheevo_lint``."""

from __future__ import annotations

from cheevo_lint.main import cli_entrypoint

if __name__ == "__main__":
    raise SystemExit(cli_entrypoint())
