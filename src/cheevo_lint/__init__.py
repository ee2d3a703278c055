"""
cheevo-lint - package root.

File: src/cheevo_lint/__init__.py
Last updated: 2026-10-19

Purpose
- Lint RetroAchievements condition logic, code notes and rich presence
  scripts, reporting severity-typed issues and statistics per asset.

Functional requirements
- Must not have side effects at import time (no config loading, no logging init).
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
