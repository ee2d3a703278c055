"""
cheevo-lint - integration test package

File: tests/integration/__init__.py
Last updated: 2026-10-19

Purpose
- Package marker for tests that run the installed CLI as a subprocess.

Functional requirements
- Must not import cheevo_lint at import time; subprocess tests set their own PYTHONPATH.
"""
