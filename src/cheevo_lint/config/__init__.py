"""
cheevo-lint config package public API.

File: src/cheevo_lint/config/__init__.py
Last updated: 2026-10-19

Purpose
- Export config loading/validation entrypoints and public error types.

Functional requirements
- Support loading from ``cheevo_lint.toml`` + ``CHEEVO_LINT_`` env overrides.
- Fail fast with clear structured validation/load errors.
"""

from cheevo_lint.config.loader import (
    DEFAULT_CONFIG_FILE,
    ENV_PREFIX,
    ConfigLoadError,
    load_config,
)
from cheevo_lint.config.schema import (
    DEFAULT_CONFIG,
    LOG_LEVELS,
    SEVERITY_LEVELS,
    CheevoLintConfig,
    ConfigValidationError,
    ConfigValidationIssue,
    ConfigValidationResult,
    assert_valid_config,
    default_config,
    merge_config,
    validate_config,
)

__all__ = [
    "CheevoLintConfig",
    "ConfigLoadError",
    "ConfigValidationError",
    "ConfigValidationIssue",
    "ConfigValidationResult",
    "DEFAULT_CONFIG",
    "DEFAULT_CONFIG_FILE",
    "ENV_PREFIX",
    "LOG_LEVELS",
    "SEVERITY_LEVELS",
    "assert_valid_config",
    "default_config",
    "load_config",
    "merge_config",
    "validate_config",
]
