"""
cheevo-lint - configuration schema and validation.

File: src/cheevo_lint/config/schema.py
Last updated: 2026-10-19

Purpose
- Define the config shape, its defaults, and strict validation.

What should be included in this file
- Typed section shapes and the built-in defaults.
- A field table mapping every ``section.key`` to the check that normalizes it.
- Deep-merge helper used by the loader to layer sources.

Functional requirements
- Validation reports every problem at once as (path, message) pairs.
- Unknown sections and keys are rejected.
- Sections may be partial; missing keys fall back to defaults.
- Issue codes and log levels are normalized to upper case; issue codes are
  de-duplicated and sorted.
"""

from __future__ import annotations

import copy
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Final, Literal, TypedDict

from cheevo_lint.feedback.catalog import IssueCode

SEVERITY_LEVELS: Final[tuple[str, ...]] = ("info", "warn", "error")
LOG_LEVELS: Final[tuple[str, ...]] = ("DEBUG", "INFO", "WARNING", "ERROR")


class LintConfig(TypedDict):
    severity: Literal["info", "warn", "error"]
    disabled_issues: list[str]


class LoggingSection(TypedDict):
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"]
    json: bool


class ReportConfig(TypedDict):
    color: bool


class CheevoLintConfig(TypedDict):
    lint: LintConfig
    logging: LoggingSection
    report: ReportConfig


DEFAULT_CONFIG: Final[CheevoLintConfig] = {
    "lint": {
        "severity": "warn",
        "disabled_issues": [],
    },
    "logging": {
        "level": "WARNING",
        "json": False,
    },
    "report": {
        "color": True,
    },
}


@dataclass(frozen=True, slots=True)
class ConfigValidationIssue:
    path: str
    message: str


@dataclass(frozen=True, slots=True)
class ConfigValidationResult:
    """Outcome of ``validate_config``; ``config`` is set only when ``issues`` is empty."""

    config: dict[str, Any] | None
    issues: tuple[ConfigValidationIssue, ...]

    @property
    def is_valid(self) -> bool:
        return self.config is not None and not self.issues


class ConfigValidationError(ValueError):
    """A config failed validation; ``issues`` lists every problem found."""

    def __init__(self, issues: Sequence[ConfigValidationIssue]) -> None:
        self.issues = tuple(issues)
        lines = [f"- {issue.path}: {issue.message}" for issue in self.issues]
        super().__init__("invalid config:\n" + ("\n".join(lines) or "- <root>: rejected"))


class _Invalid(Exception):
    """Internal signal carrying one field problem back to the walker."""

    def __init__(self, message: str, path_suffix: str = "") -> None:
        super().__init__(message)
        self.message = message
        self.path_suffix = path_suffix


def _type_name(value: object) -> str:
    return type(value).__name__


def _text(value: object) -> str:
    if not isinstance(value, str):
        raise _Invalid(f"expected string, got {_type_name(value)}")
    stripped = value.strip()
    if not stripped:
        raise _Invalid("must not be empty")
    return stripped


def _choice(allowed: tuple[str, ...], *, upper: bool = False) -> Callable[[object], str]:
    def check(value: object) -> str:
        text = _text(value)
        if upper:
            text = text.upper()
        if text not in allowed:
            expected = ", ".join(sorted(allowed))
            raise _Invalid(f"invalid value {text!r}; expected one of: {expected}")
        return text

    return check


def _flag(value: object) -> bool:
    if not isinstance(value, bool):
        raise _Invalid(f"expected boolean, got {_type_name(value)}")
    return value


def _issue_codes(value: object) -> list[str]:
    if isinstance(value, str) or not isinstance(value, (list, tuple)):
        raise _Invalid(f"expected list of issue codes, got {_type_name(value)}")
    codes: set[str] = set()
    for index, item in enumerate(value):
        try:
            code = _text(item).upper()
        except _Invalid as exc:
            raise _Invalid(exc.message, f"[{index}]") from None
        if code not in IssueCode.__members__:
            raise _Invalid(f"unknown issue code {code!r}", f"[{index}]")
        codes.add(code)
    return sorted(codes)


FIELDS: Final[Mapping[str, Mapping[str, Callable[[object], object]]]] = MappingProxyType(
    {
        "lint": MappingProxyType(
            {"severity": _choice(SEVERITY_LEVELS), "disabled_issues": _issue_codes}
        ),
        "logging": MappingProxyType({"level": _choice(LOG_LEVELS, upper=True), "json": _flag}),
        "report": MappingProxyType({"color": _flag}),
    }
)


def default_config() -> CheevoLintConfig:
    """Return a deep copy of the built-in defaults."""

    return copy.deepcopy(DEFAULT_CONFIG)


def merge_config(base: Mapping[str, object], overlay: Mapping[str, object]) -> dict[str, Any]:
    """Deep-merge ``overlay`` onto a copy of ``base``; neither input is modified."""

    merged: dict[str, Any] = copy.deepcopy(dict(base))
    for key, value in overlay.items():
        current = merged.get(key)
        if isinstance(value, Mapping) and isinstance(current, Mapping):
            merged[key] = merge_config(current, value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def validate_config(config: Mapping[str, object] | object) -> ConfigValidationResult:
    problems: list[ConfigValidationIssue] = []
    if not isinstance(config, Mapping):
        problems.append(
            ConfigValidationIssue("<root>", f"expected object, got {_type_name(config)}")
        )
        return ConfigValidationResult(config=None, issues=tuple(problems))

    normalized: dict[str, Any] = copy.deepcopy(dict(DEFAULT_CONFIG))
    for section in sorted(config, key=str):
        if section not in FIELDS:
            problems.append(ConfigValidationIssue(str(section), "unknown field"))
            continue
        payload = config[section]
        if not isinstance(payload, Mapping):
            problems.append(
                ConfigValidationIssue(section, f"expected object, got {_type_name(payload)}")
            )
            continue
        checks = FIELDS[section]
        for key in sorted(payload, key=str):
            path = f"{section}.{key}"
            if key not in checks:
                problems.append(ConfigValidationIssue(path, "unknown field"))
                continue
            try:
                normalized[section][key] = checks[key](payload[key])
            except _Invalid as exc:
                problems.append(ConfigValidationIssue(path + exc.path_suffix, exc.message))

    if problems:
        return ConfigValidationResult(config=None, issues=tuple(problems))
    return ConfigValidationResult(config=normalized, issues=())


def assert_valid_config(config: Mapping[str, object] | object) -> dict[str, Any]:
    """Return the normalized config or raise ``ConfigValidationError``."""

    result = validate_config(config)
    if result.config is None:
        raise ConfigValidationError(result.issues)
    return result.config


__all__ = [
    "DEFAULT_CONFIG",
    "FIELDS",
    "LOG_LEVELS",
    "SEVERITY_LEVELS",
    "CheevoLintConfig",
    "ConfigValidationError",
    "ConfigValidationIssue",
    "ConfigValidationResult",
    "assert_valid_config",
    "default_config",
    "merge_config",
    "validate_config",
]
