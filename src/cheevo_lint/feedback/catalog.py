"""
cheevo-lint - issue-type catalog.

File: src/cheevo_lint/feedback/catalog.py
Last updated: 2026-10-19

Purpose
- Define the closed set of issue codes and severities and load their fixed
  descriptors (severity, description, reference links) from bundled YAML.

What should be included in this file
- ``Severity`` and ``IssueCode`` enumerations.
- ``IssueType`` descriptor and the cached ``load_issue_catalog`` loader.

Functional requirements
- The bundled catalog must describe every ``IssueCode`` exactly once; a
  catalog that does not is rejected with ``IssueCatalogError``.
- The catalog is read once per path and shared read-only afterwards.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import IntEnum, StrEnum
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType

import yaml


class Severity(IntEnum):
    PASS = 0
    INFO = 1
    WARN = 2
    ERROR = 3

    @property
    def label(self) -> str:
        return self.name.lower()

    @classmethod
    def parse(cls, raw: str) -> Severity:
        try:
            return cls[raw.strip().upper()]
        except KeyError:
            allowed = ", ".join(member.label for member in cls)
            raise ValueError(f"unknown severity {raw!r}; expected one of: {allowed}") from None


class IssueCode(StrEnum):
    # writing policy
    TITLE_CASE = "TITLE_CASE"
    DESC_BRACKETS = "DESC_BRACKETS"
    NO_EMOJI = "NO_EMOJI"
    SPECIAL_CHARS = "SPECIAL_CHARS"
    FOREIGN_CHARS = "FOREIGN_CHARS"
    # set design
    NO_PROGRESSION = "NO_PROGRESSION"
    NO_TYPING = "NO_TYPING"
    DUPLICATE_TITLES = "DUPLICATE_TITLES"
    DUPLICATE_DESCRIPTIONS = "DUPLICATE_DESCRIPTIONS"
    # code notes
    NOTE_NO_SIZE = "NOTE_NO_SIZE"
    NOTE_ENUM_HEX = "NOTE_ENUM_HEX"
    NOTE_ENUM_TOO_LARGE = "NOTE_ENUM_TOO_LARGE"
    # rich presence
    NO_DYNAMIC_RP = "NO_DYNAMIC_RP"
    NO_CONDITIONAL_DISPLAY = "NO_CONDITIONAL_DISPLAY"
    MISSING_NOTE_RP = "MISSING_NOTE_RP"
    # logic
    BAD_CHAIN = "BAD_CHAIN"
    MISSING_NOTE = "MISSING_NOTE"
    ONE_CONDITION = "ONE_CONDITION"
    MISSING_DELTA = "MISSING_DELTA"
    IMPROPER_DELTA = "IMPROPER_DELTA"
    BAD_PRIOR = "BAD_PRIOR"
    STALE_ADDADDRESS = "STALE_ADDADDRESS"
    NEGATIVE_OFFSET = "NEGATIVE_OFFSET"
    TYPE_MISMATCH = "TYPE_MISMATCH"
    SOURCE_MOD_MEASURED = "SOURCE_MOD_MEASURED"
    PAUSELOCK_NO_RESET = "PAUSELOCK_NO_RESET"
    HIT_NO_RESET = "HIT_NO_RESET"
    UUO_RESET = "UUO_RESET"
    UUO_RNI = "UUO_RNI"
    UUO_PAUSE = "UUO_PAUSE"
    PAUSING_MEASURED = "PAUSING_MEASURED"
    RESET_HITCOUNT_1 = "RESET_HITCOUNT_1"
    UNSATISFIABLE = "UNSATISFIABLE"
    UNNECESSARY = "UNNECESSARY"


@dataclass(frozen=True, slots=True)
class IssueType:
    """Fixed descriptor shared by every issue of one code."""

    code: IssueCode
    severity: Severity
    description: str
    references: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, object]:
        return {
            "code": self.code.value,
            "severity": self.severity.label,
            "description": self.description,
            "references": list(self.references),
        }


class IssueCatalogError(ValueError):
    """Raised when the issue catalog file is unreadable or incomplete."""


def _bundled_catalog_path() -> Path:
    return Path(__file__).resolve().with_name("issue_catalog.yaml")


def _parse_entry(code: IssueCode, raw: object) -> IssueType:
    if not isinstance(raw, Mapping):
        raise IssueCatalogError(f"{code}: entry must be a mapping")
    severity_raw = raw.get("severity")
    description = raw.get("description")
    references = raw.get("references") or []
    if not isinstance(severity_raw, str):
        raise IssueCatalogError(f"{code}: severity must be a string")
    try:
        severity = Severity.parse(severity_raw)
    except ValueError as exc:
        raise IssueCatalogError(f"{code}: {exc}") from exc
    if not isinstance(description, str) or not description.strip():
        raise IssueCatalogError(f"{code}: description must be a non-empty string")
    if not isinstance(references, list) or not all(isinstance(ref, str) for ref in references):
        raise IssueCatalogError(f"{code}: references must be a list of strings")
    return IssueType(
        code=code,
        severity=severity,
        description=" ".join(description.split()),
        references=tuple(references),
    )


@lru_cache(maxsize=4)
def load_issue_catalog(path: str | Path | None = None) -> Mapping[IssueCode, IssueType]:
    """Load the issue catalog with deterministic caching."""

    resolved = _bundled_catalog_path() if path is None else Path(path).expanduser().resolve()
    try:
        with resolved.open("r", encoding="utf-8") as handle:
            payload = yaml.safe_load(handle)
    except OSError as exc:
        raise IssueCatalogError(f"unable to read issue catalog {resolved}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise IssueCatalogError(f"invalid YAML in issue catalog {resolved}: {exc}") from exc

    entries = payload.get("issues") if isinstance(payload, Mapping) else None
    if not isinstance(entries, Mapping):
        raise IssueCatalogError("issue catalog must contain an 'issues' mapping")

    unknown = sorted(str(key) for key in entries if key not in IssueCode.__members__)
    if unknown:
        raise IssueCatalogError(f"unknown issue codes in catalog: {', '.join(unknown)}")
    missing = [code.value for code in IssueCode if code.value not in entries]
    if missing:
        raise IssueCatalogError(f"issue codes missing from catalog: {', '.join(missing)}")

    return MappingProxyType({code: _parse_entry(code, entries[code.value]) for code in IssueCode})


def issue_type(code: IssueCode) -> IssueType:
    return load_issue_catalog()[code]


__all__ = [
    "IssueCatalogError",
    "IssueCode",
    "IssueType",
    "Severity",
    "issue_type",
    "load_issue_catalog",
]
