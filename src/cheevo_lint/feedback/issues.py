"""
cheevo-lint - issues, issue groups and assessments.

File: src/cheevo_lint/feedback/issues.py
Last updated: 2026-10-19

Purpose
- Immutable results of one analysis pass over an asset.

Functional requirements
- An assessment's status is the highest severity among its issues, or
  ``PASS`` when it has none; it passes while that status is below ``WARN``.
- Issue groups keep rule order and, within a rule, emission order.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Generic, Protocol, TypeVar

from cheevo_lint.feedback.catalog import IssueCode, IssueType, Severity, issue_type
from cheevo_lint.logic.operand import to_display_hex
from cheevo_lint.logic.requirement import Requirement
from cheevo_lint.notes.code_note import CodeNote


class SupportsToDict(Protocol):
    def to_dict(self) -> dict[str, object]: ...


IssueTarget = Requirement | CodeNote | str | None


@dataclass(frozen=True, slots=True)
class Issue:
    """One finding: its type, what it points at and an optional detail line."""

    type: IssueType
    target: IssueTarget = None
    detail: str | None = None

    @classmethod
    def of(cls, code: IssueCode, target: IssueTarget = None, detail: str | None = None) -> Issue:
        return cls(type=issue_type(code), target=target, detail=detail)

    @property
    def code(self) -> IssueCode:
        return self.type.code

    @property
    def severity(self) -> Severity:
        return self.type.severity

    def describe_target(self) -> str | None:
        if self.target is None:
            return None
        if isinstance(self.target, Requirement):
            return self.target.to_logic_string()
        if isinstance(self.target, CodeNote):
            return to_display_hex(self.target.address)
        return self.target

    def to_dict(self) -> dict[str, object]:
        return {
            "code": self.code.value,
            "severity": self.severity.label,
            "target": self.describe_target(),
            "detail": self.detail,
        }


@dataclass(frozen=True, slots=True)
class IssueGroup:
    label: str
    issues: tuple[Issue, ...] = ()

    def without(self, codes: Iterable[IssueCode]) -> IssueGroup:
        excluded = frozenset(codes)
        if not excluded:
            return self
        return IssueGroup(
            label=self.label,
            issues=tuple(issue for issue in self.issues if issue.code not in excluded),
        )

    def __len__(self) -> int:
        return len(self.issues)

    def __iter__(self) -> Iterator[Issue]:
        return iter(self.issues)

    def to_dict(self) -> dict[str, object]:
        return {"label": self.label, "issues": [issue.to_dict() for issue in self.issues]}


StatsT = TypeVar("StatsT", bound=SupportsToDict)


@dataclass(frozen=True, slots=True)
class Assessment(Generic[StatsT]):
    """Issue groups plus the statistics gathered for one asset."""

    groups: tuple[IssueGroup, ...]
    stats: StatsT

    def issues(self) -> Iterator[Issue]:
        for group in self.groups:
            yield from group.issues

    def status(self) -> Severity:
        return max((issue.severity for issue in self.issues()), default=Severity.PASS)

    @property
    def passed(self) -> bool:
        return self.status() < Severity.WARN

    def issues_at_or_above(self, severity: Severity) -> tuple[Issue, ...]:
        return tuple(issue for issue in self.issues() if issue.severity >= severity)

    def to_dict(self) -> dict[str, object]:
        return {
            "status": self.status().label,
            "passed": self.passed,
            "groups": [group.to_dict() for group in self.groups],
            "stats": self.stats.to_dict(),
        }


__all__ = [
    "Assessment",
    "Issue",
    "IssueGroup",
    "IssueTarget",
    "SupportsToDict",
]
