"""
cheevo-lint - unit tests for issues and assessments

File: tests/unit/feedback/test_issues.py
Last updated: 2026-10-19

Purpose
- Validate issue rendering and how assessments derive their status.
"""

from __future__ import annotations

from cheevo_lint.feedback import Assessment, Issue, IssueCode, IssueGroup, Severity
from cheevo_lint.feedback import generate_logic_stats
from cheevo_lint.logic import Logic, Requirement
from cheevo_lint.notes import CodeNote


def _assessment(*issues: Issue) -> Assessment:
    return Assessment(
        groups=(IssueGroup("Logic & Design", issues),),
        stats=generate_logic_stats(Logic.from_string("0xH10=1")),
    )


def test_issue_targets_render_as_text() -> None:
    requirement = Requirement.from_string("A:0xH11")

    assert Issue.of(IssueCode.BAD_CHAIN, requirement).to_dict() == {
        "code": "BAD_CHAIN",
        "severity": "error",
        "target": "A:0xH00000011",
        "detail": None,
    }
    assert Issue.of(IssueCode.NOTE_NO_SIZE, CodeNote(0x20, "x")).describe_target() == "0x00000020"
    assert Issue.of(IssueCode.DESC_BRACKETS, "desc").describe_target() == "desc"
    assert Issue.of(IssueCode.NO_TYPING).describe_target() is None


def test_status_is_the_highest_severity() -> None:
    empty = _assessment()
    info_only = _assessment(Issue.of(IssueCode.DESC_BRACKETS, "desc"))
    warned = _assessment(Issue.of(IssueCode.DESC_BRACKETS, "desc"), Issue.of(IssueCode.NO_TYPING))

    assert empty.status() is Severity.PASS
    assert empty.passed
    assert info_only.status() is Severity.INFO
    assert info_only.passed
    assert warned.status() is Severity.WARN
    assert not warned.passed
    assert [issue.code for issue in warned.issues_at_or_above(Severity.WARN)] == [
        IssueCode.NO_TYPING
    ]


def test_group_without_codes() -> None:
    group = IssueGroup(
        "Set Design",
        (Issue.of(IssueCode.NO_TYPING), Issue.of(IssueCode.DUPLICATE_TITLES)),
    )

    filtered = group.without([IssueCode.NO_TYPING])

    assert len(filtered) == 1
    assert [issue.code for issue in filtered] == [IssueCode.DUPLICATE_TITLES]
    assert group.without([]) is group


def test_assessment_to_dict() -> None:
    payload = _assessment(Issue.of(IssueCode.NO_TYPING)).to_dict()

    assert payload["status"] == "warn"
    assert payload["passed"] is False
    assert payload["groups"] == [
        {
            "label": "Logic & Design",
            "issues": [
                {"code": "NO_TYPING", "severity": "warn", "target": None, "detail": None}
            ],
        }
    ]
    assert isinstance(payload["stats"], dict)
