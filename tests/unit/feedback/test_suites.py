"""
cheevo-lint - unit tests for rule suites

File: tests/unit/feedback/test_suites.py
Last updated: 2026-10-19

Purpose
- Validate that the linter runs the right suites per asset and assembles a
  complete set report.

What this test file should cover
- Disabled issue codes are filtered from every group.
- Leaderboard start conditions get the full logic suite.
- Rejection thresholds and the report payload.
- One structured event per assessed asset.
"""

from __future__ import annotations

from typing import Any

from cheevo_lint.assets import Achievement, AchievementSet, Leaderboard
from cheevo_lint.feedback import IssueCode, Linter, Severity
from cheevo_lint.logic import Logic


class _RecordingLogger:
    def __init__(self) -> None:
        self.events: list[tuple[str, str, dict[str, Any]]] = []

    def debug(self, event: str, **fields: Any) -> None:
        self.events.append(("debug", event, fields))

    def info(self, event: str, **fields: Any) -> None:
        self.events.append(("info", event, fields))


def _achievement() -> Achievement:
    return Achievement(
        id=1, title="Title", description="Description", logic=Logic.from_string("0xH10=1")
    )


def _leaderboard() -> Leaderboard:
    return Leaderboard(
        id=2,
        title="Board",
        description="Description",
        components={
            "STA": Logic.from_string("0xH10=1", value_mode=False),
            "CAN": Logic.from_string("0=1", value_mode=False),
            "SUB": Logic.from_string("1=1", value_mode=False),
            "VAL": Logic.from_string("M:0xH11", value_mode=True),
        },
    )


def _codes(assessment: Any) -> list[IssueCode]:
    return [issue.code for issue in assessment.issues()]


def test_achievement_suite() -> None:
    assessment = Linter(logger=_RecordingLogger()).assess_achievement(_achievement())

    assert _codes(assessment) == [IssueCode.MISSING_DELTA, IssueCode.ONE_CONDITION]
    assert [group.label for group in assessment.groups] == [
        "Logic & Design",
        "Presentation & Writing",
    ]
    assert assessment.status() is Severity.WARN
    assert assessment.stats.cond_count == 1


def test_disabled_issues_are_filtered() -> None:
    logger = _RecordingLogger()
    linter = Linter(disabled_issues=["MISSING_DELTA"], logger=logger)

    assessment = linter.assess_achievement(_achievement())

    assert linter.disabled_issues == frozenset({IssueCode.MISSING_DELTA})
    assert _codes(assessment) == [IssueCode.ONE_CONDITION]
    delta_events = [
        fields for _, event, fields in logger.events
        if event == "feedback_rule_evaluated" and fields["rule"] == "check_deltas"
    ]
    assert [fields["issue_count"] for fields in delta_events] == [0]


def test_leaderboard_start_gets_full_logic_suite() -> None:
    assessment = Linter(logger=_RecordingLogger()).assess_leaderboard(_leaderboard())

    # cancel and submit are constants, which the basic suite tolerates
    assert _codes(assessment) == [IssueCode.MISSING_DELTA, IssueCode.ONE_CONDITION]
    assert assessment.stats.is_instant_submission


def test_missing_display_script_is_assessed_as_empty() -> None:
    assessment = Linter(logger=_RecordingLogger()).assess_rich_presence(None)

    assert _codes(assessment) == [IssueCode.NO_DYNAMIC_RP]
    assert assessment.stats.display_groups == 0


def test_lint_builds_report_and_logs_each_asset() -> None:
    logger = _RecordingLogger()
    achievement_set = AchievementSet(
        id=5, title="Game", achievements=(_achievement(),), leaderboards=(_leaderboard(),)
    )

    report = Linter(logger=logger).lint(achievement_set)

    assert report.rejected(Severity.WARN)
    assert not report.rejected(Severity.ERROR)
    payload = report.to_dict()
    assert set(payload) == {
        "set",
        "achievements",
        "leaderboards",
        "code_notes",
        "rich_presence",
        "set_design",
    }
    assert payload["set"] == {"id": 5, "title": "Game", "console": None}
    assert set(payload["achievements"]) == {"1"}  # type: ignore[arg-type]
    assert _codes(report.set_design) == [IssueCode.NO_TYPING]

    assessed = [fields["kind"] for _, event, fields in logger.events if event == "asset_assessed"]
    assert assessed == ["achievement", "leaderboard", "code_notes", "rich_presence", "set"]
    assert all(
        level == "debug" for level, event, _ in logger.events if event == "feedback_rule_evaluated"
    )
