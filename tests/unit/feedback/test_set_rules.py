"""
cheevo-lint - unit tests for set-level and display-script rules

File: tests/unit/feedback/test_set_rules.py
Last updated: 2026-10-19

Purpose
- Validate rules that look across a whole set or at its display script.

What this test file should cover
- Progression and win-condition typing.
- Duplicated titles and descriptions.
- Dynamic content and note coverage of display scripts.
"""

from __future__ import annotations

import pytest

from cheevo_lint.assets import Achievement, AchievementSet, AchievementType, RichPresence
from cheevo_lint.feedback import IssueCode
from cheevo_lint.feedback.rules import RichPresenceSubject
from cheevo_lint.feedback.rules.rich_presence_rules import check_rp_dynamic, check_rp_notes
from cheevo_lint.feedback.rules.set_rules import check_duplicate_text, check_progression_typing
from cheevo_lint.logic import Logic
from cheevo_lint.notes import CodeNote


def _achievement(
    ach_id: int,
    title: str,
    description: str = "Description",
    ach_type: AchievementType = AchievementType.NONE,
) -> Achievement:
    return Achievement(
        id=ach_id,
        title=title,
        description=description,
        logic=Logic.from_string("0xH10=1"),
        type=ach_type,
    )


@pytest.mark.parametrize(
    ("types", "expected"),
    [
        ((AchievementType.PROGRESSION, AchievementType.NONE), []),
        ((AchievementType.WIN_CONDITION, AchievementType.MISSABLE), [IssueCode.NO_PROGRESSION]),
        ((AchievementType.NONE, AchievementType.MISSABLE), [IssueCode.NO_TYPING]),
    ],
)
def test_progression_typing(
    types: tuple[AchievementType, ...], expected: list[IssueCode]
) -> None:
    achievement_set = AchievementSet(
        achievements=tuple(
            _achievement(index, f"Title {index}", f"Description {index}", ach_type)
            for index, ach_type in enumerate(types)
        )
    )

    assert [issue.code for issue in check_progression_typing(achievement_set)] == expected


def test_duplicate_text() -> None:
    achievement_set = AchievementSet(
        achievements=(
            _achievement(1, "Same", "First"),
            _achievement(2, "Same", "Second"),
            _achievement(3, "Other", "Second"),
        )
    )

    issues = check_duplicate_text(achievement_set)

    assert [issue.code for issue in issues] == [
        IssueCode.DUPLICATE_TITLES,
        IssueCode.DUPLICATE_DESCRIPTIONS,
    ]
    assert issues[0].detail == "2 achievements share the title Same"
    assert issues[1].detail == "2 achievements share the same description: Same, Other"


def test_unique_text_passes() -> None:
    achievement_set = AchievementSet(
        achievements=(_achievement(1, "One", "First"), _achievement(2, "Two", "Second"))
    )

    assert check_duplicate_text(achievement_set) == []


@pytest.mark.parametrize(
    ("script", "expected"),
    [
        ("Display:\n?0xH10=1?Busy\nIdle", []),
        ("Display:\nScore: @Score(0xH10)", [IssueCode.NO_CONDITIONAL_DISPLAY]),
        ("Display:\nPlaying the game", [IssueCode.NO_DYNAMIC_RP]),
    ],
)
def test_dynamic_display(script: str, expected: list[IssueCode]) -> None:
    subject = RichPresenceSubject(RichPresence.from_text(script))

    assert [issue.code for issue in check_rp_dynamic(subject)] == expected


def test_display_note_coverage() -> None:
    script = RichPresence.from_text(
        "Lookup:Stage\n0=Forest\n1=Caves\n\nDisplay:\n?0xH10=1?In @Stage(0xH20)\nIdle"
    )
    notes = (CodeNote(0x10, "[16-bit] Mode"),)

    issues = check_rp_notes(RichPresenceSubject(script, notes))

    assert [issue.code for issue in issues] == [IssueCode.TYPE_MISMATCH, IssueCode.MISSING_NOTE_RP]
    assert issues[0].detail is not None
    assert issues[0].detail.endswith("Correct accessor should be: 0x00000010")
    assert issues[1].detail == "Missing note for Stage lookup of display #1: 0x00000020"


def test_display_notes_skip_pointer_offsets() -> None:
    script = RichPresence.from_text("Display:\n@Score(I:0xX10_M:0xH4)")
    notes = (CodeNote(0x10, "[32-bit] Pointer to stats"),)

    assert check_rp_notes(RichPresenceSubject(script, notes)) == []
