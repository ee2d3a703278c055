"""
cheevo-lint - unit tests for asset models

File: tests/unit/assets/test_models.py
Last updated: 2026-10-19

Purpose
- Validate asset record invariants and set merging.

What this test file should cover
- Achievement and leaderboard construction checks.
- Leaderboard kind classification.
- Overlaying a local set onto a published set.
"""

from __future__ import annotations

import pytest

from cheevo_lint.assets import (
    Achievement,
    AchievementSet,
    AchievementType,
    AssetState,
    Leaderboard,
    LeaderboardKind,
    lookup_console,
)
from cheevo_lint.logic import FormatType, Logic


def _achievement(ach_id: int, title: str = "Title", **kwargs: object) -> Achievement:
    return Achievement(
        id=ach_id,
        title=title,
        description="Description",
        logic=Logic.from_string("0xH10=1"),
        **kwargs,  # type: ignore[arg-type]
    )


def _leaderboard(
    lb_id: int,
    title: str = "Board",
    *,
    fmt: FormatType | None = FormatType.SCORE,
    lower_is_better: bool = False,
) -> Leaderboard:
    return Leaderboard(
        id=lb_id,
        title=title,
        description="Description",
        components={
            "STA": Logic.from_string("0xH10=1", value_mode=False),
            "CAN": Logic.from_string("0=1", value_mode=False),
            "SUB": Logic.from_string("1=1", value_mode=False),
            "VAL": Logic.from_string("M:0xH11", value_mode=True),
        },
        format=fmt,
        lower_is_better=lower_is_better,
    )


def test_achievement_invariants() -> None:
    with pytest.raises(ValueError, match="trigger logic"):
        Achievement(id=1, title="t", description="d", logic=Logic.from_string("M:0xH1$M:0xH2"))
    with pytest.raises(ValueError, match="points"):
        _achievement(1, points=-5)


def test_achievement_type_parse() -> None:
    assert AchievementType.parse(None) is AchievementType.NONE
    assert AchievementType.parse(" Missable ") is AchievementType.MISSABLE
    assert AchievementType.parse("bonus") is AchievementType.NONE
    assert AchievementType.parse(3) is AchievementType.NONE


def test_leaderboard_requires_all_components_in_the_right_mode() -> None:
    with pytest.raises(ValueError, match="missing components: VAL"):
        Leaderboard(
            id=1,
            title="t",
            description="d",
            components={tag: Logic.from_string("0=1") for tag in ("STA", "CAN", "SUB")},
        )
    with pytest.raises(ValueError, match="wrong logic mode"):
        Leaderboard(
            id=1,
            title="t",
            description="d",
            components={tag: Logic.from_string("0=1") for tag in ("STA", "CAN", "SUB", "VAL")},
        )


@pytest.mark.parametrize(
    ("title", "fmt", "lower_is_better", "kind"),
    [
        ("Quickest Route", FormatType.SCORE, False, LeaderboardKind.SPEEDRUN),
        ("Level 1", FormatType.FRAMES, True, LeaderboardKind.SPEEDRUN),
        ("Survive", FormatType.SECS, False, LeaderboardKind.SURVIVAL),
        ("Fewest Deaths", FormatType.VALUE, True, LeaderboardKind.MIN_SCORE),
        ("Points", FormatType.SCORE, False, LeaderboardKind.HIGH_SCORE),
    ],
)
def test_leaderboard_kind(
    title: str, fmt: FormatType, lower_is_better: bool, kind: LeaderboardKind
) -> None:
    assert _leaderboard(1, title, fmt=fmt, lower_is_better=lower_is_better).kind() is kind


def test_merged_set_replaces_assets_by_id() -> None:
    published = AchievementSet(
        id=10,
        title="Published",
        console=lookup_console(7),
        achievements=(_achievement(1, "Old"), _achievement(2)),
        leaderboards=(_leaderboard(5),),
    )
    local = AchievementSet(
        title="Local",
        achievements=(_achievement(1, "New", state=AssetState.LOCAL), _achievement(3)),
    )

    merged = published.merged_with(local)

    assert merged.id == 10
    assert merged.title == "Local"
    assert merged.console is not None
    assert merged.console.name == "NES/Famicom"
    assert [ach.id for ach in merged.achievements] == [1, 2, 3]
    assert merged.achievements[0].title == "New"
    assert merged.achievements[0].state is AssetState.LOCAL
    assert [lb.id for lb in merged.leaderboards] == [5]


def test_lookup_console_ignores_non_integers() -> None:
    assert lookup_console("7") is None
    assert lookup_console(True) is None
    assert lookup_console(99999) is None
