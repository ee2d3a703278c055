"""
cheevo-lint - unit tests for statistics

File: tests/unit/feedback/test_stats.py
Last updated: 2026-10-19

Purpose
- Validate the statistics attached to logic, leaderboard, note, display
  script and set assessments.

What this test file should cover
- Logic tallies, including chain length and Mem/Delta comparisons.
- Leaderboard instant submission and conditional values.
- Note usage and set-level missing-note sources.
"""

from __future__ import annotations

from cheevo_lint.assets import (
    Achievement,
    AchievementSet,
    AchievementType,
    AssetState,
    Leaderboard,
    RichPresence,
)
from cheevo_lint.feedback import (
    generate_code_note_stats,
    generate_leaderboard_stats,
    generate_logic_stats,
    generate_rich_presence_stats,
    generate_set_stats,
)
from cheevo_lint.logic import AccessSize, ConditionFlag, Logic
from cheevo_lint.notes import CodeNote


def test_logic_stats() -> None:
    logic = Logic.from_string("0xH10=1_N:0xH11=1_0xH12=1.1._0xH10!=d0xH10.3.S0xM20=1_R:0xH21=1")

    stats = generate_logic_stats(logic)

    assert stats.group_count == 2
    assert stats.alt_groups == 1
    assert stats.group_maxsize == 4
    assert stats.cond_count == 6
    assert stats.unique_flags == frozenset({ConditionFlag.AND_NEXT, ConditionFlag.RESET_IF})
    assert stats.unique_cmps == frozenset({"=", "!="})
    assert stats.unique_sizes == frozenset({AccessSize.BYTE})
    assert stats.max_chain == 2
    assert stats.hit_counts_one == 1
    assert stats.hit_counts_many == 1
    assert stats.reset_ifs == 1
    assert stats.reset_with_hits == 0
    assert stats.deltas == 1
    assert stats.priors == 0
    assert stats.addresses == frozenset({0x10, 0x11, 0x12, 0x20, 0x21})
    assert stats.mem_del == 1
    assert stats.to_dict()["unique_sizes"] == ["8-bit"]


def test_source_modification_counts() -> None:
    stats = generate_logic_stats(Logic.from_string("A:0xH10*2_B:0xH12/4_0xH11=5"))

    assert stats.source_modification["*"] == 1
    assert stats.source_modification["/"] == 1
    assert stats.source_modification["&"] == 0


def test_empty_logic_stats() -> None:
    stats = generate_logic_stats(Logic.from_string(""))

    assert stats.cond_count == 0
    assert stats.max_chain == 0
    assert stats.memlookups == ()


def _leaderboard(sub: str, val: str) -> Leaderboard:
    return Leaderboard(
        id=7,
        title="Board",
        description="Description",
        components={
            "STA": Logic.from_string("0xH10=1", value_mode=False),
            "CAN": Logic.from_string("0=1", value_mode=False),
            "SUB": Logic.from_string(sub, value_mode=False),
            "VAL": Logic.from_string(val, value_mode=True),
        },
    )


def test_leaderboard_stats() -> None:
    instant = generate_leaderboard_stats(_leaderboard("1=1", "M:0xH11"))
    conditional = generate_leaderboard_stats(
        _leaderboard("0xH12=1", "M:0xH11$Q:0xH10=1_M:0xH13")
    )

    assert instant.is_instant_submission
    assert not instant.conditional_value
    assert set(instant.components) == {"STA", "CAN", "SUB", "VAL"}
    assert not conditional.is_instant_submission
    assert conditional.conditional_value


def _achievement(ach_id: int, title: str, logic: str, **kwargs: object) -> Achievement:
    return Achievement(
        id=ach_id,
        title=title,
        description=f"{title} description",
        logic=Logic.from_string(logic),
        **kwargs,  # type: ignore[arg-type]
    )


def _set() -> AchievementSet:
    return AchievementSet(
        id=99,
        achievements=(
            _achievement(1, "One", "0xM10=1", points=10, type=AchievementType.PROGRESSION),
            _achievement(2, "Two", "0xH20=1_d0xH20=0", state=AssetState.LOCAL),
        ),
    )


def test_code_note_stats() -> None:
    notes = [
        CodeNote(0x10, "[16-bit] Anchor", "alice"),
        CodeNote(0x30, "Lives", "bob"),
        CodeNote(0x40, "[10 bytes] Name", "alice"),
    ]

    stats = generate_code_note_stats(_set(), notes)

    assert dict(stats.size_counts) == {"16-bit": 1, "Unknown": 1}
    assert dict(stats.author_counts) == {"alice": 2, "bob": 1}
    assert stats.notes_count == 3
    assert stats.notes_used == 1
    assert stats.notes_unused == 2


def test_rich_presence_stats() -> None:
    text = "Format:Lives\nFormatType=VALUE\n\nDisplay:\n?0xH10=1?@Lives(0xH11) lives\nIdle\n"

    stats = generate_rich_presence_stats(RichPresence.from_text(text))

    assert dict(stats.custom_macros) == {"Lives": "VALUE"}
    assert stats.display_groups == 2
    assert stats.cond_display == 1
    assert stats.max_lookups == 1
    assert stats.min_lookups == 0
    assert stats.is_dynamic_rp
    assert not generate_rich_presence_stats(RichPresence()).is_dynamic_rp


def test_set_stats_without_notes() -> None:
    stats = generate_set_stats(_set())

    assert stats.achievement_count == 2
    assert stats.total_points == 15
    assert stats.avg_points == 7.5
    assert dict(stats.achievement_state) == {"core": 1, "unofficial": 0, "local": 1}
    assert stats.achievement_type["progression"] == (1,)
    assert stats.using_bit_ops == (1,)
    assert stats.using_delta == (2,)
    assert stats.missing_notes is None
    assert stats.to_dict()["missing_notes"] is None


def test_set_stats_missing_note_sources() -> None:
    stats = generate_set_stats(_set(), [CodeNote(0x10, "[8-bit] Flags")])

    assert stats.missing_notes is not None
    assert dict(stats.missing_notes) == {0x20: ("\N{TROPHY} Achievement: Two",)}
    assert stats.to_dict()["missing_notes"] == {
        "0x00000020": ["\N{TROPHY} Achievement: Two"]
    }
