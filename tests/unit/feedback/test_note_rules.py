"""
cheevo-lint - unit tests for code-note rules

File: tests/unit/feedback/test_note_rules.py
Last updated: 2026-10-19

Purpose
- Validate the rules that judge code notes on their own.

What this test file should cover
- Notes without any size information.
- Enumerated values written in hex without a ``0x`` prefix.
- Enumerated values that do not fit the declared access size.
"""

from __future__ import annotations

from cheevo_lint.feedback import IssueCode
from cheevo_lint.feedback.rules.note_rules import (
    check_notes_enum_hex,
    check_notes_enum_size_mismatch,
    check_notes_missing_size,
)
from cheevo_lint.notes import CodeNote


def test_unsized_notes_are_reported() -> None:
    notes = [
        CodeNote(0x10, "Lives"),
        CodeNote(0x20, "[16-bit] Score"),
        CodeNote(0x30, "[10 bytes] Player name"),
    ]

    (issue,) = check_notes_missing_size(notes)

    assert issue.code is IssueCode.NOTE_NO_SIZE
    assert issue.target is notes[0]
    assert issue.detail == "Code note at 0x00000010"
    assert issue.describe_target() == "0x00000010"


def test_unprefixed_hex_enumeration() -> None:
    bare = CodeNote(0x40, "[8-bit] State\n0A = idle\n0B = walk\n0C = run")
    prefixed = CodeNote(0x41, "[8-bit] State\n0x0A = idle\n0x0B = walk\n0x0C = run")
    decimal = CodeNote(0x42, "[8-bit] State\n1 = idle\n2 = walk\n3 = run")

    (issue,) = check_notes_enum_hex([bare, prefixed, decimal])

    assert issue.code is IssueCode.NOTE_ENUM_HEX
    assert issue.target is bare
    assert issue.detail is not None
    assert issue.detail.endswith("found potential hex values: 0A, 0B, 0C")


def test_enumeration_larger_than_access_size() -> None:
    oversized = CodeNote(0x50, "[8-bit] Item\n0x100 = big\n0x01 = small\n0x02 = tiny")
    fits = CodeNote(0x60, "[16-bit] Item\n0x100 = big\n0x01 = small\n0x02 = tiny")
    unsized = CodeNote(0x70, "Item\n0x100 = big\n0x01 = small\n0x02 = tiny")

    (issue,) = check_notes_enum_size_mismatch([oversized, fits, unsized])

    assert issue.code is IssueCode.NOTE_ENUM_TOO_LARGE
    assert issue.target is oversized
    assert issue.detail == (
        "The code note at 0x00000050 is listed as 8-bit, which has a max value of 0xFF"
    )


def test_pointer_notes_have_no_enumerations() -> None:
    pointer = CodeNote(0x80, "[32-bit] Pointer to player\n+0x10 = hp\n+0x14 = mp\n+0x18 = xp")

    assert pointer.enumerations is None
    assert check_notes_enum_hex([pointer]) == []
    assert check_notes_enum_size_mismatch([pointer]) == []
