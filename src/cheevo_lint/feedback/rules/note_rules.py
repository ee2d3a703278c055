"""Code-note quality rules: missing size and suspicious enumerations."""

from __future__ import annotations

import re
from collections.abc import Sequence
from typing import Final

from cheevo_lint.feedback.catalog import IssueCode
from cheevo_lint.feedback.issues import Issue
from cheevo_lint.logic.operand import to_display_hex
from cheevo_lint.notes.code_note import CodeNote

_NUMERIC_RE: Final[re.Pattern[str]] = re.compile(r"\b(0x)?([0-9a-f]{2,})\b", re.IGNORECASE)
_HEX_LETTER_RE: Final[re.Pattern[str]] = re.compile(r"[a-f]", re.IGNORECASE)


def check_notes_missing_size(notes: Sequence[CodeNote]) -> list[Issue]:
    return [
        Issue.of(IssueCode.NOTE_NO_SIZE, note, f"Code note at {to_display_hex(note.address)}")
        for note in notes
        if note.access_size is None and note.size == 1
    ]


def check_notes_enum_hex(notes: Sequence[CodeNote]) -> list[Issue]:
    """Enumerated literals with hex letters but no ``0x`` prefix."""

    issues: list[Issue] = []
    for note in notes:
        if not note.enumerations:
            continue
        found = [
            entry.literal
            for entry in note.enumerations
            for match in _NUMERIC_RE.finditer(entry.literal)
            if _HEX_LETTER_RE.search(match.group(2)) and not match.group(1)
        ]
        if found:
            issues.append(
                Issue.of(
                    IssueCode.NOTE_ENUM_HEX,
                    note,
                    f"Code note at {to_display_hex(note.address)} found potential hex values: "
                    + ", ".join(found),
                )
            )
    return issues


def check_notes_enum_size_mismatch(notes: Sequence[CodeNote]) -> list[Issue]:
    issues: list[Issue] = []
    for note in notes:
        if not note.enumerations or note.access_size is None:
            continue
        max_value = note.access_size.max_value
        if any(entry.value > max_value for entry in note.enumerations):
            issues.append(
                Issue.of(
                    IssueCode.NOTE_ENUM_TOO_LARGE,
                    note,
                    f"The code note at {to_display_hex(note.address)} is listed as "
                    f"{note.access_size.label}, which has a max value of 0x{int(max_value):X}",
                )
            )
    return issues


__all__ = [
    "check_notes_enum_hex",
    "check_notes_enum_size_mismatch",
    "check_notes_missing_size",
]
