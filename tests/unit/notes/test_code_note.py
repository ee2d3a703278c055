"""
cheevo-lint - unit tests for code-note inference

File: tests/unit/notes/test_code_note.py
Last updated: 2026-10-19

Purpose
- Pin the size/type heuristic and the enumeration table parser to known
  note texts.

What this test file should cover
- The fixed size examples, including the parenthesized nibble case.
- Enumeration detection, base inference and rejection thresholds.
- Pointer detection suppressing enumerations.
- Note span lookup where later notes win on overlap.
"""

from __future__ import annotations

import time

import pytest

from cheevo_lint.logic import AccessSize
from cheevo_lint.notes import (
    CodeNote,
    extract_size,
    find_note,
    is_probable_pointer,
    parse_enumerations,
)


# Reference examples for the first-line size scan, one row per note text.
SIZE_TABLE: list[tuple[str, AccessSize | None, int]] = [
    ("", None, 1),
    ("Test", None, 1),
    ("16-bit Test", AccessSize.WORD, 2),
    ("Test 16-bit", AccessSize.WORD, 2),
    ("Test 16-bi", None, 1),
    ("[16-bit] Test", AccessSize.WORD, 2),
    ("[16 bit] Test", AccessSize.WORD, 2),
    ("[16 Bit] Test", AccessSize.WORD, 2),
    ("[24-bit] Test", AccessSize.TBYTE, 3),
    ("[32-bit] Test", AccessSize.DWORD, 4),
    ("[32 bit] Test", AccessSize.DWORD, 4),
    ("[32bit] Test", AccessSize.DWORD, 4),
    ("Test [16-bit]", AccessSize.WORD, 2),
    ("Test (16-bit)", AccessSize.WORD, 2),
    ("Test (16 bits)", AccessSize.WORD, 2),
    ("[64-bit] Test", None, 8),
    ("[128-bit] Test", None, 16),
    ("[17-bit] Test", AccessSize.TBYTE, 3),
    ("[100-bit] Test", None, 13),
    ("[0-bit] Test", None, 1),
    ("[1-bit] Test", AccessSize.BYTE, 1),
    ("[4-bit] Test", AccessSize.BYTE, 1),
    ("[8-bit] Test", AccessSize.BYTE, 1),
    ("[9-bit] Test", AccessSize.WORD, 2),
    ("bit", None, 1),
    ("9bit", AccessSize.WORD, 2),
    ("-bit", None, 1),
    ("[16-bit BE] Test", AccessSize.WORD_BE, 2),
    ("[24-bit BE] Test", AccessSize.TBYTE_BE, 3),
    ("[32-bit BE] Test", AccessSize.DWORD_BE, 4),
    ("Test [32-bit BE]", AccessSize.DWORD_BE, 4),
    ("Test (32-bit BE)", AccessSize.DWORD_BE, 4),
    ("Test 32-bit BE", AccessSize.DWORD_BE, 4),
    ("[16-bit BigEndian] Test", AccessSize.WORD_BE, 2),
    ("[16-bit-BE] Test", AccessSize.WORD_BE, 2),
    ("[4-bit BE] Test", AccessSize.BYTE, 1),
    ("8 BYTE Test", None, 8),
    ("Test 8 BYTE", None, 8),
    ("Test 8 BYT", None, 1),
    ("[2 Byte] Test", AccessSize.WORD, 2),
    ("[4 Byte] Test", AccessSize.DWORD, 4),
    ("[4 Byte - Float] Test", AccessSize.FLOAT, 4),
    ("[8 Byte] Test", None, 8),
    ("[100 Bytes] Test", None, 100),
    ("[2 byte] Test", AccessSize.WORD, 2),
    ("[2-byte] Test", AccessSize.WORD, 2),
    ("Test (6 bytes)", None, 6),
    ("[2byte] Test", AccessSize.WORD, 2),
    ("[float] Test", AccessSize.FLOAT, 4),
    ("[float32] Test", AccessSize.FLOAT, 4),
    ("Test float", AccessSize.FLOAT, 4),
    ("Test floa", None, 1),
    ("is floating", None, 1),
    ("has floated", None, 1),
    ("16-afloat", None, 1),
    ("[float be] Test", AccessSize.FLOAT_BE, 4),
    ("[float bigendian] Test", AccessSize.FLOAT_BE, 4),
    ("[be float] Test", AccessSize.FLOAT_BE, 4),
    ("[bigendian float] Test", AccessSize.FLOAT_BE, 4),
    ("[32-bit] pointer to float", AccessSize.DWORD, 4),
    ("[64-bit double] Test", AccessSize.DBL32, 8),
    ("[64-bit double BE] Test", AccessSize.DBL32_BE, 8),
    ("[double] Test", AccessSize.DBL32, 8),
    ("[double BE] Test", AccessSize.DBL32_BE, 8),
    ("[double32] Test", AccessSize.DBL32, 4),
    ("[double32 BE] Test", AccessSize.DBL32_BE, 4),
    ("[double64] Test", AccessSize.DBL32, 8),
    ("[MBF32] Test", AccessSize.MBF32, 4),
    ("[MBF40] Test", AccessSize.MBF32, 5),
    ("[MBF32 float] Test", AccessSize.MBF32, 4),
    ("[MBF80] Test", None, 1),
    ("[MBF320] Test", None, 1),
    ("[MBF-32] Test", AccessSize.MBF32, 4),
    ("[32-bit MBF] Test", AccessSize.MBF32, 4),
    ("[40-bit MBF] Test", AccessSize.MBF32, 5),
    ("[MBF] Test", None, 1),
    ("Test MBF32", AccessSize.MBF32, 4),
    ("[MBF32 LE] Test", AccessSize.MBF32_LE, 4),
    ("[MBF40-LE] Test", AccessSize.MBF32_LE, 5),
    ("42=bitten", None, 1),
    ("42-bitten", None, 1),
    ("bit by bit", None, 1),
    ("bit1=chest", None, 1),
    ("Bite count (16-bit)", AccessSize.WORD, 2),
    ("Number of bits collected (32 bits)", AccessSize.DWORD, 4),
    ("100 32-bit pointers [400 bytes]", None, 400),
    ("[400 bytes] 100 32-bit pointers", None, 400),
    ("[lower4] score digit 1", AccessSize.BYTE, 1),
    ("[upper4] score digit 2", AccessSize.BYTE, 1),
    ("lower 4-byte value", AccessSize.BYTE, 1),
    ("lower (4-byte) value", AccessSize.DWORD, 4),
]

# Notes seen in real sets that are not part of the reference table.
EXTRA_SIZE_CASES: list[tuple[str, AccessSize | None, int]] = [
    ("[32-bit float] speed", AccessSize.FLOAT, 4),
    ("[24-bit] money", AccessSize.TBYTE, 3),
    ("[8 bit] lives", AccessSize.BYTE, 1),
    ("[10 bytes] name", None, 10),
    ("[double32] timer", AccessSize.DBL32, 4),
    ("big endian float", AccessSize.FLOAT, 4),
    ("BE float position", AccessSize.FLOAT_BE, 4),
    ("Timer", None, 1),
    ("abc", None, 1),
]


@pytest.mark.parametrize(("note", "size", "num_bytes"), SIZE_TABLE + EXTRA_SIZE_CASES)
def test_extract_size_examples(note: str, size: AccessSize | None, num_bytes: int) -> None:
    assert extract_size(note) == (size, num_bytes)


def test_byte_count_overrides_bit_count() -> None:
    assert extract_size("[16-bit] [4 bytes] value") == (AccessSize.DWORD, 4)
    assert extract_size("[4 bytes] [16-bit] value") == (AccessSize.DWORD, 4)


def test_only_first_line_is_sized() -> None:
    assert extract_size("Level id\n[16-bit] not here") == (None, 1)


def test_enumeration_scenario() -> None:
    entries = parse_enumerations("Player state\n1 = Idle\n2 = Walk\n3 = Run")

    assert entries is not None
    assert [entry.value for entry in entries] == [1, 2, 3]
    assert [entry.meaning for entry in entries] == ["Idle", "Walk", "Run"]
    assert [entry.literal for entry in entries] == ["1", "2", "3"]


def test_enumeration_needs_three_lines() -> None:
    assert parse_enumerations("Player state\n1 = Idle\n2 = Walk") is None
    assert parse_enumerations("Player state") is None


def test_enumeration_infers_hex_base_globally() -> None:
    entries = parse_enumerations("[8-bit] Stage\n0x10 = Forest\n11 = Cave\n0A = Castle")

    assert entries is not None
    assert [entry.value for entry in entries] == [0x10, 0x11, 0x0A]


def test_enumeration_line_may_hold_several_literals() -> None:
    entries = parse_enumerations("Mode\n1, 2 - Menu\n3 - Play\n4 - Pause")

    assert entries is not None
    assert [(entry.value, entry.meaning) for entry in entries] == [
        (1, "Menu"),
        (2, "Menu"),
        (3, "Play"),
        (4, "Pause"),
    ]


def test_long_hex_lines_scan_quickly() -> None:
    started = time.perf_counter()
    note = CodeNote(0x10, "Checksum\n" + "a" * 40)
    dump = parse_enumerations("Save block\n" + "0f" * 20 + "\n" + "0x1f" * 10)

    assert time.perf_counter() - started < 0.5
    assert note.enumerations is None
    assert dump is None


def test_joined_hex_literals_keep_their_delimiter() -> None:
    entries = parse_enumerations("Item\n0x0A0x0B = Sword\n0x0C = Shield\n0x0D = Bow")

    assert entries is not None
    assert [(entry.value, entry.meaning) for entry in entries] == [
        (0x0C, "Shield"),
        (0x0D, "Bow"),
    ]


def test_pointer_notes() -> None:
    assert is_probable_pointer("[32-bit] Pointer to player")
    assert is_probable_pointer("Player struct\n+0x10 = hp\n+0x14 = mp")
    assert not is_probable_pointer("Player state\n+1 bonus")

    note = CodeNote(0x100, "Ptr to stage\n1 = A\n2 = B\n3 = C")
    assert note.enumerations is None


def test_code_note_fields() -> None:
    note = CodeNote(0x100, "[16-bit] Score\n1 = Low\n2 = Mid\n3 = High", "alice")

    assert note.access_size is AccessSize.WORD
    assert note.size == 2
    assert note.first_line == "[16-bit] Score"
    assert note.enumerations is not None
    assert len(note.enumerations) == 3
    assert note.contains(0x100)
    assert note.contains(0x101)
    assert not note.contains(0x102)
    assert not note.is_array()
    assert note.to_dict()["access_size"] == "16-bit"


def test_array_notes() -> None:
    assert CodeNote(0, "[10 bytes] name").is_array()
    assert CodeNote(0, "[2 bytes] flags").is_array() is False
    assert CodeNote(0, "[8 bytes] two floats").is_array()


def test_from_record_accepts_hex_and_decimal_addresses() -> None:
    hex_note = CodeNote.from_record({"Address": "0x00ff", "Note": "Lives", "User": "bob"})
    int_note = CodeNote.from_record({"Address": 255, "Note": "Lives"})

    assert hex_note.address == 0xFF
    assert hex_note.author == "bob"
    assert int_note.address == 0xFF
    assert int_note.author == ""


def test_invalid_addresses_are_rejected() -> None:
    with pytest.raises(ValueError):
        CodeNote(-1, "negative")
    with pytest.raises(TypeError):
        CodeNote.from_record({"Address": True, "Note": "bool"})


def test_find_note_prefers_later_notes() -> None:
    wide = CodeNote(0x100, "[4 bytes] block")
    narrow = CodeNote(0x102, "[8-bit] inside")
    notes = (wide, narrow)

    assert find_note(notes, 0x102) is narrow
    assert find_note(notes, 0x101) is wide
    assert find_note(notes, 0x104) is None
    assert find_note([], 0x100) is None
