"""
cheevo-lint - code-note size, type and enumeration inference.

File: src/cheevo_lint/notes/code_note.py
Last updated: 2026-10-19

Purpose
- Turn a free-text memory annotation into a ``CodeNote`` with a declared
  byte span, an optional access size and an optional value enumeration.

What should be included in this file
- ``extract_size``: the first-line size/type scan.
- ``parse_enumerations``: the ``value <delimiter> meaning`` table scan.
- ``CodeNote`` and ``EnumerationEntry`` value objects.

Functional requirements
- ``extract_size`` reproduces the RAIntegration ``CodeNoteModel::ExtractSize``
  results for its published example table, except that ``lower4``/``upper4``
  style wording resolves to a single byte.
- Notes that look like pointer documentation are never scanned for
  enumerations.

Non-functional requirements
- Pure functions; identical text always yields identical results.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Final

from cheevo_lint.logic.enums import AccessSize

# \r is excluded so CRLF notes tokenize like LF notes.
_SIZE_TOKEN_RE: Final[re.Pattern[str]] = re.compile(
    r"(?P<number>\d+)|(?P<word>[a-z]+)|[^\r\n]", re.IGNORECASE | re.ASCII
)
# The literal run is hex digits with optional "0x" joins; each join needs the
# "x", so a run splits only one way and long hex lines cannot backtrack exponentially.
_ENUMERATION_RE: Final[re.Pattern[str]] = re.compile(
    r"((?:0x)?[0-9a-f]+(?:0x[0-9a-f]+)*)([^\w\d]*[^\w\d\s][^\w\d]*).+$",
    re.IGNORECASE | re.ASCII,
)
_ENUMERATION_LITERAL_RE: Final[re.Pattern[str]] = re.compile(
    r"\b(0x)?([0-9a-f]+)\b", re.IGNORECASE | re.ASCII
)
_HEX_LETTER_RE: Final[re.Pattern[str]] = re.compile(r"[a-f]", re.IGNORECASE)

_MIN_SIZED_LINE: Final[int] = 4
_MIN_ENUMERATION_LINES: Final[int] = 3

_SIZE_BY_BYTES: Final[dict[int, AccessSize]] = {
    1: AccessSize.BYTE,
    2: AccessSize.WORD,
    3: AccessSize.TBYTE,
    4: AccessSize.DWORD,
}
_BIG_ENDIAN: Final[dict[AccessSize, AccessSize]] = {
    AccessSize.WORD: AccessSize.WORD_BE,
    AccessSize.TBYTE: AccessSize.TBYTE_BE,
    AccessSize.DWORD: AccessSize.DWORD_BE,
    AccessSize.FLOAT: AccessSize.FLOAT_BE,
    AccessSize.DBL32: AccessSize.DBL32_BE,
}
_BIG_ENDIAN_WORDS: Final[frozenset[str]] = frozenset({"be", "bigendian"})
_POINTER_WORDS: Final[tuple[str, ...]] = ("ptr", "pointer")


def extract_size(note: str) -> tuple[AccessSize | None, int]:
    """Return ``(access size or None, byte count)`` declared by the first line."""

    first_line = note.split("\n", 1)[0].lower()
    if len(first_line) < _MIN_SIZED_LINE:
        return None, 1

    num_bytes = 1
    size: AccessSize | None = None
    bytes_from_bits = False
    found_size = False
    prev_word_is_size = False
    prev_word_is_number = False
    prev_word = ""

    for token in _SIZE_TOKEN_RE.finditer(first_line):
        word = token.group(0)
        word_is_number = token.group("number") is not None
        word_is_size = False

        if word_is_number:
            number = int(word)
            if prev_word == "mbf":
                if number in (32, 40):
                    num_bytes = number // 8
                    size = AccessSize.MBF32
                    word_is_size = found_size = True
            elif prev_word == "double" and number == 32:
                num_bytes = number // 8
                size = AccessSize.DBL32
                word_is_size = found_size = True
            elif number == 4 and prev_word in ("lower", "upper"):
                # nibble wording is treated as a whole byte
                num_bytes = 1
                size = AccessSize.BYTE
                word_is_size = found_size = True
        elif prev_word_is_size:
            if word == "float":
                if size is AccessSize.DWORD:
                    size = AccessSize.FLOAT
                    word_is_size = True
            elif word == "double":
                if size is AccessSize.DWORD or num_bytes == 8:
                    size = AccessSize.DBL32
                    word_is_size = True
            elif word in _BIG_ENDIAN_WORDS:
                if size is not None:
                    size = _BIG_ENDIAN.get(size, size)
            elif word == "le":
                if size is AccessSize.MBF32:
                    size = AccessSize.MBF32_LE
            elif word == "mbf":
                if num_bytes in (4, 5):
                    size = AccessSize.MBF32
        elif prev_word_is_number:
            number = int(prev_word)
            if word in ("bit", "bits"):
                if not found_size:
                    num_bytes = (number + 7) // 8
                    size = None
                    bytes_from_bits = True
                    word_is_size = found_size = True
            elif word in ("byte", "bytes"):
                if not found_size or bytes_from_bits:
                    num_bytes = number
                    size = None
                    bytes_from_bits = False
                    word_is_size = found_size = True

            if word_is_size:
                if num_bytes == 0:
                    num_bytes = 1
                else:
                    size = _SIZE_BY_BYTES.get(num_bytes)
        elif word == "float":
            if not found_size:
                num_bytes = 4
                size = AccessSize.FLOAT_BE if prev_word in _BIG_ENDIAN_WORDS else AccessSize.FLOAT
                word_is_size = True
        elif word == "double":
            if not found_size:
                num_bytes = 8
                size = AccessSize.DBL32_BE if prev_word in _BIG_ENDIAN_WORDS else AccessSize.DBL32
                word_is_size = True

        if word not in (" ", "-"):
            prev_word_is_size = word_is_size
            prev_word_is_number = word_is_number
            prev_word = word

    return size, num_bytes


@dataclass(frozen=True, slots=True)
class EnumerationEntry:
    """One documented value: its literal text, meaning and numeric value."""

    literal: str
    meaning: str
    value: int

    def to_dict(self) -> dict[str, object]:
        return {"literal": self.literal, "meaning": self.meaning, "value": self.value}


def parse_enumerations(note: str) -> tuple[EnumerationEntry, ...] | None:
    """Find a ``value <delimiter> meaning`` table in the lines after the first.

    The most frequent delimiter wins (earliest seen on ties). A table needs
    that delimiter at least twice and at least three lines containing it.
    """

    lines = note.split("\n")
    delimiter_counts: dict[str, int] = {}
    for line in lines[1:]:
        match = _ENUMERATION_RE.search(line.strip())
        if match is None:
            continue
        delimiter_counts[match.group(2)] = delimiter_counts.get(match.group(2), 0) + 1

    if not delimiter_counts:
        return None
    delimiter, delimiter_count = max(delimiter_counts.items(), key=lambda item: item[1])

    found: list[tuple[str, str]] = []
    is_hex = False
    line_count = 0
    for line in lines[1:]:
        if delimiter not in line:
            continue
        line_count += 1
        lhs, rhs = line.split(delimiter, 1)
        meaning = rhs.strip()
        for literal in _ENUMERATION_LITERAL_RE.finditer(lhs):
            found.append((literal.group(0), meaning))
            is_hex = is_hex or bool(literal.group(1)) or bool(_HEX_LETTER_RE.search(literal.group(0)))

    if delimiter_count == 1 or line_count < _MIN_ENUMERATION_LINES or not found:
        return None

    base = 16 if is_hex else 10
    return tuple(
        EnumerationEntry(literal=literal, meaning=meaning, value=int(literal, base))
        for literal, meaning in found
    )


def is_probable_pointer(note: str) -> bool:
    lines = note.lower().split("\n")
    if any(word in lines[0] for word in _POINTER_WORDS):
        return True
    return sum(1 for line in lines[1:] if line.strip().startswith("+")) >= 2


def _coerce_address(value: object) -> int:
    if isinstance(value, bool):
        raise TypeError("address must be an integer or numeric string")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        text = value.strip()
        return int(text, 16) if text.lower().startswith("0x") else int(text)
    raise TypeError("address must be an integer or numeric string")


@dataclass(frozen=True, slots=True)
class CodeNote:
    """A memory annotation anchored at ``address`` spanning ``size`` bytes."""

    address: int
    note: str
    author: str = ""
    access_size: AccessSize | None = field(init=False)
    size: int = field(init=False)
    enumerations: tuple[EnumerationEntry, ...] | None = field(init=False)

    def __post_init__(self) -> None:
        if isinstance(self.address, bool) or not isinstance(self.address, int):
            raise TypeError("address must be an integer")
        if self.address < 0:
            raise ValueError("address must be >= 0")
        access_size, size = extract_size(self.note)
        object.__setattr__(self, "access_size", access_size)
        object.__setattr__(self, "size", size)
        enumerations = None if is_probable_pointer(self.note) else parse_enumerations(self.note)
        object.__setattr__(self, "enumerations", enumerations)

    @classmethod
    def from_record(cls, record: Mapping[str, object]) -> CodeNote:
        """Build from an exported note entry (``Address``, ``Note``, ``User``)."""

        author = record.get("User")
        return cls(
            address=_coerce_address(record.get("Address")),
            note=str(record.get("Note") or ""),
            author=str(author) if author is not None else "",
        )

    @property
    def first_line(self) -> str:
        return self.note.split("\n", 1)[0]

    def is_array(self) -> bool:
        unit = self.access_size.byte_width if self.access_size is not None else 1
        return self.size >= unit * 2

    def contains(self, address: int) -> bool:
        return self.address <= address < self.address + self.size

    def is_probable_pointer(self) -> bool:
        return is_probable_pointer(self.note)

    def to_dict(self) -> dict[str, object]:
        return {
            "address": self.address,
            "author": self.author,
            "size": self.size,
            "access_size": self.access_size.label if self.access_size is not None else None,
            "enumerations": (
                [entry.to_dict() for entry in self.enumerations]
                if self.enumerations is not None
                else None
            ),
        }


def find_note(notes: tuple[CodeNote, ...] | list[CodeNote], address: int) -> CodeNote | None:
    """Return the last note covering ``address``; later notes win on overlap."""

    for note in reversed(notes):
        if note.contains(address):
            return note
    return None


__all__ = [
    "CodeNote",
    "EnumerationEntry",
    "extract_size",
    "find_note",
    "is_probable_pointer",
    "parse_enumerations",
]
