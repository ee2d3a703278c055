"""
cheevo-lint - display script (rich presence) parsing.

File: src/cheevo_lint/assets/rich_presence.py
Last updated: 2026-10-19

Purpose
- Tokenize a rich presence script into macros, lookups and display clauses
  whose conditions and embedded lookups are parsed as condition logic.

Functional requirements
- ``Format:``, ``Lookup:`` and ``Display:`` sections; ``//`` starts a comment.
- ``Display:`` is the last section: every following non-blank line is a
  display clause, conditional when it starts with ``?``.
- A conditional clause that does not read ``?condition?text`` raises
  ``LogicParseError`` with category ``rich presence``.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Final

from cheevo_lint.logic.enums import FormatType, lookup_format_type
from cheevo_lint.logic.errors import LogicParseError
from cheevo_lint.logic.model import Logic

BUILTIN_MACROS: Final[MappingProxyType[str, FormatType | None]] = MappingProxyType(
    {
        "Number": FormatType.VALUE,
        "Unsigned": FormatType.UNSIGNED,
        "Score": FormatType.SCORE,
        "Centiseconds": FormatType.MILLISECS,
        "Seconds": FormatType.SECS,
        "Minutes": FormatType.MINUTES,
        "Fixed1": FormatType.FIXED1,
        "Fixed2": FormatType.FIXED2,
        "Fixed3": FormatType.FIXED3,
        "Float1": FormatType.FLOAT1,
        "Float2": FormatType.FLOAT2,
        "Float3": FormatType.FLOAT3,
        "Float4": FormatType.FLOAT4,
        "Float5": FormatType.FLOAT5,
        "Float6": FormatType.FLOAT6,
        "ASCIIChar": None,
        "UnicodeChar": None,
    }
)

_LINE_RE: Final[re.Pattern[str]] = re.compile(r"[^\r\n]+")
_CONDITIONAL_RE: Final[re.Pattern[str]] = re.compile(r"^\?(.+?)\?(.*)$")
_LOOKUP_CALL_RE: Final[re.Pattern[str]] = re.compile(
    r"@([ _a-z][ _a-z0-9]*)\((.+?)\)", re.IGNORECASE
)

_FORMAT_HEADER: Final[str] = "Format:"
_LOOKUP_HEADER: Final[str] = "Lookup:"
_DISPLAY_HEADER: Final[str] = "Display:"
_FORMAT_TYPE_KEY: Final[str] = "FormatType"
_FALLBACK_KEY: Final[str] = "*"


@dataclass(frozen=True, slots=True)
class LookupRange:
    """Inclusive key range mapped to display text; no bounds means fallback."""

    start: int | None
    end: int | None
    value: str

    @property
    def is_fallback(self) -> bool:
        return self.start is None and self.end is None

    def covers(self, key: int) -> bool:
        if self.start is None or self.end is None:
            return self.is_fallback
        return self.start <= key <= self.end


@dataclass(frozen=True, slots=True)
class DisplayLookup:
    name: str
    calc: Logic


@dataclass(frozen=True, slots=True)
class DisplayClause:
    condition: Logic | None
    text: str
    lookups: tuple[DisplayLookup, ...] = ()


def _parse_lookup_key(raw: str, line: str) -> int:
    text = raw.strip()
    try:
        return int(text, 16) if text.lower().startswith("0x") else int(text)
    except ValueError:
        raise LogicParseError("rich presence (lookup key)", line) from None


def _parse_lookup_line(line: str) -> list[LookupRange]:
    keys, _, value = line.partition("=")
    ranges: list[LookupRange] = []
    for key in keys.split(","):
        if key.strip() == _FALLBACK_KEY:
            ranges.append(LookupRange(None, None, value))
            continue
        bounds = key.split("-")
        ranges.append(
            LookupRange(
                _parse_lookup_key(bounds[0], line), _parse_lookup_key(bounds[-1], line), value
            )
        )
    return ranges


def _parse_display_line(line: str) -> DisplayClause:
    condition: Logic | None = None
    text = line
    if line.startswith("?"):
        parts = _CONDITIONAL_RE.match(line)
        if parts is None:
            raise LogicParseError("rich presence (malformed conditional display)", line)
        condition = Logic.from_string(parts.group(1), value_mode=False)
        text = parts.group(2)
    lookups = tuple(
        DisplayLookup(name=match.group(1), calc=Logic.from_string(match.group(2), value_mode=True))
        for match in _LOOKUP_CALL_RE.finditer(text)
    )
    return DisplayClause(condition=condition, text=text, lookups=lookups)


@dataclass(frozen=True, slots=True)
class RichPresence:
    """A parsed display script. ``RichPresence()`` is the empty placeholder."""

    text: str = ""
    macros: Mapping[str, FormatType | None] = field(default_factory=lambda: dict(BUILTIN_MACROS))
    custom_macros: frozenset[str] = frozenset()
    lookups: Mapping[str, tuple[LookupRange, ...]] = field(default_factory=dict)
    display: tuple[DisplayClause, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "macros", MappingProxyType(dict(self.macros)))
        object.__setattr__(self, "lookups", MappingProxyType(dict(self.lookups)))

    @classmethod
    def from_text(cls, text: str) -> RichPresence:
        macros: dict[str, FormatType | None] = dict(BUILTIN_MACROS)
        custom_macros: set[str] = set()
        lookups: dict[str, tuple[LookupRange, ...]] = {}
        display: list[DisplayClause] = []

        # (section, name, collected ranges) for the open Format/Lookup block
        section: str | None = None
        name = ""
        ranges: list[LookupRange] = []
        format_type: FormatType | None = None

        def close_section() -> None:
            if section == _FORMAT_HEADER:
                custom_macros.add(name)
                macros[name] = format_type
            elif section == _LOOKUP_HEADER:
                lookups[name] = tuple(ranges)

        for raw_line in _LINE_RE.findall(text):
            line = raw_line.split("//", 1)[0].strip()
            if not line:
                continue
            if section == _DISPLAY_HEADER:
                display.append(_parse_display_line(line))
            elif line.startswith((_FORMAT_HEADER, _LOOKUP_HEADER, _DISPLAY_HEADER)):
                close_section()
                section = line[: line.index(":") + 1]
                name = line[len(section) :]
                ranges = []
                format_type = None
            elif section == _FORMAT_HEADER:
                if line.startswith(_FORMAT_TYPE_KEY):
                    format_type = lookup_format_type(line[len(_FORMAT_TYPE_KEY) + 1 :])
            elif section == _LOOKUP_HEADER:
                ranges.extend(_parse_lookup_line(line))
        close_section()

        return cls(
            text=text,
            macros=macros,
            custom_macros=frozenset(custom_macros),
            lookups=lookups,
            display=tuple(display),
        )


__all__ = [
    "BUILTIN_MACROS",
    "DisplayClause",
    "DisplayLookup",
    "LookupRange",
    "RichPresence",
]
