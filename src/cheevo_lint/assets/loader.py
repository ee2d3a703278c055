"""
cheevo-lint - asset and code-note loaders.

File: src/cheevo_lint/assets/loader.py
Last updated: 2026-10-19

Purpose
- Build immutable asset records and code notes from the three on-disk
  formats: the JSON set export, the colon-delimited local user file and the
  JSON code-note list.

What should be included in this file
- ``parse_*`` functions over already-read payloads and ``load_*`` wrappers
  that read UTF-8 files.
- ``split_colon_row`` for local rows, where double-quoted fields are JSON
  string literals that may contain colons.

Functional requirements
- Assets titled ``[VOID]`` and hidden leaderboards are skipped.
- ``index`` preserves file order (local rows are offset past export rows).
- Malformed payloads raise ``AssetLoadError``; ``LogicParseError`` from logic
  parsing propagates unchanged.
"""

from __future__ import annotations

import json
import re
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any, Final

from cheevo_lint.assets.models import (
    Achievement,
    AchievementSet,
    AchievementType,
    AssetState,
    Leaderboard,
    lookup_console,
)
from cheevo_lint.assets.rich_presence import RichPresence
from cheevo_lint.logic.enums import lookup_format_type
from cheevo_lint.logic.model import Logic
from cheevo_lint.notes.code_note import CodeNote

_LINE_RE: Final[re.Pattern[str]] = re.compile(r"[^\r\n]+")
_VOID_MARKER: Final[str] = "[VOID]"
_LOCAL_INDEX_OFFSET: Final[int] = 1_000_000
_UNOFFICIAL_FLAGS: Final[int] = 5
_BADGE_URL: Final[str] = "https://media.retroachievements.org/Badge/{}.png"
_COMPONENT_SEPARATOR: Final[str] = "::"


class AssetLoadError(ValueError):
    """Raised when an asset or note payload cannot be interpreted."""


def _is_void(title: str) -> bool:
    return _VOID_MARKER in title.upper()


def _read_text(path: Path | str) -> str:
    file_path = Path(path)
    try:
        return file_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise AssetLoadError(f"unable to read {file_path}: {exc}") from exc


def _read_json(path: Path | str) -> Any:
    text = _read_text(path)
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise AssetLoadError(f"invalid JSON in {path}: {exc}") from exc


def _field(record: Mapping[str, Any], key: str) -> Any:
    try:
        return record[key]
    except KeyError:
        raise AssetLoadError(f"missing field {key!r}") from None


def _as_int(raw: object, what: str) -> int:
    if isinstance(raw, bool):
        raise AssetLoadError(f"{what} must be an integer")
    if isinstance(raw, int):
        return raw
    try:
        return int(str(raw).strip())
    except ValueError:
        raise AssetLoadError(f"{what} must be an integer, got {raw!r}") from None


# --- JSON set export -------------------------------------------------------


def achievement_from_json(record: Mapping[str, Any], index: int = -1) -> Achievement:
    state = (
        AssetState.UNOFFICIAL if record.get("Flags") == _UNOFFICIAL_FLAGS else AssetState.CORE
    )
    return Achievement(
        id=_as_int(_field(record, "ID"), "achievement ID"),
        title=str(_field(record, "Title")),
        description=str(record.get("Description") or ""),
        logic=Logic.from_string(str(_field(record, "MemAddr")), value_mode=False),
        points=_as_int(record.get("Points", 5), "achievement points"),
        author=record.get("Author"),
        type=AchievementType.parse(record.get("Type")),
        badge=record.get("BadgeURL"),
        state=state,
        index=index,
    )


def leaderboard_from_json(record: Mapping[str, Any], index: int = -1) -> Leaderboard:
    components: dict[str, Logic] = {}
    for part in str(_field(record, "Mem")).split(_COMPONENT_SEPARATOR):
        tag = part[:3]
        components[tag] = Logic.from_string(part[4:], value_mode=tag == "VAL")
    try:
        return Leaderboard(
            id=_as_int(_field(record, "ID"), "leaderboard ID"),
            title=str(_field(record, "Title")),
            description=str(record.get("Description") or ""),
            components=components,
            format=lookup_format_type(record.get("Format")),
            lower_is_better=bool(record.get("LowerIsBetter", True)),
            author=record.get("Author"),
            state=AssetState.CORE,
            index=index,
        )
    except ValueError as exc:
        raise AssetLoadError(f"leaderboard {record.get('ID')}: {exc}") from exc


def _records(payload: Mapping[str, Any], key: str) -> list[Mapping[str, Any]]:
    raw = payload.get(key) or ()
    if isinstance(raw, (str, Mapping)) or not isinstance(raw, Sequence):
        raise AssetLoadError(f"{key} must be a JSON list")
    for position, record in enumerate(raw):
        if not isinstance(record, Mapping):
            raise AssetLoadError(f"{key} entry {position} must be an object")
    return list(raw)


def parse_set_json(payload: Mapping[str, Any]) -> AchievementSet:
    """Build a set from a parsed JSON set export."""

    if not isinstance(payload, Mapping):
        raise AssetLoadError("set export must be a JSON object")

    achievements = tuple(
        achievement_from_json(record, index)
        for index, record in enumerate(_records(payload, "Achievements"))
        if not _is_void(str(_field(record, "Title")))
    )
    leaderboards = tuple(
        leaderboard_from_json(record, index)
        for index, record in enumerate(_records(payload, "Leaderboards"))
        if not record.get("Hidden") and not _is_void(str(_field(record, "Title")))
    )
    set_id = payload.get("ID")
    return AchievementSet(
        id=_as_int(set_id, "set ID") if set_id is not None else None,
        title=payload.get("Title"),
        icon=payload.get("ImageIconURL"),
        console=lookup_console(payload.get("ConsoleID")),
        achievements=achievements,
        leaderboards=leaderboards,
    )


def load_set_json(path: Path | str) -> AchievementSet:
    return parse_set_json(_read_json(path))


# --- local user file -------------------------------------------------------


def split_colon_row(line: str) -> list[str]:
    """Split a local row on ``:``; a field opening with ``"`` is a JSON string."""

    fields: list[str] = []
    chars = line + ":"
    start = 0
    in_quotes = False
    for index, char in enumerate(chars):
        if index < start:
            continue
        if index == start and not in_quotes and char == '"':
            in_quotes = True
        elif in_quotes and char == '"' and line[index - 1] != "\\":
            try:
                fields.append(json.loads(chars[start : index + 1]))
            except json.JSONDecodeError as exc:
                raise AssetLoadError(f"bad quoted field in local row: {line!r}") from exc
            start = index + 2
            in_quotes = False
        elif not in_quotes and char == ":":
            fields.append(chars[start:index])
            start = index + 1
    if in_quotes:
        raise AssetLoadError(f"unterminated quoted field in local row: {line!r}")
    return fields


def _column(row: Sequence[str], position: int) -> str:
    return row[position] if position < len(row) else ""


def achievement_from_local(row: Sequence[str], index: int = -1) -> Achievement:
    if len(row) < 9:
        raise AssetLoadError(f"achievement row has {len(row)} fields, expected at least 9")
    badge = _column(row, 13)
    return Achievement(
        id=_as_int(row[0], "achievement ID"),
        title=row[2],
        description=row[3],
        logic=Logic.from_string(row[1], value_mode=False),
        points=_as_int(row[8], "achievement points"),
        author=row[7] or None,
        type=AchievementType.parse(row[6]),
        badge=_BADGE_URL.format(badge) if badge else None,
        state=AssetState.LOCAL,
        index=index,
    )


def leaderboard_from_local(row: Sequence[str], index: int = -1) -> Leaderboard:
    if len(row) < 9:
        raise AssetLoadError(f"leaderboard row has {len(row)} fields, expected at least 9")
    return Leaderboard(
        id=_as_int(row[0][1:], "leaderboard ID"),
        title=row[6],
        description=row[7],
        components={
            "STA": Logic.from_string(row[1], value_mode=False),
            "CAN": Logic.from_string(row[2], value_mode=False),
            "SUB": Logic.from_string(row[3], value_mode=False),
            "VAL": Logic.from_string(row[4], value_mode=True),
        },
        format=lookup_format_type(row[5]),
        lower_is_better=row[8] == "1",
        state=AssetState.LOCAL,
        index=index,
    )


def parse_local_text(text: str) -> tuple[AchievementSet, tuple[CodeNote, ...]]:
    """Parse a local user file into its assets and its local code notes.

    Line 1 is the file version and line 2 the game title; every later line
    is a row: ``N`` rows are code notes, ``L`` rows leaderboards and anything
    else an achievement.
    """

    lines = _LINE_RE.findall(text)
    achievements: list[Achievement] = []
    leaderboards: list[Leaderboard] = []
    notes: list[CodeNote] = []

    for number, line in enumerate(lines[2:], start=2):
        row = split_colon_row(line)
        marker = row[0][:1]
        index = number + _LOCAL_INDEX_OFFSET
        if marker == "N":
            if len(row) < 3:
                raise AssetLoadError(f"code note row has {len(row)} fields, expected 3")
            try:
                notes.append(CodeNote.from_record({"Address": row[1], "Note": row[2]}))
            except (TypeError, ValueError) as exc:
                raise AssetLoadError(f"bad code note row: {line!r}") from exc
        elif marker == "L":
            leaderboard = leaderboard_from_local(row, index)
            if not _is_void(leaderboard.title):
                leaderboards.append(leaderboard)
        else:
            achievement = achievement_from_local(row, index)
            if not _is_void(achievement.title):
                achievements.append(achievement)

    achievement_set = AchievementSet(
        title=lines[1] if len(lines) > 1 else None,
        achievements=tuple(achievements),
        leaderboards=tuple(leaderboards),
    )
    return achievement_set, tuple(notes)


def load_local_file(path: Path | str) -> tuple[AchievementSet, tuple[CodeNote, ...]]:
    return parse_local_text(_read_text(path))


# --- code notes and rich presence -----------------------------------------


def parse_notes_json(payload: object) -> tuple[CodeNote, ...]:
    """Build notes from an exported note list; entries without text are skipped."""

    if not isinstance(payload, list):
        raise AssetLoadError("code note export must be a JSON list")
    notes: list[CodeNote] = []
    for position, record in enumerate(payload):
        if not isinstance(record, Mapping):
            raise AssetLoadError(f"code note entry {position} must be an object")
        if not record.get("Note"):
            continue
        try:
            notes.append(CodeNote.from_record(record))
        except (TypeError, ValueError) as exc:
            raise AssetLoadError(f"code note entry {position}: {exc}") from exc
    return tuple(notes)


def load_notes_json(path: Path | str) -> tuple[CodeNote, ...]:
    return parse_notes_json(_read_json(path))


def load_rich_presence(path: Path | str) -> RichPresence:
    return RichPresence.from_text(_read_text(path))


__all__ = [
    "AssetLoadError",
    "achievement_from_json",
    "achievement_from_local",
    "leaderboard_from_json",
    "leaderboard_from_local",
    "load_local_file",
    "load_notes_json",
    "load_rich_presence",
    "load_set_json",
    "parse_local_text",
    "parse_notes_json",
    "parse_set_json",
    "split_colon_row",
]
