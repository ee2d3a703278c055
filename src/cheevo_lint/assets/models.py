"""
cheevo-lint - achievement, leaderboard and set records.

File: src/cheevo_lint/assets/models.py
Last updated: 2026-10-19

Purpose
- Immutable records for the assets the lint engine inspects.

What should be included in this file
- ``AssetState`` and ``AchievementType`` enumerations.
- ``Achievement``, ``Leaderboard`` and ``AchievementSet`` records.
- The console table keyed by numeric console id.

Functional requirements
- A leaderboard always carries the four components ``STA``, ``CAN``, ``SUB``
  and ``VAL``; ``VAL`` is value-mode logic, the others are trigger logic.
- Leaderboards whose title or description use "fast" wording are always
  classified as speedruns.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum, StrEnum
from types import MappingProxyType
from typing import Final

from cheevo_lint.logic.enums import FormatType
from cheevo_lint.logic.model import Logic


class AssetState(Enum):
    """Publication state of an asset, with sort rank and report marker."""

    CORE = ("core", 0, "")
    UNOFFICIAL = ("unofficial", 1, "\N{CONSTRUCTION SIGN} ")
    LOCAL = ("local", 2, "\N{LOWER RIGHT PENCIL}\N{VARIATION SELECTOR-16} ")

    def __init__(self, label: str, rank: int, marker: str) -> None:
        self.label = label
        self.rank = rank
        self.marker = marker


class AchievementType(StrEnum):
    NONE = ""
    PROGRESSION = "progression"
    WIN_CONDITION = "win_condition"
    MISSABLE = "missable"

    @classmethod
    def parse(cls, raw: object) -> AchievementType:
        """Map an export value to a member; unrecognized types count as untyped."""
        if raw is None:
            return cls.NONE
        text = str(raw).strip().lower()
        try:
            return cls(text)
        except ValueError:
            return cls.NONE


class LeaderboardKind(StrEnum):
    SPEEDRUN = "speedrun"
    SURVIVAL = "survival"
    MIN_SCORE = "min score"
    HIGH_SCORE = "high score"


@dataclass(frozen=True, slots=True)
class Console:
    id: int
    name: str
    icon: str


_CONSOLE_ROWS: Final[tuple[tuple[int, str, str], ...]] = (
    # Nintendo
    (4, "Game Boy", "gb"),
    (6, "Game Boy Color", "gbc"),
    (5, "Game Boy Advance", "gba"),
    (7, "NES/Famicom", "nes"),
    (3, "SNES/Super Famicom", "snes"),
    (2, "Nintendo 64", "n64"),
    (16, "GameCube", "gc"),
    (18, "Nintendo DS", "ds"),
    (78, "Nintendo DSi", "dsi"),
    (24, "Pokemon Mini", "mini"),
    (28, "Virtual Boy", "vb"),
    # Sony
    (12, "PlayStation", "ps1"),
    (21, "PlayStation 2", "ps2"),
    (41, "PlayStation Portable", "psp"),
    # Atari
    (25, "Atari 2600", "2600"),
    (51, "Atari 7800", "7800"),
    (17, "Atari Jaguar", "jag"),
    (77, "Atari Jaguar CD", "jcd"),
    (13, "Atari Lynx", "lynx"),
    # Sega
    (33, "SG-1000", "sg1k"),
    (11, "Master System", "sms"),
    (15, "Game Gear", "gg"),
    (1, "Genesis/Mega Drive", "md"),
    (9, "Sega CD", "scd"),
    (10, "32X", "32x"),
    (39, "Saturn", "sat"),
    (40, "Dreamcast", "dc"),
    # NEC
    (8, "PC Engine/TurboGrafx-16", "pce"),
    (76, "PC Engine CD/TurboGrafx-CD", "pccd"),
    (47, "PC-8000/8800", "8088"),
    (49, "PC-FX", "pc-fx"),
    # SNK
    (56, "Neo Geo CD", "ngcd"),
    (14, "Neo Geo Pocket", "ngp"),
    # Other
    (43, "3DO Interactive Multiplayer", "3do"),
    (37, "Amstrad CPC", "cpc"),
    (38, "Apple II", "a2"),
    (27, "Arcade", "arc"),
    (73, "Arcadia 2001", "a2001"),
    (71, "Arduboy", "ard"),
    (44, "ColecoVision", "cv"),
    (75, "Elektor TV Games Computer", "elek"),
    (57, "Fairchild Channel F", "chf"),
    (45, "Intellivision", "intv"),
    (74, "Interton VC 4000", "vc4000"),
    (23, "Magnavox Odyssey 2", "mo2"),
    (69, "Mega Duck", "duck"),
    (29, "MSX", "msx"),
    (102, "Standalone", "exe"),
    (80, "Uzebox", "uze"),
    (46, "Vectrex", "vect"),
    (72, "WASM-4", "wasm4"),
    (63, "Watara Supervision", "wsv"),
    (53, "WonderSwan", "ws"),
)

CONSOLES_BY_ID: Final[MappingProxyType[int, Console]] = MappingProxyType(
    {row[0]: Console(*row) for row in _CONSOLE_ROWS}
)


def lookup_console(console_id: object) -> Console | None:
    if isinstance(console_id, bool) or not isinstance(console_id, int):
        return None
    return CONSOLES_BY_ID.get(console_id)


@dataclass(frozen=True, slots=True)
class Achievement:
    id: int
    title: str
    description: str
    logic: Logic
    points: int = 5
    author: str | None = None
    type: AchievementType = AchievementType.NONE
    badge: str | None = None
    state: AssetState = AssetState.CORE
    index: int = -1

    def __post_init__(self) -> None:
        if self.logic.value_mode:
            raise ValueError("achievement logic must be trigger logic")
        if isinstance(self.points, bool) or self.points < 0:
            raise ValueError("points must be >= 0")


COMPONENT_TAGS: Final[tuple[str, ...]] = ("STA", "CAN", "SUB", "VAL")
VALUE_COMPONENT: Final[str] = "VAL"
_FAST_WORDS: Final[tuple[str, ...]] = ("fast", "quick", "speed", "rush", "hurry", "rapid")


@dataclass(frozen=True, slots=True)
class Leaderboard:
    id: int
    title: str
    description: str
    components: Mapping[str, Logic]
    format: FormatType | None = None
    lower_is_better: bool = True
    author: str | None = None
    state: AssetState = AssetState.CORE
    index: int = -1

    def __post_init__(self) -> None:
        missing = [tag for tag in COMPONENT_TAGS if tag not in self.components]
        if missing:
            raise ValueError(f"leaderboard is missing components: {', '.join(missing)}")
        for tag in COMPONENT_TAGS:
            if self.components[tag].value_mode != (tag == VALUE_COMPONENT):
                raise ValueError(f"leaderboard component {tag} has the wrong logic mode")
        object.__setattr__(
            self,
            "components",
            MappingProxyType({tag: self.components[tag] for tag in COMPONENT_TAGS}),
        )

    def uses_fast_words(self) -> bool:
        title = self.title.lower()
        description = self.description.lower()
        return any(word in title or word in description for word in _FAST_WORDS)

    def is_time(self) -> bool:
        return (self.format is not None and self.format.is_time) or self.uses_fast_words()

    def kind(self) -> LeaderboardKind:
        if self.uses_fast_words():
            return LeaderboardKind.SPEEDRUN
        if self.is_time():
            return LeaderboardKind.SPEEDRUN if self.lower_is_better else LeaderboardKind.SURVIVAL
        return LeaderboardKind.MIN_SCORE if self.lower_is_better else LeaderboardKind.HIGH_SCORE


@dataclass(frozen=True, slots=True)
class AchievementSet:
    """A game's assets, in file order."""

    id: int | None = None
    title: str | None = None
    icon: str | None = None
    console: Console | None = None
    achievements: tuple[Achievement, ...] = field(default_factory=tuple)
    leaderboards: tuple[Leaderboard, ...] = field(default_factory=tuple)

    def merged_with(self, other: AchievementSet) -> AchievementSet:
        """Overlay ``other`` onto this set; assets with the same id are replaced."""

        achievements = {ach.id: ach for ach in self.achievements}
        achievements.update((ach.id, ach) for ach in other.achievements)
        leaderboards = {lb.id: lb for lb in self.leaderboards}
        leaderboards.update((lb.id, lb) for lb in other.leaderboards)
        return AchievementSet(
            id=self.id if self.id is not None else other.id,
            title=other.title if other.title is not None else self.title,
            icon=self.icon if self.icon is not None else other.icon,
            console=self.console if self.console is not None else other.console,
            achievements=tuple(achievements.values()),
            leaderboards=tuple(leaderboards.values()),
        )


__all__ = [
    "COMPONENT_TAGS",
    "CONSOLES_BY_ID",
    "Achievement",
    "AchievementSet",
    "AchievementType",
    "AssetState",
    "Console",
    "Leaderboard",
    "LeaderboardKind",
    "lookup_console",
]
