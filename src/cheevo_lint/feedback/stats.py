"""
cheevo-lint - statistics aggregation.

File: src/cheevo_lint/feedback/stats.py
Last updated: 2026-10-19

Purpose
- Summaries attached to each assessment: per logic, per leaderboard, per
  code-note collection, per display script and per set.

What should be included in this file
- Frozen stats records with ``to_dict`` for reporting.
- ``generate_*`` functions; set statistics re-derive from component logic.

Functional requirements
- Bit and BitCount reads are tallied as 8-bit in ``unique_sizes``.
- ``mem_del`` counts hit-counted non-equality comparisons between an
  address read as Mem on one side and as Delta on the other.
- Empty inputs produce zero counts, never errors.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Final

from cheevo_lint.assets.models import (
    COMPONENT_TAGS,
    AchievementSet,
    AchievementType,
    AssetState,
    Leaderboard,
)
from cheevo_lint.assets.rich_presence import RichPresence
from cheevo_lint.feedback.rules.logic_rules import is_guarded_by_reset_next_if
from cheevo_lint.logic.enums import (
    BIT_PROFICIENCY,
    MODIFYING_OPERATORS,
    AccessSize,
    ConditionFlag,
    OperandKind,
)
from cheevo_lint.logic.model import Logic, get_access_sizes
from cheevo_lint.logic.operand import to_display_hex
from cheevo_lint.notes.code_note import CodeNote

_MEM_DELTA_KINDS: Final[frozenset[OperandKind]] = frozenset({OperandKind.MEM, OperandKind.DELTA})
_MEASURED: Final[frozenset[ConditionFlag]] = frozenset(
    {ConditionFlag.MEASURED, ConditionFlag.MEASURED_PERCENT}
)
_UNKNOWN_SIZE: Final[str] = "Unknown"


def _labels(items: Iterable[ConditionFlag | AccessSize]) -> list[str]:
    return sorted(item.label for item in items)


@dataclass(frozen=True, slots=True)
class LogicStats:
    group_count: int
    alt_groups: int
    group_maxsize: int
    cond_count: int
    unique_flags: frozenset[ConditionFlag]
    unique_cmps: frozenset[str]
    unique_sizes: frozenset[AccessSize]
    max_chain: int
    hit_counts_one: int
    hit_counts_many: int
    pause_ifs: int
    pause_locks: int
    reset_ifs: int
    reset_with_hits: int
    deltas: int
    priors: int
    addresses: frozenset[int]
    memlookups: tuple[str, ...]
    mem_del: int
    pauselock_alt_reset: int
    source_modification: Mapping[str, int]

    def to_dict(self) -> dict[str, object]:
        return {
            "group_count": self.group_count,
            "alt_groups": self.alt_groups,
            "group_maxsize": self.group_maxsize,
            "cond_count": self.cond_count,
            "unique_flags": _labels(self.unique_flags),
            "unique_cmps": sorted(self.unique_cmps),
            "unique_sizes": _labels(self.unique_sizes),
            "max_chain": self.max_chain,
            "hit_counts_one": self.hit_counts_one,
            "hit_counts_many": self.hit_counts_many,
            "pause_ifs": self.pause_ifs,
            "pause_locks": self.pause_locks,
            "reset_ifs": self.reset_ifs,
            "reset_with_hits": self.reset_with_hits,
            "deltas": self.deltas,
            "priors": self.priors,
            "addresses": [to_display_hex(address) for address in sorted(self.addresses)],
            "memlookups": list(self.memlookups),
            "mem_del": self.mem_del,
            "pauselock_alt_reset": self.pauselock_alt_reset,
            "source_modification": dict(self.source_modification),
        }


def _chain_lengths(logic: Logic) -> list[int]:
    lengths: list[int] = []
    for group in logic.groups:
        length = 0
        for req in group:
            length += 1
            if req.flag is None or not req.flag.chains:
                lengths.append(length)
                length = 0
    return lengths


def _pauselocks_reset_elsewhere(logic: Logic) -> int:
    groups_with_reset = {
        index
        for index, group in enumerate(logic.groups)
        if any(req.flag is ConditionFlag.RESET_IF for req in group)
    }
    count = 0
    for group_index, group in enumerate(logic.groups):
        for index, req in enumerate(group):
            if req.hits == 0 or req.flag is not ConditionFlag.PAUSE_IF:
                continue
            if is_guarded_by_reset_next_if(group, index):
                continue
            if groups_with_reset - {group_index}:
                count += 1
    return count


def generate_logic_stats(logic: Logic) -> LogicStats:
    flat = list(logic.requirements())
    operands = logic.get_operands()

    mem_del = sum(
        1
        for req in flat
        if req.hits > 0
        and req.is_comparison()
        and req.op != "="
        and req.rhs is not None
        and req.lhs.value == req.rhs.value
        and {req.lhs.kind, req.rhs.kind} == _MEM_DELTA_KINDS
    )
    modifiers = Counter(req.op for req in flat if req.is_modifying())

    return LogicStats(
        group_count=len(logic.groups),
        alt_groups=max(len(logic.groups) - 1, 0),
        group_maxsize=max((len(group) for group in logic.groups), default=0),
        cond_count=len(flat),
        unique_flags=frozenset(logic.get_flags()),
        unique_cmps=frozenset(req.op for req in flat if req.op is not None and req.is_comparison()),
        unique_sizes=frozenset(
            AccessSize.BYTE if size in BIT_PROFICIENCY else size
            for size in get_access_sizes(operands)
        ),
        max_chain=max(_chain_lengths(logic), default=0),
        hit_counts_one=sum(1 for req in flat if req.hits == 1),
        hit_counts_many=sum(1 for req in flat if req.hits > 1),
        pause_ifs=sum(1 for req in flat if req.flag is ConditionFlag.PAUSE_IF),
        pause_locks=sum(1 for req in flat if req.flag is ConditionFlag.PAUSE_IF and req.hits > 0),
        reset_ifs=sum(1 for req in flat if req.flag is ConditionFlag.RESET_IF),
        reset_with_hits=sum(
            1 for req in flat if req.flag is ConditionFlag.RESET_IF and req.hits > 0
        ),
        deltas=sum(1 for operand in operands if operand.kind is OperandKind.DELTA),
        priors=sum(1 for operand in operands if operand.kind is OperandKind.PRIOR),
        addresses=frozenset(logic.get_addresses()),
        memlookups=logic.get_memory_lookups(),
        mem_del=mem_del,
        pauselock_alt_reset=_pauselocks_reset_elsewhere(logic),
        source_modification=MappingProxyType({op: modifiers[op] for op in MODIFYING_OPERATORS}),
    )


@dataclass(frozen=True, slots=True)
class LeaderboardStats:
    is_instant_submission: bool
    conditional_value: bool
    components: Mapping[str, LogicStats]

    def to_dict(self) -> dict[str, object]:
        return {
            "is_instant_submission": self.is_instant_submission,
            "conditional_value": self.conditional_value,
            "components": {tag: stats.to_dict() for tag, stats in self.components.items()},
        }


def is_instant_submission(leaderboard: Leaderboard) -> bool:
    return all(req.is_always_true() for req in leaderboard.components["SUB"].requirements())


def has_conditional_value(leaderboard: Leaderboard) -> bool:
    return any(
        any(req.flag is ConditionFlag.MEASURED_IF for req in group)
        and any(req.flag in _MEASURED for req in group)
        for group in leaderboard.components["VAL"].alts
    )


def generate_leaderboard_stats(leaderboard: Leaderboard) -> LeaderboardStats:
    return LeaderboardStats(
        is_instant_submission=is_instant_submission(leaderboard),
        conditional_value=has_conditional_value(leaderboard),
        components=MappingProxyType(
            {tag: generate_logic_stats(leaderboard.components[tag]) for tag in COMPONENT_TAGS}
        ),
    )


@dataclass(frozen=True, slots=True)
class CodeNoteStats:
    size_counts: Mapping[str, int]
    author_counts: Mapping[str, int]
    notes_count: int
    notes_used: int
    notes_unused: int

    def to_dict(self) -> dict[str, object]:
        return {
            "size_counts": dict(self.size_counts),
            "author_counts": dict(self.author_counts),
            "notes_count": self.notes_count,
            "notes_used": self.notes_used,
            "notes_unused": self.notes_unused,
        }


def _set_addresses(achievement_set: AchievementSet) -> set[int]:
    addresses: set[int] = set()
    for achievement in achievement_set.achievements:
        addresses.update(achievement.logic.get_addresses())
    for leaderboard in achievement_set.leaderboards:
        for logic in leaderboard.components.values():
            addresses.update(logic.get_addresses())
    return addresses


def generate_code_note_stats(
    achievement_set: AchievementSet, notes: Sequence[CodeNote]
) -> CodeNoteStats:
    size_counts: Counter[str] = Counter()
    author_counts: Counter[str] = Counter()
    for note in notes:
        author_counts[note.author] += 1
        if note.access_size is not None or note.size != 1:
            size_counts[note.access_size.label if note.access_size else _UNKNOWN_SIZE] += 1

    addresses = _set_addresses(achievement_set)
    used = sum(1 for note in notes if any(note.contains(address) for address in addresses))
    return CodeNoteStats(
        size_counts=MappingProxyType(dict(size_counts)),
        author_counts=MappingProxyType(dict(author_counts)),
        notes_count=len(notes),
        notes_used=used,
        notes_unused=len(notes) - used,
    )


@dataclass(frozen=True, slots=True)
class RichPresenceStats:
    mem_length: int
    custom_macros: Mapping[str, str | None]
    lookups: Mapping[str, int]
    display_groups: int
    cond_display: int
    max_lookups: int
    min_lookups: int
    is_dynamic_rp: bool

    def to_dict(self) -> dict[str, object]:
        return {
            "mem_length": self.mem_length,
            "custom_macros": dict(self.custom_macros),
            "lookups": dict(self.lookups),
            "display_groups": self.display_groups,
            "cond_display": self.cond_display,
            "max_lookups": self.max_lookups,
            "min_lookups": self.min_lookups,
            "is_dynamic_rp": self.is_dynamic_rp,
        }


def generate_rich_presence_stats(rich_presence: RichPresence) -> RichPresenceStats:
    display = rich_presence.display
    lookup_counts = [len(clause.lookups) for clause in display]
    cond_display = sum(1 for clause in display if clause.condition is not None)
    max_lookups = max(lookup_counts, default=0)
    return RichPresenceStats(
        mem_length=len(rich_presence.text),
        custom_macros=MappingProxyType(
            {
                name: (fmt.code if fmt is not None else None)
                for name, fmt in rich_presence.macros.items()
                if name in rich_presence.custom_macros
            }
        ),
        lookups=MappingProxyType(
            {name: len(ranges) for name, ranges in rich_presence.lookups.items()}
        ),
        display_groups=len(display),
        cond_display=cond_display,
        max_lookups=max_lookups,
        min_lookups=min(lookup_counts, default=0),
        is_dynamic_rp=max_lookups > 0 or cond_display > 0,
    )


@dataclass(frozen=True, slots=True)
class SetStats:
    """Set-wide tallies; asset collections are recorded as asset ids."""

    achievement_count: int
    leaderboard_count: int
    achievement_state: Mapping[str, int]
    achievement_type: Mapping[str, tuple[int, ...]]
    total_points: int
    avg_points: float
    all_flags: frozenset[ConditionFlag]
    all_cmps: frozenset[str]
    all_sizes: frozenset[AccessSize]
    using_bit_ops: tuple[int, ...]
    using_alt_groups: tuple[int, ...]
    using_delta: tuple[int, ...]
    using_hitcounts: tuple[int, ...]
    using_checkpoint_hits: tuple[int, ...]
    using_pauselock: tuple[int, ...]
    using_pauselock_alt_reset: tuple[int, ...]
    using_flag: Mapping[str, tuple[int, ...]]
    leaderboard_type: Mapping[str, tuple[int, ...]]
    lb_instant_submission: int
    lb_conditional_value: int
    missing_notes: Mapping[int, tuple[str, ...]] | None = field(default=None)

    def to_dict(self) -> dict[str, object]:
        return {
            "achievement_count": self.achievement_count,
            "leaderboard_count": self.leaderboard_count,
            "achievement_state": dict(self.achievement_state),
            "achievement_type": {key: list(ids) for key, ids in self.achievement_type.items()},
            "total_points": self.total_points,
            "avg_points": self.avg_points,
            "all_flags": _labels(self.all_flags),
            "all_cmps": sorted(self.all_cmps),
            "all_sizes": _labels(self.all_sizes),
            "using_bit_ops": list(self.using_bit_ops),
            "using_alt_groups": list(self.using_alt_groups),
            "using_delta": list(self.using_delta),
            "using_hitcounts": list(self.using_hitcounts),
            "using_checkpoint_hits": list(self.using_checkpoint_hits),
            "using_pauselock": list(self.using_pauselock),
            "using_pauselock_alt_reset": list(self.using_pauselock_alt_reset),
            "using_flag": {key: list(ids) for key, ids in self.using_flag.items()},
            "leaderboard_type": {key: list(ids) for key, ids in self.leaderboard_type.items()},
            "lb_instant_submission": self.lb_instant_submission,
            "lb_conditional_value": self.lb_conditional_value,
            "missing_notes": (
                {
                    to_display_hex(address): list(sources)
                    for address, sources in sorted(self.missing_notes.items())
                }
                if self.missing_notes is not None
                else None
            ),
        }


def _address_sources(
    achievement_set: AchievementSet, rich_presence: RichPresence | None
) -> dict[int, list[str]]:
    sources: dict[int, list[str]] = {}

    def attach(logic: Logic, source: str) -> None:
        for address in dict.fromkeys(logic.get_addresses()):
            sources.setdefault(address, []).append(source)

    for achievement in achievement_set.achievements:
        attach(achievement.logic, f"\N{TROPHY} Achievement: {achievement.title}")
    for leaderboard in achievement_set.leaderboards:
        for tag, logic in leaderboard.components.items():
            attach(logic, f"\N{BAR CHART} Leaderboard ({tag}): {leaderboard.title}")
    if rich_presence is not None:
        for number, clause in enumerate(rich_presence.display, start=1):
            if clause.condition is not None:
                attach(clause.condition, f"\N{VIDEO GAME} Rich Presence Display Condition #{number}")
            for lookup in clause.lookups:
                attach(
                    lookup.calc,
                    f"\N{VIDEO GAME} Rich Presence Display Lookup({lookup.name}) in Clause #{number}",
                )
    return sources


def generate_set_stats(
    achievement_set: AchievementSet,
    notes: Sequence[CodeNote] = (),
    rich_presence: RichPresence | None = None,
) -> SetStats:
    achievements = achievement_set.achievements
    leaderboards = achievement_set.leaderboards
    achievement_stats = [(ach.id, generate_logic_stats(ach.logic)) for ach in achievements]
    leaderboard_stats = [generate_leaderboard_stats(lb) for lb in leaderboards]
    all_stats = [stats for _, stats in achievement_stats] + [
        component for lb_stats in leaderboard_stats for component in lb_stats.components.values()
    ]

    def using(predicate: Callable[[LogicStats], bool]) -> tuple[int, ...]:
        return tuple(ach_id for ach_id, stats in achievement_stats if predicate(stats))

    states = Counter(ach.state for ach in achievements)
    types: dict[str, list[int]] = {kind.value: [] for kind in AchievementType}
    for achievement in achievements:
        types[achievement.type.value].append(achievement.id)
    flag_users: dict[str, list[int]] = {flag.label: [] for flag in ConditionFlag}
    for ach_id, stats in achievement_stats:
        for flag in stats.unique_flags:
            flag_users[flag.label].append(ach_id)
    kinds: dict[str, list[int]] = {}
    for leaderboard in leaderboards:
        kinds.setdefault(leaderboard.kind().value, []).append(leaderboard.id)

    total_points = sum(ach.points for ach in achievements)
    missing_notes: Mapping[int, tuple[str, ...]] | None = None
    if notes:
        missing_notes = MappingProxyType(
            {
                address: tuple(where)
                for address, where in _address_sources(achievement_set, rich_presence).items()
                if not any(note.contains(address) for note in notes)
            }
        )

    return SetStats(
        achievement_count=len(achievements),
        leaderboard_count=len(leaderboards),
        achievement_state=MappingProxyType({state.label: states[state] for state in AssetState}),
        achievement_type=MappingProxyType({key: tuple(ids) for key, ids in types.items()}),
        total_points=total_points,
        avg_points=total_points / len(achievements) if achievements else 0.0,
        all_flags=frozenset(flag for stats in all_stats for flag in stats.unique_flags),
        all_cmps=frozenset(cmp for stats in all_stats for cmp in stats.unique_cmps),
        all_sizes=frozenset(size for stats in all_stats for size in stats.unique_sizes),
        using_bit_ops=tuple(
            ach.id
            for ach in achievements
            if any(size in BIT_PROFICIENCY for size in get_access_sizes(ach.logic.get_operands()))
        ),
        using_alt_groups=using(lambda stats: stats.alt_groups > 0),
        using_delta=using(lambda stats: stats.deltas > 0),
        using_hitcounts=using(lambda stats: stats.hit_counts_many > 0),
        using_checkpoint_hits=using(lambda stats: stats.hit_counts_one > 0),
        using_pauselock=using(lambda stats: stats.pause_locks > 0),
        using_pauselock_alt_reset=using(lambda stats: stats.pauselock_alt_reset > 0),
        using_flag=MappingProxyType({key: tuple(ids) for key, ids in flag_users.items()}),
        leaderboard_type=MappingProxyType({key: tuple(ids) for key, ids in kinds.items()}),
        lb_instant_submission=sum(1 for stats in leaderboard_stats if stats.is_instant_submission),
        lb_conditional_value=sum(1 for stats in leaderboard_stats if stats.conditional_value),
        missing_notes=missing_notes,
    )


__all__ = [
    "CodeNoteStats",
    "LeaderboardStats",
    "LogicStats",
    "RichPresenceStats",
    "SetStats",
    "generate_code_note_stats",
    "generate_leaderboard_stats",
    "generate_logic_stats",
    "generate_rich_presence_stats",
    "generate_set_stats",
    "has_conditional_value",
    "is_instant_submission",
]
