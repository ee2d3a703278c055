"""
cheevo-lint - full logic definitions.

File: src/cheevo_lint/logic/model.py
Last updated: 2026-10-19

Purpose
- Split a complete definition into groups of requirements and expose the
  address and lookup extraction every rule builds on.

What should be included in this file
- ``Logic`` (immutable) with parsing, rendering and extraction helpers.
- Module-level helpers over arbitrary requirement groups.

Functional requirements
- Value mode splits groups on ``$``; trigger mode splits on ``S`` except
  where the ``S`` follows ``0x`` (the Bit6 size prefix).
- Requirements inside a group are split on ``_``; an empty group is legal.
- Operands of a requirement that follows an AddAddress are pointer offsets,
  not direct observations, and never count as plain addresses.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass, field
from typing import Final

from cheevo_lint.logic.enums import AccessSize, ConditionFlag, OperandKind
from cheevo_lint.logic.errors import LogicParseError
from cheevo_lint.logic.operand import Operand
from cheevo_lint.logic.requirement import Requirement

VALUE_GROUP_DELIMITER: Final[str] = "$"
ALT_GROUP_DELIMITER: Final[str] = "S"
CONDITION_DELIMITER: Final[str] = "_"

_ALT_SPLIT_RE: Final[re.Pattern[str]] = re.compile(r"(?<!0x)S")

Group = tuple[Requirement, ...]


def get_operands(groups: Iterable[Sequence[Requirement]]) -> tuple[Operand, ...]:
    """Every operand in document order, left side before right side."""

    return tuple(operand for group in groups for req in group for operand in req.operands())


def get_access_sizes(operands: Iterable[Operand]) -> tuple[AccessSize, ...]:
    return tuple(operand.size for operand in operands if operand.size is not None)


def get_kinds(operands: Iterable[Operand]) -> tuple[OperandKind, ...]:
    return tuple(operand.kind for operand in operands)


def walk_pointer_chains(group: Sequence[Requirement]) -> Iterator[tuple[Requirement, str]]:
    """Yield each non-AddAddress requirement with its pointer-chain prefix.

    The prefix concatenates every AddAddress link leading up to the
    requirement (``lhs[op rhs]:`` per link) and is empty for direct reads.
    """

    prefix = ""
    for req in group:
        if req.flag is ConditionFlag.ADD_ADDRESS:
            prefix += str(req.lhs)
            if req.rhs is not None:
                prefix += f"{req.op}{req.rhs}"
            prefix += ":"
            continue
        yield req, prefix
        prefix = ""


@dataclass(frozen=True, slots=True)
class Logic:
    """Parsed definition: group 0 is the core group, the rest are alts."""

    groups: tuple[Group, ...]
    value_mode: bool = False
    source: str | None = field(default=None, compare=False)

    @classmethod
    def from_string(cls, text: str, value_mode: bool | None = None) -> Logic:
        """Parse ``text``; ``value_mode=None`` infers the mode from ``$``."""

        resolved_mode = VALUE_GROUP_DELIMITER in text if value_mode is None else bool(value_mode)
        raw_groups = (
            text.split(VALUE_GROUP_DELIMITER) if resolved_mode else _ALT_SPLIT_RE.split(text)
        )
        try:
            groups = tuple(
                tuple(
                    Requirement.from_string(part)
                    for part in raw.split(CONDITION_DELIMITER)
                )
                if raw
                else ()
                for raw in raw_groups
            )
        except LogicParseError as exc:
            raise LogicParseError("logic", text) from exc
        return cls(groups=groups, value_mode=resolved_mode, source=text)

    @property
    def core(self) -> Group:
        return self.groups[0] if self.groups else ()

    @property
    def alts(self) -> tuple[Group, ...]:
        return self.groups[1:]

    def requirements(self) -> Iterator[Requirement]:
        for group in self.groups:
            yield from group

    def get_operands(self) -> tuple[Operand, ...]:
        return get_operands(self.groups)

    def get_addresses(self) -> tuple[int, ...]:
        """Directly observed addresses in source order, duplicates kept."""

        addresses: list[int] = []
        for group in self.groups:
            previous_flag: ConditionFlag | None = None
            for req in group:
                if previous_flag is not ConditionFlag.ADD_ADDRESS:
                    addresses.extend(
                        int(operand.value or 0) for operand in req.operands() if operand.is_address
                    )
                previous_flag = req.flag
        return tuple(addresses)

    def get_memory_lookups(self) -> tuple[str, ...]:
        """Distinct pointer-qualified addresses, in first-seen order.

        Each lookup is the address text prefixed by the AddAddress chain that
        leads to it, e.g. ``0x00001000+0x00000010:0x00000004``.
        """

        seen: dict[str, None] = {}
        for group in self.groups:
            for req, prefix in walk_pointer_chains(group):
                for operand in req.operands():
                    if operand.is_address:
                        seen.setdefault(prefix + str(operand), None)
        return tuple(seen)

    def get_flags(self) -> tuple[ConditionFlag, ...]:
        return tuple(req.flag for req in self.requirements() if req.flag is not None)

    def to_logic_string(self) -> str:
        delimiter = VALUE_GROUP_DELIMITER if self.value_mode else ALT_GROUP_DELIMITER
        return delimiter.join(
            CONDITION_DELIMITER.join(req.to_logic_string() for req in group)
            for group in self.groups
        )

    def to_markdown(self) -> str:
        operands = self.get_operands()
        value_width = max((len(op.to_value_string()) for op in operands), default=0)
        kind_width = max((len(kind.label) for kind in get_kinds(operands)), default=0)
        size_width = max((len(size.label) for size in get_access_sizes(operands)), default=0)

        lines: list[str] = []
        for index, group in enumerate(self.groups):
            lines.append("### Core" if index == 0 else f"### Alt {index}")
            lines.append("```")
            for number, req in enumerate(group, start=1):
                lines.append(
                    f"{number:>3}: " + req.to_markdown(kind_width, size_width, value_width)
                )
            lines.append("```")
        return "".join(f"{line}\n" for line in lines)

    def __str__(self) -> str:
        return self.source if self.source is not None else self.to_logic_string()


__all__ = [
    "ALT_GROUP_DELIMITER",
    "CONDITION_DELIMITER",
    "VALUE_GROUP_DELIMITER",
    "Group",
    "Logic",
    "get_access_sizes",
    "get_kinds",
    "get_operands",
    "walk_pointer_chains",
]
