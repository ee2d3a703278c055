"""
cheevo-lint - requirement parsing and transformation.

File: src/cheevo_lint/logic/requirement.py
Last updated: 2026-10-19

Purpose
- Parse one condition clause (``flag:lhs op rhs.hits.``) into an immutable
  ``Requirement`` and provide the pure transformations rules rely on.

Functional requirements
- A flag that permits a source modification never carries a comparison: the
  operator and right operand are discarded when one is written.
- ``canonicalize``, ``with_reversed_comparison`` and ``clone`` return new
  instances; nothing here mutates.
- ``to_logic_string`` renders text that parses back to an equal requirement.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from typing import Any, Final

from cheevo_lint.logic.enums import (
    COMPARISON_OPERATORS,
    FLAGS_BY_PREFIX,
    MODIFYING_OPERATORS,
    REVERSED_COMPARISON,
    ConditionFlag,
)
from cheevo_lint.logic.errors import LogicParseError
from cheevo_lint.logic.operand import (
    KIND_LABEL_WIDTH,
    OPERAND_PATTERN,
    SIZE_LABEL_WIDTH,
    Operand,
    operands_equal,
)

_OPERATOR_PATTERN: Final[str] = r"!=|<=|>=|==|=|<|>|\+|-|\*|/|&|\^|%"

_REQUIREMENT_RE: Final[re.Pattern[str]] = re.compile(
    rf"(?P<flag>[A-Z]:)?(?P<lhs>{OPERAND_PATTERN})"
    rf"(?:(?P<op>{_OPERATOR_PATTERN})(?P<rhs>{OPERAND_PATTERN}))?"
    r"(?:\.(?P<hits>\d+)\.)?",
    re.IGNORECASE,
)

FLAG_LABEL_WIDTH: Final[int] = max(len(flag.label) for flag in ConditionFlag)
_OPERATOR_WIDTH: Final[int] = 4


@dataclass(frozen=True, slots=True)
class Requirement:
    """A single condition: optional flag, operand pair and hit target."""

    lhs: Operand
    flag: ConditionFlag | None = None
    op: str | None = None
    rhs: Operand | None = None
    hits: int = 0

    def __post_init__(self) -> None:
        if (self.op is None) != (self.rhs is None):
            raise ValueError("operator and right operand must be given together")
        if self.op is not None and self.op not in COMPARISON_OPERATORS + MODIFYING_OPERATORS:
            raise ValueError(f"unknown operator: {self.op!r}")
        if isinstance(self.hits, bool) or self.hits < 0:
            raise ValueError("hits must be a non-negative integer")
        if self.flag is not None and self.flag.scalable and self.is_comparison():
            raise ValueError(f"{self.flag.label} cannot carry a comparison")

    @classmethod
    def from_string(cls, text: str) -> Requirement:
        match = _REQUIREMENT_RE.fullmatch(text)
        if match is None:
            raise LogicParseError("requirement", text)

        flag: ConditionFlag | None = None
        if match.group("flag"):
            flag = FLAGS_BY_PREFIX.get(match.group("flag").upper())
            if flag is None:
                raise LogicParseError("requirement", text)

        try:
            lhs = Operand.from_string(match.group("lhs"))
            op = match.group("op")
            rhs: Operand | None = None
            if op is not None:
                op = "=" if op == "==" else op
                if flag is not None and flag.scalable and op in COMPARISON_OPERATORS:
                    op = None
                else:
                    rhs = Operand.from_string(match.group("rhs"))
        except LogicParseError as exc:
            raise LogicParseError("requirement", text) from exc

        hits = int(match.group("hits")) if match.group("hits") else 0
        return cls(lhs=lhs, flag=flag, op=op, rhs=rhs, hits=hits)

    def clone(self, **changes: Any) -> Requirement:
        return replace(self, **changes)

    def has_hits(self) -> bool:
        return self.flag is None or not self.flag.scalable

    def is_comparison(self) -> bool:
        return self.op in COMPARISON_OPERATORS

    def is_modifying(self) -> bool:
        return self.op is not None and not self.is_comparison()

    def is_terminating(self) -> bool:
        return self.flag is None or not self.flag.combinator

    def is_always_true(self) -> bool:
        return self.op == "=" and operands_equal(self.lhs, self.rhs)

    def is_always_false(self) -> bool:
        return (
            self.op == "="
            and not self.lhs.is_address
            and self.rhs is not None
            and not self.rhs.is_address
            and not operands_equal(self.lhs, self.rhs)
        )

    def with_reversed_comparison(self) -> Requirement:
        if self.op is None or not self.is_comparison():
            return self
        return replace(self, op=REVERSED_COMPARISON[self.op])

    def canonicalize(self) -> Requirement:
        """Put the lower-priority operand kind on the left of a comparison."""

        if self.op is None or self.rhs is None or not self.is_comparison():
            return self
        if self.lhs.kind.priority <= self.rhs.kind.priority:
            return self
        return replace(self, lhs=self.rhs, rhs=self.lhs, op=REVERSED_COMPARISON[self.op])

    def operands(self) -> tuple[Operand, ...]:
        return (self.lhs,) if self.rhs is None else (self.lhs, self.rhs)

    def to_logic_string(self) -> str:
        out = self.flag.prefix if self.flag is not None else ""
        out += self.lhs.to_logic_string()
        if self.op is not None and self.rhs is not None:
            out += self.op + self.rhs.to_logic_string()
        if self.hits:
            out += f".{self.hits}."
        return out

    def to_annotated_string(self) -> str:
        out = self.lhs.to_annotated_string()
        if self.op is not None and self.rhs is not None:
            out += f" {self.op} {self.rhs.to_annotated_string()}"
        return out

    def to_markdown(
        self,
        kind_width: int = KIND_LABEL_WIDTH,
        size_width: int = SIZE_LABEL_WIDTH,
        value_width: int = 10,
    ) -> str:
        flag = self.flag.label if self.flag is not None else ""
        out = flag.ljust(FLAG_LABEL_WIDTH + 1)
        out += self.lhs.to_markdown(kind_width, size_width, value_width)
        if self.op is not None and self.rhs is not None:
            out += self.op.ljust(_OPERATOR_WIDTH)
            out += self.rhs.to_markdown(kind_width, size_width, value_width)
            if self.has_hits():
                out += f"({self.hits})"
        return out

    def __str__(self) -> str:
        return self.to_logic_string()


__all__ = ["FLAG_LABEL_WIDTH", "Requirement"]
