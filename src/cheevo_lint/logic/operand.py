"""
cheevo-lint - operand parsing.

File: src/cheevo_lint/logic/operand.py
Last updated: 2026-10-19

Purpose
- Parse one operand token into a typed, immutable ``Operand``.

Grammar (one token, case-insensitive)
- address read: optional kind letter, size prefix, hexadecimal address
  (``d0xH1234``, ``fF00ab``, ``0x 1234``);
- decimal or float literal, optionally prefixed with ``v`` or ``f``;
- a bare hexadecimal run with an optional size-style letter, always typed
  as a plain ``Value`` literal even though it resembles an address;
- ``{recall}``.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Final

from cheevo_lint.logic.enums import (
    OPERAND_KINDS_BY_PREFIX,
    AccessSize,
    OperandKind,
    lookup_access_size,
)
from cheevo_lint.logic.errors import LogicParseError

# Shared with the requirement grammar; the alternative order matters.
OPERAND_PATTERN: Final[str] = (
    r"[~dpbvf]?(?:(?:0x)+[G-Z ]?|f[A-Z])(?:0x)*[0-9A-F]{1,8}"
    r"|[fv]?[-+]?\d+(?:\.\d+)?"
    r"|[G-Z ]?[0-9A-F]+"
    r"|\{recall\}"
)

_OPERAND_RE: Final[re.Pattern[str]] = re.compile(
    r"(?P<kind>[~dpb]?)(?P<size>(?:0x)+[G-Z ]?|f[A-Z])(?:0x)*(?P<address>[0-9A-F]{1,8})"
    r"|(?P<lkind>[fv]?)(?P<number>[-+]?\d+(?:\.\d+)?)"
    r"|[G-Z ]?(?P<hex>[0-9A-F]+)"
    r"|(?P<recall>\{recall\})",
    re.IGNORECASE,
)
_REPEATED_HEX_PREFIX: Final[re.Pattern[str]] = re.compile(r"^(?:0x)+", re.IGNORECASE)

_VALUE_WIDTH: Final[int] = 10
KIND_LABEL_WIDTH: Final[int] = max(len(kind.label) for kind in OperandKind)
SIZE_LABEL_WIDTH: Final[int] = max(len(size.label) for size in AccessSize)

Number = int | float


def format_number(value: Number) -> str:
    """Render a literal the way the condition language writes it (``2`` not ``2.0``)."""

    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def to_display_hex(address: int) -> str:
    return f"0x{address:08x}"


@dataclass(frozen=True, slots=True)
class Operand:
    """One side of a requirement.

    Address-bearing kinds always carry ``size``; literal kinds never do.
    ``value`` is ``None`` only for the recall register.
    """

    kind: OperandKind
    value: Number | None = None
    size: AccessSize | None = None

    def __post_init__(self) -> None:
        if self.kind.is_address and self.size is None:
            raise ValueError(f"{self.kind.label} operand requires an access size")
        if not self.kind.is_address and self.size is not None:
            raise ValueError(f"{self.kind.label} operand cannot carry an access size")

    @classmethod
    def from_string(cls, text: str) -> Operand:
        match = _OPERAND_RE.fullmatch(text)
        if match is None:
            raise LogicParseError("operand", text)

        if match.group("address") is not None:
            kind = OPERAND_KINDS_BY_PREFIX.get(match.group("kind").lower())
            size_prefix = _REPEATED_HEX_PREFIX.sub("0x", match.group("size").strip())
            size = lookup_access_size(size_prefix)
            if kind is None or size is None:
                raise LogicParseError("operand", text)
            return cls(kind=kind, value=int(match.group("address"), 16), size=size)

        if match.group("number") is not None:
            literal_kind = match.group("lkind").lower() or OperandKind.VALUE.prefix
            kind = OPERAND_KINDS_BY_PREFIX[literal_kind]
            raw = match.group("number")
            value: Number = float(raw) if "." in raw else int(raw)
            if kind is OperandKind.FLOAT:
                value = float(value)
            return cls(kind=kind, value=value)

        if match.group("hex") is not None:
            return cls(kind=OperandKind.VALUE, value=int(match.group("hex"), 16))

        return cls(kind=OperandKind.RECALL)

    @property
    def is_address(self) -> bool:
        return self.kind.is_address

    def same_value(self, other: Operand | None) -> bool:
        """Size and value match; the operand kind is ignored."""

        if other is None:
            return False
        return self.size == other.size and self.value == other.value

    def equals(self, other: Operand | None) -> bool:
        return self.same_value(other) and other is not None and self.kind is other.kind

    def max_value(self) -> float:
        if self.kind is OperandKind.RECALL:
            return math.inf
        if self.size is None:
            return float(self.value if self.value is not None else 0)
        return self.size.max_value

    def to_value_string(self) -> str:
        if self.kind.is_address:
            return to_display_hex(int(self.value or 0))
        return format_number(self.value) if self.value is not None else ""

    def __str__(self) -> str:
        if self.kind is OperandKind.RECALL:
            return self.kind.prefix
        return self.to_value_string()

    def to_annotated_string(self) -> str:
        return f"{self.kind.label} {self}" if self.kind.is_address else str(self)

    def to_logic_string(self) -> str:
        """Render back to condition-language text."""

        if self.kind is OperandKind.RECALL:
            return self.kind.prefix
        if self.size is not None:
            return f"{self.kind.prefix}{self.size.prefix}{int(self.value or 0):08x}"
        return f"{self.kind.prefix}{format_number(self.value or 0)}"

    def to_markdown(
        self,
        kind_width: int = KIND_LABEL_WIDTH,
        size_width: int = SIZE_LABEL_WIDTH,
        value_width: int = _VALUE_WIDTH,
    ) -> str:
        size = self.size.label if self.size is not None else ""
        return (
            self.kind.label.ljust(kind_width + 1)
            + size.ljust(size_width + 1)
            + self.to_value_string().ljust(value_width + 1)
        )


def same_value(a: Operand | None, b: Operand | None) -> bool:
    """``Operand.same_value`` that also treats two missing operands as equal."""

    if a is None or b is None:
        return a is b
    return a.same_value(b)


def operands_equal(a: Operand | None, b: Operand | None) -> bool:
    if a is None or b is None:
        return a is b
    return a.equals(b)


__all__ = [
    "KIND_LABEL_WIDTH",
    "OPERAND_PATTERN",
    "SIZE_LABEL_WIDTH",
    "Operand",
    "format_number",
    "operands_equal",
    "same_value",
    "to_display_hex",
]
