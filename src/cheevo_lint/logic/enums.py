"""
cheevo-lint - closed enumerations for the condition language.

File: src/cheevo_lint/logic/enums.py
Last updated: 2026-10-19

Purpose
- Define operand kinds, condition flags, memory access sizes and value
  formats as closed enumerations carrying fixed attribute records.
- Build the prefix-keyed lookup tables used by the parsers.

Functional requirements
- Prefix tables are built once at import and are read-only.
- Access-size prefixes are matched case-insensitively.

Non-functional requirements
- No imports from the rest of the package.
"""

from __future__ import annotations

import math
from enum import Enum
from types import MappingProxyType
from typing import Final


class OperandKind(Enum):
    """How an operand obtains its value.

    ``priority`` is the canonical ordering rank: a comparison whose left side
    ranks higher than its right side is swapped during canonicalization.
    """

    MEM = ("Mem", "", True, 10)
    DELTA = ("Delta", "d", True, 11)
    PRIOR = ("Prior", "p", True, 12)
    BCD = ("BCD", "b", True, 13)
    INVERT = ("Invert", "~", True, 14)

    RECALL = ("Recall", "{recall}", False, 20)
    VALUE = ("Value", "v", False, 21)
    FLOAT = ("Float", "f", False, 22)

    def __init__(self, label: str, prefix: str, is_address: bool, priority: int) -> None:
        self.label = label
        self.prefix = prefix
        self.is_address = is_address
        self.priority = priority


class ConditionFlag(Enum):
    """Requirement flag.

    ``chains``: the flag connects this requirement to the next one.
    ``scalable``: the requirement may carry a source modification.
    ``combinator``: the requirement merges into the next one instead of
    standing alone.
    """

    PAUSE_IF = ("PauseIf", "P:", False, False, False)
    RESET_IF = ("ResetIf", "R:", False, False, False)
    RESET_NEXT_IF = ("ResetNextIf", "Z:", True, False, False)
    ADD_SOURCE = ("AddSource", "A:", True, True, True)
    SUB_SOURCE = ("SubSource", "B:", True, True, True)
    ADD_HITS = ("AddHits", "C:", True, False, False)
    SUB_HITS = ("SubHits", "D:", True, False, False)
    ADD_ADDRESS = ("AddAddress", "I:", True, True, True)
    AND_NEXT = ("AndNext", "N:", True, False, True)
    OR_NEXT = ("OrNext", "O:", True, False, True)
    MEASURED = ("Measured", "M:", False, False, False)
    MEASURED_PERCENT = ("Measured%", "G:", False, False, False)
    MEASURED_IF = ("MeasuredIf", "Q:", False, False, False)
    TRIGGER = ("Trigger", "T:", False, False, False)
    REMEMBER = ("Remember", "K:", False, True, False)

    def __init__(
        self,
        label: str,
        prefix: str,
        chains: bool,
        scalable: bool,
        combinator: bool,
    ) -> None:
        self.label = label
        self.prefix = prefix
        self.chains = chains
        self.scalable = scalable
        self.combinator = combinator


class AccessSize(Enum):
    """Memory accessor width and representable range."""

    BYTE = ("8-bit", "0xH", 1, 0xFF)
    WORD = ("16-bit", "0x", 2, 0xFFFF)
    TBYTE = ("24-bit", "0xW", 3, 0xFFFFFF)
    DWORD = ("32-bit", "0xX", 4, 0xFFFFFFFF)
    WORD_BE = ("16-bit BE", "0xI", 2, 0xFFFF)
    TBYTE_BE = ("24-bit BE", "0xJ", 3, 0xFFFFFF)
    DWORD_BE = ("32-bit BE", "0xG", 4, 0xFFFFFFFF)

    LOWER4 = ("Lower4", "0xL", 1, 0xF)
    UPPER4 = ("Upper4", "0xU", 1, 0xF)

    FLOAT = ("Float", "fF", 4, math.inf)
    FLOAT_BE = ("Float BE", "fB", 4, math.inf)
    DBL32 = ("Double32", "fH", 8, math.inf)
    DBL32_BE = ("Double32 BE", "fI", 8, math.inf)
    MBF32 = ("MBF32", "fM", 4, math.inf)
    MBF32_LE = ("MBF32 LE", "fL", 4, math.inf)

    BIT0 = ("Bit0", "0xM", 1, 1)
    BIT1 = ("Bit1", "0xN", 1, 1)
    BIT2 = ("Bit2", "0xO", 1, 1)
    BIT3 = ("Bit3", "0xP", 1, 1)
    BIT4 = ("Bit4", "0xQ", 1, 1)
    BIT5 = ("Bit5", "0xR", 1, 1)
    BIT6 = ("Bit6", "0xS", 1, 1)
    BIT7 = ("Bit7", "0xT", 1, 1)
    BITCOUNT = ("BitCount", "0xK", 1, 8)

    def __init__(self, label: str, prefix: str, byte_width: int, max_value: float) -> None:
        self.label = label
        self.prefix = prefix
        self.byte_width = byte_width
        self.max_value = max_value

    @property
    def is_partial(self) -> bool:
        return self in PARTIAL_ACCESS


class FormatType(Enum):
    """Value format used by leaderboards and display macros."""

    POINTS = ("Score", "POINTS", "value")
    SCORE = ("Score", "SCORE", "value")
    FRAMES = ("Frames", "FRAMES", "time")
    TIME = ("Frames", "TIME", "time")
    MILLISECS = ("Centiseconds", "MILLISECS", "time")
    TIMESECS = ("Seconds", "TIMESECS", "time")
    SECS = ("Seconds", "SECS", "time")
    MINUTES = ("Minutes", "MINUTES", "time")
    SECS_AS_MINS = ("Seconds", "SECS_AS_MINS", "time")
    VALUE = ("Value", "VALUE", "value")
    UNSIGNED = ("Unsigned", "UNSIGNED", "value")
    TENS = ("Value × 10", "TENS", "value")
    HUNDREDS = ("Value × 100", "HUNDREDS", "value")
    THOUSANDS = ("Value × 1000", "THOUSANDS", "value")
    FIXED1 = ("Fixed1", "FIXED1", "value")
    FIXED2 = ("Fixed2", "FIXED2", "value")
    FIXED3 = ("Fixed3", "FIXED3", "value")
    FLOAT1 = ("Float1", "FLOAT1", "value")
    FLOAT2 = ("Float2", "FLOAT2", "value")
    FLOAT3 = ("Float3", "FLOAT3", "value")
    FLOAT4 = ("Float4", "FLOAT4", "value")
    FLOAT5 = ("Float5", "FLOAT5", "value")
    FLOAT6 = ("Float6", "FLOAT6", "value")

    def __init__(self, label: str, code: str, category: str) -> None:
        self.label = label
        self.code = code
        self.category = category

    @property
    def is_time(self) -> bool:
        return self.category == "time"


BIT_PROFICIENCY: Final[frozenset[AccessSize]] = frozenset(
    {
        AccessSize.BIT0,
        AccessSize.BIT1,
        AccessSize.BIT2,
        AccessSize.BIT3,
        AccessSize.BIT4,
        AccessSize.BIT5,
        AccessSize.BIT6,
        AccessSize.BIT7,
        AccessSize.BITCOUNT,
    }
)

# Reads narrower than a byte never strictly match a declared note size.
PARTIAL_ACCESS: Final[frozenset[AccessSize]] = BIT_PROFICIENCY | {
    AccessSize.LOWER4,
    AccessSize.UPPER4,
}

COMPARISON_OPERATORS: Final[tuple[str, ...]] = ("=", "!=", ">", ">=", "<", "<=")
MODIFYING_OPERATORS: Final[tuple[str, ...]] = ("+", "-", "*", "/", "&", "^", "%")

# = with !=, > with <=, < with >=
REVERSED_COMPARISON: Final[MappingProxyType[str, str]] = MappingProxyType(
    {"=": "!=", "!=": "=", ">": "<=", "<": ">=", ">=": "<", "<=": ">"}
)

OPERAND_KINDS_BY_PREFIX: Final[MappingProxyType[str, OperandKind]] = MappingProxyType(
    {kind.prefix: kind for kind in OperandKind}
)
FLAGS_BY_PREFIX: Final[MappingProxyType[str, ConditionFlag]] = MappingProxyType(
    {flag.prefix: flag for flag in ConditionFlag}
)
ACCESS_SIZES_BY_PREFIX: Final[MappingProxyType[str, AccessSize]] = MappingProxyType(
    {size.prefix.lower(): size for size in AccessSize}
)
FORMAT_TYPES_BY_CODE: Final[MappingProxyType[str, FormatType]] = MappingProxyType(
    {fmt.code: fmt for fmt in FormatType}
)


def lookup_access_size(prefix: str) -> AccessSize | None:
    """Resolve a size prefix such as ``0xH`` or ``fF``, ignoring case."""

    return ACCESS_SIZES_BY_PREFIX.get(prefix.strip().lower())


def lookup_format_type(code: str | None) -> FormatType | None:
    if not code:
        return None
    return FORMAT_TYPES_BY_CODE.get(code.strip().upper())


__all__ = [
    "ACCESS_SIZES_BY_PREFIX",
    "BIT_PROFICIENCY",
    "COMPARISON_OPERATORS",
    "FLAGS_BY_PREFIX",
    "FORMAT_TYPES_BY_CODE",
    "MODIFYING_OPERATORS",
    "OPERAND_KINDS_BY_PREFIX",
    "PARTIAL_ACCESS",
    "REVERSED_COMPARISON",
    "AccessSize",
    "ConditionFlag",
    "FormatType",
    "OperandKind",
    "lookup_access_size",
    "lookup_format_type",
]
