"""Condition-language parsing: enumerations, operands, requirements and logic."""

from cheevo_lint.logic.enums import (
    BIT_PROFICIENCY,
    COMPARISON_OPERATORS,
    MODIFYING_OPERATORS,
    PARTIAL_ACCESS,
    AccessSize,
    ConditionFlag,
    FormatType,
    OperandKind,
    lookup_access_size,
    lookup_format_type,
)
from cheevo_lint.logic.errors import LogicParseError
from cheevo_lint.logic.model import (
    Logic,
    get_access_sizes,
    get_kinds,
    get_operands,
    walk_pointer_chains,
)
from cheevo_lint.logic.operand import Operand, operands_equal, same_value, to_display_hex
from cheevo_lint.logic.requirement import Requirement

__all__ = [
    "BIT_PROFICIENCY",
    "COMPARISON_OPERATORS",
    "MODIFYING_OPERATORS",
    "PARTIAL_ACCESS",
    "AccessSize",
    "ConditionFlag",
    "FormatType",
    "Logic",
    "LogicParseError",
    "Operand",
    "OperandKind",
    "Requirement",
    "get_access_sizes",
    "get_kinds",
    "get_operands",
    "lookup_access_size",
    "lookup_format_type",
    "operands_equal",
    "same_value",
    "to_display_hex",
    "walk_pointer_chains",
]
