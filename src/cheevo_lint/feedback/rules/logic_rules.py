"""
cheevo-lint - structural rules over condition logic.

File: src/cheevo_lint/feedback/rules/logic_rules.py
Last updated: 2026-10-19

Purpose
- Rules run against one parsed ``Logic`` together with the loaded code notes.

What should be included in this file
- ``LogicSubject``: the logic, its flattened operands and the notes.
- One ``check_*`` function per rule, each returning a list of issues.
- ``invert_chain``: the auto-fix text used by the useless PauseIf/ResetIf
  rules.

Functional requirements
- Operands of a requirement directly after an AddAddress are pointer
  offsets and are never checked against code notes.
- Note rules are skipped entirely when no notes are loaded.
- Rules never raise and never mutate their subject.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from typing import Final

from cheevo_lint.feedback.catalog import IssueCode
from cheevo_lint.feedback.issues import Issue
from cheevo_lint.logic.enums import AccessSize, ConditionFlag, OperandKind
from cheevo_lint.logic.model import Logic, walk_pointer_chains
from cheevo_lint.logic.operand import Operand, operands_equal, same_value, to_display_hex
from cheevo_lint.logic.requirement import Requirement
from cheevo_lint.notes.code_note import CodeNote, find_note

DELTA_FEEDBACK: Final[str] = (
    "Appropriate use of Delta includes all of the following conditions: There should be a "
    "Delta that is not part of ResetIf, ResetNextIf, or PauseIf on a memory address for which "
    "there is a corresponding Mem constraint on the same address in the core group or in all "
    "alt groups. There should be no way for the achievement to be triggered without a Delta "
    "being involved in some way."
)

_PAUSE_OR_RESET: Final[frozenset[ConditionFlag]] = frozenset(
    {ConditionFlag.RESET_IF, ConditionFlag.RESET_NEXT_IF, ConditionFlag.PAUSE_IF}
)
_MEASURED: Final[frozenset[ConditionFlag]] = frozenset(
    {ConditionFlag.MEASURED, ConditionFlag.MEASURED_PERCENT}
)
_STALE_KINDS: Final[frozenset[OperandKind]] = frozenset({OperandKind.DELTA, OperandKind.PRIOR})
_NEGATIVE_BIT: Final[int] = 0x8000_0000


@dataclass(frozen=True, slots=True)
class LogicSubject:
    logic: Logic
    notes: tuple[CodeNote, ...] = ()
    operands: tuple[Operand, ...] = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "notes", tuple(self.notes))
        object.__setattr__(self, "operands", self.logic.get_operands())


def _direct_requirements(group: Sequence[Requirement]) -> Iterator[Requirement]:
    """Requirements whose operands are absolute reads (not after AddAddress)."""

    previous_is_pointer = False
    for req in group:
        if not previous_is_pointer:
            yield req
        previous_is_pointer = req.flag is ConditionFlag.ADD_ADDRESS


def _group_flags(group: Sequence[Requirement]) -> frozenset[ConditionFlag | None]:
    return frozenset(req.flag for req in group)


def _has_hits(logic: Logic) -> bool:
    return any(req.hits > 0 for req in logic.requirements())


def is_guarded_by_reset_next_if(group: Sequence[Requirement], index: int) -> bool:
    for previous in reversed(group[:index]):
        if previous.flag is ConditionFlag.RESET_NEXT_IF:
            return True
        if previous.is_terminating():
            break
    return False


def mismatched_sizes(operand: Operand, note: CodeNote) -> tuple[AccessSize, AccessSize] | None:
    """Return ``(read size, noted size)`` when a whole-byte read disagrees with the note."""

    read, noted = operand.size, note.access_size
    if read is None or noted is None or read.is_partial or read is noted:
        return None
    return read, noted


def invert_chain(group: Sequence[Requirement], index: int) -> str:
    """Markdown for the chain ending at ``index`` with its logic inverted.

    AndNext and OrNext swap, comparisons reverse, and the final requirement
    loses its flag and hit target.
    """

    def invert(req: Requirement) -> Requirement:
        flag = req.flag
        if flag is ConditionFlag.AND_NEXT:
            flag = ConditionFlag.OR_NEXT
        elif flag is ConditionFlag.OR_NEXT:
            flag = ConditionFlag.AND_NEXT
        return req.with_reversed_comparison().clone(flag=flag)

    lines = [invert(group[index]).clone(flag=None, hits=0).to_markdown()]
    for previous in reversed(group[:index]):
        if previous.is_terminating():
            break
        lines.insert(0, invert(previous).to_markdown())
    return "\n".join(lines)


def _mem_lookups(group: Sequence[Requirement]) -> set[str]:
    return {
        prefix + str(operand)
        for req, prefix in walk_pointer_chains(group)
        for operand in req.operands()
        if operand.kind is OperandKind.MEM
    }


def _group_uses_delta(group: Sequence[Requirement], mem_lookups: set[str]) -> bool:
    has_delta = False
    for req, prefix in walk_pointer_chains(group):
        # a delta only counts when the same location is also read as Mem
        has_delta = has_delta or any(
            operand.kind is OperandKind.DELTA and prefix + str(operand) in mem_lookups
            for operand in req.operands()
        )
        if req.is_terminating():
            if has_delta and req.flag not in _PAUSE_OR_RESET:
                return True
            has_delta = False
    return False


def check_deltas(subject: LogicSubject) -> list[Issue]:
    if not any(operand.kind is OperandKind.DELTA for operand in subject.operands):
        return [Issue.of(IssueCode.MISSING_DELTA, detail=DELTA_FEEDBACK)]

    groups = subject.logic.groups
    core_lookups = _mem_lookups(subject.logic.core)
    qualified = [_group_uses_delta(group, core_lookups | _mem_lookups(group)) for group in groups]
    # either the core qualifies or every alt group does
    if qualified and (qualified[0] or (len(qualified) > 1 and all(qualified[1:]))):
        return []
    return [Issue.of(IssueCode.IMPROPER_DELTA, detail=DELTA_FEEDBACK)]


def check_missing_notes(subject: LogicSubject) -> list[Issue]:
    if not subject.notes:
        return []
    issues: list[Issue] = []
    for group in subject.logic.groups:
        for req in _direct_requirements(group):
            last_reported: int | None = None
            for operand in req.operands():
                if not operand.is_address:
                    continue
                address = int(operand.value or 0)
                if find_note(subject.notes, address) is not None or address == last_reported:
                    continue
                last_reported = address
                issues.append(
                    Issue.of(
                        IssueCode.MISSING_NOTE, req, f"Address {to_display_hex(address)} missing note"
                    )
                )
    return issues


def check_mismatch_notes(subject: LogicSubject) -> list[Issue]:
    if not subject.notes:
        return []
    issues: list[Issue] = []
    for group in subject.logic.groups:
        for req in _direct_requirements(group):
            for operand in req.operands():
                if not operand.is_address:
                    continue
                address = int(operand.value or 0)
                note = find_note(subject.notes, address)
                if note is None:
                    continue
                sizes = mismatched_sizes(operand, note)
                if sizes is None:
                    continue
                read, noted = sizes
                issues.append(
                    Issue.of(
                        IssueCode.TYPE_MISMATCH,
                        req,
                        f"Accessing {to_display_hex(address)} as {read.label}. "
                        f"Matching code note at {to_display_hex(note.address)} is marked as "
                        f"{noted.label}",
                    )
                )
    return issues


def check_priors(subject: LogicSubject) -> list[Issue]:
    issues: list[Issue] = []
    for group in subject.logic.groups:
        for req in group:
            if req.op != "!=" or not same_value(req.lhs, req.rhs):
                continue
            canonical = req.canonicalize()
            if (
                canonical.lhs.kind is OperandKind.MEM
                and canonical.rhs is not None
                and canonical.rhs.kind is OperandKind.PRIOR
            ):
                issues.append(
                    Issue.of(
                        IssueCode.BAD_PRIOR,
                        req,
                        "A memory value will always be not-equal to its prior, unless the value "
                        "has never changed. This requirement most likely does not accomplish "
                        "anything and is probably safe to remove.",
                    )
                )

        canonical_group = [req.canonicalize() for req in group]
        for a_index, a in enumerate(canonical_group):
            if a.op != "!=" or a.lhs.kind is not OperandKind.PRIOR:
                continue
            if a.rhs is None or a.rhs.is_address:
                continue
            for b_index, b in enumerate(canonical_group):
                if a_index == b_index or b.op != "=" or b.lhs.kind is not OperandKind.MEM:
                    continue
                if b.rhs is None or b.rhs.is_address:
                    continue
                if operands_equal(a.rhs, b.rhs) and same_value(a.lhs, b.lhs):
                    issues.append(
                        Issue.of(
                            IssueCode.BAD_PRIOR,
                            group[a_index],
                            "The prior comparison will always be true when "
                            f"{group[b_index].to_annotated_string()}, unless the value has never "
                            "changed. This requirement most likely does not accomplish anything "
                            "and is probably safe to remove.",
                        )
                    )
    return issues


def check_bad_chains(subject: LogicSubject) -> list[Issue]:
    return [
        Issue.of(IssueCode.BAD_CHAIN, group[-1])
        for group in subject.logic.groups
        if group and group[-1].flag is not None and group[-1].flag.chains
    ]


def check_stale_addaddress(subject: LogicSubject) -> list[Issue]:
    return [
        Issue.of(IssueCode.STALE_ADDADDRESS, req)
        for req in subject.logic.requirements()
        if req.flag is ConditionFlag.ADD_ADDRESS and req.lhs.kind in _STALE_KINDS
    ]


def check_negative_offsets(subject: LogicSubject) -> list[Issue]:
    issues: list[Issue] = []
    for group in subject.logic.groups:
        for previous, req in zip(group, group[1:]):
            if previous.flag is not ConditionFlag.ADD_ADDRESS:
                continue
            for operand in req.operands():
                offset = int(operand.value or 0)
                if operand.is_address and offset & _NEGATIVE_BIT:
                    issues.append(
                        Issue.of(
                            IssueCode.NEGATIVE_OFFSET,
                            req,
                            f"Offset {to_display_hex(offset)} reads as {offset - (1 << 32)}",
                        )
                    )
    return issues


def check_one_condition(subject: LogicSubject) -> list[Issue]:
    logic = subject.logic
    if not logic.value_mode and len(logic.get_memory_lookups()) <= 1:
        return [Issue.of(IssueCode.ONE_CONDITION)]
    return []


def check_pauselocks(subject: LogicSubject) -> list[Issue]:
    groups = subject.logic.groups
    groups_with_reset = {
        index
        for index, group in enumerate(groups)
        if any(req.flag is ConditionFlag.RESET_IF for req in group)
    }
    issues: list[Issue] = []
    for group_index, group in enumerate(groups):
        for index, req in enumerate(group):
            if req.hits == 0 or req.flag is not ConditionFlag.PAUSE_IF:
                continue
            if is_guarded_by_reset_next_if(group, index):
                continue
            # a pauselock can only be cleared by a ResetIf in another group
            if not groups_with_reset - {group_index}:
                issues.append(Issue.of(IssueCode.PAUSELOCK_NO_RESET, req))
    return issues


def check_uncleared_hits(subject: LogicSubject) -> list[Issue]:
    logic = subject.logic
    if any(req.flag is ConditionFlag.RESET_IF for req in logic.requirements()):
        return []
    issues: list[Issue] = []
    for group in logic.groups:
        for index, req in enumerate(group):
            if req.hits == 0 or req.flag in (ConditionFlag.RESET_IF, ConditionFlag.PAUSE_IF):
                continue
            if not is_guarded_by_reset_next_if(group, index):
                issues.append(Issue.of(IssueCode.HIT_NO_RESET, req))
    return issues


def check_uuo_pause(subject: LogicSubject) -> list[Issue]:
    logic = subject.logic
    if _has_hits(logic):
        return []
    issues: list[Issue] = []
    for group in logic.groups:
        measured = bool(_group_flags(group) & _MEASURED)
        for index, req in enumerate(group):
            if req.flag is not ConditionFlag.PAUSE_IF:
                continue
            if measured:
                issues.append(Issue.of(IssueCode.PAUSING_MEASURED, req))
            elif not logic.value_mode:
                # pausing a value group freezes the reported value, which is fine
                issues.append(
                    Issue.of(
                        IssueCode.UUO_PAUSE,
                        req,
                        f"Automated recommended change: {invert_chain(group, index)}",
                    )
                )
    return issues


def check_uuo_reset(subject: LogicSubject) -> list[Issue]:
    logic = subject.logic
    if _has_hits(logic):
        return []
    issues: list[Issue] = []
    for group in logic.groups:
        measured = bool(_group_flags(group) & _MEASURED)
        for index, req in enumerate(group):
            if req.flag is not ConditionFlag.RESET_IF:
                continue
            if not logic.value_mode or measured:
                issues.append(
                    Issue.of(
                        IssueCode.UUO_RESET,
                        req,
                        f"Automated recommended change: {invert_chain(group, index)}",
                    )
                )
    return issues


def check_reset_with_hits(subject: LogicSubject) -> list[Issue]:
    return [
        Issue.of(IssueCode.RESET_HITCOUNT_1, req)
        for req in subject.logic.requirements()
        if req.flag is ConditionFlag.RESET_IF and req.hits == 1
    ]


def check_uuo_resetnextif(subject: LogicSubject) -> list[Issue]:
    logic = subject.logic
    issues: list[Issue] = []
    for group in logic.groups:
        for index, req in enumerate(group):
            if req.flag is not ConditionFlag.RESET_NEXT_IF:
                continue
            for following in group[index + 1 :]:
                if following.hits > 0:
                    break
                if not following.is_terminating():
                    continue
                if logic.value_mode and following.flag in _MEASURED:
                    break
                # ResetNextIf with hits ahead of a PauseIf is the "pause until" pattern
                if req.hits > 0 and following.flag is ConditionFlag.PAUSE_IF:
                    break
                issues.append(Issue.of(IssueCode.UUO_RNI, req))
                break
    return issues


def check_source_mod_measured(subject: LogicSubject) -> list[Issue]:
    if not subject.logic.value_mode:
        return []
    measured_zero = Requirement.from_string("M:0").to_markdown()
    issues: list[Issue] = []
    for group in subject.logic.groups:
        for index, req in enumerate(group):
            if req.flag is not ConditionFlag.MEASURED or not req.is_modifying():
                continue
            lines = [req.clone(flag=ConditionFlag.ADD_SOURCE).to_markdown(), measured_zero]
            for previous in reversed(group[:index]):
                if previous.is_terminating():
                    break
                lines.insert(0, previous.to_markdown())
            issues.append(
                Issue.of(
                    IssueCode.SOURCE_MOD_MEASURED,
                    req,
                    "This can be fixed by using AddSource to add to a Measured Val 0: "
                    + "\n".join(lines),
                )
            )
    return issues


def check_constant_requirements(subject: LogicSubject) -> list[Issue]:
    """Standalone requirements comparing two literals."""

    issues: list[Issue] = []
    for group in subject.logic.groups:
        previous: Requirement | None = None
        for req in group:
            standalone = req.flag is None and req.hits == 0
            if standalone and (previous is None or previous.is_terminating()):
                if req.is_always_false():
                    issues.append(Issue.of(IssueCode.UNSATISFIABLE, req))
                elif req.is_always_true():
                    issues.append(Issue.of(IssueCode.UNNECESSARY, req))
            previous = req
    return issues


__all__ = [
    "DELTA_FEEDBACK",
    "LogicSubject",
    "check_bad_chains",
    "check_constant_requirements",
    "check_deltas",
    "check_mismatch_notes",
    "check_missing_notes",
    "check_negative_offsets",
    "check_one_condition",
    "check_pauselocks",
    "check_priors",
    "check_reset_with_hits",
    "check_source_mod_measured",
    "check_stale_addaddress",
    "check_uncleared_hits",
    "check_uuo_pause",
    "check_uuo_resetnextif",
    "check_uuo_reset",
    "invert_chain",
    "is_guarded_by_reset_next_if",
    "mismatched_sizes",
]
