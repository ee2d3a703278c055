"""Display-script rules: dynamic content and code-note coverage."""

from __future__ import annotations

from dataclasses import dataclass

from cheevo_lint.assets.rich_presence import RichPresence
from cheevo_lint.feedback.catalog import IssueCode
from cheevo_lint.feedback.issues import Issue
from cheevo_lint.feedback.rules.logic_rules import mismatched_sizes
from cheevo_lint.logic.enums import ConditionFlag
from cheevo_lint.logic.model import Logic
from cheevo_lint.logic.operand import to_display_hex
from cheevo_lint.notes.code_note import CodeNote, find_note


@dataclass(frozen=True, slots=True)
class RichPresenceSubject:
    rich_presence: RichPresence
    notes: tuple[CodeNote, ...] = ()


def check_rp_dynamic(subject: RichPresenceSubject) -> list[Issue]:
    display = subject.rich_presence.display
    if any(clause.condition is not None for clause in display):
        return []
    if any(clause.lookups for clause in display):
        return [Issue.of(IssueCode.NO_CONDITIONAL_DISPLAY)]
    return [Issue.of(IssueCode.NO_DYNAMIC_RP)]


def _note_issues(logic: Logic, where: str, notes: tuple[CodeNote, ...]) -> list[Issue]:
    issues: list[Issue] = []
    for group in logic.groups:
        previous_is_pointer = False
        for req in group:
            last_reported: int | None = None
            for operand in req.operands():
                if previous_is_pointer or not operand.is_address:
                    continue
                address = int(operand.value or 0)
                note = find_note(notes, address)
                if note is None:
                    if address != last_reported:
                        last_reported = address
                        issues.append(
                            Issue.of(
                                IssueCode.MISSING_NOTE_RP,
                                None,
                                f"Missing note for {where}: {to_display_hex(address)}",
                            )
                        )
                    continue
                sizes = mismatched_sizes(operand, note)
                if sizes is not None:
                    read, noted = sizes
                    issues.append(
                        Issue.of(
                            IssueCode.TYPE_MISMATCH,
                            req,
                            f"Accessing {to_display_hex(address)} in {where} as "
                            f"{read.label}. Matching code note at "
                            f"{to_display_hex(note.address)} is marked as "
                            f"{noted.label}. Correct accessor should be: "
                            f"{noted.prefix}{note.address:08x}",
                        )
                    )
            previous_is_pointer = req.flag is ConditionFlag.ADD_ADDRESS
    return issues


def check_rp_notes(subject: RichPresenceSubject) -> list[Issue]:
    issues: list[Issue] = []
    for number, clause in enumerate(subject.rich_presence.display, start=1):
        if clause.condition is not None:
            issues.extend(
                _note_issues(clause.condition, f"condition of display #{number}", subject.notes)
            )
        for lookup in clause.lookups:
            issues.extend(
                _note_issues(lookup.calc, f"{lookup.name} lookup of display #{number}", subject.notes)
            )
    return issues


__all__ = ["RichPresenceSubject", "check_rp_dynamic", "check_rp_notes"]
