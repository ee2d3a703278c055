"""
cheevo-lint - rule suites and assessment entry points.

File: src/cheevo_lint/feedback/suites.py
Last updated: 2026-10-19

Purpose
- Bind rules into the fixed named suites and run them per asset, producing
  one ``Assessment`` for each achievement, leaderboard, note collection,
  display script and set.

What should be included in this file
- The suite tuples (``BASIC_SUITE``, ``LOGIC_SUITE``, ``ACHIEVEMENT_SUITE``,
  ``PRESENTATION_SUITE``, ``CODE_NOTE_SUITE``, ``RICH_PRESENCE_SUITE``,
  ``SET_SUITE``) and their group labels.
- ``Linter``: runs the suites, filters disabled issue codes and logs one
  structured event per assessed asset.
- ``SetReport``: every assessment produced for one set.

Functional requirements
- Leaderboard start conditions use the full logic suite; cancel, submit and
  value use the basic suite.
- Disabled codes are removed from every group before stats are attached.
- A missing display script is assessed as an empty one.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Final

import structlog

from cheevo_lint.assets.models import COMPONENT_TAGS, Achievement, AchievementSet, Leaderboard
from cheevo_lint.assets.rich_presence import RichPresence
from cheevo_lint.feedback.catalog import IssueCode, Severity
from cheevo_lint.feedback.issues import Assessment, Issue, IssueGroup
from cheevo_lint.feedback.rules import logic_rules, note_rules, rich_presence_rules, set_rules
from cheevo_lint.feedback.rules import writing_rules
from cheevo_lint.feedback.rules.logic_rules import LogicSubject
from cheevo_lint.feedback.rules.rich_presence_rules import RichPresenceSubject
from cheevo_lint.feedback.stats import (
    CodeNoteStats,
    LeaderboardStats,
    LogicStats,
    RichPresenceStats,
    SetStats,
    generate_code_note_stats,
    generate_leaderboard_stats,
    generate_logic_stats,
    generate_rich_presence_stats,
    generate_set_stats,
)
from cheevo_lint.notes.code_note import CodeNote

LOGIC_LABEL: Final[str] = "Logic & Design"
PRESENTATION_LABEL: Final[str] = "Presentation & Writing"
CODE_NOTE_LABEL: Final[str] = "Code Notes"
RICH_PRESENCE_LABEL: Final[str] = "Rich Presence"
SET_LABEL: Final[str] = "Set Design"

LogicRule = Callable[[LogicSubject], list[Issue]]

BASIC_SUITE: Final[tuple[LogicRule, ...]] = (
    logic_rules.check_missing_notes,
    logic_rules.check_mismatch_notes,
    logic_rules.check_bad_chains,
    logic_rules.check_priors,
    logic_rules.check_stale_addaddress,
    logic_rules.check_negative_offsets,
    logic_rules.check_uncleared_hits,
    logic_rules.check_pauselocks,
    logic_rules.check_uuo_pause,
    logic_rules.check_uuo_reset,
    logic_rules.check_reset_with_hits,
    logic_rules.check_uuo_resetnextif,
    logic_rules.check_source_mod_measured,
)
LOGIC_SUITE: Final[tuple[LogicRule, ...]] = (
    logic_rules.check_deltas,
    logic_rules.check_one_condition,
    *BASIC_SUITE,
)
# "0=1" and "1=1" are ordinary leaderboard idioms, so constant requirements
# are only reported for achievements.
ACHIEVEMENT_SUITE: Final[tuple[LogicRule, ...]] = (
    *LOGIC_SUITE,
    logic_rules.check_constant_requirements,
)
PRESENTATION_SUITE: Final[tuple[Callable[[writing_rules.PresentedAsset], list[Issue]], ...]] = (
    writing_rules.check_title_case,
    writing_rules.check_writing_mistakes,
    writing_rules.check_brackets,
)
CODE_NOTE_SUITE: Final[tuple[Callable[[Sequence[CodeNote]], list[Issue]], ...]] = (
    note_rules.check_notes_missing_size,
    note_rules.check_notes_enum_hex,
    note_rules.check_notes_enum_size_mismatch,
)
RICH_PRESENCE_SUITE: Final[tuple[Callable[[RichPresenceSubject], list[Issue]], ...]] = (
    rich_presence_rules.check_rp_dynamic,
    rich_presence_rules.check_rp_notes,
)
SET_SUITE: Final[tuple[Callable[[AchievementSet], list[Issue]], ...]] = (
    set_rules.check_progression_typing,
    set_rules.check_duplicate_text,
)


@dataclass(frozen=True, slots=True)
class SetReport:
    """All assessments produced for one set, keyed by asset id."""

    achievement_set: AchievementSet
    achievements: Mapping[int, Assessment[LogicStats]]
    leaderboards: Mapping[int, Assessment[LeaderboardStats]]
    code_notes: Assessment[CodeNoteStats]
    rich_presence: Assessment[RichPresenceStats]
    set_design: Assessment[SetStats]

    def asset_assessments(self) -> Iterable[Assessment[Any]]:
        yield from self.achievements.values()
        yield from self.leaderboards.values()

    def rejected(self, threshold: Severity) -> bool:
        """True when any achievement or leaderboard has an issue at ``threshold`` or above."""

        return any(
            assessment.issues_at_or_above(threshold) for assessment in self.asset_assessments()
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "set": {
                "id": self.achievement_set.id,
                "title": self.achievement_set.title,
                "console": (
                    self.achievement_set.console.name
                    if self.achievement_set.console is not None
                    else None
                ),
            },
            "achievements": {
                str(ach_id): assessment.to_dict()
                for ach_id, assessment in self.achievements.items()
            },
            "leaderboards": {
                str(lb_id): assessment.to_dict()
                for lb_id, assessment in self.leaderboards.items()
            },
            "code_notes": self.code_notes.to_dict(),
            "rich_presence": self.rich_presence.to_dict(),
            "set_design": self.set_design.to_dict(),
        }


class Linter:
    """Run the rule suites over assets and collect their assessments."""

    def __init__(
        self,
        *,
        disabled_issues: Iterable[IssueCode] = (),
        logger: Any | None = None,
    ) -> None:
        self._disabled = frozenset(IssueCode(code) for code in disabled_issues)
        self._logger = logger if logger is not None else structlog.get_logger(__name__)

    @property
    def disabled_issues(self) -> frozenset[IssueCode]:
        return self._disabled

    def assess_achievement(
        self, achievement: Achievement, notes: Sequence[CodeNote] = ()
    ) -> Assessment[LogicStats]:
        subject = LogicSubject(achievement.logic, tuple(notes))
        groups = (
            self._group(LOGIC_LABEL, ACHIEVEMENT_SUITE, subject),
            self._group(PRESENTATION_LABEL, PRESENTATION_SUITE, achievement),
        )
        assessment = Assessment(groups=groups, stats=generate_logic_stats(achievement.logic))
        self._log_assessment("achievement", achievement.id, assessment)
        return assessment

    def assess_leaderboard(
        self, leaderboard: Leaderboard, notes: Sequence[CodeNote] = ()
    ) -> Assessment[LeaderboardStats]:
        note_tuple = tuple(notes)
        issues: list[Issue] = []
        for tag in COMPONENT_TAGS:
            suite = LOGIC_SUITE if tag == "STA" else BASIC_SUITE
            subject = LogicSubject(leaderboard.components[tag], note_tuple)
            issues.extend(self._group(LOGIC_LABEL, suite, subject).issues)
        groups = (
            IssueGroup(label=LOGIC_LABEL, issues=tuple(issues)),
            self._group(PRESENTATION_LABEL, PRESENTATION_SUITE, leaderboard),
        )
        assessment = Assessment(groups=groups, stats=generate_leaderboard_stats(leaderboard))
        self._log_assessment("leaderboard", leaderboard.id, assessment)
        return assessment

    def assess_code_notes(
        self, achievement_set: AchievementSet, notes: Sequence[CodeNote]
    ) -> Assessment[CodeNoteStats]:
        note_tuple = tuple(notes)
        assessment = Assessment(
            groups=(self._group(CODE_NOTE_LABEL, CODE_NOTE_SUITE, note_tuple),),
            stats=generate_code_note_stats(achievement_set, note_tuple),
        )
        self._log_assessment("code_notes", len(note_tuple), assessment)
        return assessment

    def assess_rich_presence(
        self, rich_presence: RichPresence | None, notes: Sequence[CodeNote] = ()
    ) -> Assessment[RichPresenceStats]:
        script = rich_presence if rich_presence is not None else RichPresence()
        subject = RichPresenceSubject(script, tuple(notes))
        assessment = Assessment(
            groups=(self._group(RICH_PRESENCE_LABEL, RICH_PRESENCE_SUITE, subject),),
            stats=generate_rich_presence_stats(script),
        )
        self._log_assessment("rich_presence", len(script.display), assessment)
        return assessment

    def assess_set(
        self,
        achievement_set: AchievementSet,
        notes: Sequence[CodeNote] = (),
        rich_presence: RichPresence | None = None,
    ) -> Assessment[SetStats]:
        assessment = Assessment(
            groups=(self._group(SET_LABEL, SET_SUITE, achievement_set),),
            stats=generate_set_stats(achievement_set, tuple(notes), rich_presence),
        )
        self._log_assessment("set", achievement_set.id, assessment)
        return assessment

    def lint(
        self,
        achievement_set: AchievementSet,
        notes: Sequence[CodeNote] = (),
        rich_presence: RichPresence | None = None,
    ) -> SetReport:
        note_tuple = tuple(notes)
        return SetReport(
            achievement_set=achievement_set,
            achievements={
                ach.id: self.assess_achievement(ach, note_tuple)
                for ach in achievement_set.achievements
            },
            leaderboards={
                lb.id: self.assess_leaderboard(lb, note_tuple)
                for lb in achievement_set.leaderboards
            },
            code_notes=self.assess_code_notes(achievement_set, note_tuple),
            rich_presence=self.assess_rich_presence(rich_presence, note_tuple),
            set_design=self.assess_set(achievement_set, note_tuple, rich_presence),
        )

    def _group(
        self, label: str, rules: Iterable[Callable[[Any], list[Issue]]], subject: Any
    ) -> IssueGroup:
        issues: list[Issue] = []
        for rule in rules:
            found = IssueGroup(label=label, issues=tuple(rule(subject))).without(self._disabled)
            self._logger.debug(
                "feedback_rule_evaluated", group=label, rule=rule.__name__, issue_count=len(found)
            )
            issues.extend(found)
        return IssueGroup(label=label, issues=tuple(issues))

    def _log_assessment(
        self, kind: str, subject_id: int | None, assessment: Assessment[Any]
    ) -> None:
        self._logger.info(
            "asset_assessed",
            kind=kind,
            subject_id=subject_id,
            status=assessment.status().label,
            issue_codes=sorted({issue.code.value for issue in assessment.issues()}),
        )


__all__ = [
    "ACHIEVEMENT_SUITE",
    "BASIC_SUITE",
    "CODE_NOTE_LABEL",
    "CODE_NOTE_SUITE",
    "LOGIC_LABEL",
    "LOGIC_SUITE",
    "Linter",
    "PRESENTATION_LABEL",
    "PRESENTATION_SUITE",
    "RICH_PRESENCE_LABEL",
    "RICH_PRESENCE_SUITE",
    "SET_LABEL",
    "SET_SUITE",
    "SetReport",
]
