"""Set design rules: achievement typing and duplicated text."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import TypeVar

from cheevo_lint.assets.models import AchievementSet, AchievementType
from cheevo_lint.feedback.catalog import IssueCode
from cheevo_lint.feedback.issues import Issue

_T = TypeVar("_T")


def _group_by(items: Iterable[_T], key: Callable[[_T], str]) -> dict[str, list[_T]]:
    groups: dict[str, list[_T]] = {}
    for item in items:
        groups.setdefault(key(item), []).append(item)
    return groups


def check_progression_typing(achievement_set: AchievementSet) -> list[Issue]:
    types = {ach.type for ach in achievement_set.achievements}
    if AchievementType.PROGRESSION in types:
        return []
    if AchievementType.WIN_CONDITION in types:
        return [Issue.of(IssueCode.NO_PROGRESSION)]
    return [Issue.of(IssueCode.NO_TYPING)]


def check_duplicate_text(achievement_set: AchievementSet) -> list[Issue]:
    issues: list[Issue] = []
    achievements = achievement_set.achievements
    for title, group in _group_by(achievements, lambda ach: ach.title).items():
        if len(group) > 1:
            issues.append(
                Issue.of(
                    IssueCode.DUPLICATE_TITLES,
                    None,
                    f"{len(group)} achievements share the title {title}",
                )
            )
    for group in _group_by(achievements, lambda ach: ach.description).values():
        if len(group) > 1:
            issues.append(
                Issue.of(
                    IssueCode.DUPLICATE_DESCRIPTIONS,
                    None,
                    f"{len(group)} achievements share the same description: "
                    + ", ".join(ach.title for ach in group),
                )
            )
    for title, group in _group_by(achievement_set.leaderboards, lambda lb: lb.title).items():
        if len(group) > 1:
            issues.append(
                Issue.of(
                    IssueCode.DUPLICATE_TITLES,
                    None,
                    f"{len(group)} leaderboards share the title {title}",
                )
            )
    return issues


__all__ = ["check_duplicate_text", "check_progression_typing"]
