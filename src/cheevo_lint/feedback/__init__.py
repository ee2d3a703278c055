"""Issue catalog, rule suites, statistics and assessments."""

from cheevo_lint.feedback.catalog import (
    IssueCatalogError,
    IssueCode,
    IssueType,
    Severity,
    issue_type,
    load_issue_catalog,
)
from cheevo_lint.feedback.issues import Assessment, Issue, IssueGroup
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
from cheevo_lint.feedback.suites import Linter, SetReport

__all__ = [
    "Assessment",
    "CodeNoteStats",
    "Issue",
    "IssueCatalogError",
    "IssueCode",
    "IssueGroup",
    "IssueType",
    "LeaderboardStats",
    "Linter",
    "LogicStats",
    "RichPresenceStats",
    "SetReport",
    "SetStats",
    "Severity",
    "generate_code_note_stats",
    "generate_leaderboard_stats",
    "generate_logic_stats",
    "generate_rich_presence_stats",
    "generate_set_stats",
    "issue_type",
    "load_issue_catalog",
]
