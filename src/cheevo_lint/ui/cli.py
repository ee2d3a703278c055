"""Command-line interface for cheevo-lint."""

from __future__ import annotations

import argparse
import json
from collections.abc import Mapping, Sequence
from typing import Any, Final

import structlog

from cheevo_lint.assets import (
    AchievementSet,
    RichPresence,
    load_local_file,
    load_notes_json,
    load_rich_presence,
    load_set_json,
)
from cheevo_lint.config import SEVERITY_LEVELS, load_config
from cheevo_lint.feedback import Assessment, IssueCode, Linter, SetReport, Severity
from cheevo_lint.notes import CodeNote
from cheevo_lint.observability import LoggingConfig, setup_logging, shutdown_logging
from cheevo_lint.ui.render import CLIRenderer, create_renderer

OUTPUT_FORMATS: Final[tuple[str, ...]] = ("text", "json")
_ISSUE_HEADERS: Final[tuple[str, ...]] = ("Severity", "Code", "Target", "Detail")


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for a single lint run."""

    parser = argparse.ArgumentParser(
        prog="cheevo-lint",
        description=(
            "Lint achievement and leaderboard logic, code notes and rich presence.\n\n"
            "Example:\n"
            "  cheevo-lint --notes 1234-Notes.json --user 1234-User.txt --rich 1234-Rich.txt\n"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--notes", required=True, help="Code note export (JSON list of Address/Note/User)."
    )
    parser.add_argument("--user", default=None, help="Local user file (colon-separated rows).")
    parser.add_argument("--set", dest="set_path", default=None, help="Set export (JSON).")
    parser.add_argument("--rich", default=None, help="Rich presence script.")
    parser.add_argument(
        "--severity",
        choices=SEVERITY_LEVELS,
        default=None,
        help="Lowest severity that rejects the run (default from config: warn).",
    )
    parser.add_argument(
        "--config",
        dest="config_path",
        default=None,
        help="Path to TOML config (default: ./cheevo_lint.toml if present).",
    )
    parser.add_argument("--format", choices=OUTPUT_FORMATS, default="text")
    parser.add_argument("--no-color", action="store_true", default=False)
    return parser


def run_cli(argv: Sequence[str] | None = None) -> int:
    """Parse argv, lint the inputs and return the process exit code."""

    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    if args.user is None and args.set_path is None:
        parser.error("one of --user or --set is required")

    config = load_config(
        args.config_path,
        cli_overrides={
            "lint.severity": args.severity,
            "report.color": False if args.no_color else None,
        },
    )
    setup_logging(LoggingConfig.from_mapping(config["logging"]))
    try:
        return _lint(args, config)
    finally:
        shutdown_logging()


def main(argv: Sequence[str] | None = None) -> int:
    """Compatibility wrapper for main-module wiring."""

    return run_cli(argv)


def _lint(args: argparse.Namespace, config: Mapping[str, Any]) -> int:
    logger = structlog.get_logger(__name__)
    achievement_set, notes = _load_inputs(args)
    rich_presence: RichPresence | None = (
        load_rich_presence(args.rich) if args.rich is not None else None
    )
    logger.info(
        "cli_inputs_loaded",
        achievements=len(achievement_set.achievements),
        leaderboards=len(achievement_set.leaderboards),
        notes=len(notes),
        rich_presence=rich_presence is not None,
    )

    lint_section = config["lint"]
    threshold = Severity.parse(lint_section["severity"])
    linter = Linter(disabled_issues=(IssueCode(code) for code in lint_section["disabled_issues"]))
    report = linter.lint(achievement_set, notes, rich_presence)
    rejected = report.rejected(threshold)

    if args.format == "json":
        _emit_json(
            {
                "severity": threshold.label,
                "rejected": rejected,
                "report": report.to_dict(),
            }
        )
    else:
        renderer = create_renderer(no_color=not config["report"]["color"])
        _render_report(renderer, report, threshold, rejected)
    return 1 if rejected else 0


def _load_inputs(args: argparse.Namespace) -> tuple[AchievementSet, tuple[CodeNote, ...]]:
    notes: list[CodeNote] = list(load_notes_json(args.notes))
    achievement_set = AchievementSet()
    if args.set_path is not None:
        achievement_set = load_set_json(args.set_path)
    if args.user is not None:
        local_set, local_notes = load_local_file(args.user)
        achievement_set = achievement_set.merged_with(local_set)
        # local notes come last so they win the reverse lookup
        notes.extend(local_notes)
    return achievement_set, tuple(notes)


def _emit_json(payload: Mapping[str, object]) -> None:
    """Emit a JSON payload to stdout with deterministic formatting."""

    print(json.dumps(payload, sort_keys=True, separators=(",", ":"), ensure_ascii=False))


def _render_report(
    renderer: CLIRenderer, report: SetReport, threshold: Severity, rejected: bool
) -> None:
    achievement_set = report.achievement_set
    renderer.heading(achievement_set.title or "Untitled set")
    if achievement_set.console is not None:
        renderer.kv("Console", achievement_set.console.name)
    renderer.kv("Achievements", len(achievement_set.achievements))
    renderer.kv("Leaderboards", len(achievement_set.leaderboards))
    renderer.kv("Threshold", threshold.label)

    for achievement in achievement_set.achievements:
        label = f"{achievement.state.marker}Achievement {achievement.id}: {achievement.title}"
        _render_assessment(renderer, label, report.achievements[achievement.id])
    for leaderboard in achievement_set.leaderboards:
        label = f"{leaderboard.state.marker}Leaderboard {leaderboard.id}: {leaderboard.title}"
        _render_assessment(renderer, label, report.leaderboards[leaderboard.id])
    _render_assessment(renderer, "Code Notes", report.code_notes)
    _render_assessment(renderer, "Rich Presence", report.rich_presence)
    _render_assessment(renderer, "Set Design", report.set_design)

    renderer.blank()
    if rejected:
        renderer.fail(f"issues at or above {threshold.label}")
    else:
        renderer.ok(f"no issues at or above {threshold.label}")


def _render_assessment(renderer: CLIRenderer, label: str, assessment: Assessment[Any]) -> None:
    renderer.section(label)
    renderer.status("Status:", assessment.status().label)
    for group in assessment.groups:
        renderer.table(
            _ISSUE_HEADERS,
            [
                (
                    issue.severity.label,
                    issue.code.value,
                    issue.describe_target() or "",
                    issue.detail or issue.type.description,
                )
                for issue in group
            ],
            title=group.label,
        )


__all__ = ["OUTPUT_FORMATS", "build_parser", "main", "run_cli"]
