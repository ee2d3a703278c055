"""Asset records, loaders and the display-script parser."""

from cheevo_lint.assets.loader import (
    AssetLoadError,
    load_local_file,
    load_notes_json,
    load_rich_presence,
    load_set_json,
    parse_local_text,
    parse_notes_json,
    parse_set_json,
    split_colon_row,
)
from cheevo_lint.assets.models import (
    COMPONENT_TAGS,
    Achievement,
    AchievementSet,
    AchievementType,
    AssetState,
    Console,
    Leaderboard,
    LeaderboardKind,
    lookup_console,
)
from cheevo_lint.assets.rich_presence import (
    DisplayClause,
    DisplayLookup,
    LookupRange,
    RichPresence,
)

__all__ = [
    "COMPONENT_TAGS",
    "Achievement",
    "AchievementSet",
    "AchievementType",
    "AssetLoadError",
    "AssetState",
    "Console",
    "DisplayClause",
    "DisplayLookup",
    "Leaderboard",
    "LeaderboardKind",
    "LookupRange",
    "RichPresence",
    "load_local_file",
    "load_notes_json",
    "load_rich_presence",
    "load_set_json",
    "lookup_console",
    "parse_local_text",
    "parse_notes_json",
    "parse_set_json",
    "split_colon_row",
]
