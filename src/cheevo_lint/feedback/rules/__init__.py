"""Rule functions grouped by what they inspect."""

from cheevo_lint.feedback.rules.logic_rules import LogicSubject, invert_chain
from cheevo_lint.feedback.rules.rich_presence_rules import RichPresenceSubject
from cheevo_lint.feedback.rules.writing_rules import make_title_case

__all__ = ["LogicSubject", "RichPresenceSubject", "invert_chain", "make_title_case"]
