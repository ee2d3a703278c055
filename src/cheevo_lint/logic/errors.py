"""Parse error raised by the condition-language and display-script parsers."""

from __future__ import annotations


class LogicParseError(ValueError):
    """Raised when a fragment of condition-language text cannot be parsed.

    ``category`` names the grammar level that failed (``operand``,
    ``requirement``, ``logic`` or a display-script label) and ``fragment`` is
    the offending text.
    """

    def __init__(self, category: str, fragment: str) -> None:
        super().__init__(f"Failed to parse {category}: {fragment}")
        self.category = category
        self.fragment = fragment


__all__ = ["LogicParseError"]
