"""Code-note parsing: declared sizes, types and value enumerations."""

from cheevo_lint.notes.code_note import (
    CodeNote,
    EnumerationEntry,
    extract_size,
    find_note,
    is_probable_pointer,
    parse_enumerations,
)

__all__ = [
    "CodeNote",
    "EnumerationEntry",
    "extract_size",
    "find_note",
    "is_probable_pointer",
    "parse_enumerations",
]
