"""
cheevo-lint - presentation and writing rules.

File: src/cheevo_lint/feedback/rules/writing_rules.py
Last updated: 2026-10-19

Purpose
- Title case, character-set and bracket checks over an asset's title and
  description.

Functional requirements
- All-caps words are left alone by the title-case suggestion; the first and
  last words are always capitalized; minor words keep their case elsewhere.
- Each text field reports at most one character-set problem, checked in the
  order emoji, typographic quotes, foreign script, other non-ASCII.
"""

from __future__ import annotations

import re
import unicodedata
from collections.abc import Iterator
from typing import Final, Protocol
from urllib.parse import quote

from cheevo_lint.feedback.catalog import IssueCode
from cheevo_lint.feedback.issues import Issue


class PresentedAsset(Protocol):
    @property
    def title(self) -> str: ...

    @property
    def description(self) -> str: ...


TITLE_CASE_MINORS: Final[frozenset[str]] = frozenset(
    {
        "a", "an", "and", "as", "at", "but", "by", "en", "for", "from", "how", "if", "in",
        "n'", "'n'", "neither", "nor", "of", "on", "only", "onto", "out", "or", "over", "per",
        "so", "than", "that", "the", "to", "until", "up", "upon", "v", "v.", "versus", "vs",
        "vs.", "via", "when", "with", "without", "yet",
    }
)  # fmt: skip

_WORD_PUNCTUATION: Final[frozenset[str]] = frozenset("0123456789'‘’-")
_SMART_QUOTES_RE: Final[re.Pattern[str]] = re.compile("[‘’“”]")
_NON_ASCII_RE: Final[re.Pattern[str]] = re.compile(r"[^\x00-\x7f]")
_BRACKETS_RE: Final[re.Pattern[str]] = re.compile(r".[{\[(](.+)[}\])]")

# Leading word of the Unicode character name for scripts treated as foreign.
_FOREIGN_SCRIPTS: Final[frozenset[str]] = frozenset(
    {
        "ARABIC", "ARMENIAN", "BENGALI", "BOPOMOFO", "BRAILLE", "BUHID", "CANADIAN",
        "CHEROKEE", "CJK", "COMBINING", "CYRILLIC", "DEVANAGARI", "ETHIOPIC", "GEORGIAN",
        "GREEK", "GUJARATI", "GURMUKHI", "HANGUL", "HANUNOO", "HEBREW", "HIRAGANA",
        "IDEOGRAPHIC", "KANNADA", "KATAKANA", "KHMER", "LAO", "LIMBU", "MALAYALAM",
        "MONGOLIAN", "MYANMAR", "OGHAM", "ORIYA", "RUNIC", "SINHALA", "SYRIAC", "TAGALOG",
        "TAGBANWA", "TAMIL", "TELUGU", "THAANA", "THAI", "TIBETAN", "YI",
    }
)  # fmt: skip

_WIDTH_PREFIXES: Final[frozenset[str]] = frozenset({"FULLWIDTH", "HALFWIDTH"})

# Code points rendered as emoji by default.
_EMOJI_RANGES: Final[tuple[tuple[int, int], ...]] = (
    (0x231A, 0x231B), (0x23E9, 0x23EC), (0x23F0, 0x23F0), (0x23F3, 0x23F3),
    (0x25FD, 0x25FE), (0x2614, 0x2615), (0x2648, 0x2653), (0x267F, 0x267F),
    (0x2693, 0x2693), (0x26A1, 0x26A1), (0x26AA, 0x26AB), (0x26BD, 0x26BE),
    (0x26C4, 0x26C5), (0x26CE, 0x26CE), (0x26D4, 0x26D4), (0x26EA, 0x26EA),
    (0x26F2, 0x26F3), (0x26F5, 0x26F5), (0x26FA, 0x26FA), (0x26FD, 0x26FD),
    (0x2705, 0x2705), (0x270A, 0x270B), (0x2728, 0x2728), (0x274C, 0x274C),
    (0x274E, 0x274E), (0x2753, 0x2755), (0x2757, 0x2757), (0x2795, 0x2797),
    (0x27B0, 0x27B0), (0x27BF, 0x27BF), (0x2B1B, 0x2B1C), (0x2B50, 0x2B50),
    (0x2B55, 0x2B55), (0x1F004, 0x1F004), (0x1F0CF, 0x1F0CF), (0x1F18E, 0x1F18E),
    (0x1F191, 0x1F19A), (0x1F1E6, 0x1F1FF), (0x1F201, 0x1F201), (0x1F21A, 0x1F21A),
    (0x1F22F, 0x1F22F), (0x1F232, 0x1F236), (0x1F238, 0x1F23A), (0x1F250, 0x1F251),
    (0x1F300, 0x1F320), (0x1F32D, 0x1F335), (0x1F337, 0x1F37C), (0x1F37E, 0x1F393),
    (0x1F3A0, 0x1F3CA), (0x1F3CF, 0x1F3D3), (0x1F3E0, 0x1F3F0), (0x1F3F4, 0x1F3F4),
    (0x1F3F8, 0x1F43E), (0x1F440, 0x1F440), (0x1F442, 0x1F4FC), (0x1F4FF, 0x1F53D),
    (0x1F54B, 0x1F54E), (0x1F550, 0x1F567), (0x1F57A, 0x1F57A), (0x1F595, 0x1F596),
    (0x1F5A4, 0x1F5A4), (0x1F5FB, 0x1F64F), (0x1F680, 0x1F6C5), (0x1F6CC, 0x1F6CC),
    (0x1F6D0, 0x1F6D2), (0x1F6D5, 0x1F6D7), (0x1F6DC, 0x1F6DF), (0x1F6EB, 0x1F6EC),
    (0x1F6F4, 0x1F6FC), (0x1F7E0, 0x1F7EB), (0x1F7F0, 0x1F7F0), (0x1F90C, 0x1F93A),
    (0x1F93C, 0x1F945), (0x1F947, 0x1F9FF), (0x1FA70, 0x1FAFF),
)  # fmt: skip

_TITLE_CASE_ADVICE: Final[str] = (
    "Automated suggestion (Warning: automated suggestions don't handle hyphenated or "
    "otherwise-separated words gracefully.): {corrected}. Additional suggestions: "
    "https://titlecaseconverter.com/?style=CMOS&title={query}, "
    "https://capitalizemytitle.com/style/Chicago/?title={query}"
)


def _script_of(char: str) -> str:
    words = re.split(r"[ -]", unicodedata.name(char, ""))
    # Width variants name their script second, as in "HALFWIDTH KATAKANA LETTER A".
    if words[0] in _WIDTH_PREFIXES and len(words) > 1:
        return words[1]
    return words[0]


def _is_word_char(char: str) -> bool:
    return char in _WORD_PUNCTUATION or (char.isalpha() and _script_of(char) == "LATIN")


def _word_spans(phrase: str) -> Iterator[tuple[int, int]]:
    start: int | None = None
    for index, char in enumerate(phrase):
        if _is_word_char(char):
            if start is None:
                start = index
        elif start is not None:
            yield start, index
            start = None
    if start is not None:
        yield start, len(phrase)


def make_title_case(phrase: str) -> str:
    pieces: list[str] = []
    cursor = 0
    for start, end in _word_spans(phrase):
        word = phrase[start:end]
        if word != word.upper() and (
            start == 0 or end == len(phrase) or word not in TITLE_CASE_MINORS
        ):
            word = word[:1].upper() + word[1:]
        pieces.append(phrase[cursor:start])
        pieces.append(word)
        cursor = end
    pieces.append(phrase[cursor:])
    return "".join(pieces)


def has_emoji(text: str) -> bool:
    return any(
        low <= ord(char) <= high for char in text for low, high in _EMOJI_RANGES
    )


def has_foreign_script(text: str) -> bool:
    return any(_script_of(char) in _FOREIGN_SCRIPTS for char in text if ord(char) > 0x7F)


def check_title_case(asset: PresentedAsset) -> list[Issue]:
    corrected = make_title_case(asset.title)
    if corrected == asset.title:
        return []
    advice = _TITLE_CASE_ADVICE.format(
        corrected=corrected, query=quote(asset.title, safe="~()*!.'")
    )
    return [Issue.of(IssueCode.TITLE_CASE, "title", advice)]


def check_writing_mistakes(asset: PresentedAsset) -> list[Issue]:
    issues: list[Issue] = []
    for field_name, text in (("title", asset.title), ("desc", asset.description)):
        if has_emoji(text):
            issues.append(Issue.of(IssueCode.NO_EMOJI, field_name))
        elif _SMART_QUOTES_RE.search(text):
            corrected = re.sub("[‘’]", "'", text)
            corrected = re.sub("[“”]", '"', corrected)
            issues.append(
                Issue.of(
                    IssueCode.SPECIAL_CHARS,
                    field_name,
                    '"Smart" quotes are great for typography, but often don\'t render correctly '
                    f"in emulators. Current: {text} Suggested: {corrected}",
                )
            )
        elif has_foreign_script(text):
            issues.append(
                Issue.of(
                    IssueCode.FOREIGN_CHARS,
                    field_name,
                    f"For policy exceptions regarding the use of foreign language message QATeam: {text}",
                )
            )
        elif _NON_ASCII_RE.search(text):
            issues.append(
                Issue.of(IssueCode.SPECIAL_CHARS, field_name, f"Non-ASCII characters: {text}")
            )
    return issues


def check_brackets(asset: PresentedAsset) -> list[Issue]:
    if _BRACKETS_RE.search(asset.description.strip()):
        return [Issue.of(IssueCode.DESC_BRACKETS, "desc")]
    return []


__all__ = [
    "TITLE_CASE_MINORS",
    "PresentedAsset",
    "check_brackets",
    "check_title_case",
    "check_writing_mistakes",
    "has_emoji",
    "has_foreign_script",
    "make_title_case",
]
