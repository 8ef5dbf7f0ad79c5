"""Unicode range tables for the restricted scripts.

Each script is a :class:`ScriptPredicate` backed by its own sorted list of
inclusive codepoint ranges. Tables are independent: Han ideographs appear in
both the Chinese and the Japanese table, so a string of kanji is reported by
both rules.
"""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass, field

from .errors import UnknownScriptError


# Han ideographs shared by the Chinese and Japanese tables.
_HAN = (
    (0x2E80, 0x2EFF),  # CJK Radicals Supplement
    (0x2F00, 0x2FDF),  # Kangxi Radicals
    (0x3000, 0x303F),  # CJK Symbols and Punctuation
    (0x31C0, 0x31EF),  # CJK Strokes
    (0x3400, 0x4DBF),  # Extension A
    (0x4E00, 0x9FFF),  # CJK Unified Ideographs
    (0xF900, 0xFAFF),  # Compatibility Ideographs
    (0xFF01, 0xFF60),  # Fullwidth forms
    (0x20000, 0x2A6DF),  # Extension B
    (0x2A700, 0x2EBEF),  # Extensions C-F
    (0x2F800, 0x2FA1F),  # Compatibility Ideographs Supplement
    (0x30000, 0x3134F),  # Extension G
)

CHINESE_RANGES = _HAN + ((0xFF61, 0xFF64),)  # halfwidth CJK punctuation

JAPANESE_RANGES = _HAN + (
    (0x3040, 0x309F),  # Hiragana
    (0x30A0, 0x30FF),  # Katakana
    (0x31F0, 0x31FF),  # Katakana Phonetic Extensions
    (0xFF61, 0xFF9F),  # Halfwidth Katakana and punctuation
    (0x1B000, 0x1B16F),  # Kana Supplement, Extended-A, Small Kana
)

KOREAN_RANGES = (
    (0x1100, 0x11FF),  # Hangul Jamo
    (0x3130, 0x318F),  # Hangul Compatibility Jamo
    (0x3200, 0x321E),  # Parenthesized Hangul
    (0x3260, 0x327E),  # Circled Hangul
    (0xA960, 0xA97F),  # Hangul Jamo Extended-A
    (0xAC00, 0xD7AF),  # Hangul Syllables
    (0xD7B0, 0xD7FF),  # Hangul Jamo Extended-B
    (0xFFA0, 0xFFDC),  # Halfwidth Hangul
)

GREEK_RANGES = (
    (0x0370, 0x03FF),  # Greek and Coptic
    (0x1F00, 0x1FFF),  # Greek Extended
)

RUSSIAN_RANGES = (
    (0x0400, 0x04FF),  # Cyrillic
    (0x0500, 0x052F),  # Cyrillic Supplement
    (0x1C80, 0x1C8F),  # Cyrillic Extended-C
    (0x2DE0, 0x2DFF),  # Cyrillic Extended-A
    (0xA640, 0xA69F),  # Cyrillic Extended-B
)

THAI_RANGES = ((0x0E00, 0x0E7F),)


def _normalise_ranges(ranges: tuple[tuple[int, int], ...]) -> tuple[tuple[int, int], ...]:
    """Sort ranges and merge the ones that touch or overlap."""
    merged: list[list[int]] = []
    for start, end in sorted(ranges):
        if start > end:
            raise ValueError(f"Invalid codepoint range: {start:#x}-{end:#x}")
        if merged and start <= merged[-1][1] + 1:
            merged[-1][1] = max(merged[-1][1], end)
        else:
            merged.append([start, end])
    return tuple((start, end) for start, end in merged)


@dataclass(frozen=True)
class ScriptPredicate:
    """Membership test for one script.

    ``name`` is the display name used in messages and ``rule_id`` the lint
    rule identifier (``no-<name>-character``).
    """

    name: str
    rule_id: str
    ranges: tuple[tuple[int, int], ...]
    _starts: tuple[int, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        ranges = _normalise_ranges(tuple(self.ranges))
        object.__setattr__(self, "ranges", ranges)
        object.__setattr__(self, "_starts", tuple(start for start, _ in ranges))

    def is_restricted(self, char: str | int) -> bool:
        codepoint = char if isinstance(char, int) else ord(char)
        index = bisect_right(self._starts, codepoint) - 1
        return index >= 0 and codepoint <= self.ranges[index][1]

    def __call__(self, char: str | int) -> bool:
        return self.is_restricted(char)

    def contains_any(self, text: str) -> bool:
        return any(self.is_restricted(ch) for ch in text)


def _predicate(name: str, ranges: tuple[tuple[int, int], ...]) -> ScriptPredicate:
    return ScriptPredicate(name=name, rule_id=f"no-{name.lower()}-character", ranges=ranges)


CHINESE = _predicate("Chinese", CHINESE_RANGES)
JAPANESE = _predicate("Japanese", JAPANESE_RANGES)
KOREAN = _predicate("Korean", KOREAN_RANGES)
GREEK = _predicate("Greek", GREEK_RANGES)
RUSSIAN = _predicate("Russian", RUSSIAN_RANGES)
THAI = _predicate("Thai", THAI_RANGES)

SCRIPTS: dict[str, ScriptPredicate] = {
    script.name.lower(): script for script in (CHINESE, JAPANESE, KOREAN, GREEK, RUSSIAN, THAI)
}


def get_script(name: str) -> ScriptPredicate:
    """Look a script up by display name or rule id (case-insensitive)."""

    key = name.strip().lower()
    if key in SCRIPTS:
        return SCRIPTS[key]
    for script in SCRIPTS.values():
        if script.rule_id == key:
            return script
    raise UnknownScriptError(
        f"Unknown script {name!r}; expected one of: {', '.join(sorted(SCRIPTS))}"
    )
