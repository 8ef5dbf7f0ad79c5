"""Find maximal runs of restricted characters in a piece of text."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

CharPredicate = Callable[[str], bool]


@dataclass(frozen=True)
class Match:
    """One maximal run of restricted characters, as ``text[start:end]``."""

    text: str
    start: int
    end: int


def find_matches(text: str, is_restricted: CharPredicate) -> list[Match]:
    """Return every maximal run of characters for which ``is_restricted`` holds.

    Any single non-restricted character (ASCII punctuation and spaces included)
    ends the current run.
    """

    matches: list[Match] = []
    run_start: int | None = None
    for index, char in enumerate(text):
        if is_restricted(char):
            if run_start is None:
                run_start = index
            continue
        if run_start is not None:
            matches.append(Match(text=text[run_start:index], start=run_start, end=index))
            run_start = None
    if run_start is not None:
        matches.append(Match(text=text[run_start:], start=run_start, end=len(text)))
    return matches
