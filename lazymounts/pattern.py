"""Filter patterns: inclusion scoring and match-span lookup.

The filesystems panel only asks two questions of a pattern: does a string
match (``score_of_string``), and which characters matched
(``search_string``). Ranking is never used for ordering.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Protocol

WORD_START_CHARS = "/_- ."


@dataclass(frozen=True)
class NameMatch:
    """Score plus the character indices that matched, in increasing order."""

    score: int
    positions: tuple[int, ...]


class Pattern(Protocol):
    def score_of_string(self, candidate: str) -> int | None:
        ...

    def search_string(self, candidate: str) -> NameMatch | None:
        ...


def _fold_chars(text: str) -> str:
    """Case-fold one character at a time so indices still address ``text``."""
    return "".join((ch.casefold() or ch)[0] for ch in text)


def fuzzy_score(query: str, candidate: str) -> int | None:
    """Score ``query`` as an ordered, case-insensitive subsequence of ``candidate``."""
    match = fuzzy_match(query, candidate)
    return None if match is None else match.score


def fuzzy_match(query: str, candidate: str) -> NameMatch | None:
    """Return the greedy subsequence match of ``query`` in ``candidate``.

    Contiguous runs and matches at word starts raise the score, gaps and long
    candidates lower it.
    """
    if not query:
        return NameMatch(0, ())
    query_folded = _fold_chars(query)
    candidate_folded = _fold_chars(candidate)

    score = 0
    prev_idx = -1
    run = 0
    positions: list[int] = []
    for needle in query_folded:
        idx = candidate_folded.find(needle, prev_idx + 1)
        if idx < 0:
            return None
        if idx == prev_idx + 1:
            run += 1
            score += 20 + min(16, run * 4)
        else:
            gap = idx - prev_idx - 1
            run = 0
            score -= min(40, gap * 2)
        if idx == 0 or candidate_folded[idx - 1] in WORD_START_CHARS:
            score += 35
        positions.append(idx)
        prev_idx = idx

    score -= len(candidate_folded) // 5
    return NameMatch(score, tuple(positions))


@dataclass(frozen=True)
class FuzzyPattern:
    """Subsequence pattern, the default for typed filter text."""

    query: str

    def score_of_string(self, candidate: str) -> int | None:
        return fuzzy_score(self.query, candidate)

    def search_string(self, candidate: str) -> NameMatch | None:
        return fuzzy_match(self.query, candidate)


@dataclass(frozen=True)
class RegexPattern:
    """Regular-expression pattern, entered as ``/expr/`` (``/expr/i`` ignores case)."""

    regex: re.Pattern[str]

    def score_of_string(self, candidate: str) -> int | None:
        match = self.search_string(candidate)
        return None if match is None else match.score

    def search_string(self, candidate: str) -> NameMatch | None:
        found = self.regex.search(candidate)
        if found is None:
            return None
        start, end = found.span()
        # Earlier and shorter matches score higher.
        return NameMatch(10_000 - start * 50 - len(candidate), tuple(range(start, end)))


def parse_pattern(raw: str | None) -> Pattern | None:
    """Turn filter input text into a pattern, ``None`` for an empty filter.

    Text of the form ``/expr/`` or ``/expr/i`` is compiled as a regex; an
    invalid regex falls back to fuzzy matching on the raw text.
    """
    if not raw:
        return None
    if len(raw) > 1 and raw.startswith("/"):
        body = raw[1:]
        flags = 0
        if body.endswith("/i"):
            body = body[:-2]
            flags = re.IGNORECASE
        elif body.endswith("/"):
            body = body[:-1]
        if not body:
            return None
        try:
            return RegexPattern(re.compile(body, flags))
        except re.error:
            return FuzzyPattern(raw)
    return FuzzyPattern(raw)


__all__ = [
    "NameMatch",
    "Pattern",
    "FuzzyPattern",
    "RegexPattern",
    "fuzzy_match",
    "fuzzy_score",
    "parse_pattern",
]
