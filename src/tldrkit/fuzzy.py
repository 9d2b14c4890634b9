"""Subsequence fuzzy matching with editor-style scoring.

A candidate matches when every character of the pattern appears in it in
order (case-insensitively). Among the possible alignments the scorer prefers
characters at the start of the string, right after a separator, at a
camelCase boundary, or adjacent to the previous matched character; leading
and unmatched characters cost points. Results come back best first, with
ties kept in candidate order.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

FIRST_CHAR_MATCH_BONUS = 10
MATCH_FOLLOWING_SEPARATOR_BONUS = 20
CAMEL_CASE_MATCH_BONUS = 20
ADJACENT_MATCH_BONUS = 5
UNMATCHED_LEADING_CHAR_PENALTY = -5
MAX_UNMATCHED_LEADING_CHAR_PENALTY = -15

SEPARATORS = frozenset("/-_ .\\")


@dataclass
class Match:
    text: str
    index: int  # Position of the candidate in the searched sequence
    score: int = 0
    matched_indexes: list[int] = field(default_factory=list)


def _equal_fold(a: str, b: str) -> bool:
    return a.casefold() == b.casefold()


def _score(pattern: str, text: str, index: int) -> Match | None:
    match = Match(text=text, index=index)
    pattern_index = 0
    best_score = -1
    matched_index = -1
    adjacent_bonus = 0
    last = ""
    last_index = 0

    for j, candidate in enumerate(text):
        if pattern_index >= len(pattern):
            break

        if _equal_fold(candidate, pattern[pattern_index]):
            score = 0
            if j == 0:
                score += FIRST_CHAR_MATCH_BONUS
            if last.islower() and candidate.isupper():
                score += CAMEL_CASE_MATCH_BONUS
            if j != 0 and last in SEPARATORS:
                score += MATCH_FOLLOWING_SEPARATOR_BONUS
            if match.matched_indexes and match.matched_indexes[-1] == last_index:
                # Runs of adjacent matches grow their bonus geometrically
                bonus = adjacent_bonus * 2 + ADJACENT_MATCH_BONUS
                score += bonus
                adjacent_bonus += bonus
            if score > best_score:
                best_score = score
                matched_index = j

        next_p = pattern[pattern_index + 1] if pattern_index < len(pattern) - 1 else ""
        next_c = text[j + 1] if j + 1 < len(text) else ""

        # Commit the best position for this pattern char only once the next
        # pattern char is coming up (or the text ends), so later and better
        # placements of the same char still get a chance.
        if (next_p and next_c and _equal_fold(next_p, next_c)) or not next_c:
            if matched_index > -1:
                if not match.matched_indexes:
                    penalty = matched_index * UNMATCHED_LEADING_CHAR_PENALTY
                    best_score += max(penalty, MAX_UNMATCHED_LEADING_CHAR_PENALTY)
                match.score += best_score
                match.matched_indexes.append(matched_index)
                best_score = -1
                pattern_index += 1

        last_index = j
        last = candidate

    match.score += len(match.matched_indexes) - len(text)
    if len(match.matched_indexes) != len(pattern):
        return None
    return match


def find(pattern: str, candidates: Sequence[str]) -> list[Match]:
    """Rank ``candidates`` against ``pattern``. Non-matches are dropped."""
    if not pattern:
        return []

    matches = [m for i, text in enumerate(candidates) if (m := _score(pattern, text, i))]
    # sorted() is stable, so equal scores keep candidate order
    return sorted(matches, key=lambda m: m.score, reverse=True)
