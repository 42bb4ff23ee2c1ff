"""Subsequence fuzzy matching with Sublime-style heuristic scoring.

The matcher takes the *first* left-to-right alignment of the pattern in the
text, not the best-scoring one: each pattern character binds to its earliest
occurrence after the previous match. Scoring then rewards what that alignment
looks like:

- a base of 10 points per pattern character
- +15 when a match lands on the first character of the text
- +15 for a match directly after the previous one, plus 5 per character of
  the current consecutive run
- word boundaries: +20 after a separator, otherwise +15 on a lower→upper
  camel-case step, otherwise +10 on a digit→non-digit step
- -2 for every skipped character between two matches
- +50 scaled by how much of the text the pattern covers
- a length penalty once the text is more than 3x longer than the pattern

Scoring runs on the lowercased text when matching is case-insensitive, but
``matched_indices`` always point into the original text.

Scores can be negative; callers apply their own cutoff.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from rapidfuzz.distance import Levenshtein

_SEPARATORS = frozenset("-_/.:")


@dataclass(frozen=True)
class MatchResult:
    text: str
    score: int
    matched_indices: list[int] = field(default_factory=list)


def _is_separator(ch: str) -> bool:
    return ch.isspace() or ch in _SEPARATORS


def _lower_with_offsets(text: str) -> tuple[str, list[int]]:
    """Lowercase ``text`` and map each lowered position back to its source index.

    Some characters lowercase to more than one code point (``"İ"`` becomes
    ``"i"`` plus a combining dot), so positions in the lowered string can run
    ahead of those in ``text``.
    """
    lowered: list[str] = []
    offsets: list[int] = []
    for idx, ch in enumerate(text):
        low = ch.lower()
        lowered.append(low)
        offsets.extend([idx] * len(low))
    return "".join(lowered), offsets


class Matcher:
    def __init__(self, *, case_sensitive: bool = False) -> None:
        self.case_sensitive = case_sensitive

    def match(self, pattern: str, text: str) -> MatchResult | None:
        """Return a scored match, or ``None`` if ``pattern`` is not a subsequence of ``text``."""
        if not pattern:
            return MatchResult(text=text, score=0)

        search_pattern = pattern
        search_text = text
        offsets: list[int] | None = None
        if not self.case_sensitive:
            search_pattern = pattern.lower()
            search_text, offsets = _lower_with_offsets(text)

        indices = self._find_matches(search_pattern, search_text)
        if indices is None:
            return None

        score = self._calculate_score(search_pattern, search_text, indices)
        if offsets is not None:
            indices = [offsets[i] for i in indices]

        return MatchResult(text=text, score=score, matched_indices=indices)

    @staticmethod
    def _find_matches(pattern: str, text: str) -> list[int] | None:
        indices: list[int] = []
        pattern_idx = 0
        for text_idx, ch in enumerate(text):
            if pattern_idx == len(pattern):
                break
            if ch == pattern[pattern_idx]:
                indices.append(text_idx)
                pattern_idx += 1

        if pattern_idx < len(pattern):
            return None
        return indices

    @staticmethod
    def _calculate_score(pattern: str, text: str, indices: list[int]) -> int:
        if not indices:
            return 0

        score = len(pattern) * 10
        consecutive = 0

        for i, idx in enumerate(indices):
            if idx == 0:
                score += 15

            if i > 0 and indices[i - 1] == idx - 1:
                consecutive += 1
                score += 15 + consecutive * 5
            else:
                consecutive = 0

            if idx > 0:
                prev_ch = text[idx - 1]
                curr_ch = text[idx]
                if _is_separator(prev_ch):
                    score += 20
                elif prev_ch.islower() and curr_ch.isupper():
                    score += 15
                elif prev_ch.isdigit() and not curr_ch.isdigit():
                    score += 10

            if i > 0:
                gap = idx - indices[i - 1] - 1
                if gap > 0:
                    score -= gap * 2

        score += int(len(pattern) / len(text) * 50)

        length_ratio = len(text) / len(pattern)
        if length_ratio > 3:
            score -= int((length_ratio - 3) * 5)

        return score


def levenshtein_distance(s1: str, s2: str) -> int:
    """Edit distance between two strings, for optional tie-breaking."""
    return Levenshtein.distance(s1, s2)
