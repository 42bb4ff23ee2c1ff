"""Tiered search over indexed entries.

Every candidate is classified into one match tier and scored within it.
Results are ordered by tier first, score second, so an exact name match
always beats a prefix match no matter how well a fuzzy hit scored.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import TYPE_CHECKING

from launchrank.models.entry import AppType
from launchrank.search.fuzzy import Matcher
from launchrank.search.index import Indexer, tokenize

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from launchrank.models.entry import Entry
    from launchrank.search.index import Index

# Results scoring below this are dropped
MINIMUM_SCORE = 50

_EXACT_SCORE = 1000
_PREFIX_SCORE = 800
_NAME_CONTAINS_SCORE = 400
_COMMENT_CONTAINS_SCORE = 200
_TOKEN_SCORE = 100
_GENERIC_NAME_BONUS = 100
_CATEGORY_BONUS = 50


class MatchType(IntEnum):
    EXACT = 0
    PREFIX = 1
    FUZZY = 2
    CONTAINS = 3
    TOKEN = 4


@dataclass(frozen=True)
class ScoredEntry:
    entry: Entry
    score: int
    match_type: MatchType


def filter_by_type(entries: Iterable[Entry], app_type: AppType) -> list[Entry]:
    if app_type == AppType.ALL:
        return list(entries)
    return [entry for entry in entries if entry.app_type() == app_type]


def _match_tokens(query_tokens: Sequence[str], target_tokens: Sequence[str]) -> bool:
    return any(qt in tt for qt in query_tokens for tt in target_tokens)


class SearchEngine:
    def __init__(self, entries: Iterable[Entry] = (), matcher: Matcher | None = None) -> None:
        self.indexer = Indexer()
        self.matcher = matcher if matcher is not None else Matcher()
        self.indexer.build(entries)

    def search(self, query: str, app_type: AppType, entries: Sequence[Entry]) -> list[Entry]:
        """Rank ``entries`` against ``query``; an empty query only filters by type."""
        return [scored.entry for scored in self.search_scored(query, app_type, entries)]

    def search_scored(
        self, query: str, app_type: AppType, entries: Sequence[Entry]
    ) -> list[ScoredEntry]:
        if not query:
            return [
                ScoredEntry(entry=entry, score=0, match_type=MatchType.EXACT)
                for entry in filter_by_type(entries, app_type)
            ]

        query_lower = query.lower()
        query_tokens = tokenize(query)

        scored: list[ScoredEntry] = []
        for entry in entries:
            if not entry.matches_type(app_type):
                continue

            index = self.indexer.get(entry.path)
            if index is None:
                continue

            result = self.score_entry(query, query_lower, query_tokens, index)
            if result is None:
                continue
            score, match_type = result
            if score < MINIMUM_SCORE:
                continue

            scored.append(ScoredEntry(entry=entry, score=score, match_type=match_type))

        # list.sort is stable, so equal (tier, score) keeps input order
        scored.sort(key=lambda s: (s.match_type, -s.score))
        return scored

    def score_entry(
        self,
        query: str,
        query_lower: str,
        query_tokens: Sequence[str],
        index: Index,
    ) -> tuple[int, MatchType] | None:
        """Classify one indexed entry. Returns ``None`` when nothing matches."""
        if index.name_normalized == query_lower:
            return _EXACT_SCORE, MatchType.EXACT

        if index.name_normalized.startswith(query_lower):
            return _PREFIX_SCORE, MatchType.PREFIX

        fuzzy = self.matcher.match(query, index.searchable_text)
        if fuzzy is not None:
            score, match_type = fuzzy.score, MatchType.FUZZY
        elif query_lower in index.name_normalized:
            score, match_type = _NAME_CONTAINS_SCORE, MatchType.CONTAINS
        elif query_lower in index.entry.comment.lower():
            score, match_type = _COMMENT_CONTAINS_SCORE, MatchType.CONTAINS
        elif _match_tokens(query_tokens, index.comment_tokens):
            score, match_type = _TOKEN_SCORE, MatchType.TOKEN
        else:
            return None

        # Exact and prefix hits return above without these bonuses
        generic_name = index.entry.generic_name
        if generic_name and query_lower in generic_name.lower():
            score += _GENERIC_NAME_BONUS

        if any(query_lower in cat for cat in index.category_tokens):
            score += _CATEGORY_BONUS

        return score, match_type

    def update_index(self, entry: Entry) -> None:
        self.indexer.add(entry)

    def remove_index(self, path: str) -> None:
        self.indexer.remove(path)
