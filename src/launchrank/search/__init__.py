from __future__ import annotations

from launchrank.search.engine import MINIMUM_SCORE, MatchType, ScoredEntry, SearchEngine
from launchrank.search.fuzzy import Matcher, MatchResult, levenshtein_distance
from launchrank.search.index import Index, Indexer, tokenize

__all__ = [
    "MINIMUM_SCORE",
    "MatchType",
    "ScoredEntry",
    "SearchEngine",
    "Matcher",
    "MatchResult",
    "levenshtein_distance",
    "Index",
    "Indexer",
    "tokenize",
]
