from __future__ import annotations

from launchrank.favorites.manager import FavoritesManager
from launchrank.favorites.scoring import (
    DECAY_LAMBDA,
    EVENT_WEIGHT_LAUNCH,
    EVENT_WEIGHT_SEARCH,
    FAVORITE_THRESHOLD,
    Scorer,
)
from launchrank.favorites.store import MAX_EVENTS, RETENTION_DAYS, FavoritesStore

__all__ = [
    "FavoritesManager",
    "FavoritesStore",
    "Scorer",
    "DECAY_LAMBDA",
    "EVENT_WEIGHT_LAUNCH",
    "EVENT_WEIGHT_SEARCH",
    "FAVORITE_THRESHOLD",
    "MAX_EVENTS",
    "RETENTION_DAYS",
]
