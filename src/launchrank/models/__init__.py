from __future__ import annotations

from launchrank.models.entry import AppType, Entry
from launchrank.models.favorites import AppStats, AppStatsList, Event, EventType
from launchrank.models.heroic import HeroicGame, HeroicGameConfig, HeroicLibrary

__all__ = [
    # entry
    "AppType",
    "Entry",
    # favorites
    "EventType",
    "Event",
    "AppStats",
    "AppStatsList",
    # heroic
    "HeroicLibrary",
    "HeroicGame",
    "HeroicGameConfig",
]
