from __future__ import annotations

from datetime import UTC, datetime
from enum import StrEnum

from pydantic import BaseModel, TypeAdapter, field_validator


def utcnow() -> datetime:
    """Default clock for usage events: timezone-aware UTC."""
    return datetime.now(UTC)


class EventType(StrEnum):
    LAUNCH = "launch"
    SEARCH = "search"


class Event(BaseModel):
    """A single user interaction with an entry."""

    timestamp: datetime
    type: EventType

    @field_validator("timestamp")
    @classmethod
    def ensure_aware(cls, v: datetime) -> datetime:
        # Naive timestamps are read as UTC so age arithmetic never mixes kinds
        if v.tzinfo is None:
            return v.replace(tzinfo=UTC)
        return v


class AppStats(BaseModel):
    """Usage history for one entry identity. Scores are computed, never stored."""

    path: str  # Entry.path of the tracked entry
    events: list[Event] = []


# On-disk format of the favorites file: a JSON array of AppStats
AppStatsList = TypeAdapter(list[AppStats])
