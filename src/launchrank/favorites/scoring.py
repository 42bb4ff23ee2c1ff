"""Time-decayed usage scoring.

score = Σ weight(event.type) · e^(−λ · age_days)

With λ = 0.1 an event's contribution halves roughly every 7 days.
"""

from __future__ import annotations

import math
from datetime import datetime
from typing import TYPE_CHECKING

from launchrank.models.favorites import EventType, utcnow

if TYPE_CHECKING:
    from launchrank.models.favorites import AppStats

EVENT_WEIGHT_LAUNCH = 1.0
EVENT_WEIGHT_SEARCH = 0.3
DECAY_LAMBDA = 0.1
FAVORITE_THRESHOLD = 5.0

_SECONDS_PER_DAY = 86400.0


class Scorer:
    def calculate_score(self, stats: AppStats | None, now: datetime | None = None) -> float:
        if stats is None or not stats.events:
            return 0.0

        now = now or utcnow()
        score = 0.0
        for event in stats.events:
            age_days = (now - event.timestamp).total_seconds() / _SECONDS_PER_DAY
            score += self.event_weight(event.type) * math.exp(-DECAY_LAMBDA * age_days)
        return score

    @staticmethod
    def event_weight(event_type: EventType) -> float:
        if event_type == EventType.LAUNCH:
            return EVENT_WEIGHT_LAUNCH
        if event_type == EventType.SEARCH:
            return EVENT_WEIGHT_SEARCH
        return 0.0

    @staticmethod
    def is_favorite(score: float) -> bool:
        return score >= FAVORITE_THRESHOLD
