"""JSON-file store of per-entry usage history.

Reads run concurrently under a shared lock; ``record_event``,
``cleanup_old_events``, ``load`` and ``save`` take the lock exclusively.

Nothing is written on mutation. Callers checkpoint with ``save()``, which
only touches the disk when something changed since the last successful save.
"""

from __future__ import annotations

import os
from datetime import datetime, timedelta
from typing import TYPE_CHECKING

import structlog
from pydantic import ValidationError

from launchrank.errors import ErrorCode, LaunchRankError
from launchrank.locks import ReadWriteLock
from launchrank.models.favorites import AppStats, AppStatsList, Event, utcnow

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

    from launchrank.favorites.scoring import Scorer
    from launchrank.models.favorites import EventType

log = structlog.get_logger()

MAX_EVENTS = 1000
RETENTION_DAYS = 90


class FavoritesStore:
    def __init__(self, path: Path, *, clock: Callable[[], datetime] = utcnow) -> None:
        """Create the parent directory and load any existing history.

        Raises ``OSError`` if the directory cannot be created and
        ``LaunchRankError`` if an existing file cannot be read or decoded.
        """
        self._path = path
        self._clock = clock
        self._stats: dict[str, AppStats] = {}
        self._dirty = False
        self._lock = ReadWriteLock()

        path.parent.mkdir(parents=True, exist_ok=True)
        self.load()

    @property
    def path(self) -> Path:
        return self._path

    @property
    def dirty(self) -> bool:
        with self._lock.read():
            return self._dirty

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def load(self) -> None:
        """Merge the on-disk history into memory. A missing file is not an error."""
        try:
            data = self._path.read_bytes()
        except FileNotFoundError:
            return
        except OSError as exc:
            raise LaunchRankError(
                ErrorCode.PERSISTENCE_FAILED,
                f"Cannot read favorites file {self._path}: {exc}",
                recoverable=True,
            ) from exc

        try:
            stats_list = AppStatsList.validate_json(data)
        except ValidationError as exc:
            raise LaunchRankError(
                ErrorCode.PERSISTENCE_FAILED,
                f"Corrupt favorites file {self._path}: {exc.error_count()} validation error(s)",
            ) from exc

        with self._lock.write():
            for stats in stats_list:
                self._stats[stats.path] = stats

        log.debug("favorites_loaded", path=str(self._path), entries=len(stats_list))

    def save(self) -> bool:
        """Write the history if it changed. Returns whether a write happened."""
        with self._lock.write():
            if not self._dirty:
                return False

            payload = AppStatsList.dump_json(list(self._stats.values()), indent=2)
            try:
                self._write(payload)
            except OSError as exc:
                raise LaunchRankError(
                    ErrorCode.PERSISTENCE_FAILED,
                    f"Cannot write favorites file {self._path}: {exc}",
                    recoverable=True,
                ) from exc

            self._dirty = False

        log.debug("favorites_saved", path=str(self._path))
        return True

    def _write(self, payload: bytes) -> None:
        tmp_path = self._path.with_name(self._path.name + ".tmp")
        try:
            tmp_path.write_bytes(payload)
            os.replace(tmp_path, self._path)
        except OSError:
            tmp_path.unlink(missing_ok=True)
            raise

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get_stats(self, path: str) -> AppStats | None:
        """Return a snapshot of one entry's history, or ``None`` if never seen."""
        with self._lock.read():
            stats = self._stats.get(path)
            return stats.model_copy(deep=True) if stats is not None else None

    def score(self, path: str, scorer: Scorer, now: datetime) -> float:
        """Score one entry's history in place, without copying it."""
        with self._lock.read():
            return scorer.calculate_score(self._stats.get(path), now)

    def all_stats(self) -> dict[str, AppStats]:
        with self._lock.read():
            return {key: stats.model_copy(deep=True) for key, stats in self._stats.items()}

    def __len__(self) -> int:
        with self._lock.read():
            return len(self._stats)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def record_event(self, path: str, event_type: EventType) -> None:
        event = Event(timestamp=self._clock(), type=event_type)
        with self._lock.write():
            stats = self._stats.get(path)
            if stats is None:
                stats = AppStats(path=path)
                self._stats[path] = stats

            stats.events.append(event)
            if len(stats.events) > MAX_EVENTS:
                del stats.events[: len(stats.events) - MAX_EVENTS]

            self._dirty = True

    def cleanup_old_events(self) -> int:
        """Drop events older than the retention window. Returns the number removed.

        Entries left without events are deleted entirely.
        """
        cutoff = self._clock() - timedelta(days=RETENTION_DAYS)
        removed_events = 0
        removed_entries = 0

        with self._lock.write():
            for path in list(self._stats):
                stats = self._stats[path]
                kept = [event for event in stats.events if event.timestamp > cutoff]
                if kept and len(kept) == len(stats.events):
                    continue

                removed_events += len(stats.events) - len(kept)
                if kept:
                    stats.events = kept
                else:
                    del self._stats[path]
                    removed_entries += 1

            if removed_events or removed_entries:
                self._dirty = True

        log.info(
            "favorites_cleanup_complete",
            events_removed=removed_events,
            entries_removed=removed_entries,
        )
        return removed_events
