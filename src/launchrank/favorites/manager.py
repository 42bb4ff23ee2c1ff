from __future__ import annotations

import threading
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING

import structlog

from launchrank.config import _DEFAULT_FAVORITES_PATH
from launchrank.errors import ErrorCode, LaunchRankError
from launchrank.favorites.scoring import Scorer
from launchrank.favorites.store import FavoritesStore
from launchrank.models.favorites import EventType, utcnow

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from launchrank.models.entry import Entry

log = structlog.get_logger()


class FavoritesManager:
    """Usage tracking behind an on/off switch.

    Disabled, the manager holds no store: recording is a no-op, every score
    is zero and ``sort_by_favorites`` reduces to sorting by name.
    """

    def __init__(
        self,
        enabled: bool,
        path: Path | str | None = None,
        *,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self.enabled = enabled
        self.scorer = Scorer()
        self.store: FavoritesStore | None = None
        self._clock = clock

        if not enabled:
            return

        if path is None:
            path = _DEFAULT_FAVORITES_PATH

        try:
            self.store = FavoritesStore(Path(path).expanduser(), clock=clock)
        except OSError as exc:
            raise LaunchRankError(
                ErrorCode.SETUP_FAILED,
                f"Cannot create favorites store at {path}: {exc}",
            ) from exc

    def record_launch(self, entry: Entry) -> None:
        if self.store is None:
            return
        self.store.record_event(entry.path, EventType.LAUNCH)

    def record_search(self, entry: Entry) -> None:
        if self.store is None:
            return
        self.store.record_event(entry.path, EventType.SEARCH)

    def get_score(self, entry: Entry) -> float:
        if self.store is None:
            return 0.0
        return self.store.score(entry.path, self.scorer, self._clock())

    def is_favorite(self, entry: Entry) -> bool:
        if self.store is None:
            return False
        return self.scorer.is_favorite(self.get_score(entry))

    def sort_by_favorites(self, entries: Iterable[Entry]) -> list[Entry]:
        """Favorites first by descending score, then everything else by name.

        This is a hard partition: a favorite always precedes a non-favorite,
        whatever order the input came in.
        """
        if self.store is None:
            return sorted(entries, key=lambda e: e.name)

        now = self._clock()
        keyed: list[tuple[tuple[int, float, str], Entry]] = []
        for entry in entries:
            score = self.store.score(entry.path, self.scorer, now)
            if self.scorer.is_favorite(score):
                keyed.append(((0, -score, entry.name), entry))
            else:
                keyed.append(((1, 0.0, entry.name), entry))

        keyed.sort(key=lambda pair: pair[0])
        return [entry for _, entry in keyed]

    def save(self) -> bool:
        """Checkpoint usage history to disk. Returns whether anything was written."""
        if self.store is None:
            return False
        return self.store.save()

    def cleanup_old_events(self) -> int:
        if self.store is None:
            return 0
        return self.store.cleanup_old_events()

    def start_background_cleanup(self) -> threading.Thread | None:
        """Run the retention sweep on a daemon thread, off the query path."""
        if self.store is None:
            return None

        thread = threading.Thread(
            target=self._cleanup_quietly,
            name="favorites-cleanup",
            daemon=True,
        )
        thread.start()
        return thread

    def _cleanup_quietly(self) -> None:
        try:
            self.cleanup_old_events()
        except Exception:
            # Nobody joins this thread; log instead of dying silently
            log.warning("favorites_cleanup_error", exc_info=True)
