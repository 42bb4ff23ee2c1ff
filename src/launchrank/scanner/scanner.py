"""Entry discovery and the per-keystroke query surface.

``Scanner`` merges desktop files and launcher catalogs into one entry set,
builds the search index over it and composes search results with favorites.
A failing directory, file or launcher is logged and skipped; only failing to
set up the favorites store is fatal.
"""

from __future__ import annotations

import os
from collections import Counter
from pathlib import Path
from typing import TYPE_CHECKING

import structlog

from launchrank.favorites.manager import FavoritesManager
from launchrank.models.entry import AppType
from launchrank.scanner.desktop import parse_desktop_file
from launchrank.scanner.launchers import LauncherRegistry, default_registry
from launchrank.scanner.paths import filter_existing_paths
from launchrank.scanner.paths import search_paths as default_search_paths
from launchrank.search.engine import SearchEngine

if TYPE_CHECKING:
    from collections.abc import Iterable

    from launchrank.config import Settings
    from launchrank.models.entry import Entry

log = structlog.get_logger()

_DESKTOP_SUFFIX = ".desktop"


class Scanner:
    def __init__(
        self,
        *,
        enable_favorites: bool = False,
        scan_game_launchers: bool = True,
        favorites_path: Path | str | None = None,
        registry: LauncherRegistry | None = None,
        search_paths: Iterable[Path] | None = None,
        cleanup_on_scan: bool = True,
    ) -> None:
        """Raises ``LaunchRankError`` (``SETUP_FAILED``) if favorites are enabled
        and the store cannot be created."""
        self.favorites = FavoritesManager(enable_favorites, favorites_path)
        self.scan_game_launchers = scan_game_launchers
        self.registry = registry if registry is not None else default_registry()
        self.cleanup_on_scan = cleanup_on_scan
        self._search_paths = list(search_paths) if search_paths is not None else None
        self._entries: list[Entry] = []
        self._engine: SearchEngine | None = None

    @classmethod
    def from_settings(
        cls, settings: Settings, registry: LauncherRegistry | None = None
    ) -> Scanner:
        return cls(
            enable_favorites=settings.application.enable_favorites,
            scan_game_launchers=settings.application.scan_game_launchers,
            favorites_path=settings.favorites.path,
            registry=registry if registry is not None else default_registry(settings.launchers),
            cleanup_on_scan=settings.favorites.cleanup_on_scan,
        )

    # ------------------------------------------------------------------
    # Discovery
    # ------------------------------------------------------------------

    def scan(self) -> None:
        """Discover entries, index them and apply the initial favorites order."""
        # Shared between desktop basenames and launcher identity keys
        seen: set[str] = set()
        entries: list[Entry] = []

        self._scan_desktop_files(entries, seen)
        if self.scan_game_launchers:
            self._scan_launchers(entries, seen)

        self._entries = self.favorites.sort_by_favorites(entries)
        self._engine = SearchEngine(self._entries)

        log.info("scan_complete", entries=len(self._entries))

        if self.cleanup_on_scan:
            self.favorites.start_background_cleanup()

    def _desktop_roots(self) -> list[Path]:
        paths = self._search_paths if self._search_paths is not None else default_search_paths()
        return filter_existing_paths(paths)

    def _scan_desktop_files(self, entries: list[Entry], seen: set[str]) -> None:
        for root in self._desktop_roots():
            self._scan_directory(root, entries, seen)

    def _scan_directory(self, root: Path, entries: list[Entry], seen: set[str]) -> None:
        def on_error(exc: OSError) -> None:
            log.debug("desktop_dir_unreadable", path=exc.filename, error=str(exc))

        for dirpath, dirnames, filenames in os.walk(root, onerror=on_error):
            dirnames.sort()
            for filename in sorted(filenames):
                # Basename dedup: overlapping roots (XDG_DATA_DIRS) list the same file twice
                if not filename.endswith(_DESKTOP_SUFFIX) or filename in seen:
                    continue

                file_path = Path(dirpath) / filename
                try:
                    entry = parse_desktop_file(file_path)
                except OSError as exc:
                    log.debug("desktop_file_unreadable", path=str(file_path), error=str(exc))
                    continue
                if entry is None:
                    continue

                seen.add(filename)
                entries.append(entry)

    def _scan_launchers(self, entries: list[Entry], seen: set[str]) -> None:
        for launcher in self.registry.get_all():
            try:
                found = launcher.scan()
            except Exception:
                # Third-party catalogs fail in arbitrary ways; one must not sink the scan
                log.warning("launcher_scan_failed", launcher=launcher.name, exc_info=True)
                continue

            added = 0
            for entry in found:
                if entry.path in seen:
                    continue
                seen.add(entry.path)
                entries.append(entry)
                added += 1

            log.debug("launcher_scan_complete", launcher=launcher.name, entries=added)

    # ------------------------------------------------------------------
    # Incremental updates
    # ------------------------------------------------------------------

    def add_entry(self, entry: Entry) -> None:
        """Add or replace an entry (matched by path) without rescanning."""
        self._entries = [e for e in self._entries if e.path != entry.path]
        self._entries.append(entry)
        if self._engine is not None:
            self._engine.update_index(entry)

    def remove_entry(self, path: str) -> None:
        self._entries = [e for e in self._entries if e.path != path]
        if self._engine is not None:
            self._engine.remove_index(path)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_entries(self) -> list[Entry]:
        return list(self._entries)

    def count(self) -> int:
        return len(self._entries)

    def get_entries_by_type(self, app_type: AppType) -> list[Entry]:
        return [entry for entry in self._entries if entry.matches_type(app_type)]

    def get_app_type_counts(self) -> dict[AppType, int]:
        counts: dict[AppType, int] = dict(Counter(entry.app_type() for entry in self._entries))
        counts[AppType.ALL] = len(self._entries)
        return counts

    def filter(self, query: str, app_type: AppType = AppType.ALL) -> list[Entry]:
        """Ranked entries for one keystroke's worth of query.

        Before the first ``scan()`` finishes there is no index, so this falls
        back to plain type filtering of whatever entries exist.
        """
        if self._engine is None:
            return self.get_entries_by_type(app_type)

        results = self._engine.search(query, app_type, self._entries)
        results = self.favorites.sort_by_favorites(results)

        if query and results:
            self.favorites.record_search(results[0])

        return results

    # ------------------------------------------------------------------
    # Usage signals
    # ------------------------------------------------------------------

    def record_launch(self, entry: Entry) -> None:
        self.favorites.record_launch(entry)

    def record_search(self, entry: Entry) -> None:
        self.favorites.record_search(entry)

    def save(self) -> bool:
        return self.favorites.save()
