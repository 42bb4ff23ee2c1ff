"""Unit tests for favorites scoring and FavoritesManager."""

from __future__ import annotations

import math
from datetime import timedelta
from typing import TYPE_CHECKING

import pytest

from launchrank.errors import ErrorCode, LaunchRankError
from launchrank.favorites.manager import FavoritesManager
from launchrank.favorites.scoring import (
    EVENT_WEIGHT_SEARCH,
    FAVORITE_THRESHOLD,
    Scorer,
)
from launchrank.models.entry import Entry
from launchrank.models.favorites import AppStats, Event, EventType

if TYPE_CHECKING:
    from pathlib import Path

    from tests.conftest import FakeClock


def _entry(name: str) -> Entry:
    slug = name.lower()
    return Entry(name=name, exec=slug, path=f"/usr/share/applications/{slug}.desktop")


def _stats(clock: FakeClock, *ages_and_types: tuple[float, EventType]) -> AppStats:
    return AppStats(
        path="/x.desktop",
        events=[
            Event(timestamp=clock.now - timedelta(days=age), type=event_type)
            for age, event_type in ages_and_types
        ],
    )


# ---------------------------------------------------------------------------
# Scorer
# ---------------------------------------------------------------------------


class TestScorer:
    def test_no_stats_scores_zero(self, clock: FakeClock) -> None:
        assert Scorer().calculate_score(None, clock.now) == 0.0
        assert Scorer().calculate_score(AppStats(path="/x.desktop"), clock.now) == 0.0

    def test_fresh_launch_is_worth_one(self, clock: FakeClock) -> None:
        stats = _stats(clock, (0, EventType.LAUNCH))
        assert Scorer().calculate_score(stats, clock.now) == pytest.approx(1.0)

    def test_search_weight(self, clock: FakeClock) -> None:
        stats = _stats(clock, (0, EventType.SEARCH))
        assert Scorer().calculate_score(stats, clock.now) == pytest.approx(EVENT_WEIGHT_SEARCH)

    def test_decay(self, clock: FakeClock) -> None:
        stats = _stats(clock, (7, EventType.LAUNCH))
        assert Scorer().calculate_score(stats, clock.now) == pytest.approx(math.exp(-0.7))

    def test_sums_events(self, clock: FakeClock) -> None:
        stats = _stats(clock, (0, EventType.LAUNCH), (0, EventType.SEARCH), (10, EventType.LAUNCH))
        expected = 1.0 + 0.3 + math.exp(-1.0)
        assert Scorer().calculate_score(stats, clock.now) == pytest.approx(expected)

    def test_ten_fresh_launches_make_a_favorite(self, clock: FakeClock) -> None:
        stats = _stats(clock, *[(0, EventType.LAUNCH)] * 10)
        score = Scorer().calculate_score(stats, clock.now)
        assert score == pytest.approx(10.0)
        assert Scorer.is_favorite(score)

    def test_threshold_is_inclusive(self) -> None:
        assert Scorer.is_favorite(FAVORITE_THRESHOLD)
        assert not Scorer.is_favorite(FAVORITE_THRESHOLD - 0.01)


# ---------------------------------------------------------------------------
# FavoritesManager
# ---------------------------------------------------------------------------


class TestDisabledManager:
    def test_has_no_store(self) -> None:
        manager = FavoritesManager(False)
        assert manager.store is None

    def test_operations_are_noops(self) -> None:
        manager = FavoritesManager(False)
        firefox = _entry("Firefox")
        manager.record_launch(firefox)
        manager.record_search(firefox)
        assert manager.get_score(firefox) == 0.0
        assert manager.is_favorite(firefox) is False
        assert manager.save() is False
        assert manager.cleanup_old_events() == 0
        assert manager.start_background_cleanup() is None

    def test_sort_is_alphabetical(self) -> None:
        manager = FavoritesManager(False)
        entries = [_entry("Zebra"), _entry("Firefox"), _entry("Alacritty")]
        assert [e.name for e in manager.sort_by_favorites(entries)] == [
            "Alacritty",
            "Firefox",
            "Zebra",
        ]


class TestEnabledManager:
    def test_setup_failure(self, tmp_path: Path) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")

        with pytest.raises(LaunchRankError) as exc_info:
            FavoritesManager(True, blocker / "favorites.json")
        assert exc_info.value.code == ErrorCode.SETUP_FAILED

    def test_launches_raise_score(self, manager: FavoritesManager) -> None:
        firefox = _entry("Firefox")
        for _ in range(3):
            manager.record_launch(firefox)
        manager.record_search(firefox)
        assert manager.get_score(firefox) == pytest.approx(3.3)
        assert manager.is_favorite(firefox) is False

    def test_becomes_favorite(self, manager: FavoritesManager) -> None:
        firefox = _entry("Firefox")
        for _ in range(5):
            manager.record_launch(firefox)
        assert manager.is_favorite(firefox) is True

    def test_favorite_fades(self, manager: FavoritesManager, clock: FakeClock) -> None:
        firefox = _entry("Firefox")
        for _ in range(6):
            manager.record_launch(firefox)
        clock.advance(days=7)
        assert manager.is_favorite(firefox) is False

    def test_sort_puts_favorites_first(self, manager: FavoritesManager) -> None:
        zebra, firefox, alacritty = _entry("Zebra"), _entry("Firefox"), _entry("Alacritty")
        for _ in range(10):
            manager.record_launch(firefox)
        # Below the threshold: ordered by name like any non-favorite
        manager.record_launch(zebra)

        result = manager.sort_by_favorites([zebra, firefox, alacritty])
        assert [e.name for e in result] == ["Firefox", "Alacritty", "Zebra"]

    def test_favorites_ordered_by_score_then_name(self, manager: FavoritesManager) -> None:
        alpha, beta, gamma = _entry("Alpha"), _entry("Beta"), _entry("Gamma")
        for _ in range(6):
            manager.record_launch(alpha)
            manager.record_launch(beta)
        for _ in range(9):
            manager.record_launch(gamma)

        result = manager.sort_by_favorites([beta, alpha, gamma])
        assert [e.name for e in result] == ["Gamma", "Alpha", "Beta"]

    def test_save_and_reload(
        self, manager: FavoritesManager, favorites_path: Path, clock: FakeClock
    ) -> None:
        firefox = _entry("Firefox")
        manager.record_launch(firefox)
        assert manager.save() is True

        reloaded = FavoritesManager(True, favorites_path, clock=clock)
        assert reloaded.get_score(firefox) == pytest.approx(1.0)

    def test_background_cleanup(self, manager: FavoritesManager, clock: FakeClock) -> None:
        firefox = _entry("Firefox")
        manager.record_launch(firefox)
        clock.advance(days=100)

        thread = manager.start_background_cleanup()
        assert thread is not None
        thread.join(timeout=5)
        assert not thread.is_alive()
        assert manager.store is not None
        assert manager.store.get_stats(firefox.path) is None

    def test_background_cleanup_logs_errors(
        self, manager: FavoritesManager, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        def boom() -> int:
            raise RuntimeError("boom")

        monkeypatch.setattr(manager, "cleanup_old_events", boom)
        thread = manager.start_background_cleanup()
        assert thread is not None
        thread.join(timeout=5)
        assert not thread.is_alive()


class TestScoringDoesNotCopyHistory:
    def test_sort_reads_scores_in_place(
        self, manager: FavoritesManager, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        firefox, gimp = _entry("Firefox"), _entry("GIMP")
        for _ in range(6):
            manager.record_launch(firefox)
        assert manager.store is not None

        def no_snapshots(path: str) -> None:
            raise AssertionError("sort_by_favorites must not snapshot histories")

        monkeypatch.setattr(manager.store, "get_stats", no_snapshots)

        assert [e.name for e in manager.sort_by_favorites([gimp, firefox])] == ["Firefox", "GIMP"]
        assert manager.get_score(firefox) == pytest.approx(6.0)

    def test_store_score_matches_scorer(self, manager: FavoritesManager, clock: FakeClock) -> None:
        firefox = _entry("Firefox")
        manager.record_launch(firefox)
        manager.record_search(firefox)
        assert manager.store is not None

        scorer = Scorer()
        expected = scorer.calculate_score(manager.store.get_stats(firefox.path), clock.now)
        assert manager.store.score(firefox.path, scorer, clock.now) == pytest.approx(expected)
        assert manager.store.score("/never/seen.desktop", scorer, clock.now) == 0.0
