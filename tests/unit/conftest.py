"""Unit-specific fixtures (no I/O beyond pytest's tmp_path)."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from launchrank.favorites.manager import FavoritesManager
from launchrank.favorites.store import FavoritesStore

if TYPE_CHECKING:
    from pathlib import Path

    from tests.conftest import FakeClock


@pytest.fixture()
def favorites_path(tmp_path: Path) -> Path:
    return tmp_path / "cache" / "favorites.json"


@pytest.fixture()
def store(favorites_path: Path, clock: FakeClock) -> FavoritesStore:
    """Empty favorites store on a fake clock."""
    return FavoritesStore(favorites_path, clock=clock)


@pytest.fixture()
def manager(favorites_path: Path, clock: FakeClock) -> FavoritesManager:
    return FavoritesManager(True, favorites_path, clock=clock)
