"""Name-keyed registry of launcher scanners.

Launchers are registered explicitly by the composition root (see
``default_registry``) rather than by import side effects. The registry is
normally filled once at startup and only read afterwards, but it stays safe
to mutate under the same reader/writer discipline as the favorites store.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from launchrank.locks import ReadWriteLock

if TYPE_CHECKING:
    from launchrank.models.entry import Entry


@runtime_checkable
class GameLauncher(Protocol):
    """A foreign catalog (game launcher, store client) that yields entries.

    ``scan`` returns an empty list when the launcher is simply not installed
    and raises when its data exists but cannot be read.
    """

    @property
    def name(self) -> str: ...

    def scan(self) -> list[Entry]: ...


class LauncherRegistry:
    def __init__(self) -> None:
        self._launchers: dict[str, GameLauncher] = {}
        self._lock = ReadWriteLock()

    def register(self, launcher: GameLauncher) -> None:
        """Add a launcher, replacing any previous one with the same name."""
        with self._lock.write():
            self._launchers[launcher.name] = launcher

    def unregister(self, name: str) -> None:
        with self._lock.write():
            self._launchers.pop(name, None)

    def clear(self) -> None:
        with self._lock.write():
            self._launchers = {}

    def get(self, name: str) -> GameLauncher | None:
        with self._lock.read():
            return self._launchers.get(name)

    def names(self) -> list[str]:
        with self._lock.read():
            return sorted(self._launchers)

    def get_all(self) -> list[GameLauncher]:
        """All launchers sorted by name, so scan order is deterministic."""
        with self._lock.read():
            return [self._launchers[name] for name in sorted(self._launchers)]

    def __len__(self) -> int:
        with self._lock.read():
            return len(self._launchers)
