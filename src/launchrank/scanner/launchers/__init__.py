from __future__ import annotations

from typing import TYPE_CHECKING

from launchrank.scanner.launchers.heroic import HeroicLauncher
from launchrank.scanner.launchers.registry import GameLauncher, LauncherRegistry

if TYPE_CHECKING:
    from launchrank.config import LaunchersSettings

__all__ = [
    "GameLauncher",
    "LauncherRegistry",
    "HeroicLauncher",
    "default_registry",
]


def default_registry(settings: LaunchersSettings | None = None) -> LauncherRegistry:
    """Registry holding every built-in launcher that is enabled in ``settings``."""
    registry = LauncherRegistry()

    heroic = settings.heroic if settings is not None else None
    if heroic is None or heroic.enabled:
        registry.register(HeroicLauncher(heroic.config_dir if heroic is not None else None))

    return registry
