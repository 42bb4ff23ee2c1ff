"""Heroic Games Launcher: installed sideloaded games.

Heroic keeps its sideload library in ``sideload_apps/library.json`` and
per-game settings (including user categories) in ``GamesConfig/<app>.json``.
Games are launched through Heroic's URL handler.
"""

from __future__ import annotations

import json
import os
from pathlib import Path

import structlog
from pydantic import ValidationError

from launchrank.errors import ErrorCode, LaunchRankError
from launchrank.models.entry import Entry
from launchrank.models.heroic import HeroicGame, HeroicGameConfig, HeroicLibrary

log = structlog.get_logger()

_DEFAULT_CATEGORIES = ["Game"]
_GAME_ICON = "applications-games"
# Top-level keys of a GamesConfig file that are not game blocks
_CONFIG_META_KEYS = frozenset({"version", "explicit"})


class HeroicLauncher:
    def __init__(self, config_dir: Path | str | None = None) -> None:
        self._config_dir = Path(config_dir).expanduser() if config_dir is not None else None

    @property
    def name(self) -> str:
        return "heroic"

    def config_dir(self) -> Path:
        if self._config_dir is not None:
            return self._config_dir

        home = os.environ.get("HOME")
        if not home:
            raise LaunchRankError(
                ErrorCode.SOURCE_FAILED,
                "HOME environment variable not set",
            )
        return Path(home) / ".config" / "heroic"

    def scan(self) -> list[Entry]:
        config_dir = self.config_dir()
        library_path = config_dir / "sideload_apps" / "library.json"

        if not library_path.exists():
            # Heroic not installed, or no sideloaded games
            return []

        library = self.parse_library(library_path)

        entries: list[Entry] = []
        for raw_game in library.games:
            try:
                game = HeroicGame.model_validate(raw_game)
            except ValidationError:
                log.debug("heroic_game_invalid", app_name=raw_game.get("app_name"), exc_info=True)
                continue
            if not game.is_installed or game.runner != "sideload":
                continue
            entry = self.game_to_entry(game, config_dir)
            if entry is not None:
                entries.append(entry)

        log.debug("heroic_scan_complete", games=len(library.games), entries=len(entries))
        return entries

    @staticmethod
    def parse_library(path: Path) -> HeroicLibrary:
        try:
            return HeroicLibrary.model_validate_json(path.read_bytes())
        except (OSError, ValidationError) as exc:
            raise LaunchRankError(
                ErrorCode.SOURCE_FAILED,
                f"Cannot parse heroic library {path}: {exc}",
                recoverable=True,
            ) from exc

    def game_to_entry(self, game: HeroicGame, config_dir: Path) -> Entry | None:
        categories = self.load_game_categories(config_dir, game.app_name) or list(
            _DEFAULT_CATEGORIES
        )
        try:
            return Entry(
                name=game.title,
                comment=f"Heroic Game: {game.folder_name}",
                exec=f"xdg-open heroic://launch/sideload/{game.app_name}",
                icon=_GAME_ICON,
                categories=categories,
                path=f"heroic-sideload-{game.app_name}",
            )
        except ValidationError:
            return None

    @staticmethod
    def load_game_categories(config_dir: Path, app_name: str) -> list[str]:
        """Categories from the game's config file; empty if there are none.

        The file maps a dynamic key (the app name) to the game block, next to
        bookkeeping keys such as ``version``.
        """
        config_path = config_dir / "GamesConfig" / f"{app_name}.json"
        try:
            raw = json.loads(config_path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return []
        except (OSError, ValueError):
            log.debug("heroic_game_config_unreadable", path=str(config_path), exc_info=True)
            return []

        if not isinstance(raw, dict):
            return []

        for key, value in raw.items():
            if key in _CONFIG_META_KEYS:
                continue
            try:
                game_config = HeroicGameConfig.model_validate(value)
            except ValidationError:
                continue
            if game_config.categories:
                return game_config.categories

        return []
