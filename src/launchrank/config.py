"""Configuration loading.

Settings are loaded in priority order (highest first):
  1. Environment variables  (LAUNCHRANK__APPLICATION__ENABLE_FAVORITES=true)
  2. launchrank.yaml        (searched in cwd, then the platform config dir)
  3. Hardcoded defaults

The config file is optional; all fields have defaults.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import platformdirs
from pydantic import BaseModel, ConfigDict, field_validator, model_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

_APP_NAME = "launchrank"
_DEFAULT_CACHE_DIR = platformdirs.user_cache_dir(_APP_NAME)
_DEFAULT_FAVORITES_PATH = str(Path(_DEFAULT_CACHE_DIR) / "favorites.json")


def _find_config_file() -> str | None:
    """Return the path of the first launchrank.yaml found, or None."""
    candidates = [
        Path("launchrank.yaml"),
        Path(platformdirs.user_config_dir(_APP_NAME)) / "launchrank.yaml",
    ]
    for path in candidates:
        if path.exists():
            return str(path)
    return None


class ApplicationSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    enable_favorites: bool = False
    scan_game_launchers: bool = True
    # Consumed by the presentation layer only.
    items_per_page: int = 8

    @field_validator("items_per_page")
    @classmethod
    def validate_items_per_page(cls, v: int) -> int:
        if v < 1:
            raise ValueError("items_per_page must be >= 1")
        return v


class FavoritesSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    # None means <cache_dir>/favorites.json, resolved by Settings
    path: str | None = None
    cleanup_on_scan: bool = True


class HeroicSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    enabled: bool = True
    # None means ~/.config/heroic, resolved at scan time
    config_dir: str | None = None


class LaunchersSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    heroic: HeroicSettings = HeroicSettings()


class LoggingSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    format: Literal["json", "text"] = "text"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        # Double-underscore separates nesting: LAUNCHRANK__LOGGING__LEVEL=DEBUG
        env_prefix="LAUNCHRANK__",
        env_nested_delimiter="__",
        yaml_file=_find_config_file(),
        yaml_file_encoding="utf-8",
        extra="forbid",
    )

    cache_dir: str = _DEFAULT_CACHE_DIR
    application: ApplicationSettings = ApplicationSettings()
    favorites: FavoritesSettings = FavoritesSettings()
    launchers: LaunchersSettings = LaunchersSettings()
    logging: LoggingSettings = LoggingSettings()

    @model_validator(mode="after")
    def resolve_favorites_path(self) -> Settings:
        if self.favorites.path is None:
            path = str(Path(self.cache_dir) / "favorites.json")
            self.favorites = self.favorites.model_copy(update={"path": path})
        return self

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
        **kwargs: Any,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            YamlConfigSettingsSource(settings_cls),
            # No .env or secrets-dir sources
        )
