from __future__ import annotations

import os
from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, field_validator

_NIX_MARKERS = (
    "/nix/store",
    ".nix-profile",
    "/run/current-system",
    "/etc/profiles/per-user",
)
_SYSTEM_PREFIXES = ("/usr/share/applications", "/usr/local/share/applications")
_GAME_CATEGORIES = frozenset({"game", "games"})


class AppType(StrEnum):
    """Provenance/category of an entry. ``ALL`` is a filter value only."""

    ALL = "All"
    SYSTEM = "System"
    NIX_SYSTEM = "Nix-Sys"
    NIX_HOME = "Nix-Home"
    FLATPAK = "Flatpak"
    GAME = "Games"
    OTHER = "Other"

    @classmethod
    def is_valid(cls, value: str) -> bool:
        return value in cls._value2member_map_


class Entry(BaseModel):
    """A launchable item: desktop application, launcher game or action."""

    name: str
    generic_name: str = ""
    comment: str = ""
    exec: str  # Command template, field codes left intact
    icon: str = ""
    terminal: bool = False
    categories: list[str] = []
    path: str  # .desktop file path or synthetic key; unique across sources
    last_used: datetime | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("entry: missing name")
        return v

    @field_validator("exec")
    @classmethod
    def validate_exec(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("entry: missing exec command")
        return v

    def app_type(self, home: str | None = None, user: str | None = None) -> AppType:
        """Classify the entry from its path, exec and categories."""
        if "flatpak" in self.path:
            return AppType.FLATPAK

        if self._is_nix_app():
            return self._nix_app_type(
                os.environ.get("HOME", "") if home is None else home,
                os.environ.get("USER", "") if user is None else user,
            )

        if any(cat.lower() in _GAME_CATEGORIES for cat in self.categories):
            return AppType.GAME

        if self.path.startswith(_SYSTEM_PREFIXES):
            return AppType.SYSTEM

        return AppType.OTHER

    def matches_type(self, app_type: AppType) -> bool:
        return app_type == AppType.ALL or self.app_type() == app_type

    def clone(self) -> Entry:
        return self.model_copy(deep=True)

    def _is_nix_app(self) -> bool:
        return any(marker in self.path for marker in _NIX_MARKERS) or "/nix/store" in self.exec

    def _nix_app_type(self, home: str, user: str) -> AppType:
        home_markers = (
            f"{home}/.nix-profile",
            f"{home}/.local/state/nix/profile",
            f"/etc/profiles/per-user/{user}",
        )
        if any(marker in self.path for marker in home_markers):
            return AppType.NIX_HOME
        # /run/current-system, the default profile, or a bare store path
        return AppType.NIX_SYSTEM
