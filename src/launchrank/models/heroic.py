"""Shapes of the Heroic Games Launcher files we read (only the fields we use)."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, field_validator


class HeroicGame(BaseModel):
    runner: str = ""
    app_name: str
    title: str = ""
    folder_name: str = ""
    art_cover: str = ""
    art_square: str = ""
    is_installed: bool = False

    @field_validator(
        "runner", "title", "folder_name", "art_cover", "art_square", mode="before"
    )
    @classmethod
    def null_as_empty(cls, v: Any) -> Any:
        # Heroic writes null for fields it never filled in
        return "" if v is None else v


class HeroicLibrary(BaseModel):
    """sideload_apps/library.json

    Games stay raw here and are validated one at a time, so a single bad
    record does not take the rest of the library with it.
    """

    games: list[dict[str, Any]] = []


class HeroicGameConfig(BaseModel):
    """One game block inside GamesConfig/<app_name>.json"""

    categories: list[str] = []
