"""Fixtures shared by unit and integration tests."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from launchrank.models.entry import Entry


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2026, 1, 15, 12, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def sample_entries() -> list[Entry]:
    """A realistic mix of applications across every AppType."""
    return [
        Entry(
            name="Firefox",
            generic_name="Web Browser",
            comment="Browse the World Wide Web",
            exec="firefox %u",
            categories=["Network", "WebBrowser"],
            path="/var/lib/flatpak/exports/share/applications/org.mozilla.firefox.desktop",
        ),
        Entry(
            name="Firefox Developer Edition",
            generic_name="Web Browser",
            comment="Firefox for developers",
            exec="firefox-developer-edition",
            categories=["Network", "WebBrowser", "Development"],
            path="/usr/share/applications/firefox-dev.desktop",
        ),
        Entry(
            name="Thunderbird",
            generic_name="Mail Client",
            comment="Read and write emails",
            exec="thunderbird",
            categories=["Network", "Email"],
            path="/usr/share/applications/thunderbird.desktop",
        ),
        Entry(
            name="Alacritty",
            generic_name="Terminal",
            comment="A fast, cross-platform, OpenGL terminal emulator",
            exec="alacritty",
            categories=["System", "TerminalEmulator"],
            path="/run/current-system/sw/share/applications/alacritty.desktop",
        ),
        Entry(
            name="Visual Studio Code",
            generic_name="Code Editor",
            comment="Code editing. Redefined.",
            exec="code",
            categories=["Development", "IDE"],
            path="/usr/share/applications/code.desktop",
        ),
        Entry(
            name="GIMP",
            generic_name="Image Editor",
            comment="Create images and edit photographs",
            exec="gimp",
            categories=["Graphics", "RasterGraphics"],
            path="/usr/share/applications/gimp.desktop",
        ),
        Entry(
            name="SuperTuxKart",
            generic_name="Racing Game",
            comment="A kart racing game",
            exec="supertuxkart",
            categories=["Game", "ArcadeGame"],
            path="/usr/share/applications/supertuxkart.desktop",
        ),
    ]
