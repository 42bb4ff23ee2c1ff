"""Integration test fixtures.

Builds real desktop-file trees under tmp_path and wires a Scanner against
them with an empty launcher registry, so nothing on the host leaks in.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from launchrank.scanner.launchers import LauncherRegistry
from launchrank.scanner.scanner import Scanner

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path


def desktop_file(
    name: str,
    exec_: str,
    *,
    generic_name: str = "",
    comment: str = "",
    categories: str = "",
) -> str:
    lines = ["[Desktop Entry]", "Type=Application", f"Name={name}", f"Exec={exec_}"]
    if generic_name:
        lines.append(f"GenericName={generic_name}")
    if comment:
        lines.append(f"Comment={comment}")
    if categories:
        lines.append(f"Categories={categories}")
    return "\n".join(lines) + "\n"


@pytest.fixture()
def apps_dir(tmp_path: Path) -> Path:
    """Primary application directory with a small, realistic set of entries."""
    root = tmp_path / "share" / "applications"
    root.mkdir(parents=True)
    (root / "firefox.desktop").write_text(
        desktop_file(
            "Firefox",
            "firefox %u",
            generic_name="Web Browser",
            comment="Browse the World Wide Web",
            categories="Network;WebBrowser;",
        )
    )
    (root / "firefox-developer.desktop").write_text(
        desktop_file(
            "Firefox Developer",
            "firefox-developer %u",
            generic_name="Web Browser",
            comment="Web browser for developers",
            categories="Network;WebBrowser;Development;",
        )
    )
    (root / "nautilus.desktop").write_text(
        desktop_file(
            "File Manager",
            "nautilus --new-window %U",
            generic_name="Files",
            comment="Access and organize files",
            categories="GNOME;Utility;Core;",
        )
    )
    return root


@pytest.fixture()
def make_scanner(tmp_path: Path) -> Callable[..., Scanner]:
    """Factory for scanners that only look at the given directories."""

    def _make(*search_paths: Path, **kwargs: object) -> Scanner:
        kwargs.setdefault("registry", LauncherRegistry())
        kwargs.setdefault("favorites_path", tmp_path / "cache" / "favorites.json")
        return Scanner(search_paths=search_paths, **kwargs)  # type: ignore[arg-type]

    return _make


@pytest.fixture()
def write_desktop() -> Callable[..., Path]:
    """Write a desktop file: ``write_desktop(directory, basename, name, exec_, **fields)``."""

    def _write(directory: Path, basename: str, name: str, exec_: str, **fields: str) -> Path:
        path = directory / basename
        path.write_text(desktop_file(name, exec_, **fields))
        return path

    return _write
