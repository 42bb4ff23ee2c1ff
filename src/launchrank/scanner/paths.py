"""Where desktop entries live, in priority order.

Earlier directories win when the same file name shows up in several places,
so user-level overrides must not be listed after what they override.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable


def search_paths() -> list[Path]:
    home = Path(os.environ.get("HOME", ""))
    user = os.environ.get("USER", "")

    paths = [
        # Standard Linux locations
        Path("/usr/share/applications"),
        Path("/usr/local/share/applications"),
        home / ".local/share/applications",
        # Flatpak exports
        Path("/var/lib/flatpak/exports/share/applications"),
        home / ".local/share/flatpak/exports/share/applications",
        # NixOS system profiles
        Path("/run/current-system/sw/share/applications"),
        Path("/nix/var/nix/profiles/default/share/applications"),
        # NixOS user profiles (home-manager)
        home / ".nix-profile/share/applications",
        home / ".local/state/nix/profiles/profile/share/applications",
        Path(f"/etc/profiles/per-user/{user}/share/applications"),
    ]

    for data_dir in os.environ.get("XDG_DATA_DIRS", "").split(":"):
        if data_dir:
            paths.append(Path(data_dir) / "applications")

    return paths


def filter_existing_paths(paths: Iterable[Path]) -> list[Path]:
    return [path for path in paths if path.exists()]
