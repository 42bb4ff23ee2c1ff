from __future__ import annotations

from launchrank.scanner.desktop import parse_desktop_file
from launchrank.scanner.paths import filter_existing_paths, search_paths
from launchrank.scanner.scanner import Scanner

__all__ = [
    "Scanner",
    "parse_desktop_file",
    "search_paths",
    "filter_existing_paths",
]
