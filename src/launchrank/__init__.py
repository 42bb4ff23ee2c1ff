"""launchrank: discovery, fuzzy ranking and usage-weighted favorites for launchable entries."""

from __future__ import annotations

__version__ = "0.1.0"
