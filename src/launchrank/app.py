"""Composition root: settings → logging → launcher registry → scanner."""

from __future__ import annotations

import structlog

from launchrank.config import Settings
from launchrank.logging_config import setup_logging
from launchrank.scanner.launchers import default_registry
from launchrank.scanner.scanner import Scanner

log = structlog.get_logger()


def create_scanner(settings: Settings | None = None) -> Scanner:
    """Build a ready-to-scan ``Scanner``.

    Raises ``pydantic.ValidationError`` for bad configuration and
    ``LaunchRankError`` if the favorites store cannot be set up.
    """
    settings = settings or Settings()
    setup_logging(settings.logging)

    registry = default_registry(settings.launchers)
    log.debug("launchers_registered", launchers=registry.names())

    return Scanner.from_settings(settings, registry)
