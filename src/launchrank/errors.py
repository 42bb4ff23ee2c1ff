"""Error types shared across the core.

Every failure that crosses a component boundary is a ``LaunchRankError``
carrying a machine-readable ``ErrorCode``. ``recoverable`` tells the caller
whether retrying (or simply continuing) makes sense.
"""

from __future__ import annotations

from enum import StrEnum


class ErrorCode(StrEnum):
    SETUP_FAILED = "SETUP_FAILED"
    SOURCE_FAILED = "SOURCE_FAILED"
    PERSISTENCE_FAILED = "PERSISTENCE_FAILED"


class LaunchRankError(Exception):
    def __init__(self, code: ErrorCode, message: str, *, recoverable: bool = False) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.recoverable = recoverable

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"
