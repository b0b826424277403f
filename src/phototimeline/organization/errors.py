"""Organization errors."""

from __future__ import annotations

from pathlib import Path


class MoveError(Exception):
    """Raised when a file could not be moved; the source is left in place."""

    def __init__(self, message: str, *, source: Path, destination: Path | None = None) -> None:
        super().__init__(message)
        self.source = source
        self.destination = destination
