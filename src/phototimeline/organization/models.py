"""Organization data models."""

from __future__ import annotations

from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel

MovePhase = Literal["duplicate", "invalid", "organize"]


class MoveFailure(BaseModel):
    """A move that was reported and skipped.

    Attributes:
        phase: Which group of files the move belonged to.
        source: File that stayed in place.
        destination: Directory the file was headed for.
        reason: Error message describing the failure.
    """

    phase: MovePhase
    source: Path
    destination: Optional[Path] = None
    reason: str


__all__ = ["MoveFailure", "MovePhase"]
