"""Records stored in content indices."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from pydantic import BaseModel, ConfigDict


class FileRecord(BaseModel):
    """A physical file whose content hash and capture date are known.

    Attributes:
        source: Absolute path identifying the file on disk.
        content_hash: Hex digest of the file bytes; equal digests mean equal content.
        created_on: Capture timestamp used for date-partitioned placement.
    """

    model_config = ConfigDict(frozen=True)

    source: Path
    content_hash: str
    created_on: datetime


__all__ = ["FileRecord"]
