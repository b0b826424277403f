"""Data models produced by the ingestion layer."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from pydantic import BaseModel

from phototimeline.indexing import ContentIndex


class ExtractedMetadata(BaseModel):
    """Hash and capture date read from a single file."""

    content_hash: str
    created_on: datetime


@dataclass(slots=True)
class LoadResult:
    """Outcome of loading a directory tree.

    Attributes:
        index: Records for every file with usable metadata.
        invalid: Paths of files without usable metadata, in traversal order.
    """

    index: ContentIndex = field(default_factory=ContentIndex)
    invalid: list[Path] = field(default_factory=list)


__all__ = ["ExtractedMetadata", "LoadResult"]
