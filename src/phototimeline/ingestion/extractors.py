"""Capture-date and content metadata extraction."""

from __future__ import annotations

import logging
import re
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

from PIL import Image

from .detectors import HashComputer
from .errors import InsufficientMetadataError, MetadataError
from .models import ExtractedMetadata

LOGGER = logging.getLogger(__name__)

EXIF_IFD_POINTER = 0x8769
DATETIME_ORIGINAL = 36867
DATETIME_DIGITIZED = 36868
DATETIME = 306

_EXIF_FORMATS = ("%Y:%m:%d %H:%M:%S", "%Y-%m-%d %H:%M:%S")
_FILENAME_PATTERNS = (
    re.compile(r"(?<!\d)(\d{4})(\d{2})(\d{2})[_-](\d{2})(\d{2})(\d{2})(?!\d)"),
    re.compile(r"(?<!\d)(\d{4})-(\d{2})-(\d{2})(?!\d)"),
)


def parse_exif_datetime(value: Any) -> Optional[datetime]:
    """Parse an EXIF date string, returning None for blank or placeholder values."""
    if isinstance(value, bytes):
        value = value.decode("utf-8", errors="ignore")
    if not isinstance(value, str):
        return None
    text = value.replace("\x00", "").strip()[:19]
    if not text or text.startswith("0000"):
        return None
    for fmt in _EXIF_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None


def parse_filename_datetime(name: str) -> Optional[datetime]:
    """Return a date embedded in a file name such as ``IMG_20200714_101112.jpg``."""
    for pattern in _FILENAME_PATTERNS:
        match = pattern.search(name)
        if match is None:
            continue
        try:
            return datetime(*(int(part) for part in match.groups()))
        except ValueError:
            continue
    return None


class CaptureDateReader:
    """Read the capture timestamp stored in a photo's EXIF block."""

    def read(self, path: Path) -> Optional[datetime]:
        """Return the best available EXIF timestamp, or None.

        ``DateTimeOriginal`` wins over ``DateTimeDigitized``, which wins over
        the IFD0 ``DateTime``. Files Pillow cannot decode yield None.
        """
        try:
            with Image.open(path) as image:
                exif = image.getexif()
                sub_ifd = exif.get_ifd(EXIF_IFD_POINTER)
                candidates = (
                    sub_ifd.get(DATETIME_ORIGINAL, exif.get(DATETIME_ORIGINAL)),
                    sub_ifd.get(DATETIME_DIGITIZED, exif.get(DATETIME_DIGITIZED)),
                    exif.get(DATETIME),
                )
        except (OSError, SyntaxError, ValueError, Image.DecompressionBombError) as exc:
            LOGGER.debug("No EXIF data for %s: %s", path, exc)
            return None

        for raw in candidates:
            parsed = parse_exif_datetime(raw)
            if parsed is not None:
                return parsed
        return None


class MetadataExtractor:
    """Produce the content hash and capture date for a file."""

    def __init__(
        self,
        hasher: HashComputer | None = None,
        date_reader: CaptureDateReader | None = None,
        *,
        filename_date_fallback: bool = False,
    ) -> None:
        self.hasher = hasher or HashComputer()
        self.date_reader = date_reader or CaptureDateReader()
        self.filename_date_fallback = filename_date_fallback

    def extract(self, path: Path) -> ExtractedMetadata:
        """Return metadata for ``path``.

        Raises:
            InsufficientMetadataError: If no capture date can be found.
            MetadataError: If the file cannot be read for hashing.
        """
        created_on = self.date_reader.read(path)
        if created_on is None and self.filename_date_fallback:
            created_on = parse_filename_datetime(path.name)
        if created_on is None:
            raise InsufficientMetadataError(f"{path}: no capture date found")

        try:
            content_hash = self.hasher.compute(path)
        except OSError as exc:
            raise MetadataError(f"{path}: unable to read file: {exc}") from exc

        return ExtractedMetadata(content_hash=content_hash, created_on=created_on)


__all__ = [
    "CaptureDateReader",
    "MetadataExtractor",
    "parse_exif_datetime",
    "parse_filename_datetime",
]
