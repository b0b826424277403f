"""Build content indices from directory trees."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Optional

from phototimeline.indexing import FileRecord

from .discovery import DirectoryScanner
from .errors import MetadataError
from .extractors import MetadataExtractor
from .models import LoadResult

LOGGER = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]


class DirectoryLoader:
    """Scan a root and index every file by content hash."""

    def __init__(self, scanner: DirectoryScanner, extractor: MetadataExtractor) -> None:
        self.scanner = scanner
        self.extractor = extractor

    def load(self, root: Path, progress: Optional[ProgressCallback] = None) -> LoadResult:
        """Index the files under ``root``.

        Files are visited in the scanner's sorted order, so bucket order is
        reproducible for an unchanged tree. Files whose metadata cannot be
        extracted are listed in ``invalid`` and kept out of the index. The
        filesystem is not modified.

        Args:
            root: Directory to scan.
            progress: Called as ``progress(index, total)`` after each file, with a
                zero-based index.

        Returns:
            LoadResult: The index and the invalid paths.

        Raises:
            ScanError: If ``root`` cannot be listed.
        """
        paths = self.scanner.scan(root)
        total = len(paths)
        result = LoadResult()

        for position, path in enumerate(paths):
            try:
                metadata = self.extractor.extract(path)
            except MetadataError as exc:
                LOGGER.debug("Invalid metadata: %s", exc)
                result.invalid.append(path)
            else:
                result.index.add(
                    FileRecord(
                        source=path,
                        content_hash=metadata.content_hash,
                        created_on=metadata.created_on,
                    )
                )
            if progress is not None:
                progress(position, total)

        return result


__all__ = ["DirectoryLoader", "ProgressCallback"]
