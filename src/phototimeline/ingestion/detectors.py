"""Content hashing."""

from __future__ import annotations

import hashlib
from pathlib import Path

DEFAULT_CHUNK_SIZE = 1024 * 1024


class HashComputer:
    """Compute SHA-256 content hashes for deduplication."""

    def __init__(self, chunk_size: int = DEFAULT_CHUNK_SIZE) -> None:
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive")
        self.chunk_size = chunk_size

    def compute(self, path: Path) -> str:
        """Return the hex digest of the file contents.

        Raises:
            OSError: If the file cannot be read.
        """
        hasher = hashlib.sha256()
        with path.open("rb") as handle:
            while True:
                data = handle.read(self.chunk_size)
                if not data:
                    break
                hasher.update(data)
        return hasher.hexdigest()


__all__ = ["DEFAULT_CHUNK_SIZE", "HashComputer"]
