"""File discovery utilities."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from .errors import ScanError

LOGGER = logging.getLogger(__name__)


def _is_hidden(name: str) -> bool:
    return name.startswith(".")


class DirectoryScanner:
    """Enumerate regular files under a root in a stable order."""

    def __init__(self, *, include_hidden: bool = True, follow_symlinks: bool = False) -> None:
        self.include_hidden = include_hidden
        self.follow_symlinks = follow_symlinks

    def scan(self, root: Path) -> list[Path]:
        """Return every regular file below ``root``, sorted by path.

        A missing root yields no files.

        Raises:
            ScanError: If ``root`` exists but is not a listable directory.
        """
        root = root.expanduser().resolve()
        if not root.exists():
            return []
        if not root.is_dir():
            raise ScanError(f"{root} is not a directory")
        try:
            with os.scandir(root):
                pass
        except OSError as exc:
            raise ScanError(f"Unable to list {root}: {exc}") from exc

        found: list[Path] = []
        for dirpath, dirnames, filenames in os.walk(root, onerror=self._on_walk_error):
            if not self.include_hidden:
                dirnames[:] = [name for name in dirnames if not _is_hidden(name)]
            current = Path(dirpath)
            for name in filenames:
                if not self.include_hidden and _is_hidden(name):
                    continue
                path = current / name
                if path.is_symlink() and not self.follow_symlinks:
                    LOGGER.debug("Skipping symbolic link %s", path)
                    continue
                if not path.is_file():
                    continue
                found.append(path)

        found.sort()
        return found

    def _on_walk_error(self, error: OSError) -> None:
        LOGGER.warning("Skipping unreadable directory %s: %s", error.filename, error.strerror)


__all__ = ["DirectoryScanner"]
