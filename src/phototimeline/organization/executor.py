"""Collision-safe file moves and directory cleanup."""

from __future__ import annotations

import errno
import logging
import os
import shutil
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Literal

from .errors import MoveError
from .planner import DatePlacer

LOGGER = logging.getLogger(__name__)

ConflictStrategy = Literal["append_number", "timestamp"]


class FileMover:
    """Move files without overwriting anything and tidy up emptied directories."""

    def __init__(
        self,
        placer: DatePlacer | None = None,
        conflict_resolution: ConflictStrategy = "append_number",
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        if conflict_resolution not in ("append_number", "timestamp"):
            raise ValueError(f"Unsupported conflict strategy: {conflict_resolution}")
        self.placer = placer or DatePlacer()
        self.conflict_resolution = conflict_resolution
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def safe_move(self, destination_directory: Path, source_file: Path) -> Path:
        """Move ``source_file`` into ``destination_directory``.

        The file keeps its name unless that name is taken, in which case a
        suffix is added according to the conflict strategy. The directory is
        created when missing.

        Returns:
            Path: Final location of the file.

        Raises:
            MoveError: If the move failed; the source is then unchanged.
        """
        source = Path(source_file)
        if not source.is_file():
            raise MoveError(f"Source file is missing: {source}", source=source)

        try:
            destination_directory.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise MoveError(
                f"Unable to create {destination_directory}: {exc}",
                source=source,
                destination=destination_directory,
            ) from exc

        target = self.resolve_destination(source, destination_directory / source.name)
        if target == source:
            return source

        try:
            os.rename(source, target)
        except OSError as exc:
            if exc.errno != errno.EXDEV:
                raise MoveError(
                    f"Unable to move {source} to {target}: {exc}",
                    source=source,
                    destination=target,
                ) from exc
            self._move_across_devices(source, target)

        LOGGER.debug("Moved %s -> %s", source, target)
        return target

    def organize_by_date(
        self, destination_directory: Path, source_file: Path, created_on: datetime
    ) -> Path:
        """Move ``source_file`` into the date partition for ``created_on``."""
        directory = self.placer.destination_for(destination_directory, created_on)
        return self.safe_move(directory, source_file)

    def clean_empty_directories(self, root: Path) -> list[Path]:
        """Remove empty directories below ``root``, deepest first.

        ``root`` itself is kept even when empty.

        Returns:
            list[Path]: Directories that were removed.
        """
        root = root.resolve()
        removed: list[Path] = []
        if not root.is_dir():
            return removed

        for dirpath, _dirnames, _filenames in os.walk(root, topdown=False):
            current = Path(dirpath)
            if current == root:
                continue
            try:
                if any(current.iterdir()):
                    continue
                current.rmdir()
            except FileNotFoundError:
                continue
            except OSError as exc:
                LOGGER.warning("Unable to remove directory %s: %s", current, exc)
                continue
            removed.append(current)
            LOGGER.debug("Removed empty directory %s", current)

        return removed

    def resolve_destination(self, source: Path, candidate: Path) -> Path:
        """Return ``candidate`` or the first suffixed variant that is free."""
        if candidate.exists() and candidate.resolve() == source.resolve():
            return source

        base_candidate = candidate
        final_candidate = candidate
        counter = 1
        timestamp_applied = False

        while final_candidate.exists() or final_candidate.is_symlink():
            if self.conflict_resolution == "timestamp" and not timestamp_applied:
                timestamp_applied = True
                suffix = self._clock().strftime("%Y%m%d-%H%M%S")
                base_candidate = candidate.with_name(f"{candidate.stem}-{suffix}{candidate.suffix}")
                final_candidate = base_candidate
                continue
            final_candidate = base_candidate.with_name(
                f"{base_candidate.stem}-{counter}{base_candidate.suffix}"
            )
            counter += 1

        if final_candidate != candidate:
            LOGGER.debug("Name conflict for %s resolved as %s", candidate, final_candidate.name)
        return final_candidate

    def _move_across_devices(self, source: Path, target: Path) -> None:
        handle, temp_name = tempfile.mkstemp(
            prefix=f".{target.name}.", suffix=".partial", dir=target.parent
        )
        os.close(handle)
        temp_path = Path(temp_name)
        try:
            shutil.copy2(source, temp_path)
            if target.exists():
                raise FileExistsError(errno.EEXIST, "Destination appeared during copy", str(target))
            os.rename(temp_path, target)
        except OSError as exc:
            temp_path.unlink(missing_ok=True)
            raise MoveError(
                f"Unable to copy {source} to {target}: {exc}", source=source, destination=target
            ) from exc

        try:
            source.unlink()
        except OSError as exc:
            target.unlink(missing_ok=True)
            raise MoveError(
                f"Unable to remove {source} after copying: {exc}",
                source=source,
                destination=target,
            ) from exc


__all__ = ["ConflictStrategy", "FileMover"]
