"""Shared fixtures for the test suite."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Callable, Iterator, Optional

import pytest
from PIL import Image

EXIF_DATETIME = 306


@pytest.fixture(autouse=True)
def reset_package_logger() -> Iterator[None]:
    """Undo logging configuration applied by CLI runs so caplog keeps working."""
    yield
    logger = logging.getLogger("phototimeline")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture
def make_photo() -> Callable[..., Path]:
    """Return a factory writing small JPEGs, optionally stamped with a capture date.

    Photos written with the same color and date are byte-identical, so they
    share a content hash.
    """

    def _make(
        path: Path,
        taken: Optional[datetime] = None,
        color: tuple[int, int, int] = (200, 40, 40),
    ) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        image = Image.new("RGB", (16, 16), color=color)
        exif = Image.Exif()
        if taken is not None:
            exif[EXIF_DATETIME] = taken.strftime("%Y:%m:%d %H:%M:%S")
        image.save(path, format="JPEG", exif=exif, quality=90)
        return path

    return _make


@pytest.fixture
def snapshot() -> Callable[[Path], dict[str, Optional[bytes]]]:
    """Return a helper mapping every path below a root to its bytes (None for dirs)."""

    def _snapshot(root: Path) -> dict[str, Optional[bytes]]:
        tree: dict[str, Optional[bytes]] = {}
        for path in sorted(root.rglob("*")):
            key = path.relative_to(root).as_posix()
            tree[key] = path.read_bytes() if path.is_file() else None
        return tree

    return _snapshot
