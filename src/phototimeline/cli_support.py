"""Helpers shared by CLI commands: logging setup and component wiring."""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from phototimeline.config import TimelineConfig
from phototimeline.config.models import LoggingSettings
from phototimeline.ingestion import (
    DirectoryLoader,
    DirectoryScanner,
    HashComputer,
    MetadataExtractor,
)
from phototimeline.organization import DatePlacer, FileMover
from phototimeline.workflow import OrganizerTask

PACKAGE_LOGGER = "phototimeline"
_FILE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(
    settings: LoggingSettings,
    *,
    console: Console,
    level: Optional[str] = None,
) -> logging.Logger:
    """Attach a Rich console handler and an optional rotating file handler.

    Handlers previously installed by this function are replaced, so repeated
    invocations in one process do not duplicate output.

    Args:
        settings: Logging section of the configuration.
        console: Console that receives log records.
        level: Level name overriding ``settings.level``.

    Returns:
        logging.Logger: The package logger.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    logger.setLevel((level or settings.level).upper())
    logger.propagate = False

    console_handler = RichHandler(
        console=console,
        rich_tracebacks=True,
        show_path=False,
        markup=False,
    )
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(console_handler)

    if settings.file:
        log_path = Path(settings.file).expanduser()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_path,
            maxBytes=settings.max_size_mb * 1024 * 1024,
            backupCount=settings.backup_count,
            encoding="utf-8",
        )
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT))
        logger.addHandler(file_handler)

    return logger


def build_task(config: TimelineConfig) -> OrganizerTask:
    """Assemble an organizer task from configuration."""
    scanner = DirectoryScanner(
        include_hidden=config.scan.include_hidden,
        follow_symlinks=config.scan.follow_symlinks,
    )
    extractor = MetadataExtractor(
        HashComputer(chunk_size=config.metadata.hash_chunk_size_kb * 1024),
        filename_date_fallback=config.metadata.filename_date_fallback,
    )
    mover = FileMover(
        DatePlacer(config.organization.date_format),
        conflict_resolution=config.organization.conflict_resolution,
    )
    return OrganizerTask(
        DirectoryLoader(scanner, extractor),
        mover,
        move_failure_policy=config.organization.on_move_error,
    )


__all__ = ["PACKAGE_LOGGER", "build_task", "configure_logging"]
