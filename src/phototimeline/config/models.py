"""Configuration models describing photo-timeline settings."""

from __future__ import annotations

import re
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

DATE_TOKENS = {"YYYY": "%Y", "MM": "%m", "DD": "%d"}
_TOKEN_PATTERN = re.compile(r"YYYY|MM|DD")


class TimelineBaseModel(BaseModel):
    """Shared configuration for photo-timeline Pydantic models."""

    model_config = ConfigDict(extra="forbid")


class ScanOptions(TimelineBaseModel):
    """Options governing directory traversal.

    Attributes:
        include_hidden: Whether dot-files and dot-directories are scanned.
        follow_symlinks: Whether symbolic links to files are treated as files.
    """

    include_hidden: bool = True
    follow_symlinks: bool = False


class MetadataOptions(TimelineBaseModel):
    """Options governing hashing and capture-date extraction.

    Attributes:
        hash_chunk_size_kb: Read size used while hashing file contents.
        filename_date_fallback: Whether to parse dates from file names when EXIF has none.
    """

    hash_chunk_size_kb: int = Field(default=1024, gt=0)
    filename_date_fallback: bool = False


class OrganizationOptions(TimelineBaseModel):
    """Settings that govern placement and moves.

    Attributes:
        date_format: Directory pattern built from ``YYYY``, ``MM`` and ``DD`` tokens.
        conflict_resolution: Strategy to avoid name collisions at the destination.
        on_move_error: Whether a failed move is skipped or aborts the run.
    """

    date_format: str = "YYYY/MM"
    conflict_resolution: Literal["append_number", "timestamp"] = "append_number"
    on_move_error: Literal["skip", "abort"] = "skip"

    @field_validator("date_format")
    @classmethod
    def _check_date_format(cls, value: str) -> str:
        segments = value.strip("/").split("/")
        for segment in segments:
            leftover = _TOKEN_PATTERN.sub("", segment).replace("-", "").replace("_", "")
            if leftover or not _TOKEN_PATTERN.search(segment):
                raise ValueError(
                    f"Unsupported date_format segment {segment!r}; use YYYY, MM and DD tokens"
                )
        return value.strip("/")


class LoggingSettings(TimelineBaseModel):
    """Runtime logging configuration.

    Attributes:
        level: Logging verbosity level.
        file: Optional log file path; console logging is always enabled.
        max_size_mb: Maximum log size before rotation.
        backup_count: Number of historical log files to retain.
    """

    level: str = "INFO"
    file: Optional[str] = None
    max_size_mb: int = 10
    backup_count: int = 3

    @field_validator("level")
    @classmethod
    def _check_level(cls, value: str) -> str:
        normalized = value.upper()
        if normalized not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown logging level {value!r}")
        return normalized


class CLIOptions(TimelineBaseModel):
    """CLI behavior defaults and presentation preferences.

    Attributes:
        quiet_default: Whether commands suppress non-error output by default.
        summary_default: Whether commands only print summary lines by default.
    """

    quiet_default: bool = False
    summary_default: bool = False


class TimelineConfig(TimelineBaseModel):
    """Top-level configuration struct for photo-timeline.

    Attributes:
        scan: Directory traversal settings.
        metadata: Hashing and capture-date settings.
        organization: Placement and move settings.
        logging: Logging configuration.
        cli: CLI presentation defaults.
    """

    scan: ScanOptions = Field(default_factory=ScanOptions)
    metadata: MetadataOptions = Field(default_factory=MetadataOptions)
    organization: OrganizationOptions = Field(default_factory=OrganizationOptions)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    cli: CLIOptions = Field(default_factory=CLIOptions)


__all__ = [
    "DATE_TOKENS",
    "TimelineBaseModel",
    "ScanOptions",
    "MetadataOptions",
    "OrganizationOptions",
    "LoggingSettings",
    "CLIOptions",
    "TimelineConfig",
]
