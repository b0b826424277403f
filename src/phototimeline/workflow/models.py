"""Run arguments and results."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from phototimeline.organization import MoveFailure

from .errors import ConfigurationError

ORGANIZED_DIRNAME = "organized"
DUPLICATED_DIRNAME = "duplicated"
INVALID_DIRNAME = "invalid"


class RunArguments(BaseModel):
    """Roots and switches for a single run.

    The output base root is split into three fixed areas: ``organized/`` for
    the date-partitioned tree, ``duplicated/`` for content already present and
    ``invalid/`` for files without a capture date.
    """

    input_root: Path
    output_base_root: Path
    dry_run: bool = False
    debug: bool = False

    @field_validator("input_root", "output_base_root")
    @classmethod
    def _absolute(cls, value: Path) -> Path:
        return value.expanduser().resolve()

    @property
    def organized_root(self) -> Path:
        return self.output_base_root / ORGANIZED_DIRNAME

    @property
    def duplicated_root(self) -> Path:
        return self.output_base_root / DUPLICATED_DIRNAME

    @property
    def invalid_root(self) -> Path:
        return self.output_base_root / INVALID_DIRNAME

    @property
    def data_directories(self) -> list[Path]:
        return [self.input_root, self.organized_root, self.duplicated_root, self.invalid_root]


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """Outcome of checking run arguments; ``error`` is set when invalid."""

    error: Optional[ConfigurationError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls) -> "ValidationResult":
        return cls()

    @classmethod
    def failure(cls, message: str) -> "ValidationResult":
        return cls(error=ConfigurationError(message))


class RunSummary(BaseModel):
    """Counts describing what a run found and did.

    Attributes:
        input_root: Root that was scanned for new files.
        output_root: Output base root.
        dry_run: Whether mutations were skipped.
        unique_files: Distinct contents across organized and new files.
        already_organized: Distinct contents already in the organized area.
        new_duplicates: New files whose content is already present.
        new_unique: New files to place in the organized tree.
        invalid_input: Input files without usable metadata.
        invalid_output: Organized-area files without usable metadata.
        moved_duplicates: Duplicates moved to the duplicated area.
        moved_invalid: Invalid files moved to the invalid area.
        organized: Unique files moved into the organized tree.
        removed_directories: Empty directories deleted during cleanup.
        failures: Moves that failed and were skipped.
    """

    input_root: Path
    output_root: Path
    dry_run: bool = False
    unique_files: int = 0
    already_organized: int = 0
    new_duplicates: int = 0
    new_unique: int = 0
    invalid_input: int = 0
    invalid_output: int = 0
    moved_duplicates: int = 0
    moved_invalid: int = 0
    organized: int = 0
    removed_directories: int = 0
    failures: List[MoveFailure] = Field(default_factory=list)

    def counts(self) -> dict[str, int]:
        """Return the summary metrics in display order."""
        return {
            "unique": self.unique_files,
            "already_organized": self.already_organized,
            "new_duplicates": self.new_duplicates,
            "new_unique": self.new_unique,
            "invalid": self.invalid_input,
            "moved_duplicates": self.moved_duplicates,
            "moved_invalid": self.moved_invalid,
            "organized": self.organized,
            "failures": len(self.failures),
        }


__all__ = [
    "DUPLICATED_DIRNAME",
    "INVALID_DIRNAME",
    "ORGANIZED_DIRNAME",
    "RunArguments",
    "RunSummary",
    "ValidationResult",
]
