"""Checks performed before a run touches any file."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

from .models import RunArguments, ValidationResult

LOGGER = logging.getLogger(__name__)


def validate_arguments(args: RunArguments) -> ValidationResult:
    """Check that the roots can be used together and that every area exists.

    Nesting is checked first so a rejected pairing leaves the filesystem
    untouched. Missing areas are then created; in a dry run they are only
    checked for creatability.

    Args:
        args: Run arguments with resolved roots.

    Returns:
        ValidationResult: Success, or the configuration error to report.
    """
    nesting_problem = _nesting_problem(args.input_root, args.output_base_root)
    if nesting_problem is not None:
        return ValidationResult.failure(nesting_problem)

    for directory in args.data_directories:
        problem = _prepare_directory(directory, create=not args.dry_run)
        if problem is not None:
            return ValidationResult.failure(problem)

    return ValidationResult.success()


def _is_within(path: Path, ancestor: Path) -> bool:
    return path == ancestor or ancestor in path.parents


def _nesting_problem(input_root: Path, output_root: Path) -> Optional[str]:
    if _is_within(output_root, input_root):
        return "The output directory can't be inside the input directory"
    if _is_within(input_root, output_root):
        return "The input directory can't be inside the output directory"
    return None


def _prepare_directory(path: Path, *, create: bool) -> Optional[str]:
    message = f"{path} is not a directory, or it can't be created"
    try:
        if path.is_dir():
            return None
        if path.exists():
            return message
        if create:
            path.mkdir(parents=True, exist_ok=True)
            LOGGER.debug("Created directory %s", path)
        elif not _is_creatable(path):
            return message
    except OSError:
        LOGGER.exception("Unexpected error while preparing %s", path)
        return message
    return None


def _is_creatable(path: Path) -> bool:
    ancestor = path.parent
    while not ancestor.exists():
        if ancestor.parent == ancestor:
            return False
        ancestor = ancestor.parent
    return ancestor.is_dir() and os.access(ancestor, os.W_OK | os.X_OK)


__all__ = ["validate_arguments"]
