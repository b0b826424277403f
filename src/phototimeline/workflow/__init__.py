"""Run orchestration: validation, reconciliation and moves."""

from .errors import ConfigurationError
from .models import (
    DUPLICATED_DIRNAME,
    INVALID_DIRNAME,
    ORGANIZED_DIRNAME,
    RunArguments,
    RunSummary,
    ValidationResult,
)
from .progress import ProgressTracker
from .task import MoveFailurePolicy, OrganizerTask
from .validation import validate_arguments

__all__ = [
    "ConfigurationError",
    "DUPLICATED_DIRNAME",
    "INVALID_DIRNAME",
    "MoveFailurePolicy",
    "ORGANIZED_DIRNAME",
    "OrganizerTask",
    "ProgressTracker",
    "RunArguments",
    "RunSummary",
    "ValidationResult",
    "validate_arguments",
]
