"""Placement, moves and cleanup of organized files."""

from .errors import MoveError
from .executor import ConflictStrategy, FileMover
from .models import MoveFailure, MovePhase
from .planner import DEFAULT_DATE_FORMAT, DatePlacer

__all__ = [
    "ConflictStrategy",
    "DEFAULT_DATE_FORMAT",
    "DatePlacer",
    "FileMover",
    "MoveError",
    "MoveFailure",
    "MovePhase",
]
