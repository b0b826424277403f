"""Content indexing and reconciliation."""

from .content import ContentIndex
from .models import FileRecord
from .reconciler import Reconciliation, merge_indices, reconcile

__all__ = ["ContentIndex", "FileRecord", "Reconciliation", "merge_indices", "reconcile"]
