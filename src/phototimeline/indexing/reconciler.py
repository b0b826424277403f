"""Classify newly discovered files against an already organized collection."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from .content import ContentIndex
from .models import FileRecord

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class Reconciliation:
    """New files split into those to organize and those already represented.

    Attributes:
        new_unique: One representative per hash absent from the organized index.
        new_duplicate: Every other new record.
    """

    new_unique: list[FileRecord] = field(default_factory=list)
    new_duplicate: list[FileRecord] = field(default_factory=list)


def reconcile(processed: ContentIndex, to_process: ContentIndex) -> Reconciliation:
    """Split ``to_process`` into new-unique and new-duplicate records.

    A bucket whose hash already exists in ``processed`` is entirely
    duplicate. Otherwise the first record of the bucket, in discovery order,
    is unique and the rest are duplicates. Neither index is modified.

    Args:
        processed: Index built from the organized area.
        to_process: Index built from the input root.

    Returns:
        Reconciliation: Disjoint lists in bucket order.
    """
    result = Reconciliation()
    for content_hash, bucket in to_process.buckets():
        organized = processed.get(content_hash)
        if organized:
            LOGGER.debug(
                "%d new file(s) match %s, already organized", len(bucket), organized[0].source
            )
            result.new_duplicate.extend(bucket)
            continue
        head, *rest = bucket
        result.new_unique.append(head)
        result.new_duplicate.extend(rest)
    return result


def merge_indices(processed: ContentIndex, to_process: ContentIndex) -> ContentIndex:
    """Return the combined index of organized and incoming records."""
    return processed.merge(to_process)


__all__ = ["Reconciliation", "reconcile", "merge_indices"]
