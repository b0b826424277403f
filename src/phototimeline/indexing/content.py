"""Content-addressed index of file records."""

from __future__ import annotations

from typing import Iterable, Iterator

from .models import FileRecord


class ContentIndex:
    """Map content hashes to the records sharing that content.

    Each hash owns a non-empty bucket whose order is the order in which the
    records were added, which for a loader is the traversal order. Hash keys
    themselves iterate in the order they were first seen.
    """

    def __init__(self) -> None:
        self._buckets: dict[str, list[FileRecord]] = {}

    @classmethod
    def from_records(cls, records: Iterable[FileRecord]) -> "ContentIndex":
        """Build an index by adding ``records`` in order."""
        index = cls()
        for record in records:
            index.add(record)
        return index

    def add(self, record: FileRecord) -> None:
        """Append ``record`` to the bucket for its content hash."""
        self._buckets.setdefault(record.content_hash, []).append(record)

    def extend(self, content_hash: str, records: Iterable[FileRecord]) -> None:
        """Append ``records`` to the bucket for ``content_hash``.

        Records already in the bucket keep their position; the new ones follow
        in the order given. Passing no records leaves the index unchanged.

        Raises:
            ValueError: If a record's hash differs from ``content_hash``.
        """
        incoming = list(records)
        for record in incoming:
            if record.content_hash != content_hash:
                raise ValueError(
                    f"Record {record.source} has hash {record.content_hash}, "
                    f"cannot file it under {content_hash}"
                )
        if incoming:
            self._buckets.setdefault(content_hash, []).extend(incoming)

    def merge(self, other: "ContentIndex") -> "ContentIndex":
        """Return a new index holding this index's buckets with ``other`` folded in."""
        merged = self.copy()
        for content_hash, bucket in other.buckets():
            merged.extend(content_hash, bucket)
        return merged

    def copy(self) -> "ContentIndex":
        clone = ContentIndex()
        clone._buckets = {key: list(bucket) for key, bucket in self._buckets.items()}
        return clone

    def get(self, content_hash: str) -> tuple[FileRecord, ...]:
        """Return the bucket for ``content_hash``, or an empty tuple."""
        return tuple(self._buckets.get(content_hash, ()))

    def buckets(self) -> Iterator[tuple[str, tuple[FileRecord, ...]]]:
        """Yield ``(hash, bucket)`` pairs in first-seen order."""
        for content_hash, bucket in self._buckets.items():
            yield content_hash, tuple(bucket)

    @property
    def record_count(self) -> int:
        """Total number of records across all buckets."""
        return sum(len(bucket) for bucket in self._buckets.values())

    def __contains__(self, content_hash: object) -> bool:
        return content_hash in self._buckets

    def __len__(self) -> int:
        return len(self._buckets)

    def __iter__(self) -> Iterator[str]:
        return iter(self._buckets)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ContentIndex):
            return NotImplemented
        return self._buckets == other._buckets

    def __repr__(self) -> str:
        return f"ContentIndex(hashes={len(self)}, records={self.record_count})"


__all__ = ["ContentIndex"]
