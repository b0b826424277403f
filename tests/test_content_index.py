"""Tests for the content-addressed index."""

from datetime import datetime
from pathlib import Path

import pytest

from phototimeline.indexing import ContentIndex, FileRecord


def _record(name: str, content_hash: str, year: int = 2020) -> FileRecord:
    return FileRecord(
        source=Path("/photos") / name,
        content_hash=content_hash,
        created_on=datetime(year, 1, 1),
    )


def test_from_records_groups_by_hash_in_insertion_order() -> None:
    a, b, c = _record("a.jpg", "h1"), _record("b.jpg", "h2"), _record("c.jpg", "h1")

    index = ContentIndex.from_records([a, b, c])

    assert list(index) == ["h1", "h2"]
    assert index.get("h1") == (a, c)
    assert index.get("h2") == (b,)
    assert len(index) == 2
    assert index.record_count == 3


def test_get_unknown_hash_returns_empty_tuple() -> None:
    index = ContentIndex()

    assert index.get("missing") == ()
    assert "missing" not in index
    assert len(index) == 0


def test_extend_appends_after_existing_records() -> None:
    first, second, third = _record("1.jpg", "h"), _record("2.jpg", "h"), _record("3.jpg", "h")
    index = ContentIndex.from_records([first])

    index.extend("h", [second, third])

    assert index.get("h") == (first, second, third)


def test_extend_with_no_records_leaves_index_unchanged() -> None:
    index = ContentIndex.from_records([_record("1.jpg", "h")])

    index.extend("other", [])

    assert "other" not in index
    assert len(index) == 1


def test_extend_rejects_mismatched_hash() -> None:
    index = ContentIndex()

    with pytest.raises(ValueError):
        index.extend("h1", [_record("x.jpg", "h2")])


def test_merge_returns_new_index_and_keeps_inputs() -> None:
    left = ContentIndex.from_records([_record("a.jpg", "h1")])
    right = ContentIndex.from_records([_record("b.jpg", "h1"), _record("c.jpg", "h2")])

    merged = left.merge(right)

    assert [record.source.name for record in merged.get("h1")] == ["a.jpg", "b.jpg"]
    assert len(merged) == 2
    assert left.record_count == 1
    assert right.record_count == 2


def test_copy_is_independent() -> None:
    original = ContentIndex.from_records([_record("a.jpg", "h1")])
    clone = original.copy()

    clone.add(_record("b.jpg", "h1"))

    assert original.record_count == 1
    assert clone.record_count == 2
    assert original != clone


def test_buckets_follow_first_seen_order() -> None:
    records = [_record("b.jpg", "h2"), _record("a.jpg", "h1"), _record("c.jpg", "h2")]
    index = ContentIndex.from_records(records)

    assert [name for name, _ in index.buckets()] == ["h2", "h1"]
    assert [record.source.name for record in index.get("h2")] == ["b.jpg", "c.jpg"]
    assert "hashes=2" in repr(index)


def test_file_record_is_immutable() -> None:
    record = _record("a.jpg", "h1")

    with pytest.raises(Exception):
        record.content_hash = "other"  # type: ignore[misc]
