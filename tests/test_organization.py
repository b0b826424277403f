"""Tests for date placement, collision-safe moves and cleanup."""

import errno
import os
from datetime import datetime
from pathlib import Path

import pytest

from phototimeline.organization import DatePlacer, FileMover, MoveError
from phototimeline.organization import executor as executor_module


def _write(path: Path, content: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


def test_date_placer_default_layout() -> None:
    placer = DatePlacer()

    assert placer.relative_path(datetime(2020, 7, 14, 10, 11, 12)) == Path("2020/07")
    assert placer.destination_for(Path("/out"), datetime(2021, 1, 2)) == Path("/out/2021/01")


def test_date_placer_custom_layout() -> None:
    placer = DatePlacer("YYYY/MM-DD/")

    assert placer.date_format == "YYYY/MM-DD"
    assert placer.relative_path(datetime(2019, 3, 5)) == Path("2019/03-05")


def test_date_placer_rejects_empty_format() -> None:
    with pytest.raises(ValueError):
        DatePlacer("/")


def test_safe_move_keeps_name_and_creates_directory(tmp_path: Path) -> None:
    source = _write(tmp_path / "in" / "a.jpg", "a")
    destination = tmp_path / "out" / "deep" / "dir"

    target = FileMover().safe_move(destination, source)

    assert target == destination / "a.jpg"
    assert target.read_text(encoding="utf-8") == "a"
    assert not source.exists()


def test_safe_move_appends_number_on_collision(tmp_path: Path) -> None:
    destination = tmp_path / "out"
    _write(destination / "a.jpg", "existing")
    _write(destination / "a-1.jpg", "existing too")
    source = _write(tmp_path / "in" / "a.jpg", "new")

    target = FileMover().safe_move(destination, source)

    assert target.name == "a-2.jpg"
    assert (destination / "a.jpg").read_text(encoding="utf-8") == "existing"
    assert (destination / "a-1.jpg").read_text(encoding="utf-8") == "existing too"
    assert target.read_text(encoding="utf-8") == "new"


def test_safe_move_timestamp_strategy(tmp_path: Path) -> None:
    destination = tmp_path / "out"
    _write(destination / "a.jpg", "existing")
    mover = FileMover(
        conflict_resolution="timestamp",
        clock=lambda: datetime(2024, 5, 6, 7, 8, 9),
    )

    first = mover.safe_move(destination, _write(tmp_path / "in1" / "a.jpg", "one"))
    second = mover.safe_move(destination, _write(tmp_path / "in2" / "a.jpg", "two"))

    assert first.name == "a-20240506-070809.jpg"
    assert second.name == "a-20240506-070809-1.jpg"


def test_safe_move_into_own_directory_is_noop(tmp_path: Path) -> None:
    source = _write(tmp_path / "a.jpg", "a")

    target = FileMover().safe_move(tmp_path, source)

    assert target == source
    assert source.read_text(encoding="utf-8") == "a"
    assert sorted(p.name for p in tmp_path.iterdir()) == ["a.jpg"]


def test_safe_move_missing_source_raises(tmp_path: Path) -> None:
    with pytest.raises(MoveError) as excinfo:
        FileMover().safe_move(tmp_path / "out", tmp_path / "ghost.jpg")

    assert excinfo.value.source == tmp_path / "ghost.jpg"
    assert not (tmp_path / "out").exists()


def test_safe_move_unwritable_destination_leaves_source(tmp_path: Path) -> None:
    blocker = _write(tmp_path / "blocker", "file in the way")
    source = _write(tmp_path / "in" / "a.jpg", "a")

    with pytest.raises(MoveError):
        FileMover().safe_move(blocker / "sub", source)

    assert source.read_text(encoding="utf-8") == "a"


def test_safe_move_across_devices(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    source = _write(tmp_path / "in" / "a.jpg", "payload")
    destination = tmp_path / "out"
    real_rename = os.rename

    def _rename(src, dst):
        if Path(src) == source:
            raise OSError(errno.EXDEV, "Invalid cross-device link")
        return real_rename(src, dst)

    monkeypatch.setattr(executor_module.os, "rename", _rename)

    target = FileMover().safe_move(destination, source)

    assert target == destination / "a.jpg"
    assert target.read_text(encoding="utf-8") == "payload"
    assert not source.exists()
    assert [p.name for p in destination.iterdir()] == ["a.jpg"]


def test_organize_by_date_places_into_partition(tmp_path: Path) -> None:
    source = _write(tmp_path / "in" / "a.jpg", "a")
    organized = tmp_path / "organized"

    target = FileMover().organize_by_date(organized, source, datetime(2020, 7, 14))

    assert target == organized / "2020" / "07" / "a.jpg"


def test_clean_empty_directories_removes_nested_empties(tmp_path: Path) -> None:
    (tmp_path / "a" / "b" / "c").mkdir(parents=True)
    (tmp_path / "keep" / "inner").mkdir(parents=True)
    _write(tmp_path / "keep" / "photo.jpg", "p")
    (tmp_path / "empty").mkdir()

    removed = FileMover().clean_empty_directories(tmp_path)

    root = tmp_path.resolve()
    assert set(removed) == {
        root / "a" / "b" / "c",
        root / "a" / "b",
        root / "a",
        root / "keep" / "inner",
        root / "empty",
    }
    assert sorted(p.name for p in tmp_path.iterdir()) == ["keep"]
    assert (tmp_path / "keep" / "photo.jpg").exists()


def test_clean_empty_directories_keeps_root(tmp_path: Path) -> None:
    root = tmp_path / "root"
    root.mkdir()

    assert FileMover().clean_empty_directories(root) == []
    assert root.is_dir()
    assert FileMover().clean_empty_directories(tmp_path / "missing") == []


def test_file_mover_rejects_unknown_strategy() -> None:
    with pytest.raises(ValueError):
        FileMover(conflict_resolution="overwrite")  # type: ignore[arg-type]
