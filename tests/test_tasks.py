"""Tests for the invoke development tasks."""

import importlib.util
from pathlib import Path
from types import ModuleType
from unittest.mock import call

import pytest
from invoke import MockContext, Result

TASKS_FILE = Path(__file__).resolve().parents[1] / "tasks.py"


@pytest.fixture(scope="module")
def tasks_module() -> ModuleType:
    spec = importlib.util.spec_from_file_location("project_tasks", TASKS_FILE)
    assert spec is not None and spec.loader is not None
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def _context() -> MockContext:
    return MockContext(run=Result(), repeat=True)


def test_preview_defaults_to_dry_run(tasks_module: ModuleType) -> None:
    ctx = _context()

    tasks_module.preview(ctx, source="inbox", output="library")

    ctx.run.assert_called_once_with(
        "uv run phototimeline org inbox --output library --dry-run", echo=True, pty=True
    )


def test_preview_apply_moves_files(tasks_module: ModuleType) -> None:
    ctx = _context()

    tasks_module.preview(ctx, source="my photos", output="library", apply=True)

    ctx.run.assert_called_once_with(
        "uv run phototimeline org 'my photos' --output library", echo=True, pty=True
    )


def test_tests_task_forwards_selection(tasks_module: ModuleType) -> None:
    ctx = _context()

    tasks_module.tests(ctx, k="reconcile", options="-x -q")

    ctx.run.assert_called_once_with("uv run pytest -k reconcile -x -q tests", echo=True, pty=True)


def test_ci_runs_lint_types_and_tests(tasks_module: ModuleType) -> None:
    ctx = _context()

    tasks_module.ci(ctx)

    assert ctx.run.call_args_list == [
        call("uv run ruff format --check src tests tasks.py", echo=True, pty=True),
        call("uv run ruff check src tests tasks.py", echo=True, pty=True),
        call("uv run mypy src", echo=True, pty=True),
        call("uv run pytest tests", echo=True, pty=True),
    ]
