"""Invoke tasks for photo-timeline development.

Every task shells out to `uv` so the virtual environment used for tests,
linting and ad-hoc organizer runs is the one described by pyproject.toml.
"""

from __future__ import annotations

import shlex
import shutil
from collections.abc import Sequence
from pathlib import Path

from invoke import Collection, Context, task

PROJECT_ROOT = Path(__file__).parent
DIST_DIR = PROJECT_ROOT / "dist"
SOURCES = ("src", "tests", "tasks.py")


def _uv(ctx: Context, args: Sequence[str]) -> None:
    """Run ``uv`` with ``args``, echoing the command."""
    ctx.run(shlex.join(("uv", *args)), echo=True, pty=True)


@task(help={"dev": "Install the dev extra (pytest, ruff, mypy)."})
def sync(ctx: Context, dev: bool = True) -> None:
    """Synchronize the virtual environment with pyproject.toml."""
    args = ["sync"]
    if dev:
        args.extend(["--extra", "dev"])
    _uv(ctx, args)


@task(help={"clean": "Remove existing artifacts from dist/ before building."})
def build(ctx: Context, clean: bool = False) -> None:
    """Build sdist and wheel into dist/."""
    if clean and DIST_DIR.exists():
        shutil.rmtree(DIST_DIR)
    _uv(ctx, ["build"])


@task(
    help={
        "k": "pytest -k expression for test selection.",
        "path": "Path or module to test (defaults to tests/).",
        "options": "Additional flags forwarded verbatim to pytest.",
    }
)
def tests(ctx: Context, k: str = "", path: str = "tests", options: str = "") -> None:
    """Run the pytest suite."""
    args: list[str] = ["run", "pytest"]
    if k:
        args.extend(["-k", k])
    if options:
        args.extend(shlex.split(options))
    args.append(path)
    _uv(ctx, args)


@task(help={"fix": "Apply Ruff auto-fixes.", "check_format": "Run `ruff format --check` first."})
def lint(ctx: Context, fix: bool = False, check_format: bool = False) -> None:
    """Run Ruff over the sources and tests."""
    if check_format:
        _uv(ctx, ["run", "ruff", "format", "--check", *SOURCES])
    args = ["run", "ruff", "check", *SOURCES]
    if fix:
        args.append("--fix")
    _uv(ctx, args)


@task
def mypy(ctx: Context) -> None:
    """Type-check the package."""
    _uv(ctx, ["run", "mypy", "src"])


@task
def ci(ctx: Context) -> None:
    """Replicate the CI checks locally."""
    lint(ctx, check_format=True)
    mypy(ctx)
    tests(ctx)


@task(
    help={
        "source": "Directory holding unsorted photos.",
        "output": "Output root for organized/, duplicated/ and invalid/.",
        "apply": "Actually move files instead of previewing the run.",
    }
)
def preview(ctx: Context, source: str, output: str, apply: bool = False) -> None:
    """Run the organizer against a local collection, in dry-run mode unless --apply."""
    args = ["run", "phototimeline", "org", source, "--output", output]
    if not apply:
        args.append("--dry-run")
    _uv(ctx, args)


namespace = Collection(sync, build, tests, lint, mypy, ci, preview)
