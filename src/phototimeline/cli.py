"""Command line interface for photo-timeline."""

from __future__ import annotations

import difflib
from copy import deepcopy
from dataclasses import dataclass
from pathlib import Path
from typing import Any, NoReturn, Optional

import click
import yaml
from click.core import ParameterSource
from rich.console import Console
from rich.markup import escape
from rich.syntax import Syntax

from phototimeline.cli_support import build_task, configure_logging
from phototimeline.config import (
    STAMP_PREFIX,
    ConfigError,
    ConfigManager,
    TimelineConfig,
    flatten_for_env,
    resolve_with_precedence,
    set_dotted,
)
from phototimeline.ingestion import ScanError
from phototimeline.organization import MoveError
from phototimeline.workflow import ConfigurationError, RunArguments, RunSummary

console = Console()

_ERROR_CODES: tuple[tuple[type[Exception], str], ...] = (
    (ConfigurationError, "invalid_directories"),
    (ConfigError, "config_error"),
    (ScanError, "scan_error"),
    (MoveError, "move_error"),
    (click.ClickException, "cli_error"),
)


@dataclass(frozen=True)
class OutputPolicy:
    """Decide which human-readable lines a command prints.

    ``quiet`` keeps errors only; ``summary_only`` keeps summary lines,
    warnings and errors.
    """

    quiet: bool = False
    summary_only: bool = False

    def allows(self, kind: str) -> bool:
        if kind == "error":
            return True
        if self.quiet:
            return False
        return not self.summary_only or kind in ("summary", "warning")

    def show(self, message: str, kind: str = "detail") -> None:
        if self.allows(kind):
            console.print(message, soft_wrap=True)


def _fail(
    message: str,
    *,
    code: str,
    json_output: bool,
    details: Optional[dict[str, Any]] = None,
    cause: Optional[Exception] = None,
) -> NoReturn:
    """Report a fatal command error and exit with status 1.

    In JSON mode the error is printed on stdout as ``{"error": {...}}``;
    otherwise it goes through click and lands on stderr as ``Error: ...``.
    """
    if json_output:
        error: dict[str, Any] = {"code": code, "message": message}
        if details:
            error["details"] = details
        console.print_json(data={"error": error})
        raise SystemExit(1)

    if isinstance(cause, click.ClickException):
        raise cause
    raise click.ClickException(message) from cause


def _fail_for(exc: Exception, *, json_output: bool) -> NoReturn:
    code = next((code for kind, code in _ERROR_CODES if isinstance(exc, kind)), "internal_error")
    message = str(exc)
    details: Optional[dict[str, Any]] = None
    if isinstance(exc, MoveError):
        message = f"Move failed, aborting: {exc}"
        details = {"source": str(exc.source)}
    elif code == "internal_error":
        message = f"Unexpected error while organizing files: {exc}"
        details = {"exception": type(exc).__name__}
    _fail(message, code=code, json_output=json_output, details=details, cause=exc)


def _output_policy(
    ctx: click.Context,
    config: TimelineConfig,
    *,
    quiet: bool,
    summary_mode: bool,
    json_output: bool,
) -> OutputPolicy:
    """Combine output flags with the configured defaults; explicit flags win.

    Raises:
        click.ClickException: If the requested modes contradict each other.
    """

    def given(name: str) -> bool:
        return ctx.get_parameter_source(name) == ParameterSource.COMMANDLINE

    quiet_on = quiet if given("quiet") else config.cli.quiet_default
    summary_on = summary_mode if given("summary_mode") else config.cli.summary_default

    if json_output:
        if given("quiet") and quiet_on:
            raise click.ClickException("--json and --quiet are mutually exclusive.")
        if given("summary_mode") and summary_on:
            raise click.ClickException("--json and --summary are mutually exclusive.")
        return OutputPolicy()

    if quiet_on and summary_on:
        raise click.ClickException(
            "Quiet and summary output cannot both be enabled; "
            "check the flags and cli.quiet_default / cli.summary_default."
        )
    return OutputPolicy(quiet=quiet_on, summary_only=summary_on)


def _print_summary(summary: RunSummary, policy: OutputPolicy) -> None:
    if summary.failures:
        policy.show("[red]Moves that failed (files left in place):[/red]", "error")
        for failure in summary.failures:
            policy.show(
                f"  - ({failure.phase}) {escape(str(failure.source))}: {escape(failure.reason)}",
                "error",
            )

    if summary.invalid_output:
        policy.show(
            f"[yellow]{summary.invalid_output} files in the organized area lack a capture date "
            "and need to be organized manually.[/yellow]",
            "warning",
        )

    if summary.dry_run:
        policy.show("[yellow]Dry run: no files were moved.[/yellow]", "summary")

    counts = ", ".join(f"{name}={value}" for name, value in summary.counts().items())
    policy.show(
        f"[green]Organization summary for {escape(str(summary.output_root))}: {counts}.[/green]",
        "summary",
    )


def _config_diff(before: str, after: str) -> str:
    def body(text: str) -> list[str]:
        return [line for line in text.splitlines() if not line.startswith(STAMP_PREFIX)]

    return "\n".join(
        difflib.unified_diff(
            body(before), body(after), "config.yaml (before)", "config.yaml (after)", lineterm=""
        )
    )


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="photo-timeline")
def cli() -> None:
    """Organize photos into a date-based timeline and set duplicates aside."""


@cli.command()
@click.argument("source", type=click.Path(path_type=Path))
@click.option(
    "-o",
    "--output",
    required=True,
    type=click.Path(path_type=Path),
    help="Output root; receives organized/, duplicated/ and invalid/.",
)
@click.option("--dry-run", is_flag=True, help="Report what would happen without moving files.")
@click.option("--debug", is_flag=True, help="Enable debug logging.")
@click.option("--json", "json_output", is_flag=True, help="Print the run summary as JSON.")
@click.option("--summary", "summary_mode", is_flag=True, help="Print only summary lines.")
@click.option("--quiet", is_flag=True, help="Print errors only.")
@click.pass_context
def org(
    ctx: click.Context,
    source: Path,
    output: Path,
    dry_run: bool,
    debug: bool,
    json_output: bool,
    summary_mode: bool,
    quiet: bool,
) -> None:
    """Organize the photos under SOURCE into the OUTPUT timeline.

    Files already present in OUTPUT/organized are recognized by content, so
    running the command again over the same SOURCE moves nothing new.
    Logs go to stderr; the summary (or JSON) goes to stdout.
    """
    try:
        config = ConfigManager().load()
        policy = _output_policy(
            ctx, config, quiet=quiet, summary_mode=summary_mode, json_output=json_output
        )

        level = None
        if debug:
            level = "DEBUG"
        elif policy.quiet or policy.summary_only:
            level = "WARNING"
        configure_logging(config.logging, console=Console(stderr=True), level=level)

        args = RunArguments(
            input_root=source,
            output_base_root=output,
            dry_run=dry_run,
            debug=debug,
        )
        summary = build_task(config).run(args)

        if json_output:
            console.print_json(data=summary.model_dump(mode="json"))
        else:
            _print_summary(summary, policy)
    except Exception as exc:
        _fail_for(exc, json_output=json_output)


@cli.group()
def config() -> None:
    """Inspect and change the configuration file."""


@config.command("view")
@click.option("--no-env", is_flag=True, help="Ignore PHOTOTIMELINE__ environment overrides.")
@click.option(
    "--env",
    "as_env",
    is_flag=True,
    help="List settings as PHOTOTIMELINE__ variable assignments instead of YAML.",
)
def config_view(no_env: bool, as_env: bool) -> None:
    """Print the effective configuration as YAML or as environment variables."""
    try:
        effective = ConfigManager().load(include_env=not no_env)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc

    if as_env:
        for name, value in flatten_for_env(effective).items():
            console.print(f"{name}={value}", markup=False, highlight=False, soft_wrap=True)
        return

    rendered = yaml.safe_dump(effective.model_dump(mode="python"), sort_keys=False)
    console.print(Syntax(rendered, "yaml", word_wrap=True))


@config.command("set")
@click.argument("key")
@click.option("--value", required=True, help="YAML literal stored at KEY.")
def config_set(key: str, value: str) -> None:
    """Store VALUE at the dotted KEY, e.g. ``organization.date_format``, and show the diff."""
    try:
        parsed = yaml.safe_load(value)
    except yaml.YAMLError as exc:
        raise click.ClickException(f"Unable to parse value: {exc}") from exc

    manager = ConfigManager()
    try:
        manager.ensure_exists()
        before = manager.read_text()
        stored = manager.load_file_overrides()
        updated = deepcopy(stored)
        set_dotted(updated, key, parsed, origin="config set")
        resolve_with_precedence(defaults=TimelineConfig(), file_overrides=updated)
        if updated == stored:
            console.print("[yellow]No changes applied; the value is already set.[/yellow]")
            return
        manager.save(updated)
        after = manager.read_text()
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc

    console.print(Syntax(_config_diff(before, after), "diff"))
    console.print(f"[green]Updated {escape(key)}.[/green]")


@config.command("edit")
def config_edit() -> None:
    """Edit the configuration file in $EDITOR; the result is validated before saving."""
    manager = ConfigManager()
    try:
        manager.ensure_exists()
        current = manager.read_text()
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc

    edited = click.edit(current, extension=".yaml")
    if edited is None or edited == current:
        console.print("[yellow]Configuration left unchanged.[/yellow]")
        return

    try:
        data = yaml.safe_load(edited)
    except yaml.YAMLError as exc:
        raise click.ClickException(f"Invalid YAML: {exc}") from exc
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise click.ClickException("The configuration must be a mapping of sections.")

    try:
        resolve_with_precedence(defaults=TimelineConfig(), file_overrides=data)
        manager.save(data)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc

    console.print("[green]Configuration updated.[/green]")


def main() -> None:
    """Console script entry point."""
    cli()


if __name__ == "__main__":
    main()
