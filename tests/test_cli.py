"""Smoke tests for the CLI entrypoint."""

from click.testing import CliRunner

import phototimeline
from phototimeline.cli import cli


def test_cli_help_displays_commands() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["--help"])

    assert result.exit_code == 0
    assert "date-based timeline" in result.output
    assert "org" in result.output
    assert "config" in result.output


def test_org_help_lists_options() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["org", "--help"])

    assert result.exit_code == 0
    assert "--output" in result.output
    assert "--dry-run" in result.output


def test_org_requires_output() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["org", "somewhere"])

    assert result.exit_code != 0
    assert "--output" in result.output


def test_version_option_reports_package_version() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["--version"])

    assert result.exit_code == 0
    assert phototimeline.__version__ in result.output
