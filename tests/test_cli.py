# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI tests for inspecting a CodeQL installation."""

from __future__ import annotations

import json
from pathlib import Path

import click
import typer
from typer.testing import CliRunner

from qlshim.cli import app


def test_version_prints_reported_features(fake_codeql_script: Path) -> None:
    runner = CliRunner()

    result = runner.invoke(app, ["version", "--codeql", str(fake_codeql_script)])

    assert result.exit_code == 0
    assert "[command]" in result.stdout
    payload = json.loads(result.stdout[result.stdout.index("{") :])
    assert payload == {"features": {"buildModeOption": True}, "version": "2.15.2"}


def test_print_version_streams_cli_output(fake_codeql_script: Path) -> None:
    runner = CliRunner()

    result = runner.invoke(app, ["print-version", "--codeql", str(fake_codeql_script)])

    assert result.exit_code == 0
    assert '"version": "2.15.2"' in result.stdout


def test_supports_reflects_strict_version_gate(fake_codeql_script: Path) -> None:
    runner = CliRunner()

    supported = runner.invoke(app, ["supports", "languageAliasing", "--codeql", str(fake_codeql_script)])
    at_minimum = runner.invoke(app, ["supports", "include-query-help", "--codeql", str(fake_codeql_script)])
    flagged = runner.invoke(app, ["supports", "BUILD_MODE_OPTION", "--codeql", str(fake_codeql_script)])

    assert supported.exit_code == 0
    assert "supported" in supported.stdout
    assert at_minimum.exit_code == 1
    assert "unsupported" in at_minimum.stdout
    assert flagged.exit_code == 0


def test_supports_rejects_unknown_capability(fake_codeql_script: Path) -> None:
    runner = CliRunner()

    result = runner.invoke(app, ["supports", "timeTravel", "--codeql", str(fake_codeql_script)])

    assert result.exit_code == 2


def test_check_version_accepts_supported_cli(fake_codeql_script: Path) -> None:
    runner = CliRunner()

    result = runner.invoke(app, ["check-version", "--codeql", str(fake_codeql_script)])

    assert result.exit_code == 0
    assert "satisfies the minimum version 2.11.6" in result.stdout


def test_missing_executable_is_reported(tmp_path: Path) -> None:
    runner = CliRunner()

    result = runner.invoke(app, ["version", "--codeql", str(tmp_path / "missing" / "codeql")])

    assert result.exit_code == 1


def test_extra_options_resolves_from_environment() -> None:
    runner = CliRunner()
    env = {"CODEQL_ACTION_EXTRA_OPTIONS": json.dumps({"*": ["-v"], "database": {"init": ["--overwrite", True]}})}

    result = runner.invoke(app, ["extra-options", "database", "init"], env=env)

    assert result.exit_code == 0
    assert result.stdout.splitlines() == ["-v", "--overwrite", "true"]


def test_extra_options_reports_invalid_tree() -> None:
    runner = CliRunner()
    env = {"CODEQL_ACTION_EXTRA_OPTIONS": json.dumps({"database": {"init": "--overwrite"}})}

    result = runner.invoke(app, ["extra-options", "database", "init"], env=env)

    assert result.exit_code == 1
    assert "not in an array" in result.stdout


def test_commands_are_listed_alphabetically() -> None:
    group = typer.main.get_command(app)

    assert isinstance(group, click.Group)
    assert group.list_commands(click.Context(group)) == [
        "check-version",
        "extra-options",
        "print-version",
        "supports",
        "version",
    ]
