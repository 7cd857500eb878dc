# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for CLI failure reporting and configuration error classification."""

from __future__ import annotations

import pytest

from qlshim.errors import (
    CliConfigErrorCategory,
    ConfigurationError,
    InvocationError,
    MalformedOutputError,
    get_cli_config_category,
    wrap_cli_configuration_error,
)


def test_message_reports_innermost_fatal_error() -> None:
    stderr = (
        "Running queries\n"
        "A fatal error occurred: Outer failure\n"
        "A fatal error occurred: Inner failure\n"
    )
    error = InvocationError("codeql", ["database", "finalize", "/db path"], 2, stderr, "")

    assert str(error) == (
        "Encountered a fatal error while running \"codeql database finalize '/db path'\". "
        "Exit code was 2 and error was: Inner failure. See the logs for more details."
    )
    assert error.argv == ("codeql", "database", "finalize", "/db path")


def test_message_falls_back_to_last_log_line() -> None:
    error = InvocationError("codeql", ["pack", "download"], 1, "line one\nline two\n", "")

    assert "Exit code was 1 and last log line was: line two." in str(error)


def test_message_without_stderr() -> None:
    error = InvocationError("codeql", [], 9, "", "")

    assert "last log line was: n/a." in str(error)


def test_message_lists_autobuild_errors() -> None:
    stderr = "[autobuild] [ERROR] Failed to execute goal compile\n[autobuild] [ERROR] Re-run Maven\n"
    error = InvocationError("autobuild.sh", [], 1, stderr, "")

    assert "encountered the following autobuild errors: Failed to execute goal compile. Re-run Maven." in str(error)
    assert get_cli_config_category(error) is CliConfigErrorCategory.MAVEN_BUILD_FAILED


@pytest.mark.parametrize(
    ("stderr", "category"),
    [
        ("A fatal error occurred: java.lang.OutOfMemoryError: Java heap space", CliConfigErrorCategory.OUT_OF_MEMORY),
        ("Could not auto-detect a suitable build method", CliConfigErrorCategory.NO_BUILD_COMMAND_AUTODETECTED),
        ("'codeql/missing' not found in the registry 'https://ghcr.io/v2/'", CliConfigErrorCategory.NOT_FOUND_IN_REGISTRY),
    ],
)
def test_known_failures_are_classified(stderr: str, category: CliConfigErrorCategory) -> None:
    error = InvocationError("codeql", ["database", "init"], 1, stderr, "")

    assert get_cli_config_category(error) is category
    wrapped = wrap_cli_configuration_error(error)
    assert isinstance(wrapped, ConfigurationError)
    assert wrapped.__cause__ is error


def test_hint_is_appended_to_wrapped_message() -> None:
    error = InvocationError("codeql", ["finalize"], 1, "java.lang.OutOfMemoryError", "")

    assert "larger runner" in str(wrap_cli_configuration_error(error))


def test_unrecognised_errors_are_returned_unchanged() -> None:
    error = InvocationError("codeql", ["finalize"], 1, "disk on fire", "")
    other = MalformedOutputError("bad json")

    assert wrap_cli_configuration_error(error) is error
    assert wrap_cli_configuration_error(other) is other
