# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Exception taxonomy raised by the CodeQL invocation layer."""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Final


class QlShimError(Exception):
    """Base class for errors surfaced by the invocation layer."""


class ConfigurationError(QlShimError):
    """Raised when the CLI or user supplied configuration cannot be used.

    These errors are user-correctable: an unsupported CLI version, an invalid
    extra-options tree, or a CLI failure with a known configuration cause.
    """


class MalformedOutputError(QlShimError):
    """Raised when CLI output does not parse as the expected structured shape."""


class UnknownCapabilityError(QlShimError, LookupError):
    """Raised when a capability token has no registered resolution rule."""


_FATAL_ERROR_PATTERN: Final[re.Pattern[str]] = re.compile(r"^\s*A fatal error occurred: (?P<message>.+)$", re.MULTILINE)
_AUTOBUILD_ERROR_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^\[autobuild\] \[ERROR\] (?P<message>.+)$", re.MULTILINE
)


def _ensure_ends_in_period(text: str) -> str:
    return text if text.endswith((".", "!", "?")) else f"{text}."


def _pretty_command(cmd: str, args: Sequence[str]) -> str:
    return " ".join(f"'{part}'" if " " in part else part for part in (cmd, *args))


def _summarise_stderr(stderr: str) -> tuple[str, str]:
    """Return a ``(label, text)`` pair describing the most relevant stderr content."""

    fatal = [match.group("message").strip() for match in _FATAL_ERROR_PATTERN.finditer(stderr)]
    if fatal:
        # The CLI nests causes with the outermost error first; the innermost is most specific.
        return "error was", _ensure_ends_in_period(fatal[-1])
    autobuild = [match.group("message").strip() for match in _AUTOBUILD_ERROR_PATTERN.finditer(stderr)]
    if autobuild:
        summary = " ".join(_ensure_ends_in_period(line) for line in autobuild[:10])
        return "encountered the following autobuild errors", summary
    lines = [line.strip() for line in stderr.strip().splitlines() if line.strip()]
    return "last log line was", _ensure_ends_in_period(lines[-1] if lines else "n/a")


class InvocationError(QlShimError):
    """Raised when a CodeQL process exits with a non-zero status."""

    def __init__(
        self,
        cmd: str,
        args: Sequence[str],
        exit_code: int,
        stderr: str,
        stdout: str,
    ) -> None:
        """Initialise the error with the captured process metadata.

        Args:
            cmd: Executable that was launched.
            args: Full argument vector passed to the executable.
            exit_code: Non-zero exit status reported by the process.
            stderr: Bounded tail of the process standard error stream.
            stdout: Complete standard output captured from the process.
        """

        label, detail = _summarise_stderr(stderr)
        super().__init__(
            f'Encountered a fatal error while running "{_pretty_command(cmd, args)}". '
            f"Exit code was {exit_code} and {label}: {detail} See the logs for more details."
        )
        self.cmd = cmd
        self.cli_args = tuple(args)
        self.exit_code = exit_code
        self.stderr = stderr
        self.stdout = stdout

    @property
    def argv(self) -> tuple[str, ...]:
        """Return the full argument vector including the executable."""

        return (self.cmd, *self.cli_args)


class CliConfigErrorCategory(str, Enum):
    """Enumerate CLI failures known to be caused by user configuration."""

    EXTERNAL_REPOSITORY_CLONE_FAILED = "ExternalRepositoryCloneFailed"
    GRADLE_BUILD_FAILED = "GradleBuildFailed"
    INCOMPATIBLE_WITH_ACTION_VERSION = "IncompatibleWithActionVersion"
    INIT_CALLED_TWICE = "InitCalledTwice"
    INVALID_SOURCE_ROOT = "InvalidSourceRoot"
    MAVEN_BUILD_FAILED = "MavenBuildFailed"
    NO_BUILD_COMMAND_AUTODETECTED = "NoBuildCommandAutodetected"
    NO_SOURCE_CODE_SEEN = "NoSourceCodeSeen"
    NOT_FOUND_IN_REGISTRY = "NotFoundInRegistry"
    OUT_OF_MEMORY = "OutOfMemory"
    UNSUPPORTED_BUILD_MODE = "UnsupportedBuildMode"


@dataclass(frozen=True, slots=True)
class CliErrorMatcher:
    """Describe how to recognise one configuration error category."""

    category: CliConfigErrorCategory
    patterns: tuple[re.Pattern[str], ...] = ()
    exit_code: int | None = None
    hint: str | None = None

    def matches(self, error: InvocationError) -> bool:
        """Return ``True`` when ``error`` belongs to this category."""

        if self.exit_code is not None and error.exit_code == self.exit_code:
            return True
        text = f"{error}\n{error.stderr}"
        return any(pattern.search(text) for pattern in self.patterns)


CLI_CONFIG_ERRORS: Final[tuple[CliErrorMatcher, ...]] = (
    CliErrorMatcher(
        CliConfigErrorCategory.EXTERNAL_REPOSITORY_CLONE_FAILED,
        (re.compile(r"Failed to clone external Git repository"),),
    ),
    CliErrorMatcher(
        CliConfigErrorCategory.GRADLE_BUILD_FAILED,
        (re.compile(r"\[autobuild\] FAILURE: Build failed with an exception\."),),
    ),
    CliErrorMatcher(
        CliConfigErrorCategory.INCOMPATIBLE_WITH_ACTION_VERSION,
        (re.compile(r"is not compatible with this CodeQL CLI"),),
    ),
    CliErrorMatcher(
        CliConfigErrorCategory.INIT_CALLED_TWICE,
        (re.compile(r"Refusing to create databases .* but could not process any of it"),),
        hint='Is the "init" step called twice in the same job?',
    ),
    CliErrorMatcher(
        CliConfigErrorCategory.INVALID_SOURCE_ROOT,
        (re.compile(r"Invalid source root"),),
    ),
    CliErrorMatcher(
        CliConfigErrorCategory.MAVEN_BUILD_FAILED,
        (re.compile(r"\[autobuild\] \[ERROR\] Failed to execute goal"),),
    ),
    CliErrorMatcher(
        CliConfigErrorCategory.NO_BUILD_COMMAND_AUTODETECTED,
        (
            re.compile(r"Could not auto-detect a suitable build method"),
            re.compile(r"Could not detect a suitable build command for the source checkout"),
        ),
    ),
    CliErrorMatcher(
        CliConfigErrorCategory.NO_SOURCE_CODE_SEEN,
        (re.compile(r"CodeQL detected code written in .* but could not process any of it"),),
        exit_code=32,
    ),
    CliErrorMatcher(
        CliConfigErrorCategory.NOT_FOUND_IN_REGISTRY,
        (re.compile(r"'.*' not found in the registry '.*'"),),
    ),
    CliErrorMatcher(
        CliConfigErrorCategory.OUT_OF_MEMORY,
        (re.compile(r"java\.lang\.OutOfMemoryError"),),
        hint="Consider lowering the RAM limit passed to the analysis or using a larger runner.",
    ),
    CliErrorMatcher(
        CliConfigErrorCategory.UNSUPPORTED_BUILD_MODE,
        (re.compile(r"does not support the .* build mode\. Please try using one of the following build modes instead"),),
    ),
)


def get_cli_config_category(error: InvocationError) -> CliConfigErrorCategory | None:
    """Return the configuration error category for ``error`` when one is known."""

    for matcher in CLI_CONFIG_ERRORS:
        if matcher.matches(error):
            return matcher.category
    return None


def wrap_cli_configuration_error(error: Exception) -> Exception:
    """Return a :class:`ConfigurationError` when ``error`` has a known user-correctable cause.

    Args:
        error: Exception raised while invoking the CLI.

    Returns:
        Exception: A configuration error wrapping ``error`` when its cause is
        recognised; otherwise ``error`` itself.
    """

    if not isinstance(error, InvocationError):
        return error
    for matcher in CLI_CONFIG_ERRORS:
        if not matcher.matches(error):
            continue
        message = str(error)
        if matcher.hint:
            message = f"{message} {matcher.hint}"
        wrapped = ConfigurationError(message)
        wrapped.__cause__ = error
        return wrapped
    return error


__all__ = [
    "CLI_CONFIG_ERRORS",
    "CliConfigErrorCategory",
    "CliErrorMatcher",
    "ConfigurationError",
    "InvocationError",
    "MalformedOutputError",
    "QlShimError",
    "UnknownCapabilityError",
    "get_cli_config_category",
    "wrap_cli_configuration_error",
]
