# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Discover and memoise the CodeQL CLI version and feature set."""

from __future__ import annotations

import json
from collections.abc import Callable
from threading import Lock
from typing import Final

from packaging.version import InvalidVersion, Version
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import ConfigurationError
from .process import ProcessRunner

VERSION_COMMAND: Final[tuple[str, ...]] = ("version", "--format=json")


class VersionInfo(BaseModel):
    """Version and declared feature flags reported by ``codeql version``."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    version: str
    features: dict[str, bool] = Field(default_factory=dict)

    @field_validator("version")
    @classmethod
    def _validate_version(cls, value: str) -> str:
        try:
            Version(value)
        except InvalidVersion as exc:
            raise ValueError(f"'{value}' is not a semantic version") from exc
        return value

    @property
    def parsed(self) -> Version:
        """Return the version as a comparable :class:`packaging.version.Version`."""

        return Version(self.version)


def parse_version_output(output: str) -> VersionInfo:
    """Return the :class:`VersionInfo` encoded in ``output``.

    Raises:
        ConfigurationError: If ``output`` is not the expected JSON document.
    """

    try:
        return VersionInfo.model_validate(json.loads(output))
    except (json.JSONDecodeError, ValidationError) as exc:
        raise ConfigurationError(f"Invalid JSON output from `version --format=json`: {output}") from exc


class VersionCache:
    """Process-scoped, single-flight cache for the resolved :class:`VersionInfo`.

    The first caller to :meth:`get_or_load` runs the loader while holding the
    lock; concurrent callers block until it finishes and then observe the same
    instance. A failed load leaves the cache empty.
    """

    def __init__(self) -> None:
        self._lock = Lock()
        self._value: VersionInfo | None = None

    @property
    def value(self) -> VersionInfo | None:
        """Return the cached value without loading it."""

        return self._value

    def get_or_load(self, loader: Callable[[], VersionInfo]) -> VersionInfo:
        """Return the cached value, invoking ``loader`` only when the cache is empty."""

        cached = self._value
        if cached is not None:
            return cached
        with self._lock:
            if self._value is None:
                self._value = loader()
            return self._value

    def clear(self) -> None:
        """Forget the cached value. Intended for test isolation only."""

        with self._lock:
            self._value = None


_PROCESS_CACHE: Final[VersionCache] = VersionCache()


def default_version_cache() -> VersionCache:
    """Return the cache shared by every resolver in this process."""

    return _PROCESS_CACHE


def reset_version_cache() -> None:
    """Clear the process-wide version cache."""

    _PROCESS_CACHE.clear()


class VersionResolver:
    """Resolve the CLI version once and serve the memoised result afterwards."""

    def __init__(
        self,
        cmd: str,
        runner: ProcessRunner,
        *,
        cache: VersionCache | None = None,
    ) -> None:
        self._cmd = cmd
        self._runner = runner
        self._cache = cache or default_version_cache()

    @property
    def cache(self) -> VersionCache:
        """Return the cache backing this resolver."""

        return self._cache

    def get_version(self) -> VersionInfo:
        """Return the CLI version, querying the executable on first use.

        Raises:
            ConfigurationError: If the CLI reports an unparsable version document.
            InvocationError: If the version query exits with a non-zero status.
        """

        return self._cache.get_or_load(self._load)

    def print_version(self) -> None:
        """Stream the version document to the output sink without caching it."""

        self._runner.run(self._cmd, VERSION_COMMAND)

    def _load(self) -> VersionInfo:
        output = self._runner.run(self._cmd, VERSION_COMMAND, stream_stdout=False)
        return parse_version_output(output)


__all__ = [
    "VERSION_COMMAND",
    "VersionCache",
    "VersionInfo",
    "VersionResolver",
    "default_version_cache",
    "parse_version_output",
    "reset_version_cache",
]
