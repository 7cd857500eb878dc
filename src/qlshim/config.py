# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration models consumed by the CodeQL invocation layer."""

from __future__ import annotations

import json
import os
import tempfile
from collections.abc import Mapping
from enum import Enum
from pathlib import Path
from typing import Final

from packaging.version import InvalidVersion, Version
from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator

from .errors import ConfigurationError

EXTRA_OPTIONS_ENV: Final[str] = "CODEQL_ACTION_EXTRA_OPTIONS"
SUPPRESS_DEPRECATED_SOON_WARNING_ENV: Final[str] = "CODEQL_ACTION_SUPPRESS_DEPRECATED_SOON_WARNING"
DISABLE_DUPLICATE_LOCATION_FIX_ENV: Final[str] = "CODEQL_ACTION_DISABLE_DUPLICATE_LOCATION_FIX"
TEMP_DIR_ENV: Final[str] = "CODEQL_ACTION_TEMP"
SERVER_VARIANT_ENV: Final[str] = "GITHUB_SERVER_VARIANT"
SERVER_VERSION_ENV: Final[str] = "GITHUB_SERVER_VERSION"

# The CLI writes at most this many bytes of stderr into failure diagnostics.
MAX_ERROR_SIZE: Final[int] = 20_000

# Each TRAP cache is bounded to this many megabytes.
TRAP_CACHE_SIZE_MB: Final[int] = 1024

_TRUE_VALUES: Final[frozenset[str]] = frozenset({"1", "true", "yes", "on"})

TRACED_LANGUAGES: Final[frozenset[str]] = frozenset({"cpp", "csharp", "go", "java", "swift"})


class GitHubVariant(str, Enum):
    """Enumerate the hosting platforms the pipeline may run against."""

    DOTCOM = "dotcom"
    GHES = "ghes"
    GHE_DOTCOM = "ghe.com"


class BuildMode(str, Enum):
    """Enumerate database build modes understood by the CLI."""

    NONE = "none"
    AUTOBUILD = "autobuild"
    MANUAL = "manual"


class PlatformVersion(BaseModel):
    """Describe the orchestration platform hosting the pipeline."""

    model_config = ConfigDict(frozen=True)

    variant: GitHubVariant = GitHubVariant.DOTCOM
    version: str | None = None

    @field_validator("version")
    @classmethod
    def _validate_version(cls, value: str | None) -> str | None:
        if value is None:
            return None
        try:
            Version(value)
        except InvalidVersion as exc:
            raise ValueError(f"invalid platform version '{value}'") from exc
        return value

    def satisfies(self, minimum: str) -> bool:
        """Return ``True`` unless this is a GHES release older than ``minimum``.

        Args:
            minimum: Oldest GHES release offering the platform capability.

        Returns:
            bool: ``True`` for non-GHES platforms and for GHES releases at or
            above ``minimum``.
        """

        if self.variant is not GitHubVariant.GHES:
            return True
        if self.version is None:
            return False
        return Version(self.version) >= Version(minimum)


class AnalysisConfig(BaseModel):
    """Domain configuration describing the databases being built and analysed."""

    languages: list[str] = Field(default_factory=list)
    build_mode: BuildMode | None = None
    db_location: Path
    temp_dir: Path
    trap_caches: dict[str, Path] = Field(default_factory=dict)
    platform: PlatformVersion = Field(default_factory=PlatformVersion)
    analyzing_default_branch: bool = False
    external_repository_token: SecretStr | None = None
    original_user_input: dict[str, object] = Field(default_factory=dict)

    def database_path(self, language: str) -> Path:
        """Return the database directory for ``language`` inside the cluster."""

        return (self.db_location / language).resolve()

    def generated_config_path(self) -> Path:
        """Return the path of the code scanning configuration passed to the CLI."""

        return (self.temp_dir / "user-config.yaml").resolve()

    def traced_languages(self) -> list[str]:
        """Return the configured languages that are extracted through build tracing."""

        return [language for language in self.languages if language in TRACED_LANGUAGES]


class InvocationSettings(BaseModel):
    """Runtime settings controlling how the CLI is invoked."""

    model_config = ConfigDict(frozen=True)

    codeql_path: str = "codeql"
    temp_dir: Path = Field(default_factory=lambda: Path(tempfile.gettempdir()))
    extra_options: str | None = None
    suppress_deprecated_soon_warning: bool = False
    disable_duplicate_location_fix: bool = False
    platform: PlatformVersion = Field(default_factory=PlatformVersion)
    max_error_size: int = Field(default=MAX_ERROR_SIZE, gt=0)

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None, **overrides: object) -> InvocationSettings:
        """Build settings from environment variables.

        Args:
            env: Optional environment mapping used instead of :data:`os.environ`.
            **overrides: Explicit field values that take precedence over the environment.

        Returns:
            InvocationSettings: Settings populated from ``env`` and ``overrides``.

        Raises:
            ConfigurationError: If the platform description is invalid.
        """

        environment = os.environ if env is None else env
        values: dict[str, object] = {
            "extra_options": environment.get(EXTRA_OPTIONS_ENV),
            "suppress_deprecated_soon_warning": _flag(environment.get(SUPPRESS_DEPRECATED_SOON_WARNING_ENV)),
            "disable_duplicate_location_fix": DISABLE_DUPLICATE_LOCATION_FIX_ENV in environment,
        }
        if temp_dir := environment.get(TEMP_DIR_ENV):
            values["temp_dir"] = Path(temp_dir)
        variant = environment.get(SERVER_VARIANT_ENV)
        if variant:
            try:
                values["platform"] = PlatformVersion(
                    variant=GitHubVariant(variant.lower()),
                    version=environment.get(SERVER_VERSION_ENV) or None,
                )
            except ValueError as exc:
                raise ConfigurationError(f"Invalid platform description: {exc}") from exc
        values.update(overrides)
        return cls.model_validate(values)

    def extra_options_tree(self) -> object:
        """Return the decoded extra-options document, or ``{}`` when unset.

        Raises:
            ConfigurationError: If the document is not valid JSON.
        """

        raw = self.extra_options
        if raw is None or not raw.strip():
            return {}
        try:
            return json.loads(raw)
        except json.JSONDecodeError as exc:
            raise ConfigurationError(
                f"{EXTRA_OPTIONS_ENV} environment variable is set, but is not valid JSON: {exc}"
            ) from exc


def _flag(value: str | None) -> bool:
    return value is not None and value.strip().lower() in _TRUE_VALUES


__all__ = [
    "AnalysisConfig",
    "BuildMode",
    "DISABLE_DUPLICATE_LOCATION_FIX_ENV",
    "EXTRA_OPTIONS_ENV",
    "GitHubVariant",
    "InvocationSettings",
    "MAX_ERROR_SIZE",
    "PlatformVersion",
    "SUPPRESS_DEPRECATED_SOON_WARNING_ENV",
    "TRACED_LANGUAGES",
    "TRAP_CACHE_SIZE_MB",
]
