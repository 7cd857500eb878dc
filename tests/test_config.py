# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests covering invocation settings and analysis configuration models."""

from pathlib import Path

import pytest

from qlshim.config import AnalysisConfig, GitHubVariant, InvocationSettings, PlatformVersion
from qlshim.errors import ConfigurationError


def test_settings_read_environment(tmp_path: Path) -> None:
    settings = InvocationSettings.from_env(
        {
            "CODEQL_ACTION_EXTRA_OPTIONS": '{"*": ["-v"]}',
            "CODEQL_ACTION_SUPPRESS_DEPRECATED_SOON_WARNING": "true",
            "CODEQL_ACTION_DISABLE_DUPLICATE_LOCATION_FIX": "1",
            "CODEQL_ACTION_TEMP": str(tmp_path),
            "GITHUB_SERVER_VARIANT": "GHES",
            "GITHUB_SERVER_VERSION": "3.10.2",
        }
    )

    assert settings.extra_options_tree() == {"*": ["-v"]}
    assert settings.suppress_deprecated_soon_warning
    assert settings.disable_duplicate_location_fix
    assert settings.temp_dir == tmp_path
    assert settings.platform == PlatformVersion(variant=GitHubVariant.GHES, version="3.10.2")


@pytest.mark.parametrize("value", ["1", "false", ""])
def test_any_value_disables_duplicate_location_fix(value: str) -> None:
    settings = InvocationSettings.from_env({"CODEQL_ACTION_DISABLE_DUPLICATE_LOCATION_FIX": value})

    assert settings.disable_duplicate_location_fix


def test_settings_defaults_and_overrides() -> None:
    settings = InvocationSettings.from_env({}, codeql_path="/opt/codeql/codeql")

    assert settings.codeql_path == "/opt/codeql/codeql"
    assert settings.extra_options_tree() == {}
    assert not settings.suppress_deprecated_soon_warning
    assert not settings.disable_duplicate_location_fix
    assert settings.platform.variant is GitHubVariant.DOTCOM
    assert settings.max_error_size == 20_000


def test_invalid_platform_is_a_configuration_error() -> None:
    with pytest.raises(ConfigurationError, match="Invalid platform"):
        InvocationSettings.from_env({"GITHUB_SERVER_VARIANT": "mainframe"})


def test_blank_extra_options_are_treated_as_unset() -> None:
    assert InvocationSettings(extra_options="   ").extra_options_tree() == {}


def test_platform_satisfies_only_checks_ghes() -> None:
    assert PlatformVersion().satisfies("99.0")
    assert PlatformVersion(variant=GitHubVariant.GHES, version="3.9.0").satisfies("3.9.0")
    assert not PlatformVersion(variant=GitHubVariant.GHES, version="3.8.9").satisfies("3.9.0")


def test_analysis_config_paths(tmp_path: Path) -> None:
    config = AnalysisConfig(
        languages=["java", "python", "cpp"],
        db_location=tmp_path / "db",
        temp_dir=tmp_path / "tmp",
    )

    assert config.database_path("java") == (tmp_path / "db" / "java").resolve()
    assert config.generated_config_path() == (tmp_path / "tmp" / "user-config.yaml").resolve()
    assert config.traced_languages() == ["java", "cpp"]
