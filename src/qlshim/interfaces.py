# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Collaborator interfaces consumed and exposed by the invocation layer."""

# pylint: disable=too-few-public-methods -- Protocol definitions intentionally expose minimal method surfaces.

from __future__ import annotations

from collections.abc import Sequence
from contextlib import AbstractContextManager
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from .process import OutputSink

if TYPE_CHECKING:
    from .capabilities import CapabilityToken
    from .config import AnalysisConfig
    from .outputs import (
        BetterResolveLanguagesOutput,
        PackDownloadOutput,
        ResolveBuildEnvironmentOutput,
        ResolveLanguagesOutput,
        ResolveQueriesOutput,
    )
    from .versioning import VersionInfo


@runtime_checkable
class Logger(Protocol):
    """Leveled logger with scoped groups."""

    def debug(self, message: str) -> None:
        """Emit a debug ``message``."""

        raise NotImplementedError

    def info(self, message: str) -> None:
        """Emit an informational ``message``."""

        raise NotImplementedError

    def warning(self, message: str) -> None:
        """Emit a warning ``message``."""

        raise NotImplementedError

    def error(self, message: str) -> None:
        """Emit an error ``message``."""

        raise NotImplementedError

    def group(self, name: str) -> AbstractContextManager[None]:
        """Return a context manager grouping output under ``name``."""

        raise NotImplementedError


class Feature(str, Enum):
    """Runtime feature toggles consulted by the invocation layer."""

    EXPORT_DIAGNOSTICS_ENABLED = "export_diagnostics_enabled"


@runtime_checkable
class FeatureEnablement(Protocol):
    """Oracle answering whether a runtime feature toggle is enabled."""

    def get_value(self, feature: Feature, codeql: CodeQLInterface | None = None) -> bool:
        """Return whether ``feature`` is enabled for the given CLI."""

        raise NotImplementedError


@runtime_checkable
class CodeScanningConfigWriter(Protocol):
    """Write the augmented code scanning configuration for ``database init``."""

    def __call__(self, config: AnalysisConfig, logger: Logger) -> Path:
        """Write the configuration for ``config`` and return its path."""

        raise NotImplementedError


@runtime_checkable
class SarifPatcher(Protocol):
    """Rewrite a SARIF file, repairing notifications the CLI emits incorrectly."""

    def fix_invalid_notifications(self, source: Path, destination: Path, logger: Logger) -> None:
        """Read ``source`` and write the repaired document to ``destination``."""

        raise NotImplementedError


@runtime_checkable
class CodeQLInterface(Protocol):
    """Full operation surface of the CodeQL invocation facade."""

    def get_path(self) -> str:
        """Return the path of the CodeQL executable."""
        raise NotImplementedError

    def get_version(self) -> VersionInfo:
        """Return the version and feature flags of the CLI."""
        raise NotImplementedError

    def print_version(self) -> None:
        """Stream version information about the CLI."""
        raise NotImplementedError

    def supports_feature(self, feature: CapabilityToken) -> bool:
        """Return whether the CLI supports ``feature``."""
        raise NotImplementedError

    def database_init_cluster(
        self,
        config: AnalysisConfig,
        source_root: Path,
        process_name: str | None,
        qlconfig_file: Path | None,
        logger: Logger,
    ) -> None:
        """Run ``database init --db-cluster``."""
        raise NotImplementedError

    def run_autobuild(self, language: str) -> None:
        """Run the autobuilder for ``language``."""
        raise NotImplementedError

    def extract_scanned_language(self, config: AnalysisConfig, language: str) -> None:
        """Extract a scanned language through ``database trace-command``."""
        raise NotImplementedError

    def extract_using_build_mode(self, config: AnalysisConfig, language: str) -> None:
        """Extract ``language`` through ``database trace-command --use-build-mode``."""
        raise NotImplementedError

    def finalize_database(self, database_path: Path, threads_flag: str, memory_flag: str) -> None:
        """Run ``database finalize``."""
        raise NotImplementedError

    def resolve_languages(self) -> ResolveLanguagesOutput:
        """Run ``resolve languages``."""
        raise NotImplementedError

    def better_resolve_languages(self) -> BetterResolveLanguagesOutput:
        """Run ``resolve languages --format=betterjson``."""
        raise NotImplementedError

    def resolve_queries(self, queries: Sequence[str], extra_search_path: str | None) -> ResolveQueriesOutput:
        """Run ``resolve queries``."""
        raise NotImplementedError

    def resolve_build_environment(self, working_dir: Path | None, language: str) -> ResolveBuildEnvironmentOutput:
        """Run ``resolve build-environment``."""
        raise NotImplementedError

    def pack_download(self, packs: Sequence[str], qlconfig_file: Path | None) -> PackDownloadOutput:
        """Run ``pack download``."""
        raise NotImplementedError

    def database_cleanup(self, database_path: Path, cleanup_level: str) -> None:
        """Run ``database cleanup``."""
        raise NotImplementedError

    def database_bundle(self, database_path: Path, output_file_path: Path, database_name: str) -> None:
        """Run ``database bundle``."""
        raise NotImplementedError

    def database_run_queries(self, database_path: Path, flags: Sequence[str]) -> None:
        """Run ``database run-queries``."""
        raise NotImplementedError

    def database_interpret_results(
        self,
        database_path: Path,
        query_suite_paths: Sequence[str] | None,
        sarif_file: Path,
        add_snippets_flag: str,
        threads_flag: str,
        verbosity_flag: str | None,
        automation_details_id: str | None,
        config: AnalysisConfig,
        features: FeatureEnablement,
        logger: Logger,
    ) -> str:
        """Run ``database interpret-results`` and return the analysis summary."""
        raise NotImplementedError

    def database_print_baseline(self, database_path: Path) -> str:
        """Run ``database print-baseline``."""
        raise NotImplementedError

    def database_export_diagnostics(
        self,
        database_path: Path,
        sarif_file: Path,
        automation_details_id: str | None,
        temp_dir: Path,
        logger: Logger,
    ) -> None:
        """Run ``database export-diagnostics``."""
        raise NotImplementedError

    def diagnostics_export(
        self,
        sarif_file: Path,
        automation_details_id: str | None,
        config: AnalysisConfig,
    ) -> None:
        """Run ``diagnostics export``."""
        raise NotImplementedError

    def resolve_extractor(self, language: str) -> str:
        """Return the extractor location for ``language``."""
        raise NotImplementedError


__all__ = [
    "CodeQLInterface",
    "CodeScanningConfigWriter",
    "Feature",
    "FeatureEnablement",
    "Logger",
    "OutputSink",
    "SarifPatcher",
]
