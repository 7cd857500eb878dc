# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Stub facade for exercising callers of :class:`~qlshim.interfaces.CodeQLInterface`."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Any

from .capabilities import CapabilityToken, is_supported
from .versioning import VersionInfo

if TYPE_CHECKING:
    from .config import AnalysisConfig
    from .interfaces import FeatureEnablement, Logger
    from .outputs import (
        BetterResolveLanguagesOutput,
        PackDownloadOutput,
        ResolveBuildEnvironmentOutput,
        ResolveLanguagesOutput,
        ResolveQueriesOutput,
    )

STUB_PATH = "/tmp/dummy-path"  # nosec B108 - placeholder path, never written to

_DEFAULTED: frozenset[str] = frozenset({"get_path", "get_version", "print_version", "supports_feature"})


class StubCodeQL:
    """Facade double whose operations are supplied as keyword arguments.

    Operations that are not supplied raise :class:`NotImplementedError` when
    called. ``get_path``, ``get_version`` and ``supports_feature`` have working
    defaults; capability answers derive from the stubbed version.

    Example::

        codeql = StubCodeQL(resolve_extractor=lambda language: f"/extractors/{language}")
    """

    def __init__(self, **overrides: Callable[..., Any]) -> None:
        unknown = {name for name in overrides if name not in _DEFAULTED and not _is_operation(name)}
        if unknown:
            raise TypeError(f"Unknown CodeQL operations: {', '.join(sorted(unknown))}")
        self._overrides = overrides

    def _call(self, name: str, *args: Any) -> Any:
        try:
            operation = self._overrides[name]
        except KeyError:
            raise NotImplementedError(f"CodeQL {name} method not correctly defined") from None
        return operation(*args)

    def get_path(self) -> str:
        if "get_path" in self._overrides:
            return self._call("get_path")
        return STUB_PATH

    def get_version(self) -> VersionInfo:
        if "get_version" in self._overrides:
            return self._call("get_version")
        return VersionInfo(version="1.0.0")

    def print_version(self) -> None:
        if "print_version" in self._overrides:
            self._call("print_version")

    def supports_feature(self, feature: CapabilityToken) -> bool:
        if "supports_feature" in self._overrides:
            return self._call("supports_feature", feature)
        return is_supported(self.get_version(), feature)

    def database_init_cluster(
        self,
        config: AnalysisConfig,
        source_root: Path,
        process_name: str | None,
        qlconfig_file: Path | None,
        logger: Logger,
    ) -> None:
        self._call("database_init_cluster", config, source_root, process_name, qlconfig_file, logger)

    def run_autobuild(self, language: str) -> None:
        self._call("run_autobuild", language)

    def extract_scanned_language(self, config: AnalysisConfig, language: str) -> None:
        self._call("extract_scanned_language", config, language)

    def extract_using_build_mode(self, config: AnalysisConfig, language: str) -> None:
        self._call("extract_using_build_mode", config, language)

    def finalize_database(self, database_path: Path, threads_flag: str, memory_flag: str) -> None:
        self._call("finalize_database", database_path, threads_flag, memory_flag)

    def resolve_languages(self) -> ResolveLanguagesOutput:
        return self._call("resolve_languages")

    def better_resolve_languages(self) -> BetterResolveLanguagesOutput:
        return self._call("better_resolve_languages")

    def resolve_queries(self, queries: Sequence[str], extra_search_path: str | None) -> ResolveQueriesOutput:
        return self._call("resolve_queries", queries, extra_search_path)

    def resolve_build_environment(self, working_dir: Path | None, language: str) -> ResolveBuildEnvironmentOutput:
        return self._call("resolve_build_environment", working_dir, language)

    def pack_download(self, packs: Sequence[str], qlconfig_file: Path | None) -> PackDownloadOutput:
        return self._call("pack_download", packs, qlconfig_file)

    def database_cleanup(self, database_path: Path, cleanup_level: str) -> None:
        self._call("database_cleanup", database_path, cleanup_level)

    def database_bundle(self, database_path: Path, output_file_path: Path, database_name: str) -> None:
        self._call("database_bundle", database_path, output_file_path, database_name)

    def database_run_queries(self, database_path: Path, flags: Sequence[str]) -> None:
        self._call("database_run_queries", database_path, flags)

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
        return self._call(
            "database_interpret_results",
            database_path,
            query_suite_paths,
            sarif_file,
            add_snippets_flag,
            threads_flag,
            verbosity_flag,
            automation_details_id,
            config,
            features,
            logger,
        )

    def database_print_baseline(self, database_path: Path) -> str:
        return self._call("database_print_baseline", database_path)

    def database_export_diagnostics(
        self,
        database_path: Path,
        sarif_file: Path,
        automation_details_id: str | None,
        temp_dir: Path,
        logger: Logger,
    ) -> None:
        self._call("database_export_diagnostics", database_path, sarif_file, automation_details_id, temp_dir, logger)

    def diagnostics_export(self, sarif_file: Path, automation_details_id: str | None, config: AnalysisConfig) -> None:
        self._call("diagnostics_export", sarif_file, automation_details_id, config)

    def resolve_extractor(self, language: str) -> str:
        return self._call("resolve_extractor", language)


def _is_operation(name: str) -> bool:
    return not name.startswith("_") and callable(getattr(StubCodeQL, name, None))


__all__ = ["STUB_PATH", "StubCodeQL"]
