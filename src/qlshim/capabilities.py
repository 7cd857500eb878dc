# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Decide which CLI behaviours the resolved CodeQL version supports.

A capability is supported when the CLI reports it explicitly in the
``features`` map of ``codeql version --format=json``. Without an explicit
entry, the version is compared against the minimum registered in
:data:`CAPABILITY_TABLE`. The comparison is strictly greater-than: a CLI at
exactly the registered minimum does not get the capability.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Final

from packaging.version import Version

from .config import PlatformVersion
from .errors import UnknownCapabilityError
from .versioning import VersionInfo

# Oldest CLI release this layer runs with. Must cover the CLI shipped with every supported GHES release.
CODEQL_MINIMUM_VERSION: Final[str] = "2.11.6"

# Release that will shortly become the minimum; older CLIs trigger a one-off deprecation warning.
CODEQL_NEXT_MINIMUM_VERSION: Final[str] = "2.11.6"

GHES_VERSION_MOST_RECENTLY_DEPRECATED: Final[str] = "3.7"
GHES_MOST_RECENT_DEPRECATION_DATE: Final[str] = "2023-11-08"


class CapabilityToken(str, Enum):
    """Name a unit of behaviour gated on the CLI version or its feature flags."""

    # Version-gated behaviour.
    SECURITY_EXPERIMENTAL_SUITE = "securityExperimentalSuite"
    EXPECT_DISCARDED_CACHE = "expectDiscardedCache"
    EXPORT_CODE_SCANNING_CONFIG = "exportCodeScanningConfig"
    INIT_WITH_QLCONFIG = "initWithQlconfig"
    SARIF_INCLUDE_DIAGNOSTICS_OPT_OUT = "sarifIncludeDiagnosticsOptOut"
    DIAGNOSTICS_EXPORT_FIXED = "diagnosticsExportFixed"
    RESOLVE_BUILD_ENVIRONMENT = "resolveBuildEnvironment"
    LANGUAGE_BASELINE_CONFIG = "languageBaselineConfig"
    LANGUAGE_ALIASING = "languageAliasing"
    ANALYSIS_SUMMARY_V2 = "analysisSummaryV2"
    SUBLANGUAGE_FILE_COVERAGE = "sublanguageFileCoverage"
    FINE_GRAINED_PARALLELISM = "fineGrainedParallelism"
    INCLUDE_QUERY_HELP = "includeQueryHelp"

    # Behaviour the CLI advertises only through its feature flags.
    BUILD_MODE_OPTION = "buildModeOption"
    TRACE_COMMAND_USE_BUILD_MODE = "traceCommandUseBuildMode"
    INDIRECT_TRACING_SUPPORTS_STATIC_BINARIES = "indirectTracingSupportsStaticBinaries"
    SETS_CODEQL_RUNNER_ENV_VAR = "setsCodeqlRunnerEnvVar"


@dataclass(frozen=True, slots=True)
class CapabilityRule:
    """Resolution rule for a capability token.

    Attributes:
        token: Capability the rule resolves.
        minimum_version: Release the CLI must strictly exceed, or ``None`` when
            only an explicit feature flag can enable the capability.
        description: Human-readable summary used by diagnostics.
    """

    token: CapabilityToken
    minimum_version: str | None
    description: str = ""


CAPABILITY_TABLE: Final[Mapping[CapabilityToken, CapabilityRule]] = {
    rule.token: rule
    for rule in (
        CapabilityRule(
            CapabilityToken.SECURITY_EXPERIMENTAL_SUITE, "2.12.1", "Bundles a security-experimental query suite."
        ),
        CapabilityRule(CapabilityToken.EXPECT_DISCARDED_CACHE, "2.12.1", "Accepts --expect-discarded-cache."),
        CapabilityRule(
            CapabilityToken.EXPORT_CODE_SCANNING_CONFIG, "2.12.3", "Exports code scanning configuration to SARIF."
        ),
        CapabilityRule(CapabilityToken.INIT_WITH_QLCONFIG, "2.12.4", "Accepts --qlconfig-file on database init."),
        CapabilityRule(
            CapabilityToken.SARIF_INCLUDE_DIAGNOSTICS_OPT_OUT, "2.12.4", "Accepts --no-sarif-include-diagnostics."
        ),
        CapabilityRule(
            CapabilityToken.DIAGNOSTICS_EXPORT_FIXED, "2.13.1", "Diagnostics export produces valid SARIF notifications."
        ),
        CapabilityRule(
            CapabilityToken.RESOLVE_BUILD_ENVIRONMENT, "2.13.4", "Supports the resolve build-environment command."
        ),
        CapabilityRule(
            CapabilityToken.LANGUAGE_BASELINE_CONFIG, "2.14.2", "Supports language-specific baseline configuration."
        ),
        CapabilityRule(CapabilityToken.LANGUAGE_ALIASING, "2.14.4", "Accepts --extractor-include-aliases."),
        CapabilityRule(CapabilityToken.ANALYSIS_SUMMARY_V2, "2.15.0", "Prints the new analysis summary."),
        CapabilityRule(
            CapabilityToken.SUBLANGUAGE_FILE_COVERAGE, "2.15.0", "Reports sub-language file coverage information."
        ),
        CapabilityRule(CapabilityToken.FINE_GRAINED_PARALLELISM, "2.15.1", "Accepts --intra-layer-parallelism."),
        CapabilityRule(CapabilityToken.INCLUDE_QUERY_HELP, "2.15.2", "Accepts --sarif-include-query-help."),
        CapabilityRule(CapabilityToken.BUILD_MODE_OPTION, None, "Accepts --build-mode on database init."),
        CapabilityRule(
            CapabilityToken.TRACE_COMMAND_USE_BUILD_MODE, None, "Accepts --use-build-mode on database trace-command."
        ),
        CapabilityRule(
            CapabilityToken.INDIRECT_TRACING_SUPPORTS_STATIC_BINARIES, None, "Indirect tracing handles static binaries."
        ),
        CapabilityRule(CapabilityToken.SETS_CODEQL_RUNNER_ENV_VAR, None, "Exports CODEQL_RUNNER for traced builds."),
    )
}


def version_above(info: VersionInfo, minimum: str) -> bool:
    """Return ``True`` when ``info`` is strictly later than ``minimum``."""

    return info.parsed > Version(minimum)


def is_supported(
    info: VersionInfo,
    token: CapabilityToken,
    table: Mapping[CapabilityToken, CapabilityRule] = CAPABILITY_TABLE,
) -> bool:
    """Resolve ``token`` against ``info``.

    Args:
        info: Version document reported by the CLI.
        token: Capability to resolve.
        table: Registered capability rules.

    Returns:
        bool: The explicit feature flag when present; otherwise whether the
        version strictly exceeds the registered minimum.

    Raises:
        UnknownCapabilityError: If ``token`` has no registered rule.
    """

    rule = table.get(token)
    if rule is None:
        raise UnknownCapabilityError(f"No capability rule is registered for '{token}'")
    explicit = info.features.get(rule.token.value)
    if explicit is not None:
        return bool(explicit)
    if rule.minimum_version is None:
        return False
    return version_above(info, rule.minimum_version)


class CapabilityGate:
    """Answer capability questions for the CLI whose version ``version_source`` reports."""

    def __init__(
        self,
        version_source: Callable[[], VersionInfo],
        *,
        table: Mapping[CapabilityToken, CapabilityRule] = CAPABILITY_TABLE,
    ) -> None:
        self._version_source = version_source
        self._table = table

    def supports(self, token: CapabilityToken) -> bool:
        """Return whether the CLI supports ``token``."""

        return is_supported(self._version_source(), token, self._table)

    def version_above(self, minimum: str) -> bool:
        """Return whether the CLI version is strictly later than ``minimum``."""

        return version_above(self._version_source(), minimum)

    def supports_on_platform(
        self,
        token: CapabilityToken,
        platform: PlatformVersion,
        minimum_platform: str,
    ) -> bool:
        """Return whether both the platform and the CLI offer ``token``.

        Args:
            token: Capability to resolve against the CLI.
            platform: Platform hosting the pipeline.
            minimum_platform: Oldest GHES release offering the surrounding feature.

        Returns:
            bool: ``True`` only when the platform satisfies ``minimum_platform``
            and the CLI supports ``token``.
        """

        return platform.satisfies(minimum_platform) and self.supports(token)


__all__ = [
    "CAPABILITY_TABLE",
    "CODEQL_MINIMUM_VERSION",
    "CODEQL_NEXT_MINIMUM_VERSION",
    "CapabilityGate",
    "CapabilityRule",
    "CapabilityToken",
    "GHES_MOST_RECENT_DEPRECATION_DATE",
    "GHES_VERSION_MOST_RECENTLY_DEPRECATED",
    "is_supported",
    "version_above",
]
