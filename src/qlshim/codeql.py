# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Public facade running CodeQL CLI subcommands.

Each operation builds its argument vector in the same order: fixed arguments,
then version-dependent flags from the declarative rule tables below, then the
user's extra options for the command path. It then runs the process, parses
structured output where the command produces any, and patches SARIF output
where older CLI releases need it. Nothing is retried at this layer.
"""

from __future__ import annotations

import os
import sys
import threading
from collections.abc import Iterator, Mapping, Sequence
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Final

import yaml
from packaging.version import Version

from .capabilities import (
    CODEQL_MINIMUM_VERSION,
    CODEQL_NEXT_MINIMUM_VERSION,
    GHES_MOST_RECENT_DEPRECATION_DATE,
    GHES_VERSION_MOST_RECENTLY_DEPRECATED,
    CapabilityGate,
    CapabilityToken,
)
from .config import TRAP_CACHE_SIZE_MB, AnalysisConfig, InvocationSettings, PlatformVersion
from .errors import ConfigurationError, InvocationError, MalformedOutputError, wrap_cli_configuration_error
from .interfaces import CodeScanningConfigWriter, Feature, FeatureEnablement, Logger, SarifPatcher
from .logging import ConsoleLogger
from .outputs import (
    BetterResolveLanguagesOutput,
    PackDownloadOutput,
    ResolveBuildEnvironmentOutput,
    ResolveLanguagesOutput,
    ResolveQueriesOutput,
    parse_json,
    parse_output,
)
from .overlay import CommandPath, OptionNode, parse_extra_options, resolve_extra_options
from .process import ProcessRunner, RunOptions
from .sarif import InvalidNotificationFixer, SarifOutputRedirect, is_diagnostics_export_fixed
from .versioning import VersionCache, VersionInfo, VersionResolver

# GHES releases that first ship the status page and sub-language coverage views.
GHES_ANALYSIS_SUMMARY_V2: Final[str] = "3.9.0"
GHES_SUBLANGUAGE_FILE_COVERAGE: Final[str] = "3.12.0"

_JAVA_TOOL_OPTIONS: Final[tuple[str, ...]] = ("-Dhttp.keepAlive=false", "-Dmaven.wagon.http.pool=false")


@dataclass(frozen=True, slots=True)
class FlagRule:
    """Emit ``flags`` when the CLI supports ``capability``, otherwise ``otherwise``."""

    capability: CapabilityToken
    flags: tuple[str, ...]
    otherwise: tuple[str, ...] = ()

    def render(self, gate: CapabilityGate, platform: PlatformVersion) -> tuple[str, ...]:
        """Return the flags this rule contributes."""

        del platform
        return self.flags if gate.supports(self.capability) else self.otherwise


@dataclass(frozen=True, slots=True)
class PlatformFlagRule:
    """Emit ``flags`` when both platform and CLI offer ``capability``.

    When only the CLI supports it, ``opt_out`` is emitted so the CLI does not
    enable the behaviour by default on platforms that cannot display it.
    """

    capability: CapabilityToken
    minimum_platform: str
    flags: tuple[str, ...]
    opt_out: tuple[str, ...] = ()

    def render(self, gate: CapabilityGate, platform: PlatformVersion) -> tuple[str, ...]:
        """Return the flags this rule contributes."""

        if gate.supports_on_platform(self.capability, platform, self.minimum_platform):
            return self.flags
        if gate.supports(self.capability):
            return self.opt_out
        return ()


Rule = FlagRule | PlatformFlagRule

LANGUAGE_ALIASING_RULES: Final[tuple[Rule, ...]] = (
    FlagRule(CapabilityToken.LANGUAGE_ALIASING, ("--extractor-include-aliases",)),
)
SUBLANGUAGE_COVERAGE_RULE: Final[Rule] = PlatformFlagRule(
    CapabilityToken.SUBLANGUAGE_FILE_COVERAGE,
    GHES_SUBLANGUAGE_FILE_COVERAGE,
    ("--sublanguage-file-coverage",),
    ("--no-sublanguage-file-coverage",),
)
INIT_RULES: Final[tuple[Rule, ...]] = (
    FlagRule(CapabilityToken.LANGUAGE_BASELINE_CONFIG, ("--calculate-language-specific-baseline",)),
    SUBLANGUAGE_COVERAGE_RULE,
)
RUN_QUERIES_RULES: Final[tuple[Rule, ...]] = (
    FlagRule(CapabilityToken.EXPECT_DISCARDED_CACHE, ("--expect-discarded-cache",)),
    FlagRule(CapabilityToken.FINE_GRAINED_PARALLELISM, ("--intra-layer-parallelism",)),
)
QUERY_HELP_RULES: Final[tuple[Rule, ...]] = (
    FlagRule(
        CapabilityToken.INCLUDE_QUERY_HELP,
        ("--sarif-include-query-help=always",),
        ("--sarif-add-query-help",),
    ),
)
INTERPRET_RESULTS_RULES: Final[tuple[Rule, ...]] = (
    SUBLANGUAGE_COVERAGE_RULE,
    PlatformFlagRule(
        CapabilityToken.ANALYSIS_SUMMARY_V2,
        GHES_ANALYSIS_SUMMARY_V2,
        ("--new-analysis-summary",),
        ("--no-new-analysis-summary",),
    ),
)


@contextmanager
def _configuration_errors() -> Iterator[None]:
    """Re-raise CLI failures with a known user-correctable cause as configuration errors."""

    try:
        yield
    except InvocationError as exc:
        wrapped = wrap_cli_configuration_error(exc)
        if wrapped is exc:
            raise
        raise wrapped from exc


def render_flags(rules: Sequence[Rule], gate: CapabilityGate, platform: PlatformVersion) -> list[str]:
    """Evaluate ``rules`` in order and return the flags they contribute."""

    flags: list[str] = []
    for rule in rules:
        flags.extend(rule.render(gate, platform))
    return flags


def write_code_scanning_config(config: AnalysisConfig, logger: Logger) -> Path:
    """Write the user's code scanning configuration where ``database init`` reads it."""

    path = config.generated_config_path()
    content = yaml.safe_dump(config.original_user_input, sort_keys=False)
    logger.info(f"Writing augmented user configuration file to {path}")
    with logger.group("Augmented user configuration file contents"):
        logger.info(content)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


class CodeQL:
    """Run CodeQL CLI subcommands with version-appropriate arguments."""

    def __init__(
        self,
        cmd: str,
        *,
        runner: ProcessRunner | None = None,
        extra_options: OptionNode | None = None,
        version_cache: VersionCache | None = None,
        settings: InvocationSettings | None = None,
        logger: Logger | None = None,
        patcher: SarifPatcher | None = None,
        config_writer: CodeScanningConfigWriter | None = None,
    ) -> None:
        self._cmd = cmd
        self._settings = settings or InvocationSettings(codeql_path=cmd)
        self._runner = runner or ProcessRunner(max_error_size=self._settings.max_error_size)
        self._extra_options = (
            extra_options
            if extra_options is not None
            else parse_extra_options(self._settings.extra_options_tree())
        )
        self._resolver = VersionResolver(cmd, self._runner, cache=version_cache)
        self._gate = CapabilityGate(self._resolver.get_version)
        self._logger: Logger = logger or ConsoleLogger()
        self._patcher: SarifPatcher = patcher or InvalidNotificationFixer(
            disabled=self._settings.disable_duplicate_location_fix
        )
        self._config_writer: CodeScanningConfigWriter = config_writer or write_code_scanning_config

    @property
    def logger(self) -> Logger:
        """Return the logger used for messages outside the CLI output stream."""

        return self._logger

    @property
    def gate(self) -> CapabilityGate:
        """Return the capability gate bound to this CLI."""

        return self._gate

    def get_path(self) -> str:
        """Return the path of the CodeQL executable."""

        return self._cmd

    def get_version(self) -> VersionInfo:
        """Return the memoised version and feature flags of the CLI."""

        return self._resolver.get_version()

    def print_version(self) -> None:
        """Stream version information about the CLI."""

        self._resolver.print_version()

    def supports_feature(self, feature: CapabilityToken) -> bool:
        """Return whether the CLI supports ``feature``."""

        return self._gate.supports(feature)

    def _extra(self, *path: str) -> list[str]:
        command_path: CommandPath = tuple(path)
        return resolve_extra_options(self._extra_options, command_path)

    def _flags(self, rules: Sequence[Rule], platform: PlatformVersion | None = None) -> list[str]:
        return render_flags(rules, self._gate, platform or self._settings.platform)

    def _run(self, args: Sequence[str], *, stdin: str | None = None, stream_stdout: bool = True) -> str:
        return self._runner.run(self._cmd, list(args), stdin=stdin, stream_stdout=stream_stdout)

    def _language_aliasing_args(self) -> list[str]:
        return self._flags(LANGUAGE_ALIASING_RULES)

    def _trap_caching_args(self, config: AnalysisConfig, language: str) -> list[str]:
        cache_dir = config.trap_caches.get(language)
        if cache_dir is None:
            return []
        write = "true" if config.analyzing_default_branch else "false"
        return [
            f"-O={language}.trap.cache.dir={cache_dir}",
            f"-O={language}.trap.cache.bound={TRAP_CACHE_SIZE_MB}",
            f"-O={language}.trap.cache.write={write}",
        ]

    def _code_scanning_config_export_args(self, config: AnalysisConfig) -> list[str]:
        path = config.generated_config_path()
        if path.exists() and self._gate.supports(CapabilityToken.EXPORT_CODE_SCANNING_CONFIG):
            return ["--sarif-codescanning-config", str(path)]
        return []

    def database_init_cluster(
        self,
        config: AnalysisConfig,
        source_root: Path,
        process_name: str | None,
        qlconfig_file: Path | None,
        logger: Logger,
    ) -> None:
        """Run ``database init --db-cluster`` for every configured language.

        Raises:
            ConfigurationError: If the CLI fails for a known user-correctable reason.
            InvocationError: If the CLI fails for any other reason.
        """

        extra_args = [f"--language={language}" for language in config.languages]
        if config.traced_languages():
            extra_args.append("--begin-tracing")
            for language in config.languages:
                extra_args.extend(self._trap_caching_args(config, language))
            extra_args.append(f"--trace-process-name={process_name}")

        config_file = self._config_writer(config, logger)
        extra_args.append(f"--codescanning-config={config_file}")
        token = config.external_repository_token.get_secret_value() if config.external_repository_token else None
        if token:
            extra_args.append("--external-repository-token-stdin")

        if config.build_mode is not None and self._gate.supports(CapabilityToken.BUILD_MODE_OPTION):
            extra_args.append(f"--build-mode={config.build_mode.value}")
        if qlconfig_file is not None and self._gate.supports(CapabilityToken.INIT_WITH_QLCONFIG):
            extra_args.append(f"--qlconfig-file={qlconfig_file}")
        extra_args.extend(self._flags(INIT_RULES, config.platform))

        args = [
            "database",
            "init",
            "--db-cluster",
            str(config.db_location),
            f"--source-root={source_root}",
            *self._language_aliasing_args(),
            *extra_args,
            *self._extra("database", "init"),
        ]
        with _configuration_errors():
            self._run(args, stdin=token)

    def run_autobuild(self, language: str) -> None:
        """Run the autobuild script shipped with the extractor for ``language``.

        Keep-alive is disabled for JVM builds because hosted runners drop idle
        connections, which Maven does not recover from.
        """

        script = "autobuild.cmd" if sys.platform == "win32" else "autobuild.sh"
        autobuild_cmd = Path(self.resolve_extractor(language)) / "tools" / script
        env = dict(os.environ)
        java_tool_options = [part for part in env.get("JAVA_TOOL_OPTIONS", "").split() if part]
        env["JAVA_TOOL_OPTIONS"] = " ".join([*java_tool_options, *_JAVA_TOOL_OPTIONS])
        self._logger.debug(f"Running autobuild script {autobuild_cmd} for {language}")
        with _configuration_errors():
            self._runner.run(str(autobuild_cmd), options=RunOptions(env=env))

    def extract_scanned_language(self, config: AnalysisConfig, language: str) -> None:
        """Extract ``language`` through ``database trace-command --index-traceless-dbs``."""

        self._run(
            [
                "database",
                "trace-command",
                "--index-traceless-dbs",
                *self._trap_caching_args(config, language),
                str(config.database_path(language)),
                *self._extra("database", "trace-command"),
            ]
        )

    def extract_using_build_mode(self, config: AnalysisConfig, language: str) -> None:
        """Extract ``language`` through ``database trace-command --use-build-mode``."""

        self._run(
            [
                "database",
                "trace-command",
                "--use-build-mode",
                *self._trap_caching_args(config, language),
                str(config.database_path(language)),
                *self._extra("database", "trace-command"),
            ]
        )

    def finalize_database(self, database_path: Path, threads_flag: str, memory_flag: str) -> None:
        """Run ``database finalize --finalize-dataset``."""

        args = [
            "database",
            "finalize",
            "--finalize-dataset",
            threads_flag,
            memory_flag,
            str(database_path),
            *self._extra("database", "finalize"),
        ]
        with _configuration_errors():
            self._run(args)

    def resolve_languages(self) -> ResolveLanguagesOutput:
        """Run ``resolve languages --format=json``."""

        output = self._run(["resolve", "languages", "--format=json", *self._extra("resolve", "languages")])
        return parse_output(ResolveLanguagesOutput, output, "codeql resolve languages")

    def better_resolve_languages(self) -> BetterResolveLanguagesOutput:
        """Run ``resolve languages --format=betterjson``."""

        output = self._run(
            [
                "resolve",
                "languages",
                "--format=betterjson",
                "--extractor-options-verbosity=4",
                *self._language_aliasing_args(),
                *self._extra("resolve", "languages"),
            ]
        )
        return parse_output(
            BetterResolveLanguagesOutput, output, "codeql resolve languages with --format=betterjson"
        )

    def resolve_queries(self, queries: Sequence[str], extra_search_path: str | None) -> ResolveQueriesOutput:
        """Run ``resolve queries --format=bylanguage``."""

        args = ["resolve", "queries", *queries, "--format=bylanguage"]
        if extra_search_path is not None:
            args.extend(["--additional-packs", extra_search_path])
        args.extend(self._extra("resolve", "queries"))
        return parse_output(ResolveQueriesOutput, self._run(args), "codeql resolve queries")

    def resolve_build_environment(self, working_dir: Path | None, language: str) -> ResolveBuildEnvironmentOutput:
        """Run ``resolve build-environment`` for ``language``."""

        args = ["resolve", "build-environment", f"--language={language}", *self._language_aliasing_args()]
        if working_dir is not None:
            args.extend(["--working-dir", str(working_dir)])
        args.extend(self._extra("resolve", "build-environment"))
        output = self._run(args)
        return parse_output(
            ResolveBuildEnvironmentOutput, output, "codeql resolve build-environment", quote_output=True
        )

    def pack_download(self, packs: Sequence[str], qlconfig_file: Path | None) -> PackDownloadOutput:
        """Download ``packs`` into the package cache.

        Packs already present in the cache are not downloaded again unless the
        ``--force`` extra option is configured. Unversioned packs resolve to the
        latest release on every call. ``qlconfig_file`` selects the registry each
        pack is fetched from.

        Raises:
            MalformedOutputError: If the output does not describe the downloaded packs.
        """

        args = ["pack", "download"]
        if qlconfig_file is not None:
            args.append(f"--qlconfig-file={qlconfig_file}")
        args.extend(["--format=json", "--resolve-query-specs", *packs, *self._extra("pack", "download")])
        output = self._run(args)
        try:
            return parse_output(PackDownloadOutput, output, "pack download")
        except MalformedOutputError as exc:
            raise MalformedOutputError(
                f"Attempted to download specified packs but got an error:\n{output}\n{exc}"
            ) from exc

    def database_cleanup(self, database_path: Path, cleanup_level: str) -> None:
        """Run ``database cleanup`` at ``cleanup_level``."""

        self._run(
            [
                "database",
                "cleanup",
                str(database_path),
                f"--mode={cleanup_level}",
                *self._extra("database", "cleanup"),
            ]
        )

    def database_bundle(self, database_path: Path, output_file_path: Path, database_name: str) -> None:
        """Run ``database bundle`` into ``output_file_path``."""

        self._run(
            [
                "database",
                "bundle",
                str(database_path),
                f"--output={output_file_path}",
                f"--name={database_name}",
                *self._extra("database", "bundle"),
            ]
        )

    def database_run_queries(self, database_path: Path, flags: Sequence[str]) -> None:
        """Run ``database run-queries`` keeping at least 1GB of disk free."""

        self._run(
            [
                "database",
                "run-queries",
                *flags,
                str(database_path),
                "--min-disk-free=1024",
                "-v",
                *self._flags(RUN_QUERIES_RULES),
                *self._extra("database", "run-queries"),
            ]
        )

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
        """Run ``database interpret-results`` and return the analysis summary.

        The summary is captured rather than streamed so that it is not printed twice.
        """

        export_diagnostics = features.get_value(Feature.EXPORT_DIAGNOSTICS_ENABLED, self)
        redirect = SarifOutputRedirect.plan(
            sarif_file,
            export_diagnostics and not is_diagnostics_export_fixed(self._gate),
            config.temp_dir,
        )
        args = [
            "database",
            "interpret-results",
            threads_flag,
            "--format=sarif-latest",
        ]
        if verbosity_flag:
            args.append(verbosity_flag)
        args.extend(
            [
                f"--output={redirect.output_path}",
                add_snippets_flag,
                "--print-diagnostics-summary",
                "--print-metrics-summary",
                "--sarif-add-baseline-file-info",
                *self._code_scanning_config_export_args(config),
                "--sarif-group-rules-by-pack",
                *self._flags(QUERY_HELP_RULES, config.platform),
            ]
        )
        if automation_details_id is not None:
            args.extend(["--sarif-category", automation_details_id])
        args.extend(self._flags(INTERPRET_RESULTS_RULES, config.platform))
        if export_diagnostics:
            args.append("--sarif-include-diagnostics")
        elif self._gate.supports(CapabilityToken.SARIF_INCLUDE_DIAGNOSTICS_OPT_OUT):
            args.append("--no-sarif-include-diagnostics")
        args.append(str(database_path))
        if query_suite_paths:
            args.extend(query_suite_paths)
        args.extend(self._extra("database", "interpret-results"))

        analysis_summary = self._run(args, stream_stdout=False)
        redirect.finish(self._patcher, logger)
        return analysis_summary

    def database_print_baseline(self, database_path: Path) -> str:
        """Run ``database print-baseline`` and return its output."""

        return self._run(
            ["database", "print-baseline", str(database_path), *self._extra("database", "print-baseline")]
        )

    def database_export_diagnostics(
        self,
        database_path: Path,
        sarif_file: Path,
        automation_details_id: str | None,
        temp_dir: Path,
        logger: Logger,
    ) -> None:
        """Run ``database export-diagnostics`` into ``sarif_file``.

        This command only runs when diagnostics export is enabled, so
        ``--sarif-include-diagnostics`` is always passed.
        """

        redirect = SarifOutputRedirect.plan(sarif_file, not is_diagnostics_export_fixed(self._gate), temp_dir)
        args = [
            "database",
            "export-diagnostics",
            str(database_path),
            "--db-cluster",
            "--format=sarif-latest",
            f"--output={redirect.output_path}",
            "--sarif-include-diagnostics",
            "-vvv",
        ]
        if automation_details_id is not None:
            args.extend(["--sarif-category", automation_details_id])
        args.extend(self._extra("database", "export-diagnostics"))
        self._run(args)
        redirect.finish(self._patcher, logger)

    def diagnostics_export(
        self,
        sarif_file: Path,
        automation_details_id: str | None,
        config: AnalysisConfig,
    ) -> None:
        """Run ``diagnostics export`` into ``sarif_file``."""

        args = [
            "diagnostics",
            "export",
            "--format=sarif-latest",
            f"--output={sarif_file}",
            *self._code_scanning_config_export_args(config),
        ]
        if automation_details_id is not None:
            args.extend(["--sarif-category", automation_details_id])
        args.extend(self._extra("diagnostics", "export"))
        self._run(args)

    def resolve_extractor(self, language: str) -> str:
        """Return the extractor root for ``language``.

        JSON output avoids having to strip the trailing newline of the plain format.

        Raises:
            MalformedOutputError: If the output is not a JSON string.
        """

        output = self._runner.run(
            self._cmd,
            [
                "resolve",
                "extractor",
                "--format=json",
                f"--language={language}",
                *self._language_aliasing_args(),
                *self._extra("resolve", "extractor"),
            ],
            options=RunOptions(stream_stdout=False, echo_command=False),
        )
        extractor = parse_json(output, "codeql resolve extractor")
        if not isinstance(extractor, str):
            raise MalformedOutputError(f"Unexpected output from codeql resolve extractor: {output}")
        return extractor


_DEPRECATION_LOCK = threading.Lock()
_deprecation_warning_emitted = False


def reset_deprecation_warning() -> None:
    """Allow the deprecation warning to be emitted again. Intended for tests."""

    global _deprecation_warning_emitted  # pylint: disable=global-statement
    with _DEPRECATION_LOCK:
        _deprecation_warning_emitted = False


def _claim_deprecation_warning() -> bool:
    global _deprecation_warning_emitted  # pylint: disable=global-statement
    with _DEPRECATION_LOCK:
        if _deprecation_warning_emitted:
            return False
        _deprecation_warning_emitted = True
        return True


def check_codeql_version(
    codeql: CodeQL,
    settings: InvocationSettings,
    logger: Logger,
    *,
    minimum_version: str = CODEQL_MINIMUM_VERSION,
    next_minimum_version: str = CODEQL_NEXT_MINIMUM_VERSION,
) -> None:
    """Reject CLIs older than ``minimum_version`` and warn about ones due to be dropped.

    Raises:
        ConfigurationError: If the CLI is older than ``minimum_version``.
    """

    info = codeql.get_version()
    if info.parsed < Version(minimum_version):
        raise ConfigurationError(
            f"Expected a CodeQL CLI with version at least {minimum_version} but got version {info.version}"
        )
    if settings.suppress_deprecated_soon_warning or info.parsed >= Version(next_minimum_version):
        return
    if not _claim_deprecation_warning():
        return
    logger.warning(
        f"CodeQL CLI version {info.version} was discontinued on {GHES_MOST_RECENT_DEPRECATION_DATE} "
        f"alongside GitHub Enterprise Server {GHES_VERSION_MOST_RECENTLY_DEPRECATED} and will not be "
        f"supported by the next minor release of this tooling. Please update to CodeQL CLI version "
        f"{next_minimum_version} or later."
    )


def get_codeql_for_cmd(
    cmd: str,
    check_version: bool,
    *,
    settings: InvocationSettings | None = None,
    env: Mapping[str, str] | None = None,
    **kwargs: object,
) -> CodeQL:
    """Return a new :class:`CodeQL` facade for ``cmd``.

    Args:
        cmd: Path to the CodeQL executable.
        check_version: Verify the CLI meets the minimum version. Must be true outside tests.
        settings: Invocation settings; read from ``env`` when omitted.
        env: Environment mapping used to build default settings.
        **kwargs: Collaborators forwarded to :class:`CodeQL`.

    Raises:
        ConfigurationError: If the CLI version is unsupported or the settings are invalid.
    """

    resolved = settings or InvocationSettings.from_env(env, codeql_path=cmd)
    codeql = CodeQL(cmd, settings=resolved, **kwargs)  # type: ignore[arg-type]
    if check_version:
        check_codeql_version(codeql, resolved, codeql.logger)
    return codeql


_CODEQL_LOCK = threading.Lock()
_cached_codeql: object | None = None


def get_codeql(cmd: str) -> CodeQL:
    """Return the process-wide facade, creating it for ``cmd`` on first use."""

    global _cached_codeql  # pylint: disable=global-statement
    with _CODEQL_LOCK:
        if _cached_codeql is None:
            _cached_codeql = get_codeql_for_cmd(cmd, True)
        return _cached_codeql  # type: ignore[return-value]


def set_codeql(codeql: object) -> None:
    """Install ``codeql`` as the process-wide facade. Intended for tests."""

    global _cached_codeql  # pylint: disable=global-statement
    with _CODEQL_LOCK:
        _cached_codeql = codeql


def reset_codeql() -> None:
    """Forget the process-wide facade."""

    set_codeql(None)


__all__ = [
    "CodeQL",
    "FlagRule",
    "GHES_ANALYSIS_SUMMARY_V2",
    "GHES_SUBLANGUAGE_FILE_COVERAGE",
    "PlatformFlagRule",
    "check_codeql_version",
    "get_codeql",
    "get_codeql_for_cmd",
    "render_flags",
    "reset_codeql",
    "reset_deprecation_warning",
    "set_codeql",
    "write_code_scanning_config",
]
