# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for memoised CLI version discovery."""

from __future__ import annotations

import threading
import time
from collections.abc import Sequence

import pytest

from qlshim.errors import ConfigurationError, InvocationError
from qlshim.versioning import VERSION_COMMAND, VersionCache, VersionInfo, VersionResolver, parse_version_output


class SlowVersionRunner:
    def __init__(self, output: str = '{"version": "2.15.2", "features": {"buildModeOption": true}}') -> None:
        self.output = output
        self.calls: list[tuple[str, tuple[str, ...], bool]] = []
        self._lock = threading.Lock()

    def run(self, cmd: str, args: Sequence[str] = (), *, stdin=None, stream_stdout=True, options=None) -> str:  # noqa: ANN001
        with self._lock:
            self.calls.append((cmd, tuple(args), stream_stdout))
        time.sleep(0.05)
        return self.output


def test_concurrent_callers_share_one_invocation() -> None:
    runner = SlowVersionRunner()
    resolver = VersionResolver("codeql", runner, cache=VersionCache())  # type: ignore[arg-type]
    results: list[VersionInfo] = []
    barrier = threading.Barrier(8)

    def worker() -> None:
        barrier.wait()
        results.append(resolver.get_version())

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(runner.calls) == 1
    assert runner.calls[0] == ("codeql", VERSION_COMMAND, False)
    assert len(results) == 8
    assert all(result is results[0] for result in results)
    assert results[0].features == {"buildModeOption": True}


def test_cache_is_shared_between_resolvers() -> None:
    runner = SlowVersionRunner()
    cache = VersionCache()
    VersionResolver("codeql", runner, cache=cache).get_version()  # type: ignore[arg-type]
    VersionResolver("codeql", runner, cache=cache).get_version()  # type: ignore[arg-type]

    assert len(runner.calls) == 1


def test_malformed_output_is_a_configuration_error() -> None:
    resolver = VersionResolver("codeql", SlowVersionRunner("CodeQL 2.15.2"), cache=VersionCache())  # type: ignore[arg-type]

    with pytest.raises(ConfigurationError, match="Invalid JSON output"):
        resolver.get_version()


def test_invalid_version_string_is_rejected() -> None:
    with pytest.raises(ConfigurationError):
        parse_version_output('{"version": "not-a-version"}')


def test_failed_load_leaves_cache_empty() -> None:
    class FailingRunner:
        def __init__(self) -> None:
            self.attempts = 0

        def run(self, cmd: str, args: Sequence[str] = (), **_kwargs: object) -> str:
            self.attempts += 1
            if self.attempts == 1:
                raise InvocationError(cmd, list(args), 1, "boom", "")
            return '{"version": "2.14.0"}'

    runner = FailingRunner()
    cache = VersionCache()
    resolver = VersionResolver("codeql", runner, cache=cache)  # type: ignore[arg-type]

    with pytest.raises(InvocationError):
        resolver.get_version()
    assert cache.value is None
    assert resolver.get_version().version == "2.14.0"


def test_print_version_streams_without_caching() -> None:
    runner = SlowVersionRunner()
    cache = VersionCache()
    VersionResolver("codeql", runner, cache=cache).print_version()  # type: ignore[arg-type]

    assert runner.calls == [("codeql", VERSION_COMMAND, True)]
    assert cache.value is None


def test_unknown_fields_are_ignored() -> None:
    info = parse_version_output('{"version": "2.15.2", "productName": "CodeQL", "unpackedLocation": "/x"}')

    assert info.version == "2.15.2"
    assert info.features == {}
