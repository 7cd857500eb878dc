# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest
from helpers.fakes import RecordingLogger

from qlshim.codeql import reset_codeql, reset_deprecation_warning
from qlshim.versioning import reset_version_cache


@pytest.fixture(autouse=True)
def _isolate_process_state() -> Iterator[None]:
    """Reset module-level caches so tests observe a fresh process."""

    reset_version_cache()
    reset_deprecation_warning()
    reset_codeql()
    yield
    reset_version_cache()
    reset_deprecation_warning()
    reset_codeql()


@pytest.fixture
def recording_logger() -> RecordingLogger:
    return RecordingLogger()


@pytest.fixture
def fake_codeql_script(tmp_path: Path) -> Path:
    """Write an executable that answers ``version --format=json`` like the CLI."""

    script = tmp_path / "codeql"
    script.write_text(
        "#!/bin/sh\n"
        'if [ "$1" = "version" ]; then\n'
        "  echo '{\"version\": \"2.15.2\", \"features\": {\"buildModeOption\": true}}'\n"
        "  exit 0\n"
        "fi\n"
        'echo "A fatal error occurred: unsupported command $1" >&2\n'
        "exit 2\n",
        encoding="utf-8",
    )
    script.chmod(0o755)
    return script
