# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Work around invalid SARIF notifications emitted by older CLI releases.

CLI releases up to and including 2.13.1 can write tool execution notifications
whose ``locations`` array contains duplicates, which code scanning rejects.
When that output is consumed, the CLI is pointed at an intermediate file and
the repaired document is written to the path the caller asked for.
"""

from __future__ import annotations

import json
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Final

from .capabilities import CapabilityGate, CapabilityToken
from .interfaces import Logger, SarifPatcher

INTERMEDIATE_SARIF_NAME: Final[str] = "codeql-intermediate-results.sarif"


def is_diagnostics_export_fixed(gate: CapabilityGate) -> bool:
    """Return whether the CLI writes valid notification locations."""

    return gate.supports(CapabilityToken.DIAGNOSTICS_EXPORT_FIXED)


def _remove_duplicate_locations(locations: list[Any]) -> list[Any]:
    seen: set[str] = set()
    unique: list[Any] = []
    for location in locations:
        key = json.dumps(location, separators=(",", ":"))
        if key in seen:
            continue
        seen.add(key)
        unique.append(location)
    return unique


def _driver_name(run: dict[str, Any]) -> object:
    tool = run.get("tool")
    driver = tool.get("driver") if isinstance(tool, dict) else None
    return driver.get("name") if isinstance(driver, dict) else None


def fix_invalid_notifications(sarif: dict[str, Any], logger: Logger) -> dict[str, Any]:
    """Return ``sarif`` with duplicate notification locations removed.

    Only runs produced by the CodeQL driver are rewritten. The input document
    is not mutated.
    """

    runs = sarif.get("runs")
    if not isinstance(runs, list):
        logger.debug("SARIF file has no runs; leaving notifications untouched.")
        return sarif
    removed = 0
    new_runs: list[Any] = []
    for run in runs:
        if not isinstance(run, dict) or _driver_name(run) != "CodeQL" or not isinstance(run.get("invocations"), list):
            new_runs.append(run)
            continue
        new_invocations: list[Any] = []
        for invocation in run["invocations"]:
            notifications = invocation.get("toolExecutionNotifications") if isinstance(invocation, dict) else None
            if not isinstance(notifications, list):
                new_invocations.append(invocation)
                continue
            new_notifications: list[Any] = []
            for notification in notifications:
                locations = notification.get("locations") if isinstance(notification, dict) else None
                if not isinstance(locations, list):
                    new_notifications.append(notification)
                    continue
                unique = _remove_duplicate_locations(locations)
                removed += len(locations) - len(unique)
                new_notifications.append({**notification, "locations": unique})
            new_invocations.append({**invocation, "toolExecutionNotifications": new_notifications})
        new_runs.append({**run, "invocations": new_invocations})
    if removed:
        logger.info(f"Removed {removed} duplicate locations from SARIF notification objects.")
    else:
        logger.debug("No duplicate locations found in SARIF notification objects.")
    return {**sarif, "runs": new_runs}


class InvalidNotificationFixer:
    """Default :class:`SarifPatcher` removing duplicate notification locations."""

    def __init__(self, *, disabled: bool = False) -> None:
        self._disabled = disabled

    def fix_invalid_notifications(self, source: Path, destination: Path, logger: Logger) -> None:
        """Rewrite ``source`` into ``destination`` with notifications repaired."""

        if self._disabled:
            logger.info("SARIF notification duplicate location fix disabled; moving the file unchanged.")
            shutil.move(str(source), str(destination))
            return
        sarif = json.loads(source.read_text(encoding="utf-8"))
        fixed = fix_invalid_notifications(sarif, logger)
        destination.parent.mkdir(parents=True, exist_ok=True)
        destination.write_text(json.dumps(fixed), encoding="utf-8")


@dataclass(frozen=True, slots=True)
class SarifOutputRedirect:
    """Where the CLI writes SARIF output and how it reaches the requested path.

    Attributes:
        requested_path: Path the caller asked the SARIF file to be written to.
        output_path: Path passed to the CLI's ``--output`` flag.
    """

    requested_path: Path
    output_path: Path

    @property
    def redirected(self) -> bool:
        """Return ``True`` when the CLI writes to an intermediate file."""

        return self.output_path != self.requested_path

    @classmethod
    def plan(cls, requested_path: Path, workaround_needed: bool, temp_dir: Path) -> SarifOutputRedirect:
        """Choose the CLI output path for ``requested_path``.

        Args:
            requested_path: Final location of the SARIF file.
            workaround_needed: Whether the output must be patched after the CLI finishes.
            temp_dir: Directory holding the intermediate file.

        Returns:
            SarifOutputRedirect: Plan whose ``output_path`` is passed to ``--output``.
        """

        if not workaround_needed:
            return cls(requested_path=requested_path, output_path=requested_path)
        return cls(requested_path=requested_path, output_path=temp_dir / INTERMEDIATE_SARIF_NAME)

    def finish(self, patcher: SarifPatcher, logger: Logger) -> None:
        """Patch the intermediate file into the requested path when redirected."""

        if self.redirected:
            patcher.fix_invalid_notifications(self.output_path, self.requested_path, logger)


__all__ = [
    "INTERMEDIATE_SARIF_NAME",
    "InvalidNotificationFixer",
    "SarifOutputRedirect",
    "fix_invalid_notifications",
    "is_diagnostics_export_fixed",
]
