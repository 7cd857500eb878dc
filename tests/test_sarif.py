# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for SARIF output redirection and notification repair."""

from __future__ import annotations

import json
from pathlib import Path

from qlshim.sarif import INTERMEDIATE_SARIF_NAME, InvalidNotificationFixer, SarifOutputRedirect, fix_invalid_notifications

LOCATION = {"physicalLocation": {"artifactLocation": {"uri": "src/app.js"}}}
OTHER_LOCATION = {"physicalLocation": {"artifactLocation": {"uri": "src/lib.js"}}}


def _sarif(driver: str = "CodeQL") -> dict[str, object]:
    return {
        "version": "2.1.0",
        "runs": [
            {
                "tool": {"driver": {"name": driver}},
                "invocations": [
                    {
                        "toolExecutionNotifications": [
                            {"message": {"text": "x"}, "locations": [LOCATION, LOCATION, OTHER_LOCATION]},
                            {"message": {"text": "no locations"}},
                        ]
                    }
                ],
            }
        ],
    }


def test_duplicate_locations_are_removed(recording_logger) -> None:  # noqa: ANN001
    original = _sarif()

    fixed = fix_invalid_notifications(original, recording_logger)

    notifications = fixed["runs"][0]["invocations"][0]["toolExecutionNotifications"]
    assert notifications[0]["locations"] == [LOCATION, OTHER_LOCATION]
    assert notifications[1] == {"message": {"text": "no locations"}}
    assert original["runs"][0]["invocations"][0]["toolExecutionNotifications"][0]["locations"] == [
        LOCATION,
        LOCATION,
        OTHER_LOCATION,
    ]
    assert recording_logger.at("info") == ["Removed 1 duplicate locations from SARIF notification objects."]


def test_runs_from_other_tools_are_untouched(recording_logger) -> None:  # noqa: ANN001
    original = _sarif(driver="ESLint")

    fixed = fix_invalid_notifications(original, recording_logger)

    assert fixed == original


def test_plan_without_workaround_writes_directly(tmp_path: Path) -> None:
    target = tmp_path / "out.sarif"

    redirect = SarifOutputRedirect.plan(target, False, tmp_path / "temp")

    assert redirect.output_path == target
    assert not redirect.redirected


def test_plan_with_workaround_uses_intermediate_file(tmp_path: Path) -> None:
    target = tmp_path / "out.sarif"

    redirect = SarifOutputRedirect.plan(target, True, tmp_path / "temp")

    assert redirect.output_path == tmp_path / "temp" / INTERMEDIATE_SARIF_NAME
    assert redirect.redirected


def test_finish_patches_intermediate_file_into_target(tmp_path: Path, recording_logger) -> None:  # noqa: ANN001
    target = tmp_path / "results" / "out.sarif"
    redirect = SarifOutputRedirect.plan(target, True, tmp_path)
    redirect.output_path.write_text(json.dumps(_sarif()), encoding="utf-8")

    redirect.finish(InvalidNotificationFixer(), recording_logger)

    written = json.loads(target.read_text(encoding="utf-8"))
    assert written["runs"][0]["invocations"][0]["toolExecutionNotifications"][0]["locations"] == [
        LOCATION,
        OTHER_LOCATION,
    ]


def test_finish_without_redirect_does_not_patch(tmp_path: Path, recording_logger) -> None:  # noqa: ANN001
    class ExplodingPatcher:
        def fix_invalid_notifications(self, source: Path, destination: Path, logger: object) -> None:
            raise AssertionError("patcher must not run")

    SarifOutputRedirect.plan(tmp_path / "out.sarif", False, tmp_path).finish(ExplodingPatcher(), recording_logger)


def test_disabled_fixer_moves_file_unchanged(tmp_path: Path, recording_logger) -> None:  # noqa: ANN001
    source = tmp_path / INTERMEDIATE_SARIF_NAME
    destination = tmp_path / "out.sarif"
    payload = json.dumps(_sarif())
    source.write_text(payload, encoding="utf-8")

    InvalidNotificationFixer(disabled=True).fix_invalid_notifications(source, destination, recording_logger)

    assert destination.read_text(encoding="utf-8") == payload
    assert not source.exists()
