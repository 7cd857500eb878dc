# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for console logging helpers and output sinks."""

from __future__ import annotations

import io

import pytest
from rich.console import Console

from qlshim.console import ConsoleSink, StreamSink, get_console_manager
from qlshim.interfaces import Logger, OutputSink
from qlshim.logging import ConsoleLogger, Level, fail, ok


def test_console_logger_levels(capsys: pytest.CaptureFixture[str]) -> None:
    logger = ConsoleLogger(use_color=False)

    logger.debug("hidden detail")
    logger.info("starting")
    logger.warning("careful")
    logger.error("broken")

    out = capsys.readouterr().out
    assert "hidden detail" not in out
    assert "starting" in out
    assert "careful" in out
    assert "broken" in out


def test_verbose_logger_emits_debug(capsys: pytest.CaptureFixture[str]) -> None:
    ConsoleLogger(use_color=False, verbose=True).debug("detail")

    assert "detail" in capsys.readouterr().out


def test_group_wraps_output_in_sections(capsys: pytest.CaptureFixture[str]) -> None:
    logger = ConsoleLogger(use_color=False)

    with logger.group("Config"):
        logger.info("inside")

    out = capsys.readouterr().out
    assert out.index("--- Config ---") < out.index("inside") < out.index("--- end Config ---")


def test_logger_satisfies_protocol() -> None:
    assert isinstance(ConsoleLogger(), Logger)


def test_emoji_prefix_follows_toggle(capsys: pytest.CaptureFixture[str]) -> None:
    ok("plain", use_color=False)
    fail("decorated", use_emoji=True, use_color=False)

    lines = capsys.readouterr().out.splitlines()
    assert lines == ["plain", f"{Level.ERROR.glyph}decorated"]


def test_console_sink_writes_without_markup() -> None:
    buffer = io.StringIO()
    sink = ConsoleSink(Console(file=buffer, color_system=None, width=200))

    sink.write("[command]codeql version\n")

    assert buffer.getvalue() == "[command]codeql version\n"
    assert isinstance(sink, OutputSink)


def test_stream_sink_writes_verbatim() -> None:
    buffer = io.StringIO()

    StreamSink(buffer).write("[bold]raw[/bold]")

    assert buffer.getvalue() == "[bold]raw[/bold]"


def test_console_manager_caches_instances() -> None:
    manager = get_console_manager()

    assert manager.get(color=False, emoji=False) is manager.get(color=False, emoji=False)
