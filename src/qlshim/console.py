# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Rich consoles shared by log messages and streamed CLI output."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from functools import lru_cache
from threading import Lock
from typing import TextIO

from rich.console import Console


def stdout_is_terminal() -> bool:
    """Return ``True`` when ``sys.stdout`` is attached to a terminal."""

    try:
        return sys.stdout.isatty()
    except (AttributeError, ValueError):
        # Replaced or closed streams, e.g. under test runners.
        return False


@dataclass(frozen=True, slots=True)
class ConsoleStyle:
    """Rendering preferences identifying one shared console."""

    color: bool
    emoji: bool
    terminal: bool

    def build(self) -> Console:
        """Return a console honouring these preferences.

        Colour is only enabled on a terminal; piped CI logs stay free of ANSI codes.
        """

        colored = self.color and self.terminal
        return Console(
            color_system="auto" if colored else None,
            force_terminal=self.terminal,
            no_color=not colored,
            emoji=self.emoji,
            soft_wrap=True,
        )


class RichConsoleManager:
    """Hand out one Rich :class:`Console` per :class:`ConsoleStyle`."""

    def __init__(self) -> None:
        self._consoles: dict[ConsoleStyle, Console] = {}
        self._lock = Lock()

    def get(self, *, color: bool, emoji: bool) -> Console:
        """Return the console for the requested colour and emoji preferences."""

        style = ConsoleStyle(color=color, emoji=emoji, terminal=stdout_is_terminal())
        with self._lock:
            console = self._consoles.get(style)
            if console is None:
                console = self._consoles[style] = style.build()
        return console


@lru_cache(maxsize=1)
def get_console_manager() -> RichConsoleManager:
    """Return the process-wide :class:`RichConsoleManager`."""

    return RichConsoleManager()


class StreamSink:
    """Forward raw process output to a text stream.

    Process output is written verbatim; it is never interpreted as Rich markup,
    so CLI lines such as ``[command]codeql ...`` survive intact.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream

    def write(self, text: str) -> None:
        """Write ``text`` to the stream and flush it immediately."""

        stream = self._stream if self._stream is not None else sys.stdout
        stream.write(text)
        stream.flush()


class ConsoleSink:
    """Forward raw process output to a Rich console without markup rendering."""

    def __init__(self, console: Console | None = None) -> None:
        self._console = console or get_console_manager().get(color=stdout_is_terminal(), emoji=False)

    def write(self, text: str) -> None:
        """Emit ``text`` verbatim through the console."""

        self._console.out(text, end="", highlight=False)


__all__ = [
    "ConsoleSink",
    "ConsoleStyle",
    "RichConsoleManager",
    "StreamSink",
    "get_console_manager",
    "stdout_is_terminal",
]
