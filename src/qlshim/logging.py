# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Leveled console messages rendered through Rich."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from enum import Enum

from rich.rule import Rule
from rich.text import Text

from .console import get_console_manager, stdout_is_terminal


class Level(Enum):
    """Message levels with their emoji prefix and colour style."""

    DEBUG = ("", "dim")
    INFO = ("ℹ️ ", "cyan")
    OK = ("✅ ", "green")
    WARNING = ("⚠️ ", "yellow")
    ERROR = ("❌ ", "red")

    @property
    def glyph(self) -> str:
        """Return the emoji prefix, including its trailing space.

        Returns:
            str: Prefix printed before messages when emoji output is enabled.
        """

        return self.value[0]

    @property
    def style(self) -> str:
        """Return the Rich style applied to coloured messages.

        Returns:
            str: Rich style name such as ``"cyan"``.
        """

        return self.value[1]


def emit(level: Level, message: str, *, use_emoji: bool = False, use_color: bool | None = None) -> None:
    """Print ``message`` at ``level``.

    Args:
        level: Level selecting the prefix and colour.
        message: Text to print. It is never parsed as Rich markup.
        use_emoji: Prefix the message with the level's emoji.
        use_color: Force colour on or off; ``None`` colours only on a terminal.
    """

    color = stdout_is_terminal() if use_color is None else use_color
    text = Text(f"{level.glyph if use_emoji else ''}{message}")
    if color:
        text.stylize(level.style)
    get_console_manager().get(color=color, emoji=use_emoji).print(text)


def section(title: str, *, use_color: bool) -> None:
    """Print a divider introducing or closing a block of output."""

    console = get_console_manager().get(color=use_color, emoji=False)
    console.print()
    if use_color:
        console.print(Rule(title))
    else:
        console.print(Text(f"--- {title} ---"))


def ok(message: str, *, use_emoji: bool = False, use_color: bool | None = None) -> None:
    """Print a success message."""

    emit(Level.OK, message, use_emoji=use_emoji, use_color=use_color)


def fail(message: str, *, use_emoji: bool = False, use_color: bool | None = None) -> None:
    """Print a failure message."""

    emit(Level.ERROR, message, use_emoji=use_emoji, use_color=use_color)


class ConsoleLogger:
    """:class:`~qlshim.interfaces.Logger` printing through the shared Rich consoles."""

    def __init__(self, *, use_emoji: bool = False, use_color: bool | None = None, verbose: bool = False) -> None:
        """Configure message rendering.

        Args:
            use_emoji: Prefix messages with level emoji.
            use_color: Force colour on or off; ``None`` colours only on a terminal.
            verbose: Print debug messages.
        """

        self._use_emoji = use_emoji
        self._use_color = use_color
        self._verbose = verbose

    def _emit(self, level: Level, message: str) -> None:
        emit(level, message, use_emoji=self._use_emoji, use_color=self._use_color)

    def debug(self, message: str) -> None:
        """Print ``message`` only when verbose output is enabled."""

        if self._verbose:
            self._emit(Level.DEBUG, message)

    def info(self, message: str) -> None:
        """Print an informational ``message``.

        Args:
            message: Text to print.
        """

        self._emit(Level.INFO, message)

    def warning(self, message: str) -> None:
        """Print ``message`` as a warning.

        Args:
            message: Text to print.
        """

        self._emit(Level.WARNING, message)

    def error(self, message: str) -> None:
        """Print ``message`` as an error.

        Args:
            message: Text to print.
        """

        self._emit(Level.ERROR, message)

    @contextmanager
    def group(self, name: str) -> Iterator[None]:
        """Print output produced inside the block between titled dividers."""

        color = stdout_is_terminal() if self._use_color is None else self._use_color
        section(name, use_color=color)
        try:
            yield
        finally:
            section(f"end {name}", use_color=color)


__all__ = ["ConsoleLogger", "Level", "emit", "fail", "ok", "section"]
